import pytest


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    # fake credentials so nothing ever reaches a real account
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in ("SECRET_STORE_URL", "TENABLE_BASE_URL", "TENABLE_TIMEOUT", "PATHS_BUCKET", "PATHS_PREFIX"):
        monkeypatch.delenv(name, raising=False)
