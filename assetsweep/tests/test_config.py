import pytest

from assetsweep.config import ConfigurationError, DeletionConfig, PathApiConfig


def test_deletion_config_defaults():
    config = DeletionConfig.from_env({"SECRET_STORE_URL": "https://sm.example"})

    assert config.secret_store_url == "https://sm.example"
    assert config.region == "us-east-1"
    assert config.access_key_secret == "TenableAccessKey"
    assert config.secret_key_secret == "TenableSecretKey"
    assert config.tenable_base_url == "https://cloud.tenable.com"
    assert config.timeout == 30.0


def test_deletion_config_overrides():
    config = DeletionConfig.from_env({
        "SECRET_STORE_URL": "https://sm.example",
        "AWS_REGION": "eu-west-1",
        "TENABLE_ACCESS_KEY_SECRET": "ak",
        "TENABLE_SECRET_KEY_SECRET": "sk",
        "TENABLE_BASE_URL": "https://scanner.example/",
        "TENABLE_TIMEOUT": "2.5",
    })
    assert (config.region, config.access_key_secret, config.secret_key_secret) == ("eu-west-1", "ak", "sk")
    assert config.tenable_base_url == "https://scanner.example"
    assert config.timeout == 2.5


@pytest.mark.parametrize("env", [
    {},
    {"SECRET_STORE_URL": "   "},
    {"SECRET_STORE_URL": "my-key-vault"},
    {"SECRET_STORE_URL": "ftp://sm.example"},
    {"SECRET_STORE_URL": "https://"},
    {"SECRET_STORE_URL": "https://sm.example", "TENABLE_TIMEOUT": "soon"},
    {"SECRET_STORE_URL": "https://sm.example", "TENABLE_TIMEOUT": "0"},
])
def test_deletion_config_errors(env):
    with pytest.raises(ConfigurationError):
        DeletionConfig.from_env(env)


def test_path_api_config():
    config = PathApiConfig.from_env({"PATHS_BUCKET": "b", "PATHS_PREFIX": "/registry/"})
    assert (config.bucket, config.prefix) == ("b", "registry")

    with pytest.raises(ConfigurationError):
        PathApiConfig.from_env({})
