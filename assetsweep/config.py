import os
from urllib.parse import urlparse
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_REGION = "us-east-1"
DEFAULT_TENABLE_BASE_URL = "https://cloud.tenable.com"
DEFAULT_TIMEOUT = 30.0


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing or malformed."""


def _region(environ: Mapping[str, str]) -> str:
    return environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION") or DEFAULT_REGION


@dataclass(frozen=True)
class DeletionConfig:
    """Settings for one asset deletion invocation."""
    secret_store_url: str
    region: str = DEFAULT_REGION
    access_key_secret: str = "TenableAccessKey"
    secret_key_secret: str = "TenableSecretKey"
    tenable_base_url: str = DEFAULT_TENABLE_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DeletionConfig":
        env = os.environ if environ is None else environ

        store_url = (env.get("SECRET_STORE_URL") or "").strip()
        if not store_url:
            raise ConfigurationError("Secret store URL is not configured in environment variables")
        parsed = urlparse(store_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"SECRET_STORE_URL must be an http(s) URL, got '{store_url}'")

        raw_timeout = env.get("TENABLE_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(f"TENABLE_TIMEOUT must be a number, got '{raw_timeout}'")
            if timeout <= 0:
                raise ConfigurationError("TENABLE_TIMEOUT must be positive")

        return cls(
            secret_store_url=store_url,
            region=_region(env),
            access_key_secret=env.get("TENABLE_ACCESS_KEY_SECRET") or "TenableAccessKey",
            secret_key_secret=env.get("TENABLE_SECRET_KEY_SECRET") or "TenableSecretKey",
            tenable_base_url=(env.get("TENABLE_BASE_URL") or DEFAULT_TENABLE_BASE_URL).rstrip("/"),
            timeout=timeout,
        )


@dataclass(frozen=True)
class PathApiConfig:
    bucket: str
    prefix: str = "paths"
    region: str = DEFAULT_REGION

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PathApiConfig":
        env = os.environ if environ is None else environ
        bucket = (env.get("PATHS_BUCKET") or "").strip()
        if not bucket:
            raise ConfigurationError("PATHS_BUCKET env var is required")
        prefix = (env.get("PATHS_PREFIX") or "paths").strip("/")
        return cls(bucket=bucket, prefix=prefix, region=_region(env))
