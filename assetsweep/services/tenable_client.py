"""
Thin client for the Tenable.io asset bulk-deletion endpoint.

Only transport failures raise; every HTTP status is handed back to the
caller, since the API may accept a job and queue it.
"""

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

BULK_DELETE_PATH = "/api/v2/assets/bulk-jobs/delete"


class ScannerRequestError(RuntimeError):
    """Raised when a deletion request could not be completed at the transport level."""

    def __init__(self, ip: str, message: str):
        super().__init__(message)
        self.ip = ip


def build_api_keys_header(access_key: str, secret_key: str) -> str:
    return f"accessKey={access_key}; secretKey={secret_key}"


def build_delete_query(ip: str) -> dict:
    return {"query": {"field": "ipv4", "operator": "eq", "value": ip}}


class TenableClient:
    def __init__(
        self,
        access_key: str,
        secret_key: str,
        base_url: str = "https://cloud.tenable.com",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json",
            "X-ApiKeys": build_api_keys_header(access_key, secret_key),
        })
        logger.debug(f"Initialized Tenable client for {self.base_url}")

    def request_asset_deletion(self, ip: str) -> requests.Response:
        """
        Queue one bulk deletion job for assets whose ipv4 equals ``ip``.

        Raises:
            ScannerRequestError: connection error, timeout or any other
                ``requests`` failure that produced no HTTP response.
        """
        url = f"{self.base_url}{BULK_DELETE_PATH}"
        try:
            return self.session.post(url, json=build_delete_query(ip), timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ScannerRequestError(ip, f"Request to {url} timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise ScannerRequestError(ip, f"Cannot connect to {self.base_url}") from e
        except requests.exceptions.RequestException as e:
            raise ScannerRequestError(ip, f"Request error: {e}") from e

    def close(self):
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
