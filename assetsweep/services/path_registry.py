# assetsweep/services/path_registry.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

import requests

from assetsweep.models.paths import OperatingSystem, PathRegistry, normalize_path

logger = logging.getLogger(__name__)

STORAGE_KEY = "paths"


class PathRegistryError(RuntimeError):
    """Raised when the remote path API rejects a request or cannot be reached."""


class LocalStorage:
    """
    Key/value document kept in one JSON file. Each value is stored as a JSON
    string, the same way browser local storage holds it.
    """

    def __init__(self, file_path):
        self.file_path = Path(file_path)

    def _read(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        raw = self.file_path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"{self.file_path} does not hold a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class LocalPathRegistry:
    """Registry persisted as a single JSON blob; deletion is by position."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load_paths(self) -> PathRegistry:
        return PathRegistry.from_json(self.storage.get_item(self.key))

    def _save(self, registry: PathRegistry) -> None:
        self.storage.set_item(self.key, registry.to_json())

    def add_path(self, path: str, os_name) -> bool:
        os_value = OperatingSystem.parse(os_name).value
        registry = self.load_paths()
        if not registry.add(path, os_value):
            logger.debug(f"Skipped empty or duplicate path for {os_value}: {path!r}")
            return False
        self._save(registry)
        logger.info(f"Added {normalize_path(path)} under {os_value}")
        return True

    def delete_selected(self, selection: Iterable[Tuple[Any, int]]) -> int:
        """Remove entries by (os, index) against the currently stored order."""
        registry = self.load_paths()
        pairs = [(OperatingSystem.parse(os_name).value, int(index)) for os_name, index in selection]
        removed = registry.remove_at(pairs)
        self._save(registry)
        logger.info(f"Deleted {removed} path(s)")
        return removed


class RemotePathRegistry:
    """Same operations proxied to the path API; deletion is by path value."""

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, route: str, allow=(), **kwargs) -> requests.Response:
        url = f"{self.base_url}{route}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise PathRegistryError(f"Cannot reach path API at {self.base_url}") from e

        if not 200 <= response.status_code < 300 and response.status_code not in allow:
            logger.error(f"{method} {url} returned {response.status_code}: {response.text}")
            raise PathRegistryError(f"{method} {route} failed with status {response.status_code}")
        return response

    def add_path(self, path: str, os_name) -> bool:
        path = normalize_path(path)
        if not path:
            return False
        os_value = OperatingSystem.parse(os_name).value
        response = self._request("POST", "/addPath", json={"path": path, "os": os_value})
        # 201 when stored, 200 when the server already had it
        return response.status_code == 201

    def load_paths(self) -> PathRegistry:
        response = self._request("GET", "/getPaths")
        try:
            return PathRegistry.from_dict(response.json())
        except ValueError as e:
            raise PathRegistryError(f"Unexpected /getPaths payload: {e}") from e

    def delete_selected(self, selection: Iterable[Tuple[Any, str]]) -> int:
        removed = 0
        for os_name, path in selection:
            os_value = OperatingSystem.parse(os_name).value
            response = self._request(
                "DELETE", "/deletePath", allow=(404,), json={"os": os_value, "path": path},
            )
            if response.status_code == 404:
                logger.warning(f"{path} was not registered under {os_value}")
                continue
            removed += 1
        return removed

    def close(self):
        self.session.close()
