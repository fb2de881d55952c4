# Each registry entry is its own S3 object:
#   <prefix>/<os>/<created ns, zero padded>-<sha1(path)[:16]>.json
# Sorting keys gives insertion order within a bucket.
import hashlib
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from assetsweep.models.paths import PathRegistry, normalize_path
from assetsweep.utils.s3_handler import S3Handler

logger = logging.getLogger(__name__)


def path_digest(path: str) -> str:
    return hashlib.sha1(path.encode("utf-8")).hexdigest()[:16]


class S3PathRepository:
    def __init__(self, handler: S3Handler, prefix: str = "paths", clock: Callable[[], int] = time.time_ns):
        self.handler = handler
        self.prefix = prefix.strip("/")
        self._clock = clock

    def _os_prefix(self, os_name: str) -> str:
        return f"{self.prefix}/{os_name}/"

    def _find_key(self, os_name: str, path: str) -> Optional[str]:
        suffix = f"-{path_digest(path)}.json"
        for key in self.handler.list_keys(self._os_prefix(os_name)):
            if key.endswith(suffix):
                return key
        return None

    def add(self, os_name: str, path: str) -> bool:
        path = normalize_path(path)
        if not path or self._find_key(os_name, path):
            return False
        key = f"{self._os_prefix(os_name)}{self._clock():020d}-{path_digest(path)}.json"
        self.handler.put_json(key, {
            "os": os_name,
            "path": path,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
        return True

    def delete(self, os_name: str, path: str) -> bool:
        key = self._find_key(os_name, normalize_path(path))
        if key is None:
            return False
        self.handler.delete(key)
        return True

    def load(self) -> PathRegistry:
        registry = PathRegistry()
        for key in sorted(self.handler.list_keys(f"{self.prefix}/")):
            record = self.handler.get_json(key)
            if not record:
                # removed between list and get
                continue
            if not isinstance(record, dict):
                logger.warning("Skipping malformed path record %s", key)
                continue
            registry.add(record.get("path", ""), record.get("os") or key.split("/")[-2])
        return registry
