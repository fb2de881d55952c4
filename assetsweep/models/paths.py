from enum import Enum
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
import json


class OperatingSystem(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MAC = "mac"

    @classmethod
    def parse(cls, value) -> "OperatingSystem":
        """Accept an enum member or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(o.value for o in cls)
            raise InvalidOperatingSystem(f"unknown operating system '{value}' (expected one of: {known})")


class InvalidOperatingSystem(ValueError):
    pass


@dataclass(frozen=True)
class PathEntry:
    os: str
    path: str


def normalize_path(path: Optional[str]) -> str:
    return (path or "").strip()


class PathRegistry:
    """
    Ordered mapping of operating system -> list of path strings.

    Insertion order is kept both across buckets and within a bucket, since
    the local variant deletes by position.
    """

    def __init__(self, paths: Optional[Dict[str, List[str]]] = None):
        self._paths: Dict[str, List[str]] = {}
        for os_name, entries in (paths or {}).items():
            if not isinstance(entries, list) or not all(isinstance(p, str) for p in entries):
                raise ValueError(f"paths for '{os_name}' must be a list of strings")
            self._paths[os_name] = list(entries)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, List[str]]]) -> "PathRegistry":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("path registry document must be a JSON object")
        return cls(data)

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "PathRegistry":
        if not raw:
            return cls()
        return cls.from_dict(json.loads(raw))

    def to_dict(self) -> Dict[str, List[str]]:
        return {os_name: list(entries) for os_name, entries in self._paths.items()}

    def to_json(self) -> str:
        return json.dumps(self._paths)

    def add(self, path: str, os_name: str) -> bool:
        """Append ``path`` under ``os_name``. Returns False for empty or duplicate paths."""
        path = normalize_path(path)
        if not path:
            return False
        if path in self._paths.get(os_name, []):
            return False
        self._paths.setdefault(os_name, []).append(path)
        return True

    def remove_at(self, selection: Iterable[Tuple[str, int]]) -> int:
        """
        Remove entries by (os, index). Indices refer to the registry as it was
        before this call. Unknown buckets and stale indices are skipped.
        """
        by_os: Dict[str, set] = {}
        for os_name, index in selection:
            by_os.setdefault(os_name, set()).add(int(index))

        removed = 0
        for os_name, indices in by_os.items():
            bucket = self._paths.get(os_name)
            if bucket is None:
                continue
            # highest first so earlier positions stay valid
            for index in sorted(indices, reverse=True):
                if 0 <= index < len(bucket):
                    del bucket[index]
                    removed += 1
        self.prune()
        return removed

    def remove_paths(self, selection: Iterable[Tuple[str, str]]) -> int:
        removed = 0
        for os_name, path in selection:
            bucket = self._paths.get(os_name)
            path = normalize_path(path)
            if bucket and path in bucket:
                bucket.remove(path)
                removed += 1
        self.prune()
        return removed

    def prune(self) -> None:
        for os_name in [k for k, v in self._paths.items() if not v]:
            del self._paths[os_name]

    def paths_for(self, os_name: str) -> List[str]:
        return list(self._paths.get(os_name, []))

    def __iter__(self) -> Iterator[PathEntry]:
        for os_name, entries in self._paths.items():
            for path in entries:
                yield PathEntry(os=os_name, path=path)

    def __len__(self) -> int:
        return sum(len(v) for v in self._paths.values())

    def __str__(self) -> str:
        return json.dumps(self._paths, indent=2)
