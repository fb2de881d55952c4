# assetsweep/models/deletion.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Any, Optional
import json


class DeletionStatus(str, Enum):
    INITIATED = "initiated"   # scanner answered 200
    ACCEPTED = "accepted"     # any other status, job may still be queued
    ERROR = "error"           # transport failure, loop aborted here


# Handler input once the payload has been validated
@dataclass(frozen=True)
class DeletionRequest:
    ip_addresses: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "DeletionRequest":
        """
        Build a request from the decoded JSON body. Only ``ipAddresses`` is
        read; the addresses themselves are passed through untouched.
        """
        if not isinstance(payload, dict):
            raise InvalidDeletionRequest("request body must be a JSON object")

        ips = payload.get("ipAddresses")
        if not isinstance(ips, list):
            raise InvalidDeletionRequest("request body must contain an 'ipAddresses' list")
        if not all(isinstance(ip, str) for ip in ips):
            raise InvalidDeletionRequest("'ipAddresses' must only contain strings")
        return cls(ip_addresses=list(ips))


# Per-IP result, logged but never returned to the caller
@dataclass(frozen=True)
class DeletionOutcome:
    ip: str
    status: DeletionStatus
    status_code: Optional[int] = None
    detail: Optional[str] = None


class InvalidDeletionRequest(ValueError):
    """Raised when the handler payload does not carry a usable ipAddresses list."""


# ---- Helpers ----
# Compact JSON form of a dataclass, used for log lines
def to_json(obj: Any) -> str:
    return json.dumps(asdict(obj), ensure_ascii=False, separators=(",", ":"), default=str)


__all__ = [
    "DeletionStatus",
    "DeletionRequest",
    "DeletionOutcome",
    "InvalidDeletionRequest",
    "to_json",
]
