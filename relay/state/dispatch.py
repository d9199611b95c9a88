"""Per-send result types (dataclasses and enums only)."""

from __future__ import annotations

from enum import Enum
from typing import Any
from dataclasses import dataclass


class DispatchErrorKind(str, Enum):
    NOT_READY = "not_ready"
    RECIPIENT_NOT_REGISTERED = "recipient_not_registered"
    INVALID_ADDRESS_FORMAT = "invalid_address_format"
    RECIPIENT_RESOLUTION_FAILED = "recipient_resolution_failed"
    SEND_FAILED = "send_failed"


@dataclass(frozen=True, slots=True)
class RecipientIdentity:
    """Canonical network id for a destination, e.g. ``5511999999999@c.us``."""

    serialized: str
    user: str


@dataclass(frozen=True, slots=True)
class DispatchResult:
    success: bool
    kind: DispatchErrorKind | None = None
    detail: str | None = None

    @classmethod
    def ok(cls) -> DispatchResult:
        return cls(success=True)

    @classmethod
    def failure(cls, kind: DispatchErrorKind, detail: str) -> DispatchResult:
        return cls(success=False, kind=kind, detail=detail)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True}
        return {"success": False, "kind": self.kind.value if self.kind else None, "error": self.detail}


@dataclass(frozen=True, slots=True)
class LookupResult:
    number: str
    chat_id: str
    registered: bool
    identity: RecipientIdentity | None = None


__all__ = ["DispatchErrorKind", "DispatchResult", "LookupResult", "RecipientIdentity"]
