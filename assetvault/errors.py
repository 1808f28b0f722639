# assetvault/errors.py
"""
Error kinds raised by the asset registry.

Every VaultError is recoverable and reported back to the caller as a
typed result. IdentifierExhausted is the one fatal condition.
"""

from typing import Any, Dict, Optional


class VaultError(Exception):
    """Base class for registry errors returned to callers."""

    kind = "VaultError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class InvalidInputError(VaultError):
    """A required field is empty, or a request is self-contradictory."""

    kind = "InvalidInput"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Field '{field}' must not be empty.")
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        return data


class NotFoundError(VaultError):
    """Unknown asset id, or a list query with no results."""

    kind = "NotFound"

    def __init__(self, message: str = "Asset not found.", asset_id: Optional[int] = None):
        super().__init__(message)
        self.asset_id = asset_id

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.asset_id is not None:
            data["asset_id"] = self.asset_id
        return data


class ForbiddenError(VaultError):
    """Caller is not allowed to perform the operation."""

    kind = "Forbidden"


class NotSharedError(VaultError):
    """Revoke target does not currently have access."""

    kind = "NotShared"

    def __init__(self, recipient: str):
        super().__init__(f"Asset is not shared with user: {recipient}")
        self.recipient = recipient

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["recipient"] = self.recipient
        return data


class IdentifierExhausted(RuntimeError):
    """The id allocator has no identifiers left. Not recoverable."""


ERROR_KINDS = (
    InvalidInputError.kind,
    NotFoundError.kind,
    ForbiddenError.kind,
    NotSharedError.kind,
)
