# assetvault/registry/registry.py
"""
Access-controlled asset registry.

The registry stores opaque binary assets with an owner, enabling:
- Owner-controlled read sharing (share / revoke)
- Reads by the owner or any sharee
- An append-only access log of successful reads, visible to the owner only
- Owner-only deletion

All state lives on a Registry instance. A single lock serializes every
operation over the whole store, so each operation (including the
authorize-then-log step of a read) is observed as one atomic step.
"""

import base64
import hashlib
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..clock import Clock, SystemClock
from ..errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    NotSharedError,
)
from ..ids import IdAllocator

logger = logging.getLogger(__name__)

ContentLike = Union[bytes, bytearray, memoryview, Iterable[int]]


def _content_hash(content: bytes, algorithm: str = "sha3_256") -> str:
    """
    Compute content hash of an asset body.

    Uses SHA-3 (Keccak) by default.

    Args:
        content: Raw asset bytes
        algorithm: Hash algorithm (sha3_256, sha3_512, sha256, blake2b)

    Returns:
        Full hex digest (no truncation)
    """
    hasher = hashlib.new(algorithm)
    hasher.update(content)
    return hasher.hexdigest()


def _require_identity(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(field_name)
    return value


def _coerce_content(content: ContentLike) -> bytes:
    """Accept bytes-like objects or a sequence of ints in range(256)."""
    if isinstance(content, (bytes, bytearray, memoryview)):
        data = bytes(content)
    elif isinstance(content, (str, int)) or content is None:
        raise InvalidInputError("content", "Field 'content' must be a byte sequence.")
    else:
        try:
            data = bytes(content)
        except (TypeError, ValueError):
            raise InvalidInputError("content", "Field 'content' must be a byte sequence.")
    if not data:
        raise InvalidInputError("content")
    return data


@dataclass(frozen=True)
class AccessLogEntry:
    """One successful read: who read the asset, and when."""
    reader: str
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {"reader": self.reader, "timestamp": self.timestamp}


@dataclass
class Asset:
    """
    A registered asset.

    Attributes:
        id: Registry-assigned identifier (never reused)
        owner: Identity that registered the asset
        name: Human-readable label
        content: Opaque asset body
        shared_with: Identities granted read access, in grant order
        access_log: Successful reads, oldest first
        created_at: Clock timestamp at registration
    """
    id: int
    owner: str
    name: str
    content: bytes
    shared_with: List[str] = field(default_factory=list)
    access_log: List[AccessLogEntry] = field(default_factory=list)
    created_at: int = 0

    @property
    def content_hash(self) -> str:
        """SHA-3-256 of the content."""
        return _content_hash(self.content)

    def can_read(self, identity: str) -> bool:
        return identity == self.owner or identity in self.shared_with

    def snapshot(self) -> "Asset":
        """Detached copy, safe to hand out of the registry."""
        return Asset(
            id=self.id,
            owner=self.owner,
            name=self.name,
            content=self.content,
            shared_with=list(self.shared_with),
            access_log=list(self.access_log),
            created_at=self.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "content": base64.b64encode(self.content).decode("ascii"),
            "content_hash": self.content_hash,
            "shared_with": list(self.shared_with),
            "access_log": [entry.to_dict() for entry in self.access_log],
            "created_at": self.created_at,
        }


class Registry:
    """
    In-memory asset registry.

    Usage:
        registry = Registry()
        asset_id = registry.register("alice", "doc", b"...")
        registry.share(asset_id, "alice", "bob")
        name, content = registry.read(asset_id, "bob")
    """

    def __init__(self, clock: Optional[Clock] = None, allocator: Optional[IdAllocator] = None):
        """
        Initialize an empty registry.

        Args:
            clock: Timestamp source for the access log (never decreasing)
            allocator: Id allocator; defaults to one starting at 1
        """
        self._clock = clock or SystemClock()
        self._ids = allocator or IdAllocator()
        self._assets: Dict[int, Asset] = {}
        self._lock = threading.Lock()

    def _lookup(self, asset_id: int) -> Asset:
        asset = self._assets.get(asset_id)
        if asset is None:
            raise NotFoundError(asset_id=asset_id)
        return asset

    def _lookup_owned(self, asset_id: int, owner: str, denied: str) -> Asset:
        asset = self._lookup(asset_id)
        if asset.owner != owner:
            logger.warning(f"Denied owner-only operation on asset {asset_id} for {owner!r}")
            raise ForbiddenError(denied)
        return asset

    def register(self, owner: str, name: str, content: ContentLike) -> int:
        """
        Register a new asset.

        Args:
            owner: Identity of the registering caller
            name: Non-blank label
            content: Non-empty asset body

        Returns:
            The new asset's id

        Raises:
            InvalidInputError: if owner, name or content is empty
        """
        _require_identity(owner, "owner")
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError("name")
        data = _coerce_content(content)

        with self._lock:
            asset_id = self._ids.next_id()
            self._assets[asset_id] = Asset(
                id=asset_id,
                owner=owner,
                name=name,
                content=data,
                created_at=self._clock(),
            )

        logger.info(f"Asset {asset_id} added by user: {owner}")
        return asset_id

    def share(self, asset_id: int, owner: str, recipient: str) -> str:
        """
        Grant ``recipient`` read access. Sharing twice is a no-op.

        Raises:
            InvalidInputError: blank identities, or owner == recipient
            NotFoundError: unknown asset
            ForbiddenError: ``owner`` is not the asset's owner
        """
        _require_identity(owner, "owner")
        _require_identity(recipient, "recipient")
        if owner == recipient:
            raise InvalidInputError("recipient", "Cannot share an asset with its owner.")

        with self._lock:
            asset = self._lookup_owned(asset_id, owner, "Only the owner can share the asset.")
            if recipient not in asset.shared_with:
                asset.shared_with.append(recipient)
                logger.info(f"Asset {asset_id} shared with {recipient}")

        return f"Asset shared with user: {recipient}"

    def revoke(self, asset_id: int, owner: str, recipient: str) -> str:
        """
        Remove ``recipient`` from the sharing list.

        Raises:
            NotFoundError: unknown asset
            ForbiddenError: ``owner`` is not the asset's owner
            NotSharedError: ``recipient`` has no access to revoke
        """
        with self._lock:
            asset = self._lookup_owned(asset_id, owner, "Only the owner can revoke access.")
            if recipient not in asset.shared_with:
                raise NotSharedError(recipient)
            asset.shared_with.remove(recipient)

        logger.info(f"Asset {asset_id} access revoked for {recipient}")
        return f"Access revoked for user: {recipient}"

    def read(self, asset_id: int, caller: str) -> Tuple[str, bytes]:
        """
        Read an asset's name and content, recording the access.

        The access check and the log append run under the same lock
        acquisition; a denied read leaves the log untouched.

        Returns:
            (name, content)

        Raises:
            NotFoundError: unknown asset
            ForbiddenError: caller is neither owner nor sharee
        """
        with self._lock:
            asset = self._lookup(asset_id)
            if not asset.can_read(caller):
                logger.warning(f"Denied read of asset {asset_id} for {caller!r}")
                raise ForbiddenError("Access denied.")
            asset.access_log.append(AccessLogEntry(reader=caller, timestamp=self._clock()))
            result = (asset.name, asset.content)

        logger.debug(f"Asset {asset_id} read by {caller}")
        return result

    def audit_log(self, asset_id: int, owner: str) -> List[AccessLogEntry]:
        """Return a copy of the access log. Owner only."""
        with self._lock:
            asset = self._lookup_owned(
                asset_id, owner, "Only the owner can view the access log."
            )
            return list(asset.access_log)

    def delete(self, asset_id: int, owner: str) -> str:
        """Remove an asset and its whole history. Owner only."""
        with self._lock:
            self._lookup_owned(asset_id, owner, "Only the owner can delete the asset.")
            del self._assets[asset_id]

        logger.info(f"Asset {asset_id} deleted by {owner}")
        return f"Asset {asset_id} deleted."

    def list_owned(self, owner: str) -> List[Asset]:
        """
        List assets owned by ``owner``, sorted by id.

        Raises:
            NotFoundError: if ``owner`` owns nothing
        """
        with self._lock:
            found = [a.snapshot() for a in self._assets.values() if a.owner == owner]
        if not found:
            raise NotFoundError(f"No assets found for owner: {owner}")
        return sorted(found, key=lambda a: a.id)

    def list_shared(self, caller: str) -> List[Asset]:
        """
        List assets shared with ``caller``, sorted by id.

        Raises:
            NotFoundError: if nothing is shared with ``caller``
        """
        with self._lock:
            found = [a.snapshot() for a in self._assets.values() if caller in a.shared_with]
        if not found:
            raise NotFoundError(f"No assets shared with user: {caller}")
        return sorted(found, key=lambda a: a.id)

    def __contains__(self, asset_id: int) -> bool:
        with self._lock:
            return asset_id in self._assets

    def __len__(self) -> int:
        with self._lock:
            return len(self._assets)
