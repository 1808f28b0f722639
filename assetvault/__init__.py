# assetvault - Access-controlled digital asset registry with read auditing
#
# An in-memory store where owners register opaque binary content, grant or
# revoke read access to other identities, and review an append-only log of
# every successful read.
#
# Core concepts:
# - Asset: Content plus owner, sharing list and access log
# - Registry: The authoritative store; every operation is serialized
# - Dispatcher: Typed-result boundary a transport calls into
# - Session: A scripted sequence of calls, run from YAML

from .errors import (
    VaultError,
    InvalidInputError,
    NotFoundError,
    ForbiddenError,
    NotSharedError,
    IdentifierExhausted,
)
from .ids import IdAllocator
from .clock import SystemClock, LogicalClock, make_clock
from .registry import Registry, Asset, AccessLogEntry
from .config import VaultConfig
from .dispatch import Dispatcher, OPERATIONS
from .session import Session, SessionResult

__all__ = [
    # Errors
    "VaultError",
    "InvalidInputError",
    "NotFoundError",
    "ForbiddenError",
    "NotSharedError",
    "IdentifierExhausted",
    # Core
    "IdAllocator",
    "SystemClock",
    "LogicalClock",
    "make_clock",
    "Registry",
    "Asset",
    "AccessLogEntry",
    # Surfaces
    "VaultConfig",
    "Dispatcher",
    "OPERATIONS",
    "Session",
    "SessionResult",
]

__version__ = "0.1.0"
