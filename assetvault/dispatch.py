# assetvault/dispatch.py
"""
Typed-result dispatch into the registry.

This is the seam a transport (RPC, HTTP, a scripted session) calls into.
Arguments arrive as a plain mapping; results leave as JSON-safe dicts:

    {"ok": <value>}
    {"err": {"kind": "Forbidden", "message": "Access denied."}}

Operations:
    register(owner, name, content)  -> id
    share(id, owner, recipient)     -> message
    revoke(id, owner, recipient)    -> message
    read(id, caller)                -> {"name", "content"}
    audit_log(id, owner)            -> [{"reader", "timestamp"}, ...]
    delete(id, owner)               -> message
    list_owned(owner)               -> [asset, ...]
    list_shared(caller)             -> [asset, ...]
"""

import base64
import logging
from typing import Any, Callable, Dict, List

from .errors import InvalidInputError, VaultError
from .registry import Registry

logger = logging.getLogger(__name__)

# Operation name -> argument names, in call order.
OPERATIONS: Dict[str, List[str]] = {
    "register": ["owner", "name", "content"],
    "share": ["id", "owner", "recipient"],
    "revoke": ["id", "owner", "recipient"],
    "read": ["id", "caller"],
    "audit_log": ["id", "owner"],
    "delete": ["id", "owner"],
    "list_owned": ["owner"],
    "list_shared": ["caller"],
}


def _decode_arg(name: str, value: Any) -> Any:
    if name == "id":
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError("id", "Field 'id' must be an integer.")
        return value
    if name == "content":
        if isinstance(value, str):
            return value.encode("utf-8")
        if isinstance(value, list):
            return value
        raise InvalidInputError("content", "Field 'content' must be a list of byte values or a string.")
    if not isinstance(value, str):
        raise InvalidInputError(name, f"Field '{name}' must be a string.")
    return value


def _encode_content(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


class Dispatcher:
    """
    Routes named operations to a Registry and wraps the outcome.

    Usage:
        dispatcher = Dispatcher(Registry())
        dispatcher.call("register", {"owner": "alice", "name": "doc", "content": [1, 2, 3]})
        # -> {"ok": 1}
    """

    def __init__(self, registry: Registry):
        self.registry = registry
        self._handlers: Dict[str, Callable[..., Any]] = {
            "register": self._register,
            "share": self._share,
            "revoke": self._revoke,
            "read": self._read,
            "audit_log": self._audit_log,
            "delete": self._delete,
            "list_owned": self._list_owned,
            "list_shared": self._list_shared,
        }

    def call(self, operation: str, args: Dict[str, Any] = None) -> Dict[str, Any]:
        """
        Invoke an operation.

        Registry errors come back as ``{"err": ...}``. Anything else
        (including IdentifierExhausted) propagates.
        """
        args = args or {}
        try:
            handler = self._handlers.get(operation)
            if handler is None:
                raise InvalidInputError("operation", f"Unknown operation: {operation}")
            decoded = []
            for name in OPERATIONS[operation]:
                if name not in args:
                    raise InvalidInputError(name, f"Missing field '{name}'.")
                decoded.append(_decode_arg(name, args[name]))
            return {"ok": handler(*decoded)}
        except VaultError as e:
            logger.debug(f"{operation} failed: {e.kind}: {e.message}")
            return {"err": e.to_dict()}

    def _register(self, owner, name, content):
        return self.registry.register(owner, name, content)

    def _share(self, asset_id, owner, recipient):
        return self.registry.share(asset_id, owner, recipient)

    def _revoke(self, asset_id, owner, recipient):
        return self.registry.revoke(asset_id, owner, recipient)

    def _read(self, asset_id, caller):
        name, content = self.registry.read(asset_id, caller)
        return {"name": name, "content": _encode_content(content)}

    def _audit_log(self, asset_id, owner):
        return [entry.to_dict() for entry in self.registry.audit_log(asset_id, owner)]

    def _delete(self, asset_id, owner):
        return self.registry.delete(asset_id, owner)

    def _list_owned(self, owner):
        return [asset.to_dict() for asset in self.registry.list_owned(owner)]

    def _list_shared(self, caller):
        return [asset.to_dict() for asset in self.registry.list_shared(caller)]
