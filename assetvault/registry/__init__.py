# assetvault/registry/__init__.py
"""
Asset Vault Registry.

The registry is the authoritative in-memory store of assets. Each asset
has one owner, an optional list of sharees who may read it, and an
append-only log of every successful read.

Example:
    registry = Registry()
    asset_id = registry.register("alice", "contract.pdf", pdf_bytes)
    registry.share(asset_id, "alice", "bob")

    # bob can now read it; alice sees the read in the audit log
    name, content = registry.read(asset_id, "bob")
    entries = registry.audit_log(asset_id, "alice")
"""

from .registry import Registry, Asset, AccessLogEntry

__all__ = ["Registry", "Asset", "AccessLogEntry"]
