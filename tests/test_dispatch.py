# tests/test_dispatch.py
"""Tests for typed-result dispatch."""

import base64

import pytest

from assetvault.clock import LogicalClock
from assetvault.dispatch import OPERATIONS, Dispatcher
from assetvault.errors import IdentifierExhausted
from assetvault.ids import IdAllocator
from assetvault.registry import Registry


@pytest.fixture
def dispatcher():
    """Create a dispatcher over an empty registry."""
    return Dispatcher(Registry(clock=LogicalClock()))


def _register_doc(dispatcher):
    return dispatcher.call("register", {"owner": "alice", "name": "doc", "content": [1, 2, 3]})


class TestDispatcher:
    """Test Dispatcher.call."""

    def test_operations_listed(self):
        assert list(OPERATIONS) == [
            "register", "share", "revoke", "read",
            "audit_log", "delete", "list_owned", "list_shared",
        ]

    def test_register_ok(self, dispatcher):
        assert _register_doc(dispatcher) == {"ok": 1}

    def test_read_encodes_content(self, dispatcher):
        _register_doc(dispatcher)
        result = dispatcher.call("read", {"id": 1, "caller": "alice"})
        assert result["ok"]["name"] == "doc"
        assert base64.b64decode(result["ok"]["content"]) == b"\x01\x02\x03"

    def test_string_content_is_utf8(self, dispatcher):
        dispatcher.call("register", {"owner": "alice", "name": "note", "content": "héllo"})
        result = dispatcher.call("read", {"id": 1, "caller": "alice"})
        assert base64.b64decode(result["ok"]["content"]) == "héllo".encode("utf-8")

    def test_error_is_typed(self, dispatcher):
        _register_doc(dispatcher)
        result = dispatcher.call("read", {"id": 1, "caller": "carol"})
        assert result == {"err": {"kind": "Forbidden", "message": "Access denied."}}

    def test_not_found_carries_id(self, dispatcher):
        result = dispatcher.call("delete", {"id": 7, "owner": "alice"})
        assert result["err"]["kind"] == "NotFound"
        assert result["err"]["asset_id"] == 7

    def test_invalid_input_names_field(self, dispatcher):
        result = dispatcher.call("register", {"owner": "alice", "name": " ", "content": [1]})
        assert result["err"]["kind"] == "InvalidInput"
        assert result["err"]["field"] == "name"

    def test_not_shared_names_recipient(self, dispatcher):
        _register_doc(dispatcher)
        result = dispatcher.call("revoke", {"id": 1, "owner": "alice", "recipient": "bob"})
        assert result["err"]["kind"] == "NotShared"
        assert result["err"]["recipient"] == "bob"

    def test_unknown_operation(self, dispatcher):
        result = dispatcher.call("update", {})
        assert result["err"]["kind"] == "InvalidInput"
        assert result["err"]["field"] == "operation"

    def test_missing_argument(self, dispatcher):
        result = dispatcher.call("read", {"id": 1})
        assert result["err"]["field"] == "caller"

    @pytest.mark.parametrize("bad_id", ["1", 1.0, True, None])
    def test_id_must_be_int(self, dispatcher, bad_id):
        _register_doc(dispatcher)
        result = dispatcher.call("read", {"id": bad_id, "caller": "alice"})
        assert result["err"]["field"] == "id"

    def test_identity_must_be_string(self, dispatcher):
        result = dispatcher.call("list_owned", {"owner": 42})
        assert result["err"]["field"] == "owner"

    def test_audit_log_and_listing(self, dispatcher):
        _register_doc(dispatcher)
        dispatcher.call("share", {"id": 1, "owner": "alice", "recipient": "bob"})
        dispatcher.call("read", {"id": 1, "caller": "bob"})

        log = dispatcher.call("audit_log", {"id": 1, "owner": "alice"})["ok"]
        assert log == [{"reader": "bob", "timestamp": 2}]

        shared = dispatcher.call("list_shared", {"caller": "bob"})["ok"]
        assert len(shared) == 1
        assert shared[0]["id"] == 1
        assert shared[0]["shared_with"] == ["bob"]
        assert shared[0]["access_log"] == log

    def test_empty_listing_is_error(self, dispatcher):
        result = dispatcher.call("list_owned", {"owner": "dave"})
        assert result["err"]["kind"] == "NotFound"

    def test_exhaustion_propagates(self):
        """Fatal allocator errors are not turned into results."""
        dispatcher = Dispatcher(Registry(clock=LogicalClock(), allocator=IdAllocator(max_id=1)))
        _register_doc(dispatcher)
        with pytest.raises(IdentifierExhausted):
            _register_doc(dispatcher)
