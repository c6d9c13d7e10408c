"""
Tests for call records, result slots and the error taxonomy
"""
import pytest

from jsonrpc_client.errors import DEFAULT_MESSAGES, ErrorCode, RpcError, default_message
from jsonrpc_client.models import CachedResult, CallRecord, ResultSlot


class TestCallRecord:

    def test_payload_without_label(self):
        record = CallRecord(method="ping", params=[1, 2])
        assert record.to_payload() == {
            "jsonrpc": "2.0",
            "method": "ping",
            "params": [1, 2],
            "id": record.id,
        }

    def test_payload_defaults_params(self):
        assert CallRecord(method="ping").to_payload()["params"] == {}

    def test_cache_directive(self):
        assert CallRecord(method="a").wants_cache is False
        assert CallRecord(method="a", cache_ttl=-1).wants_cache is True
        assert CallRecord(method="a", cache_ttl=0).wants_cache is True


class TestResultSlot:

    def test_starts_pending(self):
        slot = ResultSlot("1")
        assert slot.pending
        assert slot.success is None

    def test_success_keeps_only_data(self):
        slot = ResultSlot("1")
        slot.resolve(True, data="pong", error=RpcError(1, "ignored"))
        assert slot.success is True
        assert slot.data == "pong"
        assert slot.error is None

    def test_failure_keeps_only_error(self):
        slot = ResultSlot("1")
        slot.resolve(False, data="ignored", error=RpcError(6001, "Validation error"))
        assert slot.success is False
        assert slot.data is None
        assert slot.error.code == 6001

    def test_cannot_resolve_twice(self):
        slot = ResultSlot("1")
        slot.resolve(True, data=1)
        with pytest.raises(RuntimeError, match="already resolved"):
            slot.resolve(False)
        assert slot.data == 1

    def test_cache_round_trip(self):
        slot = ResultSlot("1")
        slot.resolve(True, data={"x": 1})

        restored = ResultSlot("2")
        restored.resolve_from_cache(slot.as_cached())

        assert restored.as_cached() == CachedResult(True, {"x": 1}, None)


class TestErrors:

    def test_every_code_has_a_message(self):
        assert set(DEFAULT_MESSAGES) == set(ErrorCode)

    def test_default_message(self):
        assert default_message(-32601) == "Method not found"
        assert default_message(12345) is None
        assert default_message(None) is None

    def test_from_payload_keeps_reply_message(self):
        error = RpcError.from_payload({"code": -32602, "message": "bad id", "data": {"field": "id"}})
        assert error == RpcError(-32602, "bad id", {"field": "id"})
        assert error.to_dict() == {"code": -32602, "message": "bad id", "data": {"field": "id"}}

    def test_from_payload_fills_default(self):
        assert RpcError.from_payload({"code": 8000}).message == "External service error"
        assert RpcError.from_payload({"code": 1}).message == "Unknown error"

    def test_from_non_object_payload(self):
        error = RpcError.from_payload("boom")
        assert error.code is None
        assert error.message == "boom"
