"""Tests for MCP JSON-RPC models."""

import pytest
from pydantic import ValidationError

from mcp_osgi.protocol.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    ToolCallResult,
    ToolDescriptor,
)


class TestJsonRpcRequest:
    def test_defaults(self) -> None:
        req = JsonRpcRequest(method="tools/list")
        assert req.jsonrpc == "2.0"
        assert req.id is None
        assert req.params == {}

    def test_custom_values(self) -> None:
        req = JsonRpcRequest(method="tools/call", id=42, params={"name": "find"})
        assert req.method == "tools/call"
        assert req.id == 42
        assert req.params["name"] == "find"

    def test_string_id(self) -> None:
        req = JsonRpcRequest(method="ping", id="abc")
        assert req.id == "abc"

    def test_null_params_become_empty(self) -> None:
        req = JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "ping", "id": 1, "params": None})
        assert req.params == {}

    def test_bool_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "ping", "id": True})

    def test_object_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"jsonrpc": "2.0", "method": "ping", "id": {"a": 1}})

    def test_wrong_version_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"jsonrpc": "1.0", "method": "ping", "id": 1})


class TestIsNotification:
    def test_request_with_id(self) -> None:
        assert not JsonRpcRequest(method="tools/list", id=1).is_notification

    def test_without_id(self) -> None:
        assert JsonRpcRequest(method="tools/list").is_notification

    def test_notifications_prefix_with_id(self) -> None:
        assert JsonRpcRequest(method="notifications/initialized", id=7).is_notification


class TestJsonRpcResponse:
    def test_success(self) -> None:
        resp = JsonRpcResponse.success(1, {"tools": []})
        assert resp.result == {"tools": []}
        assert resp.error is None

    def test_failure(self) -> None:
        resp = JsonRpcResponse.failure(2, -32601, "Method not found: x")
        assert resp.error == JsonRpcError(code=-32601, message="Method not found: x")
        assert resp.result is None

    def test_both_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            JsonRpcResponse(id=1, result={}, error=JsonRpcError(code=-32603, message="x"))

    def test_neither_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            JsonRpcResponse(id=1)

    def test_wire_shape_keeps_null_id(self) -> None:
        wire = JsonRpcResponse.failure(None, -32600, "Invalid Request").to_wire()
        assert wire == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32600, "message": "Invalid Request"},
        }

    def test_wire_shape_empty_result(self) -> None:
        wire = JsonRpcResponse.success("p", {}).to_wire()
        assert wire == {"jsonrpc": "2.0", "id": "p", "result": {}}


class TestToolDescriptor:
    def test_default_schema(self) -> None:
        tool = ToolDescriptor(name="x")
        assert tool.description == ""
        assert tool.input_schema == {"type": "object", "properties": {}}

    def test_dump_uses_wire_alias(self) -> None:
        tool = ToolDescriptor(name="x", input_schema={"type": "object"})
        assert tool.model_dump(by_alias=True) == {
            "name": "x",
            "description": "",
            "inputSchema": {"type": "object"},
        }

    def test_accepts_alias(self) -> None:
        tool = ToolDescriptor.model_validate({"name": "x", "inputSchema": {"type": "object"}})
        assert tool.input_schema == {"type": "object"}

    def test_frozen(self) -> None:
        tool = ToolDescriptor(name="x")
        with pytest.raises(ValidationError):
            tool.name = "y"  # type: ignore[misc]


class TestToolCallResult:
    def test_from_text(self) -> None:
        result = ToolCallResult.from_text("hi")
        assert result.content == [TextContent(text="hi")]
        assert result.is_error is False

    def test_error(self) -> None:
        result = ToolCallResult.error("boom")
        assert result.is_error is True
        assert result.text == "boom"

    def test_wire_shape(self) -> None:
        assert ToolCallResult.from_text("hi").model_dump(by_alias=True) == {
            "content": [{"type": "text", "text": "hi"}],
            "isError": False,
        }

    def test_text_joins_blocks(self) -> None:
        result = ToolCallResult(content=[TextContent(text="a"), TextContent(text="b")])
        assert result.text == "a\nb"
