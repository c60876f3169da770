"""Tests for the JSON-RPC message codec."""

import json

import pytest

from mcp_osgi.protocol.codec import decode, encode_error, encode_response, encode_success
from mcp_osgi.protocol.errors import INVALID_REQUEST, DecodeError
from mcp_osgi.protocol.models import JsonRpcResponse


class TestDecode:
    def test_request(self) -> None:
        msg = decode(b'{"jsonrpc":"2.0","id":1,"method":"tools/list","params":{}}')
        assert msg.method == "tools/list"
        assert msg.id == 1
        assert msg.params == {}

    def test_accepts_str(self) -> None:
        msg = decode('{"jsonrpc":"2.0","id":"a","method":"ping"}')
        assert msg.id == "a"

    def test_notification(self) -> None:
        msg = decode('{"jsonrpc":"2.0","method":"notifications/initialized"}')
        assert msg.id is None
        assert msg.is_notification

    def test_missing_params_default(self) -> None:
        assert decode('{"jsonrpc":"2.0","id":1,"method":"ping"}').params == {}

    def test_malformed_json(self) -> None:
        with pytest.raises(DecodeError, match="malformed JSON") as exc_info:
            decode("{not json")
        assert exc_info.value.request_id is None
        assert exc_info.value.code == INVALID_REQUEST

    def test_invalid_utf8(self) -> None:
        with pytest.raises(DecodeError):
            decode(b'{"jsonrpc":"2.0","id":1,"method":"\xff"}')

    def test_not_an_object(self) -> None:
        with pytest.raises(DecodeError, match="not a JSON object"):
            decode("[1, 2, 3]")

    def test_missing_jsonrpc_salvages_id(self) -> None:
        with pytest.raises(DecodeError, match="jsonrpc") as exc_info:
            decode('{"id":5,"method":"ping"}')
        assert exc_info.value.request_id == 5

    def test_wrong_jsonrpc_version(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode('{"jsonrpc":"1.0","id":"x","method":"ping"}')
        assert exc_info.value.request_id == "x"

    def test_missing_method(self) -> None:
        with pytest.raises(DecodeError, match="method") as exc_info:
            decode('{"jsonrpc":"2.0","id":3}')
        assert exc_info.value.request_id == 3

    def test_non_string_method(self) -> None:
        with pytest.raises(DecodeError, match="method") as exc_info:
            decode('{"jsonrpc":"2.0","id":3,"method":42}')
        assert exc_info.value.request_id == 3

    def test_params_not_object(self) -> None:
        with pytest.raises(DecodeError, match="params"):
            decode('{"jsonrpc":"2.0","id":3,"method":"ping","params":[1]}')

    def test_bool_id_not_salvaged(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode('{"jsonrpc":"2.0","id":true,"method":"ping"}')
        assert exc_info.value.request_id is None

    def test_response_shaped_message_not_salvaged(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode('{"jsonrpc":"2.0","id":9,"result":{}}')
        assert exc_info.value.request_id is None


class TestEncode:
    def test_success_shape(self) -> None:
        data = json.loads(encode_success(1, {"tools": []}))
        assert data == {"jsonrpc": "2.0", "id": 1, "result": {"tools": []}}

    def test_success_is_compact(self) -> None:
        assert encode_success(1, {}) == b'{"jsonrpc":"2.0","id":1,"result":{}}'

    def test_error_shape(self) -> None:
        data = json.loads(encode_error(7, -32601, "Method not found: x"))
        assert data == {
            "jsonrpc": "2.0",
            "id": 7,
            "error": {"code": -32601, "message": "Method not found: x"},
        }

    def test_error_with_unknown_id(self) -> None:
        data = json.loads(encode_error(None, -32600, "Invalid Request"))
        assert "id" in data
        assert data["id"] is None

    def test_error_never_has_result(self) -> None:
        data = json.loads(encode_error("r", -32603, "Internal error"))
        assert "error" in data
        assert "result" not in data

    def test_error_data_included_when_set(self) -> None:
        data = json.loads(encode_error(1, -32602, "Invalid params", data={"field": "name"}))
        assert data["error"]["data"] == {"field": "name"}

    def test_byte_identical_for_equal_input(self) -> None:
        result = {"content": [{"type": "text", "text": "ü"}], "isError": False}
        assert encode_success("a", result) == encode_success("a", dict(result))

    def test_non_ascii_preserved(self) -> None:
        assert "Grüße".encode() in encode_success(1, {"text": "Grüße"})

    def test_encode_response_model(self) -> None:
        payload = encode_response(JsonRpcResponse.success(3, {"ok": True}))
        assert json.loads(payload) == {"jsonrpc": "2.0", "id": 3, "result": {"ok": True}}

    def test_encoded_error_is_not_a_request(self) -> None:
        with pytest.raises(DecodeError):
            decode(encode_error(1, -32601, "x"))

    def test_lone_surrogate_is_escaped(self) -> None:
        payload = encode_success(1, {"text": "bad \ud800 char"})
        assert b"\\ud800" in payload
        payload.decode("utf-8")
        assert json.loads(payload)["result"]["text"] == "bad \ud800 char"
