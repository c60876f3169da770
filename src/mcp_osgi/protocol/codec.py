"""Message codec — decode one JSON-RPC request, encode one response.

All functions are pure. Encoded output is compact JSON with a fixed key
order, so equal inputs always produce byte-identical output.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from mcp_osgi.protocol.errors import DecodeError
from mcp_osgi.protocol.models import JsonRpcRequest, JsonRpcResponse, RequestId


def decode(data: bytes | str) -> JsonRpcRequest:
    """Parse a single JSON-RPC request or notification.

    Raises :class:`DecodeError` for anything that is not a well-formed
    JSON-RPC 2.0 request object.
    """
    try:
        raw = json.loads(data)
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(f"malformed JSON ({exc})") from exc

    if not isinstance(raw, dict):
        raise DecodeError("message is not a JSON object")

    request_id = _salvage_id(raw)

    if raw.get("jsonrpc") != "2.0":
        raise DecodeError("'jsonrpc' must be \"2.0\"", request_id)
    if "method" not in raw:
        raise DecodeError("missing 'method'", request_id)

    try:
        return JsonRpcRequest.model_validate(raw)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise DecodeError(f"invalid field(s): {fields}", request_id) from exc


def encode_response(response: JsonRpcResponse) -> bytes:
    """Serialize a response model."""
    return _dumps(response.to_wire())


def encode_success(request_id: RequestId | None, result: dict[str, Any]) -> bytes:
    """Serialize a success response."""
    return encode_response(JsonRpcResponse.success(request_id, result))


def encode_error(
    request_id: RequestId | None,
    code: int,
    message: str,
    data: Any = None,
) -> bytes:
    """Serialize an error response; ``request_id`` may be ``None`` when unknown."""
    return encode_response(JsonRpcResponse.failure(request_id, code, message, data))


def _salvage_id(raw: dict[str, Any]) -> RequestId | None:
    # A response-shaped object must never be answered.
    if "result" in raw or "error" in raw:
        return None
    value = raw.get("id")
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return None
    return value


def _dumps(payload: dict[str, Any]) -> bytes:
    # lone surrogates from \uXXXX escapes are written back as escapes
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8", "backslashreplace")
