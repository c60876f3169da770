"""Shared Starlette/uvicorn helpers for the HTTP transports."""

from __future__ import annotations

import logging
from typing import Any

import uvicorn
from starlette.responses import Response

from mcp_osgi.protocol.codec import encode_error
from mcp_osgi.protocol.models import RequestId

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def json_rpc_response(payload: bytes, status_code: int = 200) -> Response:
    """Wrap already-encoded JSON-RPC bytes in an HTTP response."""
    return Response(payload, status_code=status_code, media_type=JSON_MEDIA_TYPE, headers=CORS_HEADERS)


def json_rpc_error(
    status_code: int,
    code: int,
    message: str,
    request_id: RequestId | None = None,
) -> Response:
    """HTTP response whose body is a JSON-RPC error envelope."""
    return json_rpc_response(encode_error(request_id, code, message), status_code=status_code)


def serve(app: Any, host: str, port: int, log_level: str = "info") -> None:
    """Run *app* under uvicorn until interrupted."""
    logger.info("Starting HTTP server on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
