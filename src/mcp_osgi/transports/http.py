"""Minimal HTTP/JSON transport — one JSON-RPC request per POST, answered in the body.

There is no session and no streaming. Only ``initialize`` and ``tools/list``
are served; every other request method is answered with ``-32601``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from mcp_osgi.config import ServerConfig
from mcp_osgi.protocol.codec import decode
from mcp_osgi.protocol.dispatcher import ProtocolDispatcher
from mcp_osgi.protocol.errors import DecodeError
from mcp_osgi.transports._asgi import CORS_HEADERS, json_rpc_error, json_rpc_response

if TYPE_CHECKING:
    from mcp_osgi.protocol.registry import ToolRegistry

logger = logging.getLogger(__name__)

HTTP_METHODS = ("initialize", "tools/list")


def create_http_app(registry: ToolRegistry, config: ServerConfig | None = None) -> Starlette:
    """Build the Starlette application for the minimal HTTP transport."""
    config = config or ServerConfig()
    dispatcher = ProtocolDispatcher(registry, config, allowed_methods=HTTP_METHODS, transport="http")

    async def mcp_endpoint(request: Request) -> Response:
        if request.method != "POST":
            return json_rpc_error(405, DecodeError.code, "Method not allowed")

        body = await request.body()
        logger.debug("Received HTTP request: %s", body)
        try:
            message = decode(body)
        except DecodeError as exc:
            logger.warning("Rejected HTTP request: %s", exc.detail)
            return json_rpc_error(400, exc.code, str(exc), exc.request_id)

        response = await dispatcher.handle(message)
        if response is None:
            logger.debug("Received notification: %s", message.method)
            return Response(status_code=204, headers=CORS_HEADERS)
        return json_rpc_response(dispatcher.encode_reply(response))

    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok", "transport": "http"})

    app = Starlette(
        routes=[
            Route(config.http_path, mcp_endpoint, methods=["GET", "POST", "PUT", "DELETE", "PATCH"]),
            Route("/health", health, methods=["GET"]),
        ],
    )
    app.state.dispatcher = dispatcher
    app.state.config = config
    return app
