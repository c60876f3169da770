"""ProtocolDispatcher — the per-session MCP state machine.

A dispatcher owns one :class:`SessionState` and shares a read-only
:class:`~mcp_osgi.protocol.registry.ToolRegistry` with every other session.
It turns one decoded request into at most one response:

* requests (``id`` present) always get exactly one response;
* notifications (no ``id``, or a ``notifications/*`` method) never do.

The handshake is lenient: ``tools/list`` and ``tools/call`` are served in
any phase, and ``initialize`` may be repeated.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mcp_osgi.config import ServerConfig
from mcp_osgi.protocol.codec import decode, encode_error, encode_response
from mcp_osgi.protocol.errors import (
    INTERNAL_ERROR,
    DecodeError,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
)
from mcp_osgi.protocol.models import JsonRpcRequest, JsonRpcResponse
from mcp_osgi.protocol.registry import ToolRegistry
from mcp_osgi.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_SESSION_ID,
    ATTR_TOOL_NAME,
    ATTR_TRANSPORT,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class SessionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@dataclass
class SessionState:
    """Protocol state for one client connection."""

    phase: SessionPhase = SessionPhase.UNINITIALIZED
    client_info: dict[str, Any] = field(default_factory=dict)
    client_protocol_version: str | None = None
    handshake_complete: bool = False

    @property
    def initialized(self) -> bool:
        return self.phase is SessionPhase.INITIALIZED


class ProtocolDispatcher:
    """Routes JSON-RPC messages for a single session.

    Usage::

        dispatcher = ProtocolDispatcher(registry, config)
        reply = await dispatcher.handle_raw(b'{"jsonrpc":"2.0","id":1,"method":"ping"}')
        # reply == b'{"jsonrpc":"2.0","id":1,"result":{}}'

    ``allowed_methods`` narrows the served method set; anything outside it
    is answered with ``-32601`` as if it did not exist. ``transport`` names
    the adapter feeding this dispatcher and is recorded on request spans.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        config: ServerConfig | None = None,
        *,
        allowed_methods: Iterable[str] | None = None,
        session_id: str | None = None,
        transport: str | None = None,
    ) -> None:
        self._registry = registry
        self._config = config or ServerConfig()
        self._session_id = session_id
        self._transport = transport
        self._state = SessionState()

        handlers: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "ping": self._ping,
        }
        if allowed_methods is not None:
            allowed = set(allowed_methods)
            handlers = {name: fn for name, fn in handlers.items() if name in allowed}
        self._handlers = handlers

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def transport(self) -> str | None:
        return self._transport

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def methods(self) -> list[str]:
        """Request methods this dispatcher answers."""
        return list(self._handlers)

    async def handle_raw(self, data: bytes | str) -> bytes | None:
        """Decode, dispatch and encode one raw message.

        Returns ``None`` when nothing must be sent back: notifications, and
        malformed input from which no request id could be recovered.
        """
        try:
            message = decode(data)
        except DecodeError as exc:
            if exc.request_id is None:
                logger.warning("Dropping undecodable message: %s", exc.detail)
                return None
            logger.warning("Invalid request %r: %s", exc.request_id, exc.detail)
            return encode_error(exc.request_id, exc.code, str(exc))

        response = await self.handle(message)
        return self.encode_reply(response) if response is not None else None

    def encode_reply(self, response: JsonRpcResponse) -> bytes:
        """Encode *response*, falling back to an internal error if it cannot be serialized."""
        try:
            return encode_response(response)
        except (TypeError, ValueError) as exc:
            logger.exception("Could not encode response to request %r", response.id)
            return encode_error(response.id, INTERNAL_ERROR, f"Internal error: {exc}")

    async def handle(self, message: JsonRpcRequest) -> JsonRpcResponse | None:
        """Process one decoded message."""
        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_METHOD, message.method)
            if self._transport is not None:
                span.set_attribute(ATTR_TRANSPORT, self._transport)
            if self._session_id is not None:
                span.set_attribute(ATTR_SESSION_ID, self._session_id)

            if message.is_notification:
                self._notify(message)
                return None

            span.set_attribute(ATTR_REQUEST_ID, str(message.id))
            if message.method == "tools/call" and isinstance(message.params.get("name"), str):
                span.set_attribute(ATTR_TOOL_NAME, message.params["name"])

            response = await self._respond(message)
            if response.error is not None:
                span.set_attribute(ATTR_ERROR_CODE, response.error.code)
            return response

    async def _respond(self, message: JsonRpcRequest) -> JsonRpcResponse:
        logger.debug("Handling request - method: %s, id: %r", message.method, message.id)

        handler = self._handlers.get(message.method)
        if handler is None:
            error = MethodNotFoundError(message.method)
            logger.info("%s", error)
            return JsonRpcResponse.failure(message.id, error.code, str(error))

        try:
            result = await handler(message.params)
        except ProtocolError as exc:
            logger.info("Request %r (%s) rejected: %s", message.id, message.method, exc)
            return JsonRpcResponse.failure(message.id, exc.code, str(exc))
        except Exception as exc:
            logger.exception("Error processing %s request %r", message.method, message.id)
            return JsonRpcResponse.failure(message.id, INTERNAL_ERROR, f"Internal error: {exc}")

        return JsonRpcResponse.success(message.id, result)

    def _notify(self, message: JsonRpcRequest) -> None:
        if message.method == "notifications/initialized":
            self._state.handshake_complete = True
            logger.info("Client completed initialization handshake")
        else:
            logger.debug("Ignoring notification: %s", message.method)

    # -- method handlers -----------------------------------------------------

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        client_info = params.get("clientInfo")
        if isinstance(client_info, dict):
            self._state.client_info = dict(client_info)
        protocol_version = params.get("protocolVersion")
        if isinstance(protocol_version, str):
            self._state.client_protocol_version = protocol_version

        if self._state.initialized:
            logger.info("Re-initialize requested by %s", self._state.client_info.get("name", "client"))
        else:
            logger.info("Received initialize request from %s", self._state.client_info.get("name", "client"))
        self._state.phase = SessionPhase.INITIALIZED

        return {
            "protocolVersion": self._config.protocol_version,
            "serverInfo": self._config.server_info(),
            "capabilities": {"tools": True},
        }

    async def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        logger.info("Received tools/list request")
        return {"tools": [tool.model_dump(by_alias=True) for tool in self._registry.list()]}

    async def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParamsError("missing tool name")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, dict):
            raise InvalidParamsError("'arguments' must be an object")

        logger.info("Received tools/call request for tool: %s", name)
        result = await self._registry.invoke(name, arguments)
        return result.model_dump(by_alias=True)

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        logger.debug("Received ping request")
        return {}
