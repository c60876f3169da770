"""HTTP+SSE transport — session-based MCP over Server-Sent Events.

The client connects via:
  GET  /mcp/sse                      -> event stream; first event is ``endpoint``
  POST /mcp/message?sessionId=<id>   -> one JSON-RPC message per body

Responses are never returned in the POST body: the POST is acknowledged
with ``202 Accepted`` and the JSON-RPC response is pushed as an ``message``
event on the session's stream. Each session has its own dispatcher, so
protocol state is isolated between clients.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING
from uuid import uuid4

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response, StreamingResponse
from starlette.routing import Route

from mcp_osgi.config import ServerConfig
from mcp_osgi.protocol.dispatcher import ProtocolDispatcher
from mcp_osgi.protocol.errors import INVALID_REQUEST
from mcp_osgi.transports._asgi import CORS_HEADERS, json_rpc_error

if TYPE_CHECKING:
    from mcp_osgi.protocol.registry import ToolRegistry

logger = logging.getLogger(__name__)


def format_event(event: str, data: str) -> str:
    """Render one SSE event; multi-line data becomes several ``data:`` lines."""
    lines = [f"event: {event}"]
    lines.extend(f"data: {line}" for line in data.split("\n"))
    return "\n".join(lines) + "\n\n"


class SseSession:
    """One connected SSE client: its dispatcher, outbound queue and in-flight tasks."""

    def __init__(self, session_id: str, dispatcher: ProtocolDispatcher) -> None:
        self.id = session_id
        self.dispatcher = dispatcher
        self.outbox: asyncio.Queue[bytes | None] = asyncio.Queue()
        self.closed = False
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, body: bytes) -> asyncio.Task[None]:
        """Dispatch *body* in its own task; the reply lands on :attr:`outbox`."""
        task = asyncio.create_task(self._process(body))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _process(self, body: bytes) -> None:
        reply = await self.dispatcher.handle_raw(body)
        if reply is not None and not self.closed:
            await self.outbox.put(reply)

    def close(self) -> None:
        """Cancel in-flight requests and wake the stream so it can finish."""
        if self.closed:
            return
        self.closed = True
        for task in list(self._tasks):
            task.cancel()
        self.outbox.put_nowait(None)


class SessionManager:
    """Tracks live SSE sessions keyed by session id."""

    def __init__(self, registry: ToolRegistry, config: ServerConfig | None = None) -> None:
        self._registry = registry
        self._config = config or ServerConfig()
        self._sessions: dict[str, SseSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def create(self) -> SseSession:
        session_id = uuid4().hex
        dispatcher = ProtocolDispatcher(
            self._registry, self._config, session_id=session_id, transport="sse"
        )
        session = SseSession(session_id, dispatcher)
        self._sessions[session_id] = session
        logger.info("SSE session %s opened (%d active)", session_id, len(self._sessions))
        return session

    def get(self, session_id: str) -> SseSession | None:
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        session.close()
        logger.info("SSE session %s closed (%d active)", session_id, len(self._sessions))

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)

    def endpoint_for(self, session: SseSession) -> str:
        return f"{self._config.message_path}?sessionId={session.id}"

    async def stream(self, session: SseSession | None = None) -> AsyncIterator[str]:
        """Yield the SSE events for one session until it closes or the client leaves.

        Starts a new session unless one is given. The session is removed when
        the generator finishes, including when the client disconnects.
        """
        session = session or self.create()
        try:
            yield format_event("endpoint", self.endpoint_for(session))
            while True:
                try:
                    item = await asyncio.wait_for(
                        session.outbox.get(), timeout=self._config.sse_keepalive
                    )
                except TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                if item is None:
                    break
                yield format_event("message", item.decode("utf-8"))
        finally:
            self.close(session.id)


def create_sse_app(registry: ToolRegistry, config: ServerConfig | None = None) -> Starlette:
    """Build the Starlette application for the HTTP+SSE transport."""
    config = config or ServerConfig()
    sessions = SessionManager(registry, config)

    async def sse_endpoint(request: Request) -> Response:
        return StreamingResponse(
            sessions.stream(),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no", **CORS_HEADERS},
        )

    async def message_endpoint(request: Request) -> Response:
        session_id = request.query_params.get("sessionId")
        if not session_id:
            return json_rpc_error(400, INVALID_REQUEST, "Missing sessionId query parameter")
        session = sessions.get(session_id)
        if session is None:
            logger.warning("POST for unknown session %s", session_id)
            return json_rpc_error(404, INVALID_REQUEST, f"Unknown session: {session_id}")

        body = await request.body()
        session.submit(body)
        return Response("Accepted", status_code=202, media_type="text/plain", headers=CORS_HEADERS)

    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok", "transport": "sse", "sessions": len(sessions)})

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        yield
        sessions.close_all()

    app = Starlette(
        routes=[
            Route(config.sse_path, sse_endpoint, methods=["GET"]),
            Route(config.message_path, message_endpoint, methods=["POST"]),
            Route("/health", health, methods=["GET"]),
        ],
        lifespan=lifespan,
    )
    app.state.sessions = sessions
    app.state.config = config
    return app
