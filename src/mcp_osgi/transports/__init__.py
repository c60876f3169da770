"""Transport adapters — stdio, HTTP+SSE and minimal HTTP/JSON.

Each adapter only frames messages and manages sessions; protocol handling
lives in :class:`~mcp_osgi.protocol.dispatcher.ProtocolDispatcher`.
"""

from mcp_osgi.transports.http import create_http_app
from mcp_osgi.transports.sse import SessionManager, SseSession, create_sse_app
from mcp_osgi.transports.stdio import StdioTransport, run_stdio

__all__ = [
    "SessionManager",
    "SseSession",
    "StdioTransport",
    "create_http_app",
    "create_sse_app",
    "run_stdio",
]
