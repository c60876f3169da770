"""Server configuration — identity, bind address, endpoint paths, limits."""

from pydantic import BaseModel, Field

from mcp_osgi import __version__

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "mcp-osgi-server"


class ServerConfig(BaseModel):
    """Settings shared by the dispatcher and all transports.

    Everything has a default; the CLI only overrides host and ports.
    """

    server_name: str = SERVER_NAME
    server_version: str = __version__
    protocol_version: str = PROTOCOL_VERSION

    host: str = "0.0.0.0"
    sse_port: int = Field(default=3000, ge=1, le=65535)
    http_port: int = Field(default=8080, ge=1, le=65535)

    sse_path: str = "/mcp/sse"
    message_path: str = "/mcp/message"
    http_path: str = "/mcp"

    tool_timeout: float | None = 30.0
    sse_keepalive: float = 15.0

    def server_info(self) -> dict[str, str]:
        """Return the ``serverInfo`` object sent in the initialize result."""
        return {"name": self.server_name, "version": self.server_version}
