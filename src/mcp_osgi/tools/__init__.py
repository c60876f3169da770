"""Built-in OSGi tools (example implementations)."""

from __future__ import annotations

from mcp_osgi.config import ServerConfig
from mcp_osgi.protocol.registry import ToolRegistry
from mcp_osgi.tools import bundle_info, find, hello


def build_default_registry(config: ServerConfig | None = None) -> ToolRegistry:
    """Create the registry with ``hello_osgi``, ``bundle_info`` and ``find``, in that order."""
    config = config or ServerConfig()
    registry = ToolRegistry(timeout=config.tool_timeout)
    registry.register(hello.DESCRIPTOR, hello.hello_osgi)
    registry.register(bundle_info.DESCRIPTOR, bundle_info.bundle_info)
    registry.register(find.DESCRIPTOR, find.find)
    return registry


__all__ = ["build_default_registry"]
