"""mcp-osgi-server — example MCP server exposing OSGi tools."""

from __future__ import annotations

__version__ = "1.0.0"
