"""``hello_osgi`` — demonstration greeting with runtime context."""

from __future__ import annotations

import platform
from typing import Any

from mcp_osgi.protocol.models import ToolDescriptor

DESCRIPTOR = ToolDescriptor(
    name="hello_osgi",
    description="A demonstration tool that returns a greeting with OSGi context information",
    input_schema={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "The name to greet (default: World)"},
        },
    },
)


def hello_osgi(arguments: dict[str, Any]) -> str:
    name = arguments.get("name")
    if not isinstance(name, str) or not name:
        name = "World"

    lines = [
        f"Hello, {name}!",
        "",
        "=== OSGi Context Information ===",
        f"Python Version: {platform.python_version()}",
        f"Python Implementation: {platform.python_implementation()}",
        f"OS Name: {platform.system()}",
        f"OS Architecture: {platform.machine()}",
        "",
        "This is a demonstration MCP tool for OSGi contexts.",
        "In a real OSGi environment, this tool would provide:",
        "- Bundle information and lifecycle states",
        "- Service registry details",
        "- Package wiring and dependencies",
        "- Framework diagnostics and configuration",
    ]
    return "\n".join(lines) + "\n"
