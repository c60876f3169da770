"""``server`` and ``jdkserver`` — run the HTTP transports."""

from __future__ import annotations

import sys
from typing import Any

import click

from mcp_osgi.cli_commands._output import error_console


def parse_port(value: str | None, default: int) -> int:
    """Return the port given on the command line, exiting with status 1 if it is invalid."""
    if value is None:
        return default
    try:
        port = int(value)
    except ValueError:
        port = 0
    if not 1 <= port <= 65535:
        error_console.print(f"[red]Invalid port:[/red] {value}")
        sys.exit(1)
    return port


@click.command()
@click.argument("port", required=False)
@click.pass_obj
def server(obj: dict[str, Any], port: str | None) -> None:
    """Serve MCP over HTTP with Server-Sent Events (default PORT 3000)."""
    from mcp_osgi.tools import build_default_registry
    from mcp_osgi.transports._asgi import serve
    from mcp_osgi.transports.sse import create_sse_app

    config = obj["config"]
    port_number = parse_port(port, config.sse_port)
    app = create_sse_app(build_default_registry(config), config)
    serve(app, config.host, port_number, obj["log_level"])


@click.command()
@click.argument("port", required=False)
@click.pass_obj
def jdkserver(obj: dict[str, Any], port: str | None) -> None:
    """Serve a minimal synchronous HTTP/JSON endpoint (default PORT 8080)."""
    from mcp_osgi.tools import build_default_registry
    from mcp_osgi.transports._asgi import serve
    from mcp_osgi.transports.http import create_http_app

    config = obj["config"]
    port_number = parse_port(port, config.http_port)
    app = create_http_app(build_default_registry(config), config)
    serve(app, config.host, port_number, obj["log_level"])
