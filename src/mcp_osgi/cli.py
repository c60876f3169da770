"""mcp-osgi-server CLI entrypoint."""

from __future__ import annotations

import logging
import sys

import click

from mcp_osgi import __version__
from mcp_osgi.config import ServerConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group(
    invoke_without_command=True,
    context_settings={"token_normalize_func": str.lower},
)
@click.version_option(version=__version__, prog_name="mcp-osgi-server")
@click.option("--host", default="0.0.0.0", show_default=True, help="Bind address for the HTTP transports.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    show_default=True,
    help="Logging level (logs always go to stderr).",
)
@click.option("--trace", is_flag=True, help="Export OpenTelemetry spans to stderr.")
@click.pass_context
def main(ctx: click.Context, host: str, log_level: str, trace: bool) -> None:
    """MCP server for OSGi tools.

    Without a command the server speaks JSON-RPC on stdin/stdout.
    """
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT, stream=sys.stderr)

    if trace:
        from mcp_osgi.cli_commands._output import error_console
        from mcp_osgi.utils.telemetry import configure_telemetry

        try:
            configure_telemetry()
        except ImportError as exc:
            error_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    ctx.obj = {"config": ServerConfig(host=host), "log_level": log_level}

    if ctx.invoked_subcommand is None:
        from mcp_osgi.protocol.dispatcher import ProtocolDispatcher
        from mcp_osgi.tools import build_default_registry
        from mcp_osgi.transports.stdio import run_stdio

        config: ServerConfig = ctx.obj["config"]
        try:
            run_stdio(ProtocolDispatcher(build_default_registry(config), config, transport="stdio"))
        except KeyboardInterrupt:
            pass


# Register subcommands
from mcp_osgi.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
