"""``tools`` — inspect and invoke the built-in tools without a client."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

import click

from mcp_osgi.cli_commands._output import console, error_console, print_tools_table


@click.group()
def tools() -> None:
    """Inspect and invoke the built-in tools."""


@tools.command("list")
@click.pass_obj
def list_tools(obj: dict[str, Any]) -> None:
    """List the registered tools."""
    from mcp_osgi.tools import build_default_registry

    print_tools_table(build_default_registry(obj["config"]).list())


@tools.command("call")
@click.argument("name")
@click.option("--arg", "-a", "args", multiple=True, help="Tool argument as key=value (repeatable).")
@click.pass_obj
def call_tool(obj: dict[str, Any], name: str, args: tuple[str, ...]) -> None:
    """Invoke tool NAME locally and print its text output."""
    from mcp_osgi.protocol.errors import UnknownToolError
    from mcp_osgi.tools import build_default_registry

    arguments: dict[str, Any] = {}
    for item in args:
        key, sep, value = item.partition("=")
        if not sep or not key:
            error_console.print(f"[red]Invalid argument:[/red] {item} (expected key=value)")
            sys.exit(1)
        arguments[key] = value

    registry = build_default_registry(obj["config"])
    try:
        result = asyncio.run(registry.invoke(name, arguments))
    except UnknownToolError as exc:
        error_console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    console.print(result.text, markup=False, highlight=False, soft_wrap=True)
    if result.is_error:
        sys.exit(1)
