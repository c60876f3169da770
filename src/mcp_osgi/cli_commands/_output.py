"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from mcp_osgi.protocol.models import ToolDescriptor  # noqa: TC001

console = Console()
error_console = Console(stderr=True)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Required")
    table.add_column("Description")

    for tool in tools:
        required = tool.input_schema.get("required", [])
        table.add_row(
            tool.name,
            ", ".join(required) or "-",
            _truncate(tool.description),
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
