"""Shared CLI output formatters."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

from dicegate.registry.models import ToolDescriptor  # noqa: TC001

console = Console()


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print the tool catalog as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Parameters")
    table.add_column("Description")

    for tool in tools:
        table.add_row(tool.name, _params_summary(tool) or "-", _truncate(tool.description))

    console.print(table)


def print_error(error: dict[str, Any]) -> None:
    """Print a JSON-RPC error object."""
    console.print(f"[red]Error {error.get('code')}:[/red] {error.get('message')}")
    data = error.get("data")
    if data:
        console.print(f"  {data}")


def _params_summary(tool: ToolDescriptor) -> str:
    parts: list[str] = []
    for p in tool.params:
        bounds = ""
        if p.minimum is not None or p.maximum is not None:
            bounds = f" [{p.minimum}-{p.maximum}]"
        marker = "*" if p.required else ""
        default = f" = {p.default}" if p.default is not None else ""
        parts.append(f"{p.name}{marker}: {p.type.value}{bounds}{default}")
    return ", ".join(parts)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
