"""``dicegate tools`` — inspect and call tools in-process."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click

from dicegate.cli_commands._output import console, print_error, print_tools_table
from dicegate.config.models import GatewaySettings  # noqa: TC001


@click.group()
def tools() -> None:
    """List and call the dice tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
@click.pass_obj
def list_cmd(settings: GatewaySettings, as_json: bool) -> None:
    """Show the tool catalog."""
    from dicegate.gateway import build_dispatcher

    dispatcher = build_dispatcher(settings)
    catalog = dispatcher.registry.list_tools()
    if as_json:
        console.print_json(json.dumps({"tools": [t.to_wire() for t in catalog]}))
        return
    print_tools_table(catalog)


@tools.command("call")
@click.argument("name")
@click.option(
    "--arg",
    "-a",
    "args",
    multiple=True,
    help="Tool argument as key=value; values are parsed as JSON when possible.",
)
@click.option("--caller-key", default="cli", help="Rate-limit key for this call.")
@click.pass_obj
def call(settings: GatewaySettings, name: str, args: tuple[str, ...], caller_key: str) -> None:
    """Call tool NAME once through the full gateway pipeline."""
    from dicegate.gateway import build_dispatcher
    from dicegate.protocol.models import extract_text

    try:
        arguments = _parse_args(args)
    except click.BadParameter as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise SystemExit(2) from exc

    message = json.dumps(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "tools/call",
            "params": {"name": name, "arguments": arguments},
        }
    )
    dispatcher = build_dispatcher(settings)
    response = asyncio.run(dispatcher.handle(message, caller_key))
    wire = response.to_wire()
    if "error" in wire:
        print_error(wire["error"])
        raise SystemExit(1)
    console.print(extract_text(response), markup=False)


def _parse_args(pairs: tuple[str, ...]) -> dict[str, Any]:
    parsed: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise click.BadParameter(msg)
        try:
            parsed[key] = json.loads(raw)
        except ValueError:
            parsed[key] = raw
    return parsed
