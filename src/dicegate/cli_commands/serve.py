"""``dicegate serve`` — run the gateway over stdio or HTTP."""

from __future__ import annotations

import asyncio

import click

from dicegate.config.models import GatewaySettings  # noqa: TC001
from dicegate.utils.events import log_event
from dicegate.utils.logging_setup import normalize_level
from dicegate.utils.telemetry import configure_from_settings


@click.group()
def serve() -> None:
    """Serve the dice tools over a transport."""


@serve.command("stdio")
@click.option("--caller-key", default=None, help="Rate-limit key for the stdio peer.")
@click.pass_obj
def stdio(settings: GatewaySettings, caller_key: str | None) -> None:
    """Read one JSON-RPC message per line from stdin, answer on stdout."""
    from dicegate.gateway import build_dispatcher
    from dicegate.transport.stdio import StdioServer

    configure_from_settings(settings.telemetry, service_name=settings.name)
    dispatcher = build_dispatcher(settings)
    log_event("server_starting", transport="stdio")
    server = StdioServer(dispatcher, caller_key=caller_key or settings.stdio_caller_key)
    asyncio.run(server.serve())


@serve.command("http")
@click.option("--host", default=None, help="Bind address (overrides settings).")
@click.option("--port", type=int, default=None, help="Bind port (overrides settings).")
@click.pass_obj
def http(settings: GatewaySettings, host: str | None, port: int | None) -> None:
    """Accept JSON-RPC messages as HTTP POST bodies."""
    from dicegate.gateway import build_dispatcher
    from dicegate.transport.http import serve_http

    configure_from_settings(settings.telemetry, service_name=settings.name)
    dispatcher = build_dispatcher(settings)
    log_event("server_starting", transport="http")
    serve_http(
        dispatcher,
        host=host or settings.http.host,
        port=port or settings.http.port,
        path=settings.http.path,
        log_level=normalize_level(settings.log_level),
    )

