"""HTTP transport — one JSON-RPC message per ``POST`` body.

``GET`` on the same path returns a server description.  The caller key is
the originating client address, taken from proxy headers when present.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route

from dicegate.protocol.models import ErrorCode

if TYPE_CHECKING:
    from starlette.requests import Request

    from dicegate.protocol.dispatcher import GatewayDispatcher

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_IP = "127.0.0.1"


def client_key(request: Request) -> str:
    """Best-effort client IP used as the rate-limit key.

    Checked in order: ``x-forwarded-for`` (first hop), ``x-real-ip``,
    ``cf-connecting-ip``, the socket peer, then ``127.0.0.1``.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    for header in ("x-real-ip", "cf-connecting-ip"):
        value = request.headers.get(header)
        if value:
            return value.strip()

    if request.client is not None and request.client.host:
        return request.client.host
    return DEFAULT_CLIENT_IP


def create_app(dispatcher: GatewayDispatcher, *, path: str = "/api/mcp") -> Starlette:
    """Build the Starlette application serving *dispatcher* at *path*."""

    async def post(request: Request) -> JSONResponse:
        body = await request.body()
        response = await dispatcher.handle(body, client_key(request))
        status = 200
        if response.error is not None and response.error.code == ErrorCode.PARSE_ERROR:
            status = 400
        return JSONResponse(response.to_wire(), status_code=status)

    async def get(request: Request) -> JSONResponse:
        return JSONResponse(dispatcher.server_info())

    return Starlette(
        routes=[
            Route(path, post, methods=["POST"]),
            Route(path, get, methods=["GET"]),
        ]
    )


def serve_http(
    dispatcher: GatewayDispatcher,
    *,
    host: str = "127.0.0.1",
    port: int = 3000,
    path: str = "/api/mcp",
    log_level: str = "info",
) -> None:
    """Run the app under uvicorn until interrupted."""
    import uvicorn

    logger.info("Serving on http://%s:%d%s", host, port, path)
    uvicorn.run(create_app(dispatcher, path=path), host=host, port=port, log_level=log_level.lower())
