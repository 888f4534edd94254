"""Transports — stdio line framing and HTTP request/response framing."""

from dicegate.transport.http import client_key, create_app, serve_http
from dicegate.transport.stdio import StdioServer

__all__ = [
    "StdioServer",
    "client_key",
    "create_app",
    "serve_http",
]
