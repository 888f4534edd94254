"""JSON-RPC 2.0 messages and MCP tool payloads.

Implements the message format used by the Model Context Protocol for tool
discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"


class ErrorCode(IntEnum):
    """Error codes carried in error envelopes.

    Negative values come from the JSON-RPC reserved range.  ``RATE_LIMITED``
    sits outside it.
    """

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    RATE_LIMITED = 429


class Method:
    """Method names the gateway understands."""

    INITIALIZE = "initialize"
    PING = "ping"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """An inbound JSON-RPC message.

    ``id`` is an opaque correlation token echoed verbatim in the response.
    """

    model_config = {"frozen": True}

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    method: str
    params: Any = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """An outbound envelope: exactly one of ``result`` or ``error`` is set."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: Any, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: Any,
        code: int,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message, data=data))

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Serialise to the JSON-RPC shape, keeping ``id`` even when ``None``."""
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            error: dict[str, Any] = {"code": self.error.code, "message": self.error.message}
            if self.error.data is not None:
                error["data"] = self.error.data
            wire["error"] = error
        else:
            wire["result"] = self.result if self.result is not None else {}
        return wire


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


def text_content(text: str) -> dict[str, Any]:
    """Build a ``tools/call`` result carrying a single text block."""
    return {"content": [{"type": "text", "text": text}]}


def extract_text(response: JsonRpcResponse) -> str:
    """Join the text blocks of a ``tools/call`` result."""
    if response.result is None:
        return ""
    parts = [
        str(item.get("text", ""))
        for item in response.result.get("content", [])
        if item.get("type") == "text"
    ]
    return "\n".join(parts)
