"""Protocol layer — JSON-RPC 2.0 envelopes and the gateway dispatcher."""

from dicegate.protocol.dispatcher import GatewayDispatcher
from dicegate.protocol.errors import (
    GatewayError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RateLimitedError,
)
from dicegate.protocol.models import (
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    Method,
)

__all__ = [
    "ErrorCode",
    "GatewayDispatcher",
    "GatewayError",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Method",
    "MethodNotFoundError",
    "ParseError",
    "RateLimitedError",
]
