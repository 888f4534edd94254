"""Error types for the protocol layer.

Each error carries the JSON-RPC ``code`` it maps to, so the dispatcher can
turn any of them into an error envelope at a single point.
"""

from __future__ import annotations

from typing import Any

from dicegate.protocol.models import ErrorCode


class GatewayError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)


class ParseError(GatewayError):
    """The inbound buffer is not valid JSON."""

    code = ErrorCode.PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__("Parse error", {"detail": detail} if detail else None)


class InvalidRequestError(GatewayError):
    """The inbound JSON is not a request object."""

    code = ErrorCode.INVALID_REQUEST

    def __init__(self, detail: str = "") -> None:
        super().__init__("Invalid Request", {"detail": detail} if detail else None)


class MethodNotFoundError(GatewayError):
    """Unknown method, or unknown tool name within ``tools/call``."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, message: str = "Method not found", data: Any = None) -> None:
        super().__init__(message, data)


class InvalidParamsError(GatewayError):
    """Request parameters or tool arguments violate their declared shape."""

    code = ErrorCode.INVALID_PARAMS

    def __init__(self, reason: str, parameter: str | None = None) -> None:
        self.reason = reason
        self.parameter = parameter
        super().__init__(
            f"Invalid params: {reason}",
            {"parameter": parameter} if parameter else None,
        )


class RateLimitedError(GatewayError):
    """The caller's budget cannot cover the cost of the call."""

    code = ErrorCode.RATE_LIMITED

    def __init__(self, retry_after: float) -> None:
        self.retry_after = retry_after
        super().__init__(
            f"Rate limit exceeded. Retry in {retry_after:.1f}s",
            {"retryAfter": round(retry_after, 3)},
        )


class InternalError(GatewayError):
    """A tool handler failed unexpectedly."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Internal error", {"detail": detail} if detail else None)
