"""GatewayDispatcher — turns one raw JSON-RPC message into one envelope.

Pipeline for ``tools/call``::

    parse -> classify -> extract name -> charge bucket -> validate -> invoke

The bucket is charged before arguments are validated: a caller who is out of
tokens gets the rate-limit error whatever the arguments look like.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from dicegate.admission.models import ActionCost
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
    PROTOCOL_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
    Method,
    text_content,
)
from dicegate.registry.models import FailureKind
from dicegate.utils.events import log_event
from dicegate.utils.telemetry import (
    ATTR_ADMISSION_ALLOWED,
    ATTR_ADMISSION_REMAINING,
    ATTR_CALLER,
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from dicegate.admission.limiter import TokenBucketLimiter
    from dicegate.registry.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class GatewayDispatcher:
    """Stateless per message: every call to :meth:`handle` is independent.

    Usage::

        dispatcher = GatewayDispatcher(build_dice_registry(), TokenBucketLimiter())
        response = await dispatcher.handle(b'{"id": 1, "method": "tools/list"}', "10.0.0.1")
        wire = response.to_wire()
    """

    def __init__(
        self,
        registry: ToolRegistry,
        limiter: TokenBucketLimiter,
        *,
        tool_call_cost: int = ActionCost.TOOL_CALL,
        server_name: str = "dicegate",
        server_version: str = "0.1.0",
    ) -> None:
        self._registry = registry
        self._limiter = limiter
        self._tool_call_cost = int(tool_call_cost)
        self._server_name = server_name
        self._server_version = server_version

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def limiter(self) -> TokenBucketLimiter:
        return self._limiter

    def server_info(self) -> dict[str, Any]:
        """Describe the server and its catalog (served on HTTP ``GET``)."""
        return {
            "name": self._server_name,
            "version": self._server_version,
            "description": "A Model Context Protocol server for rolling dice",
            "tools": [
                {"name": t.name, "description": t.description}
                for t in self._registry.list_tools()
            ],
        }

    async def handle(self, raw: bytes | str, caller_key: str) -> JsonRpcResponse:
        """Process one inbound message for *caller_key*.

        Never raises: every failure, including handler faults, becomes an
        error envelope.
        """
        with _tracer.start_as_current_span("dicegate.dispatch") as span:
            span.set_attribute(ATTR_CALLER, caller_key)
            request_id: Any = None
            try:
                payload = self._decode(raw)
                request_id = payload.get("id")
                if request_id is not None:
                    span.set_attribute(ATTR_REQUEST_ID, str(request_id))
                request = self._to_request(payload)
                span.set_attribute(ATTR_METHOD, request.method)
                result = await self._route(request, caller_key, span)
            except GatewayError as exc:
                span.set_attribute(ATTR_ERROR_CODE, int(exc.code))
                return JsonRpcResponse.failure(request_id, int(exc.code), exc.message, exc.data)
            return JsonRpcResponse.success(request_id, result)

    # -- parsing ------------------------------------------------------------

    @staticmethod
    def _decode(raw: bytes | str) -> dict[str, Any]:
        try:
            payload: Any = json.loads(raw, parse_constant=_reject_constant)
        except RecursionError as exc:
            raise ParseError("nesting too deep") from exc
        except ValueError as exc:
            raise ParseError(str(exc)) from exc
        if not isinstance(payload, dict):
            raise InvalidRequestError("request must be a JSON object")
        return payload

    @staticmethod
    def _to_request(payload: dict[str, Any]) -> JsonRpcRequest:
        method = payload.get("method")
        if not isinstance(method, str):
            raise MethodNotFoundError(data={"method": method})
        return JsonRpcRequest(
            jsonrpc=str(payload.get("jsonrpc", "2.0")),
            id=payload.get("id"),
            method=method,
            params=payload.get("params"),
        )

    # -- routing ------------------------------------------------------------

    async def _route(self, request: JsonRpcRequest, caller_key: str, span: Span) -> dict[str, Any]:
        if request.method == Method.TOOLS_LIST:
            return self._list_tools()
        if request.method == Method.TOOLS_CALL:
            return await self._call_tool(request.params, caller_key, span)
        if request.method == Method.INITIALIZE:
            return self._initialize()
        if request.method == Method.PING:
            return {}
        raise MethodNotFoundError(data={"method": request.method})

    def _initialize(self) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": self._server_name, "version": self._server_version},
        }

    def _list_tools(self) -> dict[str, Any]:
        tools = [t.to_wire() for t in self._registry.list_tools()]
        log_event("tools_listed", toolCount=len(tools))
        return {"tools": tools}

    async def _call_tool(self, params: Any, caller_key: str, span: Span) -> dict[str, Any]:
        if not isinstance(params, dict):
            raise InvalidParamsError("'params' must be an object", "params")
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParamsError("missing tool name", "name")
        span.set_attribute(ATTR_TOOL_NAME, name)

        decision = await self._limiter.check_and_charge(caller_key, self._tool_call_cost)
        span.set_attribute(ATTR_ADMISSION_ALLOWED, decision.allowed)
        span.set_attribute(ATTR_ADMISSION_REMAINING, decision.remaining)
        if not decision.allowed:
            log_event("rate_limited", tool=name, caller=caller_key, retryAfter=decision.retry_after)
            raise RateLimitedError(decision.retry_after)

        validation = self._registry.validate(name, params.get("arguments"))
        if not validation.ok:
            if validation.kind == FailureKind.TOOL_NOT_FOUND:
                raise MethodNotFoundError(f"Unknown tool: {name}", {"tool": name})
            raise InvalidParamsError(validation.reason, validation.parameter)

        try:
            text = self._registry.invoke(name, validation.args)
        except Exception as exc:
            logger.exception("Tool %s failed", name)
            log_event("tool_error", level=logging.ERROR, tool=name, error=str(exc))
            raise InternalError(str(exc)) from exc

        log_event("tool_called", tool=name, caller=caller_key)
        return text_content(text)


def _reject_constant(name: str) -> Any:
    """``NaN`` and ``Infinity`` are not JSON; refuse them like any other bad token."""
    msg = f"invalid JSON constant {name}"
    raise ValueError(msg)
