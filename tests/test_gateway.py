"""Tests for building a dispatcher from settings."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

from dicegate.admission.models import FailurePolicy
from dicegate.admission.store import InMemoryBucketStore
from dicegate.config.models import GatewaySettings, RateLimitSettings
from dicegate.gateway import build_dispatcher
from dicegate.utils import events

ROLL = json.dumps({"id": 1, "method": "tools/call", "params": {"name": "roll_d6"}})


def test_settings_flow_into_limiter(clock: Any) -> None:
    settings = GatewaySettings(
        rate_limit=RateLimitSettings(capacity=3, refill_rate=1, interval=2.0, tool_call_cost=3)
    )
    store = InMemoryBucketStore()
    dispatcher = build_dispatcher(settings, store=store, clock=clock)

    cfg = dispatcher.limiter.config
    assert (cfg.capacity, cfg.refill_rate, cfg.interval) == (3, 1, 2.0)
    assert dispatcher.limiter.store is store
    assert dispatcher.server_info()["name"] == "dice-roller-mcp"
    assert events._server_name == "dice-roller-mcp"


async def test_tool_call_cost_applied(clock: Any, sequence_random: Any) -> None:
    settings = GatewaySettings(rate_limit=RateLimitSettings(capacity=10, tool_call_cost=4))
    dispatcher = build_dispatcher(settings, rng=sequence_random([1, 2]), clock=clock)

    assert not (await dispatcher.handle(ROLL, "k")).is_error
    assert not (await dispatcher.handle(ROLL, "k")).is_error
    assert (await dispatcher.handle(ROLL, "k")).error.code == 429  # type: ignore[union-attr]


async def test_fail_closed_policy(clock: Any) -> None:
    store = AsyncMock()
    store.load.side_effect = ConnectionError("store offline")
    settings = GatewaySettings(
        rate_limit=RateLimitSettings(failure_policy=FailurePolicy.FAIL_CLOSED)
    )
    dispatcher = build_dispatcher(settings, store=store, clock=clock)

    response = await dispatcher.handle(ROLL, "k")
    assert response.error is not None
    assert response.error.code == 429


async def test_fail_open_policy(clock: Any) -> None:
    store = AsyncMock()
    store.load.side_effect = ConnectionError("store offline")
    dispatcher = build_dispatcher(GatewaySettings(), store=store, clock=clock)

    assert not (await dispatcher.handle(ROLL, "k")).is_error
