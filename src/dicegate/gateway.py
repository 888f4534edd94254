"""Wiring of settings into a ready-to-serve :class:`GatewayDispatcher`."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from dicegate.admission.limiter import TokenBucketLimiter
from dicegate.protocol.dispatcher import GatewayDispatcher
from dicegate.registry.catalog import build_dice_registry
from dicegate.utils.events import set_server_name

if TYPE_CHECKING:
    from dicegate.admission.limiter import Clock
    from dicegate.admission.store import BucketStore
    from dicegate.config.models import GatewaySettings
    from dicegate.dice.handlers import RandomSource


def build_dispatcher(
    settings: GatewaySettings,
    *,
    rng: RandomSource | None = None,
    store: BucketStore | None = None,
    clock: Clock | None = None,
) -> GatewayDispatcher:
    """Build the dice registry, the limiter and the dispatcher from *settings*.

    *rng*, *store* and *clock* override the defaults, mainly for tests.
    """
    rate = settings.rate_limit
    limiter = TokenBucketLimiter(
        rate.bucket_config(),
        store=store,
        clock=clock if clock is not None else time.time,
        failure_policy=rate.failure_policy,
    )
    set_server_name(settings.name)
    return GatewayDispatcher(
        build_dice_registry(rng),
        limiter,
        tool_call_cost=rate.tool_call_cost,
        server_name=settings.name,
        server_version=settings.version,
    )
