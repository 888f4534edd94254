"""TokenBucketLimiter — continuous per-caller token-bucket admission control.

Each caller key owns a bucket holding up to ``capacity`` tokens.  Tokens
refill continuously at ``refill_rate`` per ``interval`` seconds, so there is
no window edge at which a burst of fresh capacity appears.  Call sites charge
different costs against the same bucket, which is why ``cost`` is a
parameter of the check rather than a property of the bucket.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from dicegate.admission.models import (
    AdmissionDecision,
    BucketState,
    FailurePolicy,
    RateLimitConfig,
)
from dicegate.admission.store import BucketStore, InMemoryBucketStore
from dicegate.utils.events import log_event

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def refill(state: BucketState, config: RateLimitConfig, now: float) -> BucketState:
    """Return *state* advanced to *now*, clamped to the bucket capacity.

    A clock that moved backwards is treated as zero elapsed time.
    """
    elapsed = max(0.0, now - state.last_refill_at)
    tokens = state.tokens + config.refill_rate * elapsed / config.interval
    return BucketState(tokens=min(float(config.capacity), tokens), last_refill_at=now)


def seconds_until(tokens: float, cost: int, config: RateLimitConfig) -> float:
    """Seconds of refill needed before *cost* tokens are available."""
    deficit = cost - tokens
    if deficit <= 0:
        return 0.0
    return deficit * config.interval / config.refill_rate


class TokenBucketLimiter:
    """Charge per-caller buckets held in an injected :class:`BucketStore`.

    Usage::

        limiter = TokenBucketLimiter(RateLimitConfig(capacity=10, refill_rate=5))
        decision = await limiter.check_and_charge("203.0.113.7", ActionCost.TOOL_CALL)
        if not decision.allowed:
            ...

    The load → refill → compare → subtract → save sequence runs under a
    per-key lock, so concurrent checks for one caller never spend the same
    tokens twice.  Different keys never contend.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        *,
        store: BucketStore | None = None,
        clock: Clock = time.time,
        failure_policy: FailurePolicy = FailurePolicy.FAIL_OPEN,
    ) -> None:
        self._config = config or RateLimitConfig()
        self._store: BucketStore = store if store is not None else InMemoryBucketStore()
        self._clock = clock
        self._failure_policy = failure_policy
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    @property
    def store(self) -> BucketStore:
        return self._store

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    async def check_and_charge(
        self,
        key: str,
        cost: int,
        *,
        now: float | None = None,
        config: RateLimitConfig | None = None,
    ) -> AdmissionDecision:
        """Refill the bucket for *key*, then try to spend *cost* tokens.

        Refill is persisted even when the charge is denied, so unused
        capacity is never lost.  A denied charge leaves the balance at its
        refilled value.

        Raises:
            ValueError: If *cost* is not a positive integer.
        """
        if isinstance(cost, bool) or not isinstance(cost, int) or cost <= 0:
            msg = f"cost must be a positive integer, got {cost!r}"
            raise ValueError(msg)
        cfg = config or self._config

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            try:
                return await self._charge(key, cost, cfg, now)
            except Exception as exc:
                return self._on_failure(key, cost, cfg, exc)

    async def _charge(
        self,
        key: str,
        cost: int,
        config: RateLimitConfig,
        now: float | None,
    ) -> AdmissionDecision:
        current = self._clock() if now is None else now
        stored = await self._store.load(key)
        if stored is None:
            stored = BucketState(tokens=float(config.capacity), last_refill_at=current)

        state = refill(stored, config, current)
        if state.tokens >= cost:
            state = BucketState(tokens=state.tokens - cost, last_refill_at=current)
            await self._store.save(key, state)
            return AdmissionDecision(allowed=True, remaining=state.tokens)

        await self._store.save(key, state)
        return AdmissionDecision(
            allowed=False,
            remaining=state.tokens,
            retry_after=seconds_until(state.tokens, cost, config),
        )

    def _on_failure(
        self,
        key: str,
        cost: int,
        config: RateLimitConfig,
        exc: Exception,
    ) -> AdmissionDecision:
        """Apply the failure policy to an admission-layer fault."""
        allowed = self._failure_policy == FailurePolicy.FAIL_OPEN
        logger.warning(
            "Admission check failed for key %s (%s: %s); policy %s -> %s",
            key,
            type(exc).__name__,
            exc,
            self._failure_policy.value,
            "allowing" if allowed else "denying",
        )
        log_event(
            "admission_failed_open" if allowed else "admission_failed_closed",
            key=key,
            cost=cost,
            error=str(exc),
        )
        if allowed:
            return AdmissionDecision(allowed=True, remaining=float(config.capacity), failed_open=True)
        return AdmissionDecision(
            allowed=False,
            remaining=0.0,
            retry_after=config.interval,
            failed_open=False,
        )
