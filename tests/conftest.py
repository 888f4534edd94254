"""Shared fixtures: deterministic random source, clock, and gateway wiring."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

import pytest

from dicegate.admission.limiter import TokenBucketLimiter
from dicegate.admission.models import RateLimitConfig
from dicegate.protocol.dispatcher import GatewayDispatcher
from dicegate.registry.catalog import build_dice_registry


class SequenceRandom:
    """Random source replaying predetermined values.

    Each value must fall inside the ``[a, b]`` range of the call that
    consumes it.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = iter(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        try:
            value = next(self._values)
        except StopIteration:
            raise AssertionError("Not enough mocked random values for this test.") from None
        if not a <= value <= b:
            raise AssertionError(f"Mock value {value} out of range [{a}, {b}]")
        return value


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sequence_random() -> Callable[[Iterable[int]], SequenceRandom]:
    return SequenceRandom


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_dispatcher(clock: FakeClock) -> Callable[..., GatewayDispatcher]:
    """Build a dispatcher over the dice catalog with a frozen clock."""

    def _make(
        *,
        rng: SequenceRandom | None = None,
        capacity: int = 10,
        refill_rate: int = 5,
        interval: float = 10.0,
        cost: int = 5,
    ) -> GatewayDispatcher:
        limiter = TokenBucketLimiter(
            RateLimitConfig(capacity=capacity, refill_rate=refill_rate, interval=interval),
            clock=clock,
        )
        return GatewayDispatcher(build_dice_registry(rng), limiter, tool_call_cost=cost)

    return _make


@pytest.fixture(autouse=True)
def _reset_dicegate_logging() -> Iterator[None]:
    """Undo handler changes made by CLI invocations so caplog keeps working."""
    yield
    for name in ("dicegate", "dicegate.events"):
        logger = logging.getLogger(name)
        logger.handlers = []
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _restore_event_server_name() -> Iterator[None]:
    """Undo ``set_server_name`` calls made by gateway builds so tests stay isolated."""
    from dicegate.utils import events

    saved = events._server_name
    yield
    events.set_server_name(saved)
