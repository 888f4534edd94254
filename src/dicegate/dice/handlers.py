"""Dice domain handlers — pure roll functions.

Every handler draws from an injected :class:`RandomSource` so tests can pin
exact sequences.  Handlers never clamp: out-of-range input raises
:class:`ValueError`, even though the registry bounds-checks first.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

MIN_SIDES = 2
MAX_SIDES = 100
MIN_COUNT = 1
MAX_COUNT = 20

D20_STRONG_THRESHOLD = 15


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer source; :class:`random.Random` satisfies it."""

    def randint(self, a: int, b: int) -> int: ...


class RollTier(str, Enum):
    """RPG-style quality band of a d20 roll."""

    CRITICAL_SUCCESS = "critical_success"
    CRITICAL_FAILURE = "critical_failure"
    STRONG = "strong"
    NONE = "none"


class MultiRoll(BaseModel):
    """Result of rolling several identical dice."""

    rolls: list[int]
    total: int


class D20Roll(BaseModel):
    """A d20 value with its tier."""

    value: int
    tier: RollTier


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an integer, got {value!r}"
        raise ValueError(msg)
    if not low <= value <= high:
        msg = f"Dice {name} must be between {low} and {high}, got {value}"
        raise ValueError(msg)


def roll_one(sides: int, rng: RandomSource) -> int:
    """Roll a single die with *sides* faces."""
    _check_range("sides", sides, MIN_SIDES, MAX_SIDES)
    return rng.randint(1, sides)


def roll_many(count: int, sides: int, rng: RandomSource) -> MultiRoll:
    """Roll *count* dice; rolls keep the order they were drawn in."""
    _check_range("count", count, MIN_COUNT, MAX_COUNT)
    _check_range("sides", sides, MIN_SIDES, MAX_SIDES)
    rolls = [rng.randint(1, sides) for _ in range(count)]
    return MultiRoll(rolls=rolls, total=sum(rolls))


def d20_tier(value: int) -> RollTier:
    """Classify a d20 value.

    20 is a critical success, 1 a critical failure, 15-19 strong.
    """
    if value == 20:
        return RollTier.CRITICAL_SUCCESS
    if value == 1:
        return RollTier.CRITICAL_FAILURE
    if value >= D20_STRONG_THRESHOLD:
        return RollTier.STRONG
    return RollTier.NONE


def roll_d20(rng: RandomSource) -> D20Roll:
    value = roll_one(20, rng)
    return D20Roll(value=value, tier=d20_tier(value))


def roll_d6(rng: RandomSource) -> int:
    return roll_one(6, rng)
