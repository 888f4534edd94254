"""Dice domain — pure roll handlers and their text rendering."""

from dicegate.dice.handlers import (
    D20Roll,
    MultiRoll,
    RandomSource,
    RollTier,
    d20_tier,
    roll_d6,
    roll_d20,
    roll_many,
    roll_one,
)

__all__ = [
    "D20Roll",
    "MultiRoll",
    "RandomSource",
    "RollTier",
    "d20_tier",
    "roll_d6",
    "roll_d20",
    "roll_many",
    "roll_one",
]
