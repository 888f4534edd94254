"""The dice tool catalog served by the gateway."""

from __future__ import annotations

from typing import Any

from dicegate.dice import handlers, render
from dicegate.dice.handlers import RandomSource
from dicegate.registry.models import ParamSpec, ParamType, ToolDescriptor
from dicegate.registry.registry import ToolBinding, ToolRegistry

_SIDES = ParamSpec(
    name="sides",
    type=ParamType.INTEGER,
    description="Number of sides on the dice (2-100)",
    minimum=handlers.MIN_SIDES,
    maximum=handlers.MAX_SIDES,
    default=6,
)

_COUNT = ParamSpec(
    name="count",
    type=ParamType.INTEGER,
    description="Number of dice to roll (1-20)",
    required=True,
    minimum=handlers.MIN_COUNT,
    maximum=handlers.MAX_COUNT,
)

ROLL_DICE = ToolDescriptor(
    name="roll_dice",
    description="Roll a single dice with specified number of sides (default: 6-sided)",
    params=(_SIDES,),
)

ROLL_MULTIPLE_DICE = ToolDescriptor(
    name="roll_multiple_dice",
    description="Roll multiple dice at once and get the total",
    params=(
        _COUNT,
        _SIDES.model_copy(update={"description": "Number of sides on each dice (2-100)"}),
    ),
)

ROLL_D20 = ToolDescriptor(
    name="roll_d20",
    description="Roll a 20-sided dice (d20) with special RPG feedback for critical hits/failures",
)

ROLL_D6 = ToolDescriptor(
    name="roll_d6",
    description="Roll a standard 6-sided dice",
)


def _roll_dice(args: dict[str, Any], rng: RandomSource) -> str:
    sides: int = args["sides"]
    return render.render_single(sides, handlers.roll_one(sides, rng))


def _roll_multiple_dice(args: dict[str, Any], rng: RandomSource) -> str:
    sides: int = args["sides"]
    return render.render_multiple(handlers.roll_many(args["count"], sides, rng), sides)


def _roll_d20(args: dict[str, Any], rng: RandomSource) -> str:
    return render.render_d20(handlers.roll_d20(rng))


def _roll_d6(args: dict[str, Any], rng: RandomSource) -> str:
    return render.render_d6(handlers.roll_d6(rng))


DICE_TOOLS: tuple[ToolBinding, ...] = (
    ToolBinding(ROLL_DICE, _roll_dice),
    ToolBinding(ROLL_MULTIPLE_DICE, _roll_multiple_dice),
    ToolBinding(ROLL_D20, _roll_d20),
    ToolBinding(ROLL_D6, _roll_d6),
)


def build_dice_registry(rng: RandomSource | None = None) -> ToolRegistry:
    """Return a registry holding the four dice tools in catalog order."""
    return ToolRegistry(DICE_TOOLS, rng=rng)
