"""Human-readable rendering of dice results."""

from __future__ import annotations

from dicegate.dice.handlers import D20Roll, MultiRoll, RollTier

_TIER_FEEDBACK: dict[RollTier, str] = {
    RollTier.CRITICAL_SUCCESS: "🎉 Critical Success!",
    RollTier.CRITICAL_FAILURE: "💥 Critical Failure!",
    RollTier.STRONG: "✨ Great roll!",
    RollTier.NONE: "",
}


def render_single(sides: int, value: int) -> str:
    return f"🎲 Rolled a {sides}-sided dice: **{value}**"


def render_multiple(result: MultiRoll, sides: int) -> str:
    count = len(result.rolls)
    if count == 1:
        return f"🎲 Rolled 1d{sides}: **{result.total}**"
    rolls = ", ".join(str(r) for r in result.rolls)
    return f"🎲 Rolled {count}d{sides}: {rolls}\n**Total: {result.total}**"


def d20_feedback(tier: RollTier) -> str:
    return _TIER_FEEDBACK[tier]


def render_d20(result: D20Roll) -> str:
    feedback = d20_feedback(result.tier)
    text = f"🎲 d20 roll: **{result.value}**"
    return f"{text} {feedback}" if feedback else text


def render_d6(value: int) -> str:
    return f"🎲 d6 roll: **{value}**"
