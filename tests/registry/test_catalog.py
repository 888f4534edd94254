"""Tests for the dice tool catalog."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from dicegate.dice.handlers import RandomSource
from dicegate.registry.catalog import build_dice_registry
from dicegate.registry.models import FailureKind


class TestCatalog:
    def test_order_is_stable(self) -> None:
        registry = build_dice_registry()
        names = [t.name for t in registry.list_tools()]
        assert names == ["roll_dice", "roll_multiple_dice", "roll_d20", "roll_d6"]
        assert [t.name for t in registry.list_tools()] == names

    def test_input_schemas(self) -> None:
        registry = build_dice_registry()
        wire = {t.name: t.to_wire()["inputSchema"] for t in registry.list_tools()}

        sides = wire["roll_dice"]["properties"]["sides"]
        assert sides["type"] == "integer"
        assert (sides["minimum"], sides["maximum"], sides["default"]) == (2, 100, 6)
        assert "required" not in wire["roll_dice"]

        multi = wire["roll_multiple_dice"]
        assert multi["required"] == ["count"]
        assert (multi["properties"]["count"]["minimum"], multi["properties"]["count"]["maximum"]) == (1, 20)
        assert multi["properties"]["sides"]["default"] == 6

        assert wire["roll_d20"] == {"type": "object", "properties": {}}
        assert wire["roll_d6"] == {"type": "object", "properties": {}}

    def test_roll_dice_defaults_to_six_sides(
        self, sequence_random: Callable[[Iterable[int]], RandomSource]
    ) -> None:
        rng = sequence_random([3])
        registry = build_dice_registry(rng)
        result = registry.validate("roll_dice", {})
        assert result.args == {"sides": 6}
        assert registry.invoke("roll_dice", result.args) == "🎲 Rolled a 6-sided dice: **3**"

    @pytest.mark.parametrize("sides", [0, 1, 101])
    def test_roll_dice_sides_bounds(self, sides: int) -> None:
        result = build_dice_registry().validate("roll_dice", {"sides": sides})
        assert result.kind == FailureKind.INVALID_ARGUMENTS
        assert result.parameter == "sides"

    def test_roll_multiple_requires_count(self) -> None:
        result = build_dice_registry().validate("roll_multiple_dice", {"sides": 6})
        assert result.parameter == "count"

    def test_roll_multiple_renders_total(
        self, sequence_random: Callable[[Iterable[int]], RandomSource]
    ) -> None:
        registry = build_dice_registry(sequence_random([2, 5]))
        args = registry.validate("roll_multiple_dice", {"count": 2, "sides": 8}).args
        assert registry.invoke("roll_multiple_dice", args) == "🎲 Rolled 2d8: 2, 5\n**Total: 7**"

    def test_roll_d20_feedback(
        self, sequence_random: Callable[[Iterable[int]], RandomSource]
    ) -> None:
        registry = build_dice_registry(sequence_random([20]))
        assert registry.invoke("roll_d20", {}) == "🎲 d20 roll: **20** 🎉 Critical Success!"

    def test_roll_d6(self, sequence_random: Callable[[Iterable[int]], RandomSource]) -> None:
        registry = build_dice_registry(sequence_random([6]))
        assert registry.invoke("roll_d6", {}) == "🎲 d6 roll: **6**"
