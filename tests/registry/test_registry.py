"""Tests for ToolRegistry validation and invocation."""

from __future__ import annotations

from typing import Any

import pytest

from dicegate.registry.errors import ToolNotFoundError
from dicegate.registry.models import (
    FailureKind,
    ParamSpec,
    ParamType,
    ToolDescriptor,
)
from dicegate.registry.registry import ToolBinding, ToolRegistry


def _echo(args: dict[str, Any], rng: Any) -> str:
    return repr(sorted(args.items()))


def _registry() -> ToolRegistry:
    descriptor = ToolDescriptor(
        name="probe",
        params=(
            ParamSpec(name="n", type=ParamType.INTEGER, required=True, minimum=1, maximum=5),
            ParamSpec(name="ratio", type=ParamType.NUMBER, minimum=0, maximum=1, default=0.5),
            ParamSpec(name="label", type=ParamType.STRING, default="x"),
            ParamSpec(name="loud", type=ParamType.BOOLEAN),
        ),
    )
    return ToolRegistry([ToolBinding(descriptor, _echo)])


class TestValidate:
    def test_unknown_tool(self) -> None:
        result = _registry().validate("nope", {})
        assert not result.ok
        assert result.kind == FailureKind.TOOL_NOT_FOUND
        assert "nope" in result.reason

    def test_defaults_applied(self) -> None:
        result = _registry().validate("probe", {"n": 3})
        assert result.ok
        assert result.args == {"n": 3, "ratio": 0.5, "label": "x"}

    def test_missing_required_names_parameter(self) -> None:
        result = _registry().validate("probe", {})
        assert not result.ok
        assert result.kind == FailureKind.INVALID_ARGUMENTS
        assert result.parameter == "n"
        assert "'n'" in result.reason

    def test_null_required_is_missing(self) -> None:
        result = _registry().validate("probe", {"n": None})
        assert result.parameter == "n"
        assert "Missing" in result.reason

    def test_none_arguments_treated_as_empty(self) -> None:
        result = _registry().validate("probe", None)
        assert result.parameter == "n"

    def test_non_object_arguments(self) -> None:
        result = _registry().validate("probe", [1, 2])
        assert not result.ok
        assert result.kind == FailureKind.INVALID_ARGUMENTS

    @pytest.mark.parametrize(
        ("args", "parameter"),
        [
            ({"n": "3"}, "n"),
            ({"n": True}, "n"),
            ({"n": 2.5}, "n"),
            ({"n": 2, "ratio": "half"}, "ratio"),
            ({"n": 2, "label": 7}, "label"),
            ({"n": 2, "loud": 1}, "loud"),
        ],
    )
    def test_wrong_type(self, args: dict[str, Any], parameter: str) -> None:
        result = _registry().validate("probe", args)
        assert not result.ok
        assert result.parameter == parameter

    def test_integral_float_accepted_as_integer(self) -> None:
        result = _registry().validate("probe", {"n": 4.0})
        assert result.ok
        assert result.args["n"] == 4
        assert isinstance(result.args["n"], int)

    def test_below_minimum_names_bound(self) -> None:
        result = _registry().validate("probe", {"n": 0})
        assert result.parameter == "n"
        assert ">= 1" in result.reason

    def test_above_maximum_names_bound(self) -> None:
        result = _registry().validate("probe", {"n": 6})
        assert result.parameter == "n"
        assert "<= 5" in result.reason

    def test_bounds_inclusive(self) -> None:
        assert _registry().validate("probe", {"n": 1}).ok
        assert _registry().validate("probe", {"n": 5}).ok

    def test_extra_parameters_ignored(self) -> None:
        result = _registry().validate("probe", {"n": 2, "unexpected": [1]})
        assert result.ok
        assert "unexpected" not in result.args

    def test_validate_does_not_mutate_input(self) -> None:
        raw = {"n": 2}
        _registry().validate("probe", raw)
        assert raw == {"n": 2}


class TestRegistry:
    def test_duplicate_names_rejected(self) -> None:
        descriptor = ToolDescriptor(name="dup")
        with pytest.raises(ValueError, match="dup"):
            ToolRegistry([ToolBinding(descriptor, _echo), ToolBinding(descriptor, _echo)])

    def test_invoke_passes_args_and_rng(self) -> None:
        seen: dict[str, Any] = {}

        def handler(args: dict[str, Any], rng: Any) -> str:
            seen["args"] = args
            seen["rng"] = rng
            return "ok"

        rng = object()
        registry = ToolRegistry([ToolBinding(ToolDescriptor(name="t"), handler)], rng=rng)  # type: ignore[arg-type]
        assert registry.invoke("t", {"a": 1}) == "ok"
        assert seen == {"args": {"a": 1}, "rng": rng}

    def test_invoke_unknown_raises(self) -> None:
        with pytest.raises(ToolNotFoundError, match="missing"):
            _registry().invoke("missing", {})

    def test_invoke_propagates_handler_errors(self) -> None:
        def boom(args: dict[str, Any], rng: Any) -> str:
            raise RuntimeError("kaput")

        registry = ToolRegistry([ToolBinding(ToolDescriptor(name="t"), boom)])
        with pytest.raises(RuntimeError, match="kaput"):
            registry.invoke("t", {})

    def test_contains_and_get(self) -> None:
        registry = _registry()
        assert "probe" in registry
        assert len(registry) == 1
        descriptor = registry.get("probe")
        assert descriptor is not None
        assert descriptor.name == "probe"
        assert registry.get("nope") is None
