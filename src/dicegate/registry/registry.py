"""ToolRegistry — fixed tool catalog with schema-bounded argument validation.

The registry is built once from an ordered list of :class:`ToolBinding`
entries and never mutated afterwards, so it is safe to share across
concurrent requests without locking.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from dicegate.dice.handlers import RandomSource
from dicegate.registry.errors import ToolNotFoundError
from dicegate.registry.models import (
    FailureKind,
    ParamSpec,
    ParamType,
    ToolDescriptor,
    ValidationResult,
)

ToolHandler = Callable[[dict[str, Any], RandomSource], str]


@dataclass(frozen=True)
class ToolBinding:
    """A descriptor paired with the callable that renders its result."""

    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Name-keyed, insertion-ordered catalog of tools.

    Usage::

        registry = ToolRegistry(bindings, rng=random.Random(42))
        result = registry.validate("roll_dice", {"sides": 20})
        if result.ok:
            text = registry.invoke("roll_dice", result.args)
    """

    def __init__(
        self,
        bindings: Iterable[ToolBinding],
        *,
        rng: RandomSource | None = None,
    ) -> None:
        self._bindings: dict[str, ToolBinding] = {}
        for binding in bindings:
            if binding.name in self._bindings:
                msg = f"Duplicate tool name: {binding.name}"
                raise ValueError(msg)
            self._bindings[binding.name] = binding
        self._rng: RandomSource = rng if rng is not None else random.Random()

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def list_tools(self) -> list[ToolDescriptor]:
        """Return all descriptors in registration order."""
        return [b.descriptor for b in self._bindings.values()]

    def get(self, name: str) -> ToolDescriptor | None:
        binding = self._bindings.get(name)
        return binding.descriptor if binding else None

    def validate(self, name: str, raw_args: Any) -> ValidationResult:
        """Check *raw_args* against the declared parameters of tool *name*.

        Unknown extra keys are ignored.  Unset optional parameters receive
        their declared default.
        """
        binding = self._bindings.get(name)
        if binding is None:
            return ValidationResult.failure(FailureKind.TOOL_NOT_FOUND, f"Unknown tool: {name}")

        if raw_args is None:
            raw_args = {}
        if not isinstance(raw_args, dict):
            return ValidationResult.failure(
                FailureKind.INVALID_ARGUMENTS,
                "'arguments' must be an object",
            )

        args: dict[str, Any] = {}
        for spec in binding.descriptor.params:
            value = raw_args.get(spec.name)
            if value is None:
                if spec.required:
                    return ValidationResult.failure(
                        FailureKind.INVALID_ARGUMENTS,
                        f"Missing required parameter '{spec.name}'",
                        spec.name,
                    )
                if spec.default is not None:
                    args[spec.name] = spec.default
                continue

            coerced, error = _check_value(spec, value)
            if error:
                return ValidationResult.failure(FailureKind.INVALID_ARGUMENTS, error, spec.name)
            args[spec.name] = coerced

        return ValidationResult.success(args)

    def invoke(self, name: str, args: dict[str, Any]) -> str:
        """Run the handler bound to *name* with already-validated *args*.

        Exceptions raised by the handler propagate to the caller.
        """
        binding = self._bindings.get(name)
        if binding is None:
            raise ToolNotFoundError(name)
        return binding.handler(args, self._rng)


def _check_value(spec: ParamSpec, value: Any) -> tuple[Any, str]:
    """Return ``(coerced, "")`` or ``(None, error message)``."""
    if spec.type == ParamType.BOOLEAN:
        if not isinstance(value, bool):
            return None, f"'{spec.name}' must be a boolean"
        return value, ""

    if spec.type == ParamType.STRING:
        if not isinstance(value, str):
            return None, f"'{spec.name}' must be a string"
        return value, ""

    # Numeric types; bool is an int subclass but never a valid number here.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None, f"'{spec.name}' must be a {spec.type.value}"
    if isinstance(value, float) and not math.isfinite(value):
        return None, f"'{spec.name}' must be a finite {spec.type.value}"
    if spec.type == ParamType.INTEGER:
        if isinstance(value, float):
            if not value.is_integer():
                return None, f"'{spec.name}' must be an integer"
            value = int(value)

    if spec.minimum is not None and value < spec.minimum:
        return None, f"'{spec.name}' must be >= {_fmt(spec.minimum)}, got {value}"
    if spec.maximum is not None and value > spec.maximum:
        return None, f"'{spec.name}' must be <= {_fmt(spec.maximum)}, got {value}"
    return value, ""


def _fmt(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)
