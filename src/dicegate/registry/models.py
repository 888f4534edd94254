"""Registry models — declarative tool descriptors and validation results."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ParamType(str, Enum):
    """Primitive JSON types a tool parameter may declare."""

    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"


class ParamSpec(BaseModel):
    """Declared shape of a single tool parameter."""

    model_config = {"frozen": True}

    name: str
    type: ParamType
    description: str = ""
    required: bool = False
    minimum: int | float | None = None
    maximum: int | float | None = None
    default: Any = None

    def json_schema(self) -> dict[str, Any]:
        """Render this parameter as a JSON Schema property."""
        schema: dict[str, Any] = {"type": self.type.value}
        if self.description:
            schema["description"] = self.description
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.default is not None:
            schema["default"] = self.default
        return schema


class ToolDescriptor(BaseModel):
    """A catalog entry as exposed by ``tools/list``."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    params: tuple[ParamSpec, ...] = ()

    def input_schema(self) -> dict[str, Any]:
        """Build the JSON Schema object describing this tool's arguments."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.params},
        }
        required = [p.name for p in self.params if p.required]
        if required:
            schema["required"] = required
        return schema

    def to_wire(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


class FailureKind(str, Enum):
    """Why validation rejected a call; mapped to distinct protocol errors."""

    TOOL_NOT_FOUND = "tool_not_found"
    INVALID_ARGUMENTS = "invalid_arguments"


class ValidationResult(BaseModel):
    """Discriminated outcome of :meth:`ToolRegistry.validate`."""

    ok: bool
    args: dict[str, Any] = Field(default_factory=dict)
    kind: FailureKind | None = None
    reason: str = ""
    parameter: str | None = None

    @classmethod
    def success(cls, args: dict[str, Any]) -> ValidationResult:
        return cls(ok=True, args=args)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        reason: str,
        parameter: str | None = None,
    ) -> ValidationResult:
        return cls(ok=False, kind=kind, reason=reason, parameter=parameter)
