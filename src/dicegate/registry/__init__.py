"""Tool registry — fixed catalog and argument validation."""

from dicegate.registry.catalog import DICE_TOOLS, build_dice_registry
from dicegate.registry.models import (
    FailureKind,
    ParamSpec,
    ParamType,
    ToolDescriptor,
    ValidationResult,
)
from dicegate.registry.registry import ToolBinding, ToolHandler, ToolRegistry

__all__ = [
    "DICE_TOOLS",
    "FailureKind",
    "ParamSpec",
    "ParamType",
    "ToolBinding",
    "ToolDescriptor",
    "ToolHandler",
    "ToolRegistry",
    "ValidationResult",
    "build_dice_registry",
]
