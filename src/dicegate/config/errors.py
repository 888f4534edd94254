"""Configuration error types."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when a settings file fails parsing or validation."""
