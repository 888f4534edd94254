"""Settings loading from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dicegate.config.errors import ConfigError
from dicegate.config.models import GatewaySettings


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`GatewaySettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> GatewaySettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            return GatewaySettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_settings(path: str | Path | None = None) -> GatewaySettings:
    """Return settings from *path*, or the defaults when no path is given."""
    if path is None:
        return GatewaySettings()
    return SettingsLoader(Path(path)).load()
