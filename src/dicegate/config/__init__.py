"""Gateway configuration — settings models and YAML loading."""

from dicegate.config.errors import ConfigError
from dicegate.config.loader import SettingsLoader, load_settings
from dicegate.config.models import (
    GatewaySettings,
    HttpSettings,
    RateLimitSettings,
    TelemetrySettings,
)

__all__ = [
    "ConfigError",
    "GatewaySettings",
    "HttpSettings",
    "RateLimitSettings",
    "SettingsLoader",
    "TelemetrySettings",
    "load_settings",
]
