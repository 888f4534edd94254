"""Pydantic models for the gateway settings file."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from dicegate.admission.models import ActionCost, FailurePolicy, RateLimitConfig


class RateLimitSettings(BaseModel):
    """Per-caller token bucket shared by every call site."""

    capacity: int = Field(default=10, gt=0)
    refill_rate: int = Field(default=5, gt=0)
    interval: float = Field(default=10.0, gt=0)
    tool_call_cost: int = Field(default=int(ActionCost.TOOL_CALL), gt=0)
    failure_policy: FailurePolicy = FailurePolicy.FAIL_OPEN

    def bucket_config(self) -> RateLimitConfig:
        return RateLimitConfig(
            capacity=self.capacity,
            refill_rate=self.refill_rate,
            interval=self.interval,
        )


class HttpSettings(BaseModel):
    """HTTP transport options."""

    host: str = "127.0.0.1"
    port: int = Field(default=3000, gt=0, lt=65536)
    path: str = "/api/mcp"

    @field_validator("path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            msg = "http.path must start with '/'"
            raise ValueError(msg)
        return value


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = False
    otlp_endpoint: str | None = None


class GatewaySettings(BaseModel):
    """Top-level settings; every field has a default so no file is required."""

    name: str = "dice-roller-mcp"
    version: str = "1.0.0"
    stdio_caller_key: str = "stdio"
    log_level: str = "INFO"
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)
