"""Data models for the admission-control subsystem."""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, Field


class FailurePolicy(str, Enum):
    """What the limiter decides when its clock or store is unavailable."""

    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"


class ActionCost(IntEnum):
    """Token cost charged per operation against the shared per-caller bucket.

    With the default bucket (capacity 10, refill 5 per 10s) a cost of 5
    allows two operations per interval and a cost of 10 allows one.
    """

    TOOL_CALL = 5
    NEWSLETTER = 5
    PROJECT = 5
    DATABASE = 2
    ADMIN = 10


class RateLimitConfig(BaseModel):
    """Bucket-level constants shared by every call site charging a key."""

    model_config = {"frozen": True}

    capacity: int = Field(default=10, gt=0, description="Maximum tokens a bucket can hold.")
    refill_rate: int = Field(default=5, gt=0, description="Tokens added per interval.")
    interval: float = Field(default=10.0, gt=0, description="Refill interval in seconds.")


class BucketState(BaseModel):
    """Stored balance of a single caller's bucket."""

    tokens: float = Field(..., ge=0)
    last_refill_at: float


class AdmissionDecision(BaseModel):
    """Outcome of a single admission check."""

    allowed: bool
    remaining: float = Field(description="Token balance after the check.")
    retry_after: float = Field(
        default=0.0,
        description="Seconds until the requested cost becomes affordable (0 when allowed).",
    )
    failed_open: bool = Field(
        default=False,
        description="True when the decision came from the failure policy, not the bucket.",
    )
