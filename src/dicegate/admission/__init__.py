"""Admission control — per-caller token buckets."""

from dicegate.admission.limiter import TokenBucketLimiter, refill, seconds_until
from dicegate.admission.models import (
    ActionCost,
    AdmissionDecision,
    BucketState,
    FailurePolicy,
    RateLimitConfig,
)
from dicegate.admission.store import BucketStore, InMemoryBucketStore

__all__ = [
    "ActionCost",
    "AdmissionDecision",
    "BucketState",
    "BucketStore",
    "FailurePolicy",
    "InMemoryBucketStore",
    "RateLimitConfig",
    "TokenBucketLimiter",
    "refill",
    "seconds_until",
]
