"""Tests for admission models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dicegate.admission.models import ActionCost, BucketState, RateLimitConfig


class TestRateLimitConfig:
    def test_defaults(self) -> None:
        cfg = RateLimitConfig()
        assert (cfg.capacity, cfg.refill_rate, cfg.interval) == (10, 5, 10.0)

    @pytest.mark.parametrize("field", ["capacity", "refill_rate", "interval"])
    def test_rejects_non_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            RateLimitConfig(**{field: 0})

    def test_frozen(self) -> None:
        cfg = RateLimitConfig()
        with pytest.raises(ValidationError):
            cfg.capacity = 20  # type: ignore[misc]


class TestBucketState:
    def test_negative_tokens_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BucketState(tokens=-0.1, last_refill_at=0.0)


class TestActionCost:
    def test_presets(self) -> None:
        assert ActionCost.TOOL_CALL == 5
        assert ActionCost.NEWSLETTER == 5
        assert ActionCost.PROJECT == 5
        assert ActionCost.DATABASE == 2
        assert ActionCost.ADMIN == 10

    def test_tool_call_cheaper_than_admin(self) -> None:
        assert ActionCost.TOOL_CALL < ActionCost.ADMIN
