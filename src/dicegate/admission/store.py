"""Bucket persistence backends.

:class:`BucketStore` defines the async storage protocol used by the limiter.
:class:`InMemoryBucketStore` provides a dict-based implementation suitable
for tests and single-process deployments.

Buckets are never evicted: the map grows with the number of distinct caller
keys seen during the process lifetime.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dicegate.admission.models import BucketState


@runtime_checkable
class BucketStore(Protocol):
    """Async persistence protocol for per-caller :class:`BucketState`."""

    async def load(self, key: str) -> BucketState | None:
        """Load the bucket for *key*, or ``None`` if it has never been seen."""
        ...

    async def save(self, key: str, state: BucketState) -> None:
        """Persist the bucket under *key* (upsert semantics)."""
        ...


class InMemoryBucketStore:
    """Dict-backed :class:`BucketStore` implementation."""

    def __init__(self) -> None:
        self._buckets: dict[str, BucketState] = {}

    async def load(self, key: str) -> BucketState | None:
        state = self._buckets.get(key)
        if state is None:
            return None
        return state.model_copy()

    async def save(self, key: str, state: BucketState) -> None:
        self._buckets[key] = state.model_copy()

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, key: object) -> bool:
        return key in self._buckets
