"""Random source adapter.

The core only ever asks for uniform integers in inclusive ranges. Any object
with a ``randint(lo, hi)`` method (``random.Random`` or a scripted stand-in)
can back it. Failures of the underlying source surface as RngExhausted.
"""
from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

from .errors import InternalInvariantViolation, RngExhausted

T = TypeVar("T")


class RandomSource:
    def __init__(self, source=None, seed: Optional[int] = None):
        if source is None:
            source = random.Random(seed)
        self._source = source

    @property
    def source(self):
        return self._source

    def randint(self, lo: int, hi: int) -> int:
        if lo > hi:
            raise InternalInvariantViolation(f"empty random range [{lo}, {hi}]")
        try:
            value = self._source.randint(lo, hi)
        except Exception as exc:
            raise RngExhausted(f"random source failed drawing from [{lo}, {hi}]") from exc
        if not (lo <= value <= hi):
            raise RngExhausted(f"random source returned {value!r} outside [{lo}, {hi}]")
        return value

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise InternalInvariantViolation("choice from an empty sequence")
        return items[self.randint(0, len(items) - 1)]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[int]) -> T:
        total = sum(weights)
        if not items or total <= 0:
            raise InternalInvariantViolation("weighted choice needs items with a positive total weight")
        r = self.randint(1, total)
        for item, weight in zip(items, weights):
            r -= weight
            if r <= 0:
                return item
        raise InternalInvariantViolation("weighted choice fell through")

    def odd_in(self, lo: int, hi: int) -> int:
        """Rejection-sample an odd value from the inclusive range."""
        while True:
            value = self.randint(lo, hi)
            if value % 2:
                return value

    def even_in(self, lo: int, hi: int) -> int:
        """Rejection-sample an even value from the inclusive range."""
        while True:
            value = self.randint(lo, hi)
            if value % 2 == 0:
                return value


__all__ = ["RandomSource"]
