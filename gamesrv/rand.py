"""Random helpers: weighted picking, draws without repetition, ranges, ids."""

from __future__ import annotations

import random
import uuid
from typing import Any

MAX_RATE = 10000
_UINT32_MAX = 0xFFFFFFFF


class WeightedPicker:
    """Picks values at random with probability proportional to their rate."""

    def __init__(self) -> None:
        self._entries: list[tuple[int, Any]] = []
        self._total = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def total(self) -> int:
        """Sum of all rates."""
        return self._total

    def valid(self) -> bool:
        """True if there is anything with a positive weight to pick."""
        return bool(self._entries) and self._total > 0

    def clone(self) -> WeightedPicker:
        """Return an independent copy."""
        other = WeightedPicker()
        other._entries = list(self._entries)
        other._total = self._total
        return other

    def add(self, rate: int, value: Any) -> None:
        """Add ``value`` with weight ``rate``."""
        if not 0 <= rate <= _UINT32_MAX:
            raise ValueError(f"rate out of range: {rate}")
        self._entries.append((rate, value))
        self._total += rate

    def _pick_index(self) -> int:
        if self._total <= 0:
            raise ValueError("no weighted entries to pick from")
        target = random.randrange(self._total)
        accumulated = 0
        for index, (rate, _) in enumerate(self._entries):
            accumulated += rate
            if accumulated > target:
                return index
        return len(self._entries) - 1

    def get(self) -> Any:
        """Return a value chosen by weight."""
        return self._entries[self._pick_index()][1]

    def get_and_delete(self) -> Any:
        """Return a value chosen by weight and remove it from the picker."""
        index = self._pick_index()
        rate, value = self._entries[index]
        self._entries[index] = self._entries[-1]
        self._entries.pop()
        self._total -= rate
        return value


class RandNotRepeated:
    """Draws from a group of numbers, never returning the same entry twice."""

    def __init__(self, *values: int) -> None:
        self._pool = list(values)

    def __len__(self) -> int:
        return len(self._pool)

    def add(self, value: int) -> None:
        """Put another value into the pool."""
        self._pool.append(value)

    def rand(self) -> int:
        """Draw a value; raises IndexError once the pool is exhausted."""
        if not self._pool:
            raise IndexError("no values left to draw")
        index = random.randrange(len(self._pool))
        value = self._pool[index]
        self._pool[index] = self._pool[-1]
        self._pool.pop()
        return value


def rand_rate(v: int) -> bool:
    """Succeed with probability v / 10000."""
    if v < 0:
        return False
    if v >= MAX_RATE:
        return True
    return random.randrange(MAX_RATE) < v


def rand_range_float(lo: float, hi: float) -> float:
    """Uniform float in [lo, hi); the bounds may be given in either order."""
    if lo == hi:
        return lo
    if lo > hi:
        lo, hi = hi, lo
    return lo + (hi - lo) * random.random()


def rand_range_int(lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi)."""
    return random.randrange(hi - lo) + lo


def rand_range_int_closed(lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi]."""
    return random.randrange(hi - lo + 1) + lo


def rand_int(v: int) -> int:
    """Uniform integer in [0, v); zero when v is zero."""
    if v == 0:
        return 0
    return random.randrange(v)


def rand_token() -> int:
    """A random non-zero 32-bit unsigned integer."""
    token = 0
    while token == 0:
        token = random.getrandbits(32)
    return token


def new_uuid() -> str:
    """A random UUID in its canonical text form."""
    return str(uuid.uuid4())