"""Snowflake ids: 41 bits of milliseconds, 10 bits of machine id, 12 bits of sequence."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable

TIMESTAMP_BITS = 41
MACHINE_BITS = 10
SEQ_BITS = 12

MACHINE_SHIFT = SEQ_BITS
TIMESTAMP_SHIFT = SEQ_BITS + MACHINE_BITS

MAX_MACHINE_ID = (1 << MACHINE_BITS) - 1
SEQ_MASK = (1 << SEQ_BITS) - 1
MAX_YEARS = ((1 << TIMESTAMP_BITS) - 1) // (365 * 24 * 3600 * 1000)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
BEGIN_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)
BEGIN_EPOCH_MS = (BEGIN_EPOCH - _UNIX_EPOCH) // timedelta(milliseconds=1)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _check_machine_id(machine_id: int) -> None:
    if not 0 <= machine_id <= MAX_MACHINE_ID:
        raise ValueError(f"machine_id out of range [0~{MAX_MACHINE_ID}]")


class Generator:
    """Thread-safe generator of snowflake ids for one machine."""

    def __init__(self, machine_id: int = 0, *, clock: Callable[[], int] = _now_ms) -> None:
        _check_machine_id(machine_id)
        self.machine_id = machine_id
        self._clock = clock
        self._seq = 0
        self._last_ts = 0
        self._lock = threading.Lock()

    def generate(self) -> int:
        """Return the next unique id."""
        with self._lock:
            now = self._clock()
            if now == self._last_ts:
                self._seq = (self._seq + 1) & SEQ_MASK
                if self._seq == 0:
                    # Sequence exhausted for this millisecond: wait for the next one.
                    while now <= self._last_ts:
                        time.sleep((self._last_ts + 1 - now) / 1000)
                        now = self._clock()
            else:
                self._seq = 0
            self._last_ts = now
            return (
                (now - BEGIN_EPOCH_MS) << TIMESTAMP_SHIFT
                | self.machine_id << MACHINE_SHIFT
                | self._seq
            )


_generator = Generator()


def init_generator(machine_id: int) -> None:
    """Reset the shared generator to use ``machine_id``."""
    global _generator
    _generator = Generator(machine_id)


def gen() -> int:
    """A unique id from the shared generator."""
    return _generator.generate()


def extract(id_: int) -> tuple[datetime, int, int]:
    """Split an id into its generation time (UTC), machine id and sequence."""
    ts = (id_ >> TIMESTAMP_SHIFT) & ((1 << (TIMESTAMP_BITS + 1)) - 1)
    gen_time = _UNIX_EPOCH + timedelta(milliseconds=BEGIN_EPOCH_MS + ts)
    return gen_time, extract_machine_id(id_), id_ & SEQ_MASK


def extract_machine_id(id_: int) -> int:
    """The machine id stored in an id."""
    return (id_ >> MACHINE_SHIFT) & MAX_MACHINE_ID