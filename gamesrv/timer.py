"""Periodic tasks driven by repeated polling."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class _Item:
    callback: Callable[[Any], Any]
    run_time: int
    period: int


class TimeEvter:
    """Runs each added callback once its period has passed, checked on ``run``."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._items: list[_Item] = []
        self.now = int(clock())

    def add(self, period: int, callback: Callable[[Any], Any]) -> None:
        """Schedule ``callback`` every ``period`` seconds from the last ``run`` time."""
        self._items.append(_Item(callback, self.now + period, period))

    def run(self, target: Any) -> None:
        """Call every due callback with ``target``, at most once each."""
        self.now = int(self._clock())
        for item in self._items:
            if item.run_time < self.now:
                item.callback(target)
                item.run_time += item.period