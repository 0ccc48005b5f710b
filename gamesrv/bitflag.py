"""A small integer bit set."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Flag:
    """Holds a set of bit flags packed into one integer."""

    value: int = 0

    def add(self, flag: int) -> None:
        """Set every bit of ``flag``."""
        self.value |= flag

    def has(self, flag: int) -> bool:
        """Return True if any bit of ``flag`` is set."""
        return self.value & flag != 0

    def remove(self, flag: int) -> None:
        """Clear every bit of ``flag``."""
        self.value &= ~flag