"""A 48-bit linear congruential generator compatible with the rand48 family."""

from __future__ import annotations

_A = 0x5DEECE66D
_C = 0xB
_MASK = (1 << 48) - 1


class Rand48:
    """Independent rand48 stream; each instance keeps its own state."""

    def __init__(self, seed: int = 0) -> None:
        self._state = 0
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the state as ``srand48`` does, using the low 32 bits."""
        self._state = ((seed & 0xFFFFFFFF) << 16) | 0x330E

    def _next(self) -> int:
        self._state = (_A * self._state + _C) & _MASK
        return self._state

    def lrand48(self) -> int:
        """Return a non-negative integer in ``[0, 2**31)``."""
        return self._next() >> 17

    def drand48(self) -> float:
        """Return a float in ``[0.0, 1.0)``."""
        return self._next() / float(1 << 48)

    def randbelow(self, n: int) -> int:
        """Return ``lrand48() % n`` for a positive ``n``."""
        if n <= 0:
            raise ValueError("n must be positive")
        return self.lrand48() % n