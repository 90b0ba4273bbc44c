"""Deterministic pseudo-random noise source shared by the hardware simulators."""

from __future__ import annotations

import threading

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
_UINT32_MASK = 0xFFFFFFFF
_INV_24_BIT = 1.0 / float(1 << 24)


def _check_uint32(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    if not 0 <= value <= _UINT32_MASK:
        raise ValueError(f"{name} must fit in 32 unsigned bits")
    return value


def normalize_to_unit_range(state: int) -> float:
    """Map a 32-bit state onto [-1.0, +1.0) using its upper 24 bits."""
    state = _check_uint32(state, "state")
    normalized = float(state >> 8) * _INV_24_BIT
    return normalized * 2.0 - 1.0


class LcgNoise:
    """Thread-safe linear congruential generator producing values in [-1, +1).

    Each draw advances the stored state by the LCG increment and derives
    the returned value from one LCG step applied to the previous state.
    """

    def __init__(self, seed: int) -> None:
        self._state = _check_uint32(seed, "seed")
        self._lock = threading.Lock()

    def next_unit(self) -> float:
        """Return the next pseudo-random value in [-1.0, +1.0)."""
        with self._lock:
            prev = self._state
            self._state = (prev + LCG_INCREMENT) & _UINT32_MASK
        next_state = (prev * LCG_MULTIPLIER + LCG_INCREMENT) & _UINT32_MASK
        return normalize_to_unit_range(next_state)