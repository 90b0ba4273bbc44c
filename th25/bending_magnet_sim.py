"""Simulated bending magnet: commanded coil current with optional read noise."""

from __future__ import annotations

import threading

from th25.noise import LcgNoise

BENDING_MAGNET_MIN_A = 0.0
BENDING_MAGNET_MAX_A = 500.0
BENDING_MAGNET_NOISE_FRACTION = 0.02


class BendingMagnetSim:
    """Virtual bending magnet holding a commanded current in A.

    Commands outside 0.0..500.0 A saturate at the nearest limit. With
    noise enabled, readings deviate from the command by up to ±2%.
    """

    def __init__(self) -> None:
        self._commanded = 0.0
        self._noise_enabled = False
        self._rng = LcgNoise(0)
        self._lock = threading.Lock()

    def set_current(self, commanded: float) -> None:
        """Command a magnet current; values out of range saturate."""
        clamped = self.clamp_to_range(commanded)
        with self._lock:
            self._commanded = clamped

    def read_actual_current(self) -> float:
        """Return the measured current, noisy if noise is enabled."""
        with self._lock:
            commanded = self._commanded
            noise_enabled = self._noise_enabled
            rng = self._rng
        if not noise_enabled:
            return commanded
        noisy = commanded + commanded * BENDING_MAGNET_NOISE_FRACTION * rng.next_unit()
        return self.clamp_to_range(noisy)

    def enable_noise(self, seed: int) -> None:
        """Enable read noise, seeding the generator with ``seed``."""
        rng = LcgNoise(seed)
        with self._lock:
            self._rng = rng
            self._noise_enabled = True

    def disable_noise(self) -> None:
        """Disable read noise."""
        with self._lock:
            self._noise_enabled = False

    def is_noise_enabled(self) -> bool:
        """Whether read noise is enabled."""
        return self._noise_enabled

    def current_commanded(self) -> float:
        """Return the stored (saturated) commanded current."""
        return self._commanded

    @staticmethod
    def is_current_in_range(current: float) -> bool:
        """True if 0.0 <= current <= 500.0 A."""
        return BENDING_MAGNET_MIN_A <= current <= BENDING_MAGNET_MAX_A

    @staticmethod
    def clamp_to_range(current: float) -> float:
        """Saturate ``current`` to the 0.0..500.0 A range."""
        value = float(current)
        if value < BENDING_MAGNET_MIN_A:
            return BENDING_MAGNET_MIN_A
        if value > BENDING_MAGNET_MAX_A:
            return BENDING_MAGNET_MAX_A
        return value