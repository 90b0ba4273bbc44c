"""Simulated electron gun: commanded beam current with optional read noise."""

from __future__ import annotations

import threading

from th25.noise import LcgNoise

ELECTRON_GUN_MIN_MA = 0.0
ELECTRON_GUN_MAX_MA = 10.0
ELECTRON_GUN_NOISE_FRACTION = 0.01


class ElectronGunSim:
    """Virtual electron gun holding a commanded current in mA.

    Commands outside 0.0..10.0 mA saturate at the nearest limit. With
    noise enabled, readings deviate from the command by up to ±1%.
    """

    def __init__(self) -> None:
        self._commanded = 0.0
        self._noise_enabled = False
        self._rng = LcgNoise(0)
        self._lock = threading.Lock()

    def set_current(self, commanded: float) -> None:
        """Command a beam current; values out of range saturate."""
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
        noisy = commanded + commanded * ELECTRON_GUN_NOISE_FRACTION * rng.next_unit()
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
        """True if 0.0 <= current <= 10.0 mA."""
        return ELECTRON_GUN_MIN_MA <= current <= ELECTRON_GUN_MAX_MA

    @staticmethod
    def clamp_to_range(current: float) -> float:
        """Saturate ``current`` to the 0.0..10.0 mA range."""
        value = float(current)
        if value < ELECTRON_GUN_MIN_MA:
            return ELECTRON_GUN_MIN_MA
        if value > ELECTRON_GUN_MAX_MA:
            return ELECTRON_GUN_MAX_MA
        return value