"""Simulated turntable with three independent position sensors and fault injection."""

from __future__ import annotations

import enum
import threading

from th25.noise import LcgNoise

TURNTABLE_MIN_MM = -100.0
TURNTABLE_MAX_MM = 100.0
TURNTABLE_SENSOR_NOISE_ABS_MM = 0.1
SENSOR_COUNT = 3


class SensorId(enum.Enum):
    """One of the three redundant turntable position sensors."""

    SENSOR0 = 0
    SENSOR1 = 1
    SENSOR2 = 2


class FaultMode(enum.Enum):
    """Fault that can be injected into a single turntable sensor."""

    NONE = "None"
    STUCK_AT = "StuckAt"
    DELAY = "Delay"
    NO_RESPONSE = "NoResponse"


class TurntableSim:
    """Virtual turntable holding a commanded position in mm.

    Commands outside -100.0..+100.0 mm saturate at the nearest limit.
    Each sensor normally reports the commanded position (with up to
    ±0.1 mm of noise when enabled); an injected fault changes that:

    - StuckAt reports the frozen value set by ``inject_stuck_at_value``;
    - Delay reports the previously commanded position;
    - NoResponse reports 0.0 mm.
    """

    def __init__(self) -> None:
        self._commanded = 0.0
        self._previous_commanded = 0.0
        self._stuck_at = [0.0] * SENSOR_COUNT
        self._faults = [FaultMode.NONE] * SENSOR_COUNT
        self._noise_enabled = False
        self._rng = LcgNoise(0)
        self._lock = threading.Lock()

    def command_position(self, target: float) -> None:
        """Command a position; the previous command is kept for Delay faults."""
        clamped = self.clamp_to_range(target)
        with self._lock:
            self._previous_commanded = self._commanded
            self._commanded = clamped

    def read_sensor(self, sensor: SensorId) -> float:
        """Return the position reported by ``sensor``."""
        idx = self.sensor_index(sensor)
        with self._lock:
            mode = self._faults[idx]
            stuck_at = self._stuck_at[idx]
            previous = self._previous_commanded
            commanded = self._commanded
            noise_enabled = self._noise_enabled
            rng = self._rng

        if mode is FaultMode.STUCK_AT:
            return stuck_at
        if mode is FaultMode.DELAY:
            return previous
        if mode is FaultMode.NO_RESPONSE:
            return 0.0

        if not noise_enabled:
            return commanded
        noisy = commanded + TURNTABLE_SENSOR_NOISE_ABS_MM * rng.next_unit()
        return self.clamp_to_range(noisy)

    def inject_fault(self, sensor: SensorId, mode: FaultMode) -> None:
        """Set the fault mode of ``sensor``; FaultMode.NONE restores normal readings."""
        idx = self.sensor_index(sensor)
        mode = FaultMode(mode)
        with self._lock:
            self._faults[idx] = mode

    def inject_stuck_at_value(self, sensor: SensorId, value: float) -> None:
        """Set the value ``sensor`` reports while in the StuckAt fault mode."""
        idx = self.sensor_index(sensor)
        with self._lock:
            self._stuck_at[idx] = float(value)

    def enable_sensor_noise(self, seed: int) -> None:
        """Enable sensor noise, seeding the generator with ``seed``."""
        rng = LcgNoise(seed)
        with self._lock:
            self._rng = rng
            self._noise_enabled = True

    def disable_sensor_noise(self) -> None:
        """Disable sensor noise."""
        with self._lock:
            self._noise_enabled = False

    def is_sensor_noise_enabled(self) -> bool:
        """Whether sensor noise is enabled."""
        return self._noise_enabled

    def current_commanded(self) -> float:
        """Return the stored (saturated) commanded position."""
        return self._commanded

    def current_fault_mode(self, sensor: SensorId) -> FaultMode:
        """Return the fault mode currently injected into ``sensor``."""
        return self._faults[self.sensor_index(sensor)]

    @staticmethod
    def is_position_in_range(position: float) -> bool:
        """True if -100.0 <= position <= +100.0 mm."""
        return TURNTABLE_MIN_MM <= position <= TURNTABLE_MAX_MM

    @staticmethod
    def clamp_to_range(position: float) -> float:
        """Saturate ``position`` to the -100.0..+100.0 mm range."""
        value = float(position)
        if value < TURNTABLE_MIN_MM:
            return TURNTABLE_MIN_MM
        if value > TURNTABLE_MAX_MM:
            return TURNTABLE_MAX_MM
        return value

    @staticmethod
    def sensor_index(sensor: SensorId) -> int:
        """Return the 0-based index of ``sensor``."""
        return SensorId(sensor).value