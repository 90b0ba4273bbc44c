"""Bending magnet current command derived from beam energy, with deviation monitoring."""

from __future__ import annotations

import threading
from typing import Union

from th25.errors import MagnetCurrentDeviation, ModeInvalidTransition
from th25.treatment_mode_manager import EnergyMeV, EnergyMV, TreatmentMode, TreatmentModeManager

MAGNET_CURRENT_MIN_A = 0.0
MAGNET_CURRENT_MAX_A = 500.0
MAGNET_TOLERANCE_FRACTION = 0.05

_SLOPE_ELECTRON_A_PER_MEV = 2.5
_INTERCEPT_ELECTRON_A = 0.0
_SLOPE_XRAY_A_PER_MV = 10.0
_INTERCEPT_XRAY_A = 0.0


class EnergyMagnetMap:
    """Linear map from beam energy to bending magnet current.

    Electron: 1 MeV -> 2.5 A, 25 MeV -> 62.5 A.
    X-ray:    5 MV  -> 50 A,  25 MV  -> 250 A.
    """

    @staticmethod
    def compute_target_current_electron(energy: EnergyMeV) -> float:
        """Return the magnet current in A for an electron energy."""
        return _SLOPE_ELECTRON_A_PER_MEV * energy.value + _INTERCEPT_ELECTRON_A

    @staticmethod
    def compute_target_current_xray(energy: EnergyMV) -> float:
        """Return the magnet current in A for an X-ray energy."""
        return _SLOPE_XRAY_A_PER_MV * energy.value + _INTERCEPT_XRAY_A


class BendingMagnetManager:
    """Holds the target magnet current and the last measured current.

    The target is derived from the treatment mode and energy; the measured
    value is compared against it with a ±5% tolerance.
    """

    def __init__(self) -> None:
        self._target = 0.0
        self._actual = 0.0
        self._target_set = False
        self._lock = threading.Lock()

    def set_current_for_energy(
        self, mode: TreatmentMode, energy: Union[EnergyMeV, EnergyMV]
    ) -> None:
        """Set the target current for ``energy`` in ``mode``.

        Raises ModeInvalidTransition if the mode does not match the energy
        kind or the energy is out of range, and MagnetCurrentDeviation if the
        resulting current lies outside 0.0..500.0 A. On error the stored
        target is left unchanged.
        """
        if isinstance(energy, EnergyMeV):
            if mode is not TreatmentMode.ELECTRON:
                raise ModeInvalidTransition(
                    f"electron energy given for mode {TreatmentMode(mode).value}"
                )
            if not TreatmentModeManager.is_electron_energy_in_range(energy):
                raise ModeInvalidTransition(f"electron energy {energy.value} MeV out of range")
            target = EnergyMagnetMap.compute_target_current_electron(energy)
        elif isinstance(energy, EnergyMV):
            if mode is not TreatmentMode.XRAY:
                raise ModeInvalidTransition(
                    f"x-ray energy given for mode {TreatmentMode(mode).value}"
                )
            if not TreatmentModeManager.is_xray_energy_in_range(energy):
                raise ModeInvalidTransition(f"x-ray energy {energy.value} MV out of range")
            target = EnergyMagnetMap.compute_target_current_xray(energy)
        else:
            raise TypeError("energy must be EnergyMeV or EnergyMV")

        if not self.is_current_in_range(target):
            raise MagnetCurrentDeviation(f"computed current {target} A out of range")

        with self._lock:
            self._target = target
            self._target_set = True

    def current_actual(self) -> float:
        """Return the last measured current in A."""
        return self._actual

    def is_within_tolerance(self) -> bool:
        """True if a target is set and the measured current is within ±5% of it."""
        with self._lock:
            target_set = self._target_set
            target = self._target
            actual = self._actual
        if not target_set:
            return False
        return self.is_current_within_tolerance(target, actual)

    def inject_actual_current(self, actual: float) -> None:
        """Record a measured current in A."""
        value = float(actual)
        with self._lock:
            self._actual = value

    def current_target(self) -> float:
        """Return the target current in A (0.0 until one is set)."""
        return self._target

    def is_target_set(self) -> bool:
        """Whether a target current has ever been set."""
        return self._target_set

    @staticmethod
    def is_current_within_tolerance(
        target: float, actual: float, tolerance_fraction: float = MAGNET_TOLERANCE_FRACTION
    ) -> bool:
        """True if |actual - target| / |target| <= tolerance_fraction.

        A zero target is only matched by an actual current of exactly zero.
        """
        if target == 0.0:
            return actual == 0.0
        return abs(actual - target) / abs(target) <= tolerance_fraction

    @staticmethod
    def is_current_in_range(current: float) -> bool:
        """True if 0.0 <= current <= 500.0 A."""
        return MAGNET_CURRENT_MIN_A <= current <= MAGNET_CURRENT_MAX_A