"""Treatment mode state and the guarded mode-change sequence."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass
from typing import Union

from th25.errors import ModeBeamOnNotAllowed, ModeInvalidTransition, ModePositionMismatch

ELECTRON_ENERGY_MIN_MEV = 1.0
ELECTRON_ENERGY_MAX_MEV = 25.0
XRAY_ENERGY_MIN_MV = 5.0
XRAY_ENERGY_MAX_MV = 25.0


class TreatmentMode(enum.Enum):
    """Treatment mode of the machine."""

    LIGHT = "Light"
    ELECTRON = "Electron"
    XRAY = "XRay"


class BeamState(enum.Enum):
    """State of the beam."""

    OFF = "Off"
    ARMING = "Arming"
    ON = "On"
    STOPPING = "Stopping"


@dataclass(frozen=True)
class EnergyMeV:
    """Electron beam energy in MeV."""

    value: float


@dataclass(frozen=True)
class EnergyMV:
    """X-ray beam energy in MV."""

    value: float


class TreatmentModeManager:
    """Holds the current treatment mode and validates every change of it.

    Mode changes are refused unless the beam is off, the energy kind
    matches the requested mode and the energy lies in its permitted range.
    """

    def __init__(self, initial_mode: TreatmentMode = TreatmentMode.LIGHT) -> None:
        self._mode = TreatmentMode(initial_mode)
        self._lock = threading.Lock()

    def request_mode_change(
        self,
        new_mode: TreatmentMode,
        energy: Union[EnergyMeV, EnergyMV],
        beam_state: BeamState,
    ) -> None:
        """Switch to Electron (with EnergyMeV) or XRay (with EnergyMV).

        Raises ModeBeamOnNotAllowed if the beam is not off, and
        ModeInvalidTransition if the mode does not match the energy kind
        or the energy is out of range.
        """
        if isinstance(energy, EnergyMeV):
            expected_mode = TreatmentMode.ELECTRON
            in_range = self.is_electron_energy_in_range(energy)
        elif isinstance(energy, EnergyMV):
            expected_mode = TreatmentMode.XRAY
            in_range = self.is_xray_energy_in_range(energy)
        else:
            raise TypeError("energy must be EnergyMeV or EnergyMV")

        if beam_state is not BeamState.OFF:
            raise ModeBeamOnNotAllowed(f"beam state is {beam_state.value}, must be Off")
        if new_mode is not expected_mode:
            raise ModeInvalidTransition(
                f"{type(energy).__name__} cannot be used for mode {TreatmentMode(new_mode).value}"
            )
        if not in_range:
            raise ModeInvalidTransition(
                f"energy {energy.value} out of range for mode {new_mode.value}"
            )
        self._transition_to(new_mode)

    def request_light_mode(self, beam_state: BeamState) -> None:
        """Switch to Light mode; raises ModeBeamOnNotAllowed unless the beam is off."""
        if beam_state is not BeamState.OFF:
            raise ModeBeamOnNotAllowed(f"beam state is {beam_state.value}, must be Off")
        self._transition_to(TreatmentMode.LIGHT)

    def verify_mode_consistency(self, requested_mode: TreatmentMode) -> None:
        """Raise ModePositionMismatch unless the current mode is ``requested_mode``."""
        current = self.current_mode()
        if current is not requested_mode:
            raise ModePositionMismatch(
                f"current mode {current.value} does not match requested "
                f"{TreatmentMode(requested_mode).value}"
            )

    def current_mode(self) -> TreatmentMode:
        """Return the current treatment mode."""
        return self._mode

    def _transition_to(self, new_mode: TreatmentMode) -> None:
        with self._lock:
            if not self.is_mode_transition_allowed(self._mode, new_mode):
                raise ModeInvalidTransition(
                    f"transition {self._mode.value} -> {new_mode.value} not allowed"
                )
            self._mode = new_mode

    @staticmethod
    def is_mode_transition_allowed(from_mode: TreatmentMode, to_mode: TreatmentMode) -> bool:
        """Every transition among Light, Electron and XRay is allowed, including no-ops."""
        return isinstance(from_mode, TreatmentMode) and isinstance(to_mode, TreatmentMode)

    @staticmethod
    def is_electron_energy_in_range(energy: EnergyMeV) -> bool:
        """True if 1.0 <= energy <= 25.0 MeV."""
        return ELECTRON_ENERGY_MIN_MEV <= energy.value <= ELECTRON_ENERGY_MAX_MEV

    @staticmethod
    def is_xray_energy_in_range(energy: EnergyMV) -> bool:
        """True if 5.0 <= energy <= 25.0 MV."""
        return XRAY_ENERGY_MIN_MV <= energy.value <= XRAY_ENERGY_MAX_MV