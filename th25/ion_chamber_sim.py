"""Simulated dual-channel ion chamber with fault injection."""

from __future__ import annotations

import enum
import threading

ION_CHAMBER_MIN_CGY = 0.0
ION_CHAMBER_MAX_CGY = 10000.0
SATURATION_VALUE_CGY = ION_CHAMBER_MAX_CGY
CHANNEL_COUNT = 2


class ChannelId(enum.Enum):
    """One of the two independent ion chamber channels."""

    CHANNEL0 = 0
    CHANNEL1 = 1


class FaultMode(enum.Enum):
    """Fault that can be injected into a single ion chamber channel."""

    NONE = "None"
    SATURATION = "Saturation"
    CHANNEL_FAILURE = "ChannelFailure"


class IonChamberSim:
    """Virtual ion chamber accumulating a dose in cGy on each channel.

    Accumulated doses saturate to 0.0..10000.0 cGy. A Saturation fault
    pins a channel's reading to the upper limit; a ChannelFailure fault
    makes it read 0.0 cGy. The accumulated dose is kept across faults.
    """

    def __init__(self) -> None:
        self._accumulated = [0.0] * CHANNEL_COUNT
        self._faults = [FaultMode.NONE] * CHANNEL_COUNT
        self._lock = threading.Lock()

    def read_dose(self, channel: ChannelId) -> float:
        """Return the dose reported by ``channel``."""
        idx = self.channel_index(channel)
        with self._lock:
            mode = self._faults[idx]
            accumulated = self._accumulated[idx]
        if mode is FaultMode.SATURATION:
            return SATURATION_VALUE_CGY
        if mode is FaultMode.CHANNEL_FAILURE:
            return 0.0
        return accumulated

    def inject_saturation(self, channel: ChannelId) -> None:
        """Pin ``channel`` to the upper end of its range."""
        self._set_fault(channel, FaultMode.SATURATION)

    def inject_channel_failure(self, channel: ChannelId) -> None:
        """Make ``channel`` stop responding (reads 0.0 cGy)."""
        self._set_fault(channel, FaultMode.CHANNEL_FAILURE)

    def inject_dose_increment(self, channel: ChannelId, delta: float) -> None:
        """Add ``delta`` cGy to ``channel``, saturating the total to the valid range."""
        idx = self.channel_index(channel)
        with self._lock:
            self._accumulated[idx] = self.clamp_to_range(self._accumulated[idx] + float(delta))

    def reset_channel(self, channel: ChannelId) -> None:
        """Set the accumulated dose of ``channel`` back to 0.0 cGy."""
        idx = self.channel_index(channel)
        with self._lock:
            self._accumulated[idx] = 0.0

    def clear_fault(self, channel: ChannelId) -> None:
        """Restore normal readings on ``channel``."""
        self._set_fault(channel, FaultMode.NONE)

    def current_fault_mode(self, channel: ChannelId) -> FaultMode:
        """Return the fault mode currently injected into ``channel``."""
        return self._faults[self.channel_index(channel)]

    def current_accumulated(self, channel: ChannelId) -> float:
        """Return the accumulated dose of ``channel``, ignoring any fault."""
        return self._accumulated[self.channel_index(channel)]

    def _set_fault(self, channel: ChannelId, mode: FaultMode) -> None:
        idx = self.channel_index(channel)
        with self._lock:
            self._faults[idx] = mode

    @staticmethod
    def is_dose_in_range(dose: float) -> bool:
        """True if 0.0 <= dose <= 10000.0 cGy."""
        return ION_CHAMBER_MIN_CGY <= dose <= ION_CHAMBER_MAX_CGY

    @staticmethod
    def clamp_to_range(dose: float) -> float:
        """Saturate ``dose`` to the 0.0..10000.0 cGy range."""
        value = float(dose)
        if value < ION_CHAMBER_MIN_CGY:
            return ION_CHAMBER_MIN_CGY
        if value > ION_CHAMBER_MAX_CGY:
            return ION_CHAMBER_MAX_CGY
        return value

    @staticmethod
    def channel_index(channel: ChannelId) -> int:
        """Return the 0-based index of ``channel``."""
        return ChannelId(channel).value