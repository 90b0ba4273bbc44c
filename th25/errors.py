"""Exceptions raised by the control units when a request is refused."""


class ControlError(Exception):
    """Base class for every refusal raised by a control unit.

    ``code`` names the error in the control system's error catalogue.
    """

    code = "ControlError"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)


class ModeBeamOnNotAllowed(ControlError):
    """A mode change was requested while the beam was not off."""

    code = "ModeBeamOnNotAllowed"


class ModeInvalidTransition(ControlError):
    """The requested mode, energy or transition is not permitted."""

    code = "ModeInvalidTransition"


class ModePositionMismatch(ControlError):
    """The active treatment mode does not match the mode requested for beam-on."""

    code = "ModePositionMismatch"


class MagnetCurrentDeviation(ControlError):
    """A bending magnet current is outside its permitted range or tolerance."""

    code = "MagnetCurrentDeviation"