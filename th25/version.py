"""Version string of the control software and the simulator label."""

VERSION = "0.2.0-inc1-skeleton"

_SIM_LABEL = "th25_sim Inc.1 placeholder (real virtual HW model in Step 17+)"


def version() -> str:
    """Return the control software version string."""
    return VERSION


def stub_label() -> str:
    """Return the descriptive label of the hardware simulator layer."""
    return _SIM_LABEL