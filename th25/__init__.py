"""Virtual radiotherapy linac control core: mode and magnet managers, a message queue, and hardware simulators."""

__version__ = "0.2.0"