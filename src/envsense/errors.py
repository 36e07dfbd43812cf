"""Exception hierarchy shared by the bus adapter and the sensor drivers."""

from __future__ import annotations


class EnvSenseError(Exception):
    """Base class for every error raised by envsense."""


class ConfigurationError(EnvSenseError):
    """The driver cannot be built from the given bus source, address or settings."""


class DeviceNotFound(ConfigurationError):
    """The I²C device node (``/dev/i2c-N``) does not exist."""


class BusError(EnvSenseError):
    """A register read or write failed on the bus.

    The originating :class:`OSError` is chained as ``__cause__``.
    """
