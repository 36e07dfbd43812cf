"""envsense: calibrated BME280 temperature, pressure and humidity readings."""

from .bus import I2CBus, resolve_bus
from .core.models import Reading
from .errors import BusError, ConfigurationError, DeviceNotFound, EnvSenseError
from .sensors.bme280 import BME280, I2C_ADDRESS, Bme280Settings

__all__ = [
    "BME280",
    "Bme280Settings",
    "BusError",
    "ConfigurationError",
    "DeviceNotFound",
    "EnvSenseError",
    "I2C_ADDRESS",
    "I2CBus",
    "Reading",
    "resolve_bus",
]

__version__ = "0.1.0"
