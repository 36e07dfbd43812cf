"""Sensor drivers and their conversion helpers.

:mod:`bme280` is the driver facade, :mod:`calibration` unpacks the factory
trim blocks and :mod:`compensation` holds the pure conversion formulas so they
can be tested without a bus.
"""

from .bme280 import BME280, Bme280Settings, I2C_ADDRESS
from .calibration import CalibrationSet
from .compensation import RawSample

__all__ = ["BME280", "Bme280Settings", "CalibrationSet", "I2C_ADDRESS", "RawSample"]
