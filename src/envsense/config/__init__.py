"""Configuration objects and helpers for envsense.

Driver placement (bus, address) and sampling settings are read from a YAML
file into :class:`DriverConfig`, which can then build the driver.
"""

from .settings import DriverConfig, load_config

__all__ = ["DriverConfig", "load_config"]
