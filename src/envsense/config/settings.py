"""YAML-backed configuration for the BME280 driver."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from ..errors import ConfigurationError
from ..sensors.bme280 import BME280, I2C_ADDRESS, Bme280Settings

DEFAULT_BUS = 1


def load_config(path: str | Path) -> Dict[str, Any]:
    """Return the parsed YAML document at *path* (empty when missing)."""
    config_path = Path(path)
    if not config_path.exists():
        return {}
    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a YAML mapping")
    return data


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError as exc:
            raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    raise ConfigurationError(f"{name} must be an integer, got {value!r}")


@dataclass
class DriverConfig:
    """
    Where the sensor lives and how it is sampled.

    Built from the ``bme280`` section of a YAML file::

        bme280:
          bus: 1                  # or "/dev/i2c-1"
          address: 0x76
          cache_calibration: false
          settings:
            temp_oversampling: 1
            pressure_oversampling: 1
            humidity_oversampling: 1
            mode: 1
            standby: 5
            filter: 0
    """

    bus: int | str = DEFAULT_BUS
    address: int = I2C_ADDRESS
    cache_calibration: bool = False
    settings: Bme280Settings = field(default_factory=Bme280Settings)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "DriverConfig":
        payload: Mapping[str, Any] = mapping or {}
        block = payload.get("bme280", payload)
        if not isinstance(block, Mapping):
            raise ConfigurationError("bme280 section must be a mapping")

        bus: Any = block.get("bus", DEFAULT_BUS)
        if not isinstance(bus, str):
            bus = _parse_int("bus", bus)

        address = _parse_int("address", block.get("address", I2C_ADDRESS))

        cache = block.get("cache_calibration", False)
        if not isinstance(cache, bool):
            raise ConfigurationError(f"cache_calibration must be true/false, got {cache!r}")

        raw_settings = block.get("settings") or {}
        if not isinstance(raw_settings, Mapping):
            raise ConfigurationError("bme280.settings must be a mapping")
        known = {f.name for f in fields(Bme280Settings)}
        unknown = sorted(set(raw_settings) - known)
        if unknown:
            raise ConfigurationError(f"Unknown bme280 settings: {', '.join(unknown)}")
        settings = Bme280Settings(
            **{key: _parse_int(key, value) for key, value in raw_settings.items()}
        )

        return cls(bus=bus, address=address, cache_calibration=cache, settings=settings)

    @classmethod
    def from_file(cls, path: str | Path) -> "DriverConfig":
        return cls.from_mapping(load_config(path))

    def build(self) -> BME280:
        """Open the configured bus and return a ready driver."""
        return BME280(
            self.bus,
            self.address,
            settings=self.settings,
            cache_calibration=self.cache_calibration,
        )
