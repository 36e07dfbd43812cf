"""
Bosch BME280 temperature / pressure / humidity driver.

Every accessor runs a full cycle against the chip::

  1. write ctrl_meas (0xF4), ctrl_hum (0xF2), config (0xF5)
  2. read the trim constants (0x88, 0x8E, 0xA1, 0xE1)
  3. burst read 8 data bytes from 0xF7
  4. compensate

The driver holds no locks; share one instance between threads only behind
an external mutex, since interleaved configuration writes corrupt reads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..bus import BusSource, I2CBus, resolve_bus
from ..core.models import Reading
from ..errors import ConfigurationError
from ..tools.debug import time_block
from .calibration import CalibrationSet, read_calibration
from .compensation import DATA_LEN, compensate, parse_raw_sample

logger = logging.getLogger(__name__)

# ---------------------------
# BME280 register constants
# ---------------------------
I2C_ADDRESS = 0x76  # SDO to GND; 0x77 with SDO to VDDIO

REG_CTRL_HUM = 0xF2
REG_CTRL_MEAS = 0xF4
REG_CONFIG = 0xF5
REG_DATA = 0xF7

# Oversampling codes (ctrl_hum / ctrl_meas): 0 skip, 1..5 → x1, x2, x4, x8, x16
OVERSAMPLING_MAX = 5
MODE_SLEEP = 0
MODE_FORCED = 1
MODE_NORMAL = 3
# t_sb codes (config[7:5]); 5 → 1000 ms
STANDBY_1000_MS = 5


@dataclass(frozen=True)
class Bme280Settings:
    """
    Oversampling, mode and filter configuration written before each reading.

    The defaults match the reference driver: x1 everywhere, mode code 1,
    1000 ms standby, filter off, SPI 3-wire off.
    """

    temp_oversampling: int = 1
    pressure_oversampling: int = 1
    humidity_oversampling: int = 1
    mode: int = MODE_FORCED
    standby: int = STANDBY_1000_MS
    filter: int = 0
    spi3w: int = 0

    def __post_init__(self) -> None:
        limits = {
            "temp_oversampling": OVERSAMPLING_MAX,
            "pressure_oversampling": OVERSAMPLING_MAX,
            "humidity_oversampling": OVERSAMPLING_MAX,
            "mode": 3,
            "standby": 7,
            "filter": 7,
            "spi3w": 1,
        }
        for name, upper in limits.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= upper:
                raise ConfigurationError(f"{name} must be an integer in 0..{upper}, got {value!r}")

    def ctrl_hum(self) -> int:
        return self.humidity_oversampling

    def ctrl_meas(self) -> int:
        return (self.temp_oversampling << 5) | (self.pressure_oversampling << 2) | self.mode

    def config(self) -> int:
        return (self.standby << 5) | (self.filter << 2) | self.spi3w


DEFAULT_SETTINGS = Bme280Settings()


def write_settings(bus: I2CBus, address: int, settings: Bme280Settings) -> None:
    """Program the control registers; order is ctrl_meas, ctrl_hum, config."""
    bus.write(address, REG_CTRL_MEAS, settings.ctrl_meas())
    bus.write(address, REG_CTRL_HUM, settings.ctrl_hum())
    bus.write(address, REG_CONFIG, settings.config())


class BME280:
    """
    BME280 on an I²C bus.

    ``device`` may be a bus index, a device path such as ``/dev/i2c-1``, an
    :class:`~envsense.bus.I2CBus` or an :class:`smbus2.SMBus`. A bus opened
    from an index or a path is closed again by :meth:`close`.
    """

    def __init__(
        self,
        device: BusSource,
        i2c_address: int = I2C_ADDRESS,
        *,
        settings: Optional[Bme280Settings] = None,
        cache_calibration: bool = False,
    ) -> None:
        if isinstance(i2c_address, bool) or not isinstance(i2c_address, int) or not 0 <= i2c_address <= 0x7F:
            raise ConfigurationError(f"I2C address must be a 7-bit integer, got {i2c_address!r}")
        try:
            self._bus, self._owns_bus = resolve_bus(device)
        except ConfigurationError as exc:
            logger.warning("Cannot create BME280 on %r: %s", device, exc)
            raise
        self.i2c_address = i2c_address
        self.settings = settings or DEFAULT_SETTINGS
        self.cache_calibration = cache_calibration
        self._calibration: Optional[CalibrationSet] = None

    # ------------------------------------------------------------------ accessors
    def all(self) -> Reading:
        """Return temperature, pressure and humidity from one bus cycle."""
        return self._data()

    def temperature(self) -> float:
        """Temperature in Celsius."""
        return self._data().t

    def pressure(self) -> float:
        """Pressure in hectoPascal."""
        return self._data().p

    def humidity(self) -> float:
        """Relative humidity in percent (0.0-100.0)."""
        return self._data().h

    # ------------------------------------------------------------------ calibration
    @property
    def calibration(self) -> Optional[CalibrationSet]:
        """The last calibration set read from the chip, if any."""
        return self._calibration

    def refresh_calibration(self) -> CalibrationSet:
        """Read the trim constants from the chip and keep them."""
        self._calibration = read_calibration(self._bus, self.i2c_address)
        return self._calibration

    def _calib_params(self) -> CalibrationSet:
        if self.cache_calibration and self._calibration is not None:
            return self._calibration
        return self.refresh_calibration()

    # ------------------------------------------------------------------ cycle
    def _data(self) -> Reading:
        with time_block(f"bme280@0x{self.i2c_address:02X} read cycle", emitter=logger.debug):
            write_settings(self._bus, self.i2c_address, self.settings)
            calib = self._calib_params()
            raw = parse_raw_sample(self._bus.read(self.i2c_address, REG_DATA, DATA_LEN))
            reading = compensate(raw, calib)
        logger.debug("BME280 0x%02X raw=%s -> %s", self.i2c_address, raw, reading)
        return reading

    # ------------------------------------------------------------------ lifecycle
    def close(self) -> None:
        if self._owns_bus:
            self._bus.close()

    def __enter__(self) -> "BME280":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"BME280(bus={self._bus!r}, i2c_address=0x{self.i2c_address:02X})"
