"""
Register-level access to an I²C bus.

:class:`I2CBus` wraps an :class:`smbus2.SMBus` and exposes the two
transactions the sensor drivers need::

  - read(address, register, length) -> bytes
  - write(address, register, value)

``resolve_bus()`` turns the different ways a caller can name a bus (index,
device path, pre-opened handle) into one :class:`I2CBus`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Tuple, Union

from smbus2 import SMBus

from .errors import BusError, ConfigurationError, DeviceNotFound

logger = logging.getLogger(__name__)

BusSource = Union[int, str, "os.PathLike[str]", "I2CBus", SMBus]


def device_path(index: int) -> Path:
    """Return the i2c-dev node for bus *index*."""
    return Path(f"/dev/i2c-{index}")


class I2CBus:
    """Thin adapter over smbus2 that reports failures as :class:`BusError`."""

    def __init__(self, smbus: Any, *, owned: bool = False, name: str = "") -> None:
        self._smbus = smbus
        self.owned = owned
        self.name = name or repr(smbus)
        self._closed = False

    @classmethod
    def open(cls, path: Union[str, "os.PathLike[str]"]) -> "I2CBus":
        """Open the device node at *path*; the returned bus owns the handle."""
        path = Path(path)
        if not path.exists():
            raise DeviceNotFound(
                f"I2C device {path} not found. Is the I2C kernel module enabled?"
            )
        try:
            smbus = SMBus(str(path))
        except FileNotFoundError as exc:
            raise DeviceNotFound(f"I2C device {path} not found: {exc}") from exc
        except OSError as exc:
            raise ConfigurationError(f"Could not open I2C device {path}: {exc}") from exc
        logger.debug("Opened I2C bus %s", path)
        return cls(smbus, owned=True, name=str(path))

    def read(self, address: int, register: int, length: int) -> bytes:
        try:
            data = self._smbus.read_i2c_block_data(address, register, length)
        except OSError as exc:
            raise BusError(
                f"read of {length} byte(s) from register 0x{register:02X} "
                f"at address 0x{address:02X} on {self.name} failed: {exc}"
            ) from exc
        if len(data) != length:
            raise BusError(
                f"short read from register 0x{register:02X} at address "
                f"0x{address:02X}: expected {length} byte(s), got {len(data)}"
            )
        return bytes(data)

    def write(self, address: int, register: int, value: int) -> None:
        try:
            self._smbus.write_byte_data(address, register, value & 0xFF)
        except OSError as exc:
            raise BusError(
                f"write of 0x{value & 0xFF:02X} to register 0x{register:02X} "
                f"at address 0x{address:02X} on {self.name} failed: {exc}"
            ) from exc

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._smbus.close()

    def __enter__(self) -> "I2CBus":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"I2CBus({self.name!r}, owned={self.owned})"


def resolve_bus(source: BusSource) -> Tuple[I2CBus, bool]:
    """
    Normalise *source* into an :class:`I2CBus`.

    Resolution order: integer index (``/dev/i2c-N``), path string, then a
    pre-built handle (:class:`I2CBus` or :class:`smbus2.SMBus`). Returns the
    bus and whether the caller now owns it (i.e. must close it).

    Missing device nodes raise :class:`DeviceNotFound` before anything is
    opened; unsupported types raise :class:`ConfigurationError`.
    """
    # bool is an int subclass but never a bus index
    if isinstance(source, int) and not isinstance(source, bool):
        if source < 0:
            raise ConfigurationError(f"I2C bus index must be >= 0, got {source}")
        source = device_path(source)

    if isinstance(source, (str, os.PathLike)):
        return I2CBus.open(source), True

    if isinstance(source, I2CBus):
        return source, False

    if isinstance(source, SMBus):
        return I2CBus(source, name=f"SMBus(fd={source.fd})"), False

    raise ConfigurationError(
        f"Unsupported I2C bus source {source!r} ({type(source).__name__}); "
        "expected a bus index, a device path, an I2CBus or an smbus2.SMBus"
    )
