"""
BME280 factory trim constants.

The chip stores its calibration in three blocks (datasheet table 16)::

  0x88..0x8D  dig_T1..dig_T3   <Hhh
  0x8E..0x9F  dig_P1..dig_P9   <Hhhhhhhhh
  0xA1        dig_H1           B
  0xE1..0xE7  dig_H2..dig_H6   <hB, three packed bytes, b

dig_H4 and dig_H5 are 12-bit values sharing the nibbles of 0xE5.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

REG_CALIB_T = 0x88
REG_CALIB_P = 0x8E
REG_CALIB_H1 = 0xA1
REG_CALIB_H2 = 0xE1

CALIB_T_LEN = 6
CALIB_P_LEN = 18
CALIB_H1_LEN = 1
CALIB_H2_LEN = 7

_T_FORMAT = "<Hhh"
_P_FORMAT = "<Hhhhhhhhh"
_H_FORMAT = "<BhBBBBb"


@dataclass(frozen=True)
class CalibrationSet:
    """dig_T, dig_P and dig_H as zero-indexed tuples (t[0] is dig_T1)."""

    t: Tuple[int, int, int]
    p: Tuple[int, ...]
    h: Tuple[int, ...]


def _check_length(name: str, block: bytes, expected: int) -> None:
    if len(block) != expected:
        raise ValueError(
            f"{name} calibration block must be {expected} bytes, got {len(block)}"
        )


def unpack_temperature(block: bytes) -> Tuple[int, int, int]:
    _check_length("temperature", block, CALIB_T_LEN)
    return struct.unpack(_T_FORMAT, bytes(block))


def unpack_pressure(block: bytes) -> Tuple[int, ...]:
    _check_length("pressure", block, CALIB_P_LEN)
    return struct.unpack(_P_FORMAT, bytes(block))


def unpack_humidity(block: bytes) -> Tuple[int, ...]:
    """
    Unpack the 8 humidity bytes (0xA1 followed by 0xE1..0xE7).

    H4 and H5 are reassembled from the three middle bytes exactly as the
    register layout packs them; the result is not sign-extended.
    """
    _check_length("humidity", block, CALIB_H1_LEN + CALIB_H2_LEN)
    h1, h2, h3, b0, b1, b2, h6 = struct.unpack(_H_FORMAT, bytes(block))
    h4 = (b0 << 4) | (b1 & 0x0F)
    h5 = (b1 >> 4) | (b2 << 4)
    return (h1, h2, h3, h4, h5, h6)


def read_calibration(bus, address: int) -> CalibrationSet:
    """Read all trim blocks from the device at *address* on *bus*."""
    dig_t = unpack_temperature(bus.read(address, REG_CALIB_T, CALIB_T_LEN))
    dig_p = unpack_pressure(bus.read(address, REG_CALIB_P, CALIB_P_LEN))
    dig_h = unpack_humidity(
        bus.read(address, REG_CALIB_H1, CALIB_H1_LEN)
        + bus.read(address, REG_CALIB_H2, CALIB_H2_LEN)
    )
    logger.debug("Calibration 0x%02X: T=%s P=%s H=%s", address, dig_t, dig_p, dig_h)
    return CalibrationSet(t=dig_t, p=dig_p, h=dig_h)
