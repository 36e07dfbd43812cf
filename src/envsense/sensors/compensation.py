"""
BME280 compensation formulas.

Floating-point port of the vendor reference: raw 20-bit temperature and
pressure counts and the 16-bit humidity count are turned into °C, hPa and
%RH using the factory trim constants. Temperature must be compensated first
because ``t_fine`` feeds both pressure and humidity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..core.models import Reading
from .calibration import CalibrationSet

DATA_LEN = 8


@dataclass(frozen=True)
class RawSample:
    raw_t: int
    raw_p: int
    raw_h: int


def parse_raw_sample(data: Sequence[int]) -> RawSample:
    """
    Assemble ADC counts from the 0xF7..0xFE burst.

    Byte order is press_msb, press_lsb, press_xlsb, temp_msb, temp_lsb,
    temp_xlsb, hum_msb, hum_lsb; the xlsb bytes carry 4 bits in the high
    nibble.
    """
    if len(data) != DATA_LEN:
        raise ValueError(f"data block must be {DATA_LEN} bytes, got {len(data)}")
    d = list(data)
    raw_p = (d[0] << 12) | (d[1] << 4) | (d[2] >> 4)
    raw_t = (d[3] << 12) | (d[4] << 4) | (d[5] >> 4)
    raw_h = (d[6] << 8) | d[7]
    return RawSample(raw_t=raw_t, raw_p=raw_p, raw_h=raw_h)


def compensate_temperature(raw_t: int, dig_t: Sequence[int]) -> Tuple[float, float]:
    """Return ``(temperature_c, t_fine)``."""
    v1 = (raw_t / 16384.0 - dig_t[0] / 1024.0) * dig_t[1]
    v2 = (raw_t / 131072.0 - dig_t[0] / 8192.0) * (raw_t / 131072.0 - dig_t[0] / 8192.0) * dig_t[2]
    t_fine = v1 + v2
    return t_fine / 5120.0, t_fine


def compensate_pressure(raw_p: int, t_fine: float, dig_p: Sequence[int]) -> float:
    """
    Return pressure in hPa.

    A zero denominator (e.g. an all-zero dig_P1) yields exactly 0.0.
    """
    v1 = (t_fine / 2.0) - 64000.0
    v2 = (((v1 / 4.0) * (v1 / 4.0)) / 2048) * dig_p[5]
    v2 = v2 + ((v1 * dig_p[4]) * 2.0)
    v2 = (v2 / 4.0) + (dig_p[3] * 65536.0)
    v1 = (((dig_p[2] * (((v1 / 4.0) * (v1 / 4.0)) / 8192)) / 8) + ((dig_p[1] * v1) / 2.0)) / 262144
    v1 = ((32768 + v1) * dig_p[0]) / 32768

    if v1 == 0:
        return 0.0

    p = ((1048576 - raw_p) - (v2 / 4096)) * 3125
    p = (p * 2.0) / v1 if p < 0x80000000 else (p / v1) * 2.0
    v1 = (dig_p[8] * (((p / 8.0) * (p / 8.0)) / 8192.0)) / 4096
    v2 = ((p / 4.0) * dig_p[7]) / 8192.0
    p = p + ((v1 + v2 + dig_p[6]) / 16.0)
    return p / 100.0


def compensate_humidity(raw_h: int, t_fine: float, dig_h: Sequence[int]) -> float:
    """
    Return relative humidity in percent, clamped to 0..100.

    When ``t_fine`` is exactly 76800 the formula is skipped and 0.0 returned.
    """
    h = t_fine - 76800.0
    if h != 0:
        h = (raw_h - (dig_h[3] * 64.0 + dig_h[4] / 16384.0 * h)) * (
            dig_h[1] / 65536.0 * (1.0 + dig_h[5] / 67108864.0 * h * (1.0 + dig_h[2] / 67108864.0 * h))
        )
        h = h * (1.0 - dig_h[0] * h / 524288.0)
        h = min(max(h, 0.0), 100.0)
    return h


def compensate(raw: RawSample, calib: CalibrationSet) -> Reading:
    t, t_fine = compensate_temperature(raw.raw_t, calib.t)
    p = compensate_pressure(raw.raw_p, t_fine, calib.p)
    h = compensate_humidity(raw.raw_h, t_fine, calib.h)
    return Reading(t=t, p=p, h=h)
