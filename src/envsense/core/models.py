"""Shared dataclasses for envsense readings."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Reading:
    # Celsius
    t: float
    # hectoPascal
    p: float
    # relative humidity in percent, 0.0-100.0
    h: float

    def as_dict(self) -> Dict[str, float]:
        return {"t": self.t, "p": self.p, "h": self.h}
