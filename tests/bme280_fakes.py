from __future__ import annotations

import struct
from typing import List, Optional, Tuple

# T/P trim and raw counts from the datasheet worked example; H trim is a
# typical production unit.
DIG_T = (27504, 26435, -1000)
DIG_P = (36477, -10685, 3024, 2855, 140, -7, 15500, -14600, 6000)
DIG_H1 = 75
DIG_H2 = 362
DIG_H3 = 0
DIG_H4 = 313
DIG_H5 = 50
DIG_H6 = 30

RAW_T = 519888
RAW_P = 415148
RAW_H = 30000


def humidity_block_e1(h2: int, h3: int, h4: int, h5: int, h6: int) -> bytes:
    b0 = (h4 >> 4) & 0xFF
    b1 = ((h5 & 0x0F) << 4) | (h4 & 0x0F)
    b2 = (h5 >> 4) & 0xFF
    return struct.pack("<hBBBBb", h2, h3, b0, b1, b2, h6)


def data_block(raw_p: int, raw_t: int, raw_h: int) -> bytes:
    return bytes(
        [
            (raw_p >> 12) & 0xFF,
            (raw_p >> 4) & 0xFF,
            (raw_p & 0x0F) << 4,
            (raw_t >> 12) & 0xFF,
            (raw_t >> 4) & 0xFF,
            (raw_t & 0x0F) << 4,
            (raw_h >> 8) & 0xFF,
            raw_h & 0xFF,
        ]
    )


class FakeSMBus:
    """Register file standing in for smbus2.SMBus; records every transaction."""

    def __init__(self, address: int = 0x76) -> None:
        self.address = address
        self.registers = bytearray(256)
        self.reads: List[Tuple[int, int, int]] = []
        self.writes: List[Tuple[int, int, int]] = []
        self.fail_on: Optional[str] = None
        self.closed = False

    def load(self, register: int, data: bytes) -> None:
        self.registers[register:register + len(data)] = data

    def read_i2c_block_data(self, i2c_addr: int, register: int, length: int) -> List[int]:
        if self.fail_on == "read" or i2c_addr != self.address:
            raise OSError(121, "Remote I/O error")
        self.reads.append((i2c_addr, register, length))
        return list(self.registers[register:register + length])

    def write_byte_data(self, i2c_addr: int, register: int, value: int) -> None:
        if self.fail_on == "write" or i2c_addr != self.address:
            raise OSError(121, "Remote I/O error")
        self.writes.append((i2c_addr, register, value))
        self.registers[register] = value

    def close(self) -> None:
        self.closed = True


def loaded_smbus(address: int = 0x76) -> FakeSMBus:
    smbus = FakeSMBus(address)
    smbus.load(0x88, struct.pack("<Hhh", *DIG_T))
    smbus.load(0x8E, struct.pack("<Hhhhhhhhh", *DIG_P))
    smbus.load(0xA1, bytes([DIG_H1]))
    smbus.load(0xE1, humidity_block_e1(DIG_H2, DIG_H3, DIG_H4, DIG_H5, DIG_H6))
    smbus.load(0xF7, data_block(RAW_P, RAW_T, RAW_H))
    return smbus


