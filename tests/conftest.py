import struct

import pytest

from bmeutils.sensors import bme280_registers as reg
from bmeutils.sensors.bme280_calibration import CalibrationCoefficients
from bmeutils.sensors.errors import TransportError

# Temperature/pressure values from the Bosch BMP280 datasheet example,
# humidity values from a real BME280 breakout.
DATASHEET_CALIBRATION = CalibrationCoefficients(
    dig_T1=27504, dig_T2=26435, dig_T3=-1000,
    dig_P1=36477, dig_P2=-10685, dig_P3=3024,
    dig_P4=2855, dig_P5=140, dig_P6=-7,
    dig_P7=15500, dig_P8=-14600, dig_P9=6000,
    dig_H1=75, dig_H2=362, dig_H3=0,
    dig_H4=313, dig_H5=50, dig_H6=30,
)

RAW_TEMP = 519888
RAW_PRESS = 415148
RAW_HUM = 30000


def calibration_image(c):
    """Register contents (address -> byte) holding calibration c."""
    regs = {}
    block = struct.pack(
        "<HhhHhhhhhhhh",
        c.dig_T1, c.dig_T2, c.dig_T3,
        c.dig_P1, c.dig_P2, c.dig_P3, c.dig_P4, c.dig_P5,
        c.dig_P6, c.dig_P7, c.dig_P8, c.dig_P9,
    )
    for i, b in enumerate(block):
        regs[reg.REG_DIG_T1 + i] = b

    regs[reg.REG_DIG_H1] = c.dig_H1
    h2 = struct.pack("<h", c.dig_H2)
    regs[reg.REG_DIG_H2] = h2[0]
    regs[reg.REG_DIG_H2 + 1] = h2[1]
    regs[reg.REG_DIG_H3] = c.dig_H3
    h4 = c.dig_H4 & 0xFFF
    h5 = c.dig_H5 & 0xFFF
    regs[reg.REG_DIG_H4] = h4 >> 4
    regs[reg.REG_DIG_H45] = (h4 & 0x0F) | ((h5 & 0x0F) << 4)
    regs[reg.REG_DIG_H5] = h5 >> 4
    regs[reg.REG_DIG_H6] = c.dig_H6 & 0xFF
    return regs


def data_image(raw_temp, raw_press, raw_hum):
    regs = {}
    for base, raw in ((reg.REG_PRESSURE, raw_press), (reg.REG_TEMP, raw_temp)):
        shifted = raw << 4
        regs[base] = (shifted >> 16) & 0xFF
        regs[base + 1] = (shifted >> 8) & 0xFF
        regs[base + 2] = shifted & 0xFF
    regs[reg.REG_HUMIDITY] = raw_hum >> 8
    regs[reg.REG_HUMIDITY + 1] = raw_hum & 0xFF
    return regs


class FakeTransport:
    """In-memory BME280 register file that records every bus access."""

    def __init__(self, registers=None, address=reg.DEFAULT_I2C_ADDRESS):
        self.address = address
        self.registers = dict(registers or {})
        self.calls = []
        self.writes = []
        self.fail_on = set()
        self.closed = False

    def _check(self, op, address, register):
        self.calls.append((op, register))
        if address != self.address:
            raise TransportError(f"no ack from 0x{address:02X}")
        if register in self.fail_on:
            raise TransportError(f"bus error at reg 0x{register:02X}")

    def read_byte(self, address, register):
        self._check("read_byte", address, register)
        return self.registers.get(register, 0)

    def read_word(self, address, register):
        self._check("read_word", address, register)
        return self.registers.get(register, 0) | (self.registers.get(register + 1, 0) << 8)

    def read_block(self, address, register, length):
        self._check("read_block", address, register)
        return [self.registers.get(register + i, 0) for i in range(length)]

    def write_byte(self, address, register, value):
        self._check("write_byte", address, register)
        self.writes.append((register, value))
        self.registers[register] = value

    def close(self):
        self.closed = True

    def registers_read(self):
        return [r for op, r in self.calls if op.startswith("read")]


@pytest.fixture
def calibration():
    return DATASHEET_CALIBRATION


@pytest.fixture
def transport():
    regs = {reg.REG_CHIP_ID: reg.DEVICE_ID}
    regs.update(calibration_image(DATASHEET_CALIBRATION))
    regs.update(data_image(RAW_TEMP, RAW_PRESS, RAW_HUM))
    return FakeTransport(regs)
