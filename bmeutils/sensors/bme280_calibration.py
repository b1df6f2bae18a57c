# bmeutils/sensors/bme280_calibration.py
"""
Factory calibration of the BME280.

Every coefficient is read with one bus access at its fixed register and
decoded to its datasheet width. load_calibration() only returns a complete
CalibrationCoefficients; a bus error part way through propagates and leaves
nothing behind.
"""

from dataclasses import dataclass

from . import bme280_registers as reg


def decode16(value):
    """Two's complement of a 16-bit register value."""
    return value - 0x10000 if value >= 0x8000 else value


def decode12(value):
    return value - 0x1000 if value >= 0x800 else value


def decode8(value):
    return value - 0x100 if value >= 0x80 else value


def uint20(msb, lsb, xlsb):
    """20-bit ADC value from the three data bytes (low nibble of xlsb unused)."""
    return (msb << 12) | (lsb << 4) | (xlsb >> 4)


def swap16(word):
    """SMBus word (LSB first) to the MSB-first order of the humidity registers."""
    return ((word & 0xFF) << 8) | ((word >> 8) & 0xFF)


@dataclass(frozen=True)
class CalibrationCoefficients:
    dig_T1: int
    dig_T2: int
    dig_T3: int
    dig_P1: int
    dig_P2: int
    dig_P3: int
    dig_P4: int
    dig_P5: int
    dig_P6: int
    dig_P7: int
    dig_P8: int
    dig_P9: int
    dig_H1: int
    dig_H2: int
    dig_H3: int
    dig_H4: int
    dig_H5: int
    dig_H6: int


def load_calibration(transport, address):
    """Read and decode all calibration coefficients from the device."""
    def word(register):
        return transport.read_word(address, register)

    def byte(register):
        return transport.read_byte(address, register)

    dig_T1 = word(reg.REG_DIG_T1)
    dig_T2 = decode16(word(reg.REG_DIG_T2))
    dig_T3 = decode16(word(reg.REG_DIG_T3))

    dig_P1 = word(reg.REG_DIG_P1)
    dig_P2 = decode16(word(reg.REG_DIG_P2))
    dig_P3 = decode16(word(reg.REG_DIG_P3))
    dig_P4 = decode16(word(reg.REG_DIG_P4))
    dig_P5 = decode16(word(reg.REG_DIG_P5))
    dig_P6 = decode16(word(reg.REG_DIG_P6))
    dig_P7 = decode16(word(reg.REG_DIG_P7))
    dig_P8 = decode16(word(reg.REG_DIG_P8))
    dig_P9 = decode16(word(reg.REG_DIG_P9))

    dig_H1 = byte(reg.REG_DIG_H1)
    dig_H2 = decode16(word(reg.REG_DIG_H2))
    dig_H3 = byte(reg.REG_DIG_H3)

    # H4 and H5 share the nibbles of 0xE5
    e4 = byte(reg.REG_DIG_H4)
    e5 = byte(reg.REG_DIG_H45)
    e6 = byte(reg.REG_DIG_H5)
    dig_H4 = decode12((e4 << 4) | (e5 & 0x0F))
    dig_H5 = decode12((e6 << 4) | (e5 >> 4))

    dig_H6 = decode8(byte(reg.REG_DIG_H6))

    return CalibrationCoefficients(
        dig_T1=dig_T1, dig_T2=dig_T2, dig_T3=dig_T3,
        dig_P1=dig_P1, dig_P2=dig_P2, dig_P3=dig_P3,
        dig_P4=dig_P4, dig_P5=dig_P5, dig_P6=dig_P6,
        dig_P7=dig_P7, dig_P8=dig_P8, dig_P9=dig_P9,
        dig_H1=dig_H1, dig_H2=dig_H2, dig_H3=dig_H3,
        dig_H4=dig_H4, dig_H5=dig_H5, dig_H6=dig_H6,
    )
