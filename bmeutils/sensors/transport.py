# bmeutils/sensors/transport.py
"""
I2C transport used by the BME280 driver.

The driver only needs four synchronous operations, each addressed by the
7-bit device address and a register:

    read_byte(address, register)          -> int (0..255)
    read_word(address, register)          -> int (SMBus word, first register in the low byte)
    read_block(address, register, length) -> list[int]
    write_byte(address, register, value)

Any object offering these methods can be handed to the driver (tests use an
in-memory register file). SMBusTransport is the real one for Linux /dev/i2c-N.
"""

import smbus2

from .errors import TransportError

I2C_BUS = 1


class SMBusTransport:
    """Transport over an smbus2.SMBus handle. Bus errors become TransportError."""

    def __init__(self, bus: int = I2C_BUS):
        self.bus_num = bus
        try:
            self.bus = smbus2.SMBus(bus)
        except FileNotFoundError as e:
            raise TransportError(
                f"I2C bus {bus} not found. Is I2C enabled (sudo raspi-config)?"
            ) from e
        except OSError as e:
            raise TransportError(f"Could not open I2C bus {bus}: {e}") from e

    def read_byte(self, address: int, register: int) -> int:
        try:
            return self.bus.read_byte_data(address, register)
        except OSError as e:
            raise TransportError(self._describe("reading byte", address, register, e)) from e

    def read_word(self, address: int, register: int) -> int:
        try:
            return self.bus.read_word_data(address, register)
        except OSError as e:
            raise TransportError(self._describe("reading word", address, register, e)) from e

    def read_block(self, address: int, register: int, length: int) -> list:
        try:
            data = self.bus.read_i2c_block_data(address, register, length)
        except OSError as e:
            raise TransportError(self._describe("reading block", address, register, e)) from e

        if len(data) != length:
            raise TransportError(
                f"Unexpected block length from 0x{address:02X} reg 0x{register:02X}: "
                f"{len(data)}, expected {length}"
            )
        return data

    def write_byte(self, address: int, register: int, value: int) -> None:
        try:
            self.bus.write_byte_data(address, register, value)
        except OSError as e:
            raise TransportError(self._describe("writing byte", address, register, e)) from e

    def close(self):
        self.bus.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _describe(self, action, address, register, exc):
        return (
            f"I2C error while {action} at 0x{address:02X} reg 0x{register:02X} "
            f"on bus {self.bus_num}: {exc}"
        )
