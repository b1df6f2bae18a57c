# bmeutils/sensors/bme280.py
"""
BME280 temperature / humidity / pressure sensor session.

    sensor = open_bme280()          # identify, load calibration, configure
    reading = sensor.read_all()     # BME280Reading(temperature_c=..., ...)

Initialization runs Uninitialized -> IdentityVerified -> CalibrationLoaded ->
Configured. Any failure on the way resets the session to Uninitialized and
re-raises, a half initialized session is never usable.
"""

import enum
import math
from dataclasses import dataclass
from typing import Optional

from .. import config
from ..utils.logger import log, warn, debug
from . import bme280_registers as reg
from .bme280_calibration import load_calibration, uint20, swap16
from .bme280_compensation import (
    compensate_temperature,
    compensate_humidity,
    compensate_pressure,
)
from .errors import IdentityMismatch, NotInitialized, UndefinedPressure
from .transport import SMBusTransport


class SessionState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    IDENTITY_VERIFIED = "identity_verified"
    CALIBRATION_LOADED = "calibration_loaded"
    CONFIGURED = "configured"


@dataclass(frozen=True)
class BME280Reading:
    """One measurement cycle, rounded to two decimals for display."""
    temperature_c: float
    humidity_percent: float
    pressure_pa: Optional[float]
    pressure_hpa: Optional[float]

    def as_dict(self) -> dict:
        return {
            "temperature_c": self.temperature_c,
            "humidity_percent": self.humidity_percent,
            "pressure_pa": self.pressure_pa,
            "pressure_hpa": self.pressure_hpa,
        }


class BME280:
    """BME280 on an I2C transport (see transport.py for the contract)."""

    def __init__(self, transport, address: int = reg.DEFAULT_I2C_ADDRESS):
        self.transport = transport
        self.address = address
        self.state = SessionState.UNINITIALIZED
        self.calibration = None

    @property
    def ready(self) -> bool:
        return self.state is SessionState.CONFIGURED

    def initialize(self) -> int:
        """Identify the chip, load its calibration and start measuring. Returns the chip id."""
        self._reset()
        try:
            chip_id = self.identify()
            self.state = SessionState.IDENTITY_VERIFIED

            self.calibration = load_calibration(self.transport, self.address)
            self.state = SessionState.CALIBRATION_LOADED
            debug(f"BME280 calibration: {self.calibration}")

            self.configure()
            self.state = SessionState.CONFIGURED
        except Exception:
            self._reset()
            raise

        bus = getattr(self.transport, "bus_num", None)
        where = f"on bus i2c-{bus}, " if bus is not None else ""
        log(f"BME280 found with ID 0x{chip_id:02X} {where}address 0x{self.address:02X}")
        return chip_id

    def identify(self) -> int:
        chip_id = self.transport.read_byte(self.address, reg.REG_CHIP_ID)
        if chip_id != reg.DEVICE_ID:
            raise IdentityMismatch(chip_id, reg.DEVICE_ID)
        return chip_id

    def configure(self):
        # ctrl_hum only takes effect after the following ctrl_meas write
        self.transport.write_byte(self.address, reg.REG_CTRL_HUM, reg.CTRL_HUM_VALUE)
        self.transport.write_byte(self.address, reg.REG_CTRL_MEAS, reg.CTRL_MEAS_VALUE)
        debug(
            f"BME280 configured: ctrl_hum=0x{reg.CTRL_HUM_VALUE:02X} "
            f"ctrl_meas=0x{reg.CTRL_MEAS_VALUE:02X}"
        )

    def _reset(self):
        self.state = SessionState.UNINITIALIZED
        self.calibration = None

    def _require_calibration(self):
        if not self.ready or self.calibration is None:
            raise NotInitialized()
        return self.calibration

    def read_temperature(self):
        """Return (temperature in degC, t_fine)."""
        calib = self._require_calibration()
        data = self.transport.read_block(self.address, reg.REG_TEMP, reg.RAW_20BIT_LENGTH)
        return compensate_temperature(uint20(data[0], data[1], data[2]), calib)

    def read_humidity(self, t_fine: int) -> float:
        calib = self._require_calibration()
        raw = swap16(self.transport.read_word(self.address, reg.REG_HUMIDITY))
        return compensate_humidity(raw, calib, t_fine)

    def read_pressure(self, t_fine: int) -> float:
        """Pressure in Pa, raises UndefinedPressure for a zero divisor."""
        calib = self._require_calibration()
        data = self.transport.read_block(self.address, reg.REG_PRESSURE, reg.RAW_20BIT_LENGTH)
        return compensate_pressure(uint20(data[0], data[1], data[2]), calib, t_fine)

    def read_all(self) -> BME280Reading:
        """Temperature first, then humidity and pressure from the same t_fine."""
        self._require_calibration()

        temperature, t_fine = self.read_temperature()
        humidity = self.read_humidity(t_fine)
        try:
            pressure = self.read_pressure(t_fine)
        except UndefinedPressure as e:
            warn(f"BME280 pressure sample dropped: {e}")
            pressure = None

        return BME280Reading(
            temperature_c=round(temperature, 2),
            humidity_percent=round(humidity, 2),
            pressure_pa=None if pressure is None else round(pressure, 2),
            pressure_hpa=None if pressure is None else round(pressure / 100.0, 2),
        )


def initialize(transport, address: int = reg.DEFAULT_I2C_ADDRESS) -> BME280:
    """Return a configured BME280 session on the given transport."""
    sensor = BME280(transport, address)
    sensor.initialize()
    return sensor


def open_bme280(bus: Optional[int] = None, address: Optional[int] = None) -> BME280:
    """Open the I2C bus from config and return an initialized session."""
    if bus is None:
        bus = getattr(config, "BME280_I2C_BUS", 1)
    if address is None:
        address = getattr(config, "BME280_I2C_ADDRESS", reg.DEFAULT_I2C_ADDRESS)

    transport = SMBusTransport(bus)
    try:
        return initialize(transport, address)
    except Exception:
        transport.close()
        raise


def calculate_dew_point(temp_c, hum):
    """Magnus formula for dew point in degree C."""
    if hum <= 0.0:
        return float("nan")

    a = 17.62
    b = 243.12
    alpha = ((a * temp_c) / (b + temp_c)) + math.log(hum / 100.0)
    return round((b * alpha) / (a - alpha), 2)
