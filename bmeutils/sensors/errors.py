# bmeutils/sensors/errors.py


class BME280Error(RuntimeError):
    """Base class for every failure reported by the BME280 driver."""


class TransportError(BME280Error):
    """The I2C bus failed (no ack, bus busy, I/O error)."""


class IdentityMismatch(BME280Error):
    """The chip id register did not hold the BME280 device id."""

    def __init__(self, observed, expected):
        self.observed = observed
        self.expected = expected
        super().__init__(
            f"Unexpected device identity: 0x{observed:02X} (expected 0x{expected:02X})"
        )


class NotInitialized(BME280Error):
    """A measurement was requested before initialize() completed."""

    def __init__(self, message="BME280 not initialized, call initialize() first"):
        super().__init__(message)


class UndefinedPressure(BME280Error):
    """The pressure formula's divisor is zero for this calibration/temperature."""
