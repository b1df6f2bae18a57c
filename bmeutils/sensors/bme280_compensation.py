# bmeutils/sensors/bme280_compensation.py
"""
BME280 fixed-point compensation (integer formulas of the Bosch datasheet).

Pure functions, no bus access. compensate_temperature() returns the fine
temperature together with the reading; humidity and pressure take it as an
argument and are only meaningful for the t_fine of the same measurement cycle.

Python ints never overflow and ``>>`` is an arithmetic (floor) shift, which is
exactly the two's complement behaviour the 32/64-bit C reference relies on.
The only place where Python differs from C is integer division, see _div_trunc.
"""

from .errors import UndefinedPressure

HUMIDITY_MAX = 419430400  # 100 %RH in Q22.10, pre-shift


def _div_trunc(numerator, denominator):
    """Integer division rounding toward zero like C's int64 '/'."""
    q = abs(numerator) // abs(denominator)
    return q if (numerator < 0) == (denominator < 0) else -q


def compensate_temperature(raw_temp, calib):
    """Return (temperature in degC, t_fine) for a 20-bit raw temperature."""
    t1, t2, t3 = calib.dig_T1, calib.dig_T2, calib.dig_T3

    var1 = (((raw_temp >> 3) - (t1 << 1)) * t2) >> 11
    var2 = (((((raw_temp >> 4) - t1) * ((raw_temp >> 4) - t1)) >> 12) * t3) >> 14
    t_fine = var1 + var2

    temperature = ((t_fine * 5 + 128) >> 8) / 100.0
    return temperature, t_fine


def compensate_humidity(raw_hum, calib, t_fine):
    """Relative humidity in % for a 16-bit raw humidity value."""
    c = calib

    v = t_fine - 76800
    v = ((((raw_hum << 14) - (c.dig_H4 << 20) - (c.dig_H5 * v)) + 16384) >> 15) * (
        ((((((v * c.dig_H6) >> 10) * (((v * c.dig_H3) >> 11) + 32768)) >> 10)
          + 2097152) * c.dig_H2 + 8192) >> 14
    )
    v = v - (((((v >> 15) * (v >> 15)) >> 7) * c.dig_H1) >> 4)

    v = max(0, min(v, HUMIDITY_MAX))
    return (v >> 12) / 1024.0


def compensate_pressure(raw_press, calib, t_fine):
    """
    Pressure in Pa for a 20-bit raw pressure value.

    Uses the 64-bit variant of the datasheet formula and returns the Q24.8
    result as a float. Raises UndefinedPressure when the divisor term is zero.
    """
    c = calib

    var1 = t_fine - 128000
    var2 = var1 * var1 * c.dig_P6
    var2 = var2 + ((var1 * c.dig_P5) << 17)
    var2 = var2 + (c.dig_P4 << 35)
    var1 = ((var1 * var1 * c.dig_P3) >> 8) + ((var1 * c.dig_P2) << 12)
    var1 = (((1 << 47) + var1) * c.dig_P1) >> 33
    if var1 == 0:
        raise UndefinedPressure(
            f"Pressure undefined for t_fine={t_fine} (divisor is zero)"
        )

    p = 1048576 - raw_press
    p = _div_trunc(((p << 31) - var2) * 3125, var1)
    var1 = (c.dig_P9 * (p >> 13) * (p >> 13)) >> 25
    var2 = (c.dig_P8 * p) >> 19
    p = ((p + var1 + var2) >> 8) + (c.dig_P7 << 4)

    return p / 256.0
