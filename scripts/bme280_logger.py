#!/usr/bin/python3
"""
bme280_logger.py

Reads the BME280 once (default) or every BME280_POLL_INTERVAL seconds
(--loop), prints the values and writes them to InfluxDB.

    cd /home/pi/bme280 && python3 -m scripts.bme280_logger --loop
"""

import sys
import os
import time
import argparse

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from bmeutils import config
from bmeutils.sensors import bme280
from bmeutils.sensors.errors import BME280Error
from bmeutils.utils.logger import log, error
from bmeutils.utils import influx_writer


def report(reading, use_influx=True):
    """Print one reading and send it to Influx. Returns the field dict."""
    dewpoint = bme280.calculate_dew_point(reading.temperature_c, reading.humidity_percent)

    print(f"Station    : {config.STATION_NAME} ({config.STATION_ID})")
    print(f"Temperature: {reading.temperature_c:.2f} C")
    print(f"Humidity   : {reading.humidity_percent:.2f} %")
    if reading.pressure_hpa is not None:
        print(f"Pressure   : {reading.pressure_hpa:.2f} hPa")
    else:
        print("Pressure   : n/a")
    print(f"Dew point  : {dewpoint:.2f} C")

    fields = {
        "temp": float(reading.temperature_c),
        "hum": float(reading.humidity_percent),
        "dewpoint": float(dewpoint),
    }
    if reading.pressure_hpa is not None:
        fields["press"] = float(reading.pressure_hpa)

    if use_influx:
        influx_writer.log_metric("bme280", fields)
    return fields


def run(sensor, loop=False, interval=2.0, use_influx=True):
    """Read cycles until interrupted (loop) or once. Returns the exit code."""
    while True:
        try:
            report(sensor.read_all(), use_influx)
        except BME280Error as e:
            error(f"BME280 read error: {e}")
            if not loop:
                return 1

        if not loop:
            return 0
        time.sleep(interval)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Read BME280 temperature, humidity and pressure")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--once", action="store_true", help="single reading (default)")
    mode.add_argument("--loop", action="store_true", help="read continuously")
    parser.add_argument(
        "--interval", type=float,
        default=getattr(config, "BME280_POLL_INTERVAL", 2.0),
        help="seconds between readings in --loop mode",
    )
    parser.add_argument("--no-influx", action="store_true", help="do not write to InfluxDB")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if not config.BME280_ENABLED:
        print("BME280 is disabled. Skipping measurement.")
        return 0

    try:
        sensor = bme280.open_bme280()
    except BME280Error as e:
        error(f"BME280 initialization failed: {e}")
        return 1

    log("BME280 initialization succeeded")
    try:
        return run(sensor, loop=args.loop, interval=args.interval, use_influx=not args.no_influx)
    except KeyboardInterrupt:
        log("Stopped by user.")
        return 0
    finally:
        sensor.transport.close()


if __name__ == "__main__":
    sys.exit(main())
