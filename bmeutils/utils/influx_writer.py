# bmeutils/utils/influx_writer.py

from influxdb_client import InfluxDBClient, Point
from influxdb_client.client.write_api import SYNCHRONOUS
from bmeutils import config
from bmeutils.utils.logger import log, error


def _get_client():
    if not config.INFLUX_URL or not config.INFLUX_TOKEN:
        error("Influx configuration missing.")
        return None
    return InfluxDBClient(
        url=config.INFLUX_URL,
        token=config.INFLUX_TOKEN,
        org=config.INFLUX_ORG
    )


def log_metric(measurement, fields: dict, tags: dict = None) -> bool:
    """
    Writes one point to InfluxDB.
    :param measurement: e.g. "bme280"
    :param fields: values as dict, e.g. {"temp": 21.4}
    :param tags: optional extra tags, e.g. {"host": "pi"}
    :return: True if the point was written
    """
    client = _get_client()
    if not client:
        return False

    write_api = client.write_api(write_options=SYNCHRONOUS)

    point = Point(measurement).tag("station", config.STATION_ID)

    if tags:
        for k, v in tags.items():
            point = point.tag(k, v)

    for key, val in fields.items():
        point = point.field(key, val)

    try:
        write_api.write(bucket=config.INFLUX_BUCKET, record=point)
        log(f"{measurement}: {fields} -> written to Influx")
        return True
    except Exception as e:
        error(f"Influx write failed: {e}")
        return False
    finally:
        client.close()
