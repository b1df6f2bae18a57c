# bmeutils/config.py
# Configuration of the BME280 station

try:
    from bmeutils.secret import API_KEY, API_URL
except ImportError:
    API_KEY = API_URL = None

####################################################################
# Station
####################################################################
STATION_ID = "BME001"
STATION_NAME = "e.g. garden"

###########################################################
# BME280
###########################################################
# Temperature, humidity and pressure sensor on I2C.
# Address is 0x76 (SDO to GND) or 0x77 (SDO to VDDIO).
# Set BME280_ENABLED = False to skip the logger completely.
BME280_ENABLED = True
BME280_I2C_BUS = 1
BME280_I2C_ADDRESS = 0x76
BME280_POLL_INTERVAL = 2.0  # seconds between readings in --loop mode

###########################################################
# Logging
###########################################################
LOG_DEBUG = False

###########################################################
# InfluxDB
###########################################################
# Either fill in directly or provide API_KEY/API_URL in bmeutils/secret.py
INFLUX_URL = None
INFLUX_TOKEN = None
INFLUX_ORG = None
INFLUX_BUCKET = None

###################################################################
# Do not change below
###################################################################
if API_KEY and API_URL:
    from bmeutils.utils.load_secrets import load_remote_secrets
    _secrets = load_remote_secrets(API_KEY, API_URL)
    if _secrets:
        INFLUX_URL    = _secrets["INFLUX_URL"]
        INFLUX_TOKEN  = _secrets["INFLUX_TOKEN"]
        INFLUX_ORG    = _secrets["INFLUX_ORG"]
        INFLUX_BUCKET = _secrets["INFLUX_BUCKET"]
        STATION_ID    = _secrets["STATION_ID"] or STATION_ID
