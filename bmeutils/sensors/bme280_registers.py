# bmeutils/sensors/bme280_registers.py
#
# BME280 register map (Bosch BST-BME280-DS002).

DEFAULT_I2C_ADDRESS = 0x76
ALTERNATE_I2C_ADDRESS = 0x77

# Identification
REG_CHIP_ID = 0xD0
DEVICE_ID = 0x60

REG_SOFT_RESET = 0xE0
SOFT_RESET_WORD = 0xB6

# Control
REG_CTRL_HUM = 0xF2
REG_STATUS = 0xF3
REG_CTRL_MEAS = 0xF4
REG_CONFIG = 0xF5

# Data (MSB first on the wire)
REG_PRESSURE = 0xF7   # ... 0xF9
REG_TEMP = 0xFA       # ... 0xFC
REG_HUMIDITY = 0xFD   # ... 0xFE
RAW_20BIT_LENGTH = 3

# Calibration, temperature/pressure block (LSB first)
REG_DIG_T1 = 0x88
REG_DIG_T2 = 0x8A
REG_DIG_T3 = 0x8C
REG_DIG_P1 = 0x8E
REG_DIG_P2 = 0x90
REG_DIG_P3 = 0x92
REG_DIG_P4 = 0x94
REG_DIG_P5 = 0x96
REG_DIG_P6 = 0x98
REG_DIG_P7 = 0x9A
REG_DIG_P8 = 0x9C
REG_DIG_P9 = 0x9E

# Calibration, humidity block
REG_DIG_H1 = 0xA1
REG_DIG_H2 = 0xE1
REG_DIG_H3 = 0xE3
REG_DIG_H4 = 0xE4     # H4[11:4], low nibble in 0xE5[3:0]
REG_DIG_H45 = 0xE5    # shared nibbles of H4 and H5
REG_DIG_H5 = 0xE6     # H5[11:4], low nibble in 0xE5[7:4]
REG_DIG_H6 = 0xE7

# Oversampling codes
OSR_SKIP = 0x00
OSR_1 = 0x01
OSR_2 = 0x02
OSR_4 = 0x03
OSR_8 = 0x04
OSR_16 = 0x05
OSR_16_ALT = 0x07  # 0x05..0x07 all select x16

# Power modes
MODE_SLEEP = 0x00
MODE_FORCED = 0x01
MODE_NORMAL = 0x03

# Fixed measurement profile written during initialization
CTRL_HUM_VALUE = OSR_1                                    # 0x01
CTRL_MEAS_VALUE = OSR_1 << 5 | OSR_16_ALT << 2 | MODE_NORMAL  # 0x3F
