import pytest

from bmeutils.sensors import bme280_registers as reg
from bmeutils.sensors.bme280_calibration import (
    decode8,
    decode12,
    decode16,
    load_calibration,
    swap16,
    uint20,
)
from bmeutils.sensors.errors import TransportError

from conftest import FakeTransport, calibration_image


@pytest.mark.parametrize("raw,expected", [
    (0x0000, 0),
    (0x7FFF, 32767),
    (0x8000, -32768),
    (0xFC18, -1000),
    (0xFFFF, -1),
])
def test_decode16(raw, expected):
    assert decode16(raw) == expected


def test_decode16_every_value():
    for v in range(0x10000):
        assert decode16(v) == (v if v < 0x8000 else v - 0x10000)


def test_decode8_every_value():
    for v in range(0x100):
        assert decode8(v) == (v if v < 0x80 else v - 0x100)


@pytest.mark.parametrize("raw,expected", [(0x139, 313), (0x7FF, 2047), (0x800, -2048), (0xFFF, -1)])
def test_decode12(raw, expected):
    assert decode12(raw) == expected


def test_uint20_drops_low_nibble():
    assert uint20(0x7E, 0xED, 0x0F) == 0x7EED0
    assert uint20(0xFF, 0xFF, 0xF0) == 0xFFFFF


def test_swap16():
    # SMBus word from 0xFD/0xFE arrives LSB first
    assert swap16(0x3075) == 0x7530


def test_load_calibration_decodes_all_fields(calibration):
    fake = FakeTransport(calibration_image(calibration))
    assert load_calibration(fake, fake.address) == calibration


def test_load_calibration_negative_split_humidity(calibration):
    from dataclasses import replace

    calib = replace(calibration, dig_H4=-300, dig_H5=-7, dig_H6=-12, dig_H2=-2)
    fake = FakeTransport(calibration_image(calib))
    loaded = load_calibration(fake, fake.address)
    assert loaded.dig_H4 == -300
    assert loaded.dig_H5 == -7
    assert loaded.dig_H6 == -12
    assert loaded.dig_H2 == -2


def test_load_calibration_h1_h3_unsigned(calibration):
    from dataclasses import replace

    calib = replace(calibration, dig_H1=200, dig_H3=255)
    fake = FakeTransport(calibration_image(calib))
    loaded = load_calibration(fake, fake.address)
    assert loaded.dig_H1 == 200
    assert loaded.dig_H3 == 255


def test_split_nibbles_of_e5(calibration):
    regs = calibration_image(calibration)
    regs[reg.REG_DIG_H4] = 0x12
    regs[reg.REG_DIG_H45] = 0xAB
    regs[reg.REG_DIG_H5] = 0x03
    fake = FakeTransport(regs)
    loaded = load_calibration(fake, fake.address)
    assert loaded.dig_H4 == 0x12B
    assert loaded.dig_H5 == 0x03A


def test_load_calibration_transport_error_propagates(calibration):
    fake = FakeTransport(calibration_image(calibration))
    fake.fail_on.add(reg.REG_DIG_H6)
    with pytest.raises(TransportError):
        load_calibration(fake, fake.address)


def test_calibration_is_immutable(calibration):
    with pytest.raises(AttributeError):
        calibration.dig_T1 = 1
