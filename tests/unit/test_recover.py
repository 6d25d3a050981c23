"""Unit tests for majority-vote mileage recovery."""

from __future__ import annotations

import pytest

from conftest import put_field

from odo_tool.eeprom.codec import encode_mileage, raw_to_mileage
from odo_tool.eeprom.map import get_model
from odo_tool.eeprom.recover import majority, read_fields, recover_mileage, valid_values
from odo_tool.errors import NoValidFieldError

OFFSETS = (0x00, 0x04, 0x08, 0x0C)


def _image(*fields):
    buf = bytearray(16)
    for off, field in zip(OFFSETS, fields):
        put_field(buf, off, *field)
    return bytes(buf)


class TestMajority:

    def test_mode(self):
        assert majority([5, 5, 5, 7]) == 5

    def test_tie_goes_to_first_seen(self):
        assert majority([7, 5, 5, 7]) == 7
        assert majority([5, 7]) == 5

    def test_single(self):
        assert majority([42]) == 42


class TestRecover:

    def test_majority_vote(self):
        image = _image((5,), (5,), (5,), (7,))
        assert recover_mileage(image, OFFSETS) == raw_to_mileage(5)

    def test_tie_earliest_offset(self):
        image = _image((7,), (5,), (5,), (7,))
        assert recover_mileage(image, OFFSETS) == raw_to_mileage(7)

    def test_tie_follows_offset_order(self):
        image = _image((7,), (5,), (5,), (7,))
        assert recover_mileage(image, (0x04, 0x00, 0x08, 0x0C)) == raw_to_mileage(5)

    def test_invalid_fields_do_not_vote(self):
        # three corrupted copies of 9 must not outvote one good 3
        image = _image((9, 0), (9, 0), (9, 0), (3,))
        assert valid_values(image, OFFSETS) == [3]
        assert recover_mileage(image, OFFSETS) == raw_to_mileage(3)

    def test_out_of_bounds_offsets_skipped(self):
        image = _image((5,), (5,), (7,), (7,))
        assert recover_mileage(image, (0x00, 0x0E, 0x40)) == raw_to_mileage(5)

    def test_all_invalid(self):
        image = _image((1, 1), (2, 2), (3, 3), (4, 4))
        with pytest.raises(NoValidFieldError):
            recover_mileage(image, OFFSETS)

    def test_no_offsets(self):
        with pytest.raises(NoValidFieldError):
            recover_mileage(b"\x00\x00\xff\xff", ())

    def test_empty_image(self):
        with pytest.raises(NoValidFieldError):
            recover_mileage(b"", OFFSETS)

    def test_patched_model_image(self, ff_image, stamp):
        model = get_model("cb500x2023")
        image = stamp(ff_image, model.id, 12345)
        image[model.offsets[3]:model.offsets[3] + 4] = encode_mileage(99_999)
        assert recover_mileage(bytes(image), model.offsets) == 12323


class TestReadFields:

    def test_readings(self):
        image = _image((382,), (9, 0))
        readings = read_fields(image, (0x00, 0x04, 0x0E))
        assert [r.offset for r in readings] == [0x00, 0x04, 0x0E]

        good, bad, outside = readings
        assert good.valid and good.value == 382 and good.complement == 0xFE81
        assert good.mileage == 12323
        assert bad.in_bounds and not bad.valid and bad.mileage is None
        assert not outside.in_bounds and outside.value is None
