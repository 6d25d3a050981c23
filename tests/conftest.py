"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import struct

import pytest

from odo_tool.eeprom.codec import encode_mileage
from odo_tool.eeprom.io import TemplateStore
from odo_tool.eeprom.map import MODELS


def put_field(buf: bytearray, offset: int, value: int, complement: int | None = None) -> None:
    """Write a raw (value, complement) pair; complement defaults to the valid one."""
    if complement is None:
        complement = 0xFFFF - value
    struct.pack_into("<HH", buf, offset, value, complement)


@pytest.fixture
def zero_image():
    """512-byte image of zeros: every mileage slot fails the checksum."""
    return bytearray(512)


@pytest.fixture
def ff_image():
    """512-byte image of 0xFF, like an erased EEPROM."""
    return bytearray(b"\xff" * 512)


@pytest.fixture
def stamp():
    """Return a helper that writes an encoded mileage at every offset of a model."""
    def _stamp(buf: bytearray, model_id: str, km: int) -> bytearray:
        field = encode_mileage(km)
        for off in MODELS[model_id].offsets:
            buf[off:off + 4] = field
        return buf
    return _stamp


@pytest.fixture
def template_store(tmp_path):
    """TemplateStore with an erased 512-byte template for every model."""
    for model in MODELS.values():
        (tmp_path / model.template_file).write_bytes(b"\xff" * 512)
    return TemplateStore(tmp_path)
