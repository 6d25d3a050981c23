# eeprom/patch.py
from __future__ import annotations

from .codec import FIELD_SIZE, encode_mileage
from .map import ModelDefinition
from ..errors import OffsetOutOfBoundsError


def patch_template(template: bytes, model: ModelDefinition, km: int) -> bytes:
    """Записать пробег во все поля модели. Исходный шаблон не меняется."""

    field = encode_mileage(km)
    buf = bytearray(template)
    for off in model.offsets:
        if off + FIELD_SIZE > len(buf):
            raise OffsetOutOfBoundsError(off, len(buf))
        buf[off:off + FIELD_SIZE] = field
    return bytes(buf)
