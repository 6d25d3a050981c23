# eeprom/codec.py
"""Кодирование пробега в 4-байтовое поле EEPROM.

Поле = два little-endian uint16: значение и его дополнение до 0xFFFF.

* ``value = floor(km * 0.031)``
* ``complement = 0xFFFF - value``

Преобразование с потерями: ``decode(encode(km))`` отличается от ``km``
не больше чем на ``ROUND_TRIP_TOLERANCE``.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidMileageError, ValueOutOfRangeError

SCALE = 0.031
MAX_RAW = 0xFFFF
FIELD_SIZE = 4
ROUND_TRIP_TOLERANCE = math.ceil(1 / SCALE)

_FIELD = struct.Struct("<HH")


@dataclass(frozen=True)
class MileageField:
    value: int
    complement: int

    @property
    def is_valid(self) -> bool:
        return self.value + self.complement == MAX_RAW

    @property
    def mileage(self) -> Optional[int]:
        return raw_to_mileage(self.value) if self.is_valid else None


def raw_to_mileage(value: int) -> int:
    # Math.round: половина всегда вверх
    return int(math.floor(value / SCALE + 0.5))


def mileage_to_raw(km: int) -> int:
    if km < 0:
        raise InvalidMileageError(km)
    value = math.floor(km * SCALE)
    if value > MAX_RAW:
        raise ValueOutOfRangeError(km, value)
    return value


def encode_mileage(km: int) -> bytes:
    """Пробег -> 4 байта (значение + дополнение)."""

    value = mileage_to_raw(km)
    return _FIELD.pack(value, MAX_RAW - value)


def parse_field(field: bytes) -> Optional[MileageField]:
    if len(field) < FIELD_SIZE:
        return None
    value, complement = _FIELD.unpack_from(field)
    return MileageField(value, complement)


def decode_field(field: bytes) -> Optional[int]:
    """4 байта -> пробег, либо None если контрольная сумма не сошлась."""

    parsed = parse_field(field)
    return parsed.mileage if parsed else None


def read_field(image: bytes, offset: int) -> Optional[MileageField]:
    if offset < 0 or offset + FIELD_SIZE > len(image):
        return None
    return parse_field(image[offset:offset + FIELD_SIZE])
