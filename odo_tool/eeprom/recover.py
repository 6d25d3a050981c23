# eeprom/recover.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .codec import read_field, raw_to_mileage
from ..errors import NoValidFieldError


@dataclass(frozen=True)
class FieldReading:
    """Состояние одного поля пробега (для отчёта `fields` и подсветки в GUI)."""

    offset: int
    in_bounds: bool
    value: Optional[int] = None
    complement: Optional[int] = None
    valid: bool = False
    mileage: Optional[int] = None


def read_fields(image: bytes, offsets: Iterable[int]) -> List[FieldReading]:
    out = []
    for off in offsets:
        field = read_field(image, off)
        if field is None:
            out.append(FieldReading(off, in_bounds=False))
            continue
        out.append(FieldReading(
            off, True, field.value, field.complement, field.is_valid, field.mileage,
        ))
    return out


def valid_values(image: bytes, offsets: Iterable[int]) -> List[int]:
    """Сырые value всех полей с верной контрольной суммой, в порядке смещений."""

    values = []
    for off in offsets:
        field = read_field(image, off)
        if field is not None and field.is_valid:
            values.append(field.value)
    return values


def majority(values: List[int]) -> int:
    # при равенстве побеждает значение, встретившееся раньше
    counts = Counter(values)
    top = max(counts.values())
    return next(v for v in values if counts[v] == top)


def recover_mileage(image: bytes, offsets: Iterable[int]) -> int:
    values = valid_values(image, offsets)
    if not values:
        raise NoValidFieldError("Не удалось определить пробег: нет полей с верной контрольной суммой")
    return raw_to_mileage(majority(values))
