# eeprom/map.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from ..errors import InvalidModelError


@dataclass(frozen=True)
class ModelDefinition:
    id: str
    template_file: str
    offsets: Tuple[int, ...]


def _stride(first: int, last: int, step: int = 4) -> Tuple[int, ...]:
    return tuple(range(first, last + 1, step))


# Поля пробега идут с шагом 4 байта; у Titan в конце ещё одна копия по 0xE2.
TITAN160 = ModelDefinition("titan160", "titan160.bin", _stride(0x0098, 0x00DC) + (0x00E2,))
BIZ2018 = ModelDefinition("biz2018", "biz2018.bin", _stride(0x005C, 0x0098))
CB500X2023 = ModelDefinition("cb500x2023", "cb500x2023.bin", _stride(0x0100, 0x013C))
CROSSER150 = ModelDefinition("crosser150", "crosser150_base.bin", _stride(0x00A0, 0x00D8))

MODELS: Mapping[str, ModelDefinition] = MappingProxyType(
    {m.id: m for m in (TITAN160, BIZ2018, CB500X2023, CROSSER150)}
)


def model_ids() -> list[str]:
    return list(MODELS)


def get_model(model_id: str) -> ModelDefinition:
    try:
        return MODELS[model_id]
    except (KeyError, TypeError):
        raise InvalidModelError(model_id) from None
