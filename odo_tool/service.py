# service.py
"""Запросы верхнего уровня: сгенерировать шаблон с пробегом и прочитать пробег из дампа."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .eeprom.detect import detect_model
from .eeprom.io import TemplateStore
from .eeprom.map import get_model
from .eeprom.patch import patch_template
from .eeprom.recover import recover_mileage
from .errors import InvalidMileageError


@dataclass(frozen=True)
class PatchResult:
    model_id: str
    mileage: int
    data: bytes

    @property
    def filename(self) -> str:
        return suggested_filename(self.model_id, self.mileage)


@dataclass(frozen=True)
class MileageReading:
    model_id: str
    mileage: int

    def as_dict(self) -> dict:
        return {"modelId": self.model_id, "mileage": self.mileage}


def suggested_filename(model_id: str, km: int) -> str:
    return f"{model_id}_{km}km.bin"


def parse_mileage(raw) -> int:
    """Принимает int или строку с целым числом >= 0."""

    if isinstance(raw, bool):
        raise InvalidMileageError(raw)
    if isinstance(raw, int):
        km = raw
    else:
        try:
            km = int(str(raw).strip(), 10)
        except ValueError:
            raise InvalidMileageError(raw) from None
    if km < 0:
        raise InvalidMileageError(raw)
    return km


def build_patched_template(model_id: str, target_mileage, store: TemplateStore) -> PatchResult:
    model = get_model(model_id)
    km = parse_mileage(target_mileage)
    template = store.load(model)
    return PatchResult(model.id, km, patch_template(template, model, km))


def read_mileage(image: bytes, model_hint: Optional[str] = None) -> MileageReading:
    model_id = detect_model(image, model_hint)
    km = recover_mileage(image, get_model(model_id).offsets)
    return MileageReading(model_id, km)
