# eeprom/detect.py
"""Определение модели по содержимому дампа.

Правила проверяются строго по порядку, побеждает первое сработавшее.
Последнее правило (titan160) срабатывает всегда, даже без признаков.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .codec import read_field
from .map import MODELS, ModelDefinition


@dataclass(frozen=True)
class Rule:
    model_id: str
    test: Callable[[bytes, ModelDefinition], bool]


def all_checksums_valid(image: bytes, model: ModelDefinition) -> bool:
    for off in model.offsets:
        field = read_field(image, off)
        if field is None or not field.is_valid:
            return False
    return True


def leading_values_positive(image: bytes, model: ModelDefinition) -> bool:
    # слабый признак: только первые два поля и только value > 0
    for off in model.offsets[:2]:
        field = read_field(image, off)
        if field is None or field.value <= 0:
            return False
    return True


def no_evidence(image: bytes, model: ModelDefinition) -> bool:
    return True


RULES: Tuple[Rule, ...] = (
    Rule("biz2018", all_checksums_valid),
    Rule("crosser150", all_checksums_valid),
    Rule("cb500x2023", leading_values_positive),
    Rule("titan160", no_evidence),
)


def detect_model(image: bytes, hint: Optional[str] = None) -> str:
    """Вернуть id модели. Известная подсказка возвращается без проверки образа."""

    if hint and hint in MODELS:
        return hint
    return next(r.model_id for r in RULES if r.test(image, MODELS[r.model_id]))
