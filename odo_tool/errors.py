"""Исключения ядра: каждое завершает один запрос, повторов нет."""

from __future__ import annotations

from pathlib import Path


class OdoToolError(Exception):
    """Базовое исключение для всех ошибок odo-tool."""


class InvalidModelError(OdoToolError):
    """Неизвестный идентификатор модели."""

    def __init__(self, model_id: str) -> None:
        self.model_id = model_id
        super().__init__(f"Неизвестная модель: {model_id!r}")


class InvalidMileageError(OdoToolError):
    """Пробег отрицательный или не число."""

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"Некорректный пробег: {raw!r}")


class ValueOutOfRangeError(OdoToolError):
    """Масштабированное значение не помещается в 16 бит."""

    def __init__(self, mileage: int, value: int) -> None:
        self.mileage = mileage
        self.value = value
        super().__init__(f"Пробег {mileage} даёт значение 0x{value:X} > 0xFFFF")


class OffsetOutOfBoundsError(OdoToolError):
    """Смещение поля пробега не помещается в буфер."""

    def __init__(self, offset: int, size: int) -> None:
        self.offset = offset
        self.size = size
        super().__init__(f"Смещение 0x{offset:X} за пределами образа ({size} байт)")


class NoValidFieldError(OdoToolError):
    """Ни одно поле не прошло проверку контрольной суммы."""


class UnreadableTemplateError(OdoToolError):
    """Шаблон не найден или не читается."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Не удалось прочитать шаблон {self.path}: {reason}")
