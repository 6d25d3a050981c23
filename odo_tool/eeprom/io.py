# eeprom/io.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from .map import MODELS, ModelDefinition
from ..errors import UnreadableTemplateError


# ---- Хранилище шаблонов (только чтение) ----
@dataclass
class TemplateStore:
    root: Path

    def __post_init__(self):
        self.root = Path(self.root)

    def path_for(self, model: ModelDefinition) -> Path:
        return self.root / model.template_file

    def load(self, model: ModelDefinition) -> bytes:
        path = self.path_for(model)
        try:
            return path.read_bytes()
        except OSError as e:
            raise UnreadableTemplateError(path, e.strerror or str(e)) from e

    def available(self) -> List[str]:
        return [m.id for m in MODELS.values() if self.path_for(m).is_file()]


# ---- Файлы образов ----
def read_image(path: Path) -> bytes:
    return Path(path).read_bytes()


def save_image(data: bytes, out_path: Path) -> dict:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(data)
    return {"bytes": len(data), "out": str(out_path)}
