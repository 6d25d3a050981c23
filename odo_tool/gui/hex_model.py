# gui/hex_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QBrush, QColor
from typing import Dict, List

from ..eeprom.codec import FIELD_SIZE

BYTES_PER_ROW = 16

COLOR_VALID = QColor(46, 90, 52)      # зелёный: CRC сошлась
COLOR_INVALID = QColor(110, 40, 40)   # красный: поле битое


class FieldHexModel(QAbstractTableModel):
    """
    Табличная модель дампа: 16 байт в строке + ASCII колонка.
    Только чтение; байты полей пробега подсвечиваются по результату проверки CRC.
    """
    def __init__(self, data: bytes = b""):
        super().__init__()
        self._buf = bytes(data)
        self._marks: Dict[int, bool] = {}   # индекс байта -> поле валидно

    # ---------- Публичный API ----------
    def load_bytes(self, data: bytes, readings: List = ()):
        self.beginResetModel()
        self._buf = bytes(data)
        self._marks.clear()
        for r in readings:
            if not r.in_bounds:
                continue
            for i in range(r.offset, r.offset + FIELD_SIZE):
                # перекрывающиеся поля: битое имеет приоритет
                self._marks[i] = self._marks.get(i, True) and r.valid
        self.endResetModel()

    # ---------- Qt model ----------
    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid(): return 0
        return (len(self._buf) + BYTES_PER_ROW - 1) // BYTES_PER_ROW

    def columnCount(self, parent=QModelIndex()) -> int:
        return BYTES_PER_ROW + 1  # + ASCII колонка

    def index_to_offset(self, row: int, col: int) -> int:
        return row * BYTES_PER_ROW + col

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid(): return None
        r, c = index.row(), index.column()

        # ASCII колонка
        if c == BYTES_PER_ROW:
            if role == Qt.DisplayRole:
                start = r * BYTES_PER_ROW
                chunk = self._buf[start:start + BYTES_PER_ROW]
                return "".join(chr(b) if 32 <= b <= 126 else "." for b in chunk)
            return None

        i = self.index_to_offset(r, c)
        if i >= len(self._buf):
            return None

        if role == Qt.DisplayRole:
            return f"{self._buf[i]:02X}"

        if role == Qt.TextAlignmentRole:
            return Qt.AlignCenter

        if role == Qt.BackgroundRole and i in self._marks:
            return QBrush(COLOR_VALID if self._marks[i] else COLOR_INVALID)

        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole: return None
        if orientation == Qt.Horizontal:
            if section < BYTES_PER_ROW: return f"+{section:02X}"
            return "ASCII"
        else:
            return f"{section*BYTES_PER_ROW:06X}"

    def flags(self, index):
        if not index.isValid(): return Qt.NoItemFlags
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable
