# gui/main_qt.py
from __future__ import annotations
import json, sys
from pathlib import Path

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QTabWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QFileDialog, QComboBox, QMessageBox, QSpinBox,
    QToolBar, QStatusBar, QGroupBox, QTextEdit, QTableView
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QFontDatabase, QPalette, QColor

from ..config import DATA_DIR
from ..eeprom.io import TemplateStore, read_image, save_image
from ..eeprom.map import get_model, model_ids
from ..eeprom.detect import detect_model
from ..eeprom.recover import read_fields
from ..errors import OdoToolError
from ..service import build_patched_template, read_mileage
from .hex_model import FieldHexModel

AUTO = "Авто"

# ---------- тема ----------
def setup_theme(app):
    app.setStyle("Fusion")
    pal = QPalette()
    pal.setColor(QPalette.Window, QColor(30, 32, 36))
    pal.setColor(QPalette.WindowText, QColor(220, 220, 220))
    pal.setColor(QPalette.Base, QColor(30, 30, 30))
    pal.setColor(QPalette.AlternateBase, QColor(45, 45, 45))
    pal.setColor(QPalette.Text, QColor(220, 220, 220))
    pal.setColor(QPalette.Button, QColor(45, 45, 45))
    pal.setColor(QPalette.ButtonText, QColor(220, 220, 220))
    pal.setColor(QPalette.Highlight, QColor(77, 163, 255))
    pal.setColor(QPalette.HighlightedText, QColor(255, 255, 255))
    app.setPalette(pal)

    app.setStyleSheet("""
        QWidget{font-size:13px; color:#dcdcdc;}
        QGroupBox{margin-top:1ex;}
        QGroupBox::title{color:#9aa3ad;}
        QPushButton{background-color:#2d2f33; color:#ffffff; border:1px solid #3c3f43; border-radius:4px; padding:4px;}
        QPushButton:hover{background-color:#3c3f43;}
        QTextEdit{background:#1e2024; color:#ffffff;}
        QTableView { selection-background-color:#4DA3FF; selection-color:#ffffff; }
    """)

# ---------- MainWindow ----------
class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Odo Tool")
        self.resize(1100, 760)

        # toolbar
        tb = QToolBar("Main"); tb.setMovable(False); self.addToolBar(tb)
        act_read = QAction("Чтение", self)
        act_write = QAction("Запись", self)
        tb.addAction(act_read); tb.addAction(act_write)
        act_read.triggered.connect(lambda: self.tabs.setCurrentWidget(self.page_read))
        act_write.triggered.connect(lambda: self.tabs.setCurrentWidget(self.page_write))

        self.setStatusBar(QStatusBar())

        central = QWidget(); root = QVBoxLayout(central)
        self.tabs = QTabWidget()
        root.addWidget(self.tabs, 3)

        grp_log = QGroupBox("Лог")
        layl = QVBoxLayout(grp_log)
        self.log = QTextEdit(); self.log.setReadOnly(True); layl.addWidget(self.log)
        root.addWidget(grp_log, 1)
        self.setCentralWidget(central)

        self.store = TemplateStore(DATA_DIR)
        self._build_read_tab()
        self._build_write_tab()

    # ----------- Чтение пробега -----------
    def _build_read_tab(self):
        w = QWidget(); root = QVBoxLayout(w)

        controls = QHBoxLayout()
        btn_open = QPushButton("Открыть .bin")
        self.cb_hint = self._model_combo(with_auto=True)
        self.lbl_result = QLabel("Пробег: —")
        for wdg in (btn_open, QLabel("Модель:"), self.cb_hint, self.lbl_result):
            controls.addWidget(wdg)
        controls.addStretch(1)
        root.addLayout(controls)

        self.table = QTableView()
        self.hex = FieldHexModel(b"")
        self.table.setModel(self.hex)
        fixed = QFontDatabase.systemFont(QFontDatabase.FixedFont); fixed.setPointSize(12)
        self.table.setFont(fixed)
        self.table.verticalHeader().setDefaultSectionSize(22)
        self.table.horizontalHeader().setDefaultAlignment(Qt.AlignCenter)
        self.table.setShowGrid(True)
        root.addWidget(self.table, 1)

        btn_open.clicked.connect(self._open_dump)
        self.cb_hint.currentIndexChanged.connect(lambda *_: self._analyze())
        self.current_dump: bytes | None = None
        self.current_path: Path | None = None

        self.page_read = w
        self.tabs.addTab(w, "Чтение")

    # ----------- Запись пробега -----------
    def _build_write_tab(self):
        w = QWidget(); root = QVBoxLayout(w)

        grp = QGroupBox("Новый шаблон")
        lay = QHBoxLayout(grp)
        self.cb_model = self._model_combo(with_auto=False)
        self.sp_km = QSpinBox(); self.sp_km.setRange(0, 2_000_000); self.sp_km.setSuffix(" км")
        self.sp_km.setSingleStep(1000)
        btn_save = QPushButton("Сохранить как…")
        for wdg in (QLabel("Модель:"), self.cb_model, QLabel("Пробег:"), self.sp_km, btn_save):
            lay.addWidget(wdg)
        root.addWidget(grp)

        self.lbl_store = QLabel(f"Шаблоны: {self.store.root}")
        self.lbl_store.setStyleSheet("color:#9aa3ad")
        root.addWidget(self.lbl_store)
        root.addStretch(1)

        btn_save.clicked.connect(self._save_patched)

        self.page_write = w
        self.tabs.addTab(w, "Запись")

    def _model_combo(self, with_auto: bool) -> QComboBox:
        cb = QComboBox()
        if with_auto:
            cb.addItem(AUTO, None)
        for model_id in model_ids():
            cb.addItem(model_id, model_id)
        return cb

    # ---------- utils ----------
    def _log(self, html: str):
        if hasattr(self, "log") and self.log is not None:
            self.log.append(html)
        self.statusBar().showMessage(self._strip(html), 3000)

    @staticmethod
    def _strip(html: str) -> str:
        import re
        return re.sub("<[^<]+?>", "", html)

    # ---------- actions ----------
    def _open_dump(self):
        p, _ = QFileDialog.getOpenFileName(self, "Открыть дамп", "", "BIN (*.bin)")
        if not p: return
        try:
            self.current_dump = read_image(Path(p))
        except OSError as e:
            QMessageBox.critical(self, "Открыть дамп", str(e)); return
        self.current_path = Path(p)
        self._log(f"Открыт файл: <b>{p}</b> ({len(self.current_dump)} байт)")
        self._analyze()

    def _analyze(self):
        if self.current_dump is None:
            return
        hint = self.cb_hint.currentData()
        model_id = detect_model(self.current_dump, hint)
        readings = read_fields(self.current_dump, get_model(model_id).offsets)
        self.hex.load_bytes(self.current_dump, readings)
        self.table.resizeColumnsToContents()

        try:
            reading = read_mileage(self.current_dump, hint)
        except OdoToolError as e:
            self.lbl_result.setText(f"Модель: {model_id} | пробег: —")
            self._log(f"<b style='color:#d7ba7d'>{e}</b>")
            return
        ok = sum(1 for r in readings if r.valid)
        self.lbl_result.setText(f"Модель: {reading.model_id} | пробег: {reading.mileage} км")
        self._log("<b>Результат:</b><pre style='margin-top:6px'>" +
                  json.dumps(reading.as_dict(), ensure_ascii=False) +
                  f"</pre>Валидных полей: {ok} из {len(readings)}")

    def _save_patched(self):
        model_id = self.cb_model.currentData()
        try:
            result = build_patched_template(model_id, self.sp_km.value(), self.store)
        except OdoToolError as e:
            QMessageBox.critical(self, "Запись пробега", str(e)); return
        p, _ = QFileDialog.getSaveFileName(self, "Сохранить как…", result.filename, "BIN (*.bin)")
        if not p: return
        try:
            saved = save_image(result.data, Path(p))
        except OSError as e:
            QMessageBox.critical(self, "Сохранение", str(e)); return
        self._log(f"<b>Сохранено:</b> {saved['out']} ({saved['bytes']} байт), пробег {result.mileage} км")

# ---------- entry ----------
def main():
    app = QApplication(sys.argv)
    setup_theme(app)
    win = MainWindow()
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
