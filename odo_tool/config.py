import sys
from pathlib import Path

APP_NAME = "Odo CLI"

# работает и в exe (PyInstaller), и в исходниках
PKG_ROOT = Path(__file__).resolve().parent
BASE_RES = Path(getattr(sys, "_MEIPASS", PKG_ROOT))

# шаблоны .bin по одному на модель
DATA_DIR = BASE_RES / "data"

LOG_DIR = PKG_ROOT / "logs"
LOG_FILE = LOG_DIR / "session.jsonl"
