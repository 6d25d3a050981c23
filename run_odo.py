from __future__ import annotations
import sys
import odo_tool.main as _cli_mod

def main():
    if len(sys.argv) == 1:
        # GUI (нужен extra "gui": PySide6)
        import odo_tool.gui.main_qt as _gui_mod
        _gui_mod.main()
    else:
        # CLI
        _cli_mod.app()

if __name__ == "__main__":
    main()
