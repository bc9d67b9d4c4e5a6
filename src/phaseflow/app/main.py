"""
Run with: python -m phaseflow
"""
from __future__ import annotations

import sys

import pyqtgraph as pg

from phaseflow.logging_config import setup_logging
from phaseflow.app.application import create_app
from phaseflow.app.ui.main_window import MainWindow

pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")
pg.setConfigOption("antialias", True)


def main() -> int:
    """Main entry point for the application."""
    setup_logging()

    app = create_app()
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
