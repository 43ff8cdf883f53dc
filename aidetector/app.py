"""GUI entry point for the AI Image Detector."""
from __future__ import annotations

import sys

from PyQt6.QtWidgets import QApplication

from config import APP_NAME, APP_VERSION
from detection.detector import AIImageDetector

from .core.session import AnalysisSession
from .ui.main_window import MainWindow


def main(argv: list[str] | None = None) -> int:
    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    window = MainWindow(AIImageDetector(), AnalysisSession())
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
