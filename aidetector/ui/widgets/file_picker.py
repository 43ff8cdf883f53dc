"""Image file picker with drag-and-drop support."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QWidget,
)

from utils.validators import supported_extensions


def image_filter(extensions: Iterable[str]) -> str:
    patterns = " ".join(f"*{ext}" for ext in extensions)
    return f"Images ({patterns});;All files (*)"


class FilePicker(QWidget):
    """Read-only path field plus a Browse button.

    ``pathChanged`` carries the new path, or ``None`` when cleared.
    """

    pathChanged = pyqtSignal(object)

    def __init__(self, parent: QWidget | None = None, dialog_title: str = "Select image") -> None:
        super().__init__(parent)
        self._dialog_title = dialog_title
        self._filters = image_filter(supported_extensions())

        self._line_edit = QLineEdit(self)
        self._line_edit.setReadOnly(True)
        self._line_edit.setPlaceholderText("No image selected")
        self._browse_button = QPushButton("Browse…", self)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._line_edit)
        layout.addWidget(self._browse_button)

        self._browse_button.clicked.connect(self._open_dialog)
        self.setAcceptDrops(True)

    def _open_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, self._dialog_title, filter=self._filters)
        # a cancelled dialog clears the selection
        self.path = Path(path) if path else None

    @property
    def path(self) -> Path | None:
        text = self._line_edit.text()
        return Path(text) if text else None

    @path.setter
    def path(self, value: Path | None) -> None:
        if value is None:
            self._line_edit.clear()
        else:
            self._line_edit.setText(str(value))
        self.pathChanged.emit(value)

    def clear(self) -> None:
        self._line_edit.clear()

    def setEnabled(self, enabled: bool) -> None:  # type: ignore[override]
        super().setEnabled(enabled)
        self.setAcceptDrops(enabled)

    # drag and drop events
    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:  # type: ignore[override]
        urls = event.mimeData().urls()
        if not urls:
            return
        local_path = urls[0].toLocalFile()
        if local_path:
            self.path = Path(local_path)
