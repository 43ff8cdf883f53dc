"""Main window: pick an image, preview it, analyze it, export the report."""
from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QThreadPool, Qt
from PyQt6.QtGui import QCloseEvent, QPixmap
from PyQt6.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from config import GUI_SETTINGS, REPORT_SETTINGS
from detection.detector import AIImageDetector, DetectionResult
from detection.report import format_message, save_report, threshold_note
from utils.logger import setup_logger
from utils.validators import ValidationError

from ..core.session import AnalysisSession, SessionState
from ..utils.threading import Worker, WorkerConfig
from .widgets.file_picker import FilePicker

logger = setup_logger(__name__)


class MainWindow(QMainWindow):
    """Single-view window driven by an :class:`AnalysisSession`."""

    def __init__(
        self,
        detector: AIImageDetector,
        session: AnalysisSession[DetectionResult] | None = None,
        thread_pool: QThreadPool | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        window = GUI_SETTINGS["window"]
        self.setWindowTitle(window["title"])
        self.resize(window["width"], window["height"])
        self.setMinimumSize(window["min_width"], window["min_height"])

        self._detector = detector
        self._session: AnalysisSession[DetectionResult] = session or AnalysisSession()
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._worker: Worker | None = None

        self._build_ui()
        self._session.subscribe(self._render)
        self._render(self._session)

    def _build_ui(self) -> None:
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QLabel("Upload an image to estimate whether it is AI-generated")
        header.setObjectName("viewTitle")
        layout.addWidget(header)

        self._file_picker = FilePicker(self)
        layout.addWidget(self._file_picker)

        self._preview = QLabel()
        self._preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview.setMinimumHeight(160)
        layout.addWidget(self._preview, 1)

        controls = QHBoxLayout()
        self._analyze_button = QPushButton("Analyze")
        self._reset_button = QPushButton("Reset")
        controls.addWidget(self._analyze_button)
        controls.addWidget(self._reset_button)
        controls.addStretch(1)
        layout.addLayout(controls)

        self._progress = QProgressBar()
        self._progress.setRange(0, 0)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        self._result_box = QFrame()
        self._result_box.setFrameShape(QFrame.Shape.StyledPanel)
        result_layout = QVBoxLayout(self._result_box)
        self._result_label = QLabel()
        self._result_label.setObjectName("resultMessage")
        result_layout.addWidget(self._result_label)
        note = QLabel(threshold_note())
        note.setStyleSheet("font-size: 12px; color: #475569;")
        result_layout.addWidget(note)
        self._download_button = QPushButton("Download report (TXT)")
        result_layout.addWidget(self._download_button, 0, Qt.AlignmentFlag.AlignLeft)
        layout.addWidget(self._result_box)

        self.setCentralWidget(container)
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        self._file_picker.pathChanged.connect(self._on_path_changed)
        self._analyze_button.clicked.connect(self._start_analysis)
        self._reset_button.clicked.connect(self._reset)
        self._download_button.clicked.connect(self._download_report)

    # ------------------------------------------------------------------
    # Session events
    # ------------------------------------------------------------------
    def _on_path_changed(self, path: Path | None) -> None:
        if self._session.busy:
            return
        try:
            self._session.load(path)
        except ValidationError as exc:
            QMessageBox.warning(self, "Unsupported file", str(exc))
            self._file_picker.clear()
            if self._session.can_reset:
                self._session.reset()

    def _reset(self) -> None:
        if self._session.can_reset:
            self._session.reset()

    def _start_analysis(self) -> None:
        if not self._session.can_analyze:
            return
        path = self._session.begin_analysis()
        worker = Worker(WorkerConfig(fn=self._detector.analyze_file, args=(path,)))
        worker.signals.result.connect(self._on_result)
        worker.signals.error.connect(self._on_error)
        worker.signals.discarded.connect(self._on_discarded)
        worker.signals.finished.connect(self._on_worker_finished)
        self._worker = worker
        self._thread_pool.start(worker)

    def _on_result(self, result: DetectionResult) -> None:
        if self._session.state is SessionState.ANALYZING:
            self._session.complete(result)

    def _on_error(self, exc: Exception) -> None:
        logger.error("Analysis failed: %s", exc)
        if self._session.state is SessionState.ANALYZING:
            self._session.fail(exc)
        QMessageBox.critical(self, "Analysis failed", f"Error analyzing image: {exc}")

    def _on_discarded(self) -> None:
        logger.debug("Dropped the result of an abandoned analysis")

    def _on_worker_finished(self) -> None:
        self._worker = None

    def closeEvent(self, event: QCloseEvent) -> None:
        # the running analysis cannot be interrupted; its result is dropped
        if self._worker is not None:
            self._worker.discard()
        super().closeEvent(event)

    def _download_report(self) -> None:
        result = self._session.result
        if result is None:
            return
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Save report",
            REPORT_SETTINGS["default_filename"],
            filter="Text (*.txt)",
        )
        if not path:
            return
        try:
            saved = save_report(result, path)
        except OSError as exc:
            QMessageBox.critical(self, "Save failed", str(exc))
            return
        self._status_bar.showMessage(f"Report saved: {saved}", 5000)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render(self, session: AnalysisSession[DetectionResult]) -> None:
        self._analyze_button.setEnabled(session.can_analyze)
        self._reset_button.setEnabled(session.can_reset)
        self._file_picker.setEnabled(not session.busy)
        self._progress.setVisible(session.busy)

        if session.state is SessionState.IDLE:
            self._file_picker.clear()
            self._preview.clear()
            self._preview.setVisible(False)
        elif session.path is not None:
            self._show_preview(session.path)

        result = session.result
        self._result_box.setVisible(session.result_visible and result is not None)
        if session.result_visible and result is not None:
            palette = GUI_SETTINGS["colors"]["ai" if result.is_ai_generated else "real"]
            self._result_box.setStyleSheet(
                f"QFrame {{ background: {palette['background']}; color: {palette['foreground']}; }}"
            )
            self._result_label.setText(f"<b>{format_message(result)}</b>")
            self._status_bar.showMessage(f"Analysis complete: {result.verdict}", 5000)
        elif session.busy:
            self._status_bar.showMessage("Analyzing…")
        elif session.error:
            self._status_bar.showMessage(f"Analysis failed: {session.error}", 5000)

    def _show_preview(self, path: Path) -> None:
        pixmap = QPixmap(str(path))
        self._preview.setVisible(True)
        if pixmap.isNull():
            self._preview.setText("Preview unavailable")
            return
        height = GUI_SETTINGS["preview_max_height"]
        self._preview.setPixmap(
            pixmap.scaledToHeight(min(height, pixmap.height()), Qt.TransformationMode.SmoothTransformation)
        )
