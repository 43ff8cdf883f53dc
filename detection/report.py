"""Result messages and the plain-text report."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from config import DETECTION_SETTINGS, REPORT_SETTINGS
from utils.logger import setup_logger

from .detector import DetectionResult
from .scoring import is_ai_generated

logger = setup_logger(__name__)

AI_LABEL = "AI-generated"
REAL_LABEL = "Likely real"

ScoreLike = Union[DetectionResult, float, int]


def _as_score(value: ScoreLike) -> float:
    if isinstance(value, DetectionResult):
        return value.score
    return float(value)


def verdict_label(value: ScoreLike) -> str:
    return AI_LABEL if is_ai_generated(_as_score(value)) else REAL_LABEL


def format_message(value: ScoreLike) -> str:
    """One-line message shown under the preview, e.g. ``Likely real - 42.0%``."""

    score = _as_score(value)
    return f"{verdict_label(score)} - {score:.1f}%"


def threshold_note() -> str:
    threshold = DETECTION_SETTINGS["ai_threshold"]
    return f"Scores >= {threshold:g}% are flagged as AI-generated (Heuristic)."


def build_report(value: ScoreLike) -> str:
    score = _as_score(value)
    lines = [
        REPORT_SETTINGS["title"],
        f"Score: {score:.2f}%",
        f"Flag: {verdict_label(score)}",
        f"Method: {REPORT_SETTINGS['method']}",
    ]
    if isinstance(value, DetectionResult) and value.source is not None:
        lines.append(f"File: {value.source.name}")
    lines.append(REPORT_SETTINGS["disclaimer"])
    return "\n".join(lines)


def save_report(value: ScoreLike, destination: Path | str | None = None) -> Path:
    """Write :func:`build_report` to *destination* (a file or a directory)."""

    if destination is None:
        path = Path(REPORT_SETTINGS["default_filename"])
    else:
        path = Path(destination)
        if path.is_dir():
            path = path / REPORT_SETTINGS["default_filename"]

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(build_report(value) + "\n", encoding="utf-8")
    logger.info("Report written to %s", path)
    return path
