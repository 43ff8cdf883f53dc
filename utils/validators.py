"""Validation helpers shared between the CLI, the GUI and the detection core."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from config import SUPPORTED_IMAGE_FORMATS

IMAGE_EXTENSIONS = {ext.lower() for ext in SUPPORTED_IMAGE_FORMATS}


class ValidationError(ValueError):
    """Raised when validation cannot be completed."""


class InvalidInputError(ValidationError):
    """Pixel data or file length the scoring pipeline cannot accept."""


class DecodeError(ValidationError):
    """The source image could not be turned into pixel data."""


@dataclass(frozen=True)
class ValidationResult:
    """Simple structure describing a validation outcome."""

    valid: bool
    message: str = ""


def _ensure_path(path: Path | str) -> Path:
    if isinstance(path, Path):
        return path
    return Path(path)


def _normalize_extension(path: Path) -> str:
    return path.suffix.lower()


def validate_image_path(path: Path | str) -> ValidationResult:
    """Check whether *path* refers to an existing image of a supported type."""

    candidate = _ensure_path(path)
    if not candidate.exists():
        return ValidationResult(False, "File not found")
    if not candidate.is_file():
        return ValidationResult(False, "Not a regular file")

    suffix = _normalize_extension(candidate)
    if suffix not in IMAGE_EXTENSIONS:
        return ValidationResult(False, f"Unsupported file type: {suffix or 'unknown'}")

    return ValidationResult(True, "OK")


def validate_file_length(value) -> int:
    """Return *value* as a non-negative ``int`` or raise :class:`InvalidInputError`."""

    # bool is an Integral but never a meaningful byte count
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"File length must be an integer, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"File length must be non-negative, got {value}")
    return int(value)


def validate_dimensions(width, height, minimum: int = 1) -> None:
    """Raise :class:`InvalidInputError` unless both sides are at least *minimum*."""

    for name, side in (("width", width), ("height", height)):
        if isinstance(side, bool) or not isinstance(side, numbers.Integral):
            raise InvalidInputError(f"Buffer {name} must be an integer, got {side!r}")
        if side < minimum:
            raise InvalidInputError(f"Buffer {name} must be >= {minimum}, got {side}")


def supported_extensions() -> Iterable[str]:
    """Return the collection of supported image file extensions."""

    return sorted(IMAGE_EXTENSIONS)


__all__ = [
    "DecodeError",
    "InvalidInputError",
    "ValidationError",
    "ValidationResult",
    "supported_extensions",
    "validate_dimensions",
    "validate_file_length",
    "validate_image_path",
]
