"""Pixel buffers and the image decoding collaborator.

Everything past this module works on :class:`PixelBuffer` only; source bytes,
file formats and Pillow errors stop here.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from config import DETECTION_SETTINGS
from utils.logger import setup_logger
from utils.validators import (
    DecodeError,
    InvalidInputError,
    validate_dimensions,
    validate_image_path,
)

logger = setup_logger(__name__)


def _as_uint8(data: np.ndarray) -> np.ndarray:
    if data.dtype == np.uint8:
        return data
    if data.dtype.kind not in "biuf":
        raise InvalidInputError(f"Pixel data must be numeric, got dtype {data.dtype}")
    if data.dtype.kind == "f":
        if not np.isfinite(data).all():
            raise InvalidInputError("Pixel data contains NaN or infinite samples")
        data = np.rint(data)
    if data.size and (data.min() < 0 or data.max() > 255):
        raise InvalidInputError(
            f"Pixel samples must lie in 0..255, got {data.min()}..{data.max()} ({data.dtype})"
        )
    return data.astype(np.uint8)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Read-only RGBA samples, shape ``(height, width, 4)``, dtype ``uint8``."""

    data: np.ndarray

    def __post_init__(self) -> None:
        data = self.data
        if not isinstance(data, np.ndarray):
            raise InvalidInputError(f"Pixel data must be a numpy array, got {type(data).__name__}")
        if data.ndim != 3 or data.shape[2] not in (3, 4):
            raise InvalidInputError(f"Pixel data must have shape (H, W, 3|4), got {data.shape}")
        validate_dimensions(data.shape[1], data.shape[0])

        rgba = _as_uint8(data)
        if rgba.shape[2] == 3:
            alpha = np.full(rgba.shape[:2] + (1,), 255, dtype=np.uint8)
            rgba = np.concatenate([rgba, alpha], axis=2)
        else:
            rgba = rgba.copy()
        rgba.setflags(write=False)
        object.__setattr__(self, "data", rgba)

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def rgb(self) -> np.ndarray:
        return self.data[:, :, :3]

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Build a buffer from a Pillow image of any mode."""

        width, height = image.size
        validate_dimensions(width, height)
        return cls(np.asarray(image.convert("RGBA"), dtype=np.uint8))


def target_size(width: int, height: int) -> tuple[int, int]:
    """Working size for a source of ``width`` x ``height``.

    The longer edge is limited to ``max_edge``; each side is floored and then
    raised to at least ``min_edge``.
    """

    validate_dimensions(width, height)
    max_edge = DETECTION_SETTINGS["max_edge"]
    min_edge = DETECTION_SETTINGS["min_edge"]

    scale = min(1.0, max_edge / max(width, height))
    new_width = max(min_edge, int(width * scale))
    new_height = max(min_edge, int(height * scale))
    return new_width, new_height


def downscale(pixels: PixelBuffer) -> PixelBuffer:
    """Resample *pixels* to :func:`target_size`, returning the same buffer if unchanged."""

    size = target_size(pixels.width, pixels.height)
    if size == pixels.size:
        return pixels

    logger.debug("Resampling %dx%d -> %dx%d", pixels.width, pixels.height, *size)
    # RGBA resize premultiplies alpha; keep colour under transparent pixels intact
    rgb = Image.fromarray(np.ascontiguousarray(pixels.rgb)).resize(size, Image.Resampling.BILINEAR)
    alpha = Image.fromarray(np.ascontiguousarray(pixels.data[:, :, 3])).resize(size, Image.Resampling.BILINEAR)
    rgb.putalpha(alpha)
    return PixelBuffer.from_image(rgb)


@dataclass(frozen=True)
class LoadedImage:
    """Decoded pixels together with what the scorer needs from the source file."""

    pixels: PixelBuffer
    file_size: int
    source: Path | None = None
    format: str | None = None

    @property
    def original_size(self) -> tuple[int, int]:
        return self.pixels.size


def _decode(stream, label: str) -> tuple[PixelBuffer, str | None]:
    try:
        with Image.open(stream) as image:
            if getattr(image, "n_frames", 1) > 1:
                raise DecodeError(f"Animated or multi-frame images are not supported: {label}")
            image.load()
            image_format = image.format
            pixels = PixelBuffer.from_image(image)
    except DecodeError:
        raise
    except InvalidInputError as exc:
        raise DecodeError(f"Image has no usable pixels: {label} ({exc})") from exc
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise DecodeError(f"Cannot decode image {label}: {exc}") from exc
    return pixels, image_format


def load_image(path: Path | str) -> LoadedImage:
    """Decode the image at *path*. Raises :class:`DecodeError` on any failure."""

    path = Path(path)
    check = validate_image_path(path)
    if not check.valid:
        raise DecodeError(f"{check.message}: {path}")

    pixels, image_format = _decode(path, str(path))
    file_size = path.stat().st_size
    logger.debug("Decoded %s (%s, %dx%d, %d bytes)", path, image_format, pixels.width, pixels.height, file_size)
    return LoadedImage(pixels=pixels, file_size=file_size, source=path, format=image_format)


def load_image_bytes(data: bytes, label: str = "<memory>") -> LoadedImage:
    """Decode an in-memory encoded image."""

    if not data:
        raise DecodeError(f"Empty image data: {label}")
    pixels, image_format = _decode(io.BytesIO(data), label)
    return LoadedImage(pixels=pixels, file_size=len(data), source=None, format=image_format)
