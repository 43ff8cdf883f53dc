"""Feature Extractor
Four scalar statistics computed from the downscaled pixel buffer.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

import numpy as np

from utils.logger import setup_logger
from utils.validators import InvalidInputError, validate_file_length

from .pixels import PixelBuffer, downscale

logger = setup_logger(__name__)

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


@dataclass(frozen=True)
class FeatureSet:
    """Raw, un-normalized features. All values are non-negative."""

    edge_energy: float
    channel_std_dev: float
    saturation: float
    size_proxy_kb: float

    def to_dict(self) -> dict:
        return asdict(self)


def to_grayscale(pixels: PixelBuffer) -> np.ndarray:
    """Luminance map ``0.299R + 0.587G + 0.114B`` on the 0..255 scale."""

    rgb = pixels.rgb.astype(np.float64)
    gray = rgb @ LUMA_WEIGHTS
    gray.setflags(write=False)
    return gray


def edge_energy(gray: np.ndarray) -> float:
    """Mean absolute 4-neighbour Laplacian over interior pixels."""

    height, width = gray.shape
    if width < 3 or height < 3:
        raise InvalidInputError(f"Edge energy needs at least 3x3 pixels, got {width}x{height}")

    center = gray[1:-1, 1:-1]
    laplacian = (
        gray[1:-1, :-2]
        + gray[1:-1, 2:]
        + gray[:-2, 1:-1]
        + gray[2:, 1:-1]
        - 4.0 * center
    )
    interior = (width - 2) * (height - 2)
    return float(np.abs(laplacian).sum() / interior)


def channel_std_dev(pixels: PixelBuffer) -> float:
    """Average of the R, G and B population standard deviations."""

    rgb = pixels.rgb.reshape(-1, 3).astype(np.float64)
    mean = rgb.mean(axis=0)
    variance = (rgb * rgb).mean(axis=0) - mean * mean
    # rounding can push a flat channel slightly below zero
    variance = np.maximum(variance, 0.0)
    return float(np.sqrt(variance).mean())


def mean_saturation(pixels: PixelBuffer) -> float:
    """Mean HSV-style saturation ``(max - min) / max``; black pixels count as 0."""

    rgb = pixels.rgb.astype(np.float64) / 255.0
    high = rgb.max(axis=2)
    low = rgb.min(axis=2)
    sat = np.divide(high - low, high, out=np.zeros_like(high), where=high > 0)
    return float(sat.mean())


def size_proxy_kb(file_byte_length: int) -> float:
    return validate_file_length(file_byte_length) / 1024.0


class FeatureExtractor:
    """Turns a decoded pixel buffer plus its file size into a :class:`FeatureSet`."""

    def extract(self, pixels: PixelBuffer, file_byte_length: int) -> FeatureSet:
        if not isinstance(pixels, PixelBuffer):
            raise InvalidInputError(f"Expected a PixelBuffer, got {type(pixels).__name__}")
        size_kb = size_proxy_kb(file_byte_length)

        working = downscale(pixels)
        gray = to_grayscale(working)

        features = FeatureSet(
            edge_energy=edge_energy(gray),
            channel_std_dev=channel_std_dev(working),
            saturation=mean_saturation(working),
            size_proxy_kb=size_kb,
        )
        logger.debug(
            "Features %dx%d - edge: %.3f, std: %.3f, sat: %.4f, size: %.2f KB",
            working.width,
            working.height,
            features.edge_energy,
            features.channel_std_dev,
            features.saturation,
            features.size_proxy_kb,
        )
        return features
