"""Shared image builders for the test-suite."""
from __future__ import annotations

from pathlib import Path
import sys

import numpy as np
import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from detection.pixels import PixelBuffer


def solid_buffer(rgb, width: int = 64, height: int = 64) -> PixelBuffer:
    data = np.zeros((height, width, 4), dtype=np.uint8)
    data[:, :, :3] = rgb
    data[:, :, 3] = 255
    return PixelBuffer(data)


def binary_noise_buffer(width: int = 128, height: int = 128, seed: int = 0) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    gray = rng.integers(0, 2, size=(height, width), dtype=np.uint8) * 255
    return PixelBuffer(np.stack([gray, gray, gray], axis=2))


@pytest.fixture
def png_file(tmp_path: Path):
    def _write(rgb=(128, 128, 128), size=(64, 64), name="sample.png") -> Path:
        path = tmp_path / name
        Image.new("RGB", size, tuple(rgb)).save(path, format="PNG")
        return path

    return _write
