"""Tests for the individual feature computations."""
from __future__ import annotations

import math

import numpy as np
import pytest

from conftest import binary_noise_buffer, solid_buffer
from detection.features import (
    FeatureExtractor,
    channel_std_dev,
    edge_energy,
    mean_saturation,
    size_proxy_kb,
    to_grayscale,
)
from detection.pixels import PixelBuffer
from utils.validators import InvalidInputError


def test_grayscale_uses_luma_weights() -> None:
    data = np.zeros((2, 3, 3), dtype=np.uint8)
    data[0, 0] = (255, 0, 0)
    data[0, 1] = (0, 255, 0)
    data[0, 2] = (0, 0, 255)
    gray = to_grayscale(PixelBuffer(data))

    assert gray.shape == (2, 3)
    assert gray[0, 0] == pytest.approx(0.299 * 255)
    assert gray[0, 1] == pytest.approx(0.587 * 255)
    assert gray[0, 2] == pytest.approx(0.114 * 255)
    assert gray[1, 0] == 0.0


def test_edge_energy_single_spike() -> None:
    gray = np.zeros((3, 3))
    gray[1, 1] = 10.0
    # one interior pixel, Laplacian -40
    assert edge_energy(gray) == pytest.approx(40.0)


def test_edge_energy_averages_over_interior_only() -> None:
    gray = np.zeros((4, 5))
    gray[1, 1] = 6.0
    # interior is 3x2 = 6 pixels: centre -24, two interior neighbours +6 each
    assert edge_energy(gray) == pytest.approx((24 + 6 + 6) / 6)


def test_edge_energy_flat_is_zero() -> None:
    assert edge_energy(np.full((64, 64), 37.0)) == pytest.approx(0.0, abs=1e-9)


def test_edge_energy_requires_three_pixels() -> None:
    with pytest.raises(InvalidInputError):
        edge_energy(np.zeros((2, 10)))


def test_channel_std_dev_half_black_half_white() -> None:
    data = np.zeros((64, 64, 3), dtype=np.uint8)
    data[:, 32:] = 255
    assert channel_std_dev(PixelBuffer(data)) == pytest.approx(127.5)


def test_channel_std_dev_averages_channels() -> None:
    data = np.zeros((64, 64, 3), dtype=np.uint8)
    # only the red channel varies
    data[:, 32:, 0] = 255
    assert channel_std_dev(PixelBuffer(data)) == pytest.approx(127.5 / 3)


def test_channel_std_dev_flat_is_zero() -> None:
    assert channel_std_dev(solid_buffer((200, 13, 77))) == 0.0


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((0, 0, 0), 0.0),
        ((255, 0, 0), 1.0),
        ((200, 100, 100), 0.5),
        ((90, 90, 90), 0.0),
    ],
)
def test_mean_saturation(rgb, expected) -> None:
    assert mean_saturation(solid_buffer(rgb)) == pytest.approx(expected)


def test_size_proxy_is_kilobytes() -> None:
    assert size_proxy_kb(2048) == 2.0
    assert size_proxy_kb(0) == 0.0


def test_extractor_on_minimum_buffer_is_finite() -> None:
    features = FeatureExtractor().extract(binary_noise_buffer(64, 64), 1024)

    for value in features.to_dict().values():
        assert math.isfinite(value)
        assert value >= 0.0


def test_extractor_upsamples_tiny_images() -> None:
    tiny = PixelBuffer(np.full((4, 4, 3), 50, dtype=np.uint8))
    features = FeatureExtractor().extract(tiny, 10)

    assert features.edge_energy < 1.0
    assert features.channel_std_dev < 1.0


def test_extractor_ignores_alpha() -> None:
    rgb = np.random.default_rng(5).integers(0, 256, size=(80, 70, 3), dtype=np.uint8)
    opaque = np.concatenate([rgb, np.full((80, 70, 1), 255, dtype=np.uint8)], axis=2)
    clear = np.concatenate([rgb, np.zeros((80, 70, 1), dtype=np.uint8)], axis=2)

    extractor = FeatureExtractor()
    assert extractor.extract(PixelBuffer(opaque), 100) == extractor.extract(PixelBuffer(clear), 100)


def test_extractor_rejects_raw_arrays() -> None:
    with pytest.raises(InvalidInputError):
        FeatureExtractor().extract(np.zeros((64, 64, 4), dtype=np.uint8), 10)
