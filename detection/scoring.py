"""Score Combiner
Maps a FeatureSet onto a bounded 0..100 AI-likelihood score.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Mapping, Protocol

from config import DETECTION_SETTINGS
from utils.logger import setup_logger

from .features import FeatureExtractor, FeatureSet
from .pixels import PixelBuffer

logger = setup_logger(__name__)


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in ``[0, 1)``, e.g. :class:`random.Random`."""

    def random(self) -> float:
        """Return the next uniform draw."""


class FixedRandomSource:
    """Always returns the same draw. ``0.5`` gives zero jitter."""

    def __init__(self, value: float = 0.5) -> None:
        if not 0.0 <= value < 1.0:
            raise ValueError(f"value must lie in [0, 1), got {value}")
        self.value = value

    def random(self) -> float:
        return self.value


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class NormalizedFeatures:
    edge_energy: float
    channel_std_dev: float
    saturation: float
    size_proxy: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ScoreBreakdown:
    """``raw_score`` is the weighted sum on 0..100 before jitter and clamping."""

    raw_score: float
    jitter: float
    score: float
    normalized: NormalizedFeatures

    @property
    def is_ai_generated(self) -> bool:
        return is_ai_generated(self.score)


def is_ai_generated(score: float, threshold: float | None = None) -> bool:
    """Verdict for *score*. The comparison is inclusive."""

    if threshold is None:
        threshold = DETECTION_SETTINGS["ai_threshold"]
    return score >= threshold


class ScoreCombiner:
    """Normalizes features, applies fixed weights and adds bounded jitter."""

    def __init__(self, settings: Mapping | None = None) -> None:
        settings = settings or DETECTION_SETTINGS
        self.weights = dict(settings["weights"])
        self.edge_ceiling = settings["edge_energy_ceiling"]
        self.std_ceiling = settings["channel_std_ceiling"]
        self.saturation_floor = settings["saturation_floor"]
        self.saturation_span = settings["saturation_span"]
        self.size_ceiling_kb = settings["size_ceiling_kb"]
        self.jitter_span = settings["jitter_span"]

    def normalize(self, features: FeatureSet) -> NormalizedFeatures:
        size_kb = min(features.size_proxy_kb, self.size_ceiling_kb)
        return NormalizedFeatures(
            edge_energy=_clamp((self.edge_ceiling - features.edge_energy) / self.edge_ceiling),
            channel_std_dev=_clamp((self.std_ceiling - features.channel_std_dev) / self.std_ceiling),
            saturation=_clamp((features.saturation - self.saturation_floor) / self.saturation_span),
            size_proxy=_clamp((self.size_ceiling_kb - size_kb) / self.size_ceiling_kb),
        )

    def raw_score(self, normalized: NormalizedFeatures) -> float:
        raw = (
            self.weights["edge_energy"] * normalized.edge_energy
            + self.weights["channel_std_dev"] * normalized.channel_std_dev
            + self.weights["saturation"] * normalized.saturation
            + self.weights["size_proxy"] * normalized.size_proxy
        )
        return raw * 100.0

    def jitter(self, rng: RandomSource) -> float:
        return (rng.random() - 0.5) * self.jitter_span

    def combine(self, features: FeatureSet, rng: RandomSource) -> ScoreBreakdown:
        normalized = self.normalize(features)
        raw = self.raw_score(normalized)
        jitter = self.jitter(rng)
        final = _clamp(raw + jitter, 0.0, 100.0)
        logger.debug("Raw score %.3f, jitter %+.3f, final %.3f", raw, jitter, final)
        return ScoreBreakdown(raw_score=raw, jitter=jitter, score=final, normalized=normalized)


def score(pixels: PixelBuffer, file_byte_length: int, rng: RandomSource) -> float:
    """Score *pixels* on 0..100; higher means more likely AI-generated."""

    features = FeatureExtractor().extract(pixels, file_byte_length)
    return ScoreCombiner().combine(features, rng).score
