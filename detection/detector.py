"""
AI Image Detector
Runs decode -> features -> combiner for one image and packages the outcome.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from config import DETECTION_SETTINGS
from utils.logger import setup_logger, log_operation

from .features import FeatureExtractor, FeatureSet
from .pixels import LoadedImage, PixelBuffer, load_image
from .scoring import NormalizedFeatures, RandomSource, ScoreCombiner

logger = setup_logger(__name__)


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of a single analysis."""

    score: float
    raw_score: float
    jitter: float
    features: FeatureSet
    normalized: NormalizedFeatures
    file_size: int
    width: int
    height: int
    source: Optional[Path] = None
    threshold: float = field(default=DETECTION_SETTINGS["ai_threshold"])

    @property
    def is_ai_generated(self) -> bool:
        return self.score >= self.threshold

    @property
    def verdict(self) -> str:
        return "AI-generated" if self.is_ai_generated else "Likely real"

    def to_dict(self) -> dict:
        return {
            "source": str(self.source) if self.source else None,
            "score": round(self.score, 2),
            "raw_score": round(self.raw_score, 4),
            "jitter": round(self.jitter, 4),
            "is_ai_generated": self.is_ai_generated,
            "verdict": self.verdict,
            "width": self.width,
            "height": self.height,
            "file_size": self.file_size,
            "features": self.features.to_dict(),
            "normalized": self.normalized.to_dict(),
        }


class AIImageDetector:
    """Heuristic detector. Every analysis draws jitter from its own random source."""

    def __init__(
        self,
        extractor: FeatureExtractor | None = None,
        combiner: ScoreCombiner | None = None,
        rng_factory: Callable[[], RandomSource] = random.Random,
    ):
        self.extractor = extractor or FeatureExtractor()
        self.combiner = combiner or ScoreCombiner()
        self.rng_factory = rng_factory
        logger.debug("AIImageDetector initialized")

    @log_operation("Analyze Image")
    def analyze_file(self, file_path, rng: RandomSource | None = None) -> DetectionResult:
        """
        Decode and score an image file.

        Args:
            file_path: path of the image
            rng: random source for the jitter term; a fresh one when omitted

        Returns:
            DetectionResult
        """
        loaded = load_image(file_path)
        return self.analyze_loaded(loaded, rng)

    def analyze_loaded(self, loaded: LoadedImage, rng: RandomSource | None = None) -> DetectionResult:
        return self.analyze_pixels(loaded.pixels, loaded.file_size, rng=rng, source=loaded.source)

    def analyze_pixels(
        self,
        pixels: PixelBuffer,
        file_byte_length: int,
        rng: RandomSource | None = None,
        source: Optional[Path] = None,
    ) -> DetectionResult:
        features = self.extractor.extract(pixels, file_byte_length)
        breakdown = self.combiner.combine(features, rng if rng is not None else self.rng_factory())

        result = DetectionResult(
            score=breakdown.score,
            raw_score=breakdown.raw_score,
            jitter=breakdown.jitter,
            features=features,
            normalized=breakdown.normalized,
            file_size=int(file_byte_length),
            width=pixels.width,
            height=pixels.height,
            source=source,
        )
        logger.info(
            "Score %.2f/100 (%s) for %s",
            result.score,
            result.verdict,
            source or f"{pixels.width}x{pixels.height} buffer",
        )
        return result
