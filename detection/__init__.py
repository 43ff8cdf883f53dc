"""AI Image Detector detection package"""

from .detector import AIImageDetector, DetectionResult
from .features import FeatureExtractor, FeatureSet
from .pixels import LoadedImage, PixelBuffer, load_image, load_image_bytes
from .scoring import FixedRandomSource, RandomSource, ScoreCombiner, is_ai_generated, score

__all__ = [
    'AIImageDetector',
    'DetectionResult',
    'FeatureExtractor',
    'FeatureSet',
    'FixedRandomSource',
    'LoadedImage',
    'PixelBuffer',
    'RandomSource',
    'ScoreCombiner',
    'is_ai_generated',
    'load_image',
    'load_image_bytes',
    'score',
]
