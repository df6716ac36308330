"""Application services."""
from .detection import CompositeFaceDetector, HeuristicFaceDetector, InsightFaceDetector
from .feature_extraction import FeatureExtractor
from .generation import ImageGenerationOrchestrator
from .image_processing import ImageProcessor
from .makeup_analysis import MakeupAnalysisService
from .recommendation import RecommendationEngine

__all__ = [
    "CompositeFaceDetector",
    "FeatureExtractor",
    "HeuristicFaceDetector",
    "ImageGenerationOrchestrator",
    "ImageProcessor",
    "InsightFaceDetector",
    "MakeupAnalysisService",
    "RecommendationEngine",
]
