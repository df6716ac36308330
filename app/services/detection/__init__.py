"""Face detection tiers."""
from .composite_detector import CompositeFaceDetector, DetectorState
from .heuristic_detector import HeuristicFaceDetector
from .ml_detector import InsightFaceDetector

__all__ = ["CompositeFaceDetector", "DetectorState", "HeuristicFaceDetector", "InsightFaceDetector"]
