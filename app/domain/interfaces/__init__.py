"""Service interfaces package."""
from .detection import FaceDetector
from .generation import ImageGenerationEngine

__all__ = ["FaceDetector", "ImageGenerationEngine"]
