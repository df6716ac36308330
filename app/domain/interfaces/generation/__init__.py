from .image_engine import ImageGenerationEngine

__all__ = ["ImageGenerationEngine"]
