"""Makeup recommendation engine."""
from .engine import RecommendationEngine, color_palette, estimate_suitability

__all__ = ["RecommendationEngine", "color_palette", "estimate_suitability"]
