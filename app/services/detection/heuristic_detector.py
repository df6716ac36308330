"""
Pixel-heuristic face detector.

Scores an image on four cheap checks instead of running a model:

    - share of sampled pixels that fall in a skin-tone RGB range
    - image aspect ratio
    - minimum image size
    - whether the image center is at least as bright as its edges

The weighted score decides detection. The detector only says whether a face
is likely present; its bounding box is always the centered placeholder.
"""
from typing import Optional

import numpy as np

from app.core.config import settings
from app.core.logging import get_logger
from app.domain.entities.face import BoundingBox
from app.domain.interfaces.detection.face_detector import FaceDetector
from app.domain.value_objects.detection import DetectionResult, DetectorKind

logger = get_logger(__name__)

SKIN_RATIO_RANGE = (0.15, 0.8)
ASPECT_RATIO_RANGE = (0.5, 2.0)
MIN_DIMENSION = 200
CENTER_EDGE_BRIGHTNESS_RATIO = 0.8

WEIGHT_SKIN = 0.3
WEIGHT_ASPECT = 0.2
WEIGHT_SIZE = 0.2
WEIGHT_BRIGHTNESS = 0.3

DETECTION_THRESHOLD = 0.6
MAX_CONFIDENCE = 0.95


def skin_mask(pixels: np.ndarray) -> np.ndarray:
    """Boolean mask of pixels inside the skin-tone RGB rule.

    R in [95, 255], G in [40, 220], B in [20, 170] and R > G > B.
    """
    rgb = pixels[..., :3].astype(np.int16)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    return (
        (r >= 95) & (r <= 255)
        & (g >= 40) & (g <= 220)
        & (b >= 20) & (b <= 170)
        & (r > g) & (g > b)
    )


def skin_ratio(pixels: np.ndarray, stride: int) -> float:
    """Fraction of stride-sampled pixels classified as skin."""
    sampled = pixels[::stride, ::stride]
    if sampled.size == 0:
        return 0.0
    return float(skin_mask(sampled).mean())


def center_edge_brightness(pixels: np.ndarray) -> tuple:
    """Mean brightness of the central disk and of the outer region.

    The disk has radius min(w, h) / 4 around the image center; the outer
    region is every pixel farther than twice that radius. When the outer
    region is empty its brightness is taken to equal the center's.
    """
    height, width = pixels.shape[:2]
    brightness = pixels[..., :3].astype(np.float64).mean(axis=2)

    radius = min(width, height) / 4
    ys, xs = np.ogrid[:height, :width]
    distance = np.sqrt((xs - width / 2) ** 2 + (ys - height / 2) ** 2)

    center = brightness[distance <= radius]
    edge = brightness[distance > radius * 2]

    center_mean = float(center.mean()) if center.size else 0.0
    edge_mean = float(edge.mean()) if edge.size else center_mean
    return center_mean, edge_mean


def heuristic_score(pixels: np.ndarray, stride: int = 4) -> float:
    """Weighted sum of the four face-likelihood checks (0 to 1)."""
    height, width = pixels.shape[:2]
    if width == 0 or height == 0:
        return 0.0

    ratio = skin_ratio(pixels, stride)
    aspect = width / height
    center, edge = center_edge_brightness(pixels)

    score = 0.0
    if SKIN_RATIO_RANGE[0] < ratio < SKIN_RATIO_RANGE[1]:
        score += WEIGHT_SKIN
    if ASPECT_RATIO_RANGE[0] < aspect < ASPECT_RATIO_RANGE[1]:
        score += WEIGHT_ASPECT
    if width >= MIN_DIMENSION and height >= MIN_DIMENSION:
        score += WEIGHT_SIZE
    if center >= edge * CENTER_EDGE_BRIGHTNESS_RATIO:
        score += WEIGHT_BRIGHTNESS

    logger.debug(
        "Heuristic face score",
        skin_ratio=round(ratio, 3),
        aspect_ratio=round(aspect, 3),
        center_brightness=round(center, 1),
        edge_brightness=round(edge, 1),
        score=round(score, 2),
    )
    return score


class HeuristicFaceDetector(FaceDetector):
    """Fallback detector that needs nothing but the pixels."""

    def __init__(self, stride: Optional[int] = None) -> None:
        self.stride = max(1, stride or settings.HEURISTIC_SAMPLE_STRIDE)

    async def initialize(self) -> None:
        pass

    @property
    def available(self) -> bool:
        return True

    async def detect(self, pixels: np.ndarray) -> DetectionResult:
        score = heuristic_score(pixels, self.stride)
        if score <= DETECTION_THRESHOLD:
            return DetectionResult.not_detected(DetectorKind.HEURISTIC)

        return DetectionResult(
            face_detected=True,
            confidence=min(MAX_CONFIDENCE, score),
            bounding_box=BoundingBox.placeholder(),
            detector=DetectorKind.HEURISTIC,
        )
