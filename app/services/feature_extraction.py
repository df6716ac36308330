"""Derives face shape, skin tone and feature attributes from a detection."""
import numpy as np

from app.core.logging import get_logger
from app.domain.entities.analysis import SEASONAL_TYPES, FaceAnalysisResult
from app.domain.entities.face import FaceFeatures
from app.domain.value_objects.attributes import FaceShape, SeasonalType, SkinTone
from app.domain.value_objects.detection import DetectionResult

logger = get_logger(__name__)

# Every 4th pixel of the flattened region
SKIN_TONE_PIXEL_STRIDE = 4


def classify_face_shape(aspect_ratio: float) -> FaceShape:
    """Face shape from the width/height ratio of the face region.

    > 0.9 round, (0.75, 0.9] oval, (0.6, 0.75] oblong, otherwise heart.
    """
    if aspect_ratio > 0.9:
        return FaceShape.ROUND
    if aspect_ratio > 0.75:
        return FaceShape.OVAL
    if aspect_ratio > 0.6:
        return FaceShape.OBLONG
    return FaceShape.HEART


def brightness_to_skin_tone(brightness: float) -> SkinTone:
    if brightness > 180:
        return SkinTone.LIGHT
    if brightness > 140:
        return SkinTone.MEDIUM
    if brightness > 100:
        return SkinTone.DARK
    return SkinTone.DEEP


def classify_skin_tone(region: np.ndarray) -> SkinTone:
    """Skin tone from the mean brightness of a face region.

    Averages R, G and B over every 4th pixel of the region and buckets
    (R + G + B) / 3. An empty region falls in the lowest bucket.
    """
    pixels = np.asarray(region)[..., :3].reshape(-1, 3)[::SKIN_TONE_PIXEL_STRIDE]
    if pixels.size == 0:
        return SkinTone.DEEP
    mean_rgb = pixels.astype(np.float64).mean(axis=0)
    return brightness_to_skin_tone(float(mean_rgb.mean()))


def to_seasonal_type(tone: SkinTone) -> SeasonalType:
    return SEASONAL_TYPES[tone]


class FeatureExtractor:
    """Turns a DetectionResult into a FaceAnalysisResult."""

    def extract(self, pixels: np.ndarray, detection: DetectionResult) -> FaceAnalysisResult:
        """Classify the detected face region.

        Args:
            pixels: RGB image the detection was run on
            detection: Detection result for that image

        Returns:
            FaceAnalysisResult; derived attributes are set only for a detected face
        """
        if not detection.face_detected or detection.bounding_box is None:
            return FaceAnalysisResult.from_detection(detection)

        image_height, image_width = pixels.shape[:2]
        box = detection.bounding_box
        left, top, width, height = box.to_pixels(image_width, image_height)
        region = pixels[top:top + height, left:left + width]

        face_shape = classify_face_shape(box.aspect_ratio(image_width, image_height))
        skin_tone = classify_skin_tone(region)

        logger.debug(
            "Extracted face attributes",
            face_shape=face_shape.value,
            skin_tone=skin_tone.value,
            face_size=(width, height),
        )

        return FaceAnalysisResult.from_detection(
            detection,
            face_shape=face_shape,
            skin_tone=skin_tone,
            features=FaceFeatures(
                face_width=box.width * image_width,
                face_height=box.height * image_height,
            ),
        )
