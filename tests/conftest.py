"""Shared test fixtures."""
import io
import os

# Keep tests offline: no model download, no remote generation engines
os.environ["ML_DETECTOR_ENABLED"] = "false"
os.environ["GOOGLE_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

import numpy as np
import pytest
from PIL import Image

from app.domain.entities.analysis import FaceAnalysisResult
from app.domain.entities.face import BoundingBox, FaceFeatures
from app.domain.value_objects.attributes import FaceShape, SkinTone
from app.domain.value_objects.detection import DetectionResult, DetectorKind

BACKGROUND = (50, 50, 50)
SKIN = (200, 150, 120)


def face_like_pixels(width: int = 300, height: int = 400, radius: int = 120) -> np.ndarray:
    """Dark background with a bright skin-colored disk in the middle."""
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:] = BACKGROUND
    ys, xs = np.ogrid[:height, :width]
    disk = (xs - width / 2) ** 2 + (ys - height / 2) ** 2 <= radius ** 2
    pixels[disk] = SKIN
    return pixels


def encode(pixels: np.ndarray, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def face_pixels() -> np.ndarray:
    return face_like_pixels()


@pytest.fixture
def no_face_pixels() -> np.ndarray:
    """Bright background with a dark center: no skin, center darker than edges."""
    pixels = np.full((400, 300, 3), 255, dtype=np.uint8)
    ys, xs = np.ogrid[:400, :300]
    pixels[(xs - 150) ** 2 + (ys - 200) ** 2 <= 80 ** 2] = 0
    return pixels


@pytest.fixture
def face_png(face_pixels) -> bytes:
    return encode(face_pixels)


@pytest.fixture
def face_jpeg(face_pixels) -> bytes:
    return encode(face_pixels, "JPEG")


@pytest.fixture
def detected_analysis() -> FaceAnalysisResult:
    return FaceAnalysisResult(
        face_detected=True,
        confidence=0.9,
        bounding_box=BoundingBox(x_min=0.2, y_min=0.1, width=0.6, height=0.8),
        detector=DetectorKind.ML,
        face_shape=FaceShape.OVAL,
        skin_tone=SkinTone.LIGHT,
        features=FaceFeatures(face_width=180.0, face_height=320.0),
    )


@pytest.fixture
def undetected_analysis() -> FaceAnalysisResult:
    return FaceAnalysisResult.from_detection(DetectionResult.not_detected())
