"""Tests for the two-tier detector."""
from typing import Optional

import numpy as np
import pytest

from app.core.exceptions import DetectionError
from app.domain.entities.face import BoundingBox
from app.domain.interfaces.detection.face_detector import FaceDetector
from app.domain.value_objects.detection import DetectionResult, DetectorKind
from app.services.detection import CompositeFaceDetector, DetectorState, HeuristicFaceDetector


class StubDetector(FaceDetector):
    """Detector returning a fixed result, or raising when given an error."""

    def __init__(self, result: Optional[DetectionResult] = None, error: Optional[Exception] = None,
                 available: bool = True, init_error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self._available = available
        self.init_error = init_error
        self.calls = 0
        self.initialized = False

    async def initialize(self) -> None:
        self.initialized = True
        if self.init_error:
            raise self.init_error

    @property
    def available(self) -> bool:
        return self._available

    async def detect(self, pixels: np.ndarray) -> DetectionResult:
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


ML_HIT = DetectionResult(
    face_detected=True,
    confidence=0.9,
    bounding_box=BoundingBox(x_min=0.1, y_min=0.1, width=0.5, height=0.6),
    detector=DetectorKind.ML,
)
HEURISTIC_HIT = DetectionResult(
    face_detected=True,
    confidence=0.7,
    bounding_box=BoundingBox.placeholder(),
    detector=DetectorKind.HEURISTIC,
)


@pytest.fixture
def pixels():
    return np.zeros((10, 10, 3), dtype=np.uint8)


@pytest.mark.asyncio
async def test_uses_primary_when_available(pixels):
    fallback = StubDetector(HEURISTIC_HIT)
    detector = CompositeFaceDetector(StubDetector(ML_HIT), fallback)

    result = await detector.detect(pixels)

    assert result == ML_HIT
    assert fallback.calls == 0
    assert detector.state == DetectorState.DETECTED


@pytest.mark.asyncio
async def test_primary_negative_is_final(pixels):
    fallback = StubDetector(HEURISTIC_HIT)
    detector = CompositeFaceDetector(StubDetector(DetectionResult.not_detected(DetectorKind.ML)), fallback)

    result = await detector.detect(pixels)

    assert not result.face_detected
    assert result.detector == DetectorKind.ML
    assert fallback.calls == 0
    assert detector.state == DetectorState.NOT_DETECTED


@pytest.mark.asyncio
async def test_unavailable_primary_uses_fallback(pixels):
    primary = StubDetector(ML_HIT, available=False)
    detector = CompositeFaceDetector(primary, StubDetector(HEURISTIC_HIT))

    result = await detector.detect(pixels)

    assert result == HEURISTIC_HIT
    assert primary.calls == 0
    assert detector.using_fallback_only


@pytest.mark.asyncio
async def test_primary_error_falls_back(pixels):
    detector = CompositeFaceDetector(
        StubDetector(error=DetectionError("boom")),
        StubDetector(HEURISTIC_HIT),
    )
    result = await detector.detect(pixels)
    assert result.detector == DetectorKind.HEURISTIC


@pytest.mark.asyncio
async def test_both_tiers_failing_returns_not_detected(pixels):
    detector = CompositeFaceDetector(
        StubDetector(error=DetectionError("boom")),
        StubDetector(error=RuntimeError("also boom")),
    )
    result = await detector.detect(pixels)
    assert not result.face_detected
    assert result.confidence == 0.0
    assert detector.state == DetectorState.ERROR


@pytest.mark.asyncio
async def test_initialize_swallows_tier_errors():
    primary = StubDetector(ML_HIT, available=False, init_error=RuntimeError("no model"))
    fallback = StubDetector(HEURISTIC_HIT)
    detector = CompositeFaceDetector(primary, fallback)

    await detector.initialize()

    assert fallback.initialized
    assert detector.state == DetectorState.READY
    assert detector.available


@pytest.mark.asyncio
async def test_detect_initializes_lazily(pixels):
    primary = StubDetector(ML_HIT)
    detector = CompositeFaceDetector(primary, StubDetector(HEURISTIC_HIT))
    assert detector.state == DetectorState.IDLE

    await detector.detect(pixels)

    assert primary.initialized


@pytest.mark.asyncio
async def test_default_tiers_with_ml_disabled(face_pixels):
    # ML_DETECTOR_ENABLED is false for the test session
    detector = CompositeFaceDetector()
    await detector.initialize()

    assert detector.using_fallback_only
    assert isinstance(detector.fallback, HeuristicFaceDetector)
    result = await detector.detect(face_pixels)
    assert result.face_detected
    assert result.detector == DetectorKind.HEURISTIC
