"""Two-tier face detector: ML model first, pixel heuristic as fallback."""
from enum import Enum
from typing import Optional

import numpy as np

from app.core.logging import get_logger
from app.domain.interfaces.detection.face_detector import FaceDetector
from app.domain.value_objects.detection import DetectionResult
from app.services.detection.heuristic_detector import HeuristicFaceDetector
from app.services.detection.ml_detector import InsightFaceDetector

logger = get_logger(__name__)


class DetectorState(str, Enum):
    """Lifecycle of the composite detector and its last detection attempt."""
    IDLE = "idle"
    INITIALIZING = "initializing"
    READY = "ready"
    DETECTING = "detecting"
    DETECTED = "detected"
    NOT_DETECTED = "not_detected"
    ERROR = "error"


class CompositeFaceDetector(FaceDetector):
    """Runs the primary detector when it is usable and falls back otherwise.

    Failures of the primary tier, at initialization or at detection time,
    are logged and never reach the caller. detect() always returns a
    DetectionResult.
    """

    def __init__(
        self,
        primary: Optional[FaceDetector] = None,
        fallback: Optional[FaceDetector] = None,
    ) -> None:
        self.primary = primary or InsightFaceDetector()
        self.fallback = fallback or HeuristicFaceDetector()
        self.state = DetectorState.IDLE

    async def initialize(self) -> None:
        if self.state != DetectorState.IDLE:
            return
        self.state = DetectorState.INITIALIZING
        for tier in (self.primary, self.fallback):
            try:
                await tier.initialize()
            except Exception as e:
                logger.warning(
                    "Detector tier failed to initialize",
                    detector=type(tier).__name__,
                    error=str(e),
                )
        self.state = DetectorState.READY
        logger.info(
            "Face detector ready",
            primary_available=self.primary.available,
            fallback_available=self.fallback.available,
        )

    @property
    def available(self) -> bool:
        return self.primary.available or self.fallback.available

    @property
    def using_fallback_only(self) -> bool:
        return not self.primary.available

    async def detect(self, pixels: np.ndarray) -> DetectionResult:
        if self.state == DetectorState.IDLE:
            await self.initialize()

        self.state = DetectorState.DETECTING
        result = None

        if self.primary.available:
            try:
                result = await self.primary.detect(pixels)
            except Exception as e:
                logger.warning(
                    "Primary detector failed, using fallback",
                    detector=type(self.primary).__name__,
                    error=str(e),
                )

        if result is None and self.fallback.available:
            try:
                result = await self.fallback.detect(pixels)
            except Exception as e:
                logger.error(
                    "Fallback detector failed",
                    detector=type(self.fallback).__name__,
                    error=str(e),
                    exc_info=True,
                )

        if result is None:
            self.state = DetectorState.ERROR
            return DetectionResult.not_detected()

        self.state = DetectorState.DETECTED if result.face_detected else DetectorState.NOT_DETECTED
        logger.info(
            "Face detection completed",
            face_detected=result.face_detected,
            confidence=round(result.confidence, 3),
            detector=result.detector.value,
        )
        return result
