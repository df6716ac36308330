"""
InsightFace-based face detector.

This module provides the model-backed detection tier. The detection model
is loaded lazily by initialize(), in a worker thread and under a timeout, so
a slow download or a missing runtime leaves the detector unavailable instead
of blocking or failing the service.

Key Features:
    - Single most-prominent face per image
    - Confidence calibrated into [0.7, 0.99] for positive detections
    - Normalized coordinate system (0-1) for boxes and landmarks

Example:
    ```python
    detector = InsightFaceDetector()
    await detector.initialize()
    if detector.available:
        result = await detector.detect(pixels)
    ```

Note:
    This implementation uses CPU inference. For GPU support, modify the
    providers list in _load_model to include 'CUDAExecutionProvider'.
"""
import asyncio
from typing import Any, List, Optional

import numpy as np

from app.core.config import settings
from app.core.exceptions import DetectionError, DetectorUnavailableError
from app.core.logging import get_logger
from app.domain.entities.face import BoundingBox, Keypoint
from app.domain.interfaces.detection.face_detector import FaceDetector
from app.domain.value_objects.detection import DetectionResult, DetectorKind

logger = get_logger(__name__)

MIN_POSITIVE_CONFIDENCE = 0.7
MAX_POSITIVE_CONFIDENCE = 0.99


def calibrate_confidence(score: float) -> float:
    """Clamp a positive detection score into [0.7, 0.99]."""
    return float(min(MAX_POSITIVE_CONFIDENCE, max(MIN_POSITIVE_CONFIDENCE, score)))


def _clamp(value: float) -> float:
    return float(min(1.0, max(0.0, value)))


class InsightFaceDetector(FaceDetector):
    """
    Detection tier backed by the insightface detection model.

    Attributes:
        model: insightface FaceAnalysis instance, None until loaded
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        init_timeout: Optional[float] = None,
        enabled: Optional[bool] = None,
    ) -> None:
        self.model_name = model_name or settings.MODEL_PATH
        self.init_timeout = init_timeout if init_timeout is not None else settings.DETECTOR_INIT_TIMEOUT
        self.enabled = settings.ML_DETECTOR_ENABLED if enabled is None else enabled
        self.model: Any = None
        self._initialized = False

    def _load_model(self) -> Any:
        """Load and prepare the detection model (blocking)."""
        from insightface.app import FaceAnalysis

        model = FaceAnalysis(
            name=self.model_name,
            root=settings.MODEL_CACHE_DIR,
            allowed_modules=["detection"],
            providers=["CPUExecutionProvider"],
        )
        model.prepare(ctx_id=-1, det_thresh=settings.MIN_DETECTION_CONFIDENCE, det_size=(640, 640))
        return model

    async def initialize(self) -> None:
        """Load the model once; failures leave the detector unavailable."""
        if self._initialized:
            return
        self._initialized = True

        if not self.enabled:
            logger.info("ML face detector disabled by configuration")
            return

        try:
            self.model = await asyncio.wait_for(
                asyncio.to_thread(self._load_model),
                timeout=self.init_timeout,
            )
            logger.info("ML face detector initialized", model=self.model_name)
        except asyncio.TimeoutError:
            logger.warning(
                "ML face detector initialization timed out, continuing heuristic-only",
                timeout=self.init_timeout,
            )
            self.model = None
        except Exception as e:
            logger.warning(
                "ML face detector unavailable, continuing heuristic-only",
                error=str(e),
            )
            self.model = None

    @property
    def available(self) -> bool:
        return self.model is not None

    def _run_model(self, pixels: np.ndarray) -> List[Any]:
        # insightface expects BGR input
        return self.model.get(np.ascontiguousarray(pixels[..., ::-1]), max_num=1)

    def _convert_to_result(self, face_data: Any, width: int, height: int) -> DetectionResult:
        """
        Convert an insightface detection to a DetectionResult.

        Args:
            face_data: insightface Face with bbox, det_score and kps
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            DetectionResult with normalized box and landmarks
        """
        bbox = getattr(face_data, "bbox", None)
        if bbox is None or len(bbox) < 4:
            bounding_box = BoundingBox.placeholder()
        else:
            left = _clamp(bbox[0] / width)
            top = _clamp(bbox[1] / height)
            right = _clamp(bbox[2] / width)
            bottom = _clamp(bbox[3] / height)
            if right <= left or bottom <= top:
                bounding_box = BoundingBox.placeholder()
            else:
                bounding_box = BoundingBox(
                    x_min=left, y_min=top, width=right - left, height=bottom - top
                )

        keypoints = None
        kps = getattr(face_data, "kps", None)
        if kps is not None:
            keypoints = [
                Keypoint(x=_clamp(point[0] / width), y=_clamp(point[1] / height))
                for point in kps
            ]

        return DetectionResult(
            face_detected=True,
            confidence=calibrate_confidence(float(getattr(face_data, "det_score", 0.0))),
            bounding_box=bounding_box,
            keypoints=keypoints,
            detector=DetectorKind.ML,
        )

    async def detect(self, pixels: np.ndarray) -> DetectionResult:
        if not self.available:
            raise DetectorUnavailableError("ML face detector is not loaded")

        height, width = pixels.shape[:2]
        try:
            faces = await asyncio.to_thread(self._run_model, pixels)
        except Exception as e:
            logger.error(
                "ML face detection failed",
                error=str(e),
                image_shape=pixels.shape,
                exc_info=True,
            )
            raise DetectionError(f"ML face detection failed: {e}")

        logger.debug("ML detection results", faces_found=len(faces) if faces else 0)
        if not faces:
            return DetectionResult.not_detected(DetectorKind.ML)

        # Most prominent face: highest score
        face = max(faces, key=lambda f: float(getattr(f, "det_score", 0.0)))
        return self._convert_to_result(face, width, height)

    async def __aenter__(self) -> "InsightFaceDetector":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: Optional[type], exc_val: Optional[Exception],
                        exc_tb: Optional[Any]) -> None:
        logger.debug("Releasing ML face detector")
        self.model = None
