"""Face detection value objects."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.entities.face import BoundingBox, Keypoint


class DetectorKind(str, Enum):
    """Which detector tier produced a result."""
    ML = "ml"
    HEURISTIC = "heuristic"
    NONE = "none"


class DetectionResult(BaseModel):
    """Result of a single face detection attempt."""
    model_config = ConfigDict(frozen=True)

    face_detected: bool = Field(..., description="Whether a face was found")
    confidence: float = Field(..., description="Detector certainty", ge=0.0, le=1.0)
    bounding_box: Optional[BoundingBox] = Field(None, description="Normalized face region")
    keypoints: Optional[List[Keypoint]] = Field(None, description="Normalized facial landmarks")
    detector: DetectorKind = Field(DetectorKind.NONE, description="Detector tier that produced the result")

    @model_validator(mode="after")
    def check_box_present(self) -> "DetectionResult":
        if self.face_detected and self.bounding_box is None:
            raise ValueError("A detected face must carry a bounding box")
        return self

    @classmethod
    def not_detected(cls, detector: DetectorKind = DetectorKind.NONE) -> "DetectionResult":
        """Result returned when no face was found."""
        return cls(face_detected=False, confidence=0.0, detector=detector)
