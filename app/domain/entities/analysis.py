"""Face analysis entity."""
from typing import Optional

from pydantic import Field, computed_field, model_validator

from app.domain.entities.face import FaceFeatures
from app.domain.value_objects.attributes import FaceShape, SeasonalType, SkinTone
from app.domain.value_objects.detection import DetectionResult

SEASONAL_TYPES = {
    SkinTone.LIGHT: SeasonalType.SPRING,
    SkinTone.MEDIUM: SeasonalType.SUMMER,
    SkinTone.DARK: SeasonalType.AUTUMN,
    SkinTone.DEEP: SeasonalType.WINTER,
}


class FaceAnalysisResult(DetectionResult):
    """Detection result enriched with derived facial attributes.

    face_shape, skin_tone and features are present if and only if a face
    was detected.
    """
    face_shape: Optional[FaceShape] = Field(None, description="Classified face shape")
    skin_tone: Optional[SkinTone] = Field(None, description="Classified skin tone")
    features: Optional[FaceFeatures] = Field(None, description="Facial feature attributes")

    @model_validator(mode="after")
    def check_derived_attributes(self) -> "FaceAnalysisResult":
        derived = (self.face_shape, self.skin_tone, self.features)
        if self.face_detected and any(value is None for value in derived):
            raise ValueError("A detected face requires face_shape, skin_tone and features")
        if not self.face_detected and any(value is not None for value in derived):
            raise ValueError("Derived attributes are only valid for a detected face")
        return self

    @computed_field
    @property
    def seasonal_type(self) -> Optional[SeasonalType]:
        """Seasonal label for the skin tone, used for display."""
        if self.skin_tone is None:
            return None
        return SEASONAL_TYPES[self.skin_tone]

    @classmethod
    def from_detection(cls, detection: DetectionResult, **attributes) -> "FaceAnalysisResult":
        """Build an analysis from a detection plus derived attributes."""
        return cls(**detection.model_dump(), **attributes)
