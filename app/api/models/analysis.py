"""API specific analysis and generation models."""
import base64
import binascii
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.domain.entities.analysis import FaceAnalysisResult
from app.domain.entities.image import ImageMetadata
from app.domain.entities.makeup import MakeupPlan
from app.domain.value_objects.attributes import MakeupStyle, Occasion
from app.domain.value_objects.generation import (
    AspectRatio,
    GenerationEngine,
    GenerationRequest,
    ImageQuality,
)
from app.services.models import ServiceAnalysisOutcome


class AnalysisResponse(BaseModel):
    """Response model for the /analyze endpoint."""
    analysis: FaceAnalysisResult = Field(..., description="Face detection and derived attributes")
    plan: MakeupPlan = Field(..., description="Makeup plan for the analysis")
    image: ImageMetadata = Field(..., description="Metadata of the processed image")
    region: str = Field(..., description="Region the plan was generated for")
    style: MakeupStyle = Field(..., description="Requested style")
    occasion: Occasion = Field(..., description="Requested occasion")

    @classmethod
    def from_service_response(cls, outcome: ServiceAnalysisOutcome) -> "AnalysisResponse":
        """Convert the service layer outcome to the API response model."""
        return cls(
            analysis=outcome.analysis,
            plan=outcome.plan,
            image=outcome.image,
            region=outcome.region,
            style=outcome.style,
            occasion=outcome.occasion,
        )


class GenerationRequestBody(BaseModel):
    """Request model for the /generate endpoint."""
    analysis: FaceAnalysisResult = Field(..., description="Analysis returned by /analyze")
    plan: Optional[MakeupPlan] = Field(None, description="Plan returned by /analyze")
    style: MakeupStyle = Field(MakeupStyle.NATURAL, description="Requested look")
    occasion: Occasion = Field(Occasion.DAILY, description="Occasion for the look")
    region: str = Field("japan", description="Regional style preference", min_length=1, max_length=50)
    quality: ImageQuality = Field(ImageQuality.STANDARD, description="Output quality")
    aspect_ratio: AspectRatio = Field(AspectRatio.SQUARE, description="Output aspect ratio")
    engine: Optional[GenerationEngine] = Field(
        None, description="Preferred engine; omitted to select automatically"
    )
    reference_image_base64: Optional[str] = Field(
        None, description="Original photo, base64 encoded without a data URL prefix"
    )

    @field_validator("reference_image_base64")
    @classmethod
    def validate_base64(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("reference_image_base64 is not valid base64")
        return v

    def to_domain(self) -> GenerationRequest:
        """Convert to the service layer request."""
        reference = base64.b64decode(self.reference_image_base64) if self.reference_image_base64 else None
        return GenerationRequest(
            analysis=self.analysis,
            plan=self.plan,
            style=self.style,
            occasion=self.occasion,
            region=self.region,
            quality=self.quality,
            aspect_ratio=self.aspect_ratio,
            engine=self.engine,
            reference_image=reference,
        )


class EnginesResponse(BaseModel):
    """Response model for the /engines endpoint."""
    engines: List[GenerationEngine] = Field(..., description="Usable engines in priority order")
    has_real_engine: bool = Field(..., description="Whether any remote engine is configured")
    estimated_seconds: int = Field(..., description="Expected generation time without a reference image")
