"""Image generation value objects."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.domain.entities.analysis import FaceAnalysisResult
from app.domain.entities.image import GeneratedImage
from app.domain.entities.makeup import MakeupPlan
from app.domain.value_objects.attributes import MakeupStyle, Occasion


class GenerationEngine(str, Enum):
    """Known image generation engines, local fallback included."""
    GOOGLE_IMAGEN = "google-imagen"
    OPENAI_DALLE = "openai-dalle"
    LOCAL_FALLBACK = "local-fallback"


class ImageQuality(str, Enum):
    STANDARD = "standard"
    HD = "hd"


class AspectRatio(str, Enum):
    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"

    @property
    def ratio(self) -> float:
        width, height = self.value.split(":")
        return int(width) / int(height)


class GenerationProgress(BaseModel):
    """Progress milestone reported during generation."""
    stage: str = Field(..., description="analysis, generation, processing or complete")
    progress: int = Field(..., description="Percent complete", ge=0, le=100)
    message: str = Field(..., description="Human readable status")


class GenerationResult(BaseModel):
    """Outcome of an image generation request."""
    success: bool = Field(..., description="Whether an image was produced")
    images: List[GeneratedImage] = Field(default_factory=list, description="Generated images")
    prompt: str = Field(..., description="Prompt sent to the engine")
    engine: Optional[GenerationEngine] = Field(None, description="Engine that produced the images")
    processing_time_ms: int = Field(..., description="Wall time spent generating", ge=0)
    error: Optional[str] = Field(None, description="Error message when success is false")


class GenerationRequest(BaseModel):
    """Inputs for an "after" image generation."""
    analysis: FaceAnalysisResult = Field(..., description="Face analysis the image is based on")
    plan: Optional[MakeupPlan] = Field(None, description="Makeup plan to render, if available")
    style: MakeupStyle = Field(MakeupStyle.NATURAL, description="Requested look")
    occasion: Occasion = Field(Occasion.DAILY, description="Occasion for the look")
    region: str = Field("japan", description="Regional style preference")
    quality: ImageQuality = Field(ImageQuality.STANDARD, description="Requested output quality")
    aspect_ratio: AspectRatio = Field(AspectRatio.SQUARE, description="Output aspect ratio")
    engine: Optional[GenerationEngine] = Field(None, description="Preferred engine; None selects automatically")
    reference_image: Optional[bytes] = Field(None, description="Original photo to condition on", repr=False)
