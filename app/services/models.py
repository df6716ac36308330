"""Service-specific models.

This module contains models used by services that are independent of the API layer.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.entities.analysis import FaceAnalysisResult
from app.domain.entities.image import ImageMetadata
from app.domain.entities.makeup import MakeupPlan
from app.domain.value_objects.attributes import MakeupStyle, Occasion


class ServiceAnalysisOutcome(BaseModel):
    """Result of running the full analysis pipeline on one upload."""
    analysis: FaceAnalysisResult = Field(..., description="Detection and derived attributes")
    plan: MakeupPlan = Field(..., description="Makeup plan for the analysis")
    image: ImageMetadata = Field(..., description="Metadata of the processed image")
    region: str = Field(..., description="Region the plan was generated for")
    style: MakeupStyle = Field(..., description="Requested style")
    occasion: Occasion = Field(..., description="Requested occasion")


class AnalysisRecord(BaseModel):
    """Analysis handed to the persistence collaborator.

    Keyed by user and timestamp; the storage schema belongs to the
    collaborator.
    """
    user_id: str = Field(..., description="Owner of the analysis")
    created_at: datetime = Field(..., description="When the analysis was produced")
    region: str = Field(..., description="Region the plan was generated for")
    style: MakeupStyle = Field(..., description="Requested style")
    occasion: Occasion = Field(..., description="Requested occasion")
    analysis: FaceAnalysisResult = Field(..., description="Face analysis")
    plan: MakeupPlan = Field(..., description="Makeup plan")

    @classmethod
    def from_outcome(
        cls,
        outcome: ServiceAnalysisOutcome,
        user_id: str,
        created_at: Optional[datetime] = None,
    ) -> "AnalysisRecord":
        """Create a record from a pipeline outcome.

        Args:
            outcome: Pipeline outcome to persist
            user_id: Owner of the analysis
            created_at: Timestamp; defaults to now (UTC)

        Returns:
            AnalysisRecord ready for model_dump_json()
        """
        return cls(
            user_id=user_id,
            created_at=created_at or datetime.now(timezone.utc),
            region=outcome.region,
            style=outcome.style,
            occasion=outcome.occasion,
            analysis=outcome.analysis,
            plan=outcome.plan,
        )
