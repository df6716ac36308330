"""Makeup plan entities."""
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.domain.value_objects.attributes import Difficulty, MakeupCategory

PLAN_CATEGORY_ORDER = [
    MakeupCategory.FOUNDATION,
    MakeupCategory.EYES,
    MakeupCategory.LIPS,
    MakeupCategory.CHEEKS,
    MakeupCategory.BROWS,
]


def parse_minutes(time_estimate: str) -> int:
    """Read the minute count out of a time estimate such as "10 min"."""
    digits = re.sub(r"\D", "", time_estimate)
    return int(digits) if digits else 0


def bucket_difficulty(average: float) -> Difficulty:
    """Map an average difficulty score (1-3) back to a difficulty level."""
    if average <= 1.5:
        return Difficulty.BEGINNER
    if average <= 2.5:
        return Difficulty.INTERMEDIATE
    return Difficulty.ADVANCED


class Product(BaseModel):
    """A product used by a suggestion."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    brand: str
    shade: Optional[str] = None
    price: Optional[int] = None
    image: Optional[str] = None
    purchase_url: Optional[str] = None


class MakeupSuggestion(BaseModel):
    """Recommendation for a single makeup category."""
    model_config = ConfigDict(frozen=True)

    id: str
    category: MakeupCategory
    title: str
    description: str
    products: List[Product] = Field(default_factory=list)
    steps: List[str] = Field(..., min_length=1, description="Ordered application steps")
    difficulty: Difficulty
    time_estimate: str = Field(..., description="Human readable estimate, e.g. '10 min'")
    tips: List[str] = Field(default_factory=list)

    @property
    def minutes(self) -> int:
        return parse_minutes(self.time_estimate)


class ColorPalette(BaseModel):
    """Hex colors for the main products of a plan."""
    model_config = ConfigDict(frozen=True)

    foundation: str
    eyeshadow: List[str]
    lipstick: str
    blush: str


class OverallLook(BaseModel):
    """Summary of the planned look."""
    model_config = ConfigDict(frozen=True)

    style: str
    description: str
    suitability: float = Field(..., ge=0.0, le=1.0)


class MakeupPlan(BaseModel):
    """Complete makeup plan: one suggestion per category plus a palette.

    Total time and overall difficulty are derived from the suggestions.
    """
    model_config = ConfigDict(frozen=True)

    overall: OverallLook
    suggestions: List[MakeupSuggestion]
    color_palette: ColorPalette

    @field_validator("suggestions")
    @classmethod
    def validate_category_order(cls, v: List[MakeupSuggestion]) -> List[MakeupSuggestion]:
        """Require exactly one suggestion per category, in plan order."""
        categories = [suggestion.category for suggestion in v]
        if categories != PLAN_CATEGORY_ORDER:
            raise ValueError(
                f"Suggestions must cover {[c.value for c in PLAN_CATEGORY_ORDER]} in order, "
                f"got {[c.value for c in categories]}"
            )
        return v

    @computed_field
    @property
    def total_minutes(self) -> int:
        return sum(suggestion.minutes for suggestion in self.suggestions)

    @computed_field
    @property
    def total_time(self) -> str:
        return f"{self.total_minutes} min"

    @computed_field
    @property
    def difficulty(self) -> Difficulty:
        scores = [suggestion.difficulty.score for suggestion in self.suggestions]
        return bucket_difficulty(sum(scores) / len(scores))

    def suggestion_for(self, category: MakeupCategory) -> Optional[MakeupSuggestion]:
        for suggestion in self.suggestions:
            if suggestion.category == category:
                return suggestion
        return None
