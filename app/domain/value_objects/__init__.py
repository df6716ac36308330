"""Value objects package."""
from .attributes import (
    Difficulty,
    FaceShape,
    MakeupCategory,
    MakeupStyle,
    Occasion,
    PaletteStyleBucket,
    PaletteToneBucket,
    SeasonalType,
    SkinTone,
)
from .detection import DetectionResult, DetectorKind

__all__ = [
    "DetectionResult",
    "DetectorKind",
    "Difficulty",
    "FaceShape",
    "MakeupCategory",
    "MakeupStyle",
    "Occasion",
    "PaletteStyleBucket",
    "PaletteToneBucket",
    "SeasonalType",
    "SkinTone",
]
