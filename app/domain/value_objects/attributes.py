"""Facial attribute and makeup preference enumerations."""
from enum import Enum


class FaceShape(str, Enum):
    """Face shape classes.

    Only round, oval, oblong and heart are produced by the aspect-ratio
    classifier; square and diamond exist for callers that supply their own.
    """
    OVAL = "oval"
    ROUND = "round"
    SQUARE = "square"
    HEART = "heart"
    OBLONG = "oblong"
    DIAMOND = "diamond"


class SkinTone(str, Enum):
    """Brightness-based skin tone buckets."""
    LIGHT = "light"
    MEDIUM = "medium"
    DARK = "dark"
    DEEP = "deep"


class SeasonalType(str, Enum):
    """Seasonal color labels shown to users in place of raw skin tone."""
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class MakeupCategory(str, Enum):
    """Makeup plan categories, declared in plan order."""
    FOUNDATION = "foundation"
    EYES = "eyes"
    LIPS = "lips"
    CHEEKS = "cheeks"
    BROWS = "brows"


class Difficulty(str, Enum):
    """Application difficulty."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def score(self) -> int:
        """Numeric weight used when averaging difficulties."""
        return _DIFFICULTY_SCORES[self]


_DIFFICULTY_SCORES = {
    Difficulty.BEGINNER: 1,
    Difficulty.INTERMEDIATE: 2,
    Difficulty.ADVANCED: 3,
}


class MakeupStyle(str, Enum):
    """Requested overall look."""
    NATURAL = "natural"
    GLAMOUR = "glamour"
    CUTE = "cute"
    MATURE = "mature"


class Occasion(str, Enum):
    """Occasion the look is planned for."""
    DAILY = "daily"
    WORK = "work"
    DATE = "date"
    PARTY = "party"


class PaletteToneBucket(str, Enum):
    """Skin tone buckets the color palette table is keyed by.

    The palette table is coarser than SkinTone: dark and deep share the
    medium palette.
    """
    LIGHT = "light"
    MEDIUM = "medium"


class PaletteStyleBucket(str, Enum):
    """Style buckets the color palette table is keyed by (cute and mature use natural)."""
    NATURAL = "natural"
    GLAMOUR = "glamour"
