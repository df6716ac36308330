"""Rule tables for the recommendation engine.

Tables keyed by an enum cover every member of that enum.
"""
from app.domain.entities.makeup import ColorPalette
from app.domain.value_objects.attributes import (
    Difficulty,
    FaceShape,
    MakeupCategory,
    MakeupStyle,
    Occasion,
    PaletteStyleBucket,
    PaletteToneBucket,
    SkinTone,
)

JAPAN = "japan"
KOREA = "korea"

# Foundation shade names: Japanese ochre naming for japan, generic elsewhere
FOUNDATION_SHADES = {
    JAPAN: {
        SkinTone.LIGHT: "Light Ochre",
        SkinTone.MEDIUM: "Natural Ochre",
        SkinTone.DARK: "Ochre",
        SkinTone.DEEP: "Dark Ochre",
    },
    "default": {
        SkinTone.LIGHT: "Light",
        SkinTone.MEDIUM: "Medium",
        SkinTone.DARK: "Dark",
        SkinTone.DEEP: "Deep",
    },
}
DEFAULT_SKIN_TONE = SkinTone.MEDIUM

EYE_TECHNIQUES = {
    FaceShape.ROUND: "A vertical gradient that adds height to the eyes",
    FaceShape.OVAL: "A balanced horizontal gradient",
    FaceShape.SQUARE: "A softly rounded eye look",
    FaceShape.HEART: "A balanced look that brings focus to the lower lid",
    FaceShape.OBLONG: "An elongated horizontal eye look",
    FaceShape.DIAMOND: "A gently winged look that widens the upper face",
}
DEFAULT_EYE_TECHNIQUE = "A horizontal gradient"

EYE_COLORS = {
    MakeupStyle.NATURAL: ["beige", "light brown"],
    MakeupStyle.GLAMOUR: ["gold", "deep brown"],
    MakeupStyle.CUTE: ["pink", "coral"],
    MakeupStyle.MATURE: ["mauve", "plum"],
}

EYE_DIFFICULTY = Difficulty.INTERMEDIATE

LIP_COLORS = {
    MakeupStyle.NATURAL: "coral pink",
    MakeupStyle.GLAMOUR: "deep red",
    MakeupStyle.CUTE: "cherry pink",
    MakeupStyle.MATURE: "rose beige",
}

CHEEK_PLACEMENTS = {
    FaceShape.ROUND: "from high on the cheek, sweeping diagonally upward",
    FaceShape.OVAL: "in a soft circle on the highest point of the cheekbones",
    FaceShape.SQUARE: "horizontally along the upper cheek",
    FaceShape.HEART: "from the center of the cheek outward",
    FaceShape.OBLONG: "horizontally across a wide area of the cheek",
    FaceShape.DIAMOND: "just below the cheekbones, blended toward the temples",
}
DEFAULT_CHEEK_PLACEMENT = CHEEK_PLACEMENTS[FaceShape.OVAL]

BROW_SHAPES = {
    FaceShape.ROUND: "An angled arch that emphasizes vertical lines",
    FaceShape.OVAL: "A natural arch for overall balance",
    FaceShape.SQUARE: "A softly curved brow for a gentle impression",
    FaceShape.HEART: "A near-straight brow that balances the lower face",
    FaceShape.OBLONG: "A straight brow that emphasizes width",
    FaceShape.DIAMOND: "A rounded arch that softens the cheekbones",
}
DEFAULT_BROW_SHAPE = "A natural arch brow"

OCCASION_BASE_TIPS = {
    Occasion.DAILY: "Keep every layer thin so the base lasts the whole day",
    Occasion.WORK: "Blot midday with a tissue rather than adding more powder",
    Occasion.DATE: "Add a little highlighter to the top of the cheekbones for a soft glow",
    Occasion.PARTY: "Finish with setting spray to hold the base through the night",
}

OCCASION_LIP_TIPS = {
    Occasion.DAILY: "Carry the lipstick with you for quick touch-ups",
    Occasion.WORK: "Blot once so the color reads polished rather than glossy",
    Occasion.DATE: "Dab gloss on the center of the lips for a fuller look",
    Occasion.PARTY: "Line the lips first so the color does not feather",
}

PALETTES = {
    PaletteToneBucket.LIGHT: {
        PaletteStyleBucket.NATURAL: ColorPalette(
            foundation="#F5D5B8",
            eyeshadow=["#E8C4A5", "#D4A574"],
            lipstick="#E8A298",
            blush="#F4B2A7",
        ),
        PaletteStyleBucket.GLAMOUR: ColorPalette(
            foundation="#F5D5B8",
            eyeshadow=["#D4AF37", "#B8860B"],
            lipstick="#DC143C",
            blush="#CD5C5C",
        ),
    },
    PaletteToneBucket.MEDIUM: {
        PaletteStyleBucket.NATURAL: ColorPalette(
            foundation="#E8B896",
            eyeshadow=["#D2B48C", "#BC9A6A"],
            lipstick="#D2716F",
            blush="#E8927C",
        ),
        PaletteStyleBucket.GLAMOUR: ColorPalette(
            foundation="#E8B896",
            eyeshadow=["#DAA520", "#B8860B"],
            lipstick="#B22222",
            blush="#A0522D",
        ),
    },
}

# Dark and deep tones share the medium palette
PALETTE_TONE_BUCKETS = {
    SkinTone.LIGHT: PaletteToneBucket.LIGHT,
    SkinTone.MEDIUM: PaletteToneBucket.MEDIUM,
    SkinTone.DARK: PaletteToneBucket.MEDIUM,
    SkinTone.DEEP: PaletteToneBucket.MEDIUM,
}
DEFAULT_PALETTE_TONE = PaletteToneBucket.LIGHT

PALETTE_STYLE_BUCKETS = {
    MakeupStyle.NATURAL: PaletteStyleBucket.NATURAL,
    MakeupStyle.GLAMOUR: PaletteStyleBucket.GLAMOUR,
    MakeupStyle.CUTE: PaletteStyleBucket.NATURAL,
    MakeupStyle.MATURE: PaletteStyleBucket.NATURAL,
}

STYLE_NAMES = {
    JAPAN: {
        MakeupStyle.NATURAL: "Natural Beauty Makeup",
        MakeupStyle.GLAMOUR: "Grown-up Glamorous Makeup",
        MakeupStyle.CUTE: "Cute Makeup",
        MakeupStyle.MATURE: "Refined Mature Makeup",
    },
    KOREA: {
        MakeupStyle.NATURAL: "Ulzzang Natural Makeup",
        MakeupStyle.GLAMOUR: "K-Beauty Glamour Makeup",
        MakeupStyle.CUTE: "K-Idol Cute Makeup",
        MakeupStyle.MATURE: "Elegant Korean Makeup",
    },
}
DEFAULT_STYLE_NAME = "Natural Makeup"

STYLE_PITCHES = {
    MakeupStyle.NATURAL: "a natural look that brings out your own beauty",
    MakeupStyle.GLAMOUR: "a striking, glamorous look",
    MakeupStyle.CUTE: "a fresh and lovely cute look",
    MakeupStyle.MATURE: "a polished, sophisticated grown-up look",
}

FACE_SHAPE_NAMES = {
    FaceShape.OVAL: "oval",
    FaceShape.ROUND: "round",
    FaceShape.SQUARE: "square",
    FaceShape.HEART: "heart-shaped",
    FaceShape.OBLONG: "oblong",
    FaceShape.DIAMOND: "diamond",
}

# Minutes per category
TIME_ESTIMATES = {
    MakeupCategory.FOUNDATION: 10,
    MakeupCategory.EYES: 15,
    MakeupCategory.LIPS: 5,
    MakeupCategory.CHEEKS: 5,
    MakeupCategory.BROWS: 8,
}
