"""Prompt construction for "after" image generation."""
from typing import List

from app.domain.value_objects.attributes import FaceShape, MakeupCategory, MakeupStyle, Occasion, SkinTone
from app.domain.value_objects.generation import GenerationRequest, ImageQuality

BASE_PROMPT = "Professional makeup application on a person's face"

FACE_SHAPE_PHRASES = {
    FaceShape.OVAL: "oval face shape, balanced proportions",
    FaceShape.ROUND: "round face shape, soft features",
    FaceShape.SQUARE: "square face shape, defined jawline",
    FaceShape.HEART: "heart-shaped face, wider forehead",
    FaceShape.OBLONG: "oblong face shape, elongated features",
    FaceShape.DIAMOND: "diamond face shape, high cheekbones",
}

SKIN_TONE_PHRASES = {
    SkinTone.LIGHT: "light skin tone",
    SkinTone.MEDIUM: "medium skin tone",
    SkinTone.DARK: "dark skin tone",
    SkinTone.DEEP: "deep skin tone",
}

STYLE_PHRASES = {
    MakeupStyle.NATURAL: "natural makeup look, subtle enhancement, soft colors, dewy finish",
    MakeupStyle.GLAMOUR: "glamorous makeup look, bold eyes, defined features, dramatic colors",
    MakeupStyle.CUTE: "cute makeup look, pink tones, youthful appearance, soft blush",
    MakeupStyle.MATURE: "sophisticated makeup look, elegant colors, refined application",
}

OCCASION_PHRASES = {
    Occasion.DAILY: "everyday wear",
    Occasion.WORK: "office-appropriate, polished",
    Occasion.DATE: "romantic evening look",
    Occasion.PARTY: "party look, long-lasting and radiant",
}

REGION_PHRASES = {
    "japan": "Japanese makeup style, clean and polished",
    "korea": "Korean makeup style, dewy skin, gradient lips",
}

CATEGORY_PHRASES = {
    MakeupCategory.FOUNDATION: "flawless base makeup",
    MakeupCategory.EYES: "defined eye makeup",
    MakeupCategory.LIPS: "beautiful lip color",
    MakeupCategory.CHEEKS: "natural blush",
    MakeupCategory.BROWS: "well-shaped eyebrows",
}

QUALITY_SUFFIX = "high quality, professional photography, well-lit, detailed, realistic"
HD_SUFFIX = "ultra detailed, 4k"


def build_prompt(request: GenerationRequest) -> str:
    """Describe the requested look as a single comma-separated prompt."""
    analysis = request.analysis
    parts: List[str] = [BASE_PROMPT]

    if analysis.face_shape is not None:
        parts.append(FACE_SHAPE_PHRASES[analysis.face_shape])
    if analysis.skin_tone is not None:
        parts.append(SKIN_TONE_PHRASES[analysis.skin_tone])

    parts.append(STYLE_PHRASES[request.style])
    parts.append(OCCASION_PHRASES[request.occasion])

    region_phrase = REGION_PHRASES.get(request.region.strip().lower())
    if region_phrase:
        parts.append(region_phrase)

    if request.plan is not None:
        for suggestion in request.plan.suggestions:
            parts.append(CATEGORY_PHRASES[suggestion.category])
        parts.append(f"lipstick color {request.plan.color_palette.lipstick}")

    parts.append(QUALITY_SUFFIX)
    if request.quality == ImageQuality.HD:
        parts.append(HD_SUFFIX)

    return ", ".join(parts)
