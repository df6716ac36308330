"""Rule-based makeup plan generation."""
from typing import Optional, Union

from app.core.config import settings
from app.core.logging import get_logger
from app.domain.entities.analysis import FaceAnalysisResult
from app.domain.entities.makeup import (
    ColorPalette,
    MakeupPlan,
    MakeupSuggestion,
    OverallLook,
    Product,
)
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
from app.services.recommendation import tables

logger = get_logger(__name__)

BASE_SUITABILITY = 0.8
DETECTION_BONUS = 0.1
CONFIDENCE_BONUS = 0.1
CONFIDENCE_BONUS_THRESHOLD = 0.8


def estimate_suitability(analysis: FaceAnalysisResult) -> float:
    """Suitability score of a plan for this analysis.

    Reflects how far the analysis can be trusted rather than stylistic fit:
    0.8, plus 0.1 when a face was detected, plus 0.1 when confidence > 0.8,
    capped at 1.0.
    """
    score = BASE_SUITABILITY
    if analysis.face_detected:
        score += DETECTION_BONUS
    if analysis.confidence > CONFIDENCE_BONUS_THRESHOLD:
        score += CONFIDENCE_BONUS
    return min(round(score, 4), 1.0)


def palette_tone_bucket(skin_tone: Optional[SkinTone]) -> PaletteToneBucket:
    if skin_tone is None:
        return tables.DEFAULT_PALETTE_TONE
    return tables.PALETTE_TONE_BUCKETS[skin_tone]


def palette_style_bucket(style: MakeupStyle) -> PaletteStyleBucket:
    return tables.PALETTE_STYLE_BUCKETS[style]


def color_palette(skin_tone: Optional[SkinTone], style: MakeupStyle) -> ColorPalette:
    return tables.PALETTES[palette_tone_bucket(skin_tone)][palette_style_bucket(style)]


def _minutes(category: MakeupCategory) -> str:
    return f"{tables.TIME_ESTIMATES[category]} min"


class RecommendationEngine:
    """Maps a face analysis and preferences to a MakeupPlan.

    Every plan holds exactly one suggestion per category, in the order
    foundation, eyes, lips, cheeks, brows. Missing analysis attributes fall
    back to default table entries rather than dropping a category.

    Example:
        ```python
        engine = RecommendationEngine()
        plan = engine.generate(analysis, region="korea", style="cute")
        ```
    """

    def generate(
        self,
        analysis: FaceAnalysisResult,
        region: Optional[str] = None,
        style: Union[MakeupStyle, str] = MakeupStyle.NATURAL,
        occasion: Union[Occasion, str] = Occasion.DAILY,
    ) -> MakeupPlan:
        """Build the makeup plan.

        Args:
            analysis: Face analysis to base the plan on
            region: Regional style preference (e.g. "japan", "korea")
            style: Requested look
            occasion: Occasion the look is for

        Returns:
            MakeupPlan with five suggestions and a color palette

        Raises:
            ValueError: If style or occasion is not a known value
        """
        region = (region or settings.DEFAULT_REGION).strip().lower()
        style = MakeupStyle(style)
        occasion = Occasion(occasion)
        face_shape = analysis.face_shape
        skin_tone = analysis.skin_tone

        suggestions = [
            self._foundation(skin_tone, region, occasion),
            self._eyes(face_shape, style),
            self._lips(style, occasion),
            self._cheeks(face_shape),
            self._brows(face_shape),
        ]

        plan = MakeupPlan(
            overall=OverallLook(
                style=self.style_name(style, region),
                description=self.style_description(style, face_shape, skin_tone),
                suitability=estimate_suitability(analysis),
            ),
            suggestions=suggestions,
            color_palette=color_palette(skin_tone, style),
        )
        logger.info(
            "Generated makeup plan",
            region=region,
            style=style.value,
            occasion=occasion.value,
            face_shape=face_shape.value if face_shape else None,
            skin_tone=skin_tone.value if skin_tone else None,
            total_minutes=plan.total_minutes,
            difficulty=plan.difficulty.value,
        )
        return plan

    def _foundation(
        self,
        skin_tone: Optional[SkinTone],
        region: str,
        occasion: Occasion,
    ) -> MakeupSuggestion:
        shades = tables.FOUNDATION_SHADES.get(region, tables.FOUNDATION_SHADES["default"])
        shade = shades[skin_tone or tables.DEFAULT_SKIN_TONE]

        return MakeupSuggestion(
            id="foundation",
            category=MakeupCategory.FOUNDATION,
            title="Base Makeup",
            description=f"A {shade} foundation matched to your skin tone for a natural finish",
            products=[
                Product(
                    id="foundation-1",
                    name="Perfect Foundation",
                    brand="SUQQU",
                    shade=shade,
                    price=6800,
                )
            ],
            steps=[
                "Spread a thin layer of primer over the whole face",
                "Blend foundation a little at a time, from the center of the face outward",
                "Press lightly with a sponge to even out patches",
                "Cover any spots with concealer",
                "Set with face powder",
            ],
            difficulty=Difficulty.BEGINNER,
            time_estimate=_minutes(MakeupCategory.FOUNDATION),
            tips=[
                "Building thin layers gives the most natural finish",
                "Remember to blend the edge along the neck",
                "Always use a clean sponge",
                tables.OCCASION_BASE_TIPS[occasion],
            ],
        )

    def _eyes(self, face_shape: Optional[FaceShape], style: MakeupStyle) -> MakeupSuggestion:
        technique = tables.EYE_TECHNIQUES[face_shape] if face_shape else tables.DEFAULT_EYE_TECHNIQUE
        base_color, crease_color = tables.EYE_COLORS[style]

        return MakeupSuggestion(
            id="eye-makeup",
            category=MakeupCategory.EYES,
            title="Eye Makeup",
            description=f"{technique} to make your eyes stand out",
            products=[
                Product(
                    id="eyeshadow-1",
                    name="Eyeshadow Palette",
                    brand="LUNASOL",
                    shade=f"{base_color} & {crease_color}",
                    price=5000,
                )
            ],
            steps=[
                f"Sweep {base_color} lightly over the whole eyelid",
                f"Apply {crease_color} along the crease to build a gradient",
                "Add the same color to the outer third of the lower lid",
                "Line the lash line with eyeliner",
                "Curl the lashes and finish with mascara",
            ],
            difficulty=tables.EYE_DIFFICULTY,
            time_estimate=_minutes(MakeupCategory.EYES),
            tips=[
                "Build color gradually with a brush",
                "Blur the edges of the gradient so it looks natural",
                "Follow the shape of your eye with the liner",
            ],
        )

    def _lips(self, style: MakeupStyle, occasion: Occasion) -> MakeupSuggestion:
        color = tables.LIP_COLORS[style]

        return MakeupSuggestion(
            id="lip-makeup",
            category=MakeupCategory.LIPS,
            title="Lip Makeup",
            description=f"{color.capitalize()} for natural, attractive lips",
            products=[
                Product(
                    id="lipstick-1",
                    name="Rouge",
                    brand="CHANEL",
                    shade=color,
                    price=4500,
                )
            ],
            steps=[
                "Moisturize the lips with lip balm",
                "Define the outline with lip liner (optional)",
                "Apply lipstick directly or with a brush",
                "Press lightly with a tissue",
                "Finish with gloss if desired",
            ],
            difficulty=Difficulty.BEGINNER,
            time_estimate=_minutes(MakeupCategory.LIPS),
            tips=[
                "Never skip moisturizing",
                "A clean outline gives a refined impression",
                "Layer to adjust the intensity",
                tables.OCCASION_LIP_TIPS[occasion],
            ],
        )

    def _cheeks(self, face_shape: Optional[FaceShape]) -> MakeupSuggestion:
        placement = tables.CHEEK_PLACEMENTS[face_shape] if face_shape else tables.DEFAULT_CHEEK_PLACEMENT

        return MakeupSuggestion(
            id="cheek-makeup",
            category=MakeupCategory.CHEEKS,
            title="Cheek Makeup",
            description=f"Apply blush {placement} for a healthy, sculpted look",
            products=[
                Product(
                    id="blush-1",
                    name="Powder Blush",
                    brand="NARS",
                    shade="Orgasm",
                    price=3800,
                )
            ],
            steps=[
                "Pick up a little blush with a brush",
                "Tap off the excess on the back of your hand",
                f"Brush it on {placement}",
                "Check the overall balance in the mirror",
                "Layer more color if needed",
            ],
            difficulty=Difficulty.BEGINNER,
            time_estimate=_minutes(MakeupCategory.CHEEKS),
            tips=[
                "Thin layers look the most natural",
                "Placing color where the cheeks lift when you smile looks natural",
                "Use a clean brush",
            ],
        )

    def _brows(self, face_shape: Optional[FaceShape]) -> MakeupSuggestion:
        shape = tables.BROW_SHAPES[face_shape] if face_shape else tables.DEFAULT_BROW_SHAPE

        return MakeupSuggestion(
            id="eyebrow-makeup",
            category=MakeupCategory.BROWS,
            title="Brow Makeup",
            description=shape,
            products=[
                Product(
                    id="eyebrow-1",
                    name="Eyebrow Powder",
                    brand="KATE",
                    shade="light brown",
                    price=1200,
                )
            ],
            steps=[
                "Groom the brow hairs with a spoolie",
                "Apply powder from the tail toward the arch",
                "Keep the front light and the tail darker for a gradient",
                "Fill in sparse areas with a brow pencil",
                "Blend everything with the spoolie",
            ],
            difficulty=Difficulty.INTERMEDIATE,
            time_estimate=_minutes(MakeupCategory.BROWS),
            tips=[
                "Work with your natural brow shape",
                "Check symmetry in the mirror",
                "Keep the inner brow soft and light",
            ],
        )

    def style_name(self, style: MakeupStyle, region: str) -> str:
        return tables.STYLE_NAMES.get(region, {}).get(style, tables.DEFAULT_STYLE_NAME)

    def style_description(
        self,
        style: MakeupStyle,
        face_shape: Optional[FaceShape],
        skin_tone: Optional[SkinTone],
    ) -> str:
        shape = f"{tables.FACE_SHAPE_NAMES[face_shape]} face" if face_shape else "face shape"
        tone = f"{skin_tone.value} skin tone" if skin_tone else "skin tone"
        return f"Matched to your {shape} and {tone}, we suggest {tables.STYLE_PITCHES[style]}."
