"""Tests for domain entities and value objects."""
import pytest
from pydantic import ValidationError

from app.domain.entities.analysis import FaceAnalysisResult
from app.domain.entities.face import BoundingBox, FaceFeatures
from app.domain.entities.makeup import (
    ColorPalette,
    MakeupPlan,
    MakeupSuggestion,
    OverallLook,
    bucket_difficulty,
    parse_minutes,
)
from app.domain.value_objects.attributes import (
    Difficulty,
    FaceShape,
    MakeupCategory,
    SeasonalType,
    SkinTone,
)
from app.domain.value_objects.detection import DetectionResult, DetectorKind
from app.domain.value_objects.generation import AspectRatio


def make_suggestion(category: MakeupCategory, minutes: str = "5 min",
                    difficulty: Difficulty = Difficulty.BEGINNER) -> MakeupSuggestion:
    return MakeupSuggestion(
        id=category.value,
        category=category,
        title=category.value,
        description="test",
        steps=["step"],
        difficulty=difficulty,
        time_estimate=minutes,
    )


def make_plan(suggestions) -> MakeupPlan:
    return MakeupPlan(
        overall=OverallLook(style="Test", description="test", suitability=0.9),
        suggestions=suggestions,
        color_palette=ColorPalette(
            foundation="#F5D5B8", eyeshadow=["#E8C4A5"], lipstick="#E8A298", blush="#F4B2A7"
        ),
    )


ORDER = [
    MakeupCategory.FOUNDATION,
    MakeupCategory.EYES,
    MakeupCategory.LIPS,
    MakeupCategory.CHEEKS,
    MakeupCategory.BROWS,
]


class TestBoundingBox:
    def test_coordinates_must_be_normalized(self):
        with pytest.raises(ValidationError):
            BoundingBox(x_min=1.2, y_min=0.0, width=0.5, height=0.5)

    def test_to_pixels_is_clipped_and_non_empty(self):
        box = BoundingBox(x_min=0.9, y_min=0.9, width=0.5, height=0.0)
        left, top, width, height = box.to_pixels(100, 100)
        assert (left, top) == (90, 90)
        assert width == 10
        assert height == 1

    def test_aspect_ratio_uses_pixel_space(self):
        box = BoundingBox.placeholder()
        assert box.aspect_ratio(300, 400) == pytest.approx(180 / 320)


class TestDetectionResult:
    def test_detected_face_requires_box(self):
        with pytest.raises(ValidationError):
            DetectionResult(face_detected=True, confidence=0.9)

    def test_confidence_range(self):
        with pytest.raises(ValidationError):
            DetectionResult(face_detected=False, confidence=1.5)

    def test_not_detected(self):
        result = DetectionResult.not_detected(DetectorKind.HEURISTIC)
        assert not result.face_detected
        assert result.confidence == 0.0
        assert result.bounding_box is None
        assert result.detector == DetectorKind.HEURISTIC


class TestFaceAnalysisResult:
    def test_detected_requires_derived_attributes(self):
        with pytest.raises(ValidationError):
            FaceAnalysisResult(
                face_detected=True,
                confidence=0.9,
                bounding_box=BoundingBox.placeholder(),
            )

    def test_undetected_rejects_derived_attributes(self):
        with pytest.raises(ValidationError):
            FaceAnalysisResult(
                face_detected=False,
                confidence=0.0,
                face_shape=FaceShape.OVAL,
            )

    def test_seasonal_type(self, detected_analysis, undetected_analysis):
        assert detected_analysis.seasonal_type == SeasonalType.SPRING
        assert undetected_analysis.seasonal_type is None
        assert detected_analysis.model_dump()["seasonal_type"] == "spring"

    def test_from_detection_keeps_detection_fields(self):
        detection = DetectionResult(
            face_detected=True,
            confidence=0.8,
            bounding_box=BoundingBox.placeholder(),
            detector=DetectorKind.HEURISTIC,
        )
        analysis = FaceAnalysisResult.from_detection(
            detection,
            face_shape=FaceShape.HEART,
            skin_tone=SkinTone.DEEP,
            features=FaceFeatures(face_width=10, face_height=20),
        )
        assert analysis.confidence == 0.8
        assert analysis.detector == DetectorKind.HEURISTIC
        assert analysis.bounding_box == BoundingBox.placeholder()
        assert analysis.features.eye_shape is None

    def test_round_trips_through_json(self, detected_analysis):
        restored = FaceAnalysisResult.model_validate_json(detected_analysis.model_dump_json())
        assert restored == detected_analysis


class TestMakeupPlan:
    def test_totals_and_difficulty(self):
        suggestions = [
            make_suggestion(MakeupCategory.FOUNDATION, "10 min"),
            make_suggestion(MakeupCategory.EYES, "15 min", Difficulty.ADVANCED),
            make_suggestion(MakeupCategory.LIPS, "5 min"),
            make_suggestion(MakeupCategory.CHEEKS, "5 min"),
            make_suggestion(MakeupCategory.BROWS, "8 min", Difficulty.INTERMEDIATE),
        ]
        plan = make_plan(suggestions)
        assert plan.total_minutes == 43
        assert plan.total_time == "43 min"
        # (1 + 3 + 1 + 1 + 2) / 5 = 1.6
        assert plan.difficulty == Difficulty.INTERMEDIATE

    def test_rejects_wrong_category_order(self):
        suggestions = [make_suggestion(c) for c in reversed(ORDER)]
        with pytest.raises(ValidationError):
            make_plan(suggestions)

    def test_rejects_missing_category(self):
        with pytest.raises(ValidationError):
            make_plan([make_suggestion(c) for c in ORDER[:4]])

    def test_suggestion_requires_steps(self):
        with pytest.raises(ValidationError):
            MakeupSuggestion(
                id="x",
                category=MakeupCategory.LIPS,
                title="x",
                description="x",
                steps=[],
                difficulty=Difficulty.BEGINNER,
                time_estimate="5 min",
            )

    def test_suggestion_for(self):
        plan = make_plan([make_suggestion(c) for c in ORDER])
        assert plan.suggestion_for(MakeupCategory.LIPS).id == "lips"

    def test_extra_computed_fields_are_ignored_on_input(self):
        plan = make_plan([make_suggestion(c) for c in ORDER])
        restored = MakeupPlan.model_validate(plan.model_dump())
        assert restored.total_minutes == plan.total_minutes


@pytest.mark.parametrize("text,minutes", [
    ("10 min", 10),
    ("about 15 minutes", 15),
    ("quick", 0),
    ("", 0),
])
def test_parse_minutes(text, minutes):
    assert parse_minutes(text) == minutes


@pytest.mark.parametrize("average,expected", [
    (1.0, Difficulty.BEGINNER),
    (1.5, Difficulty.BEGINNER),
    (1.51, Difficulty.INTERMEDIATE),
    (2.5, Difficulty.INTERMEDIATE),
    (2.51, Difficulty.ADVANCED),
])
def test_bucket_difficulty(average, expected):
    assert bucket_difficulty(average) == expected


def test_aspect_ratio_value():
    assert AspectRatio.PORTRAIT.ratio == pytest.approx(0.75)
