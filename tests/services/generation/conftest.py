"""Fixtures for image generation tests."""
import pytest

from app.domain.value_objects.attributes import MakeupStyle, Occasion
from app.domain.value_objects.generation import GenerationRequest
from app.services.recommendation import RecommendationEngine


@pytest.fixture
def plan(detected_analysis):
    return RecommendationEngine().generate(detected_analysis, style=MakeupStyle.GLAMOUR)


@pytest.fixture
def request_with_plan(detected_analysis, plan):
    return GenerationRequest(
        analysis=detected_analysis,
        plan=plan,
        style=MakeupStyle.GLAMOUR,
        occasion=Occasion.PARTY,
        region="korea",
    )


@pytest.fixture
def bare_request(undetected_analysis):
    return GenerationRequest(analysis=undetected_analysis)
