"""Tests for API request models."""
import base64

from app.api.models.analysis import GenerationRequestBody
from app.domain.value_objects.generation import GenerationEngine


def test_to_domain_decodes_reference_image(detected_analysis):
    body = GenerationRequestBody(
        analysis=detected_analysis,
        engine=GenerationEngine.OPENAI_DALLE,
        reference_image_base64=base64.b64encode(b"photo").decode("ascii"),
    )
    request = body.to_domain()
    assert request.reference_image == b"photo"
    assert request.engine == GenerationEngine.OPENAI_DALLE
    assert request.region == "japan"


def test_to_domain_without_reference_image(undetected_analysis):
    request = GenerationRequestBody(analysis=undetected_analysis).to_domain()
    assert request.reference_image is None
    assert request.plan is None
