"""Tests for the remote engines and the local placeholder renderer."""
import base64
import io
from unittest.mock import MagicMock, patch

import pytest
import requests
from PIL import Image

from app.core.exceptions import EngineRequestFailedError, EngineUnavailableError, FallbackRenderError
from app.domain.value_objects.generation import AspectRatio, GenerationEngine, GenerationRequest, ImageQuality
from app.services.generation.engines import GoogleImagenEngine, LocalPlaceholderRenderer, OpenAIDalleEngine
from app.services.generation.engines.local_fallback import gradient_colors, render_placeholder


def mock_session(body=None, status_code=200, error=None):
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.post.side_effect = error
        return session
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    session.post.return_value = response
    return session


class TestGoogleImagenEngine:
    @pytest.mark.asyncio
    async def test_unconfigured(self, bare_request):
        engine = GoogleImagenEngine(api_key="", session=mock_session())
        assert not engine.configured
        with pytest.raises(EngineUnavailableError):
            await engine.generate("prompt", bare_request)

    @pytest.mark.asyncio
    async def test_success(self, bare_request):
        session = mock_session({"predictions": [{"bytesBase64Encoded": "QUJD", "mimeType": "image/png"}]})
        engine = GoogleImagenEngine(api_key="key", base_url="https://imagen.test/v1/", model="imagen-test",
                                    session=session)

        image = await engine.generate("a prompt", bare_request)

        assert image.url == "data:image/png;base64,QUJD"
        assert image.engine == GenerationEngine.GOOGLE_IMAGEN.value
        assert image.prompt == "a prompt"
        url = session.post.call_args[0][0]
        assert url == "https://imagen.test/v1/models/imagen-test:generateImages"
        kwargs = session.post.call_args[1]
        assert kwargs["headers"]["Authorization"] == "Bearer key"
        assert kwargs["json"]["instances"][0] == {"prompt": "a prompt"}
        assert kwargs["json"]["parameters"]["aspectRatio"] == "1:1"

    @pytest.mark.asyncio
    async def test_reference_image_is_sent(self, undetected_analysis):
        request = GenerationRequest(analysis=undetected_analysis, reference_image=b"photo")
        session = mock_session({"predictions": [{"bytesBase64Encoded": "QUJD"}]})
        engine = GoogleImagenEngine(api_key="key", session=session)

        image = await engine.generate("p", request)

        instance = session.post.call_args[1]["json"]["instances"][0]
        assert base64.b64decode(instance["image"]["bytesBase64Encoded"]) == b"photo"
        assert image.url.startswith("data:image/jpeg;base64,")

    @pytest.mark.asyncio
    async def test_http_error(self, bare_request):
        engine = GoogleImagenEngine(api_key="key", session=mock_session({}, status_code=500))
        with pytest.raises(EngineRequestFailedError):
            await engine.generate("p", bare_request)

    @pytest.mark.asyncio
    async def test_network_error(self, bare_request):
        engine = GoogleImagenEngine(api_key="key",
                                    session=mock_session(error=requests.ConnectionError("down")))
        with pytest.raises(EngineRequestFailedError):
            await engine.generate("p", bare_request)

    @pytest.mark.asyncio
    async def test_response_without_image(self, bare_request):
        engine = GoogleImagenEngine(api_key="key", session=mock_session({"predictions": []}))
        with pytest.raises(EngineRequestFailedError):
            await engine.generate("p", bare_request)

    @pytest.mark.asyncio
    async def test_malformed_prediction(self, bare_request):
        engine = GoogleImagenEngine(api_key="key", session=mock_session({"predictions": ["oops"]}))
        with pytest.raises(EngineRequestFailedError):
            await engine.generate("p", bare_request)


class TestOpenAIDalleEngine:
    @pytest.mark.asyncio
    async def test_b64_response(self, undetected_analysis):
        request = GenerationRequest(
            analysis=undetected_analysis,
            quality=ImageQuality.HD,
            aspect_ratio=AspectRatio.PORTRAIT,
        )
        session = mock_session({"data": [{"b64_json": "QUJD"}]})
        engine = OpenAIDalleEngine(api_key="key", base_url="https://openai.test/v1", session=session)

        image = await engine.generate("p", request)

        assert image.url == "data:image/png;base64,QUJD"
        assert image.quality == "hd"
        assert session.post.call_args[0][0] == "https://openai.test/v1/images/generations"
        payload = session.post.call_args[1]["json"]
        assert payload["size"] == "1024x1792"
        assert payload["quality"] == "hd"

    @pytest.mark.asyncio
    async def test_url_response(self, bare_request):
        session = mock_session({"data": [{"url": "https://cdn.test/image.png"}]})
        image = await OpenAIDalleEngine(api_key="key", session=session).generate("p", bare_request)
        assert image.url == "https://cdn.test/image.png"

    @pytest.mark.asyncio
    async def test_non_json_body(self, bare_request):
        session = mock_session()
        session.post.return_value.json.side_effect = ValueError("not json")
        with pytest.raises(EngineRequestFailedError):
            await OpenAIDalleEngine(api_key="key", session=session).generate("p", bare_request)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"data": [None]},
        {"data": "QUJD"},
        {"data": [["QUJD"]]},
        {"data": [{"url": 123}]},
    ])
    async def test_malformed_data(self, bare_request, body):
        engine = OpenAIDalleEngine(api_key="key", session=mock_session(body))
        with pytest.raises(EngineRequestFailedError):
            await engine.generate("p", bare_request)


class TestLocalPlaceholderRenderer:
    def test_gradient_uses_plan_palette(self, request_with_plan, plan):
        assert gradient_colors(request_with_plan) == (plan.color_palette.foundation, plan.color_palette.blush)

    @pytest.mark.parametrize("aspect_ratio,size", [
        (AspectRatio.SQUARE, (512, 512)),
        (AspectRatio.PORTRAIT, (512, 683)),
        (AspectRatio.LANDSCAPE, (512, 384)),
    ])
    def test_render_size(self, undetected_analysis, aspect_ratio, size):
        png = render_placeholder(GenerationRequest(analysis=undetected_analysis, aspect_ratio=aspect_ratio))
        with Image.open(io.BytesIO(png)) as img:
            assert img.format == "PNG"
            assert img.size == size

    def test_render_is_deterministic(self, request_with_plan):
        assert render_placeholder(request_with_plan) == render_placeholder(request_with_plan)

    @pytest.mark.asyncio
    async def test_generate(self, request_with_plan):
        renderer = LocalPlaceholderRenderer()
        assert renderer.configured

        image = await renderer.generate("p", request_with_plan)

        assert image.engine == GenerationEngine.LOCAL_FALLBACK.value
        assert image.url.startswith("data:image/png;base64,")
        assert image.metadata["placeholder"] is True

    @pytest.mark.asyncio
    async def test_render_failure(self, bare_request):
        with patch("app.services.generation.engines.local_fallback.render_placeholder",
                   side_effect=OSError("no font")):
            with pytest.raises(FallbackRenderError):
                await LocalPlaceholderRenderer().generate("p", bare_request)
