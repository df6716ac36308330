"""OpenAI DALL-E engine."""
from typing import Any, Dict, Optional

import requests

from app.core.config import settings
from app.domain.value_objects.generation import AspectRatio, GenerationEngine, GenerationRequest, ImageQuality
from app.services.generation.engines.remote import RemoteImageEngine

# DALL-E 3 only accepts these sizes
SIZES = {
    AspectRatio.SQUARE: "1024x1024",
    AspectRatio.PORTRAIT: "1024x1792",
    AspectRatio.LANDSCAPE: "1792x1024",
}


class OpenAIDalleEngine(RemoteImageEngine):
    """Calls the OpenAI images/generations endpoint.

    The endpoint is text-to-image only, so a reference image is ignored.
    """

    name = GenerationEngine.OPENAI_DALLE

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(
            api_key=api_key if api_key is not None else settings.OPENAI_API_KEY,
            base_url=base_url or settings.OPENAI_API_BASE_URL,
            timeout=timeout,
            session=session,
        )
        self.model = model or settings.OPENAI_IMAGE_MODEL

    def _endpoint(self) -> str:
        return f"{self.base_url}/images/generations"

    def _payload(self, prompt: str, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": SIZES[request.aspect_ratio],
            "quality": "hd" if request.quality == ImageQuality.HD else "standard",
            "response_format": "b64_json",
        }

    def _extract_image(self, body: Dict[str, Any]) -> Optional[str]:
        data = body.get("data") or []
        if not data:
            return None
        if data[0].get("b64_json"):
            return f"data:image/png;base64,{data[0]['b64_json']}"
        return data[0].get("url")
