"""Google Imagen engine."""
import base64
from typing import Any, Dict, Optional

import requests

from app.core.config import settings
from app.domain.value_objects.generation import GenerationEngine, GenerationRequest
from app.services.generation.engines.remote import RemoteImageEngine


class GoogleImagenEngine(RemoteImageEngine):
    """Calls the Imagen generateImages endpoint."""

    name = GenerationEngine.GOOGLE_IMAGEN

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(
            api_key=api_key if api_key is not None else settings.GOOGLE_API_KEY,
            base_url=base_url or settings.GOOGLE_API_BASE_URL,
            timeout=timeout,
            session=session,
        )
        self.model = model or settings.GOOGLE_IMAGEN_MODEL

    def _endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateImages"

    def _payload(self, prompt: str, request: GenerationRequest) -> Dict[str, Any]:
        instance: Dict[str, Any] = {"prompt": prompt}
        if request.reference_image:
            instance["image"] = {
                "bytesBase64Encoded": base64.b64encode(request.reference_image).decode("ascii")
            }
        return {
            "instances": [instance],
            "parameters": {
                "sampleCount": 1,
                "aspectRatio": request.aspect_ratio.value,
                "safetyFilterLevel": "block_some",
                "personGeneration": "allow_adult",
            },
        }

    def _extract_image(self, body: Dict[str, Any]) -> Optional[str]:
        predictions = body.get("predictions") or []
        if not predictions:
            return None
        encoded = predictions[0].get("bytesBase64Encoded")
        if not encoded:
            return None
        mime_type = predictions[0].get("mimeType", "image/jpeg")
        return f"data:{mime_type};base64,{encoded}"
