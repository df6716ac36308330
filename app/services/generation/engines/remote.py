"""Shared plumbing for HTTP image generation engines."""
import asyncio
import uuid
from abc import abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

import requests

from app.core.config import settings
from app.core.exceptions import EngineRequestFailedError, EngineUnavailableError
from app.core.logging import get_logger
from app.domain.entities.image import GeneratedImage
from app.domain.interfaces.generation.image_engine import ImageGenerationEngine
from app.domain.value_objects.generation import GenerationRequest

logger = get_logger(__name__)


class RemoteImageEngine(ImageGenerationEngine):
    """Engine that POSTs a JSON payload and reads one image out of the reply.

    Subclasses describe the endpoint and payload and know where the image
    lives in the response body.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or settings.GENERATION_HTTP_TIMEOUT
        self.session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def _endpoint(self) -> str:
        pass

    @abstractmethod
    def _payload(self, prompt: str, request: GenerationRequest) -> Dict[str, Any]:
        pass

    @abstractmethod
    def _extract_image(self, body: Dict[str, Any]) -> Optional[str]:
        """Return the image URL or data URL found in the response body, if any."""
        pass

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _post(self, payload: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        response = self.session.post(
            self._endpoint(),
            json=payload,
            headers=self._headers(),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.status_code, response.json()

    async def generate(self, prompt: str, request: GenerationRequest) -> GeneratedImage:
        if not self.configured:
            raise EngineUnavailableError(f"{self.name.value} has no API key configured")

        try:
            status, body = await asyncio.to_thread(self._post, self._payload(prompt, request))
        except requests.RequestException as e:
            raise EngineRequestFailedError(
                f"{self.name.value} request failed: {e}",
                {"engine": self.name.value},
            )
        except ValueError as e:
            # Body was not JSON
            raise EngineRequestFailedError(
                f"{self.name.value} returned an unreadable response: {e}",
                {"engine": self.name.value},
            )

        try:
            url = self._extract_image(body) if isinstance(body, dict) else None
        except (AttributeError, KeyError, TypeError, IndexError) as e:
            # Reply was JSON but not shaped the way the engine expects
            raise EngineRequestFailedError(
                f"Malformed {self.name.value} response: {e}",
                {"engine": self.name.value, "status": status},
            )
        if not url or not isinstance(url, str):
            raise EngineRequestFailedError(
                f"No image in {self.name.value} response",
                {"engine": self.name.value, "status": status},
            )

        logger.info("Remote engine produced image", engine=self.name.value, status=status)
        return GeneratedImage(
            id=str(uuid.uuid4()),
            url=url,
            prompt=prompt,
            engine=self.name.value,
            quality=request.quality.value,
            generated_at=datetime.now(timezone.utc),
            metadata={"aspect_ratio": request.aspect_ratio.value},
        )
