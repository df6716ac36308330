"""Image generation engine interface."""
from abc import ABC, abstractmethod

from ...entities.image import GeneratedImage
from ...value_objects.generation import GenerationEngine, GenerationRequest


class ImageGenerationEngine(ABC):
    """Interface for pluggable "after" image generators."""

    name: GenerationEngine

    @property
    @abstractmethod
    def configured(self) -> bool:
        """Whether the engine has the credentials it needs."""
        pass

    @abstractmethod
    async def generate(self, prompt: str, request: GenerationRequest) -> GeneratedImage:
        """
        Generate one image for the prompt.

        Args:
            prompt: Natural-language description of the look
            request: Full generation request (quality, aspect ratio, reference image)

        Returns:
            GeneratedImage produced by this engine

        Raises:
            EngineUnavailableError: If the engine is not configured
            EngineRequestFailedError: If the remote call fails or returns no image
        """
        pass
