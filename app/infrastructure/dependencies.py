"""FastAPI dependency providers."""
from typing import AsyncGenerator

from fastapi import Depends

from app.core.container import ServiceContainer, container
from app.core.exceptions import ServiceNotInitializedError
from app.services.generation import ImageGenerationOrchestrator
from app.services.makeup_analysis import MakeupAnalysisService


async def get_container() -> ServiceContainer:
    """Dependency provider for the global ServiceContainer instance."""
    if not container.initialized:
        # Attempt to initialize if not already done (e.g., during testing)
        try:
            await container.initialize()
        except Exception as e:
            raise ServiceNotInitializedError(f"Service container could not be initialized: {e}")
    return container


async def get_analysis_service(
    cont: ServiceContainer = Depends(get_container),
) -> AsyncGenerator[MakeupAnalysisService, None]:
    """Provide the makeup analysis service.

    Yields:
        MakeupAnalysisService: Initialized analysis pipeline

    Raises:
        ServiceNotInitializedError: If the service is not initialized
    """
    if cont.analysis_service is None:
        raise ServiceNotInitializedError("Analysis service not initialized")
    yield cont.analysis_service


async def get_generation_orchestrator(
    cont: ServiceContainer = Depends(get_container),
) -> AsyncGenerator[ImageGenerationOrchestrator, None]:
    """Provide the image generation orchestrator.

    Yields:
        ImageGenerationOrchestrator: Initialized orchestrator

    Raises:
        ServiceNotInitializedError: If the orchestrator is not initialized
    """
    if cont.generation_orchestrator is None:
        raise ServiceNotInitializedError("Image generation orchestrator not initialized")
    yield cont.generation_orchestrator
