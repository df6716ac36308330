"""Image generation orchestration across remote engines and the local fallback."""
import time
from typing import Callable, Dict, List, Optional

from app.core.exceptions import FallbackRenderError, GenerationError
from app.core.logging import get_logger
from app.domain.interfaces.generation.image_engine import ImageGenerationEngine
from app.domain.value_objects.generation import (
    GenerationEngine,
    GenerationProgress,
    GenerationRequest,
    GenerationResult,
)
from app.services.generation.engines import GoogleImagenEngine, LocalPlaceholderRenderer, OpenAIDalleEngine
from app.services.generation.prompt import build_prompt

logger = get_logger(__name__)

ProgressCallback = Callable[[GenerationProgress], None]

MILESTONES = {
    "analysis": GenerationProgress(stage="analysis", progress=20, message="Analyzing facial features..."),
    "generation": GenerationProgress(stage="generation", progress=60, message="Generating image..."),
    "processing": GenerationProgress(stage="processing", progress=90, message="Finishing up..."),
    "complete": GenerationProgress(stage="complete", progress=100, message="Done!"),
}


class ImageGenerationOrchestrator:
    """Generates "after" images, falling back until something succeeds.

    Remote engines are tried in priority order (only those with credentials).
    The local placeholder renderer runs last, so a request only fails when
    the placeholder itself cannot be rendered.

    Example:
        ```python
        orchestrator = ImageGenerationOrchestrator()
        result = await orchestrator.generate(request, on_progress=print)
        ```
    """

    def __init__(
        self,
        engines: Optional[List[ImageGenerationEngine]] = None,
        fallback: Optional[ImageGenerationEngine] = None,
    ) -> None:
        self.engines = engines if engines is not None else [GoogleImagenEngine(), OpenAIDalleEngine()]
        self.fallback = fallback or LocalPlaceholderRenderer()

    def _engine_map(self) -> Dict[GenerationEngine, ImageGenerationEngine]:
        return {engine.name: engine for engine in self.engines}

    def available_engines(self) -> List[GenerationEngine]:
        """Configured remote engines in priority order, followed by the fallback."""
        return [engine.name for engine in self.engines if engine.configured] + [self.fallback.name]

    def has_real_engine(self) -> bool:
        return any(engine.configured for engine in self.engines)

    def estimated_seconds(self, has_reference_image: bool) -> int:
        return 15 if has_reference_image else 10

    def _candidates(self, preferred: Optional[GenerationEngine]) -> List[ImageGenerationEngine]:
        if preferred == self.fallback.name:
            return []
        if preferred is not None:
            engine = self._engine_map().get(preferred)
            if engine is not None and engine.configured:
                return [engine]
            logger.info("Requested engine not configured, selecting automatically", engine=preferred.value)
        return [engine for engine in self.engines if engine.configured]

    async def generate(
        self,
        request: GenerationRequest,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        """Generate one image for the request.

        Args:
            request: Analysis, plan and output preferences
            on_progress: Called at 20, 60, 90 and 100 percent

        Returns:
            GenerationResult; success is False only if the fallback renderer failed
        """
        started = time.monotonic()

        def report(stage: str) -> None:
            if on_progress is not None:
                on_progress(MILESTONES[stage])

        def elapsed_ms() -> int:
            return int((time.monotonic() - started) * 1000)

        prompt = build_prompt(request)
        report("analysis")
        report("generation")

        image = None
        for engine in self._candidates(request.engine):
            try:
                image = await engine.generate(prompt, request)
                break
            except GenerationError as e:
                logger.warning(
                    "Generation engine failed, trying next",
                    engine=engine.name.value,
                    error=str(e),
                )

        if image is None:
            try:
                image = await self.fallback.generate(prompt, request)
            except FallbackRenderError as e:
                logger.error("All generation engines failed", error=str(e))
                return GenerationResult(
                    success=False,
                    prompt=prompt,
                    processing_time_ms=elapsed_ms(),
                    error=str(e),
                )

        report("processing")
        report("complete")

        logger.info(
            "Image generated",
            engine=image.engine,
            processing_time_ms=elapsed_ms(),
        )
        return GenerationResult(
            success=True,
            images=[image],
            prompt=prompt,
            engine=GenerationEngine(image.engine),
            processing_time_ms=elapsed_ms(),
        )
