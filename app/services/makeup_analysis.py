"""Makeup analysis pipeline: preprocess, detect, extract, recommend."""
import asyncio
from typing import Optional, Union

from app.core.config import settings
from app.core.exceptions import ImageValidationError
from app.core.logging import get_logger
from app.domain.entities.image import ImageMetadata
from app.domain.interfaces.detection.face_detector import FaceDetector
from app.domain.value_objects.attributes import MakeupStyle, Occasion
from app.domain.value_objects.generation import GenerationRequest, GenerationResult
from app.services.feature_extraction import FeatureExtractor
from app.services.generation.orchestrator import ImageGenerationOrchestrator, ProgressCallback
from app.services.image_processing import ImageProcessor, ProcessingOptions
from app.services.models import ServiceAnalysisOutcome
from app.services.recommendation.engine import RecommendationEngine

logger = get_logger(__name__)


class MakeupAnalysisService:
    """Runs one upload through the analysis pipeline.

    This service:
    1. Validates and normalizes the upload
    2. Detects the face (ML detector with heuristic fallback)
    3. Classifies face shape and skin tone
    4. Builds the makeup plan

    Steps run strictly in sequence. The service keeps no per-request state,
    so callers that fire overlapping requests must discard stale results
    themselves.

    Example:
        ```python
        service = MakeupAnalysisService(
            processor=ImageProcessor(),
            detector=CompositeFaceDetector(),
            extractor=FeatureExtractor(),
            engine=RecommendationEngine(),
            orchestrator=ImageGenerationOrchestrator(),
        )
        outcome = await service.analyze(image_bytes, "image/jpeg", style="glamour")
        ```
    """

    def __init__(
        self,
        processor: ImageProcessor,
        detector: FaceDetector,
        extractor: FeatureExtractor,
        engine: RecommendationEngine,
        orchestrator: Optional[ImageGenerationOrchestrator] = None,
    ) -> None:
        """Initialize the analysis service.

        Args:
            processor: Upload validation and normalization
            detector: Face detector
            extractor: Face attribute extraction
            engine: Makeup plan generation
            orchestrator: Image generation, required only for generate_image()
        """
        self.processor = processor
        self.detector = detector
        self.extractor = extractor
        self.engine = engine
        self.orchestrator = orchestrator

    async def analyze(
        self,
        data: bytes,
        mime_type: str,
        region: Optional[str] = None,
        style: Union[MakeupStyle, str] = MakeupStyle.NATURAL,
        occasion: Union[Occasion, str] = Occasion.DAILY,
        options: Optional[ProcessingOptions] = None,
    ) -> ServiceAnalysisOutcome:
        """Analyze an uploaded face photo and plan makeup for it.

        Args:
            data: Raw uploaded bytes
            mime_type: Declared MIME type of the upload
            region: Regional style preference
            style: Requested look
            occasion: Occasion for the look
            options: Resize and encoding options for preprocessing

        Returns:
            ServiceAnalysisOutcome with analysis, plan and image metadata

        Raises:
            ImageValidationError: If the upload is rejected
            DecodeError: If the upload cannot be decoded
        """
        region = (region or settings.DEFAULT_REGION).strip().lower()
        validation = self.processor.validate(data, mime_type)
        if not validation.valid:
            logger.warning("Upload rejected", reason=validation.reason.value, mime_type=mime_type)
            raise ImageValidationError(validation.message, validation.reason.value)

        asset = await asyncio.to_thread(self.processor.process, data, mime_type, options)
        pixels = await asyncio.to_thread(self.processor.load_pixels, asset)

        detection = await self.detector.detect(pixels)
        analysis = self.extractor.extract(pixels, detection)
        plan = self.engine.generate(analysis, region=region, style=style, occasion=occasion)

        logger.info(
            "Analysis completed",
            face_detected=analysis.face_detected,
            face_shape=analysis.face_shape.value if analysis.face_shape else None,
            skin_tone=analysis.skin_tone.value if analysis.skin_tone else None,
            suitability=plan.overall.suitability,
        )
        return ServiceAnalysisOutcome(
            analysis=analysis,
            plan=plan,
            image=ImageMetadata(
                width=asset.width,
                height=asset.height,
                size=asset.size,
                type=asset.mime_type,
            ),
            region=region,
            style=MakeupStyle(style),
            occasion=Occasion(occasion),
        )

    async def generate_image(
        self,
        request: GenerationRequest,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        """Generate an "after" image for a finished analysis."""
        if self.orchestrator is None:
            self.orchestrator = ImageGenerationOrchestrator()
        return await self.orchestrator.generate(request, on_progress)
