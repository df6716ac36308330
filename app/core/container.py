"""Service container for dependency injection."""
from typing import Optional

from app.services.detection import CompositeFaceDetector
from app.services.feature_extraction import FeatureExtractor
from app.services.generation import ImageGenerationOrchestrator
from app.services.image_processing import ImageProcessor
from app.services.makeup_analysis import MakeupAnalysisService
from app.services.recommendation import RecommendationEngine


class ServiceContainer:
    """Container for application services.

    This container manages the lifecycle and dependencies of all services in the application.
    It ensures proper initialization order and provides a single source of truth for service instances.

    Example:
        ```python
        container = ServiceContainer()
        await container.initialize()

        analysis_service = container.analysis_service
        ```
    """

    def __init__(self) -> None:
        """Initialize empty container."""
        # Core services
        self.image_processor: Optional[ImageProcessor] = None
        self.face_detector: Optional[CompositeFaceDetector] = None
        self.feature_extractor: Optional[FeatureExtractor] = None
        self.recommendation_engine: Optional[RecommendationEngine] = None
        self.generation_orchestrator: Optional[ImageGenerationOrchestrator] = None

        # Use-case services
        self.analysis_service: Optional[MakeupAnalysisService] = None

    @property
    def initialized(self) -> bool:
        return self.analysis_service is not None

    async def initialize(self) -> None:
        """Initialize all services in the correct order."""
        if self.initialized:
            return
        self.image_processor = ImageProcessor()
        detector = CompositeFaceDetector()
        # Never raises; an unusable ML model leaves the detector heuristic-only
        await detector.initialize()
        self.face_detector = detector
        self.feature_extractor = FeatureExtractor()
        self.recommendation_engine = RecommendationEngine()
        self.generation_orchestrator = ImageGenerationOrchestrator()
        self.analysis_service = MakeupAnalysisService(
            processor=self.image_processor,
            detector=self.face_detector,
            extractor=self.feature_extractor,
            engine=self.recommendation_engine,
            orchestrator=self.generation_orchestrator,
        )

    async def cleanup(self) -> None:
        """Cleanup all services in reverse order of initialization."""
        self.analysis_service = None
        self.generation_orchestrator = None
        self.recommendation_engine = None
        self.feature_extractor = None
        self.face_detector = None
        self.image_processor = None


# Global container instance
container = ServiceContainer()
