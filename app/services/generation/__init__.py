"""Image generation orchestration."""
from .orchestrator import ImageGenerationOrchestrator
from .prompt import build_prompt

__all__ = ["ImageGenerationOrchestrator", "build_prompt"]
