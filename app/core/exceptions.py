"""Custom exceptions for the makeup analysis service."""
from typing import Optional


class MakeupAIError(Exception):
    """Base exception for makeup analysis operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize makeup analysis error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class ImageValidationError(MakeupAIError):
    """Raised when an upload is rejected before any processing."""

    def __init__(self, message: str, reason: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.reason = reason


class DecodeError(MakeupAIError):
    """Raised when the provided bytes cannot be decoded as an image."""
    pass


class MetadataError(MakeupAIError):
    """Raised when image metadata cannot be read."""
    pass


class DetectionError(MakeupAIError):
    """Raised when a detector fails while running."""
    pass


class DetectorUnavailableError(DetectionError):
    """Raised when a detector is asked to run before it could be loaded."""
    pass


class GenerationError(MakeupAIError):
    """Base exception for image generation operations."""
    pass


class EngineUnavailableError(GenerationError):
    """Raised when a generation engine has no credentials configured."""
    pass


class EngineRequestFailedError(GenerationError):
    """Raised when a generation engine request fails (network, HTTP or payload)."""
    pass


class FallbackRenderError(GenerationError):
    """Raised when the local placeholder renderer cannot produce an image."""
    pass


class CameraError(MakeupAIError):
    """Raised when the capture device cannot be opened or read."""
    pass


class ServiceNotInitializedError(MakeupAIError):
    """Raised when a service is requested before the container is initialized."""
    pass
