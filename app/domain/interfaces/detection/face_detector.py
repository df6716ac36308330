"""Face detector interface."""
from abc import ABC, abstractmethod

import numpy as np

from ...value_objects.detection import DetectionResult


class FaceDetector(ABC):
    """Interface for face detection tiers."""

    @abstractmethod
    async def initialize(self) -> None:
        """
        Prepare the detector for use.

        Implementations must not raise: a detector that cannot be prepared
        reports itself through `available` instead.
        """
        pass

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether detect() can be called."""
        pass

    @abstractmethod
    async def detect(self, pixels: np.ndarray) -> DetectionResult:
        """
        Look for a face in the image.

        Args:
            pixels: RGB image as an H x W x 3 uint8 array

        Returns:
            DetectionResult for the most prominent face, or a not-detected result

        Raises:
            DetectionError: If the detector fails while running
        """
        pass
