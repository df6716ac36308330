"""Core face domain entities."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Centered box reported when a detector is positive but has no usable geometry
PLACEHOLDER_BOX = {"x_min": 0.2, "y_min": 0.1, "width": 0.6, "height": 0.8}


class BoundingBox(BaseModel):
    """Face bounding box, normalized to the image (0-1)."""
    model_config = ConfigDict(frozen=True)

    x_min: float = Field(..., description="Left edge of the box", ge=0.0, le=1.0)
    y_min: float = Field(..., description="Top edge of the box", ge=0.0, le=1.0)
    width: float = Field(..., description="Width of the box", ge=0.0, le=1.0)
    height: float = Field(..., description="Height of the box", ge=0.0, le=1.0)

    @classmethod
    def placeholder(cls) -> "BoundingBox":
        return cls(**PLACEHOLDER_BOX)

    def to_pixels(self, image_width: int, image_height: int) -> tuple:
        """Convert to integer pixel coordinates (left, top, width, height).

        Width and height are at least one pixel and the box is clipped to the image.
        """
        left = min(int(self.x_min * image_width), max(image_width - 1, 0))
        top = min(int(self.y_min * image_height), max(image_height - 1, 0))
        width = max(1, min(int(round(self.width * image_width)), image_width - left))
        height = max(1, min(int(round(self.height * image_height)), image_height - top))
        return left, top, width, height

    def aspect_ratio(self, image_width: int, image_height: int) -> float:
        """Width/height ratio of the box in pixel space."""
        pixel_height = self.height * image_height
        if pixel_height <= 0:
            return 0.0
        return (self.width * image_width) / pixel_height


class Keypoint(BaseModel):
    """Facial landmark in normalized image coordinates."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: Optional[float] = None


class FaceFeatures(BaseModel):
    """Per-feature facial attributes.

    Only the face measurements are derived from the image. The descriptive
    attributes are not measured yet and stay None until a landmark-based
    extractor fills them in.
    """
    model_config = ConfigDict(frozen=True)

    face_width: float = Field(..., description="Face region width in pixels")
    face_height: float = Field(..., description="Face region height in pixels")
    eye_shape: Optional[str] = Field(None, description="almond, round, hooded, monolid, upturned or downturned")
    eye_size: Optional[str] = Field(None, description="small, medium or large")
    eyebrow_shape: Optional[str] = Field(None, description="straight, arched, soft-arch or angular")
    lip_shape: Optional[str] = Field(None, description="full, thin, bow, wide or small")
    nose_shape: Optional[str] = Field(None, description="straight, button, roman, wide or narrow")
