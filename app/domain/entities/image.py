"""Image entities produced by preprocessing and generation."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ImageFormat(str, Enum):
    """Output encodings supported by the preprocessor."""
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


class RejectionReason(str, Enum):
    """Why an upload was refused."""
    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE = "too_large"
    EMPTY_FILE = "empty_file"


class ValidationResult(BaseModel):
    """Outcome of upload validation."""
    valid: bool
    reason: Optional[RejectionReason] = None
    message: Optional[str] = None

    @classmethod
    def accepted(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def rejected(cls, reason: RejectionReason, message: str) -> "ValidationResult":
        return cls(valid=False, reason=reason, message=message)


class ImageMetadata(BaseModel):
    """Decoded dimensions plus file-level size and type."""
    width: int = Field(..., description="Width in pixels")
    height: int = Field(..., description="Height in pixels")
    size: int = Field(..., description="File size in bytes")
    type: str = Field(..., description="Declared MIME type")


class ImageAsset(BaseModel):
    """Normalized image ready for analysis."""
    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Encoded image bytes", repr=False)
    mime_type: str = Field(..., description="MIME type of the encoded bytes")
    width: int = Field(..., description="Width in pixels", gt=0)
    height: int = Field(..., description="Height in pixels", gt=0)

    @computed_field
    @property
    def size(self) -> int:
        return len(self.data)


class GeneratedImage(BaseModel):
    """An "after" image produced by a generation engine."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique image identifier")
    url: str = Field(..., description="Remote URL or data URL of the image", repr=False)
    prompt: str = Field(..., description="Prompt the image was generated from")
    engine: str = Field(..., description="Engine that produced the image")
    quality: str = Field(..., description="Requested quality level")
    generated_at: datetime = Field(..., description="Generation timestamp")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Engine-specific details")
