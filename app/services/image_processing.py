"""Upload validation and normalization."""
import io
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError
from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.exceptions import DecodeError, MetadataError
from app.core.logging import get_logger
from app.core.utils.image import bytes_to_numpy_array, to_data_url
from app.domain.entities.image import (
    ImageAsset,
    ImageFormat,
    ImageMetadata,
    RejectionReason,
    ValidationResult,
)

logger = get_logger(__name__)

_DECODE_ERRORS = (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError)


class ProcessingOptions(BaseModel):
    """Resize and re-encode options for uploads."""
    max_width: int = Field(default_factory=lambda: settings.MAX_IMAGE_WIDTH, gt=0)
    max_height: int = Field(default_factory=lambda: settings.MAX_IMAGE_HEIGHT, gt=0)
    quality: float = Field(default_factory=lambda: settings.IMAGE_QUALITY, gt=0.0, le=1.0)
    format: ImageFormat = ImageFormat.JPEG


class ImageProcessor:
    """Validates uploads and normalizes them into ImageAssets.

    Example:
        ```python
        processor = ImageProcessor()
        result = processor.validate(data, "image/png")
        if result.valid:
            asset = processor.process(data, "image/png")
        ```
    """

    def __init__(
        self,
        max_upload_bytes: Optional[int] = None,
        allowed_mime_types: Optional[list] = None,
    ) -> None:
        self.max_upload_bytes = max_upload_bytes or settings.MAX_UPLOAD_BYTES
        self.allowed_mime_types = [
            mime.lower() for mime in (allowed_mime_types or settings.allowed_mime_types)
        ]

    def validate(self, data: bytes, mime_type: str) -> ValidationResult:
        """Check type and size of an upload without decoding it."""
        if (mime_type or "").lower() not in self.allowed_mime_types:
            return ValidationResult.rejected(
                RejectionReason.UNSUPPORTED_TYPE,
                "Unsupported file type. Please upload a JPEG, PNG or WebP image.",
            )
        if not data:
            return ValidationResult.rejected(RejectionReason.EMPTY_FILE, "The uploaded file is empty.")
        if len(data) > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes / (1024 * 1024)
            return ValidationResult.rejected(
                RejectionReason.TOO_LARGE,
                f"File is too large. Please upload an image of {limit_mb:g}MB or less.",
            )
        return ValidationResult.accepted()

    def _open(self, data: bytes) -> Image.Image:
        img = Image.open(io.BytesIO(data))
        img.load()
        return img

    def process(
        self,
        data: bytes,
        mime_type: str,
        options: Optional[ProcessingOptions] = None,
    ) -> ImageAsset:
        """Decode, downscale to fit the configured box and re-encode an upload.

        Args:
            data: Raw uploaded bytes
            mime_type: Declared MIME type of the upload
            options: Resize and encoding options

        Returns:
            ImageAsset whose dimensions fit within max_width x max_height

        Raises:
            DecodeError: If the bytes cannot be decoded as an image
        """
        options = options or ProcessingOptions()
        try:
            img = ImageOps.exif_transpose(self._open(data))
        except _DECODE_ERRORS as e:
            logger.error("Image decoding failed", mime_type=mime_type, error=str(e))
            raise DecodeError(f"Failed to decode image: {e}", {"mime_type": mime_type})

        width, height = img.size
        scale = min(1.0, options.max_width / width, options.max_height / height)
        new_width = max(1, min(options.max_width, round(width * scale)))
        new_height = max(1, min(options.max_height, round(height * scale)))

        if scale < 1.0:
            logger.info(
                "Resizing large image",
                original_size=(width, height),
                new_size=(new_width, new_height),
            )
            img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

        if options.format == ImageFormat.JPEG or img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGB")

        buffer = io.BytesIO()
        save_kwargs = {}
        if options.format in (ImageFormat.JPEG, ImageFormat.WEBP):
            save_kwargs["quality"] = int(round(options.quality * 100))
        else:
            save_kwargs["optimize"] = True
        try:
            img.save(buffer, format=options.format.value.upper(), **save_kwargs)
        except _DECODE_ERRORS as e:
            raise DecodeError(f"Failed to encode image as {options.format.value}: {e}")

        return ImageAsset(
            data=buffer.getvalue(),
            mime_type=options.format.mime_type,
            width=new_width,
            height=new_height,
        )

    def extract_metadata(self, data: bytes, mime_type: str) -> ImageMetadata:
        """Read decoded dimensions along with file size and declared type.

        Raises:
            MetadataError: If the bytes cannot be decoded as an image
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                width, height = img.size
        except _DECODE_ERRORS as e:
            raise MetadataError(f"Failed to read image metadata: {e}", {"mime_type": mime_type})
        return ImageMetadata(width=width, height=height, size=len(data), type=mime_type)

    def load_pixels(self, asset: ImageAsset) -> np.ndarray:
        """Decode an asset to an RGB array for detection."""
        return bytes_to_numpy_array(asset.data)

    def create_preview(self, asset: ImageAsset) -> str:
        """Data URL preview of the asset."""
        return to_data_url(asset.data, asset.mime_type)
