"""Tests for upload validation and preprocessing."""
import io

import numpy as np
import pytest
from PIL import Image

from app.core.exceptions import DecodeError, MetadataError
from app.core.utils.image import bytes_to_numpy_array, to_data_url
from app.domain.entities.image import ImageFormat, RejectionReason
from app.services.image_processing import ImageProcessor, ProcessingOptions
from tests.conftest import SKIN, encode


@pytest.fixture
def processor():
    return ImageProcessor(max_upload_bytes=5 * 1024 * 1024)


def large_png(width: int, height: int) -> bytes:
    return encode(np.zeros((height, width, 3), dtype=np.uint8))


class TestValidate:
    @pytest.mark.parametrize("mime_type", ["image/jpeg", "image/png", "image/webp", "IMAGE/PNG"])
    def test_accepts_supported_types(self, processor, face_png, mime_type):
        result = processor.validate(face_png, mime_type)
        assert result.valid
        assert result.reason is None

    @pytest.mark.parametrize("mime_type", ["image/gif", "application/pdf", ""])
    def test_rejects_unsupported_types(self, processor, face_png, mime_type):
        result = processor.validate(face_png, mime_type)
        assert not result.valid
        assert result.reason == RejectionReason.UNSUPPORTED_TYPE

    def test_type_is_checked_before_size(self, processor):
        result = processor.validate(b"x" * (6 * 1024 * 1024), "image/gif")
        assert result.reason == RejectionReason.UNSUPPORTED_TYPE

    def test_rejects_empty_file(self, processor):
        result = processor.validate(b"", "image/png")
        assert result.reason == RejectionReason.EMPTY_FILE

    def test_size_limit_is_inclusive(self):
        processor = ImageProcessor(max_upload_bytes=100)
        assert processor.validate(b"x" * 100, "image/png").valid
        result = processor.validate(b"x" * 101, "image/png")
        assert result.reason == RejectionReason.TOO_LARGE
        assert "MB" in result.message


class TestProcess:
    def test_small_image_keeps_dimensions(self, processor, face_png):
        asset = processor.process(face_png, "image/png")
        assert (asset.width, asset.height) == (300, 400)
        assert asset.mime_type == "image/jpeg"
        assert asset.size == len(asset.data)

    def test_large_image_fits_within_box(self, processor):
        asset = processor.process(large_png(2048, 1024), "image/png")
        assert asset.width <= 1024
        assert asset.height <= 1024
        assert (asset.width, asset.height) == (1024, 512)

    def test_custom_options(self, processor):
        options = ProcessingOptions(max_width=100, max_height=100, quality=0.5, format=ImageFormat.PNG)
        asset = processor.process(large_png(400, 200), "image/png", options)
        assert (asset.width, asset.height) == (100, 50)
        assert asset.mime_type == "image/png"
        with Image.open(io.BytesIO(asset.data)) as img:
            assert img.format == "PNG"
            assert img.size == (100, 50)

    def test_rgba_is_flattened_for_jpeg(self, processor):
        rgba = np.zeros((50, 50, 4), dtype=np.uint8)
        buffer = io.BytesIO()
        Image.fromarray(rgba).save(buffer, format="PNG")
        asset = processor.process(buffer.getvalue(), "image/png")
        assert asset.mime_type == "image/jpeg"

    def test_undecodable_bytes_raise_decode_error(self, processor):
        with pytest.raises(DecodeError):
            processor.process(b"definitely not an image", "image/png")

    def test_load_pixels_returns_rgb(self, processor, face_png):
        options = ProcessingOptions(format=ImageFormat.PNG)
        pixels = processor.load_pixels(processor.process(face_png, "image/png", options))
        assert pixels.shape == (400, 300, 3)
        assert tuple(pixels[200, 150]) == SKIN

    def test_create_preview(self, processor, face_png):
        asset = processor.process(face_png, "image/png")
        assert processor.create_preview(asset).startswith("data:image/jpeg;base64,")


class TestMetadata:
    def test_extract_metadata(self, processor, face_png):
        metadata = processor.extract_metadata(face_png, "image/png")
        assert (metadata.width, metadata.height) == (300, 400)
        assert metadata.size == len(face_png)
        assert metadata.type == "image/png"

    def test_invalid_bytes(self, processor):
        with pytest.raises(MetadataError):
            processor.extract_metadata(b"garbage", "image/png")


class TestImageUtils:
    def test_bytes_to_numpy_array_rejects_empty(self):
        with pytest.raises(DecodeError):
            bytes_to_numpy_array(b"")

    def test_bytes_to_numpy_array_rejects_garbage(self):
        with pytest.raises(DecodeError):
            bytes_to_numpy_array(b"garbage")

    def test_to_data_url(self):
        assert to_data_url(b"abc", "image/png") == "data:image/png;base64,YWJj"
