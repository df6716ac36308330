"""
Image processing utility functions.
"""
import base64

import cv2
import numpy as np

from app.core.exceptions import DecodeError


def bytes_to_numpy_array(image_bytes: bytes, flags: int = cv2.IMREAD_COLOR) -> np.ndarray:
    """Convert image bytes to an RGB numpy array.

    Args:
        image_bytes: Raw image bytes
        flags: OpenCV imread flags (default: COLOR)

    Returns:
        numpy.ndarray: H x W x 3 uint8 image in RGB channel order

    Raises:
        DecodeError: If the image cannot be decoded
    """
    np_array = np.frombuffer(image_bytes, np.uint8)
    if np_array.size == 0:
        raise DecodeError("Empty image payload")

    img = cv2.imdecode(np_array, flags)

    if img is None:
        raise DecodeError("Failed to decode image bytes")

    # OpenCV decodes to BGR, detectors and classifiers expect RGB
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """Wrap encoded image bytes in a base64 data URL."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
