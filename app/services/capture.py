"""Live camera capture."""
from typing import Any, Optional

import cv2

from app.core.exceptions import CameraError
from app.core.logging import get_logger

logger = get_logger(__name__)


class CameraCapture:
    """Grabs still frames from a local camera.

    The device is held open exclusively between start() and stop(). Use it
    as a context manager so stop() runs on every exit path:

        ```python
        with CameraCapture() as camera:
            jpeg_bytes = camera.capture_frame()
        ```
    """

    def __init__(self, device_index: int = 0, warmup_frames: int = 5) -> None:
        self.device_index = device_index
        self.warmup_frames = warmup_frames
        self._capture: Optional[Any] = None

    @property
    def active(self) -> bool:
        return self._capture is not None

    def start(self) -> None:
        if self.active:
            return
        capture = cv2.VideoCapture(self.device_index)
        if not capture.isOpened():
            capture.release()
            raise CameraError(f"Could not open camera {self.device_index}")
        self._capture = capture
        logger.info("Camera started", device_index=self.device_index)

        # Let auto exposure settle
        try:
            for _ in range(self.warmup_frames):
                capture.read()
        except BaseException:
            self.stop()
            raise

    def capture_frame(self) -> bytes:
        """Read one frame and return it as JPEG bytes."""
        if not self.active:
            raise CameraError("Camera is not started")
        ok, frame = self._capture.read()
        if not ok or frame is None:
            raise CameraError("Failed to read frame from camera")
        encoded, buffer = cv2.imencode(".jpg", frame)
        if not encoded:
            raise CameraError("Failed to encode camera frame")
        return buffer.tobytes()

    def stop(self) -> None:
        if self._capture is None:
            return
        self._capture.release()
        self._capture = None
        logger.info("Camera released", device_index=self.device_index)

    def __enter__(self) -> "CameraCapture":
        self.start()
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[Exception],
                 exc_tb: Optional[Any]) -> None:
        self.stop()
