"""Tests for camera capture with OpenCV mocked out."""
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from app.core.exceptions import CameraError
from app.services.capture import CameraCapture


def fake_device(opened=True, frame_ok=True):
    device = MagicMock()
    device.isOpened.return_value = opened
    frame = np.zeros((4, 4, 3), dtype=np.uint8)
    device.read.return_value = (frame_ok, frame if frame_ok else None)
    return device


@patch("app.services.capture.cv2.VideoCapture")
def test_capture_frame_returns_jpeg(video_capture):
    device = fake_device()
    video_capture.return_value = device

    with CameraCapture(device_index=1, warmup_frames=3) as camera:
        assert camera.active
        data = camera.capture_frame()

    video_capture.assert_called_once_with(1)
    assert data[:2] == b"\xff\xd8"
    # Warmup plus the captured frame
    assert device.read.call_count == 4
    device.release.assert_called_once()
    assert not camera.active


@patch("app.services.capture.cv2.VideoCapture")
def test_unopened_device(video_capture):
    device = fake_device(opened=False)
    video_capture.return_value = device

    with pytest.raises(CameraError):
        CameraCapture().start()
    device.release.assert_called_once()


@patch("app.services.capture.cv2.VideoCapture")
def test_read_failure_releases_device(video_capture):
    device = fake_device(frame_ok=False)
    video_capture.return_value = device

    with pytest.raises(CameraError):
        with CameraCapture(warmup_frames=0) as camera:
            camera.capture_frame()
    device.release.assert_called_once()


@patch("app.services.capture.cv2.VideoCapture")
def test_warmup_failure_releases_device(video_capture):
    device = fake_device()
    device.read.side_effect = RuntimeError("sensor fault")
    video_capture.return_value = device
    camera = CameraCapture(warmup_frames=2)

    with pytest.raises(RuntimeError):
        with camera:
            pass
    device.release.assert_called_once()
    assert not camera.active

def test_capture_requires_start():
    with pytest.raises(CameraError):
        CameraCapture().capture_frame()


@patch("app.services.capture.cv2.VideoCapture")
def test_stop_is_idempotent(video_capture):
    device = fake_device()
    video_capture.return_value = device
    camera = CameraCapture(warmup_frames=0)
    camera.start()
    camera.stop()
    camera.stop()
    device.release.assert_called_once()
