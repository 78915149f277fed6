"""Video source utilities.

Opens video files or webcams with OpenCV and yields frames at the
sampling cadence together with their capture time.
"""

import logging
import time
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

import cv2
import numpy as np

from lookz.shared.constants import SAMPLING
from lookz.shared.exceptions import VideoNotFoundError, VideoOpenError

logger = logging.getLogger(__name__)

VideoSource = Union[str, int]


def is_camera(source: VideoSource) -> bool:
    """
    Check if the source refers to a camera device.

    Example:
        >>> is_camera(0)
        True
        >>> is_camera("1")
        True
        >>> is_camera("/path/to/video.mp4")
        False
    """
    if isinstance(source, int):
        return True
    return isinstance(source, str) and source.isdigit()


def validate_video_path(path: str) -> Path:
    """
    Validate a video file path.

    Raises:
        VideoNotFoundError: If file doesn't exist
    """
    video_path = Path(path).resolve()
    if not video_path.is_file():
        raise VideoNotFoundError(str(path))
    return video_path


class VideoCapture:
    """
    Context manager for OpenCV VideoCapture with automatic resource cleanup.

    Accepts a file path or a camera index (int or digit string).

    Example:
        >>> with VideoCapture("/path/to/video.mp4") as cap:
        ...     fps = cap.get(cv2.CAP_PROP_FPS)
        # Automatically released here
    """

    def __init__(self, source: VideoSource):
        self.source = int(source) if is_camera(source) else source
        self.cap: Optional[cv2.VideoCapture] = None

    def __enter__(self) -> cv2.VideoCapture:
        """Open video capture."""
        self.cap = cv2.VideoCapture(self.source)
        if not self.cap.isOpened():
            raise VideoOpenError(
                str(self.source),
                "VideoCapture.isOpened() returned False"
            )
        return self.cap

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Release video capture."""
        if self.cap is not None:
            self.cap.release()
        return False  # Don't suppress exceptions


def iter_frames(
    cap: cv2.VideoCapture,
    interval: float = SAMPLING.INTERVAL,
    live: bool = False,
) -> Iterator[Tuple[float, np.ndarray]]:
    """
    Yield (captured_at, frame) pairs at most once per interval.

    For files the capture time is the stream position (CAP_PROP_POS_MSEC),
    so scanning a recording follows its own timeline. For live cameras it
    is time.monotonic().

    Args:
        cap: Opened capture
        interval: Minimum seconds between yielded frames
        live: Use wall-clock time instead of stream position

    Yields:
        Tuple of (timestamp in seconds, BGR frame)
    """
    last_emitted: Optional[float] = None

    while True:
        ok, frame = cap.read()
        if not ok:
            logger.debug("Frame source exhausted")
            return

        if live:
            captured_at = time.monotonic()
        else:
            captured_at = cap.get(cv2.CAP_PROP_POS_MSEC) / 1000.0

        # Small tolerance so 30fps streams don't drift past the 100ms cadence
        if last_emitted is not None and captured_at - last_emitted < interval - 1e-3:
            continue

        last_emitted = captured_at
        yield captured_at, frame
