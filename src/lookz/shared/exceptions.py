"""Custom exceptions for LookzScore.

This module defines domain-specific exceptions that provide better
error handling and more informative error messages than generic exceptions.
"""

from typing import Iterable


class LookzError(Exception):
    """Base exception for all LookzScore errors."""

    pass


class RatingUnavailableError(LookzError):
    """Base exception for ratings that cannot be composed."""

    pass


class MissingInputError(RatingUnavailableError):
    """Raised when required rating inputs are absent."""

    def __init__(self, fields: Iterable[str]):
        self.fields = tuple(fields)
        super().__init__(f"Missing required inputs: {', '.join(self.fields)}")


class InvalidInputError(RatingUnavailableError):
    """Raised when a rating input is not numeric or out of range."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {reason}")


class InvalidGenderError(LookzError):
    """Raised when a gender value cannot be normalized."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unrecognized gender value: {value!r}")


class ScanError(LookzError):
    """Base exception for scan lifecycle errors."""

    pass


class ScanStateError(ScanError):
    """Raised when an action is not allowed in the current scan state."""

    def __init__(self, state, action: str):
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} while scan is {getattr(state, 'value', state)}")


class ScanNotReadyError(ScanError):
    """Raised when collection starts before the face detection gate is met."""

    def __init__(self, detected_for: float, required: float):
        self.detected_for = detected_for
        self.required = required
        super().__init__(
            f"Face detected for {detected_for:.1f}s, need {required:.1f}s before scanning"
        )


class NoScanResultError(ScanError):
    """Raised when a scan window closes without enough samples."""

    def __init__(self, sample_count: int = 0):
        self.sample_count = sample_count
        super().__init__(f"Scan produced no result ({sample_count} samples collected)")


class DetectorError(LookzError):
    """Raised when the face landmark model fails to load or execute."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Face detector error: {reason}")


class VideoError(LookzError):
    """Base exception for video-related errors."""

    pass


class VideoNotFoundError(VideoError):
    """Raised when video file cannot be found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Video file not found: {path}")


class VideoOpenError(VideoError):
    """Raised when video source cannot be opened."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"Failed to open video: {path}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)
