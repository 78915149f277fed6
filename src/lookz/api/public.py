"""High-level API functions for LookzScore.

This module provides the main public entry points: scoring one frame's
landmarks, scanning a video or camera, and composing an overall rating.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from lookz.core import FeatureScorer, RatingComposer, ScanSession
from lookz.detection import FaceMeshDetector
from lookz.shared.config import get_config
from lookz.shared.constants import SAMPLING, SamplingConstants
from lookz.shared.exceptions import NoScanResultError
from lookz.shared.models import (
    BoundingBox,
    FaceDetection,
    FeatureScores,
    RatingBreakdown,
    ScanResult,
    UserProfile,
)
from lookz.utils.video import VideoCapture, is_camera, iter_frames, validate_video_path

logger = logging.getLogger(__name__)


def score_landmarks(
    landmarks: np.ndarray,
    bbox: BoundingBox,
    gender,
) -> Tuple[FeatureScores, float]:
    """Score a single frame's landmarks.

    Args:
        landmarks: Array of shape (468, 3) in pixel space
        bbox: Face bounding box in the same space
        gender: Gender enum or string ('M', 'female', ...)

    Returns:
        Tuple of (feature scores, weighted face rating)
    """
    scorer = FeatureScorer(get_config(gender))
    scores, _ = scorer.score_detection(FaceDetection(landmarks=np.asarray(landmarks), bbox=bbox))
    return scores, scorer.face_rating(scores)


def scan_video(
    source,
    gender,
    sampling: SamplingConstants = SAMPLING,
    max_wait: Optional[float] = None,
    detector=None,
) -> ScanResult:
    """Run a full face scan over a video file or camera.

    Waits until a face has been steadily detected, collects frames for
    the sampling window and returns the trimmed-mean scores.

    Args:
        source: Video file path, or camera index (int or digit string)
        gender: Gender enum or string selecting the scoring config
        sampling: Timing constants
        max_wait: Seconds to wait for a steady face before giving up
        detector: Optional FaceDetector; a FaceMeshDetector is created
                  (and closed) when omitted

    Returns:
        ScanResult for the collection window

    Raises:
        VideoNotFoundError: If a file source does not exist
        VideoOpenError: If the source cannot be opened
        NoScanResultError: If the scan yields no result
    """
    live = is_camera(source)
    if not live:
        validate_video_path(source)

    owns_detector = detector is None
    if owns_detector:
        detector = FaceMeshDetector()

    try:
        session = ScanSession(detector, gender, sampling, max_wait)
        with VideoCapture(source) as cap:
            result = session.run(iter_frames(cap, sampling.INTERVAL, live=live))
    finally:
        if owns_detector:
            detector.close()

    if result is None:
        raise NoScanResultError(session.collected)

    logger.info("Scan complete: %r", result)
    return result


def rate(profile: Optional[UserProfile], scores: Optional[FeatureScores]) -> RatingBreakdown:
    """Compose the overall rating from a profile and feature scores.

    Raises:
        MissingInputError: If any input is absent
        InvalidInputError: If any input is out of range
    """
    return RatingComposer().compose(profile, scores)
