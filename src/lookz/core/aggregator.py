"""Temporal aggregation of per-frame feature scores.

This module provides the ScanAggregator class, which collects per-frame
scores over a fixed collection window and reduces them with a trimmed
mean into one stable score per feature.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from lookz.core.scorer import FeatureScorer
from lookz.shared.config import GenderConfig
from lookz.shared.constants import SAMPLING, SamplingConstants, FEATURE_NAMES
from lookz.shared.exceptions import ScanStateError, ScanNotReadyError
from lookz.shared.models import (
    FaceDetection,
    FeatureScores,
    Sample,
    ScanResult,
    ScanState,
)

logger = logging.getLogger(__name__)


def trimmed_mean(values: Sequence[float],
                 min_samples: int = SAMPLING.MIN_SAMPLES) -> Optional[float]:
    """
    Mean after dropping the lowest quartile.

    Sorts ascending, drops ceil(n/4) lowest values and averages the rest.

    Args:
        values: Per-frame scores for one feature
        min_samples: Fewer values than this count as insufficient

    Returns:
        Trimmed mean, or None when there are too few values
    """
    n = len(values)
    if n == 0 or n < min_samples:
        return None
    k = math.ceil(n / 4)
    kept = np.sort(np.asarray(values, dtype=np.float64))[k:]
    return float(kept.mean())


class ScanAggregator:
    """
    Collects frame scores over one collection window.

    States:
    - IDLE: no active window; frames only update the detection timer
    - COLLECTING: frames captured inside [start, start + WINDOW) are kept
    - REDUCING: window closed, trimmed mean being computed; returns to IDLE

    Collection can only start after a face has been continuously detected
    for DETECTION_GATE seconds. Times are plain floats in seconds from any
    monotonic clock; frames are attributed by their capture time, so a
    result that arrives after the window closed is discarded.

    Example:
        >>> aggregator = ScanAggregator(MALE_CONFIG)
        >>> aggregator.observe(detections, captured_at=t)
        >>> if aggregator.ready(now):
        ...     aggregator.start(now)
        >>> if aggregator.expired(now):
        ...     result = aggregator.finish()  # None means "no result"
    """

    def __init__(self, config: GenderConfig, sampling: SamplingConstants = SAMPLING):
        self.config = config
        self.sampling = sampling
        self.scorer = FeatureScorer(config)

        self.state = ScanState.IDLE
        self.last_sample: Optional[Sample] = None

        self._samples: List[Sample] = []
        self._first_seen_at: Optional[float] = None
        self._window_start: Optional[float] = None
        self._window_end: Optional[float] = None

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    def observe(self, detections: Sequence[FaceDetection], captured_at: float) -> Optional[Sample]:
        """
        Feed one frame's detector output.

        Only the first detection is scored. An empty list resets the
        continuous detection timer and the frame is skipped.

        Args:
            detections: Faces returned by the detector for this frame
            captured_at: Time the frame was captured

        Returns:
            The Sample if it was added to the active window, else None
        """
        if not detections:
            if self._first_seen_at is not None:
                logger.debug("Face lost at %.3fs; detection timer reset", captured_at)
            self._first_seen_at = None
            return None

        if self._first_seen_at is None:
            self._first_seen_at = captured_at

        scores, measurements = self.scorer.score_detection(detections[0])
        sample = Sample(captured_at=captured_at, scores=scores, measurements=measurements)
        self.last_sample = sample

        if self.state is not ScanState.COLLECTING:
            return None

        if not (self._window_start <= captured_at < self._window_end):
            logger.debug(
                "Discarding frame captured at %.3fs outside window [%.3f, %.3f)",
                captured_at, self._window_start, self._window_end,
            )
            return None

        self._samples.append(sample)
        return sample

    def detected_for(self, now: float) -> float:
        """Seconds the face has been continuously detected."""
        if self._first_seen_at is None:
            return 0.0
        return max(0.0, now - self._first_seen_at)

    def ready(self, now: float) -> bool:
        return self.detected_for(now) >= self.sampling.DETECTION_GATE

    def start(self, now: float) -> None:
        """
        Open a collection window.

        Raises:
            ScanStateError: If a window is already active
            ScanNotReadyError: If the detection gate is not met
        """
        if self.state is not ScanState.IDLE:
            raise ScanStateError(self.state, "start")
        if not self.ready(now):
            raise ScanNotReadyError(self.detected_for(now), self.sampling.DETECTION_GATE)

        self._samples = []
        self._window_start = now
        self._window_end = now + self.sampling.WINDOW
        self.state = ScanState.COLLECTING
        logger.info("Collection window opened (%.1fs)", self.sampling.WINDOW)

    def countdown(self, now: float) -> Optional[int]:
        """Whole seconds left in the window (COUNTDOWN_START..0), or None when idle."""
        if self.state is not ScanState.COLLECTING:
            return None
        remaining = max(0.0, self._window_end - now)
        return min(self.sampling.COUNTDOWN_START, int(math.ceil(remaining)))

    def expired(self, now: float) -> bool:
        return self.state is ScanState.COLLECTING and now >= self._window_end

    def finish(self) -> Optional[ScanResult]:
        """
        Close the window and reduce the collected samples.

        Returns:
            ScanResult, or None if the window holds too few samples

        Raises:
            ScanStateError: If no window is active
        """
        if self.state is not ScanState.COLLECTING:
            raise ScanStateError(self.state, "finish")

        self.state = ScanState.REDUCING
        samples, self._samples = self._samples, []
        try:
            result = self.reduce(samples)
        finally:
            self._window_start = None
            self._window_end = None
            self.state = ScanState.IDLE

        if result is not None:
            logger.info(
                "Collection window closed: %d samples, face rating %.2f",
                result.sample_count, result.face_rating,
            )
        return result

    def cancel(self) -> None:
        """Abort the active window, discarding every collected sample."""
        if self.state is ScanState.COLLECTING:
            logger.info("Collection cancelled; discarding %d samples", len(self._samples))
        self._samples = []
        self._window_start = None
        self._window_end = None
        self.state = ScanState.IDLE

    def reduce(self, samples: Sequence[Sample]) -> Optional[ScanResult]:
        """Trimmed mean per feature over the given samples."""
        if not samples:
            logger.warning("Collection window closed with no samples")
            return None

        per_feature = {name: [] for name in FEATURE_NAMES}
        for sample in samples:
            for name, score in sample.scores.as_dict().items():
                per_feature[name].append(score)

        averages = {}
        for name, values in per_feature.items():
            average = trimmed_mean(values, self.sampling.MIN_SAMPLES)
            if average is None:
                logger.warning(
                    "Insufficient samples (%d, need %d); no result",
                    len(values), self.sampling.MIN_SAMPLES,
                )
                return None
            averages[name] = average

        feature_scores = FeatureScores.from_dict(averages)
        return ScanResult(
            feature_scores=feature_scores,
            face_rating=self.scorer.face_rating(feature_scores),
            measurements=samples[-1].measurements,
            sample_count=len(samples),
            low_confidence_count=sum(1 for s in samples if s.scores.low_confidence),
        )
