"""Scan session driver.

Runs a stream of timestamped frames through a face detector and a
ScanAggregator: waits for the detection gate, opens the collection
window and closes it once the window has elapsed.
"""

import logging
from typing import Iterable, Optional, Tuple

import numpy as np

from lookz.core.aggregator import ScanAggregator
from lookz.detection.base import FaceDetector
from lookz.shared.config import get_config
from lookz.shared.constants import SAMPLING, SamplingConstants
from lookz.shared.models import ScanResult, ScanState

logger = logging.getLogger(__name__)


class ScanSession:
    """
    One face scan over a frame source.

    Frames are (captured_at, frame) pairs in capture order. The session
    owns its aggregator; nothing is shared between sessions.

    Example:
        >>> with FaceMeshDetector() as detector:
        ...     session = ScanSession(detector, "M")
        ...     with VideoCapture("face.mp4") as cap:
        ...         result = session.run(iter_frames(cap))
    """

    def __init__(
        self,
        detector: FaceDetector,
        gender,
        sampling: SamplingConstants = SAMPLING,
        max_wait: Optional[float] = None,
    ):
        """
        Args:
            detector: Anything with detect(frame) -> List[FaceDetection]
            gender: Gender enum or free-form string selecting the config
            sampling: Timing constants
            max_wait: Seconds to wait for the detection gate before giving
                      up (defaults to sampling.MAX_GATE_WAIT)
        """
        self.detector = detector
        self.sampling = sampling
        self.max_wait = sampling.MAX_GATE_WAIT if max_wait is None else max_wait
        self.aggregator = ScanAggregator(get_config(gender), sampling)
        self.collected = 0

    def run(self, frames: Iterable[Tuple[float, np.ndarray]]) -> Optional[ScanResult]:
        """
        Scan until the collection window closes.

        Returns:
            ScanResult, or None when the gate was never met, the window
            held too few samples, or the source ran out mid-window
        """
        aggregator = self.aggregator
        first_frame_at = None
        last_countdown = None

        for captured_at, frame in frames:
            if first_frame_at is None:
                first_frame_at = captured_at

            detections = self.detector.detect(frame)
            aggregator.observe(detections, captured_at)

            if aggregator.state is ScanState.IDLE:
                if aggregator.ready(captured_at):
                    aggregator.start(captured_at)
                elif captured_at - first_frame_at > self.max_wait:
                    logger.warning(
                        "No steady face within %.1fs; giving up", self.max_wait
                    )
                    return None
                continue

            if aggregator.expired(captured_at):
                self.collected = aggregator.sample_count
                return aggregator.finish()

            remaining = aggregator.countdown(captured_at)
            if remaining != last_countdown:
                logger.debug("Countdown: %d", remaining)
                last_countdown = remaining

        if aggregator.state is ScanState.COLLECTING:
            self.collected = aggregator.sample_count
            logger.warning(
                "Frame source ended before the window closed; discarding %d samples",
                aggregator.sample_count,
            )
            aggregator.cancel()
        else:
            logger.warning("Frame source ended before a face was detected long enough")
        return None
