"""Detector interface consumed by the scan session."""

from typing import List, Protocol

import numpy as np

from lookz.shared.models import FaceDetection


class FaceDetector(Protocol):
    """Anything that turns a BGR frame into zero or more face detections."""

    def detect(self, frame: np.ndarray) -> List[FaceDetection]:
        ...
