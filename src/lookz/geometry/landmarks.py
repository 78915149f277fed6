"""Landmark geometry helpers.

Pure functions over face-mesh landmark arrays: eye centers, distances,
angles and guarded ratios. Indices are not validated; callers supply
indices valid for the model in use.
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from lookz.shared.constants import GEOMETRY

logger = logging.getLogger(__name__)


def eye_center(landmarks: np.ndarray, indices: Sequence[int]) -> np.ndarray:
    """
    Calculate the center of an eye as the mean of its landmarks.

    Args:
        landmarks: Array of shape (N, 3) with (x, y, z) coordinates
        indices: Landmark indices outlining the eye (typically outer corner,
                 inner corner, top, bottom)

    Returns:
        Array of shape (3,) with the coordinate-wise mean
    """
    points = np.asarray(landmarks, dtype=np.float64)[list(indices)]
    return points.mean(axis=0)


def distance_2d(point1, point2) -> float:
    """Euclidean distance ignoring z."""
    dx = float(point2[0]) - float(point1[0])
    dy = float(point2[1]) - float(point1[1])
    return math.hypot(dx, dy)


def distance_3d(point1, point2) -> float:
    """Euclidean distance including z."""
    diff = np.asarray(point2, dtype=np.float64)[:3] - np.asarray(point1, dtype=np.float64)[:3]
    return float(np.linalg.norm(diff))


def angle_degrees(dy: float, dx: float) -> float:
    """atan2(dy, dx) in degrees. Callers take the absolute value."""
    return math.degrees(math.atan2(dy, dx))


def safe_ratio(numerator: float, denominator: float,
               epsilon: float = GEOMETRY.EPSILON) -> Optional[float]:
    """
    Divide, refusing degenerate denominators.

    Returns:
        numerator / denominator, or None when denominator <= epsilon
        (zero, near-zero or negative face extents)
    """
    if denominator <= epsilon:
        logger.debug("Degenerate ratio denominator: %.6g", denominator)
        return None
    return float(numerator) / float(denominator)
