"""Shared test constants and helper functions for LookzScore tests.

This module contains constants and helper functions that are shared across
multiple test files. Pytest fixtures should be defined in conftest.py.
"""

import math
from typing import List, Optional, Tuple

import numpy as np

from lookz.shared.config import GenderConfig
from lookz.shared.constants import (
    FACE_MESH,
    FACIAL_THIRDS,
    INTEROCULAR,
    JAWLINE,
    CHIN,
    NOSE,
    FEATURE_NAMES,
)
from lookz.shared.models import BoundingBox, FaceDetection, FeatureScores


# =============================================================================
# MODULE-LEVEL CONSTANTS (Test Configuration)
# =============================================================================

FACE_LEFT = 100.0
FACE_TOP = 100.0
FACE_WIDTH = 200.0
FACE_CENTER_X = FACE_LEFT + FACE_WIDTH / 2
LOWER_THIRD = 120.0

SMALL_WIDTH = 640
SMALL_HEIGHT = 480

TEST_VIDEO_PATH = "/test/video.mp4"

# Frame cadence used by session tests (0.1s, exact in decimal)
FRAME_STEP = 0.1

# Ratios used when a test doesn't care about a feature
NEUTRAL_RATIOS = {
    FACIAL_THIRDS: 1.15,
    INTEROCULAR: 0.4,
    JAWLINE: 0.65,
    CHIN: 0.4,
    NOSE: 0.21,
}


# =============================================================================
# HELPER FUNCTIONS - For creating test objects with custom parameters
# =============================================================================


def make_face_landmarks(
    thirds_ratio: float = NEUTRAL_RATIOS[FACIAL_THIRDS],
    interocular_ratio: float = NEUTRAL_RATIOS[INTEROCULAR],
    jaw_ratio: float = NEUTRAL_RATIOS[JAWLINE],
    chin_ratio: float = NEUTRAL_RATIOS[CHIN],
    nose_ratio: float = NEUTRAL_RATIOS[NOSE],
    tilt_degrees: float = 0.0,
    cheek_offset: float = 0.0,
    face_width: float = FACE_WIDTH,
    lower_third: float = LOWER_THIRD,
) -> Tuple[np.ndarray, BoundingBox]:
    """
    Build a synthetic 468-point face whose measurements hit the given ratios.

    Only the landmarks the scorers read are placed; the rest sit at the
    face center. With tilt_degrees=0 the eyes are level, so the
    interocular ratio is exact.
    """
    center_x = FACE_LEFT + face_width / 2
    forehead_y = FACE_TOP
    upper_third = thirds_ratio * lower_third
    nose_y = forehead_y + upper_third
    chin_y = nose_y + lower_third
    mouth_y = chin_y - chin_ratio * lower_third
    eye_y = forehead_y + upper_third / 2

    landmarks = np.zeros((FACE_MESH.LANDMARK_COUNT, 3), dtype=np.float64)
    landmarks[:, 0] = center_x
    landmarks[:, 1] = nose_y

    half_eye_gap = interocular_ratio * face_width / 2
    rise = 2 * half_eye_gap * math.tan(math.radians(tilt_degrees))
    _place_eye(landmarks, FACE_MESH.LEFT_EYE, center_x - half_eye_gap, eye_y)
    _place_eye(landmarks, FACE_MESH.RIGHT_EYE, center_x + half_eye_gap, eye_y + rise)

    landmarks[FACE_MESH.FOREHEAD, :2] = [center_x, forehead_y]
    landmarks[FACE_MESH.NOSE_BASE, :2] = [center_x, nose_y]
    landmarks[FACE_MESH.CHIN, :2] = [center_x, chin_y]
    landmarks[FACE_MESH.MOUTH_BOTTOM, :2] = [center_x, mouth_y]

    landmarks[FACE_MESH.LEFT_CHEEK, :2] = [center_x - face_width * 0.4, nose_y]
    landmarks[FACE_MESH.RIGHT_CHEEK, :2] = [center_x + face_width * 0.4, nose_y + cheek_offset]

    half_jaw = jaw_ratio * face_width / 2
    landmarks[FACE_MESH.LEFT_JAW, :2] = [center_x - half_jaw, chin_y - 20]
    landmarks[FACE_MESH.RIGHT_JAW, :2] = [center_x + half_jaw, chin_y - 20]

    half_nose = nose_ratio * face_width / 2
    landmarks[FACE_MESH.LEFT_NOSE_WING, :2] = [center_x - half_nose, nose_y - 5]
    landmarks[FACE_MESH.RIGHT_NOSE_WING, :2] = [center_x + half_nose, nose_y - 5]

    bbox = BoundingBox(
        top_left=(FACE_LEFT, forehead_y),
        bottom_right=(FACE_LEFT + face_width, chin_y),
    )
    return landmarks, bbox


def _place_eye(landmarks: np.ndarray, indices, cx: float, cy: float) -> None:
    outer, inner, top, bottom = indices
    landmarks[outer, :2] = [cx - 10, cy]
    landmarks[inner, :2] = [cx + 10, cy]
    landmarks[top, :2] = [cx, cy - 3]
    landmarks[bottom, :2] = [cx, cy + 3]


def make_ideal_face(config: GenderConfig) -> Tuple[np.ndarray, BoundingBox]:
    """Face whose every ratio equals the config's ideal."""
    ideals = config.ideal_ratios
    return make_face_landmarks(
        thirds_ratio=ideals[FACIAL_THIRDS],
        interocular_ratio=ideals[INTEROCULAR],
        jaw_ratio=ideals[JAWLINE],
        chin_ratio=ideals[CHIN],
        nose_ratio=ideals[NOSE],
    )


def make_detection(**kwargs) -> FaceDetection:
    landmarks, bbox = make_face_landmarks(**kwargs)
    return FaceDetection(landmarks=landmarks, bbox=bbox)


def make_feature_scores(value: float = 80.0, **overrides) -> FeatureScores:
    """FeatureScores with every feature at value, unless overridden by field name."""
    fields = {
        "carnal_tilt": value,
        "facial_thirds": value,
        "cheekbone": value,
        "interocular": value,
        "jawline": value,
        "chin": value,
        "nose": value,
    }
    fields.update(overrides)
    return FeatureScores(**fields)


def make_score_dict(value: float = 80.0) -> dict:
    return {name: value for name in FEATURE_NAMES}


def make_frame_stream(
    duration: float,
    face_present=lambda t: True,
    step: float = FRAME_STEP,
) -> List[Tuple[float, Optional[str]]]:
    """
    (captured_at, frame) pairs for a fake detector.

    Frames are the strings "face" or "empty"; timestamps are i / 10 so
    they stay exact at the 0.1s cadence.
    """
    count = int(round(duration / step))
    stream = []
    for i in range(count + 1):
        t = i / round(1 / step)
        stream.append((t, "face" if face_present(t) else "empty"))
    return stream
