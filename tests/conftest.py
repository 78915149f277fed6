"""Shared pytest fixtures and mocks for LookzScore tests."""

import pytest
import numpy as np
from unittest.mock import MagicMock, Mock

from lookz.shared.config import MALE_CONFIG, FEMALE_CONFIG
from lookz.shared.constants import SamplingConstants
from lookz.shared.models import (
    EyeColor,
    FaceDetection,
    Gender,
    UserProfile,
)

from tests.helpers import (
    SMALL_WIDTH,
    SMALL_HEIGHT,
    make_detection as _make_detection_impl,
    make_feature_scores as _make_feature_scores_impl,
    make_ideal_face,
)


# =============================================================================
# FACTORY FIXTURES - Return functions for custom parameters
# =============================================================================


@pytest.fixture
def make_detection():
    """Factory fixture for synthetic FaceDetection objects."""
    return _make_detection_impl


@pytest.fixture
def make_feature_scores():
    """Factory fixture for FeatureScores with uniform or custom values."""
    return _make_feature_scores_impl


@pytest.fixture
def make_profile():
    def _make(
        height_in: float = 70.0,
        weight_lb: float = 160.0,
        gender: Gender = Gender.MALE,
        eye_color: EyeColor = EyeColor.BLUE,
    ) -> UserProfile:
        return UserProfile(
            height_in=height_in,
            weight_lb=weight_lb,
            gender=gender,
            eye_color=eye_color,
        )

    return _make


@pytest.fixture
def make_fake_detector():
    """
    Detector double: frames equal to "face" yield one detection, anything
    else yields none.
    """
    def _make(detection: FaceDetection = None) -> Mock:
        if detection is None:
            detection = _make_detection_impl()
        detector = Mock()
        detector.detect.side_effect = lambda frame: [detection] if frame == "face" else []
        return detector

    return _make


# =============================================================================
# DIRECT FIXTURES - Common default cases
# =============================================================================


@pytest.fixture
def male_config():
    return MALE_CONFIG


@pytest.fixture
def female_config():
    return FEMALE_CONFIG


@pytest.fixture
def male_ideal_detection() -> FaceDetection:
    landmarks, bbox = make_ideal_face(MALE_CONFIG)
    return FaceDetection(landmarks=landmarks, bbox=bbox)


@pytest.fixture
def female_ideal_detection() -> FaceDetection:
    landmarks, bbox = make_ideal_face(FEMALE_CONFIG)
    return FaceDetection(landmarks=landmarks, bbox=bbox)


@pytest.fixture
def fast_sampling() -> SamplingConstants:
    """Short gate and window so session tests stay small."""
    return SamplingConstants(DETECTION_GATE=1.0, WINDOW=1.0, MAX_GATE_WAIT=3.0)


# =============================================================================
# VIDEO MOCK FIXTURES
# =============================================================================


@pytest.fixture
def mock_frame() -> np.ndarray:
    return np.zeros((SMALL_HEIGHT, SMALL_WIDTH, 3), dtype=np.uint8)


@pytest.fixture
def make_mock_capture(mock_frame):
    """Capture that returns frame_count frames spaced by frame_ms."""
    def _make(frame_count: int = 10, frame_ms: float = 1000 / 30) -> MagicMock:
        cap = MagicMock()
        cap.isOpened.return_value = True

        positions = []

        def read():
            if len(positions) >= frame_count:
                return False, None
            positions.append(len(positions) * frame_ms)
            return True, mock_frame

        cap.read.side_effect = read
        cap.get.side_effect = lambda prop: positions[-1] if positions else 0.0
        return cap

    return _make


# =============================================================================
# MEDIAPIPE MOCK FIXTURES
# =============================================================================


@pytest.fixture
def make_mediapipe_result():
    """Fake FaceMesh.process() output with normalized landmarks."""
    def _make(faces: int = 1, landmark_count: int = 468) -> Mock:
        result = Mock()
        if faces == 0:
            result.multi_face_landmarks = None
            return result

        face_list = []
        for f in range(faces):
            face = Mock()
            face.landmark = [
                Mock(x=0.25 + 0.5 * i / landmark_count, y=0.2 + 0.6 * i / landmark_count, z=0.01 * f)
                for i in range(landmark_count)
            ]
            face_list.append(face)
        result.multi_face_landmarks = face_list
        return result

    return _make
