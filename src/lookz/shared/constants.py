"""Application-wide constants for LookzScore.

This module contains the landmark indices, timing parameters, thresholds
and rating constants used throughout the scoring pipeline. Centralizing
these values keeps the formulas free of magic numbers.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FaceMeshConstants:
    """MediaPipe Face Mesh (468-point) landmark contract.

    Indices are fixed by the upstream model; the scorers depend on them
    staying stable.
    """

    LANDMARK_COUNT: int = 468

    # Outer corner, inner corner, top, bottom
    LEFT_EYE: Tuple[int, ...] = (33, 133, 159, 145)
    RIGHT_EYE: Tuple[int, ...] = (362, 263, 386, 374)

    FOREHEAD: int = 10
    NOSE_BASE: int = 1  # also used as the nose tip for the chin ratio
    CHIN: int = 152
    MOUTH_BOTTOM: int = 17

    LEFT_CHEEK: int = 116
    RIGHT_CHEEK: int = 345
    LEFT_JAW: int = 123
    RIGHT_JAW: int = 352
    LEFT_NOSE_WING: int = 129
    RIGHT_NOSE_WING: int = 358

    # Detector defaults
    MAX_FACES: int = 1
    MIN_DETECTION_CONFIDENCE: float = 0.5
    MIN_TRACKING_CONFIDENCE: float = 0.5


@dataclass(frozen=True)
class SamplingConstants:
    """Collection window timing (seconds)."""

    INTERVAL: float = 0.1
    WINDOW: float = 5.0
    DETECTION_GATE: float = 3.0
    COUNTDOWN_START: int = 5

    # Trimmed mean needs at least this many samples
    MIN_SAMPLES: int = 4

    # Upper bound on how long a session waits for the detection gate
    MAX_GATE_WAIT: float = 30.0


@dataclass(frozen=True)
class GeometryConstants:
    """Guards for ratio computation."""

    EPSILON: float = 1e-6
    NEUTRAL_SCORE: float = 50.0
    MAX_SCORE: float = 100.0


@dataclass(frozen=True)
class RatingConstants:
    """Overall rating composition constants."""

    BMI_FACTOR: float = 703.0
    PHYSIQUE_SCALE: float = 30.0

    LOGISTIC_STEEPNESS: float = 0.1
    LOGISTIC_MIDPOINT: float = 50.0

    MIN_RATING: float = 15.69
    MAX_RATING: float = 99.0

    # Accepted input ranges
    MIN_HEIGHT_IN: float = 48.0
    MAX_HEIGHT_IN: float = 84.0
    MIN_WEIGHT_LB: float = 80.0
    MAX_WEIGHT_LB: float = 400.0
    MIN_FEATURE_SCORE: float = 0.0
    MAX_FEATURE_SCORE: float = 100.0


@dataclass(frozen=True)
class UnitConstants:
    """Metric to imperial conversion factors."""

    CM_PER_INCH: float = 2.54
    LB_PER_KG: float = 2.20462
    INCHES_PER_FOOT: int = 12


@dataclass(frozen=True)
class FeedbackConstants:
    """Score tiers used for per-feature advice."""

    EXCEPTIONAL: float = 90.0
    ABOVE_AVERAGE: float = 75.0
    AVERAGE: float = 60.0


# Create singleton instances for easy import
FACE_MESH = FaceMeshConstants()
SAMPLING = SamplingConstants()
GEOMETRY = GeometryConstants()
RATING = RatingConstants()
UNITS = UnitConstants()
FEEDBACK = FeedbackConstants()


# Feature names in canonical order, as displayed to users
CARNAL_TILT = "Carnal Tilt"
FACIAL_THIRDS = "Facial Thirds"
CHEEKBONE = "Cheekbone Location"
INTEROCULAR = "Interocular Distance"
JAWLINE = "Jawline"
CHIN = "Chin"
NOSE = "Nose"

FEATURE_NAMES: Tuple[str, ...] = (
    CARNAL_TILT,
    FACIAL_THIRDS,
    CHEEKBONE,
    INTEROCULAR,
    JAWLINE,
    CHIN,
    NOSE,
)

# Features compared against a configured ideal ratio
RATIO_FEATURES: Tuple[str, ...] = (FACIAL_THIRDS, INTEROCULAR, JAWLINE, CHIN, NOSE)
