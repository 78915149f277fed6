from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

import numpy as np

from lookz.shared.constants import (
    CARNAL_TILT,
    FACIAL_THIRDS,
    CHEEKBONE,
    INTEROCULAR,
    JAWLINE,
    CHIN,
    NOSE,
    FEATURE_NAMES,
)
from lookz.shared.exceptions import InvalidGenderError


class Gender(Enum):
    """Declared gender, selecting the scoring configuration."""
    MALE = "M"
    FEMALE = "W"

    @classmethod
    def parse(cls, value) -> "Gender":
        """
        Normalize a free-form gender value.

        Accepts 'M'/'male'/'man' and 'W'/'F'/'female'/'woman' in any case.

        Raises:
            InvalidGenderError: If the value is not recognized
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _MALE_TOKENS:
                return cls.MALE
            if key in _FEMALE_TOKENS:
                return cls.FEMALE
        raise InvalidGenderError(value)


_MALE_TOKENS = frozenset({"m", "male", "man"})
_FEMALE_TOKENS = frozenset({"w", "f", "female", "woman"})


class EyeColor(Enum):
    """Canonical eye color categories."""
    BLUE = "blue"
    GREEN = "green"
    BROWN = "brown"
    OTHER = "other"

    @classmethod
    def parse(cls, value) -> "EyeColor":
        """Map a declared eye color to its category. Unknown values map to OTHER."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.OTHER
        return _EYE_COLOR_MAP.get(value.strip().lower(), cls.OTHER)


_EYE_COLOR_MAP = {
    "blue": EyeColor.BLUE,
    "green": EyeColor.GREEN,
    "brown": EyeColor.BROWN,
    "hazel": EyeColor.BROWN,
    "gray": EyeColor.BLUE,
    "grey": EyeColor.BLUE,
    "other": EyeColor.BROWN,
}


class ScanState(Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    REDUCING = "reducing"


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned face box in pixel space."""
    top_left: Tuple[float, float]
    bottom_right: Tuple[float, float]

    @property
    def width(self) -> float:
        return float(self.bottom_right[0] - self.top_left[0])

    @property
    def height(self) -> float:
        return float(self.bottom_right[1] - self.top_left[1])


@dataclass
class FaceDetection:
    """One face returned by the landmark model."""
    landmarks: np.ndarray    # (N, 3) pixel-space x, y, z
    bbox: BoundingBox


@dataclass
class FaceMeasurements:
    """Raw geometric measurements of a single frame."""
    left_eye_center: Tuple[float, float, float]
    right_eye_center: Tuple[float, float, float]
    carnal_tilt_angle: float
    upper_third_length: float
    lower_third_length: float
    facial_thirds_ratio: Optional[float]
    left_cheek_height: float
    right_cheek_height: float
    cheek_height_diff: float
    face_height_full: float
    cheek_diff_ratio: Optional[float]
    eye_distance: float
    face_width: float
    interocular_ratio: Optional[float]
    jaw_width: float
    jaw_ratio: Optional[float]
    chin_length: float
    face_height: float
    chin_ratio: Optional[float]
    nose_width: float
    nose_ratio: Optional[float]


@dataclass(frozen=True)
class FeatureScores:
    """Per-feature scores, nominally 0-100."""
    carnal_tilt: float
    facial_thirds: float
    cheekbone: float
    interocular: float
    jawline: float
    chin: float
    nose: float

    # Features that fell back to the neutral score on degenerate geometry
    degenerate: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def low_confidence(self) -> bool:
        return bool(self.degenerate)

    def as_dict(self) -> Dict[str, float]:
        return {
            CARNAL_TILT: self.carnal_tilt,
            FACIAL_THIRDS: self.facial_thirds,
            CHEEKBONE: self.cheekbone,
            INTEROCULAR: self.interocular,
            JAWLINE: self.jawline,
            CHIN: self.chin,
            NOSE: self.nose,
        }

    @classmethod
    def from_dict(cls, scores: Mapping[str, float]) -> "FeatureScores":
        """Build from a mapping keyed by display names. Raises KeyError if one is missing."""
        return cls(**{_FIELD_BY_NAME[name]: float(scores[name]) for name in FEATURE_NAMES})


_FIELD_BY_NAME = {
    CARNAL_TILT: "carnal_tilt",
    FACIAL_THIRDS: "facial_thirds",
    CHEEKBONE: "cheekbone",
    INTEROCULAR: "interocular",
    JAWLINE: "jawline",
    CHIN: "chin",
    NOSE: "nose",
}


@dataclass
class Sample:
    """One frame's scores captured during a collection window."""
    captured_at: float
    scores: FeatureScores
    measurements: FaceMeasurements


@dataclass
class ScanResult:
    """Trimmed-mean outcome of a collection window."""
    feature_scores: FeatureScores
    face_rating: float
    measurements: FaceMeasurements
    sample_count: int
    low_confidence_count: int = 0

    def __repr__(self) -> str:
        return (
            f"ScanResult(face_rating={self.face_rating:.2f}, "
            f"samples={self.sample_count}, low_confidence={self.low_confidence_count})"
        )


@dataclass
class UserProfile:
    """Declared physique and categorical inputs. Any field may be missing."""
    height_in: Optional[float] = None
    weight_lb: Optional[float] = None
    gender: Optional[Gender] = None
    eye_color: Optional[EyeColor] = None


@dataclass
class RatingBreakdown:
    """Intermediate and final values of an overall rating."""
    face_rating: float
    bmi: float
    physical_rating: float
    eye_color_score: float
    bonus: float
    raw_score: float
    overall_rating: float    # clamped
