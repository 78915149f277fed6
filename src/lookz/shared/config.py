from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from lookz.shared.constants import (
    CARNAL_TILT,
    FACIAL_THIRDS,
    CHEEKBONE,
    INTEROCULAR,
    JAWLINE,
    CHIN,
    NOSE,
    FEATURE_NAMES,
    RATIO_FEATURES,
)
from lookz.shared.models import Gender, EyeColor


@dataclass(frozen=True)
class PhysicalRatingConfig:
    """Gaussian BMI penalty and height adjustments."""

    ideal_bmi: float
    sigma: float

    # Height outside the acceptable band multiplies the physique score by penalty_factor
    height_penalty_below: float = 0.0
    height_penalty_above: float = float("inf")
    penalty_factor: float = 0.3

    # Linear bonus between min and max height; max_height_bonus=0 disables it
    height_bonus_min: float = 0.0
    height_bonus_max: float = 0.0
    max_height_bonus: float = 0.0


@dataclass(frozen=True)
class BonusConfig:
    """Flat bonus for tall subjects with eligible eye colors."""

    enabled: bool = False
    height_threshold: float = 72.0
    eligible_eye_colors: FrozenSet[EyeColor] = frozenset({EyeColor.BLUE, EyeColor.GREEN})
    bonus_value: float = 5.0


@dataclass(frozen=True)
class CompositionConfig:
    """Weights of the additive raw score (not required to sum to 1.0)."""

    face_rating_weight: float
    physical_rating_weight: float = 0.5


@dataclass(frozen=True)
class GenderConfig:
    """Scoring curves for one gender."""

    weights: Dict[str, float]
    params: Dict[str, float]
    ideal_ratios: Dict[str, float]
    tilt_multiplier_factor: float
    physical: PhysicalRatingConfig
    composition: CompositionConfig
    bonus: BonusConfig = field(default_factory=BonusConfig)
    eye_color_scores: Dict[EyeColor, float] = field(default_factory=lambda: {
        EyeColor.BLUE: 10.0,
        EyeColor.GREEN: 10.0,
        EyeColor.BROWN: 0.0,
        EyeColor.OTHER: -5.0,
    })

    @property
    def total_weight(self) -> float:
        return sum(self.weights.values())

    def validate(self):
        missing = [name for name in FEATURE_NAMES if name not in self.weights or name not in self.params]
        if missing:
            raise ValueError(f"Config missing weights or params for: {', '.join(missing)}")
        if any(w <= 0 for w in self.weights.values()):
            raise ValueError("Feature weights must be positive")
        missing_ideals = [name for name in RATIO_FEATURES if name not in self.ideal_ratios]
        if missing_ideals:
            raise ValueError(f"Config missing ideal ratios for: {', '.join(missing_ideals)}")


MALE_CONFIG = GenderConfig(
    weights={
        CARNAL_TILT: 1.0,
        FACIAL_THIRDS: 0.5,
        CHEEKBONE: 1.5,
        INTEROCULAR: 1.0,
        JAWLINE: 2.5,
        CHIN: 1.0,
        NOSE: 1.0,
    },
    params={
        CARNAL_TILT: 10.0,
        FACIAL_THIRDS: 500.0,
        CHEEKBONE: 2.0,
        INTEROCULAR: 5000.0,
        JAWLINE: 5000.0,
        CHIN: 1000.0,
        NOSE: 5000.0,
    },
    ideal_ratios={
        FACIAL_THIRDS: 1.1369,
        INTEROCULAR: 0.3045,
        JAWLINE: 0.5938,
        CHIN: 0.4994,
        NOSE: 0.1965,
    },
    tilt_multiplier_factor=1.0,
    physical=PhysicalRatingConfig(
        ideal_bmi=23.5,
        sigma=2.5,
        height_penalty_below=66.0,
        penalty_factor=0.3,
        height_bonus_min=66.0,
        height_bonus_max=72.0,
        max_height_bonus=10.0,
    ),
    composition=CompositionConfig(face_rating_weight=0.65, physical_rating_weight=0.5),
    bonus=BonusConfig(enabled=True, height_threshold=72.0, bonus_value=5.0),
)

FEMALE_CONFIG = GenderConfig(
    weights={
        CARNAL_TILT: 3.0,
        FACIAL_THIRDS: 1.5,
        CHEEKBONE: 2.0,
        INTEROCULAR: 1.0,
        JAWLINE: 1.5,
        CHIN: 1.5,
        NOSE: 1.0,
    },
    params={
        CARNAL_TILT: 10.0,
        FACIAL_THIRDS: 100.0,
        CHEEKBONE: 11.0,
        INTEROCULAR: 200.0,
        JAWLINE: 200.0,
        CHIN: 300.0,
        NOSE: 400.0,
    },
    ideal_ratios={
        FACIAL_THIRDS: 1.2,
        INTEROCULAR: 0.47,
        JAWLINE: 0.7,
        CHIN: 0.3,
        NOSE: 0.23,
    },
    tilt_multiplier_factor=0.8,
    physical=PhysicalRatingConfig(
        ideal_bmi=20.5,
        sigma=2.0,
        height_penalty_above=71.0,
        penalty_factor=0.3,
    ),
    composition=CompositionConfig(face_rating_weight=0.7, physical_rating_weight=0.5),
)


_CONFIGS = {
    Gender.MALE: MALE_CONFIG,
    Gender.FEMALE: FEMALE_CONFIG,
}


def get_config(gender) -> GenderConfig:
    """Select the scoring config for a gender (enum or free-form string)."""
    return _CONFIGS[Gender.parse(gender)]
