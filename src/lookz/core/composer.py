"""Overall rating composition.

Combines the gender-weighted face rating with a BMI-based physique
rating and categorical adjustments, then squashes the additive raw score
through a logistic curve and clamps it to the displayable range.
"""

import logging
import math
from numbers import Real
from typing import Optional

from lookz.core.scorer import FeatureScorer
from lookz.shared.config import GenderConfig, get_config
from lookz.shared.constants import RATING, FEATURE_NAMES
from lookz.shared.exceptions import MissingInputError, InvalidInputError
from lookz.shared.models import (
    EyeColor,
    FeatureScores,
    Gender,
    RatingBreakdown,
    UserProfile,
)

logger = logging.getLogger(__name__)


def logistic(raw_score: float,
             steepness: float = RATING.LOGISTIC_STEEPNESS,
             midpoint: float = RATING.LOGISTIC_MIDPOINT) -> float:
    """100 / (1 + exp(-steepness * (raw_score - midpoint)))."""
    exponent = -steepness * (raw_score - midpoint)
    # exp overflows past ~709; the curve is already 0 there
    if exponent > 700:
        return 0.0
    return 100.0 / (1.0 + math.exp(exponent))


def clamp_rating(value: float) -> float:
    return min(max(value, RATING.MIN_RATING), RATING.MAX_RATING)


def bmi(height_in: float, weight_lb: float) -> float:
    """Imperial BMI: weight / height^2 * 703."""
    return weight_lb / (height_in * height_in) * RATING.BMI_FACTOR


class RatingComposer:
    """
    Composes the final rating from face scores and declared physique.

    raw = face_weight * face_rating + physical_weight * physical_rating
          + eye_color_score + bonus
    overall = clamp(logistic(raw), 15.69, 99)

    Refuses to compute when any input is missing; no defaults are
    substituted.
    """

    def face_rating(self, scores: FeatureScores, gender) -> float:
        return FeatureScorer(get_config(gender)).face_rating(scores)

    def physical_rating(self, height_in: float, weight_lb: float, gender) -> float:
        """
        Gaussian BMI score scaled to 0-30, with height adjustments.

        Heights outside the gender's acceptable band multiply the physique
        score by the penalty factor; the male config adds a linear height
        bonus between its min and max heights.
        """
        physical = get_config(gender).physical
        value = bmi(height_in, weight_lb)

        physique = RATING.PHYSIQUE_SCALE * math.exp(
            -((value - physical.ideal_bmi) ** 2) / (2 * physical.sigma ** 2)
        )
        if height_in < physical.height_penalty_below or height_in > physical.height_penalty_above:
            physique *= physical.penalty_factor

        height_bonus = 0.0
        if physical.max_height_bonus > 0:
            span = physical.height_bonus_max - physical.height_bonus_min
            fraction = (height_in - physical.height_bonus_min) / span
            height_bonus = min(1.0, max(0.0, fraction)) * physical.max_height_bonus

        return physique + height_bonus

    def eye_color_score(self, eye_color, gender) -> float:
        scores = get_config(gender).eye_color_scores
        return scores.get(EyeColor.parse(eye_color), scores[EyeColor.OTHER])

    def bonus(self, height_in: float, eye_color, gender) -> float:
        bonus = get_config(gender).bonus
        if not bonus.enabled:
            return 0.0
        if height_in > bonus.height_threshold and EyeColor.parse(eye_color) in bonus.eligible_eye_colors:
            return bonus.bonus_value
        return 0.0

    def compose(self, profile: Optional[UserProfile], scores: Optional[FeatureScores]) -> RatingBreakdown:
        """
        Compute the overall rating.

        Args:
            profile: Declared height, weight, gender and eye color
            scores: Trimmed-mean feature scores from a scan

        Returns:
            RatingBreakdown with the clamped overall rating

        Raises:
            MissingInputError: If any of the 11 inputs is absent
            InvalidInputError: If an input is non-numeric or out of range
        """
        self._validate(profile, scores)

        gender = profile.gender
        config: GenderConfig = get_config(gender)

        face = self.face_rating(scores, gender)
        body_mass = bmi(profile.height_in, profile.weight_lb)
        physical = self.physical_rating(profile.height_in, profile.weight_lb, gender)
        eye_score = self.eye_color_score(profile.eye_color, gender)
        bonus = self.bonus(profile.height_in, profile.eye_color, gender)

        raw_score = (
            config.composition.face_rating_weight * face +
            config.composition.physical_rating_weight * physical +
            eye_score +
            bonus
        )
        overall = clamp_rating(logistic(raw_score))

        logger.info(
            "Composed rating %.2f (face=%.2f, physical=%.2f, eye=%.0f, bonus=%.0f, raw=%.2f)",
            overall, face, physical, eye_score, bonus, raw_score,
        )

        return RatingBreakdown(
            face_rating=face,
            bmi=body_mass,
            physical_rating=physical,
            eye_color_score=eye_score,
            bonus=bonus,
            raw_score=raw_score,
            overall_rating=overall,
        )

    def _validate(self, profile: Optional[UserProfile], scores: Optional[FeatureScores]) -> None:
        missing = []
        if profile is None:
            missing.extend(["height", "weight", "gender", "eyeColor"])
        else:
            if profile.height_in is None:
                missing.append("height")
            if profile.weight_lb is None:
                missing.append("weight")
            if profile.gender is None:
                missing.append("gender")
            if profile.eye_color is None:
                missing.append("eyeColor")

        if scores is None:
            missing.extend(FEATURE_NAMES)
        else:
            missing.extend(name for name, value in scores.as_dict().items() if value is None)

        if missing:
            raise MissingInputError(missing)

        if not isinstance(profile.gender, Gender):
            raise InvalidInputError("gender", f"expected Gender, got {profile.gender!r}")

        _check_range("height", profile.height_in, RATING.MIN_HEIGHT_IN, RATING.MAX_HEIGHT_IN)
        _check_range("weight", profile.weight_lb, RATING.MIN_WEIGHT_LB, RATING.MAX_WEIGHT_LB)
        for name, value in scores.as_dict().items():
            _check_range(name, value, RATING.MIN_FEATURE_SCORE, RATING.MAX_FEATURE_SCORE)


def _check_range(field: str, value, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise InvalidInputError(field, f"expected a number, got {value!r}")
    if value < low or value > high:
        raise InvalidInputError(field, f"{value} outside {low}-{high}")
