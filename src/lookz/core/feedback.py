"""Per-feature advice derived from score tiers."""

from typing import Dict, Mapping, Optional, Tuple

from lookz.shared.constants import (
    FEEDBACK,
    CARNAL_TILT,
    FACIAL_THIRDS,
    CHEEKBONE,
    INTEROCULAR,
    JAWLINE,
    CHIN,
    NOSE,
)
from lookz.shared.models import FeatureScores

EXCEPTIONAL = "EXCEPTIONAL"
ABOVE_AVERAGE = "ABOVE_AVERAGE"
AVERAGE = "AVERAGE"
BELOW_AVERAGE = "BELOW_AVERAGE"

FEATURE_ADVICE: Dict[str, Dict[str, str]] = {
    CARNAL_TILT: {
        EXCEPTIONAL: "Your gaze is boosting your rating significantly",
        ABOVE_AVERAGE: "Your eye contact is helping your rating",
        AVERAGE: "Your eye contact is average",
        BELOW_AVERAGE: "Your eye contact is hurting your rating",
    },
    CHEEKBONE: {
        EXCEPTIONAL: "Your cheekbones are boosting your rating significantly",
        ABOVE_AVERAGE: "Your cheekbones are helping your rating",
        AVERAGE: "Your cheekbones are average",
        BELOW_AVERAGE: "Your cheekbones are hurting your rating",
    },
    CHIN: {
        EXCEPTIONAL: "Your chin is boosting your rating significantly",
        ABOVE_AVERAGE: "Your chin is helping your rating",
        AVERAGE: "Your chin is average",
        BELOW_AVERAGE: "Your chin is hurting your rating",
    },
    FACIAL_THIRDS: {
        EXCEPTIONAL: "Your facial proportions are boosting your rating significantly",
        ABOVE_AVERAGE: "Your facial proportions are helping your rating",
        AVERAGE: "Your facial proportions are average",
        BELOW_AVERAGE: "Your facial proportions are hurting your rating",
    },
    INTEROCULAR: {
        EXCEPTIONAL: "Your eye spacing is boosting your rating significantly",
        ABOVE_AVERAGE: "Your eye spacing is helping your rating",
        AVERAGE: "Your eye spacing is average",
        BELOW_AVERAGE: "Your eye spacing is hurting your rating",
    },
    JAWLINE: {
        EXCEPTIONAL: "Your jawline is boosting your rating significantly",
        ABOVE_AVERAGE: "Your jawline is helping your rating",
        AVERAGE: "Your jawline is average",
        BELOW_AVERAGE: "Your jawline is hurting your rating",
    },
    NOSE: {
        EXCEPTIONAL: "Your nose is boosting your rating significantly",
        ABOVE_AVERAGE: "Your nose is helping your rating",
        AVERAGE: "Your nose is average",
        BELOW_AVERAGE: "Your nose is hurting your rating",
    },
}

# Alphabetical; decides which feature wins a tie in best_and_worst
ADVICE_ORDER: Tuple[str, ...] = (CARNAL_TILT, CHEEKBONE, CHIN, FACIAL_THIRDS, INTEROCULAR, JAWLINE, NOSE)


def tier(score: float) -> str:
    if score >= FEEDBACK.EXCEPTIONAL:
        return EXCEPTIONAL
    if score >= FEEDBACK.ABOVE_AVERAGE:
        return ABOVE_AVERAGE
    if score >= FEEDBACK.AVERAGE:
        return AVERAGE
    return BELOW_AVERAGE


def feature_advice(feature: str, score: float) -> str:
    return FEATURE_ADVICE[feature][tier(score)]


def best_and_worst(scores) -> Tuple[Optional[Tuple[str, float]], Optional[Tuple[str, float]]]:
    """
    Find the highest and lowest scoring features.

    Args:
        scores: FeatureScores or a mapping keyed by feature display name;
                features absent from a mapping are ignored

    Returns:
        ((best_name, best_score), (worst_name, worst_score)); each is None
        when no features are present. Ties keep the earlier feature in
        ADVICE_ORDER.
    """
    values: Mapping[str, float] = scores.as_dict() if isinstance(scores, FeatureScores) else scores

    best = worst = None
    for name in ADVICE_ORDER:
        if name not in values or values[name] is None:
            continue
        score = values[name]
        if best is None or score > best[1]:
            best = (name, score)
        if worst is None or score < worst[1]:
            worst = (name, score)
    return best, worst


def generate_rating_name(scores) -> str:
    """Advice for the best and worst features, as "<best>. <worst>"."""
    best, worst = best_and_worst(scores)
    best_advice = feature_advice(*best) if best else ""
    worst_advice = feature_advice(*worst) if worst else ""
    return f"{best_advice}. {worst_advice}"
