"""Per-feature facial geometry scoring."""

import logging
import math
from typing import Optional, Tuple

from lookz.geometry.measurements import measure_face
from lookz.shared.config import GenderConfig
from lookz.shared.constants import (
    GEOMETRY,
    CARNAL_TILT,
    FACIAL_THIRDS,
    CHEEKBONE,
    INTEROCULAR,
    JAWLINE,
    CHIN,
    NOSE,
)
from lookz.shared.models import FaceDetection, FaceMeasurements, FeatureScores

logger = logging.getLogger(__name__)


def linear_deviation_score(deviation: float, multiplier: float) -> float:
    """max(0, 100 - |deviation| * multiplier)."""
    return max(0.0, GEOMETRY.MAX_SCORE - abs(deviation) * multiplier)


def exponential_decay_score(normalized_difference: float, multiplier: float) -> float:
    """100 * exp(-multiplier * normalized_difference). Never reaches 0."""
    return GEOMETRY.MAX_SCORE * math.exp(-multiplier * normalized_difference)


class FeatureScorer:
    """
    Scores facial geometry against a gender's ideal ratios.

    Scoring logic:
    - Carnal tilt: linear penalty on the eye-line angle (target 0 degrees)
    - Facial thirds: linear penalty on the relative deviation |1 - ratio/ideal|
    - Cheekbone location: exponential decay on vertical cheek asymmetry
    - Interocular, jawline, chin, nose: linear penalty on |ratio - ideal|

    Ratios with a degenerate denominator score NEUTRAL_SCORE and are
    reported in FeatureScores.degenerate.
    """

    def __init__(self, config: GenderConfig):
        config.validate()
        self.config = config

    def score_carnal_tilt(self, angle: float) -> float:
        multiplier = self.config.params[CARNAL_TILT] * self.config.tilt_multiplier_factor
        return linear_deviation_score(abs(angle), multiplier)

    def score_facial_thirds(self, ratio: float) -> float:
        # Relative deviation, unlike the other ratio features
        deviation = 1.0 - ratio / self.config.ideal_ratios[FACIAL_THIRDS]
        return linear_deviation_score(deviation, self.config.params[FACIAL_THIRDS])

    def score_cheekbone(self, normalized_difference: float) -> float:
        return exponential_decay_score(normalized_difference, self.config.params[CHEEKBONE])

    def score_interocular(self, ratio: float) -> float:
        return self._score_ratio(INTEROCULAR, ratio)

    def score_jawline(self, ratio: float) -> float:
        return self._score_ratio(JAWLINE, ratio)

    def score_chin(self, ratio: float) -> float:
        return self._score_ratio(CHIN, ratio)

    def score_nose(self, ratio: float) -> float:
        return self._score_ratio(NOSE, ratio)

    def compute_scores(self, measurements: FaceMeasurements) -> FeatureScores:
        """
        Score all seven features for one frame.

        Args:
            measurements: Raw measurements from measure_face

        Returns:
            FeatureScores with the names of any degenerate features
        """
        degenerate = set()

        def guarded(name: str, ratio: Optional[float], scorer) -> float:
            if ratio is None:
                degenerate.add(name)
                return GEOMETRY.NEUTRAL_SCORE
            return scorer(ratio)

        cheek_ratio = measurements.cheek_diff_ratio
        if cheek_ratio is None:
            # No usable face height: treated as perfectly symmetric
            degenerate.add(CHEEKBONE)
            cheek_ratio = 0.0

        scores = FeatureScores(
            carnal_tilt=self.score_carnal_tilt(measurements.carnal_tilt_angle),
            facial_thirds=guarded(FACIAL_THIRDS, measurements.facial_thirds_ratio, self.score_facial_thirds),
            cheekbone=self.score_cheekbone(cheek_ratio),
            interocular=guarded(INTEROCULAR, measurements.interocular_ratio, self.score_interocular),
            jawline=guarded(JAWLINE, measurements.jaw_ratio, self.score_jawline),
            chin=guarded(CHIN, measurements.chin_ratio, self.score_chin),
            nose=guarded(NOSE, measurements.nose_ratio, self.score_nose),
            degenerate=frozenset(degenerate),
        )

        if degenerate:
            logger.warning("Degenerate geometry for %s; using neutral scores", ", ".join(sorted(degenerate)))
        else:
            logger.debug(
                "Frame scores: tilt=%.1f thirds=%.1f cheek=%.1f ioc=%.1f jaw=%.1f chin=%.1f nose=%.1f",
                scores.carnal_tilt, scores.facial_thirds, scores.cheekbone,
                scores.interocular, scores.jawline, scores.chin, scores.nose,
            )

        return scores

    def score_detection(self, detection: FaceDetection) -> Tuple[FeatureScores, FaceMeasurements]:
        """Measure and score one detected face."""
        measurements = measure_face(detection.landmarks, detection.bbox)
        return self.compute_scores(measurements), measurements

    def face_rating(self, scores: FeatureScores) -> float:
        """
        Weighted average of the feature scores.

        Uses sum(w_i * s_i) / sum(w_i), so the result stays within the
        range of the inputs.
        """
        total_weight = self.config.total_weight
        if total_weight <= 0:
            return 0.0
        weighted = sum(
            score * self.config.weights[name]
            for name, score in scores.as_dict().items()
        )
        return weighted / total_weight

    def _score_ratio(self, feature: str, ratio: float) -> float:
        deviation = ratio - self.config.ideal_ratios[feature]
        return linear_deviation_score(deviation, self.config.params[feature])
