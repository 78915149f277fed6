"""CLI formatting and output utilities for LookzScore."""

import json
import logging
from pathlib import Path
from typing import Mapping, Optional

from lookz.core.feedback import generate_rating_name, feature_advice
from lookz.shared.constants import FEATURE_NAMES
from lookz.shared.exceptions import MissingInputError
from lookz.shared.models import FeatureScores, RatingBreakdown, ScanResult

logger = logging.getLogger(__name__)


def print_feature_scores(scores: FeatureScores, verbose: bool = False) -> None:
    """Print one line per feature, with advice in verbose mode."""
    for name, score in scores.as_dict().items():
        line = f"  {name:<22} {score:6.2f}"
        if verbose:
            line += f"  {feature_advice(name, score)}"
        print(line)


def print_results(
    result: ScanResult,
    breakdown: Optional[RatingBreakdown],
    verbose: bool,
) -> None:
    """Print scan results and, when available, the overall rating."""
    print(f"\n{'=' * 60}")
    print("FEATURE SCORES")
    print(f"{'=' * 60}")
    print_feature_scores(result.feature_scores, verbose)

    print(f"\nFace rating: {result.face_rating:.2f}")
    print(generate_rating_name(result.feature_scores))

    if verbose:
        print(f"\nSamples: {result.sample_count}")
        if result.low_confidence_count:
            print(f"Low-confidence frames: {result.low_confidence_count}")

    if breakdown is None:
        print("\nOverall rating: unavailable")
        return

    if verbose:
        print(f"\n{'=' * 60}")
        print("RATING BREAKDOWN")
        print(f"{'=' * 60}")
        print(f"  BMI:              {breakdown.bmi:.2f}")
        print(f"  Physical rating:  {breakdown.physical_rating:.2f}")
        print(f"  Eye color:        {breakdown.eye_color_score:+.0f}")
        print(f"  Bonus:            {breakdown.bonus:+.0f}")
        print(f"  Raw score:        {breakdown.raw_score:.2f}")

    print(f"\nOverall rating: {breakdown.overall_rating:.2f}")


def scan_to_dict(result: ScanResult, breakdown: Optional[RatingBreakdown] = None) -> dict:
    """JSON-ready view of a scan and its optional rating."""
    data = {
        "feature_scores": result.feature_scores.as_dict(),
        "face_rating": result.face_rating,
        "rating_name": generate_rating_name(result.feature_scores),
        "sample_count": result.sample_count,
        "low_confidence_count": result.low_confidence_count,
        "overall_rating": None,
    }
    if breakdown is not None:
        data["overall_rating"] = breakdown.overall_rating
        data["breakdown"] = {
            "face_rating": breakdown.face_rating,
            "bmi": breakdown.bmi,
            "physical_rating": breakdown.physical_rating,
            "eye_color_score": breakdown.eye_color_score,
            "bonus": breakdown.bonus,
            "raw_score": breakdown.raw_score,
        }
    return data


def save_json_output(
    json_output: str,
    source: str,
    result: ScanResult,
    breakdown: Optional[RatingBreakdown],
    gender: str,
    verbose: bool,
) -> Path:
    """Save the scan analysis to <json_output>/<source name>_scan.json."""
    json_dir = Path(json_output)
    json_dir.mkdir(parents=True, exist_ok=True)

    name = Path(str(source)).stem or f"camera{source}"
    json_path = json_dir / f"{name}_scan.json"

    analysis_data = {
        "source": str(source),
        "gender": gender,
        **scan_to_dict(result, breakdown),
    }

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(analysis_data, f, indent=2)

    logger.info("Scan analysis saved to %s", json_path)
    if verbose:
        print(f"\nDetailed analysis saved to: {json_path}")
    return json_path


def load_feature_scores(path: str) -> FeatureScores:
    """
    Load feature scores from a JSON file.

    Accepts either a flat mapping of feature name to score or a saved scan
    analysis with a "feature_scores" key.

    Raises:
        TypeError: If the file does not hold a JSON object of scores
        MissingInputError: If any feature is absent or null
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, Mapping) and "feature_scores" in data:
        data = data["feature_scores"]
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object of feature scores, got {type(data).__name__}")

    missing = [name for name in FEATURE_NAMES if data.get(name) is None]
    if missing:
        raise MissingInputError(missing)
    return FeatureScores.from_dict(data)
