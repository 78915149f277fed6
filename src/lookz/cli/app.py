"""LookzScore CLI - Rate facial geometry from a video or camera."""

import logging
import sys
from typing import Annotated, Optional

import cyclopts

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

from lookz.api import scan_video, rate as compose_rating
from lookz.shared.exceptions import (
    DetectorError,
    InvalidGenderError,
    InvalidInputError,
    MissingInputError,
    NoScanResultError,
    VideoError,
)
from lookz.shared.models import EyeColor, Gender, RatingBreakdown, UserProfile
from lookz.utils.formatting import (
    load_feature_scores,
    print_feature_scores,
    print_results,
    save_json_output,
)
from lookz.utils.units import parse_height, parse_weight

app = cyclopts.App(
    name="lookz",
    help="Rate facial geometry from face-mesh landmarks",
    version="0.1.0",
)


def _set_verbose(verbose: bool) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def _build_profile(
    gender: Gender,
    height: Optional[str],
    weight: Optional[str],
    eye_color: Optional[str],
) -> UserProfile:
    return UserProfile(
        height_in=parse_height(height) if height is not None else None,
        weight_lb=parse_weight(weight) if weight is not None else None,
        gender=gender,
        eye_color=EyeColor.parse(eye_color) if eye_color is not None else None,
    )


def _print_breakdown(breakdown: RatingBreakdown) -> None:
    print(f"Face rating:      {breakdown.face_rating:.2f}")
    print(f"BMI:              {breakdown.bmi:.2f}")
    print(f"Physical rating:  {breakdown.physical_rating:.2f}")
    print(f"Eye color:        {breakdown.eye_color_score:+.0f}")
    print(f"Bonus:            {breakdown.bonus:+.0f}")
    print(f"Raw score:        {breakdown.raw_score:.2f}")
    print(f"\nOverall rating: {breakdown.overall_rating:.2f}")


@app.command
def scan(
    source: Annotated[str, cyclopts.Parameter(help="Path to video file or camera index (e.g. 0)")],
    gender: Annotated[str, cyclopts.Parameter(help="Gender selecting the scoring config (M or W)")],
    height: Annotated[
        Optional[str],
        cyclopts.Parameter(help="Height, e.g. 5'10\", 70in or 178cm"),
    ] = None,
    weight: Annotated[
        Optional[str],
        cyclopts.Parameter(help="Weight, e.g. 160lb or 72kg"),
    ] = None,
    eye_color: Annotated[
        Optional[str],
        cyclopts.Parameter(help="Eye color (Blue, Green, Brown, Hazel, Gray, Other)"),
    ] = None,
    json_output: Annotated[
        Optional[str],
        cyclopts.Parameter(help="Save scan analysis to JSON file (directory path)"),
    ] = None,
    max_wait: Annotated[
        Optional[float],
        cyclopts.Parameter(help="Seconds to wait for a steady face (default: 30)"),
    ] = None,
    verbose: Annotated[bool, cyclopts.Parameter(help="Show per-feature advice and debug logs")] = False,
) -> None:
    """Scan a face and print its feature scores and rating.

    The face must be detected continuously for 3 seconds before a
    5 second collection window opens. The overall rating is shown only
    when height, weight and eye color are all given.

    Examples:
        lookz scan face.mp4 --gender M
        lookz scan 0 --gender W --height 5'6" --weight 130lb --eye-color Brown
        lookz scan face.mp4 --gender M --json-output ./output --verbose
    """
    _set_verbose(verbose)

    try:
        parsed_gender = Gender.parse(gender)
        profile = _build_profile(parsed_gender, height, weight, eye_color)
    except (InvalidGenderError, InvalidInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = scan_video(source, parsed_gender, max_wait=max_wait)
    except (NoScanResultError, VideoError, DetectorError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    breakdown = None
    try:
        breakdown = compose_rating(profile, result.feature_scores)
    except MissingInputError as e:
        logger.info("Overall rating not computed: %s", e)
    except InvalidInputError as e:
        logger.warning("Overall rating not computed: %s", e)

    print_results(result, breakdown, verbose)

    if json_output:
        save_json_output(json_output, source, result, breakdown, parsed_gender.value, verbose)


@app.command
def rate(
    scores_json: Annotated[str, cyclopts.Parameter(help="JSON file with feature scores (or a saved scan)")],
    gender: Annotated[str, cyclopts.Parameter(help="Gender selecting the scoring config (M or W)")],
    height: Annotated[str, cyclopts.Parameter(help="Height, e.g. 5'10\", 70in or 178cm")],
    weight: Annotated[str, cyclopts.Parameter(help="Weight, e.g. 160lb or 72kg")],
    eye_color: Annotated[str, cyclopts.Parameter(help="Eye color (Blue, Green, Brown, Hazel, Gray, Other)")],
    verbose: Annotated[bool, cyclopts.Parameter(help="Show per-feature scores and debug logs")] = False,
) -> None:
    """Compose an overall rating from saved feature scores.

    Examples:
        lookz rate output/face_scan.json --gender M --height 70in --weight 160lb --eye-color Blue
    """
    _set_verbose(verbose)

    try:
        scores = load_feature_scores(scores_json)
    except (OSError, ValueError, KeyError, TypeError, MissingInputError) as e:
        print(f"Error: could not read feature scores from {scores_json}: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        profile = _build_profile(Gender.parse(gender), height, weight, eye_color)
        breakdown = compose_rating(profile, scores)
    except (InvalidGenderError, MissingInputError, InvalidInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if verbose:
        print_feature_scores(scores, verbose=True)
        print()
    _print_breakdown(breakdown)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
