"""Tests for overall rating composition."""

import math

import pytest

from lookz.core.aggregator import ScanAggregator
from lookz.core.composer import RatingComposer, logistic, clamp_rating, bmi
from lookz.shared.config import MALE_CONFIG
from lookz.shared.constants import FEATURE_NAMES, RATING
from lookz.shared.exceptions import (
    InvalidInputError,
    MissingInputError,
    RatingUnavailableError,
)
from lookz.shared.models import EyeColor, Gender, UserProfile


@pytest.fixture
def composer():
    return RatingComposer()


class TestLogistic:
    def test_midpoint_is_fifty(self):
        assert logistic(50.0) == pytest.approx(50.0)

    def test_monotonic(self):
        values = [logistic(x) for x in (-50, 0, 25, 50, 75, 100, 150)]
        assert values == sorted(values)

    def test_extreme_negative_does_not_overflow(self):
        assert logistic(-1e6) == 0.0

    def test_extreme_positive_approaches_hundred(self):
        assert logistic(1e6) == pytest.approx(100.0)


class TestClampRating:
    @pytest.mark.parametrize(
        "value,expected",
        [(0.0, RATING.MIN_RATING), (2.36, 15.69), (50.0, 50.0), (99.5, 99.0), (150.0, 99.0)],
    )
    def test_clamp(self, value, expected):
        assert clamp_rating(value) == pytest.approx(expected)


class TestBMI:
    def test_imperial_formula(self):
        assert bmi(70.0, 160.0) == pytest.approx(160.0 / 4900.0 * 703.0)


class TestPhysicalRating:
    def test_male_height_bonus_is_linear(self, composer):
        # halfway between 66 and 72 inches
        ideal_weight = 23.5 * 69.0 ** 2 / 703.0
        assert composer.physical_rating(69.0, ideal_weight, Gender.MALE) == pytest.approx(35.0)

    def test_male_height_bonus_caps_at_ten(self, composer):
        ideal_weight = 23.5 * 76.0 ** 2 / 703.0
        assert composer.physical_rating(76.0, ideal_weight, Gender.MALE) == pytest.approx(40.0)

    def test_male_ideal_bmi_without_bonus(self, composer):
        ideal_weight = 23.5 * 66.0 ** 2 / 703.0
        assert composer.physical_rating(66.0, ideal_weight, Gender.MALE) == pytest.approx(30.0)

    def test_short_male_penalized(self, composer):
        ideal_weight = 23.5 * 64.0 ** 2 / 703.0
        assert composer.physical_rating(64.0, ideal_weight, Gender.MALE) == pytest.approx(9.0)

    def test_tall_female_penalized(self, composer):
        ideal_weight = 20.5 * 72.0 ** 2 / 703.0
        assert composer.physical_rating(72.0, ideal_weight, Gender.FEMALE) == pytest.approx(9.0)

    def test_female_has_no_height_bonus(self, composer):
        ideal_weight = 20.5 * 70.0 ** 2 / 703.0
        assert composer.physical_rating(70.0, ideal_weight, Gender.FEMALE) == pytest.approx(30.0)

    def test_gaussian_falloff(self, composer):
        # one sigma above the female ideal BMI
        weight = 22.5 * 65.0 ** 2 / 703.0
        expected = 30.0 * math.exp(-0.5)
        assert composer.physical_rating(65.0, weight, Gender.FEMALE) == pytest.approx(expected)


class TestCategoricalAdjustments:
    @pytest.mark.parametrize(
        "eye_color,expected",
        [(EyeColor.BLUE, 10.0), (EyeColor.GREEN, 10.0), (EyeColor.BROWN, 0.0), (EyeColor.OTHER, -5.0)],
    )
    def test_eye_color_score(self, composer, eye_color, expected):
        assert composer.eye_color_score(eye_color, Gender.MALE) == expected

    def test_eye_color_accepts_strings(self, composer):
        assert composer.eye_color_score("Hazel", Gender.FEMALE) == 0.0

    @pytest.mark.parametrize(
        "height,eye_color,expected",
        [
            (73.0, EyeColor.BLUE, 5.0),
            (73.0, EyeColor.GREEN, 5.0),
            (72.0, EyeColor.BLUE, 0.0),
            (73.0, EyeColor.BROWN, 0.0),
        ],
    )
    def test_male_bonus(self, composer, height, eye_color, expected):
        assert composer.bonus(height, eye_color, Gender.MALE) == expected

    def test_no_female_bonus(self, composer):
        assert composer.bonus(75.0, EyeColor.BLUE, Gender.FEMALE) == 0.0


class TestCompose:
    def test_scenario_male_perfect_face(self, composer, make_profile, make_feature_scores):
        profile = make_profile(70.0, 160.0, Gender.MALE, EyeColor.BLUE)
        breakdown = composer.compose(profile, make_feature_scores(100.0))

        assert breakdown.face_rating == pytest.approx(100.0)
        assert breakdown.bmi == pytest.approx(22.955, abs=1e-3)
        assert breakdown.physical_rating == pytest.approx(35.96, abs=0.01)
        assert breakdown.eye_color_score == 10.0
        assert breakdown.bonus == 0.0
        assert breakdown.raw_score == pytest.approx(92.98, abs=0.01)
        assert 98.0 <= breakdown.overall_rating <= RATING.MAX_RATING

    def test_scenario_female_zero_face(self, composer, make_profile, make_feature_scores):
        profile = make_profile(65.0, 130.0, Gender.FEMALE, EyeColor.BROWN)
        breakdown = composer.compose(profile, make_feature_scores(0.0))

        assert breakdown.face_rating == 0.0
        assert breakdown.raw_score == pytest.approx(12.78, abs=0.01)
        assert breakdown.overall_rating == pytest.approx(RATING.MIN_RATING)

    def test_empty_scan_is_unavailable(self, composer, make_profile):
        aggregator = ScanAggregator(MALE_CONFIG)
        result = aggregator.reduce([])

        with pytest.raises(MissingInputError) as exc_info:
            composer.compose(make_profile(), result.feature_scores if result else None)
        assert exc_info.value.fields == FEATURE_NAMES

    def test_overall_always_within_clamp(self, composer, make_profile, make_feature_scores):
        for value in (0.0, 25.0, 50.0, 75.0, 100.0):
            for height in (50.0, 66.0, 80.0):
                rating = composer.compose(
                    make_profile(height_in=height), make_feature_scores(value)
                ).overall_rating
                assert RATING.MIN_RATING <= rating <= RATING.MAX_RATING

    def test_tall_blue_eyed_male_gets_bonus(self, composer, make_profile, make_feature_scores):
        breakdown = composer.compose(make_profile(height_in=74.0, weight_lb=185.0), make_feature_scores(60.0))
        assert breakdown.bonus == 5.0


class TestComposeValidation:
    def test_missing_profile(self, composer, make_feature_scores):
        with pytest.raises(MissingInputError) as exc_info:
            composer.compose(None, make_feature_scores())
        assert exc_info.value.fields == ("height", "weight", "gender", "eyeColor")

    @pytest.mark.parametrize(
        "field,attr",
        [("height", "height_in"), ("weight", "weight_lb"), ("gender", "gender"), ("eyeColor", "eye_color")],
    )
    def test_each_missing_field_reported(self, composer, make_profile, make_feature_scores, field, attr):
        profile = make_profile()
        setattr(profile, attr, None)
        with pytest.raises(MissingInputError) as exc_info:
            composer.compose(profile, make_feature_scores())
        assert exc_info.value.fields == (field,)

    def test_missing_is_a_rating_unavailable_error(self, composer):
        with pytest.raises(RatingUnavailableError):
            composer.compose(UserProfile(), None)

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"height_in": 30.0}, "height"),
            ({"height_in": 90.0}, "height"),
            ({"weight_lb": 50.0}, "weight"),
            ({"weight_lb": "heavy"}, "weight"),
            ({"height_in": float("nan")}, "height"),
            ({"height_in": True}, "height"),
        ],
    )
    def test_out_of_range_profile(self, composer, make_profile, make_feature_scores, overrides, field):
        with pytest.raises(InvalidInputError) as exc_info:
            composer.compose(make_profile(**overrides), make_feature_scores())
        assert exc_info.value.field == field

    @pytest.mark.parametrize("value", [-1.0, 100.5, float("nan")])
    def test_out_of_range_feature_score(self, composer, make_profile, make_feature_scores, value):
        with pytest.raises(InvalidInputError) as exc_info:
            composer.compose(make_profile(), make_feature_scores(chin=value))
        assert exc_info.value.field == "Chin"

    def test_unparsed_gender_rejected(self, composer, make_profile, make_feature_scores):
        with pytest.raises(InvalidInputError):
            composer.compose(make_profile(gender="M"), make_feature_scores())
