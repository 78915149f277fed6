"""Tests for the scan session driver."""

import pytest

from lookz.core.session import ScanSession
from lookz.shared.config import FEMALE_CONFIG
from lookz.shared.exceptions import InvalidGenderError
from lookz.shared.models import ScanState

from tests.helpers import make_frame_stream


class TestScanSession:
    def test_default_timing(self, make_fake_detector, male_ideal_detection):
        session = ScanSession(make_fake_detector(male_ideal_detection), "M")

        result = session.run(make_frame_stream(10.0))

        # gate met at 3.0s; window [3.0, 8.0) collects 3.1..7.9
        assert result.sample_count == 49
        assert result.face_rating == pytest.approx(100.0)
        assert session.aggregator.state is ScanState.IDLE

    def test_stops_reading_after_window_closes(self, make_fake_detector, fast_sampling):
        detector = make_fake_detector()
        session = ScanSession(detector, "M", fast_sampling)

        session.run(make_frame_stream(10.0))

        # frames 0.0..2.0 inclusive
        assert detector.detect.call_count == 21

    def test_lost_face_restarts_gate(self, make_fake_detector, fast_sampling):
        session = ScanSession(make_fake_detector(), "M", fast_sampling)
        stream = make_frame_stream(5.0, face_present=lambda t: not (0.45 < t < 0.55))

        result = session.run(stream)

        # gate restarts at 0.6, window [1.6, 2.6)
        assert result.sample_count == 9

    def test_gaps_inside_window_are_skipped(self, make_fake_detector, fast_sampling):
        session = ScanSession(make_fake_detector(), "M", fast_sampling)
        stream = make_frame_stream(5.0, face_present=lambda t: not (1.25 < t < 1.55))

        result = session.run(stream)

        assert result.sample_count == 6

    def test_source_exhausted_mid_window_cancels(self, make_fake_detector, fast_sampling):
        session = ScanSession(make_fake_detector(), "M", fast_sampling)

        assert session.run(make_frame_stream(1.5)) is None
        assert session.collected == 5
        assert session.aggregator.state is ScanState.IDLE
        assert session.aggregator.sample_count == 0

    def test_gives_up_without_face(self, make_fake_detector, fast_sampling):
        detector = make_fake_detector()
        session = ScanSession(detector, "M", fast_sampling)

        result = session.run(make_frame_stream(10.0, face_present=lambda t: False))

        assert result is None
        # waits until 3.1s (> max_wait)
        assert detector.detect.call_count == 32

    def test_explicit_max_wait(self, make_fake_detector, fast_sampling):
        detector = make_fake_detector()
        session = ScanSession(detector, "M", fast_sampling, max_wait=0.5)

        assert session.run(make_frame_stream(10.0, face_present=lambda t: False)) is None
        assert detector.detect.call_count == 7

    def test_too_short_window_gives_no_result(self, make_fake_detector, fast_sampling):
        from dataclasses import replace

        sampling = replace(fast_sampling, WINDOW=0.3)
        session = ScanSession(make_fake_detector(), "M", sampling)

        assert session.run(make_frame_stream(5.0)) is None

    def test_empty_source(self, make_fake_detector):
        assert ScanSession(make_fake_detector(), "M").run([]) is None

    def test_gender_selects_config(self, make_fake_detector):
        assert ScanSession(make_fake_detector(), "female").aggregator.config is FEMALE_CONFIG

    def test_unknown_gender_rejected(self, make_fake_detector):
        with pytest.raises(InvalidGenderError):
            ScanSession(make_fake_detector(), "?")
