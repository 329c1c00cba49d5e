"""Tests for fixed-threshold step detection."""

import math
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from stride_track.core.step_detector import DEFAULT_THRESHOLD, StepDetector
from stride_track.domain.sample import AccelerationSample

_BASE = datetime(2026, 10, 19, 9, 0, 0, tzinfo=timezone.utc)


def _sample(x: float, y: float, z: float, at: datetime | None = None) -> AccelerationSample:
    return AccelerationSample(x=x, y=y, z=z, timestamp=at)


class TestThreshold:
    def test_default_threshold(self) -> None:
        assert StepDetector().threshold == DEFAULT_THRESHOLD == 1.1

    def test_unit_vector_is_not_a_step(self) -> None:
        assert StepDetector().detect(_sample(1, 0, 0)) is False

    def test_diagonal_vector_is_a_step(self) -> None:
        # magnitude ≈ 1.732
        assert StepDetector().detect(_sample(1, 1, 1)) is True

    def test_exactly_at_threshold_is_not_a_step(self) -> None:
        assert StepDetector(threshold=2.0).detect(_sample(0, 2.0, 0)) is False

    def test_just_above_threshold_is_a_step(self) -> None:
        assert StepDetector().detect(_sample(1.1001, 0, 0)) is True

    def test_sign_does_not_matter(self) -> None:
        det = StepDetector()
        assert det.detect(_sample(-1, -1, -1)) is True
        assert det.detect(_sample(-0.5, 0, 0)) is False

    def test_gravity_is_not_subtracted(self) -> None:
        # A phone lying still reads ~9.81 m/s² and counts on every sample
        assert StepDetector().detect(_sample(0, 0, 9.81)) is True

    def test_custom_threshold(self) -> None:
        det = StepDetector(threshold=12.0)
        assert det.detect(_sample(0, 0, 9.81)) is False
        assert det.detect(_sample(0, 5, 12)) is True


class TestDegenerateInput:
    def test_nan_is_not_a_step(self) -> None:
        assert StepDetector().detect(_sample(math.nan, 0, 0)) is False

    def test_infinity_is_a_step(self) -> None:
        assert StepDetector().detect(_sample(math.inf, 0, 0)) is True
        assert StepDetector().detect(_sample(0, -math.inf, 0)) is True


class TestStatelessness:
    def test_repeated_calls_are_identical(self) -> None:
        det = StepDetector()
        sample = _sample(0.9, 0.9, 0.0)
        results = [det.detect(sample) for _ in range(5)]
        assert results == [True] * 5

    def test_no_refractory_period_by_default(self) -> None:
        """Two samples 10 ms apart both count."""
        det = StepDetector()
        assert det.detect(_sample(1, 1, 1, _BASE))
        assert det.detect(_sample(1, 1, 1, _BASE + timedelta(milliseconds=10)))

    def test_previous_sample_does_not_affect_next(self) -> None:
        det = StepDetector()
        det.detect(_sample(5, 5, 5))
        assert det.detect(_sample(0.1, 0, 0)) is False


class TestMinStepInterval:
    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError):
            StepDetector(min_step_interval=timedelta(milliseconds=-1))

    def test_step_inside_interval_suppressed(self) -> None:
        det = StepDetector(min_step_interval=timedelta(milliseconds=250))
        assert det.detect(_sample(1, 1, 1, _BASE))
        assert not det.detect(_sample(1, 1, 1, _BASE + timedelta(milliseconds=100)))
        assert det.detect(_sample(1, 1, 1, _BASE + timedelta(milliseconds=300)))

    def test_suppressed_sample_does_not_restart_interval(self) -> None:
        det = StepDetector(min_step_interval=timedelta(milliseconds=250))
        det.detect(_sample(1, 1, 1, _BASE))
        det.detect(_sample(1, 1, 1, _BASE + timedelta(milliseconds=200)))
        # 260 ms after the accepted step, 60 ms after the suppressed one
        assert det.detect(_sample(1, 1, 1, _BASE + timedelta(milliseconds=260)))

    def test_below_threshold_never_counts(self) -> None:
        det = StepDetector(min_step_interval=timedelta(milliseconds=250))
        assert not det.detect(_sample(0.5, 0, 0, _BASE))

    def test_reset_clears_last_step(self) -> None:
        det = StepDetector(min_step_interval=timedelta(seconds=10))
        det.detect(_sample(1, 1, 1, _BASE))
        det.reset()
        assert det.detect(_sample(1, 1, 1, _BASE + timedelta(seconds=1)))

    def test_untimestamped_samples_use_clock(self) -> None:
        det = StepDetector(min_step_interval=timedelta(milliseconds=250))
        with patch("stride_track.core.step_detector.utc_now", return_value=_BASE):
            assert det.detect(_sample(1, 1, 1))
        with patch(
            "stride_track.core.step_detector.utc_now",
            return_value=_BASE + timedelta(milliseconds=50),
        ):
            assert not det.detect(_sample(1, 1, 1))
