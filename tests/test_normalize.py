import math

import pytest

from dashmet.models import AgentMetric, Encoding
from dashmet.normalize import (
    clamp_fraction,
    clamp_percentage,
    detect_encoding,
    normalize_batch,
    normalize_fraction,
    sample_ratio,
    to_percent,
)


def test_detect_encoding_thresholds():
    assert detect_encoding(0.95) is Encoding.FRACTION
    assert detect_encoding(1.0) is Encoding.FRACTION
    assert detect_encoding(0) is Encoding.FRACTION
    assert detect_encoding(1.5) is Encoding.PERCENT
    assert detect_encoding(95) is Encoding.PERCENT
    assert detect_encoding(None) is Encoding.PERCENT


def test_sample_ratio_prefers_first_agent_with_a_value():
    agents = [
        AgentMetric(agent="a", total_requests=1, success_rate=None, avg_confidence=None, avg_routing_time_ms=None),
        AgentMetric(agent="b", total_requests=1, success_rate=None, avg_confidence=0.7, avg_routing_time_ms=None),
        AgentMetric(agent="c", total_requests=1, success_rate=90, avg_confidence=None, avg_routing_time_ms=None),
    ]

    assert sample_ratio(agents) == 0.7
    assert sample_ratio([]) is None


def test_to_percent_only_scales_fractions():
    assert to_percent(0.5, Encoding.FRACTION) == 50.0
    assert to_percent(50, Encoding.PERCENT) == 50


def test_clamping():
    assert clamp_percentage(150) == 100.0
    assert clamp_percentage(-10) == 0.0
    assert clamp_percentage(float("nan")) == 0.0
    assert clamp_percentage(None) == 0.0
    assert clamp_fraction(1.2) == 1.0
    assert clamp_fraction(-0.1) == 0.0


def test_normalize_batch_converts_fractions():
    assert normalize_batch([0.95, 0.88]) == pytest.approx([95.0, 88.0])


def test_normalize_batch_is_idempotent_for_percentages():
    once = normalize_batch([0.95, 0.88, 0.5])
    twice = normalize_batch(once)

    assert twice == pytest.approx(once)
    assert normalize_batch([95, 88]) == [95, 88]


def test_normalize_batch_samples_first_non_null_value():
    assert normalize_batch([None, 0.5, 0.25]) == pytest.approx([0.0, 50.0, 25.0])


def test_normalize_batch_with_explicit_encoding():
    assert normalize_batch([0.5, 80], Encoding.PERCENT) == [0.5, 80]


def test_normalize_batch_never_yields_non_finite_values():
    result = normalize_batch([0.5, float("inf"), -3])

    assert all(math.isfinite(value) for value in result)
    assert result == pytest.approx([50.0, 0.0, 0.0])


def test_normalize_fraction_accepts_either_encoding():
    assert normalize_fraction(0.942) == pytest.approx(0.942)
    assert normalize_fraction(94.2) == pytest.approx(0.942)
    assert normalize_fraction(250) == 1.0
    assert normalize_fraction(-0.5) == 0.0
    assert normalize_fraction(None) == 0.0
