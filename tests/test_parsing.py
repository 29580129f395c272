from datetime import datetime, timezone

from dashmet.parsing import agent_metrics_from_rows, as_count, as_float, parse_timestamp, pick


def test_parse_timestamp_accepts_z_suffix_and_naive_values():
    expected = datetime(2026, 1, 8, 12, 0, tzinfo=timezone.utc)

    assert parse_timestamp("2026-01-08T12:00:00Z") == expected
    assert parse_timestamp("2026-01-08T13:00:00+01:00") == expected
    assert parse_timestamp("2026-01-08T12:00:00") == expected


def test_parse_timestamp_rejects_junk_and_out_of_range_dates():
    assert parse_timestamp("not a timestamp") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(1736337600) is None
    assert parse_timestamp("0001-01-01T00:00:00+01:00") is None


def test_as_float_rejects_bools_non_finite_and_huge_integers():
    assert as_float("2.5") == 2.5
    assert as_float(True) is None
    assert as_float("nan") is None
    assert as_float(10**400) is None


def test_as_count_turns_junk_into_zero():
    assert as_count(12.9) == 12
    assert as_count(-3) == 0
    assert as_count(10**400) == 0
    assert as_count("many") == 0


def test_pick_skips_missing_and_falsy_aliases():
    row = {"pattern_count": 0, "count": 7}

    assert pick(row, "patternCount", "pattern_count", "count") == 7
    assert pick(row, "missing", default="fallback") == "fallback"


def test_agent_metrics_from_rows_skips_non_objects():
    metrics = agent_metrics_from_rows([{"agent": "a", "totalRequests": 10**400}, "junk", None])

    assert len(metrics) == 1
    assert metrics[0].total_requests == 0
