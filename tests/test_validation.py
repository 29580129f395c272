from dashmet.validation import (
    ARCHITECTURE_SUMMARY_SCHEMA,
    CODE_ANALYSIS_SCHEMA,
    PATTERN_SUMMARY_SCHEMA,
    PLATFORM_HEALTH_SCHEMA,
    SAVINGS_METRICS_SCHEMA,
    FieldKind,
    FieldRule,
    Schema,
    is_number,
    validate,
    validate_rows,
    validation_errors,
)


def _savings(**overrides):
    payload = {
        "totalSavings": 45000,
        "monthlySavings": 15000,
        "weeklySavings": 3750,
        "dailySavings": 536,
        "intelligenceRuns": 15420,
        "baselineRuns": 23500,
        "avgTokensPerRun": 3200,
        "avgComputePerRun": 1.2,
        "costPerToken": 0.000002,
        "costPerCompute": 0.05,
        "efficiencyGain": 34.0,
        "timeSaved": 128,
    }
    payload.update(overrides)
    return payload


def test_savings_metrics_valid():
    assert validate(_savings(), SAVINGS_METRICS_SCHEMA)


def test_negative_savings_deltas_are_valid():
    payload = _savings(totalSavings=-50, dailySavings=-1.5, efficiencyGain=-3.0, timeSaved=-2)

    assert validation_errors(payload, SAVINGS_METRICS_SCHEMA) == []


def test_negative_run_counts_are_invalid():
    errors = validation_errors(_savings(intelligenceRuns=-1), SAVINGS_METRICS_SCHEMA)

    assert errors == ["savings_metrics.intelligenceRuns: must be >= 0, got -1"]


def test_missing_and_mistyped_fields_are_reported():
    payload = _savings(baselineRuns="many", weeklySavings=True)
    del payload["totalSavings"]

    errors = validation_errors(payload, SAVINGS_METRICS_SCHEMA)

    assert "savings_metrics.totalSavings: missing" in errors
    assert "savings_metrics.baselineRuns: expected a number, got str" in errors
    assert "savings_metrics.weeklySavings: expected a number, got bool" in errors


def test_non_object_payloads_fail_object_schemas():
    assert not validate(None, SAVINGS_METRICS_SCHEMA)
    assert not validate([], ARCHITECTURE_SUMMARY_SCHEMA)
    assert validation_errors(None, PLATFORM_HEALTH_SCHEMA) == [
        "platform_health: expected an object, got null"
    ]


def test_optional_fields_may_be_absent():
    assert validate({"status": "healthy", "services": []}, PLATFORM_HEALTH_SCHEMA)
    assert validate({}, PATTERN_SUMMARY_SCHEMA)
    assert validate({"totalPatterns": 12, "avgQualityScore": 0.8}, PATTERN_SUMMARY_SCHEMA)
    assert not validate({"total_patterns": -1}, PATTERN_SUMMARY_SCHEMA)


def test_code_analysis_schema():
    payload = {
        "files_analyzed": 10,
        "avg_complexity": 7.2,
        "code_smells": 3,
        "security_issues": 0,
        "complexity_trend": [],
    }

    assert validate(payload, CODE_ANALYSIS_SCHEMA)
    assert not validate(dict(payload, complexity_trend="rising"), CODE_ANALYSIS_SCHEMA)


def test_text_and_object_rules():
    schema = Schema(
        name="custom",
        fields=(FieldRule("label", FieldKind.TEXT), FieldRule("meta", FieldKind.OBJECT)),
    )

    assert validate({"label": "x", "meta": {}}, schema)
    assert validation_errors({"label": 1, "meta": []}, schema) == [
        "custom.label: expected a string, got int",
        "custom.meta: expected an object, got list",
    ]


def test_validate_rows():
    assert validate_rows([]) == []
    assert validate_rows([{"id": 1}], require_non_empty=True) == []
    assert validate_rows([], require_non_empty=True) == ["expected at least one row"]
    assert validate_rows({"rows": []}) == ["expected a list, got dict"]
    assert validate_rows(None) == ["expected a list, got null"]


def test_is_number_excludes_bool_and_non_finite():
    assert is_number(0)
    assert is_number(-2.5)
    assert not is_number(True)
    assert not is_number(float("nan"))
    assert not is_number(float("inf"))
    assert not is_number("1")


def test_is_number_rejects_integers_too_large_for_a_float():
    assert not is_number(10**400)
    errors = validation_errors(_savings(totalSavings=10**400), SAVINGS_METRICS_SCHEMA)

    assert len(errors) == 1
    assert "totalSavings: expected a number" in errors[0]
