"""Shape validation for structured endpoint responses."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple


class FieldKind(Enum):
    COUNT = "count"
    DELTA = "delta"
    RATE = "rate"
    TEXT = "text"
    LIST = "list"
    OBJECT = "object"


@dataclass(frozen=True)
class FieldRule:
    name: str
    kind: FieldKind
    required: bool = True


@dataclass(frozen=True)
class Schema:
    """Named set of field rules for an object payload."""

    name: str
    fields: Tuple[FieldRule, ...]


def validate(payload: Any, schema: Schema) -> bool:
    return not validation_errors(payload, schema)


def validation_errors(payload: Any, schema: Schema) -> List[str]:
    """
    Return a list of problems with ``payload``; empty means valid.

    Counts must be non-negative. Deltas may be negative: a negative saving
    or efficiency gain reports a regression, not malformed data.
    """
    if not isinstance(payload, dict):
        return [f"{schema.name}: expected an object, got {_type_name(payload)}"]

    errors = []
    for rule in schema.fields:
        if rule.name not in payload or payload[rule.name] is None:
            if rule.required:
                errors.append(f"{schema.name}.{rule.name}: missing")
            continue
        problem = _check(payload[rule.name], rule.kind)
        if problem:
            errors.append(f"{schema.name}.{rule.name}: {problem}")
    return errors


def validate_rows(payload: Any, require_non_empty: bool = False) -> List[str]:
    if not isinstance(payload, list):
        return [f"expected a list, got {_type_name(payload)}"]
    if require_non_empty and not payload:
        return ["expected at least one row"]
    return []


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


def _check(value: Any, kind: FieldKind) -> str:
    if kind in (FieldKind.COUNT, FieldKind.DELTA, FieldKind.RATE):
        if not is_number(value):
            return f"expected a number, got {_type_name(value)}"
        if kind is FieldKind.COUNT and value < 0:
            return f"must be >= 0, got {value}"
        return ""
    if kind is FieldKind.TEXT and not isinstance(value, str):
        return f"expected a string, got {_type_name(value)}"
    if kind is FieldKind.LIST and not isinstance(value, list):
        return f"expected a list, got {_type_name(value)}"
    if kind is FieldKind.OBJECT and not isinstance(value, dict):
        return f"expected an object, got {_type_name(value)}"
    return ""


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


def _rules(kind: FieldKind, *names: str, required: bool = True) -> Tuple[FieldRule, ...]:
    return tuple(FieldRule(name, kind, required) for name in names)


SAVINGS_METRICS_SCHEMA = Schema(
    name="savings_metrics",
    fields=(
        _rules(
            FieldKind.DELTA,
            "totalSavings",
            "monthlySavings",
            "weeklySavings",
            "dailySavings",
            "efficiencyGain",
            "timeSaved",
        )
        + _rules(
            FieldKind.COUNT,
            "intelligenceRuns",
            "baselineRuns",
            "avgTokensPerRun",
            "avgComputePerRun",
            "costPerToken",
            "costPerCompute",
        )
    ),
)

ARCHITECTURE_SUMMARY_SCHEMA = Schema(
    name="architecture_summary",
    fields=_rules(FieldKind.COUNT, "totalNodes", "totalEdges", "services", "patterns"),
)

AGENT_REGISTRY_SUMMARY_SCHEMA = Schema(
    name="agent_registry_summary",
    fields=(
        _rules(FieldKind.COUNT, "totalAgents", "activeAgents", "totalRuns")
        + _rules(FieldKind.RATE, "successRate", "avgExecutionTime")
        + _rules(FieldKind.DELTA, "totalSavings", required=False)
    ),
)

PLATFORM_HEALTH_SCHEMA = Schema(
    name="platform_health",
    fields=(
        FieldRule("status", FieldKind.TEXT),
        FieldRule("services", FieldKind.LIST),
        FieldRule("uptime", FieldKind.RATE, required=False),
    ),
)

CODE_ANALYSIS_SCHEMA = Schema(
    name="code_analysis",
    fields=(
        _rules(FieldKind.COUNT, "files_analyzed", "code_smells", "security_issues")
        + _rules(FieldKind.RATE, "avg_complexity")
        + _rules(FieldKind.LIST, "complexity_trend", "quality_trend", required=False)
    ),
)

COMPLIANCE_SUMMARY_SCHEMA = Schema(
    name="compliance_summary",
    fields=_rules(FieldKind.COUNT, "totalFiles", "compliantFiles", "nonCompliantFiles", "pendingFiles"),
)

PATTERN_SUMMARY_SCHEMA = Schema(
    name="pattern_summary",
    fields=(
        _rules(
            FieldKind.COUNT,
            "total_patterns",
            "totalPatterns",
            "new_patterns_today",
            "newPatternsToday",
            "active_learning_count",
            "activeLearningCount",
            required=False,
        )
        + _rules(FieldKind.RATE, "avg_quality_score", "avgQualityScore", required=False)
    ),
)
