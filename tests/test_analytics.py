from datetime import datetime, timedelta, timezone

import pytest

from dashmet.analytics import (
    agent_definition,
    category_color,
    compute_agent_performance,
    compute_event_chart,
    compute_event_metrics,
    compute_intelligence_metrics,
    compute_language_breakdown,
    compute_routing_stats,
    display_name,
    empty_agent_summary,
    empty_event_metrics,
    fallback_rate,
    filter_agents,
    infer_category,
    operations_chart,
    operations_status,
    percentage_shares,
    quality_chart,
    summarize_agents,
    time_ago,
    weighted_average,
    weighted_rate,
)
from dashmet.models import AgentMetric

NOW = datetime(2026, 1, 8, 12, 0, tzinfo=timezone.utc)


def _agents():
    return [
        AgentMetric(
            agent="agent-api-architect",
            total_requests=1000,
            success_rate=0.95,
            avg_confidence=0.9,
            avg_routing_time_ms=100,
        ),
        AgentMetric(
            agent="code-reviewer",
            total_requests=500,
            success_rate=0.88,
            avg_confidence=0.6,
            avg_routing_time_ms=400,
        ),
    ]


def test_weighted_rate_uses_request_volume():
    assert weighted_rate([(1000, 0.95), (500, 0.88)]) == pytest.approx(92.67, abs=0.01)


def test_weighted_average_with_zero_weight_is_zero():
    assert weighted_average([]) == 0.0
    assert weighted_average([(0, 50.0), (0, 75.0)]) == 0.0
    assert weighted_average([(-5, 50.0), (5, 10.0)]) == 10.0


def test_weighted_rate_is_identical_for_either_encoding():
    fractions = weighted_rate([(1000, 0.95), (500, 0.88)])
    percents = weighted_rate([(1000, 95), (500, 88)])

    assert fractions == pytest.approx(percents)


def test_summarize_agents_basic():
    result = summarize_agents(_agents())

    assert result["total_agents"] == 2
    assert result["active_agents"] == 2
    assert result["total_runs"] == 1500
    assert result["success_rate"] == pytest.approx(92.67, abs=0.01)
    assert result["avg_execution_time_ms"] == pytest.approx(200)
    assert result["avg_execution_time"] == pytest.approx(0.2)
    assert result["avg_confidence"] == pytest.approx(0.8)


def test_summarize_agents_counts_idle_agents_but_not_as_active():
    agents = _agents() + [
        AgentMetric(
            agent="idle",
            total_requests=0,
            success_rate=0.1,
            avg_confidence=None,
            avg_routing_time_ms=9000,
        )
    ]

    result = summarize_agents(agents)

    assert result["total_agents"] == 3
    assert result["active_agents"] == 2
    assert result["success_rate"] == pytest.approx(92.67, abs=0.01)
    assert result["avg_execution_time_ms"] == pytest.approx(200)


def test_summarize_agents_falls_back_to_confidence_for_rate():
    agents = [
        AgentMetric(agent="a", total_requests=10, success_rate=None, avg_confidence=0.5, avg_routing_time_ms=None)
    ]

    assert summarize_agents(agents)["success_rate"] == pytest.approx(50.0)


def test_summarize_agents_clamps_out_of_range_rates():
    agents = [
        AgentMetric(agent="a", total_requests=10, success_rate=150, avg_confidence=None, avg_routing_time_ms=None)
    ]

    assert summarize_agents(agents)["success_rate"] == 100.0


def test_empty_inputs_return_zero_structures():
    assert summarize_agents([]) == empty_agent_summary()
    assert compute_intelligence_metrics([])["total_queries"] == 0
    assert compute_routing_stats([])["top_agents"] == []
    assert compute_event_metrics([]) == empty_event_metrics()
    assert compute_agent_performance([]) == []


def test_compute_intelligence_metrics_basic():
    result = compute_intelligence_metrics(_agents())

    assert result["total_queries"] == 1500
    assert result["total_cost"] == pytest.approx(1.5)
    assert result["fallback_rate"] == pytest.approx(100 - result["success_rate"])
    assert result["quality_score"] == pytest.approx(result["success_rate"] / 10)


def test_fallback_rate_never_negative():
    assert fallback_rate(94.0) == pytest.approx(6.0)
    assert fallback_rate(120.0) == 0.0


def test_compute_agent_performance_normalizes_whole_batch():
    rows = compute_agent_performance(_agents())

    assert [row["success_rate"] for row in rows] == pytest.approx([95.0, 88.0])
    assert rows[0]["agent_name"] == "Api Architect"
    assert rows[0]["avg_quality_score"] == pytest.approx(9.0)
    assert rows[1]["p95_latency_ms"] == pytest.approx(600)


def test_compute_routing_stats_ranks_by_usage():
    agents = list(reversed(_agents()))

    result = compute_routing_stats(agents, top=1)

    assert result["total_decisions"] == 1500
    assert result["avg_routing_time_ms"] == pytest.approx(200)
    assert result["accuracy"] == pytest.approx(80.0)
    assert [agent["agent_id"] for agent in result["top_agents"]] == ["agent-api-architect"]


def test_percentage_shares_sum_to_hundred():
    shares = percentage_shares([1, 1, 1])

    assert shares == [33.4, 33.3, 33.3]
    assert sum(shares) == pytest.approx(100.0)
    assert percentage_shares([0, 0]) == [0.0, 0.0]


def test_compute_language_breakdown_accepts_either_count_key():
    rows = [
        {"language": "python", "pattern_count": 686},
        {"language": "typescript", "count": 287},
        {"count": 58},
    ]

    result = compute_language_breakdown(rows)

    assert [row["language"] for row in result] == ["python", "typescript", "unknown"]
    assert [row["count"] for row in result] == [686, 287, 58]
    assert sum(row["percentage"] for row in result) == pytest.approx(100.0)


def test_compute_event_metrics_basic():
    events = [
        {"type": "a", "timestamp": "2026-01-08T11:59:50Z", "data": {"durationMs": 100}},
        {"type": "a", "timestamp": "2026-01-08T11:59:30Z", "data": {"durationMs": 300}},
        {"type": "b", "timestamp": "2026-01-08T11:58:00Z", "data": {}},
    ]

    result = compute_event_metrics(events, NOW)

    assert result["total_events"] == 3
    assert result["unique_types"] == 2
    assert result["events_per_minute"] == 2
    assert result["avg_processing_time_ms"] == 200
    assert result["processing_time_percentiles_ms"]["p50"] == 200
    assert result["topic_counts"] == {"a": 2, "b": 1}


def test_compute_event_chart_orders_throughput_by_minute():
    events = [
        {"timestamp": "2026-01-08T11:59:50Z"},
        {"timestamp": "2026-01-08T11:58:10Z"},
        {"timestamp": "2026-01-08T11:59:05Z"},
        {"timestamp": "not a timestamp"},
    ]

    result = compute_event_chart(events, NOW)

    assert result["throughput"] == [
        {"time": "11:58", "value": 1},
        {"time": "11:59", "value": 2},
    ]
    assert [point["value"] for point in result["lag"]] == [10.0, 110.0, 55.0]


def test_operations_chart_sums_per_minute_and_ascends():
    rows = [
        {"period": "2026-01-08T10:01:00Z", "actionType": "tool_call", "operationsPerMinute": 4},
        {"period": "2026-01-08T10:01:00Z", "actionType": "decision", "operationsPerMinute": 6},
        {"period": "2026-01-08T10:00:00Z", "actionType": "tool_call", "operationsPerMinute": 3},
    ]

    assert operations_chart(rows) == [
        {"time": "10:00", "value": 3.0},
        {"time": "10:01", "value": 10.0},
    ]


def test_operations_status_groups_by_action_type():
    rows = [
        {"actionType": "tool_call", "operationsPerMinute": 4},
        {"actionType": "tool_call", "operationsPerMinute": 2.6},
        {"actionType": "decision", "operationsPerMinute": 0},
    ]

    result = {op["id"]: op for op in operations_status(rows)}

    assert result["tool_call"]["name"] == "Tool Call"
    assert result["tool_call"]["status"] == "running"
    assert result["tool_call"]["count"] == 7
    assert result["decision"]["status"] == "idle"


def test_quality_chart_scales_and_ascends():
    rows = [
        {"period": "2026-01-08T10:05:00Z", "avgQualityImprovement": 0.12},
        {"period": "2026-01-08T10:00:00Z", "avgQualityImprovement": 0.05},
    ]

    result = quality_chart(rows)

    assert [point["time"] for point in result] == ["10:00", "10:05"]
    assert [point["value"] for point in result] == pytest.approx([5.0, 12.0])


def test_time_ago_buckets():
    assert time_ago(NOW - timedelta(seconds=30), NOW) == "just now"
    assert time_ago(NOW - timedelta(minutes=5), NOW) == "5m ago"
    assert time_ago(NOW - timedelta(hours=3), NOW) == "3h ago"
    assert time_ago(NOW - timedelta(days=2), NOW) == "2d ago"
    assert time_ago(None, NOW) == "unknown"


def test_display_name_strips_agent_prefix():
    assert display_name("agent-api-architect") == "Api Architect"
    assert display_name("code-reviewer") == "Code Reviewer"
    assert display_name("") == "Unknown Agent"


def test_infer_category_matches_keyword_groups_in_order():
    assert infer_category("test-generator") == "quality"
    assert infer_category("agent-api-architect") == "architecture"
    assert infer_category("polymorphic-agent") == "coordination"
    assert infer_category("documentation-agent") == "documentation"
    assert infer_category("agent-frontend-developer") == "development"
    assert category_color("architecture") == "purple"
    assert category_color("unheard-of") == "blue"


def test_agent_definition_builds_registry_card():
    card = agent_definition("agent-api-architect", 120, 95.0, 0.05, 9.0, "2026-01-08T11:00:00Z")

    assert card["title"] == "Api Architect"
    assert card["category"] == "architecture"
    assert card["color"] == "purple"
    assert card["description"] == "Active agent with 120 requests"
    assert card["performance"]["efficiency"] == 95.0
    assert card["lastUpdated"] == "2026-01-08T11:00:00Z"


def test_filter_agents_by_category_and_search():
    cards = [
        agent_definition("agent-api-architect", 1, 90.0, 0.1, 8.0),
        agent_definition("test-generator", 1, 90.0, 0.1, 8.0),
        agent_definition("code-reviewer", 1, 90.0, 0.1, 8.0),
    ]

    assert [card["id"] for card in filter_agents(cards, "quality")] == ["test-generator"]
    assert len(filter_agents(cards, "all")) == 3
    assert [card["id"] for card in filter_agents(cards, search="REVIEW")] == ["code-reviewer"]
    assert filter_agents(cards, "architecture", "reviewer") == []
