import re
from datetime import datetime, timedelta, timezone
from random import Random

import pytest

from dashmet.parsing import parse_timestamp
from dashmet.synthetic import SyntheticGenerator, agents, patterns, platform, savings, topology

NOW = datetime(2026, 1, 8, 12, 0, tzinfo=timezone.utc)
UUID_V4 = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def _generator(seed=42):
    return SyntheticGenerator(rng=Random(seed), clock=lambda: NOW)


def _ascending(values):
    return all(earlier <= later for earlier, later in zip(values, values[1:]))


def test_uuid4_format_and_uniqueness():
    gen = _generator()

    ids = [gen.uuid4() for _ in range(1000)]

    assert len(set(ids)) == 1000
    assert all(UUID_V4.match(value) for value in ids)


def test_random_float_stays_in_range():
    gen = _generator()

    values = [gen.random_float(0.7, 0.99) for _ in range(500)]

    assert all(0.7 <= value <= 0.99 for value in values)


def test_time_series_has_exact_ascending_points():
    gen = _generator()

    series = gen.time_series(12, 10, 20, interval=timedelta(minutes=5))
    times = [parse_timestamp(point["time"]) for point in series]

    assert len(series) == 12
    assert _ascending(times)
    assert times[-1] == NOW
    assert all(10 <= point["value"] <= 20 for point in series)


def test_percentage_breakdown_sums_to_hundred():
    for seed in range(20):
        rows = _generator(seed).percentage_breakdown(["a", "b", "c", "d"])

        assert sum(row["percentage"] for row in rows) == pytest.approx(100.0, abs=0.5)


def test_savings_tiers_are_ordered_for_every_draw():
    for seed in range(200):
        metrics = savings.savings_metrics(_generator(seed))

        assert metrics["dailySavings"] <= metrics["weeklySavings"]
        assert metrics["weeklySavings"] <= metrics["monthlySavings"]
        assert metrics["monthlySavings"] <= metrics["totalSavings"]
        assert metrics["intelligenceRuns"] >= 0
        assert metrics["baselineRuns"] >= 0


def test_savings_time_series_is_daily_and_ascending():
    series = savings.savings_time_series(_generator(), days=30)
    dates = [point["date"] for point in series]

    assert len(series) == 30
    assert _ascending(dates)
    assert dates[-1] == NOW.date().isoformat()
    assert len(set(dates)) == 30


def test_seeded_generators_reproduce_datasets():
    first = savings.agent_comparisons(_generator(7))
    second = savings.agent_comparisons(_generator(7))

    assert first == second


def test_agent_summary_is_consistent():
    for seed in range(50):
        summary = agents.agent_summary(_generator(seed))

        assert 0 < summary["active_agents"] <= summary["total_agents"]
        assert 0 <= summary["success_rate"] <= 100
        assert summary["avg_execution_time"] == pytest.approx(summary["avg_execution_time_ms"] / 1000)


def test_routing_stats_totals_match_breakdown():
    stats = agents.routing_stats(_generator())

    assert stats["total_decisions"] == sum(stats["strategy_breakdown"].values())
    usages = [agent["usage"] for agent in stats["top_agents"]]
    assert usages == sorted(usages, reverse=True)


def test_operations_rows_are_newest_first():
    rows = agents.operations_per_minute(_generator(), points=5)
    periods = [parse_timestamp(row["period"]) for row in rows]

    assert periods == sorted(periods, reverse=True)


def test_pattern_trends_ascend():
    gen = _generator()

    for rows in (patterns.pattern_trends(gen), patterns.quality_trends(gen)):
        assert len(rows) == 20
        assert _ascending([parse_timestamp(row["period"]) for row in rows])


def test_language_breakdown_sums_to_hundred():
    rows = patterns.language_breakdown(_generator())

    assert sum(row["percentage"] for row in rows) == pytest.approx(100.0)


def test_pattern_list_respects_limit():
    assert len(patterns.pattern_list(_generator(), limit=5)) == 5
    assert len(patterns.pattern_list(_generator(), limit=50)) == 20


def test_incidents_resolve_after_they_start():
    for seed in range(20):
        resolved = [row for row in platform.incidents(_generator(seed)) if row["status"] == "resolved"]

        for incident in resolved:
            assert parse_timestamp(incident["endTime"]) > parse_timestamp(incident["startTime"])


def test_system_status_overall_reflects_services():
    for seed in range(30):
        status = platform.system_status(_generator(seed))
        service_states = {service["status"] for service in status["services"]}

        if "critical" in service_states:
            assert status["overall"] == "critical"
        elif "degraded" in service_states:
            assert status["overall"] == "degraded"
        else:
            assert status["overall"] == "healthy"


def test_knowledge_graph_edges_reference_existing_nodes():
    for seed in range(20):
        graph = topology.knowledge_graph(_generator(seed))
        node_ids = {node["id"] for node in graph["nodes"]}

        assert graph["edges"]
        for edge in graph["edges"]:
            assert edge["source"] in node_ids
            assert edge["target"] in node_ids


def test_architecture_summary_matches_topology():
    gen = _generator()
    nodes = topology.architecture_nodes(gen)
    edges = topology.architecture_edges(gen)
    summary = topology.architecture_summary(gen)
    node_ids = {node["id"] for node in nodes}

    assert summary["totalNodes"] == len(nodes)
    assert summary["totalEdges"] == len(edges)
    assert summary["services"] == sum(1 for node in nodes if node["type"] == "service")
    assert all(edge["source"] in node_ids and edge["target"] in node_ids for edge in edges)


def test_compliance_breakdown_is_consistent():
    for seed in range(20):
        report = topology.compliance(_generator(seed))
        summary = report["summary"]
        breakdown = report["statusBreakdown"]

        assert sum(row["percentage"] for row in breakdown) == pytest.approx(100.0)
        assert summary["totalFiles"] == sum(row["count"] for row in breakdown)
        assert summary["compliantFiles"] + summary["nonCompliantFiles"] + summary["pendingFiles"] == summary[
            "totalFiles"
        ]


def test_events_are_newest_first_with_durations():
    events = topology.events(_generator(), limit=10)
    stamps = [parse_timestamp(event["timestamp"]) for event in events]

    assert len(events) == 10
    assert stamps == sorted(stamps, reverse=True)
    assert all(event["data"]["durationMs"] > 0 for event in events)


def test_code_analysis_has_files():
    analysis = topology.code_analysis(_generator())

    assert analysis["files_analyzed"] > 0
    assert len(analysis["quality_trend"]) == 10


def test_agent_registry_fallbacks_are_consistent():
    gen = _generator()

    cards = agents.agent_definitions(gen)
    performance = agents.registry_performance(gen)

    assert len({card["id"] for card in cards}) == len(cards)
    assert all(card["category"] in agents.agent_categories() for card in cards)
    assert all(0 <= card["performance"]["successRate"] <= 100 for card in cards)
    assert performance["totalAgents"] == len(cards)
    assert len(performance["topAgents"]) == 3
    assert 0 <= performance["avgSuccessRate"] <= 100


def test_developer_tool_fallbacks():
    gen = _generator()

    activity = platform.developer_activity(gen)
    usage = platform.tool_usage(gen)
    history = platform.query_history(gen, limit=4)

    assert activity["totalQueries"] > 0
    assert [tool["usage"] for tool in activity["topTools"]] == sorted(
        (tool["usage"] for tool in activity["topTools"]), reverse=True
    )
    assert [row["usageCount"] for row in usage] == sorted((row["usageCount"] for row in usage), reverse=True)
    assert len(history) == 4
    assert all(UUID_V4.match(row["id"]) for row in history)
