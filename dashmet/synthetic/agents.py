"""Synthetic agent, routing and operations data."""

from datetime import timedelta
from typing import Dict, List

from ..analytics import (
    CATEGORY_COLORS,
    COST_PER_QUERY,
    P95_LATENCY_FACTOR,
    agent_definition,
    display_name,
    fallback_rate,
    weighted_average,
)
from .base import SyntheticGenerator, iso

KNOWN_AGENTS = [
    "polymorphic-agent",
    "code-reviewer",
    "test-generator",
    "documentation-agent",
    "agent-performance",
    "agent-debug-intelligence",
    "agent-frontend-developer",
    "agent-api-architect",
]
ROUTING_STRATEGIES = ["enhanced_fuzzy_matching", "exact_match", "capability_alignment", "fallback"]
ACTION_TYPES = ["tool_call", "decision", "success", "error"]
QUERIES = [
    "API optimization query",
    "Debug database connection",
    "Create React component",
    "Write unit tests",
    "Design microservices",
    "Review pull request",
]


def agent_summary(gen: SyntheticGenerator) -> Dict:
    total_agents = gen.random_int(10, 20)
    avg_execution_time_ms = gen.random_float(800, 1600)
    return {
        "total_agents": total_agents,
        "active_agents": gen.random_int(max(1, total_agents - 5), total_agents),
        "total_runs": gen.random_int(900, 1500),
        "success_rate": gen.random_float(88, 97, 1),
        "avg_execution_time_ms": avg_execution_time_ms,
        "avg_execution_time": avg_execution_time_ms / 1000,
        "avg_confidence": gen.random_float(0.85, 0.97),
        "total_savings": gen.random_int(40000, 50000),
    }


def routing_stats(gen: SyntheticGenerator, top: int = 5) -> Dict:
    breakdown = {strategy: gen.random_int(500, 10000) for strategy in ROUTING_STRATEGIES}
    avg_confidence = gen.random_float(0.85, 0.97, 3)
    agents = gen.random_items(KNOWN_AGENTS, top)
    usages = sorted((gen.random_int(50, 500) for _ in agents), reverse=True)
    return {
        "total_decisions": sum(breakdown.values()),
        "avg_confidence": avg_confidence,
        "avg_routing_time_ms": gen.random_float(30, 80),
        "accuracy": round(avg_confidence * 100, 1),
        "strategy_breakdown": breakdown,
        "top_agents": [
            {
                "agent_id": agent,
                "agent_name": display_name(agent),
                "usage": usage,
                "success_rate": gen.random_float(85, 98, 1),
            }
            for agent, usage in zip(agents, usages)
        ],
    }


def executions(gen: SyntheticGenerator, limit: int = 10) -> List[Dict]:
    rows = []
    for offset in range(limit):
        agent = gen.random_item(KNOWN_AGENTS)
        started = gen.now() - timedelta(minutes=3 * offset + gen.random_int(0, 2))
        status = gen.random_item(["completed", "completed", "completed", "executing", "failed"])
        duration = gen.random_float(0.5, 6.0) if status != "executing" else None
        rows.append(
            {
                "id": gen.uuid4(),
                "agentId": agent,
                "agentName": display_name(agent),
                "query": gen.random_item(QUERIES),
                "status": status,
                "startedAt": iso(started),
                "completedAt": iso(started + timedelta(seconds=duration)) if duration else None,
                "duration": duration,
                "result": {
                    "success": status == "completed",
                    "qualityScore": gen.random_float(7.0, 9.8, 1),
                },
            }
        )
    return rows


def routing_decisions(gen: SyntheticGenerator, limit: int = 10) -> List[Dict]:
    rows = []
    for offset in range(limit):
        selected, alternative = gen.random_items(KNOWN_AGENTS, 2)
        confidence = gen.random_float(0.7, 0.99)
        rows.append(
            {
                "id": gen.uuid4(),
                "correlationId": gen.uuid4(),
                "userRequest": gen.random_item(QUERIES),
                "selectedAgent": selected,
                "confidenceScore": confidence,
                "routingStrategy": gen.random_item(ROUTING_STRATEGIES),
                "alternatives": [
                    {"agent": alternative, "confidence": round(confidence * gen.random_float(0.5, 0.95), 2)}
                ],
                "routingTimeMs": gen.random_int(20, 90),
                "createdAt": iso(gen.now() - timedelta(minutes=2 * offset)),
            }
        )
    return rows


def intelligence_metrics(gen: SyntheticGenerator) -> Dict:
    success_rate = gen.random_float(88, 97, 1)
    total_queries = gen.random_int(10000, 20000)
    cost_per_query = gen.random_float(0.0008, 0.0015, 4)
    return {
        "total_queries": total_queries,
        "avg_response_time_ms": gen.random_float(900, 1500),
        "success_rate": success_rate,
        "fallback_rate": fallback_rate(success_rate),
        "cost_per_query": cost_per_query,
        "total_cost": round(total_queries * cost_per_query, 2),
        "quality_score": round(success_rate / 10, 2),
        "user_satisfaction": round(success_rate / 10, 2),
    }


def agent_performance(gen: SyntheticGenerator, count: int = 3) -> List[Dict]:
    rows = []
    for agent in gen.random_items(KNOWN_AGENTS, count):
        success_rate = gen.random_float(85, 97, 1)
        avg_response_time = gen.random_float(800, 3500)
        runs = gen.random_int(100, 500)
        rows.append(
            {
                "agent_id": agent,
                "agent_name": display_name(agent),
                "total_runs": runs,
                "avg_response_time_ms": avg_response_time,
                "success_rate": success_rate,
                "efficiency": success_rate,
                "avg_quality_score": gen.random_float(8.0, 9.5, 1),
                "popularity": runs,
                "cost_per_success": COST_PER_QUERY * gen.random_int(800, 3000) / 1000,
                "p95_latency_ms": avg_response_time * P95_LATENCY_FACTOR,
            }
        )
    return rows


def recent_activity(gen: SyntheticGenerator, limit: int = 5) -> List[Dict]:
    rows = []
    for offset in range(limit):
        minutes_ago = 3 * offset + 2
        rows.append(
            {
                "action": gen.random_item(QUERIES),
                "agent": gen.random_item(KNOWN_AGENTS),
                "time": f"{minutes_ago}m ago",
                "status": gen.random_item(["completed", "completed", "executing"]),
                "timestamp": iso(gen.now() - timedelta(minutes=minutes_ago)),
            }
        )
    return rows


def recent_actions(gen: SyntheticGenerator, limit: int = 20) -> List[Dict]:
    """Rows shaped like the intelligence actions feed, newest first."""
    rows = []
    for offset in range(limit):
        action_type = gen.random_item(ACTION_TYPES)
        rows.append(
            {
                "id": gen.uuid4(),
                "correlationId": gen.uuid4(),
                "agentName": gen.random_item(KNOWN_AGENTS),
                "actionType": action_type,
                "actionName": gen.random_item(QUERIES),
                "durationMs": gen.random_int(50, 3000) if action_type != "decision" else None,
                "createdAt": iso(gen.now() - timedelta(seconds=30 * offset)),
            }
        )
    return rows


def operations_per_minute(gen: SyntheticGenerator, points: int = 20) -> List[Dict]:
    """Raw backend rows, newest first like the live endpoint."""
    rows = []
    for offset in range(points):
        period = iso(gen.now() - timedelta(minutes=offset))
        for action_type in ACTION_TYPES:
            rows.append(
                {
                    "period": period,
                    "actionType": action_type,
                    "operationsPerMinute": gen.random_int(0, 40),
                }
            )
    return rows


def quality_impact(gen: SyntheticGenerator, points: int = 20) -> List[Dict]:
    return [
        {
            "period": iso(gen.now() - timedelta(minutes=5 * offset)),
            "avgQualityImprovement": gen.random_float(0.02, 0.15, 3),
        }
        for offset in range(points)
    ]


def network_agents(gen: SyntheticGenerator) -> List[Dict]:
    categories = ["Code Generation", "Review", "Testing", "Docs", "Performance"]
    return [
        {"id": agent, "name": display_name(agent), "category": gen.random_item(categories)}
        for agent in KNOWN_AGENTS
    ]


def network_routing(gen: SyntheticGenerator, count: int = 10) -> List[Dict]:
    rows = []
    for _ in range(count):
        source, target = gen.random_items(KNOWN_AGENTS, 2)
        rows.append(
            {
                "fromAgent": source,
                "toAgent": target,
                "confidence": gen.random_float(0.6, 0.99),
                "reason": gen.random_item(ROUTING_STRATEGIES),
            }
        )
    return rows


def agent_definitions(gen: SyntheticGenerator) -> List[Dict]:
    rows = []
    for agent in KNOWN_AGENTS:
        runs = gen.random_int(20, 800)
        rows.append(
            agent_definition(
                agent,
                total_runs=runs,
                success_rate=gen.random_float(82, 98, 1),
                avg_execution_time=gen.random_float(0.03, 0.12, 3),
                avg_quality_score=gen.random_float(7.5, 9.7, 1),
                last_used=gen.past_timestamp(240),
            )
        )
    return rows


def agent_categories() -> List[str]:
    return list(CATEGORY_COLORS)


def registry_performance(gen: SyntheticGenerator, top: int = 3) -> Dict:
    """Registry-wide totals consistent with a generated set of agent cards."""
    agents = agent_definitions(gen)
    runs = [agent["performance"]["totalRuns"] for agent in agents]
    ranked = sorted(agents, key=lambda agent: agent["performance"]["totalRuns"], reverse=True)
    return {
        "totalAgents": len(agents),
        "totalRuns": sum(runs),
        "avgSuccessRate": round(
            weighted_average(
                (agent["performance"]["totalRuns"], agent["performance"]["successRate"]) for agent in agents
            ),
            1,
        ),
        "topAgents": [agent["id"] for agent in ranked[:top]],
    }
