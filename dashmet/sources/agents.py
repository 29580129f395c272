"""Agent management, operations, analytics and network composites."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..analytics import (
    compute_agent_performance,
    compute_intelligence_metrics,
    compute_routing_stats,
    operations_chart,
    operations_status,
    quality_chart,
    summarize_agents,
    time_ago,
)
from ..normalize import normalize_batch, normalize_fraction
from ..parsing import agent_metrics_from_rows, as_count, as_float, pick
from ..synthetic import agents as synthetic_agents
from ..synthetic import platform as synthetic_platform
from ..synthetic import savings as synthetic_savings
from ..synthetic import iso
from ..validation import AGENT_REGISTRY_SUMMARY_SCHEMA, SAVINGS_METRICS_SCHEMA
from .base import DataSource, Endpoint, object_payload

AGENT_SUMMARY_PATH = "/api/intelligence/agents/summary"
RECENT_ACTIONS_PATH = "/api/intelligence/actions/recent"
EXECUTIONS_PATH = "/api/agents/executions"


class AgentManagementSource(DataSource):
    """Agent summary, routing statistics, recent executions and routing decisions."""

    async def fetch_all(self, time_range: str = "24h", limit: int = 10) -> Dict:
        results = await self.gather(
            summary=self.fetch_summary(time_range),
            routing_stats=self.fetch_routing_stats(time_range),
            recent_executions=self.fetch_recent_executions(time_range, limit),
            recent_decisions=self.fetch_recent_decisions(limit),
        )
        return self.combine(results)

    async def fetch_summary(self, time_range: str):
        return await self.resolve(
            "agent summary",
            [
                Endpoint(
                    AGENT_SUMMARY_PATH,
                    {"timeWindow": time_range},
                    transform=_summary_from_rows,
                    rows=True,
                ),
                Endpoint(
                    "/api/agents/summary",
                    {"timeRange": time_range},
                    schema=AGENT_REGISTRY_SUMMARY_SCHEMA,
                    transform=registry_summary,
                ),
            ],
            lambda: synthetic_agents.agent_summary(self.generator),
        )

    async def fetch_routing_stats(self, time_range: str):
        return await self.resolve(
            "routing stats",
            [
                Endpoint("/api/agents/routing/stats", {"timeRange": time_range}, transform=routing_stats),
                Endpoint(
                    AGENT_SUMMARY_PATH,
                    {"timeWindow": time_range},
                    transform=lambda rows: compute_routing_stats(agent_metrics_from_rows(rows)),
                    rows=True,
                    require_non_empty=True,
                ),
            ],
            lambda: synthetic_agents.routing_stats(self.generator),
        )

    async def fetch_recent_executions(self, time_range: str, limit: int = 10):
        now = self.now()
        return await self.resolve(
            "recent executions",
            [
                Endpoint(
                    EXECUTIONS_PATH,
                    {"timeRange": time_range, "limit": limit},
                    rows=True,
                    require_non_empty=True,
                ),
                Endpoint(
                    RECENT_ACTIONS_PATH,
                    {"limit": limit},
                    transform=lambda rows: [execution_from_action(row, now) for row in rows],
                    rows=True,
                ),
            ],
            lambda: synthetic_agents.executions(self.generator, limit),
        )

    async def fetch_recent_decisions(self, limit: int = 10):
        return await self.resolve(
            "recent decisions",
            [Endpoint("/api/intelligence/routing/decisions", {"limit": limit}, rows=True)],
            lambda: synthetic_agents.routing_decisions(self.generator, limit),
        )


class AgentOperationsSource(DataSource):
    """Live operations view: summary, actions, health and per-minute charts."""

    async def fetch_all(self, time_range: str = "24h", limit: int = 100) -> Dict:
        window = {"timeWindow": time_range}
        results = await self.gather(
            summary=self.resolve(
                "agent summary",
                [Endpoint(AGENT_SUMMARY_PATH, window, transform=_summary_from_rows, rows=True)],
                lambda: synthetic_agents.agent_summary(self.generator),
            ),
            recent_actions=self.resolve(
                "recent actions",
                [Endpoint(RECENT_ACTIONS_PATH, {"limit": limit, "timeWindow": time_range}, rows=True)],
                lambda: synthetic_agents.recent_actions(self.generator),
            ),
            health=self.resolve(
                "intelligence health",
                [Endpoint("/api/intelligence/health", transform=object_payload)],
                lambda: synthetic_platform.intelligence_health(self.generator),
            ),
            operations_per_minute=self.resolve(
                "operations per minute",
                [Endpoint("/api/intelligence/metrics/operations-per-minute", window, rows=True)],
                lambda: synthetic_agents.operations_per_minute(self.generator),
            ),
            quality_impact=self.resolve(
                "quality impact",
                [Endpoint("/api/intelligence/metrics/quality-impact", window, rows=True)],
                lambda: synthetic_agents.quality_impact(self.generator),
            ),
        )

        operations_rows = [row for row in results["operations_per_minute"].data or [] if isinstance(row, dict)]
        quality_rows = [row for row in results["quality_impact"].data or [] if isinstance(row, dict)]
        operations = operations_status(operations_rows)
        improvements = [as_float(row.get("avgQualityImprovement")) or 0.0 for row in quality_rows]
        return self.combine(
            results,
            chart_data=operations_chart(operations_rows),
            quality_chart_data=quality_chart(quality_rows),
            operations=operations,
            total_operations=len(operations),
            running_operations=sum(1 for op in operations if op["status"] == "running"),
            total_ops_per_minute=sum(as_float(row.get("operationsPerMinute")) or 0.0 for row in operations_rows),
            avg_quality_improvement=sum(improvements) / len(improvements) if improvements else 0.0,
        )


class IntelligenceAnalyticsSource(DataSource):
    """Intelligence metrics, recent activity, per-agent performance and savings."""

    async def fetch_all(self, time_range: str = "24h", limit: int = 5) -> Dict:
        window = {"timeWindow": time_range}
        now = self.now()
        results = await self.gather(
            metrics=self.resolve(
                "intelligence metrics",
                [
                    Endpoint(
                        AGENT_SUMMARY_PATH,
                        window,
                        transform=lambda rows: compute_intelligence_metrics(agent_metrics_from_rows(rows)),
                        rows=True,
                    )
                ],
                lambda: synthetic_agents.intelligence_metrics(self.generator),
            ),
            recent_activity=self.resolve(
                "recent activity",
                [
                    Endpoint(
                        RECENT_ACTIONS_PATH,
                        {"limit": limit},
                        transform=lambda rows: [activity_from_action(row, now) for row in rows],
                        rows=True,
                        require_non_empty=True,
                    ),
                    Endpoint(
                        EXECUTIONS_PATH,
                        {"limit": limit},
                        transform=lambda rows: [activity_from_execution(row, now) for row in rows],
                        rows=True,
                    ),
                ],
                lambda: synthetic_agents.recent_activity(self.generator, limit),
            ),
            agent_performance=self.resolve(
                "agent performance",
                [
                    Endpoint(
                        AGENT_SUMMARY_PATH,
                        window,
                        transform=lambda rows: compute_agent_performance(agent_metrics_from_rows(rows)),
                        rows=True,
                    )
                ],
                lambda: synthetic_agents.agent_performance(self.generator),
            ),
            savings=self.resolve(
                "savings metrics",
                [Endpoint("/api/savings/metrics", {"timeRange": time_range}, schema=SAVINGS_METRICS_SCHEMA)],
                lambda: synthetic_savings.savings_metrics(self.generator),
            ),
        )
        return self.combine(results)


class AgentNetworkSource(DataSource):
    """Agent nodes and the routing links between them."""

    async def fetch_all(self, time_range: str = "24h") -> Dict:
        results = await self.gather(
            agents=self.resolve(
                "network agents",
                [Endpoint("/api/agents/agents", rows=True)],
                lambda: synthetic_agents.network_agents(self.generator),
            ),
            routing_decisions=self.resolve(
                "network routing",
                [Endpoint("/api/agents/routing", rows=True)],
                lambda: synthetic_agents.network_routing(self.generator),
            ),
        )
        return self.combine(results)


def registry_summary(payload: Dict) -> Dict:
    """Map the registry's camelCase summary; a registry without activity is rejected."""
    total_runs = as_count(payload.get("totalRuns"))
    active_agents = as_count(payload.get("activeAgents"))
    if total_runs == 0 and active_agents == 0:
        raise ValueError("registry summary reports no activity")

    avg_execution_time = max(0.0, as_float(payload.get("avgExecutionTime")) or 0.0)
    return {
        "total_agents": as_count(payload.get("totalAgents")),
        "active_agents": active_agents,
        "total_runs": total_runs,
        "success_rate": normalize_batch([as_float(payload.get("successRate"))])[0],
        "avg_execution_time_ms": avg_execution_time * 1000,
        "avg_execution_time": avg_execution_time,
        "avg_confidence": normalize_fraction(as_float(payload.get("avgConfidence"))),
        "total_savings": as_float(payload.get("totalSavings")) or 0.0,
    }


def routing_stats(payload: Dict) -> Dict:
    payload = object_payload(payload)
    top_agents = payload.get("topAgents") or []
    rates = normalize_batch(as_float(agent.get("successRate")) for agent in top_agents)
    return {
        "total_decisions": as_count(payload.get("totalDecisions")),
        "avg_confidence": normalize_fraction(as_float(payload.get("avgConfidence"))),
        "avg_routing_time_ms": max(0.0, as_float(payload.get("avgRoutingTime")) or 0.0),
        "accuracy": normalize_batch([as_float(payload.get("accuracy"))])[0],
        "strategy_breakdown": dict(payload.get("strategyBreakdown") or {}),
        "top_agents": [
            {
                "agent_id": agent.get("agentId") or "unknown",
                "agent_name": agent.get("agentName") or "Unknown",
                "usage": as_count(agent.get("usage")),
                "success_rate": rate,
            }
            for agent, rate in zip(top_agents, rates)
        ],
    }


def execution_from_action(action: Dict, now: Optional[datetime] = None) -> Dict:
    """Present an intelligence action row as an agent execution."""
    duration_ms = as_float(action.get("durationMs"))
    started_at = action.get("createdAt") or (iso(now) if now else None)
    return {
        "id": action.get("id") or action.get("correlationId") or "",
        "agentId": action.get("agentName") or "unknown",
        "agentName": action.get("agentName") or "Unknown Agent",
        "query": pick(action, "actionName", "actionType", default="Unknown action"),
        "status": _action_status(action),
        "startedAt": started_at,
        "completedAt": action.get("createdAt") if duration_ms else None,
        "duration": duration_ms / 1000 if duration_ms else None,
        "result": {"success": action.get("actionType") != "error", "qualityScore": 8.5},
    }


def activity_from_action(action: Dict, now: Optional[datetime] = None) -> Dict:
    return {
        "action": pick(action, "actionName", "actionType", default="Unknown action"),
        "agent": action.get("agentName") or "unknown",
        "time": time_ago(action.get("createdAt"), now),
        "status": _action_status(action),
        "timestamp": action.get("createdAt"),
    }


def activity_from_execution(execution: Dict, now: Optional[datetime] = None) -> Dict:
    return {
        "action": pick(execution, "query", "actionName", default="Task execution"),
        "agent": pick(execution, "agentName", "agentId", default="unknown"),
        "time": time_ago(execution.get("startedAt"), now),
        "status": execution.get("status"),
        "timestamp": execution.get("startedAt"),
    }


def _action_status(action: Dict) -> str:
    if action.get("actionType") == "error":
        return "failed"
    if action.get("durationMs"):
        return "completed"
    return "executing"


def _summary_from_rows(rows: List[Any]) -> Dict:
    summary = summarize_agents(agent_metrics_from_rows(rows))
    summary["total_savings"] = 0.0
    return summary
