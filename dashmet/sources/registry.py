"""Agent registry composite."""

from typing import Any, Dict, List, Optional

from ..analytics import agent_definition, filter_agents
from ..normalize import normalize_batch, normalize_fraction
from ..parsing import agent_metrics_from_rows
from ..synthetic import agents as synthetic_agents
from .agents import AGENT_SUMMARY_PATH
from .base import DataSource, Endpoint


class AgentRegistrySource(DataSource):
    """
    Agent cards, categories, registry performance and routing.

    Agents active in the intelligence summary are preferred; the static
    registry is consulted only when that summary has no rows. ``category``
    and ``search`` filter the cards the same way on either path.
    """

    async def fetch_all(
        self,
        time_range: str = "24h",
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict:
        registry_params = {
            "category": category if category != "all" else None,
            "search": search or None,
        }
        results = await self.gather(
            agents=self.resolve(
                "registry agents",
                [
                    Endpoint(
                        AGENT_SUMMARY_PATH,
                        {"timeWindow": time_range},
                        transform=lambda rows: filter_agents(agents_from_summary(rows), category, search),
                        rows=True,
                        require_non_empty=True,
                    ),
                    Endpoint("/api/agents/agents", registry_params, rows=True),
                ],
                lambda: filter_agents(synthetic_agents.agent_definitions(self.generator), category, search),
            ),
            categories=self.resolve(
                "agent categories",
                [Endpoint("/api/agents/categories", rows=True)],
                synthetic_agents.agent_categories,
            ),
            performance=self.resolve(
                "registry performance",
                [Endpoint("/api/agents/performance")],
                lambda: synthetic_agents.registry_performance(self.generator),
            ),
            routing=self.resolve(
                "registry routing",
                [Endpoint("/api/agents/routing")],
                lambda: synthetic_agents.network_routing(self.generator),
            ),
        )
        return self.combine(results)


def agents_from_summary(rows: List[Any]) -> List[Dict]:
    """Registry cards for the agents in an intelligence summary, rates normalized per batch."""
    rows = [row for row in rows if isinstance(row, dict)]
    metrics = agent_metrics_from_rows(rows)
    rates = normalize_batch(metric.ratio for metric in metrics)
    return [
        agent_definition(
            metric.agent,
            total_runs=metric.total_requests,
            success_rate=rate,
            avg_execution_time=(metric.avg_routing_time_ms or 0.0) / 1000,
            avg_quality_score=normalize_fraction(metric.avg_confidence) * 10,
            last_used=row.get("lastSeen"),
        )
        for row, metric, rate in zip(rows, metrics, rates)
    ]
