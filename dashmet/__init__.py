"""dashmet - resilient metrics aggregation for agent operations dashboards."""

from .analytics import (
    compute_agent_performance,
    compute_event_metrics,
    compute_intelligence_metrics,
    compute_routing_stats,
    summarize_agents,
    weighted_average,
)
from .models import AgentMetric, Encoding, FetchOutcome, Freshness, Provenance, SourceResult
from .service import DashboardService

__all__ = [
    "AgentMetric",
    "DashboardService",
    "Encoding",
    "FetchOutcome",
    "Freshness",
    "Provenance",
    "SourceResult",
    "compute_agent_performance",
    "compute_event_metrics",
    "compute_intelligence_metrics",
    "compute_routing_stats",
    "summarize_agents",
    "weighted_average",
]

__version__ = "0.1.0"
