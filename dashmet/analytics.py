"""Pure analytics functions that work on normalized agent and event rows."""

from datetime import datetime, timezone
from math import floor
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .models import AgentMetric
from .normalize import clamp_fraction, clamp_percentage, normalize_batch
from .parsing import as_count, as_float, parse_timestamp, pick

COST_PER_QUERY = 0.001
P95_LATENCY_FACTOR = 1.5

# First matching keyword group wins; anything else is development.
CATEGORY_KEYWORDS = [
    ("quality", ("test", "qa", "quality")),
    ("architecture", ("architect", "design")),
    ("infrastructure", ("deploy", "infrastructure", "devops", "server")),
    ("coordination", ("coordinator", "workflow", "polymorphic")),
    ("documentation", ("doc", "knowledge", "book")),
]
CATEGORY_COLORS = {
    "development": "blue",
    "architecture": "purple",
    "quality": "green",
    "infrastructure": "orange",
    "coordination": "cyan",
    "documentation": "gray",
}


def weighted_average(pairs: Iterable[Tuple[float, float]]) -> float:
    """Volume-weighted mean of ``(weight, value)`` pairs; 0 when no weight is present."""
    total_weight = 0.0
    weighted_sum = 0.0
    for weight, value in pairs:
        weight = max(0.0, float(weight))
        total_weight += weight
        weighted_sum += weight * value
    if total_weight <= 0:
        return 0.0
    return weighted_sum / total_weight


def weighted_rate(records: Iterable[Tuple[float, Optional[float]]]) -> float:
    """
    Weighted success-like rate as a percentage.

    The encoding of the whole batch is detected from its first non-null
    value, every value is converted and clamped, then weighted by volume.
    """
    records_list = list(records)
    rates = normalize_batch(value for _, value in records_list)
    weights = [weight for weight, _ in records_list]
    return clamp_percentage(weighted_average(zip(weights, rates)))


def fallback_rate(success_rate: float) -> float:
    return max(0.0, 100.0 - success_rate)


def summarize_agents(agents: Sequence[AgentMetric]) -> Dict:
    """Aggregate per-agent rows into dashboard summary statistics."""
    if not agents:
        return empty_agent_summary()

    total_runs = sum(agent.total_requests for agent in agents)
    active_agents = sum(1 for agent in agents if agent.total_requests > 0)
    success_rate = weighted_rate((agent.total_requests, agent.ratio) for agent in agents)
    avg_execution_time_ms = weighted_average(
        (agent.total_requests, agent.avg_routing_time_ms or 0.0) for agent in agents
    )

    return {
        "total_agents": len(agents),
        "active_agents": active_agents,
        "total_runs": total_runs,
        "success_rate": success_rate,
        "avg_execution_time_ms": avg_execution_time_ms,
        "avg_execution_time": avg_execution_time_ms / 1000,
        "avg_confidence": _weighted_confidence(agents),
    }


def compute_intelligence_metrics(agents: Sequence[AgentMetric]) -> Dict:
    if not agents:
        return empty_intelligence_metrics()

    summary = summarize_agents(agents)
    success_rate = summary["success_rate"]
    total_queries = summary["total_runs"]
    return {
        "total_queries": total_queries,
        "avg_response_time_ms": summary["avg_execution_time_ms"],
        "success_rate": success_rate,
        "fallback_rate": fallback_rate(success_rate),
        "cost_per_query": COST_PER_QUERY,
        "total_cost": total_queries * COST_PER_QUERY,
        "quality_score": success_rate / 10,
        "user_satisfaction": success_rate / 10,
    }


def compute_agent_performance(agents: Sequence[AgentMetric]) -> List[Dict]:
    """Per-agent rows; one encoding is detected for the whole batch."""
    success_rates = normalize_batch(agent.ratio for agent in agents)
    confidences = normalize_batch(agent.avg_confidence for agent in agents)

    rows = []
    for agent, success_rate, confidence in zip(agents, success_rates, confidences):
        avg_response_time = agent.avg_routing_time_ms or 0.0
        rows.append(
            {
                "agent_id": agent.agent,
                "agent_name": display_name(agent.agent),
                "total_runs": agent.total_requests,
                "avg_response_time_ms": avg_response_time,
                "success_rate": success_rate,
                "efficiency": success_rate,
                "avg_quality_score": confidence / 10,
                "popularity": agent.total_requests,
                "cost_per_success": COST_PER_QUERY * (agent.avg_tokens or 1000) / 1000,
                "p95_latency_ms": avg_response_time * P95_LATENCY_FACTOR,
            }
        )
    return rows


def compute_routing_stats(agents: Sequence[AgentMetric], top: int = 5) -> Dict:
    if not agents:
        return empty_routing_stats()

    avg_confidence = _weighted_confidence(agents)
    success_rates = normalize_batch(agent.ratio for agent in agents)
    ranked = sorted(
        zip(agents, success_rates),
        key=lambda pair: pair[0].total_requests,
        reverse=True,
    )

    return {
        "total_decisions": sum(agent.total_requests for agent in agents),
        "avg_confidence": avg_confidence,
        "avg_routing_time_ms": weighted_average(
            (agent.total_requests, agent.avg_routing_time_ms or 0.0) for agent in agents
        ),
        "accuracy": clamp_percentage(avg_confidence * 100),
        "strategy_breakdown": {},
        "top_agents": [
            {
                "agent_id": agent.agent,
                "agent_name": display_name(agent.agent),
                "usage": agent.total_requests,
                "success_rate": success_rate,
            }
            for agent, success_rate in ranked[:top]
        ],
    }


def percentage_shares(counts: Sequence[float], decimals: int = 1) -> List[float]:
    """
    Split 100 across ``counts`` proportionally.

    Uses largest-remainder rounding so the rounded shares add up to exactly
    100. All-zero input yields all-zero shares.
    """
    positive = [max(0.0, float(count)) for count in counts]
    total = sum(positive)
    if total <= 0:
        return [0.0 for _ in positive]

    scale = 10 ** decimals
    raw = [count / total * 100 * scale for count in positive]
    units = [floor(value) for value in raw]
    missing = int(round(100 * scale - sum(units)))
    by_remainder = sorted(range(len(raw)), key=lambda i: raw[i] - units[i], reverse=True)
    for index in by_remainder[:missing]:
        units[index] += 1
    return [unit / scale for unit in units]


def compute_language_breakdown(rows: Iterable[Any]) -> List[Dict]:
    entries = [row for row in rows if isinstance(row, dict)]
    counts = [as_count(pick(row, "pattern_count", "count", default=0)) for row in entries]
    shares = percentage_shares(counts)
    return [
        {
            "language": row.get("language") or "unknown",
            "count": count,
            "percentage": share,
        }
        for row, count, share in zip(entries, counts, shares)
    ]


def compute_event_metrics(events: Sequence[Dict], now: Optional[datetime] = None) -> Dict:
    """Compute throughput and processing-time metrics from raw events."""
    if not events:
        return empty_event_metrics()

    now = now or datetime.now(timezone.utc)
    type_counts: Dict[str, int] = {}
    durations = []
    recent = 0
    for event in events:
        event_type = str(event.get("type") or "unknown")
        type_counts[event_type] = type_counts.get(event_type, 0) + 1

        data = event.get("data")
        duration = as_float(data.get("durationMs")) if isinstance(data, dict) else None
        if duration is not None and duration > 0:
            durations.append(duration)

        timestamp = parse_timestamp(event.get("timestamp"))
        if timestamp is not None and 0 <= (now - timestamp).total_seconds() < 60:
            recent += 1

    return {
        "total_events": len(events),
        "unique_types": len(type_counts),
        "events_per_minute": recent,
        "avg_processing_time_ms": round(sum(durations) / len(durations)) if durations else 0,
        "processing_time_percentiles_ms": _compute_percentiles(durations),
        "topic_counts": type_counts,
    }


def compute_event_chart(events: Sequence[Dict], now: Optional[datetime] = None, points: int = 20) -> Dict:
    """Per-minute throughput (ascending) and lag of the last ``points`` events."""
    now = now or datetime.now(timezone.utc)
    minute_counts: Dict[datetime, int] = {}
    lag = []
    for event in events:
        timestamp = parse_timestamp(event.get("timestamp"))
        if timestamp is None:
            continue
        minute = timestamp.replace(second=0, microsecond=0)
        minute_counts[minute] = minute_counts.get(minute, 0) + 1
        lag.append(
            {
                "time": timestamp.isoformat(),
                "value": max(0.0, (now - timestamp).total_seconds()),
            }
        )

    throughput = [
        {"time": minute.strftime("%H:%M"), "value": count}
        for minute, count in sorted(minute_counts.items())
    ]
    return {"throughput": throughput[-points:], "lag": lag[-points:]}


def operations_chart(rows: Sequence[Dict]) -> List[Dict]:
    """Sum operations per minute per period; input is newest-first, output ascending."""
    totals: Dict[str, float] = {}
    for row in rows:
        label = _period_label(row.get("period"))
        totals[label] = totals.get(label, 0.0) + (as_float(row.get("operationsPerMinute")) or 0.0)
    return [{"time": label, "value": value} for label, value in reversed(list(totals.items()))]


def quality_chart(rows: Sequence[Dict]) -> List[Dict]:
    points = [
        {
            "time": _period_label(row.get("period")),
            "value": (as_float(row.get("avgQualityImprovement")) or 0.0) * 100,
        }
        for row in rows
    ]
    points.reverse()
    return points


def operations_status(rows: Sequence[Dict]) -> List[Dict]:
    grouped: Dict[str, Dict] = {}
    for row in rows:
        action_type = str(row.get("actionType") or "")
        if action_type not in grouped:
            grouped[action_type] = {
                "name": action_type.replace("_", " ").title(),
                "count": 0,
                "total_ops": 0.0,
            }
        grouped[action_type]["count"] += 1
        grouped[action_type]["total_ops"] += as_float(row.get("operationsPerMinute")) or 0.0

    return [
        {
            "id": action_type,
            "name": group["name"],
            "status": "running" if group["total_ops"] > 0 else "idle",
            "count": round(group["total_ops"]),
            "avg_time": "N/A",
        }
        for action_type, group in grouped.items()
    ]


def time_ago(value: Any, now: Optional[datetime] = None) -> str:
    """Render a timestamp as ``just now``, ``5m ago``, ``3h ago`` or ``2d ago``."""
    timestamp = parse_timestamp(value)
    if timestamp is None:
        return "unknown"
    now = now or datetime.now(timezone.utc)
    minutes = int((now - timestamp).total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def display_name(agent_id: str) -> str:
    if not agent_id:
        return "Unknown Agent"
    name = agent_id[len("agent-"):] if agent_id.startswith("agent-") else agent_id
    return name.replace("-", " ").title()


def infer_category(agent_id: str) -> str:
    name = (agent_id or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return "development"


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, "blue")


def agent_definition(
    agent_id: str,
    total_runs: int,
    success_rate: float,
    avg_execution_time: float,
    avg_quality_score: float,
    last_used: Optional[str] = None,
) -> Dict:
    """Registry card for an active agent, keyed like the registry API's rows."""
    category = infer_category(agent_id)
    return {
        "id": agent_id or "unknown",
        "name": agent_id or "Unknown Agent",
        "title": display_name(agent_id),
        "description": f"Active agent with {total_runs} requests",
        "category": category,
        "status": "active",
        "color": category_color(category),
        "performance": {
            "totalRuns": total_runs,
            "successRate": success_rate,
            "avgExecutionTime": avg_execution_time,
            "avgQualityScore": avg_quality_score,
            "lastUsed": last_used,
            "popularity": total_runs,
            "efficiency": success_rate,
        },
        "lastUpdated": last_used,
    }


def filter_agents(agents: Iterable[Dict], category: Optional[str] = None, search: Optional[str] = None) -> List[Dict]:
    """Keep agents in ``category`` ("all" matches every one) whose name, title or description contains ``search``."""
    selected = []
    needle = (search or "").lower()
    for agent in agents:
        if category and category != "all" and agent.get("category") != category:
            continue
        if needle and not any(
            needle in str(agent.get(key) or "").lower() for key in ("name", "title", "description")
        ):
            continue
        selected.append(agent)
    return selected


def empty_agent_summary() -> Dict:
    """Return empty agent summary structure."""
    return {
        "total_agents": 0,
        "active_agents": 0,
        "total_runs": 0,
        "success_rate": 0.0,
        "avg_execution_time_ms": 0.0,
        "avg_execution_time": 0.0,
        "avg_confidence": 0.0,
    }


def empty_intelligence_metrics() -> Dict:
    """Return empty intelligence metrics structure."""
    return {
        "total_queries": 0,
        "avg_response_time_ms": 0.0,
        "success_rate": 0.0,
        "fallback_rate": 0.0,
        "cost_per_query": COST_PER_QUERY,
        "total_cost": 0.0,
        "quality_score": 0.0,
        "user_satisfaction": 0.0,
    }


def empty_routing_stats() -> Dict:
    """Return empty routing stats structure."""
    return {
        "total_decisions": 0,
        "avg_confidence": 0.0,
        "avg_routing_time_ms": 0.0,
        "accuracy": 0.0,
        "strategy_breakdown": {},
        "top_agents": [],
    }


def empty_event_metrics() -> Dict:
    """Return empty event metrics structure."""
    return {
        "total_events": 0,
        "unique_types": 0,
        "events_per_minute": 0,
        "avg_processing_time_ms": 0,
        "processing_time_percentiles_ms": _empty_percentiles(),
        "topic_counts": {},
    }


def _weighted_confidence(agents: Sequence[AgentMetric]) -> float:
    confidences = normalize_batch(agent.avg_confidence for agent in agents)
    weights = [agent.total_requests for agent in agents]
    return clamp_fraction(weighted_average(zip(weights, confidences)) / 100)


def _period_label(value: Any) -> str:
    timestamp = parse_timestamp(value)
    if timestamp is None:
        return str(value or "")
    return timestamp.strftime("%H:%M")


def _compute_percentiles(values: Iterable[float]) -> Dict[str, float]:
    points = [50, 90, 95, 99]
    sorted_values = sorted(float(value) for value in values)
    if not sorted_values:
        return _empty_percentiles()

    return {f"p{point}": _percentile(sorted_values, point / 100) for point in points}


def _percentile(sorted_values: list[float], quantile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return sorted_values[0]

    position = quantile * (len(sorted_values) - 1)
    lower_index = floor(position)
    upper_index = min(lower_index + 1, len(sorted_values) - 1)
    lower_value = sorted_values[lower_index]
    upper_value = sorted_values[upper_index]
    weight = position - lower_index
    return lower_value + (upper_value - lower_value) * weight


def _empty_percentiles() -> Dict[str, float]:
    return {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
