"""Helpers that map loosely-typed JSON rows to domain models."""

import math
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from .models import AgentMetric


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string (``Z`` suffix allowed) into an aware UTC datetime."""
    if isinstance(value, datetime):
        timestamp = value
    elif isinstance(value, str) and value:
        try:
            timestamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    try:
        return timestamp.astimezone(timezone.utc)
    except OverflowError:
        return None


def as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def as_count(value: Any) -> int:
    """Coerce to a non-negative integer count; junk becomes 0."""
    number = as_float(value)
    if number is None or number < 0:
        return 0
    return int(number)


def pick(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present, truthy value among camelCase/snake_case aliases."""
    for key in keys:
        value = row.get(key)
        if value:
            return value
    return default


def as_list(payload: Any, key: Optional[str] = None) -> list:
    if isinstance(payload, list):
        return payload
    if key and isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    return []


def agent_metrics_from_rows(rows: Iterable[Any]) -> List[AgentMetric]:
    metrics = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        metrics.append(
            AgentMetric(
                agent=str(row.get("agent") or "unknown"),
                total_requests=as_count(row.get("totalRequests")),
                success_rate=as_float(row.get("successRate")),
                avg_confidence=as_float(row.get("avgConfidence")),
                avg_routing_time_ms=as_float(row.get("avgRoutingTime")),
                avg_tokens=as_float(row.get("avgTokens")),
            )
        )
    return metrics
