"""Synthetic platform health and monitoring data."""

from datetime import timedelta
from typing import Dict, List

from .base import SyntheticGenerator, iso

SERVICES = [
    ("API Gateway", []),
    ("Agent Service", ["PostgreSQL"]),
    ("PostgreSQL", []),
    ("Qdrant", []),
    ("Intelligence Service", ["PostgreSQL", "Qdrant"]),
    ("Event Stream", []),
]


def platform_health(gen: SyntheticGenerator) -> Dict:
    return {
        "status": "healthy",
        "uptime": gen.random_float(99.5, 99.99),
        "services": [
            {"name": name, "status": "up", "latency": gen.random_int(5, 200)}
            for name, _ in SERVICES
        ],
    }


def platform_services(gen: SyntheticGenerator) -> Dict:
    services = []
    for name, _ in SERVICES:
        status = gen.health_status()
        services.append({"name": name, "status": status, "health": "down" if status == "down" else "up"})
    return {"services": services}


def intelligence_health(gen: SyntheticGenerator) -> Dict:
    return {
        "status": "healthy",
        "services": [
            {"name": name, "status": "up", "latency": gen.random_int(5, 80)}
            for name in ("PostgreSQL", "Intelligence Service", "Qdrant")
        ],
    }


def system_status(gen: SyntheticGenerator) -> Dict:
    now = gen.now()
    services = []
    for name, dependencies in SERVICES:
        status = gen.health_status()
        services.append(
            {
                "name": name,
                "status": "critical" if status == "down" else status,
                "uptime": gen.random_float(99.0, 99.99),
                "responseTime": gen.random_int(5, 250),
                "lastCheck": iso(now),
                "dependencies": list(dependencies),
            }
        )
    statuses = {service["status"] for service in services}
    if "critical" in statuses:
        overall = "critical"
    elif "degraded" in statuses:
        overall = "degraded"
    else:
        overall = "healthy"
    return {
        "overall": overall,
        "services": services,
        "uptime": min(service["uptime"] for service in services),
        "lastIncident": iso(now - timedelta(hours=gen.random_int(12, 72))),
        "responseTime": round(sum(service["responseTime"] for service in services) / len(services)),
    }


def developer_metrics(gen: SyntheticGenerator) -> Dict:
    total = gen.random_int(15, 30)
    return {
        "totalDevelopers": total,
        "activeDevelopers": gen.random_int(max(1, total - 8), total),
        "avgCommitsPerDay": gen.random_float(8, 16, 1),
        "avgPullRequestsPerDay": gen.random_float(2, 6, 1),
        "avgCodeReviewTime": gen.random_float(2, 8, 1),
        "avgDeploymentTime": gen.random_int(8, 25),
        "codeQualityScore": gen.random_int(75, 95),
        "testCoverage": gen.random_int(65, 90),
        "bugResolutionTime": gen.random_float(1, 4, 1),
    }


def incidents(gen: SyntheticGenerator) -> List[Dict]:
    """One resolved and one open incident; the resolved one ends after it starts."""
    now = gen.now()
    resolved_start = now - timedelta(hours=gen.random_int(30, 72))
    return [
        {
            "id": gen.uuid4(),
            "title": "Database Connection Pool Exhaustion",
            "severity": "high",
            "status": "resolved",
            "affectedServices": ["PostgreSQL", "Qdrant"],
            "startTime": iso(resolved_start),
            "endTime": iso(resolved_start + timedelta(hours=gen.random_int(1, 24))),
            "description": "Connection pool reached 95% capacity during peak load",
            "assignee": "DevOps Team",
        },
        {
            "id": gen.uuid4(),
            "title": "Increased API Response Time",
            "severity": "medium",
            "status": "investigating",
            "affectedServices": ["API Gateway", "Agent Service"],
            "startTime": iso(now - timedelta(minutes=gen.random_int(10, 120))),
            "description": "p95 latency increased across multiple endpoints",
            "assignee": "Platform Team",
        },
    ]


DEVELOPER_TOOLS = [
    ("Query Assistant", "AI Tools"),
    ("Code Analysis", "Code Tools"),
    ("Event Tracing", "Debugging"),
    ("System Monitoring", "Monitoring"),
    ("Data Visualization", "Analytics"),
]
DEVELOPER_QUERIES = [
    "Why did the routing confidence drop?",
    "Show slow agent executions",
    "Which patterns are used by the API gateway?",
    "Trace the failed deployment event",
]


def developer_activity(gen: SyntheticGenerator, top: int = 3) -> Dict:
    usages = sorted((gen.random_int(80, 500) for _ in range(top)), reverse=True)
    return {
        "totalQueries": gen.random_int(800, 1600),
        "activeSessions": gen.random_int(10, 30),
        "avgResponseTime": gen.random_int(150, 350),
        "satisfactionScore": gen.random_float(7.5, 9.5, 1),
        "topTools": [
            {"name": name, "usage": usage, "satisfaction": gen.random_float(8.0, 9.5, 1)}
            for (name, _), usage in zip(DEVELOPER_TOOLS, usages)
        ],
    }


def tool_usage(gen: SyntheticGenerator) -> List[Dict]:
    """Tools by descending usage, the most used one last touched most recently."""
    now = gen.now()
    usages = sorted((gen.random_int(50, 500) for _ in DEVELOPER_TOOLS), reverse=True)
    return [
        {
            "toolName": name,
            "usageCount": usage,
            "avgRating": gen.random_float(4.0, 4.8, 1),
            "lastUsed": iso(now - timedelta(hours=offset)),
            "category": category,
        }
        for offset, ((name, category), usage) in enumerate(zip(DEVELOPER_TOOLS, usages))
    ]


def query_history(gen: SyntheticGenerator, limit: int = 10) -> List[Dict]:
    rows = []
    for offset in range(limit):
        tool, _ = gen.random_item(DEVELOPER_TOOLS)
        rows.append(
            {
                "id": gen.uuid4(),
                "query": gen.random_item(DEVELOPER_QUERIES),
                "response": f"Answered by {tool}",
                "timestamp": iso(gen.now() - timedelta(minutes=7 * offset)),
                "rating": gen.random_int(3, 5),
                "tool": tool,
            }
        )
    return rows
