"""Synthetic events, graphs, architecture topology and code intelligence data."""

from datetime import timedelta
from typing import Dict, List

from .agents import KNOWN_AGENTS
from .base import SyntheticGenerator, iso

EVENT_TYPES = {
    "throughput": "api",
    "pattern-injection": "intelligence",
    "routing-decision": "router",
    "agent-action": "agent",
    "cache-hit": "cache",
}
GRAPH_PATTERNS = [
    "OAuth Authentication",
    "Database Connection Pool",
    "Error Handling Middleware",
    "Retry With Backoff",
    "Schema Validation",
]
GRAPH_SERVICES = ["API Gateway", "Agent Service", "Intelligence Service", "Event Stream"]

ARCHITECTURE_NODES = [
    ("node-1", "API Gateway", "service"),
    ("node-2", "Agent Service", "service"),
    ("node-3", "Polymorphic Agent", "agent"),
    ("node-4", "Code Reviewer", "agent"),
    ("node-5", "PostgreSQL", "database"),
    ("node-6", "Qdrant", "database"),
    ("node-7", "Intelligence Service", "service"),
    ("node-8", "Event Stream", "service"),
]
ARCHITECTURE_EDGES = [
    ("node-1", "node-2", "routes-to"),
    ("node-2", "node-3", "delegates-to"),
    ("node-2", "node-4", "delegates-to"),
    ("node-3", "node-5", "queries"),
    ("node-3", "node-6", "queries"),
    ("node-4", "node-5", "queries"),
    ("node-7", "node-5", "queries"),
    ("node-7", "node-6", "queries"),
    ("node-7", "node-3", "injects-patterns"),
    ("node-7", "node-4", "injects-patterns"),
    ("node-8", "node-7", "streams-to"),
    ("node-1", "node-8", "publishes-to"),
]
COMPLIANCE_STATUSES = ["compliant", "non_compliant", "pending"]
NODE_TYPES = ["effect", "compute", "reducer", "orchestrator"]


def events(gen: SyntheticGenerator, limit: int = 20) -> List[Dict]:
    """Events newest first, spaced 30 seconds apart."""
    rows = []
    for offset in range(limit):
        event_type = gen.random_item(list(EVENT_TYPES))
        rows.append(
            {
                "id": gen.uuid4(),
                "timestamp": iso(gen.now() - timedelta(seconds=30 * offset)),
                "type": event_type,
                "source": EVENT_TYPES[event_type],
                "data": {
                    "agentId": gen.random_item(KNOWN_AGENTS),
                    "durationMs": gen.random_int(50, 2000),
                },
            }
        )
    return rows


def knowledge_graph(gen: SyntheticGenerator) -> Dict:
    """Pattern and service nodes; every edge joins two existing nodes."""
    nodes = [
        {"id": f"pattern-{index}", "label": label, "type": "pattern"}
        for index, label in enumerate(GRAPH_PATTERNS, start=1)
    ] + [
        {"id": f"service-{index}", "label": label, "type": "service"}
        for index, label in enumerate(GRAPH_SERVICES, start=1)
    ]
    services = [node["id"] for node in nodes if node["type"] == "service"]
    edges = []
    for node in nodes:
        if node["type"] != "pattern":
            continue
        for service in gen.random_items(services, gen.random_int(1, len(services))):
            edges.append({"source": node["id"], "target": service, "type": "used-by"})
    return {"nodes": nodes, "edges": edges}


def architecture_nodes(gen: SyntheticGenerator) -> List[Dict]:
    return [{"id": node_id, "name": name, "type": kind} for node_id, name, kind in ARCHITECTURE_NODES]


def architecture_edges(gen: SyntheticGenerator) -> List[Dict]:
    return [{"source": source, "target": target, "type": kind} for source, target, kind in ARCHITECTURE_EDGES]


def architecture_summary(gen: SyntheticGenerator) -> Dict:
    """Counts derived from the same topology the node and edge generators return."""
    return {
        "totalNodes": len(ARCHITECTURE_NODES),
        "totalEdges": len(ARCHITECTURE_EDGES),
        "services": sum(1 for _, _, kind in ARCHITECTURE_NODES if kind == "service"),
        "patterns": sum(1 for _, _, kind in ARCHITECTURE_EDGES if kind == "injects-patterns"),
    }


def knowledge_entities(gen: SyntheticGenerator, count: int = 6) -> List[Dict]:
    return [
        {"id": gen.uuid4(), "name": name, "type": "pattern"}
        for name in gen.random_items(GRAPH_PATTERNS, count)
    ]


def event_flow(gen: SyntheticGenerator, limit: int = 10) -> Dict:
    return {
        "events": [
            {"id": row["id"], "timestamp": row["timestamp"], "type": row["type"]}
            for row in events(gen, limit)
        ]
    }


def code_analysis(gen: SyntheticGenerator, points: int = 10) -> Dict:
    return {
        "files_analyzed": gen.random_int(800, 1500),
        "avg_complexity": gen.random_float(5, 9, 1),
        "code_smells": gen.random_int(10, 40),
        "security_issues": gen.random_int(0, 5),
        "complexity_trend": [
            {"timestamp": point["time"], "value": point["value"]}
            for point in gen.time_series(points, 5, 9, interval=timedelta(days=1))
        ],
        "quality_trend": [
            {"timestamp": point["time"], "value": point["value"]}
            for point in gen.time_series(points, 70, 95, interval=timedelta(days=1))
        ],
    }


def compliance(gen: SyntheticGenerator, points: int = 7) -> Dict:
    """Status counts, shares adding up to 100, and a daily trend oldest first."""
    breakdown = gen.percentage_breakdown(COMPLIANCE_STATUSES, low=5, high=120)
    counts = {row["label"]: row["count"] for row in breakdown}
    total = sum(counts.values())
    compliance_pct = next(row["percentage"] for row in breakdown if row["label"] == "compliant")

    node_types = []
    for node_type in NODE_TYPES:
        node_total = gen.random_int(10, 60)
        compliant = gen.random_int(0, node_total)
        node_types.append(
            {
                "nodeType": node_type,
                "compliantCount": compliant,
                "totalCount": node_total,
                "percentage": round(compliant / node_total * 100, 1),
            }
        )

    today = gen.now()
    return {
        "summary": {
            "totalFiles": total,
            "compliantFiles": counts["compliant"],
            "nonCompliantFiles": counts["non_compliant"],
            "pendingFiles": counts["pending"],
            "compliancePercentage": compliance_pct,
            "avgComplianceScore": gen.random_float(0.7, 0.95),
        },
        "statusBreakdown": [
            {"status": row["label"], "count": row["count"], "percentage": row["percentage"]}
            for row in breakdown
        ],
        "nodeTypeBreakdown": node_types,
        "trend": [
            {
                "period": iso(today - timedelta(days=offset)),
                "compliancePercentage": gen.random_float(60, 90, 1),
                "totalFiles": total,
            }
            for offset in range(points - 1, -1, -1)
        ],
    }
