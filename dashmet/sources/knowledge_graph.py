"""Knowledge graph composite."""

from typing import Any, Dict

from ..synthetic import topology as synthetic_topology
from .base import DataSource, Endpoint, object_payload


class KnowledgeGraphSource(DataSource):
    """Knowledge graph nodes and edges; a null graph is an empty one."""

    async def fetch_all(self, time_range: str = "24h", limit: int = 1000) -> Dict:
        results = await self.gather(
            graph=self.resolve(
                "knowledge graph",
                [
                    Endpoint(
                        self.intelligence("/api/intelligence/knowledge/graph"),
                        {"limit": limit, "timeWindow": time_range},
                        transform=graph,
                    )
                ],
                lambda: synthetic_topology.knowledge_graph(self.generator),
            ),
        )
        data = results["graph"].data or {"nodes": [], "edges": []}
        composite = self.combine(results, nodes=data["nodes"], edges=data["edges"])
        del composite["graph"]
        return composite


def graph(payload: Any) -> Dict:
    payload = object_payload(payload)
    nodes = payload.get("nodes") or []
    edges = payload.get("edges") or []
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise TypeError("graph nodes and edges must be lists")
    return {"nodes": nodes, "edges": edges}
