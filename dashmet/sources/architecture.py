"""Architecture network composite."""

from typing import Dict

from ..synthetic import topology as synthetic_topology
from ..validation import ARCHITECTURE_SUMMARY_SCHEMA
from .base import DataSource, Endpoint, object_payload


class ArchitectureNetworksSource(DataSource):
    """Service topology summary, nodes, edges, knowledge entities and event flow."""

    async def fetch_all(self, time_range: str = "24h") -> Dict:
        params = {"timeRange": time_range}
        results = await self.gather(
            summary=self.resolve(
                "architecture summary",
                [Endpoint("/api/architecture/summary", params, schema=ARCHITECTURE_SUMMARY_SCHEMA)],
                lambda: synthetic_topology.architecture_summary(self.generator),
            ),
            nodes=self.resolve(
                "architecture nodes",
                [Endpoint("/api/architecture/nodes", params, rows=True)],
                lambda: synthetic_topology.architecture_nodes(self.generator),
            ),
            edges=self.resolve(
                "architecture edges",
                [Endpoint("/api/architecture/edges", params, rows=True)],
                lambda: synthetic_topology.architecture_edges(self.generator),
            ),
            knowledge_entities=self.resolve(
                "knowledge entities",
                [Endpoint("/api/knowledge/entities", params, rows=True)],
                lambda: synthetic_topology.knowledge_entities(self.generator),
            ),
            event_flow=self.resolve(
                "event flow",
                [Endpoint("/api/events/flow", params, transform=object_payload)],
                lambda: synthetic_topology.event_flow(self.generator),
            ),
        )
        return self.combine(results)
