"""Event flow composite."""

from typing import Dict

from ..analytics import compute_event_chart, compute_event_metrics
from ..synthetic import topology as synthetic_topology
from .base import DataSource, Endpoint, list_of


class EventFlowSource(DataSource):
    """Recent events from the intelligence stream with derived metrics and charts."""

    async def fetch_all(self, time_range: str = "24h", limit: int = 100) -> Dict:
        results = await self.gather(
            events=self.resolve(
                "event stream",
                [
                    Endpoint(
                        self.intelligence("/api/intelligence/events/stream"),
                        {"limit": limit},
                        transform=list_of("events"),
                    )
                ],
                lambda: synthetic_topology.events(self.generator),
            ),
        )
        now = self.now()
        events = [event for event in results["events"].data or [] if isinstance(event, dict)]
        return self.combine(
            results,
            metrics=compute_event_metrics(events, now),
            chart_data=compute_event_chart(events, now),
        )
