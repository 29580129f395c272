"""Intelligence savings composite."""

from typing import Dict, List

from ..synthetic import savings as synthetic_savings
from ..validation import SAVINGS_METRICS_SCHEMA
from .base import DataSource, Endpoint


class IntelligenceSavingsSource(DataSource):
    """Savings headline metrics, per-agent comparisons and a daily series."""

    async def fetch_all(self, time_range: str = "30d") -> Dict:
        params = {"timeRange": time_range}
        results = await self.gather(
            metrics=self.resolve(
                "savings metrics",
                [Endpoint("/api/savings/metrics", params, schema=SAVINGS_METRICS_SCHEMA)],
                lambda: synthetic_savings.savings_metrics(self.generator),
            ),
            agent_comparisons=self.resolve(
                "savings agents",
                [Endpoint("/api/savings/agents", params, rows=True, require_non_empty=True)],
                lambda: synthetic_savings.agent_comparisons(self.generator),
            ),
            time_series=self.resolve(
                "savings timeseries",
                [
                    Endpoint(
                        "/api/savings/timeseries",
                        params,
                        transform=sort_by_date,
                        rows=True,
                        require_non_empty=True,
                    )
                ],
                lambda: synthetic_savings.savings_time_series(self.generator),
            ),
        )
        return self.combine(results)


def sort_by_date(rows: List[Dict]) -> List[Dict]:
    """Oldest first; ISO dates sort lexically."""
    return sorted(rows, key=lambda row: str(row["date"]))
