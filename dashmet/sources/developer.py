"""Developer tools composite."""

from typing import Dict

from ..synthetic import platform as synthetic_platform
from .base import DataSource, Endpoint, object_payload


class DeveloperToolsSource(DataSource):
    """Developer activity, tool usage and the recent query history."""

    async def fetch_all(self, time_range: str = "24h", limit: int = 10) -> Dict:
        params = {"timeRange": time_range}
        results = await self.gather(
            activity=self.resolve(
                "developer activity",
                [Endpoint("/api/developer/activity", params, transform=object_payload)],
                lambda: synthetic_platform.developer_activity(self.generator),
            ),
            tool_usage=self.resolve(
                "tool usage",
                [Endpoint("/api/tools/usage", params, rows=True)],
                lambda: synthetic_platform.tool_usage(self.generator),
            ),
            query_history=self.resolve(
                "query history",
                [Endpoint("/api/developer/queries", {"timeRange": time_range, "limit": limit}, rows=True)],
                lambda: synthetic_platform.query_history(self.generator, limit),
            ),
        )
        return self.combine(results)
