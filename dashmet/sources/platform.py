"""Platform health and monitoring composites."""

from typing import Dict

from ..synthetic import platform as synthetic_platform
from ..validation import PLATFORM_HEALTH_SCHEMA
from .base import DataSource, Endpoint, object_payload


class PlatformHealthSource(DataSource):
    """Platform health from the intelligence service and the per-service status map."""

    async def fetch_all(self, time_range: str = "24h") -> Dict:
        results = await self.gather(
            health=self.resolve(
                "platform health",
                [
                    Endpoint(
                        self.intelligence("/api/intelligence/platform/health"),
                        {"timeWindow": time_range},
                        schema=PLATFORM_HEALTH_SCHEMA,
                    )
                ],
                lambda: synthetic_platform.platform_health(self.generator),
            ),
            services=self.resolve(
                "platform services",
                [Endpoint("/api/intelligence/platform/services", transform=object_payload)],
                lambda: synthetic_platform.platform_services(self.generator),
            ),
        )
        return self.combine(results)


class PlatformMonitoringSource(DataSource):
    """System status, developer metrics and incidents."""

    async def fetch_all(self, time_range: str = "24h") -> Dict:
        params = {"timeRange": time_range}
        results = await self.gather(
            system_status=self.resolve(
                "system status",
                [Endpoint("/api/health/status", params, transform=object_payload)],
                lambda: synthetic_platform.system_status(self.generator),
            ),
            developer_metrics=self.resolve(
                "developer metrics",
                [Endpoint("/api/developer/metrics", params, transform=object_payload)],
                lambda: synthetic_platform.developer_metrics(self.generator),
            ),
            incidents=self.resolve(
                "incidents",
                [Endpoint("/api/incidents", params, rows=True)],
                lambda: synthetic_platform.incidents(self.generator),
            ),
        )
        return self.combine(results)
