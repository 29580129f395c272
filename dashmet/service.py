"""Application service exposing every dashboard composite behind one facade."""

import asyncio
import logging
from typing import Dict, List, Optional

import httpx

from .adapters import HttpxJsonFetcher
from .config import Settings
from .ports import JsonFetcher
from .sources import (
    AgentManagementSource,
    AgentNetworkSource,
    AgentOperationsSource,
    AgentRegistrySource,
    ArchitectureNetworksSource,
    CodeIntelligenceSource,
    DataSource,
    DeveloperToolsSource,
    EventFlowSource,
    IntelligenceAnalyticsSource,
    IntelligenceSavingsSource,
    KnowledgeGraphSource,
    PatternLearningSource,
    PlatformHealthSource,
    PlatformMonitoringSource,
)
from .synthetic import SyntheticGenerator

logger = logging.getLogger(__name__)


class DashboardService:
    """Facade service that exposes dashboard composites independent of web frameworks."""

    def __init__(
        self,
        fetcher: JsonFetcher,
        generator: Optional[SyntheticGenerator] = None,
        force_mock: bool = False,
        intelligence_url: Optional[str] = None,
    ):
        self.fetcher = fetcher
        self.generator = generator or SyntheticGenerator()
        self.force_mock = force_mock

        def build(source_cls):
            return source_cls(fetcher, self.generator, force_mock, intelligence_url)

        self.agents = build(AgentManagementSource)
        self.agent_operations = build(AgentOperationsSource)
        self.intelligence_analytics = build(IntelligenceAnalyticsSource)
        self.savings = build(IntelligenceSavingsSource)
        self.platform_health = build(PlatformHealthSource)
        self.platform_monitoring = build(PlatformMonitoringSource)
        self.patterns = build(PatternLearningSource)
        self.events = build(EventFlowSource)
        self.knowledge_graph = build(KnowledgeGraphSource)
        self.architecture = build(ArchitectureNetworksSource)
        self.agent_network = build(AgentNetworkSource)
        self.code_intelligence = build(CodeIntelligenceSource)
        self.developer_tools = build(DeveloperToolsSource)
        self.agent_registry = build(AgentRegistrySource)

        self.sources: Dict[str, DataSource] = {
            "agents": self.agents,
            "agent_operations": self.agent_operations,
            "intelligence_analytics": self.intelligence_analytics,
            "savings": self.savings,
            "platform_health": self.platform_health,
            "platform_monitoring": self.platform_monitoring,
            "patterns": self.patterns,
            "events": self.events,
            "knowledge_graph": self.knowledge_graph,
            "architecture": self.architecture,
            "agent_network": self.agent_network,
            "code_intelligence": self.code_intelligence,
            "developer_tools": self.developer_tools,
            "agent_registry": self.agent_registry,
        }

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.AsyncClient) -> "DashboardService":
        fetcher = HttpxJsonFetcher(client, settings.api_base_url, deadline=settings.fetch_deadline)
        if settings.mock_seed is not None:
            generator = SyntheticGenerator.seeded(settings.mock_seed)
        else:
            generator = SyntheticGenerator()
        return cls(
            fetcher,
            generator=generator,
            force_mock=settings.use_mock_data,
            intelligence_url=settings.intelligence_url,
        )

    @property
    def dashboards(self) -> List[str]:
        return list(self.sources)

    async def fetch_dashboard(self, name: str, time_range: Optional[str] = None) -> Dict:
        """Fetch one dashboard by name; unknown names raise ``KeyError``."""
        if name not in self.sources:
            raise KeyError(f"unknown dashboard: {name}")
        source = self.sources[name]
        result = await (source.fetch_all(time_range) if time_range else source.fetch_all())
        if result["is_mock"]:
            logger.info("Dashboard %s served with fallback data for %d source(s)", name, len(result["degraded"]))
        return result

    async def fetch_overview(self, time_range: Optional[str] = None) -> Dict:
        """Fetch every dashboard concurrently and OR-reduce their mock flags."""
        names = self.dashboards
        results = await asyncio.gather(*(self.fetch_dashboard(name, time_range) for name in names))
        dashboards = dict(zip(names, results))
        return {
            "dashboards": dashboards,
            "is_mock": any(result["is_mock"] for result in results),
            "degraded": [
                {"dashboard": name, **entry}
                for name, result in dashboards.items()
                for entry in result["degraded"]
            ],
        }


def build_client(settings: Settings) -> httpx.AsyncClient:
    """Shared client whose connection pool every fetch reuses."""
    timeout = httpx.Timeout(settings.http_timeout, connect=settings.http_connect_timeout)
    return httpx.AsyncClient(timeout=timeout)
