"""Composite data sources, one per dashboard."""

from .agents import (
    AgentManagementSource,
    AgentNetworkSource,
    AgentOperationsSource,
    IntelligenceAnalyticsSource,
)
from .architecture import ArchitectureNetworksSource
from .base import DataSource, Endpoint
from .code_intelligence import CodeIntelligenceSource
from .developer import DeveloperToolsSource
from .events import EventFlowSource
from .knowledge_graph import KnowledgeGraphSource
from .patterns import PatternLearningSource
from .platform import PlatformHealthSource, PlatformMonitoringSource
from .registry import AgentRegistrySource
from .savings import IntelligenceSavingsSource

__all__ = [
    "AgentManagementSource",
    "AgentNetworkSource",
    "AgentOperationsSource",
    "AgentRegistrySource",
    "ArchitectureNetworksSource",
    "CodeIntelligenceSource",
    "DataSource",
    "DeveloperToolsSource",
    "Endpoint",
    "EventFlowSource",
    "IntelligenceAnalyticsSource",
    "IntelligenceSavingsSource",
    "KnowledgeGraphSource",
    "PatternLearningSource",
    "PlatformHealthSource",
    "PlatformMonitoringSource",
]
