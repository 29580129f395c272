"""Seedable generators for internally-consistent fallback data."""

from . import agents, patterns, platform, savings, topology
from .base import SyntheticGenerator, iso

__all__ = [
    "SyntheticGenerator",
    "agents",
    "iso",
    "patterns",
    "platform",
    "savings",
    "topology",
]
