"""Adapters for integrating dashmet with HTTP transports."""

from .httpx_fetcher import HttpxJsonFetcher

__all__ = ["HttpxJsonFetcher"]
