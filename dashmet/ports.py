"""Port definitions for fetching JSON telemetry from any backend."""

from typing import Any, Mapping, Optional, Protocol

from .models import FetchOutcome


class JsonFetcher(Protocol):
    """Fetcher interface that adapters can implement for any transport."""

    async def fetch(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> FetchOutcome:
        """Return the classified outcome of one GET; never raise except on cancellation."""
