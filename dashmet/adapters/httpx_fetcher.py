"""httpx-based implementation of the ``JsonFetcher`` port."""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from ..models import FetchOutcome

logger = logging.getLogger(__name__)

DEFAULT_DEADLINE_SECONDS = 15.0


class HttpxJsonFetcher:
    """
    Classify GET responses from a shared ``httpx.AsyncClient``.

    Transport errors, non-2xx statuses, unparseable bodies and the per-fetch
    deadline all come back as ``FetchOutcome.failure``; the reason is logged
    and never raised. Cancellation of the awaiting task still propagates.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = "",
        deadline: Optional[float] = DEFAULT_DEADLINE_SECONDS,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.deadline = deadline

    def url_for(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        if not endpoint.startswith("/"):
            endpoint = "/" + endpoint
        return self.base_url + endpoint

    async def fetch(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> FetchOutcome:
        url = self.url_for(endpoint)
        try:
            outcome = await asyncio.wait_for(
                self._get(url, _clean_params(params)),
                timeout=self.deadline,
            )
        except asyncio.TimeoutError:
            outcome = FetchOutcome.failure(f"deadline of {self.deadline}s exceeded")
        except httpx.HTTPError as exc:
            outcome = FetchOutcome.failure(f"{type(exc).__name__}: {exc}")

        if not outcome.ok:
            logger.warning("Fetch %s failed: %s", url, outcome.reason)
        return outcome

    async def _get(self, url: str, params: Dict[str, Any]) -> FetchOutcome:
        response = await self.client.get(url, params=params)
        if not response.is_success:
            return FetchOutcome.failure(f"HTTP {response.status_code}")
        if response.status_code == 204:
            return FetchOutcome.success(None)
        try:
            payload = response.json()
        except ValueError as exc:
            return FetchOutcome.failure(f"invalid JSON: {exc}")
        if payload == []:
            return FetchOutcome.empty(payload)
        return FetchOutcome.success(payload)


def _clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}
