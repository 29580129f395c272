"""Shared fetch-validate-fallback machinery for composite data sources."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence

from ..models import FetchOutcome, OutcomeKind, SourceResult
from ..ports import JsonFetcher
from ..synthetic import SyntheticGenerator
from ..validation import Schema, validate_rows, validation_errors

logger = logging.getLogger(__name__)

# Raised by transforms that meet a payload of the wrong shape.
TRANSFORM_ERRORS = (TypeError, ValueError, KeyError, AttributeError, OverflowError)

FORCED_MOCK_REASON = "mock data forced"


@dataclass(frozen=True)
class Endpoint:
    """
    One way of obtaining a constituent's data.

    ``schema`` validates object payloads; ``rows`` requires a JSON list and,
    with ``require_non_empty``, at least one row. Validation runs on the raw
    payload, then ``transform`` maps it into the composite's shape.

    A JSON ``null`` is accepted untransformed as real data unless the
    endpoint has a schema or requires content.
    """

    path: str
    params: Optional[Mapping[str, Any]] = None
    schema: Optional[Schema] = None
    transform: Optional[Callable[[Any], Any]] = None
    rows: bool = False
    require_non_empty: bool = False


class DataSource:
    """
    Base class for composites built from concurrently resolved constituents.

    ``intelligence_url`` is the root of the separately hosted intelligence
    service; when unset its endpoints are resolved against the fetcher's
    base URL like every other path.
    """

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
        self.intelligence_url = intelligence_url.rstrip("/") if intelligence_url else None

    async def fetch_all(self, time_range: str = "24h") -> Dict:
        raise NotImplementedError

    def now(self) -> datetime:
        return self.generator.now()

    def intelligence(self, path: str) -> str:
        if self.intelligence_url:
            return self.intelligence_url + path
        return path

    async def resolve(
        self,
        name: str,
        endpoints: Sequence[Endpoint],
        fallback: Callable[[], Any],
    ) -> SourceResult:
        """
        Try ``endpoints`` in order and fall back to synthetic data.

        The first endpoint whose answer is fetched and validated wins. An
        empty list is a real answer and stops the chain unless the endpoint
        requires rows.
        """
        if self.force_mock:
            return SourceResult.synthetic(fallback(), FORCED_MOCK_REASON, forced=True)

        reasons = []
        for endpoint in endpoints:
            outcome = await self.fetcher.fetch(endpoint.path, endpoint.params)
            if not outcome.ok:
                reasons.append(f"{endpoint.path}: {outcome.reason}")
                continue

            result, problem = self._accept(name, endpoint, outcome)
            if result is not None:
                return result
            reasons.append(f"{endpoint.path}: {problem}")

        return SourceResult.synthetic(fallback(), "; ".join(reasons) or "no endpoint configured")

    async def gather(self, **constituents: Awaitable[SourceResult]) -> Dict[str, SourceResult]:
        """Await named constituents concurrently, keyed by name."""
        names = list(constituents)
        results = await asyncio.gather(*(constituents[name] for name in names))
        return dict(zip(names, results))

    def combine(self, results: Mapping[str, SourceResult], **derived: Any) -> Dict:
        """Merge constituent data and OR their provenance into one composite dict."""
        merged = {name: result.data for name, result in results.items()}
        merged.update(derived)
        merged["is_mock"] = any(result.is_mock for result in results.values())
        merged["freshness"] = {name: result.freshness.value for name, result in results.items()}
        merged["degraded"] = [
            {"source": name, "reason": result.reason}
            for name, result in results.items()
            if result.is_mock
        ]
        return merged

    def _accept(self, name: str, endpoint: Endpoint, outcome: FetchOutcome):
        payload = outcome.payload
        if payload is None and endpoint.schema is None and not endpoint.require_non_empty:
            # The upstream answered "nothing"; that is real data, not a failure.
            return SourceResult.real(None), None

        errors = []
        if endpoint.schema is not None:
            errors = validation_errors(payload, endpoint.schema)
        elif endpoint.rows:
            errors = validate_rows(payload, endpoint.require_non_empty)
        elif endpoint.require_non_empty and payload is None:
            errors = ["expected a payload, got null"]
        elif endpoint.require_non_empty and outcome.kind is OutcomeKind.EMPTY:
            errors = ["expected at least one row"]

        if not errors:
            try:
                data = endpoint.transform(payload) if endpoint.transform else payload
            except TRANSFORM_ERRORS as exc:
                errors = [f"transform failed: {type(exc).__name__}: {exc}"]

        if errors:
            logger.warning("Validation failed for %s (%s): %s", name, endpoint.path, "; ".join(errors))
            return None, "; ".join(errors)

        if outcome.kind is OutcomeKind.EMPTY:
            return SourceResult.empty(data), None
        return SourceResult.real(data), None


def list_of(key: Optional[str] = None) -> Callable[[Any], list]:
    """Transform accepting a bare list or an object wrapping one under ``key``."""

    def transform(payload: Any) -> list:
        if isinstance(payload, list):
            return payload
        if key and isinstance(payload, dict) and isinstance(payload.get(key), list):
            return payload[key]
        raise TypeError(f"expected a list, got {type(payload).__name__}")

    return transform


def require(predicate: Callable[[Any], bool], message: str) -> Callable[[Any], Any]:
    """Transform that passes the payload through only when ``predicate`` holds."""

    def transform(payload: Any) -> Any:
        if not predicate(payload):
            raise ValueError(message)
        return payload

    return transform


def object_payload(payload: Any) -> Dict:
    if not isinstance(payload, dict):
        raise TypeError(f"expected an object, got {type(payload).__name__}")
    return payload
