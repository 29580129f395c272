"""Core domain models used by the aggregation layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Encoding(Enum):
    """Numeric encoding of a ratio-like batch."""

    FRACTION = "fraction"
    PERCENT = "percent"


class OutcomeKind(Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


class Provenance(Enum):
    """Where the data inside a source result came from."""

    REAL = "real"
    EMPTY = "empty"
    SYNTHETIC = "synthetic"


class Freshness(Enum):
    FRESH = "fresh"
    STALE = "stale"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class AgentMetric:
    """One backend-reported row for a monitored agent."""

    agent: str
    total_requests: int
    success_rate: Optional[float]
    avg_confidence: Optional[float]
    avg_routing_time_ms: Optional[float]
    avg_tokens: Optional[float] = None

    @property
    def ratio(self) -> Optional[float]:
        """Success rate, falling back to confidence when the backend omits it."""
        if self.success_rate is not None:
            return self.success_rate
        return self.avg_confidence


@dataclass(frozen=True)
class FetchOutcome:
    """Classified result of a single GET against one endpoint."""

    kind: OutcomeKind
    payload: Any = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, payload: Any) -> "FetchOutcome":
        return cls(OutcomeKind.SUCCESS, payload=payload)

    @classmethod
    def empty(cls, payload: Any) -> "FetchOutcome":
        return cls(OutcomeKind.EMPTY, payload=payload)

    @classmethod
    def failure(cls, reason: str) -> "FetchOutcome":
        return cls(OutcomeKind.FAILURE, reason=reason)

    @property
    def ok(self) -> bool:
        return self.kind is not OutcomeKind.FAILURE


@dataclass(frozen=True)
class SourceResult:
    """Data for one constituent of a composite source plus its provenance."""

    data: Any
    provenance: Provenance
    reason: Optional[str] = None
    forced: bool = False

    @classmethod
    def real(cls, data: Any) -> "SourceResult":
        return cls(data=data, provenance=Provenance.REAL)

    @classmethod
    def empty(cls, data: Any) -> "SourceResult":
        return cls(data=data, provenance=Provenance.EMPTY)

    @classmethod
    def synthetic(cls, data: Any, reason: str, forced: bool = False) -> "SourceResult":
        return cls(data=data, provenance=Provenance.SYNTHETIC, reason=reason, forced=forced)

    @property
    def is_mock(self) -> bool:
        return self.provenance is Provenance.SYNTHETIC

    @property
    def freshness(self) -> Freshness:
        if not self.is_mock:
            return Freshness.FRESH
        if self.forced:
            return Freshness.STALE
        return Freshness.UNAVAILABLE
