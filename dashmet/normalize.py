"""Format detection and clamping for ratio-like values.

Upstream services emit the same quantity as ``0.95`` or ``95`` depending on
the endpoint and its version. The encoding is sampled once per batch so a
batch stays internally consistent; a batch that genuinely mixes encodings
is not handled.
"""

import math
from typing import Iterable, List, Optional, Sequence

from .models import AgentMetric, Encoding


def detect_encoding(sample: Optional[float]) -> Encoding:
    """Return FRACTION when the sample is <= 1.0, PERCENT otherwise or without a sample."""
    if sample is not None and sample <= 1.0:
        return Encoding.FRACTION
    return Encoding.PERCENT


def sample_ratio(agents: Sequence[AgentMetric]) -> Optional[float]:
    for agent in agents:
        if agent.ratio is not None:
            return agent.ratio
    return None


def to_percent(value: float, encoding: Encoding) -> float:
    if encoding is Encoding.FRACTION:
        return value * 100
    return value


def clamp_percentage(value: Optional[float]) -> float:
    return _clamp(value, 0.0, 100.0)


def clamp_fraction(value: Optional[float]) -> float:
    return _clamp(value, 0.0, 1.0)


def normalize_batch(
    values: Iterable[Optional[float]],
    encoding: Optional[Encoding] = None,
) -> List[float]:
    """Convert a batch to clamped percentages; missing values become 0."""
    values_list = list(values)
    if encoding is None:
        sample = next((value for value in values_list if value is not None), None)
        encoding = detect_encoding(sample)
    return [
        clamp_percentage(to_percent(value, encoding)) if value is not None else 0.0
        for value in values_list
    ]


def normalize_fraction(value: Optional[float]) -> float:
    """Single ratio as a clamped 0-1 fraction; percent-encoded values are scaled down."""
    if value is None:
        return 0.0
    if detect_encoding(value) is Encoding.PERCENT:
        value = value / 100
    return clamp_fraction(value)


def _clamp(value: Optional[float], lower: float, upper: float) -> float:
    if value is None or not math.isfinite(value):
        return lower
    return max(lower, min(upper, value))
