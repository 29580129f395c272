"""Random primitives shared by the per-domain synthetic generators."""

import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from ..analytics import percentage_shares

T = TypeVar("T")

AGENT_PREFIXES = [
    "Code",
    "Test",
    "Deploy",
    "Analysis",
    "Refactor",
    "Documentation",
    "Security",
    "Performance",
    "Quality",
    "Integration",
]
AGENT_SUFFIXES = ["Agent", "Assistant", "Analyzer", "Generator", "Optimizer", "Validator", "Scanner", "Monitor"]
PATH_DIRS = ["src", "lib", "components", "utils", "services", "pages", "api"]
PATH_FILES = ["index.ts", "utils.ts", "types.ts", "api.ts", "service.py", "helper.py", "config.py", "models.py"]


class SyntheticGenerator:
    """
    Seedable source of fallback data.

    ``rng`` and ``clock`` are injectable so demos and tests can reproduce a
    dataset exactly; by default a fresh ``random.Random`` and the UTC wall
    clock are used.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def seeded(cls, seed: int) -> "SyntheticGenerator":
        return cls(rng=random.Random(seed))

    def now(self) -> datetime:
        return self.clock()

    def random_int(self, low: int, high: int) -> int:
        return self.rng.randint(low, high)

    def random_float(self, low: float, high: float, decimals: int = 2) -> float:
        value = round(self.rng.uniform(low, high), decimals)
        return min(max(value, low), high)

    def random_item(self, items: Sequence[T]) -> T:
        return self.rng.choice(items)

    def random_items(self, items: Sequence[T], count: int) -> List[T]:
        return self.rng.sample(list(items), min(count, len(items)))

    def past_timestamp(self, max_minutes_ago: int) -> str:
        minutes_ago = self.random_int(0, max_minutes_ago)
        return iso(self.now() - timedelta(minutes=minutes_ago))

    def uuid4(self) -> str:
        """Random RFC 4122 version-4 identifier drawn from this generator's rng."""
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))

    def time_series(
        self,
        points: int,
        low: float,
        high: float,
        interval: timedelta = timedelta(minutes=1),
        end: Optional[datetime] = None,
    ) -> List[Dict]:
        """Exactly ``points`` values, oldest first, the last one at ``end``."""
        end = end or self.now()
        return [
            {
                "time": iso(end - interval * offset),
                "value": self.random_float(low, high),
            }
            for offset in range(points - 1, -1, -1)
        ]

    def percentage_breakdown(self, labels: Sequence[str], low: int = 1, high: int = 100) -> List[Dict]:
        """Random counts per label with shares that add up to 100."""
        counts = [self.random_int(low, high) for _ in labels]
        shares = percentage_shares(counts)
        return [
            {"label": label, "count": count, "percentage": share}
            for label, count, share in zip(labels, counts, shares)
        ]

    def agent_name(self) -> str:
        return f"{self.random_item(AGENT_PREFIXES)}{self.random_item(AGENT_SUFFIXES)}"

    def file_path(self) -> str:
        depth = self.random_int(1, 4)
        dirs = [self.random_item(PATH_DIRS) for _ in range(depth)]
        return "/".join(dirs + [self.random_item(PATH_FILES)])

    def status(self, success_weight: float = 0.8) -> str:
        roll = self.rng.random()
        if roll < success_weight:
            return "success"
        if roll < success_weight + 0.15:
            return "warning"
        return "error"

    def health_status(self) -> str:
        roll = self.rng.random()
        if roll < 0.85:
            return "healthy"
        if roll < 0.95:
            return "degraded"
        return "down"

    def trend(self) -> str:
        roll = self.rng.random()
        if roll < 0.4:
            return "up"
        if roll < 0.5:
            return "down"
        return "stable"


def iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
