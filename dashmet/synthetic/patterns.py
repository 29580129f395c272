"""Synthetic pattern-learning data."""

from datetime import timedelta
from typing import Dict, List

from .base import SyntheticGenerator, iso

CATEGORIES = {
    "Authentication": ["OAuth 2.0 flow implementation", "JWT token validation", "Session management"],
    "Data Processing": ["Stream processing pipeline", "Batch data transformation", "ETL workflow pattern"],
    "Error Handling": ["Custom error middleware", "Retry with exponential backoff", "Global error handler"],
    "Caching": ["LRU cache implementation", "Redis cache layer", "Cache invalidation strategy"],
    "Validation": ["Schema validation", "Input sanitization", "Business rule validation"],
    "Database Access": ["Connection pool management", "Repository pattern", "Query builder"],
}
LANGUAGES = ["python", "typescript", "rust", "go"]
DISCOVERED = [
    ("OAuth Authentication Flow", "src/auth/oauth_handler.py"),
    ("Database Connection Pool", "src/db/pool.py"),
    ("Error Handling Middleware", "src/middleware/errors.py"),
    ("Event Bus Subscriber", "src/events/subscriber.py"),
    ("Rate Limiter", "src/api/rate_limit.py"),
    ("Config Loader", "src/config/loader.py"),
    ("Retry Decorator", "src/utils/retry.py"),
    ("Health Probe", "src/monitoring/health.py"),
]


def pattern_summary(gen: SyntheticGenerator) -> Dict:
    return {
        "total_patterns": gen.random_int(800, 1500),
        "new_patterns_today": gen.random_int(20, 60),
        "avg_quality_score": gen.random_float(0.78, 0.92),
        "active_learning_count": gen.random_int(5, 15),
    }


def pattern_trends(gen: SyntheticGenerator, points: int = 20) -> List[Dict]:
    """Hourly points, oldest first."""
    now = gen.now()
    return [
        {
            "period": iso(now - timedelta(hours=offset)),
            "manifests_generated": gen.random_int(5, 25),
            "avg_patterns_per_manifest": gen.random_float(0.5, 2.5, 1),
            "avg_query_time_ms": gen.random_int(30, 100),
        }
        for offset in range(points - 1, -1, -1)
    ]


def quality_trends(gen: SyntheticGenerator, points: int = 20) -> List[Dict]:
    now = gen.now()
    return [
        {
            "period": iso(now - timedelta(hours=offset)),
            "avg_quality": gen.random_float(0.75, 0.95),
            "manifest_count": gen.random_int(5, 25),
        }
        for offset in range(points - 1, -1, -1)
    ]


def pattern_list(gen: SyntheticGenerator, limit: int = 50) -> List[Dict]:
    rows = []
    categories = list(CATEGORIES)
    for index in range(min(limit, 20)):
        category = categories[index % len(categories)]
        trend = gen.trend()
        rows.append(
            {
                "id": gen.uuid4(),
                "name": gen.random_item(CATEGORIES[category]),
                "description": f"Code pattern for {category.lower()}",
                "quality": gen.random_float(0.7, 1.0),
                "usage": gen.random_int(0, 100),
                "trend": trend,
                "trendPercentage": _trend_percentage(gen, trend),
                "category": category,
                "language": LANGUAGES[index % len(LANGUAGES)],
            }
        )
    return rows


def language_breakdown(gen: SyntheticGenerator) -> List[Dict]:
    """Per-language counts whose percentages add up to 100."""
    return [
        {"language": row["label"], "count": row["count"], "percentage": row["percentage"]}
        for row in gen.percentage_breakdown(LANGUAGES, low=20, high=700)
    ]


def discovered_patterns(gen: SyntheticGenerator, limit: int = 8) -> List[Dict]:
    now = gen.now()
    return [
        {
            "name": name,
            "file_path": path,
            "created_at": iso(now - timedelta(hours=offset)),
        }
        for offset, (name, path) in enumerate(DISCOVERED[:limit])
    ]


def _trend_percentage(gen: SyntheticGenerator, trend: str) -> int:
    if trend == "up":
        return gen.random_int(1, 25)
    if trend == "down":
        return -gen.random_int(1, 15)
    return 0
