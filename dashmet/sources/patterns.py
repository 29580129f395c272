"""Pattern learning composite."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from ..analytics import compute_language_breakdown
from ..parsing import as_count, as_float, parse_timestamp, pick
from ..synthetic import patterns as synthetic_patterns
from ..validation import PATTERN_SUMMARY_SCHEMA
from .base import DataSource, Endpoint

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class PatternLearningSource(DataSource):
    """Pattern summary, discovery trends, quality trends, list, languages and discoveries."""

    async def fetch_all(self, time_range: str = "24h", limit: int = 50, discovery_limit: int = 8) -> Dict:
        window = {"timeWindow": time_range}
        results = await self.gather(
            summary=self.resolve(
                "pattern summary",
                [
                    Endpoint(
                        "/api/intelligence/patterns/summary",
                        window,
                        schema=PATTERN_SUMMARY_SCHEMA,
                        transform=pattern_summary,
                    )
                ],
                lambda: synthetic_patterns.pattern_summary(self.generator),
            ),
            trends=self.resolve(
                "pattern trends",
                [
                    Endpoint(
                        "/api/intelligence/patterns/trends",
                        window,
                        transform=pattern_trends,
                        rows=True,
                        require_non_empty=True,
                    )
                ],
                lambda: synthetic_patterns.pattern_trends(self.generator),
            ),
            quality_trends=self.resolve(
                "quality trends",
                [
                    Endpoint(
                        "/api/intelligence/patterns/quality-trends",
                        window,
                        transform=quality_trends,
                        rows=True,
                        require_non_empty=True,
                    )
                ],
                lambda: synthetic_patterns.quality_trends(self.generator),
            ),
            patterns=self.resolve(
                "pattern list",
                [
                    Endpoint(
                        "/api/intelligence/patterns/list",
                        {"limit": limit, "timeWindow": time_range},
                        rows=True,
                        require_non_empty=True,
                    )
                ],
                lambda: synthetic_patterns.pattern_list(self.generator, limit),
            ),
            languages=self.resolve(
                "language breakdown",
                [
                    Endpoint(
                        "/api/intelligence/patterns/by-language",
                        window,
                        transform=compute_language_breakdown,
                        rows=True,
                        require_non_empty=True,
                    )
                ],
                lambda: synthetic_patterns.language_breakdown(self.generator),
            ),
            discovery=self.resolve(
                "pattern discovery",
                [
                    Endpoint(
                        "/api/intelligence/patterns/discovery",
                        {"limit": discovery_limit},
                        transform=discovered_patterns,
                        rows=True,
                    )
                ],
                lambda: synthetic_patterns.discovered_patterns(self.generator, discovery_limit),
            ),
        )
        return self.combine(results)


def pattern_summary(payload: Dict) -> Dict:
    """Accept snake_case or camelCase keys; report snake_case."""
    return {
        "total_patterns": as_count(pick(payload, "total_patterns", "totalPatterns", default=0)),
        "new_patterns_today": as_count(pick(payload, "new_patterns_today", "newPatternsToday", default=0)),
        "avg_quality_score": as_float(pick(payload, "avg_quality_score", "avgQualityScore", default=0)) or 0.0,
        "active_learning_count": as_count(
            pick(payload, "active_learning_count", "activeLearningCount", default=0)
        ),
    }


def pattern_trends(rows: List[Dict]) -> List[Dict]:
    return _ascending(
        {
            "period": row.get("period"),
            "manifests_generated": as_count(pick(row, "manifests_generated", "manifestsGenerated", default=0)),
            "avg_patterns_per_manifest": as_float(
                pick(row, "avg_patterns_per_manifest", "avgPatternsPerManifest", default=0)
            ) or 0.0,
            "avg_query_time_ms": as_float(pick(row, "avg_query_time_ms", "avgQueryTimeMs", default=0)) or 0.0,
        }
        for row in rows
    )


def quality_trends(rows: List[Dict]) -> List[Dict]:
    return _ascending(
        {
            "period": row.get("period"),
            "avg_quality": as_float(pick(row, "avg_quality", "avgQuality", default=0)) or 0.0,
            "manifest_count": as_count(pick(row, "manifest_count", "manifestCount", default=0)),
        }
        for row in rows
    )


def discovered_patterns(rows: List[Dict]) -> List[Dict]:
    return [
        {
            "name": row.get("name"),
            "file_path": pick(row, "file_path", "filePath"),
            "created_at": pick(row, "created_at", "createdAt"),
        }
        for row in rows
    ]


def _ascending(points: Any) -> List[Dict]:
    return sorted(points, key=lambda point: parse_timestamp(point["period"]) or _EPOCH)
