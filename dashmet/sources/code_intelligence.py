"""Code intelligence composite."""

from typing import Any, Dict

from ..analytics import percentage_shares
from ..parsing import as_count
from ..synthetic import patterns as synthetic_patterns
from ..synthetic import topology as synthetic_topology
from ..validation import (
    CODE_ANALYSIS_SCHEMA,
    COMPLIANCE_SUMMARY_SCHEMA,
    PATTERN_SUMMARY_SCHEMA,
    validation_errors,
)
from .base import DataSource, Endpoint, object_payload, require
from .patterns import pattern_summary


class CodeIntelligenceSource(DataSource):
    """Code analysis, compliance and the pattern summary they are read against."""

    async def fetch_all(self, time_range: str = "24h") -> Dict:
        window = {"timeWindow": time_range}
        results = await self.gather(
            code_analysis=self.resolve(
                "code analysis",
                [
                    Endpoint(
                        self.intelligence("/api/intelligence/code/analysis"),
                        window,
                        schema=CODE_ANALYSIS_SCHEMA,
                        transform=require(
                            lambda payload: payload["files_analyzed"] > 0,
                            "no files analyzed",
                        ),
                    )
                ],
                lambda: synthetic_topology.code_analysis(self.generator),
            ),
            compliance=self.resolve(
                "compliance",
                [
                    Endpoint(
                        "/api/intelligence/code/compliance",
                        window,
                        transform=compliance_report,
                        require_non_empty=True,
                    )
                ],
                lambda: synthetic_topology.compliance(self.generator),
            ),
            pattern_summary=self.resolve(
                "pattern summary",
                [
                    Endpoint(
                        "/api/intelligence/patterns/summary",
                        schema=PATTERN_SUMMARY_SCHEMA,
                        transform=pattern_summary,
                    )
                ],
                lambda: synthetic_patterns.pattern_summary(self.generator),
            ),
        )
        return self.combine(results)


def compliance_report(payload: Any) -> Dict:
    """
    Accept a compliance report with at least one file.

    Status shares are recomputed from the counts so they add up to 100.
    """
    payload = object_payload(payload)
    summary = payload.get("summary")
    errors = validation_errors(summary, COMPLIANCE_SUMMARY_SCHEMA)
    if errors:
        raise ValueError("; ".join(errors))
    if summary["totalFiles"] <= 0:
        raise ValueError("no files in compliance report")

    breakdown = [row for row in payload.get("statusBreakdown") or [] if isinstance(row, dict)]
    shares = percentage_shares([as_count(row.get("count")) for row in breakdown])
    report = dict(payload)
    report["statusBreakdown"] = [
        dict(row, percentage=share) for row, share in zip(breakdown, shares)
    ]
    return report
