"""Synthetic savings metrics, comparisons and daily series."""

from datetime import timedelta
from typing import Dict, List

from ..analytics import display_name
from .agents import KNOWN_AGENTS
from .base import SyntheticGenerator


def savings_metrics(gen: SyntheticGenerator) -> Dict:
    """
    Savings tiers are derived from each other, never drawn independently.

    Each tier multiplies the previous one by a factor floored at 1, so
    ``daily <= weekly <= monthly <= total`` holds for every draw.
    """
    daily = gen.random_float(400, 700)
    weekly = round(daily * max(1.0, gen.random_float(6.5, 7.5)), 2)
    monthly = round(weekly * max(1.0, gen.random_float(4.0, 4.4)), 2)
    total = round(monthly * max(1.0, gen.random_float(2.5, 3.5)), 2)

    baseline_runs = gen.random_int(20000, 26000)
    return {
        "totalSavings": total,
        "monthlySavings": monthly,
        "weeklySavings": weekly,
        "dailySavings": daily,
        "intelligenceRuns": int(baseline_runs * gen.random_float(0.6, 0.7)),
        "baselineRuns": baseline_runs,
        "avgTokensPerRun": gen.random_int(2800, 3600),
        "avgComputePerRun": gen.random_float(0.9, 1.5),
        "costPerToken": 0.000002,
        "costPerCompute": 0.05,
        "efficiencyGain": gen.random_float(28, 40, 1),
        "timeSaved": gen.random_int(100, 160),
    }


def agent_comparisons(gen: SyntheticGenerator, count: int = 3) -> List[Dict]:
    rows = []
    for agent in gen.random_items(KNOWN_AGENTS, count):
        without = {
            "avgTokens": gen.random_int(4000, 5500),
            "avgCompute": gen.random_float(1.3, 2.0),
            "avgTime": gen.random_float(2.5, 5.5, 1),
            "successRate": gen.random_float(80, 89, 1),
            "cost": gen.random_float(0.075, 0.1, 3),
        }
        ratio = gen.random_float(0.55, 0.7)
        with_intel = {
            "avgTokens": int(without["avgTokens"] * ratio),
            "avgCompute": round(without["avgCompute"] * ratio, 2),
            "avgTime": round(without["avgTime"] * ratio, 1),
            "successRate": min(100.0, round(without["successRate"] + gen.random_float(3, 9, 1), 1)),
            "cost": round(without["cost"] * ratio, 3),
        }
        rows.append(
            {
                "agentId": agent,
                "agentName": display_name(agent),
                "withIntelligence": with_intel,
                "withoutIntelligence": without,
                "savings": {
                    "tokens": without["avgTokens"] - with_intel["avgTokens"],
                    "compute": round(without["avgCompute"] - with_intel["avgCompute"], 2),
                    "time": round(without["avgTime"] - with_intel["avgTime"], 1),
                    "cost": round(without["cost"] - with_intel["cost"], 3),
                    "percentage": round((1 - ratio) * 100, 1),
                },
            }
        )
    return rows


def savings_time_series(gen: SyntheticGenerator, days: int = 30) -> List[Dict]:
    """Exactly ``days`` daily points, oldest first, ending today."""
    today = gen.now().date()
    rows = []
    for offset in range(days - 1, -1, -1):
        base_runs = 400 + gen.random_int(0, 99)
        intel_runs = int(base_runs * 0.65)
        token_multiplier = 0.6 + gen.rng.random() * 0.15

        intel_tokens = int(intel_runs * 3000 * token_multiplier)
        intel_compute = round(intel_runs * 0.9 * token_multiplier, 2)
        intel_cost = round(intel_runs * 0.048, 2)
        base_tokens = base_runs * 4500
        base_compute = round(base_runs * 1.5, 2)
        base_cost = round(base_runs * 0.082, 2)

        rows.append(
            {
                "date": (today - timedelta(days=offset)).isoformat(),
                "withIntelligence": {
                    "tokens": intel_tokens,
                    "compute": intel_compute,
                    "cost": intel_cost,
                    "runs": intel_runs,
                },
                "withoutIntelligence": {
                    "tokens": base_tokens,
                    "compute": base_compute,
                    "cost": base_cost,
                    "runs": base_runs,
                },
                "savings": {
                    "tokens": base_tokens - intel_tokens,
                    "compute": round(base_compute - intel_compute, 2),
                    "cost": round(base_cost - intel_cost, 2),
                    "percentage": round((1 - intel_tokens / base_tokens) * 100, 1),
                },
            }
        )
    return rows
