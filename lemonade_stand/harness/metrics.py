# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Aggregate metrics over simulated games.

Per strategy:
- Mean / min / max total profit across seeds
- Survival rate (games that never went broke)
- Mean days played
- Loss-day rate
- Sell-through (cups sold / cups prepared)
"""

import statistics
from dataclasses import dataclass
from typing import Any

from .runner import EpisodeResult


@dataclass
class StrategyMetrics:
    """Metrics for one strategy across all its seeds."""
    strategy: str
    episodes: int
    mean_profit: float
    min_profit: float
    max_profit: float
    profit_stdev: float
    survival_rate: float  # Share of games that did not end broke
    mean_days: float
    loss_day_rate: float  # Loss days / days played
    sell_through: float  # Cups sold / cups prepared

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "episodes": self.episodes,
            "mean_profit": round(self.mean_profit, 2),
            "min_profit": round(self.min_profit, 2),
            "max_profit": round(self.max_profit, 2),
            "profit_stdev": round(self.profit_stdev, 2),
            "survival_rate": self.survival_rate,
            "mean_days": self.mean_days,
            "loss_day_rate": self.loss_day_rate,
            "sell_through": self.sell_through,
        }


def compute_strategy_metrics(strategy: str, results: list[EpisodeResult]) -> StrategyMetrics:
    """Aggregate the episodes of a single strategy."""
    if not results:
        return StrategyMetrics(
            strategy=strategy,
            episodes=0,
            mean_profit=0.0,
            min_profit=0.0,
            max_profit=0.0,
            profit_stdev=0.0,
            survival_rate=0.0,
            mean_days=0.0,
            loss_day_rate=0.0,
            sell_through=0.0,
        )

    profits = [r.total_profit for r in results]
    total_days = sum(r.days_played for r in results)
    loss_days = sum(r.stats.loss_days for r in results)
    cups_prepared = sum(o.cups for r in results for o in r.outcomes)
    cups_sold = sum(r.stats.total_sales for r in results)

    return StrategyMetrics(
        strategy=strategy,
        episodes=len(results),
        mean_profit=statistics.mean(profits),
        min_profit=min(profits),
        max_profit=max(profits),
        profit_stdev=statistics.stdev(profits) if len(profits) > 1 else 0.0,
        survival_rate=sum(1 for r in results if not r.game_over) / len(results),
        mean_days=total_days / len(results),
        loss_day_rate=loss_days / total_days if total_days else 0.0,
        sell_through=cups_sold / cups_prepared if cups_prepared else 0.0,
    )


def compute_metrics(results: list[EpisodeResult]) -> list[StrategyMetrics]:
    """Group results by strategy (in first-seen order) and aggregate each group."""
    grouped: dict[str, list[EpisodeResult]] = {}
    for result in results:
        grouped.setdefault(result.strategy, []).append(result)
    return [compute_strategy_metrics(name, group) for name, group in grouped.items()]


def format_metrics_summary(metrics: StrategyMetrics) -> str:
    """Format one strategy's metrics as a human-readable block."""
    lines = [
        f"Strategy: {metrics.strategy}",
        f"  Episodes:       {metrics.episodes}",
        f"  Mean profit:    ${metrics.mean_profit:.2f} (±{metrics.profit_stdev:.2f})",
        f"  Profit range:   ${metrics.min_profit:.2f} .. ${metrics.max_profit:.2f}",
        f"  Survival rate:  {metrics.survival_rate:.1%}",
        f"  Mean days:      {metrics.mean_days:.1f}",
        f"  Loss-day rate:  {metrics.loss_day_rate:.1%}",
        f"  Sell-through:   {metrics.sell_through:.1%}",
    ]
    return "\n".join(lines)
