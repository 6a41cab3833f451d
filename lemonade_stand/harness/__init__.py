# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Lemonade Stand Simulation Harness.

Plays scripted strategies against seeded games and compares them.

Features:
- Fixed-plan and forecast-driven strategies
- Batch runs with YAML configuration
- Progress tracking and rich tables
- Aggregate metrics per strategy
"""

from .config import (
    SimulationConfig,
    StrategyConfig,
    load_config,
    load_game_config,
    save_config,
    create_example_config,
    VALID_STRATEGIES,
)
from .metrics import (
    StrategyMetrics,
    compute_metrics,
    compute_strategy_metrics,
    format_metrics_summary,
)
from .runner import EpisodeResult, Runner, VerboseCallback, run_episode
from .strategies import FixedPlanStrategy, ForecastStrategy, Strategy, create_strategy

__all__ = [
    # Config
    "SimulationConfig",
    "StrategyConfig",
    "load_config",
    "load_game_config",
    "save_config",
    "create_example_config",
    "VALID_STRATEGIES",
    # Runner
    "EpisodeResult",
    "Runner",
    "VerboseCallback",
    "run_episode",
    # Strategies
    "Strategy",
    "FixedPlanStrategy",
    "ForecastStrategy",
    "create_strategy",
    # Metrics
    "StrategyMetrics",
    "compute_metrics",
    "compute_strategy_metrics",
    "format_metrics_summary",
]
