# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Lemonade Stand - a classic single-player lemonade stand game.

Each day the player reads the weather forecast and commits to:
- How many advertising signs to put up
- How many cups of lemonade to prepare
- What to charge per cup

The engine resolves the day into sales and profit. The game ends when the
player can no longer afford a single cup.

Quick Start:
    # Play in the terminal
    lemonade-stand play --seed 42

    # Or use the Python API
    from lemonade_stand import new_game, plan_day, play_day

    state = new_game(seed=42)
    outcome = play_day(state, plan_day(ads=1, cups=20, price=1.00))
    print(outcome.sales, outcome.profit, state.money)

The OpenEnv server and HTTP client live in `lemonade_stand.server` and
`lemonade_stand.client`.
"""

from .errors import ConfigError, GameOverViolation, InsufficientFunds, LemonadeStandError
from .game import GameState, new_game, play_day
from .history import HistoryLog
from .models import (
    WEATHER_CATALOG,
    DayOutcome,
    DayPlan,
    GameConfig,
    HistoryStats,
    WeatherType,
    WeatherVariant,
)
from .planner import plan_cost, plan_day, validate
from .resolver import DayResult, resolve
from .weather import RandomSource, RecordingRandom, ReplayRandom, WeatherCatalog

__all__ = [
    # Core models
    "WeatherType",
    "WeatherVariant",
    "WEATHER_CATALOG",
    "DayPlan",
    "DayOutcome",
    "GameConfig",
    "HistoryStats",
    # Engine
    "WeatherCatalog",
    "RandomSource",
    "ReplayRandom",
    "RecordingRandom",
    "plan_day",
    "plan_cost",
    "validate",
    "DayResult",
    "resolve",
    "HistoryLog",
    "GameState",
    "new_game",
    "play_day",
    # Errors
    "LemonadeStandError",
    "InsufficientFunds",
    "GameOverViolation",
    "ConfigError",
]
