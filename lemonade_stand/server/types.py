# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
OpenEnv action and observation types for the Lemonade Stand environment.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from openenv_core.env_server.types import Action, Observation


@dataclass(kw_only=True)
class LemonadeAction(Action):
    """
    Action for the Lemonade Stand environment.

    The player decides the day's plan:
    - ads: Advertising signs to put up ($0.50 each by default)
    - cups: Cups of lemonade to prepare ($0.05 each by default)
    - price: Price per cup in dollars

    Negative values are clamped to zero rather than rejected.
    """
    ads: int = 0
    cups: int = 0
    price: float = 1.00


@dataclass(kw_only=True)
class LemonadeObservation(Observation):
    """
    Observation from the Lemonade Stand environment.

    Describes the day about to be played, plus the result of the day just
    played (all zero/None after a reset or an error response).
    """
    # Current day info
    day: int
    money: float
    forecast: str  # Weather forecast for the day about to be played
    forecast_base_customers: float
    forecast_multiplier: float

    # Game state
    can_play: bool
    game_over: bool

    # Result of the day just played
    actual_weather: Optional[str] = None
    ads: int = 0
    cups: int = 0
    price: float = 0.0
    sales: int = 0
    revenue: float = 0.0
    cost: float = 0.0
    profit: float = 0.0

    # Most recent days, newest first
    recent_history: List[Dict[str, Any]] = field(default_factory=list)
    weather_catalog: Optional[List[Dict[str, Any]]] = None

    # Error feedback (when the day could not be played)
    action_errors: List[str] = field(default_factory=list)
    is_error_response: bool = False  # True if this is an error response (day not advanced)
