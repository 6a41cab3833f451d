# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Scripted strategies for playing the game automatically.

A strategy looks at the game state before a day and returns the plan to
play. Strategies never mutate the state.
"""

import math
from typing import Protocol

from ..game import GameState
from ..models import DayPlan
from ..planner import max_affordable_cups, plan_cost, plan_day
from ..resolver import resolve
from .config import StrategyConfig


class Strategy(Protocol):
    """Protocol for anything that can decide a day's plan."""

    name: str

    def decide(self, state: GameState) -> DayPlan:
        ...


class FixedPlanStrategy:
    """
    Plays the same plan every day.

    When the plan is not affordable, signs are dropped first and then cups
    are cut to what the money covers.
    """

    def __init__(self, ads: int = 0, cups: int = 20, price: float = 1.00, name: str | None = None):
        self.plan = plan_day(ads, cups, price)
        self.name = name or f"fixed({self.plan.ads} ads, {self.plan.cups} cups, ${self.plan.price:.2f})"

    def decide(self, state: GameState) -> DayPlan:
        if plan_cost(self.plan, state.config) <= state.money:
            return self.plan

        ads = self.plan.ads
        while ads > 0 and plan_cost(DayPlan(ads=ads, cups=0), state.config) > state.money:
            ads -= 1
        cups = min(self.plan.cups, max_affordable_cups(state.money, ads, state.config))
        return plan_day(ads, cups, self.plan.price)


class ForecastStrategy:
    """
    Trusts the forecast and buys the most profitable affordable plan for it.

    Tries every useful number of signs and prepares exactly as many cups as
    the forecast weather would sell at the chosen price.
    """

    def __init__(self, price: float = 1.00, name: str | None = None):
        self.price = max(0.0, float(price))
        self.name = name or f"forecast@${self.price:.2f}"

    def decide(self, state: GameState) -> DayPlan:
        config = state.config
        forecast = state.forecast

        # More signs than this cannot add customers
        if config.ad_multiplier > 0:
            max_useful_ads = math.ceil(config.ad_cap / config.ad_multiplier)
        else:
            max_useful_ads = 0

        best = plan_day(0, 0, self.price)
        best_profit = None
        for ads in range(max_useful_ads + 1):
            if plan_cost(DayPlan(ads=ads, cups=0), config) > state.money:
                break
            probe = resolve(plan_day(ads, 10**6, self.price), forecast, forecast, config)
            cups = min(probe.potential, max_affordable_cups(state.money, ads, config))
            candidate = plan_day(ads, cups, self.price)
            profit = resolve(candidate, forecast, forecast, config).profit
            if best_profit is None or profit > best_profit:
                best, best_profit = candidate, profit

        return best


def create_strategy(config: StrategyConfig) -> Strategy:
    """Build a strategy from its configuration."""
    if config.type == "fixed":
        return FixedPlanStrategy(ads=config.ads, cups=config.cups, price=config.price, name=config.name)
    if config.type == "forecast":
        return ForecastStrategy(price=config.price, name=config.name)
    raise ValueError(f"Unknown strategy type: {config.type}")
