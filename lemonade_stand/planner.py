# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Day planning: clamp player inputs and check the plan is affordable.

Inputs are never rejected for being out of range. Negative ads, cups or
price are coerced to zero; only an unaffordable plan is an error.
"""

import math
from typing import Optional

from .errors import InsufficientFunds
from .models import DayPlan, GameConfig

DEFAULT_CONFIG = GameConfig()


def plan_day(ads: float = 0, cups: float = 0, price: float = 1.00) -> DayPlan:
    """
    Build a clamped plan for the day.

    Fractional ads/cups are truncated toward zero; price has no upper bound.
    """
    return DayPlan(
        ads=max(0, int(ads)),
        cups=max(0, int(cups)),
        price=max(0.0, float(price)),
    )


def clamp_plan(plan: DayPlan) -> DayPlan:
    """Re-apply input clamping to a plan built by hand."""
    return plan_day(plan.ads, plan.cups, plan.price)


def plan_cost(plan: DayPlan, config: Optional[GameConfig] = None) -> float:
    """Overhead plus signs plus cups, in dollars."""
    config = config or DEFAULT_CONFIG
    plan = clamp_plan(plan)
    return (
        config.daily_overhead
        + plan.ads * config.ad_cost
        + plan.cups * config.cup_cost
    )


def validate(plan: DayPlan, available_money: float, config: Optional[GameConfig] = None) -> float:
    """
    Check that a plan is affordable.

    Args:
        plan: The plan to check
        available_money: Money on hand
        config: Game configuration (defaults if None)

    Returns:
        The planned cost for the day

    Raises:
        InsufficientFunds: if the cost exceeds available money
    """
    cost = plan_cost(plan, config)
    if cost > available_money:
        raise InsufficientFunds(cost=cost, available=available_money)
    return cost


def max_affordable_cups(available_money: float, ads: int = 0, config: Optional[GameConfig] = None) -> int:
    """Largest number of cups affordable after overhead and signs (0 if none)."""
    config = config or DEFAULT_CONFIG
    budget = available_money - config.daily_overhead - max(0, ads) * config.ad_cost
    if budget <= 0 or config.cup_cost <= 0:
        return 0
    cups = math.floor(budget / config.cup_cost + 1e-9)
    # Float rounding can land one cup over budget
    while cups > 0 and plan_cost(DayPlan(ads=max(0, ads), cups=cups), config) > available_money:
        cups -= 1
    return cups
