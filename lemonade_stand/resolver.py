# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Day resolution: turn a plan and the day's weather into sales and profit.

`resolve()` is a pure function. Given the same plan, forecast and actual
weather it always produces the same result, and it touches no game state.

Demand model:
1. Ads bring `ads * ad_multiplier` customers (halved on windy days),
   capped at `ad_cap`.
2. Weather sets the base crowd and scales the total by its multiplier.
3. Every dollar above the reference price loses `price_penalty_rate` of
   the crowd. The penalty is not capped: far above the reference the
   factor goes negative and demand is floored at zero customers.
4. Sales are limited by the cups prepared.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .models import DayPlan, GameConfig, WeatherType, WeatherVariant
from .planner import DEFAULT_CONFIG, clamp_plan, plan_cost


@dataclass(frozen=True)
class DayResult:
    """Result of resolving one day, with the intermediate demand figures."""
    ad_customers: float
    demand: float  # Before price penalty and inventory
    penalty: float
    potential: int  # Customers willing to buy at this price
    sales: int
    revenue: float
    cost: float
    profit: float
    forecast_hit: bool  # Actual weather matched the forecast


def ad_effectiveness(weather: WeatherVariant, config: Optional[GameConfig] = None) -> float:
    config = config or DEFAULT_CONFIG
    if weather.type == WeatherType.WINDY:
        return config.windy_ad_effectiveness
    return 1.0


def ad_customers(ads: int, weather: WeatherVariant, config: Optional[GameConfig] = None) -> float:
    """Extra customers from signs, with the cap applied."""
    config = config or DEFAULT_CONFIG
    return min(ads * config.ad_multiplier * ad_effectiveness(weather, config), config.ad_cap)


def price_penalty(price: float, config: Optional[GameConfig] = None) -> float:
    """Fraction of demand lost to pricing. Zero at or below the reference price."""
    config = config or DEFAULT_CONFIG
    if price <= config.price_penalty_threshold or config.price_penalty_rate == 0:
        return 0.0
    return (price - config.price_penalty_threshold) * config.price_penalty_rate


def resolve(
    plan: DayPlan,
    forecast: WeatherVariant,
    actual_weather: WeatherVariant,
    config: Optional[GameConfig] = None,
) -> DayResult:
    """
    Resolve one day of sales.

    Args:
        plan: The committed plan (re-clamped here)
        forecast: Weather that was forecast for the day
        actual_weather: Weather that actually happened; drives demand
        config: Game configuration (defaults if None)

    Returns:
        DayResult with sales, revenue, cost and profit. Profit may be negative.
    """
    config = config or DEFAULT_CONFIG
    plan = clamp_plan(plan)

    from_ads = ad_customers(plan.ads, actual_weather, config)
    demand = (actual_weather.base_customers + from_ads) * actual_weather.multiplier
    penalty = price_penalty(plan.price, config)

    # Very high prices zero out demand instead of producing negative customers
    if penalty >= 1:
        potential = 0
    else:
        potential = max(0, math.floor(demand * (1 - penalty)))
    sales = min(potential, plan.cups)

    # 0 * inf would be nan for an unbounded price
    revenue = sales * plan.price if sales else 0.0
    cost = plan_cost(plan, config)

    return DayResult(
        ad_customers=from_ads,
        demand=demand,
        penalty=penalty,
        potential=potential,
        sales=sales,
        revenue=revenue,
        cost=cost,
        profit=revenue - cost,
        forecast_hit=actual_weather.type == forecast.type,
    )
