# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Data models for the Lemonade Stand game.

A classic lemonade stand simulation where the player must:
- Read the weather forecast for tomorrow
- Decide how many advertising signs to put up
- Decide how many cups of lemonade to prepare
- Set the price per cup

Money is tracked in dollars as floats. Values are kept at full precision
for accumulation and only rounded to two decimals for display.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import ConfigError


class WeatherType(str, Enum):
    """Weather conditions that affect lemonade sales."""
    HOT = "Hot"  # Extra hot day - high demand!
    SUNNY = "Sunny"
    MILD = "Mild"
    WINDY = "Windy"  # Signs blow over - ads only half as effective
    RAINY = "Rainy"
    STORMY = "Stormy"  # Very few customers


@dataclass(frozen=True)
class WeatherVariant:
    """A weather variant with its effect on customer traffic."""
    type: WeatherType
    base_customers: float  # Customers who show up without any advertising
    multiplier: float  # Demand multiplier applied after ads


# The fixed catalog of weather variants. Order only matters for uniform
# random selection.
WEATHER_CATALOG: List[WeatherVariant] = [
    WeatherVariant(type=WeatherType.HOT, base_customers=40, multiplier=1.5),
    WeatherVariant(type=WeatherType.SUNNY, base_customers=30, multiplier=1.2),
    WeatherVariant(type=WeatherType.MILD, base_customers=25, multiplier=1.0),
    WeatherVariant(type=WeatherType.WINDY, base_customers=20, multiplier=0.7),
    WeatherVariant(type=WeatherType.RAINY, base_customers=15, multiplier=0.5),
    WeatherVariant(type=WeatherType.STORMY, base_customers=8, multiplier=0.3),
]


@dataclass(frozen=True)
class DayPlan:
    """
    The player's commitment for the day about to be resolved.

    Build plans with `planner.plan_day()` so that inputs are clamped.
    """
    ads: int = 0  # Advertising signs
    cups: int = 0  # Cups of lemonade prepared
    price: float = 1.00  # Dollars per cup


@dataclass(frozen=True)
class DayOutcome:
    """
    Record of a single resolved day. Appended to the history log.

    Currency fields keep full precision; use `to_display_dict()` for
    two-decimal values.
    """
    day: int
    forecast_type: WeatherType
    actual_weather_type: WeatherType
    ads: int
    cups: int
    price: float
    sales: int
    revenue: float
    cost: float
    profit: float
    money_after: float

    def to_display_dict(self) -> Dict[str, Any]:
        """Convert to a dict with currency rounded to cents."""
        return {
            "day": self.day,
            "forecast": self.forecast_type.value,
            "actual_weather": self.actual_weather_type.value,
            "ads": self.ads,
            "cups": self.cups,
            "price": round(self.price, 2),
            "sales": self.sales,
            "revenue": round(self.revenue, 2),
            "cost": round(self.cost, 2),
            "profit": round(self.profit, 2),
            "money_after": round(self.money_after, 2),
        }


@dataclass(kw_only=True)
class GameConfig:
    """Configuration for a lemonade stand game session. All amounts in dollars."""
    starting_money: float = 5.00

    # Daily costs
    daily_overhead: float = 0.25  # Charged every day to discourage skipping
    cup_cost: float = 0.05  # per cup
    ad_cost: float = 0.50  # per sign

    # Below this the player cannot afford a single cup and the game ends.
    # None means "same as cup_cost".
    min_required_money: Optional[float] = None

    # Weather
    forecast_accuracy: float = 0.8  # Chance the actual weather matches the forecast

    # Advertising
    ad_multiplier: float = 3  # Customers per sign
    ad_cap: float = 30  # Maximum customers from advertising
    windy_ad_effectiveness: float = 0.5  # Signs blow over on windy days

    # Pricing
    price_penalty_threshold: float = 1.00  # Reference price; no penalty at or below
    price_penalty_rate: float = 0.2  # 20% fewer customers per dollar above threshold
    default_price: float = 1.00  # Price pre-filled for each new day

    # How many past days are surfaced to the player
    history_window: int = 5

    @property
    def min_money(self) -> float:
        """Effective minimum money needed to keep playing."""
        if self.min_required_money is None:
            return self.cup_cost
        return self.min_required_money

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GameConfig":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Game config must be a mapping, got {type(data).__name__}")

        unknown = sorted(set(data) - set(cls.field_names()))
        if unknown:
            raise ConfigError(f"Unknown game config keys: {unknown}. Must be among {cls.field_names()}")

        values: Dict[str, Any] = {}
        for name, value in data.items():
            if value is None and name == "min_required_money":
                values[name] = None
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"Invalid {name}: {value!r}. Must be a number")
            values[name] = int(value) if name == "history_window" else float(value)

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ConfigError if any value is out of range."""
        non_negative = [
            "starting_money",
            "daily_overhead",
            "cup_cost",
            "ad_cost",
            "ad_multiplier",
            "ad_cap",
            "windy_ad_effectiveness",
            "price_penalty_threshold",
            "price_penalty_rate",
            "default_price",
        ]
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ConfigError(f"Invalid {name}: {getattr(self, name)}. Must be >= 0")
        if self.min_required_money is not None and self.min_required_money < 0:
            raise ConfigError(f"Invalid min_required_money: {self.min_required_money}. Must be >= 0")
        if not 0.0 <= self.forecast_accuracy <= 1.0:
            raise ConfigError(f"Invalid forecast_accuracy: {self.forecast_accuracy}. Must be between 0 and 1")
        if self.history_window < 1:
            raise ConfigError(f"Invalid history_window: {self.history_window}. Must be >= 1")

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass(kw_only=True)
class HistoryStats:
    """Aggregate statistics over the full history of a game."""
    days_played: int = 0
    total_sales: int = 0
    total_revenue: float = 0.0
    total_cost: float = 0.0
    total_profit: float = 0.0
    loss_days: int = 0
    best_day: Optional[int] = None  # Day with the highest profit
    best_profit: Optional[float] = None
    forecast_hit_rate: float = 0.0  # Share of days where the forecast was right
    sales_by_weather: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days_played": self.days_played,
            "total_sales": self.total_sales,
            "total_revenue": round(self.total_revenue, 2),
            "total_cost": round(self.total_cost, 2),
            "total_profit": round(self.total_profit, 2),
            "loss_days": self.loss_days,
            "best_day": self.best_day,
            "best_profit": round(self.best_profit, 2) if self.best_profit is not None else None,
            "forecast_hit_rate": self.forecast_hit_rate,
            "sales_by_weather": dict(self.sales_by_weather),
        }
