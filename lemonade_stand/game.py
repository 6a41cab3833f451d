# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Game state and the day lifecycle.

A game is either active or over. Each successful `play_day()` runs one
atomic sequence:

    validate plan -> draw actual weather -> resolve -> apply

A rejected attempt (unaffordable plan or game already over) leaves the
state untouched and consumes no random draws, so a game driven by a
recorded random sequence replays identically.

Example:
    >>> state = new_game(seed=42)
    >>> plan = plan_day(ads=1, cups=20, price=1.00)
    >>> outcome = play_day(state, plan)
    >>> print(f"Day {outcome.day}: sold {outcome.sales} cups, ${outcome.profit:.2f}")
"""

import random
from typing import List, Optional

from .errors import GameOverViolation, InsufficientFunds
from .history import HistoryLog
from .models import DayOutcome, DayPlan, GameConfig, WeatherVariant
from .planner import plan_day, validate
from .resolver import DayResult, resolve
from .weather import RandomSource, WeatherCatalog


class GameState:
    """
    Everything that changes over a game: money, day, forecast, history.

    Invariants:
    - `len(history) == day - 1`
    - `game_over` only goes from False to True, and is set by the same
      `apply()` that drops money below the minimum
    - once over, nothing about the game changes again
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
        catalog: Optional[WeatherCatalog] = None,
    ):
        self.config = config or GameConfig()
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.catalog = catalog or WeatherCatalog(forecast_accuracy=self.config.forecast_accuracy)

        self.money: float = self.config.starting_money
        self.day: int = 1
        self.history = HistoryLog()
        self.game_over: bool = False
        self.draft_plan: DayPlan = self._default_plan()
        self.forecast: WeatherVariant = self.catalog.draw_random(self.rng)

    def _default_plan(self) -> DayPlan:
        return DayPlan(ads=0, cups=0, price=self.config.default_price)

    @property
    def can_play(self) -> bool:
        """Whether another day may be attempted."""
        return not self.game_over and self.money >= self.config.min_money

    def recent_history(self, n: Optional[int] = None) -> List[DayOutcome]:
        """Most recent days, newest first (defaults to the configured window)."""
        return self.history.recent(self.config.history_window if n is None else n)

    def apply(self, result: DayResult, plan: DayPlan, actual_weather: WeatherVariant) -> DayOutcome:
        """
        Apply a resolved day and advance to the next one.

        Raises:
            GameOverViolation: if the game has already ended
        """
        if self.game_over:
            raise GameOverViolation(day=self.day, money=self.money)

        # Nothing changes until the next forecast is drawn
        next_forecast = self.catalog.draw_random(self.rng)

        money = self.money + result.profit
        outcome = DayOutcome(
            day=self.day,
            forecast_type=self.forecast.type,
            actual_weather_type=actual_weather.type,
            ads=plan.ads,
            cups=plan.cups,
            price=plan.price,
            sales=result.sales,
            revenue=result.revenue,
            cost=result.cost,
            profit=result.profit,
            money_after=money,
        )
        self.money = money
        self.history.append(outcome)
        self.day += 1
        self.forecast = next_forecast
        self.draft_plan = self._default_plan()

        if self.money < self.config.min_money:
            self.game_over = True

        return outcome

    def snapshot(self) -> dict:
        """Read-only summary of the current state."""
        return {
            "day": self.day,
            "money": round(self.money, 2),
            "forecast": self.forecast.type.value,
            "game_over": self.game_over,
            "can_play": self.can_play,
            "recent_history": [o.to_display_dict() for o in self.recent_history()],
        }


def new_game(
    config: Optional[GameConfig] = None,
    rng: Optional[RandomSource] = None,
    seed: Optional[int] = None,
) -> GameState:
    """
    Start a new game.

    Args:
        config: Game configuration (defaults if None)
        rng: Random source to use; takes precedence over `seed`
        seed: Seed for a fresh `random.Random` when no source is given
    """
    if rng is None:
        rng = random.Random(seed)
    return GameState(config=config, rng=rng)


def play_day(state: GameState, plan: DayPlan) -> DayOutcome:
    """
    Play one day.

    Returns:
        The day's outcome, already appended to the state's history

    Raises:
        GameOverViolation: if the game has ended (state untouched)
        InsufficientFunds: if the plan costs more than the money on hand, or
            the money is already below the minimum needed to play (state
            untouched)
    """
    if state.game_over:
        raise GameOverViolation(day=state.day, money=state.money)
    if not state.can_play:
        raise InsufficientFunds(cost=state.config.min_money, available=state.money)

    plan = plan_day(plan.ads, plan.cups, plan.price)
    validate(plan, state.money, state.config)

    forecast = state.forecast
    actual = state.catalog.draw_actual(forecast, state.rng)
    result = resolve(plan, forecast, actual, state.config)
    return state.apply(result, plan, actual)


__all__ = ["GameState", "new_game", "plan_day", "play_day"]
