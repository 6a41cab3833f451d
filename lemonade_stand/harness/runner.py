# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Run orchestration for scripted games.

Plays strategies against seeded games and collects per-episode results,
with optional progress output through rich.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from ..errors import InsufficientFunds
from ..game import GameState, new_game, play_day
from ..models import DayOutcome, GameConfig, HistoryStats
from .config import SimulationConfig
from .strategies import Strategy, create_strategy


@dataclass(kw_only=True)
class EpisodeResult:
    """Complete result of playing one game."""
    strategy: str
    seed: int | None
    days_played: int
    final_money: float
    game_over: bool  # Went broke before max_days
    stats: HistoryStats
    outcomes: list[DayOutcome] = field(default_factory=list)

    # Set when the strategy produced a plan the game refused
    error: str | None = None

    @property
    def total_profit(self) -> float:
        return self.stats.total_profit

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "seed": self.seed,
            "days_played": self.days_played,
            "final_money": round(self.final_money, 2),
            "game_over": self.game_over,
            "error": self.error,
            "stats": self.stats.to_dict(),
            "outcomes": [o.to_display_dict() for o in self.outcomes],
        }


class EpisodeCallback(Protocol):
    """Protocol for callbacks that monitor a game as it is played."""

    def on_day_start(self, state: GameState) -> None:
        ...

    def on_day_end(self, outcome: DayOutcome) -> None:
        ...


class VerboseCallback:
    """Callback that prints each day to the console."""

    WEATHER_EMOJI = {
        "Hot": "🔥",
        "Sunny": "☀️",
        "Mild": "⛅",
        "Windy": "💨",
        "Rainy": "🌧️",
        "Stormy": "⛈️",
    }

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def on_day_start(self, state: GameState) -> None:
        forecast = state.forecast.type.value
        emoji = self.WEATHER_EMOJI.get(forecast, "🌡️")
        self.console.print(
            f"[cyan]📅 Day {state.day}:[/cyan] forecast {emoji} {forecast}, money ${state.money:.2f}"
        )

    def on_day_end(self, outcome: DayOutcome) -> None:
        emoji = "📈" if outcome.profit > 0 else "📉"
        actual = outcome.actual_weather_type.value
        self.console.print(
            f"   [dim]Plan: {outcome.ads} ads, {outcome.cups} cups at ${outcome.price:.2f} "
            f"(actual weather: {actual})[/dim]"
        )
        self.console.print(f"   {emoji} Sold {outcome.sales} cups, profit: ${outcome.profit:.2f}")


def run_episode(
    strategy: Strategy,
    seed: int | None = None,
    config: GameConfig | None = None,
    max_days: int = 30,
    callbacks: list[EpisodeCallback] | None = None,
) -> EpisodeResult:
    """
    Play one game with a strategy until it goes broke or `max_days` pass.

    A plan the game refuses ends the episode and is recorded in `error`.
    """
    callbacks = callbacks or []
    state = new_game(config=config, seed=seed)
    error = None

    while state.can_play and state.day <= max_days:
        for cb in callbacks:
            cb.on_day_start(state)
        plan = strategy.decide(state)
        try:
            outcome = play_day(state, plan)
        except InsufficientFunds as e:
            error = str(e)
            break
        for cb in callbacks:
            cb.on_day_end(outcome)

    return EpisodeResult(
        strategy=strategy.name,
        seed=seed,
        days_played=len(state.history),
        final_money=state.money,
        game_over=state.game_over,
        stats=state.history.summary(),
        outcomes=state.history.entries(),
        error=error,
    )


class Runner:
    """Plays every strategy in a SimulationConfig against every seed."""

    def __init__(self, config: SimulationConfig, console: Console | None = None, quiet: bool = False):
        self.config = config
        self.console = console or Console()
        self.quiet = quiet

    def run(self, on_result: Callable[[EpisodeResult], None] | None = None) -> list[EpisodeResult]:
        results: list[EpisodeResult] = []
        strategies = [create_strategy(s) for s in self.config.strategies]

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self.console,
            disable=self.quiet,
        ) as progress:
            task = progress.add_task("Simulating...", total=self.config.get_total_runs())
            for strategy in strategies:
                for seed in self.config.seeds:
                    progress.update(task, description=f"{strategy.name} (seed {seed})")
                    result = run_episode(
                        strategy,
                        seed=seed,
                        config=self.config.game,
                        max_days=self.config.max_days,
                    )
                    results.append(result)
                    if on_result:
                        on_result(result)
                    progress.advance(task)

        return results
