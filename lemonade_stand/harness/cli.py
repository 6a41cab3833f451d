#!/usr/bin/env python3
# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
CLI entry point for the Lemonade Stand game.

Provides commands for playing interactively, simulating scripted
strategies, and managing configuration files.

Usage:
    # Play a game in the terminal
    lemonade-stand play --seed 42

    # Simulate a fixed plan across several seeds
    lemonade-stand simulate --ads 1 --cups 20 --price 1.00 --seeds 1,2,3

    # Simulate every strategy in a config file
    lemonade-stand batch lemonade.yaml

    # Write an example config file
    lemonade-stand init-config lemonade.yaml
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..errors import ConfigError, GameOverViolation, InsufficientFunds
from ..game import GameState, new_game, play_day
from ..models import DayOutcome, GameConfig
from ..planner import max_affordable_cups, plan_cost, plan_day

load_dotenv()

CONFIG_ENVVAR = "LEMONADE_STAND_CONFIG"

app = typer.Typer(
    name="lemonade-stand",
    help="Lemonade Stand - run a lemonade stand one day at a time",
    add_completion=False,
)
console = Console()


def _load_game_config(config_file: Optional[Path]) -> GameConfig:
    """Game constants from a config file, or defaults."""
    from .config import load_game_config

    if config_file is None:
        return GameConfig()
    try:
        return load_game_config(config_file)
    except ConfigError as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _parse_seeds(seeds: str) -> list[int]:
    try:
        return [int(s.strip()) for s in seeds.split(",") if s.strip()]
    except ValueError:
        console.print(f"[red]Invalid seeds: {escape(seeds)}. Use a comma-separated list of integers[/red]")
        raise typer.Exit(1)


def history_table(outcomes: list[DayOutcome], title: str = "Recent Days") -> Table:
    """Build a rich table of day outcomes (in the order given)."""
    table = Table(title=title)
    table.add_column("Day", justify="right", style="cyan")
    table.add_column("Forecast")
    table.add_column("Actual")
    table.add_column("Ads", justify="right")
    table.add_column("Cups", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Sold", justify="right")
    table.add_column("Revenue", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Money", justify="right", style="bold")

    for o in outcomes:
        d = o.to_display_dict()
        profit_style = "green" if o.profit >= 0 else "red"
        table.add_row(
            str(d["day"]),
            d["forecast"],
            d["actual_weather"],
            str(d["ads"]),
            str(d["cups"]),
            f"${d['price']:.2f}",
            str(d["sales"]),
            f"${d['revenue']:.2f}",
            f"${d['cost']:.2f}",
            f"[{profit_style}]${d['profit']:.2f}[/{profit_style}]",
            f"${d['money_after']:.2f}",
        )
    return table


def _print_status(state: GameState) -> None:
    forecast = state.forecast
    console.print()
    console.print(f"[bold]Day {state.day}[/bold]  Money: [bold]${state.money:.2f}[/bold]")
    console.print(
        f"Forecast: [cyan]{forecast.type.value}[/cyan] "
        f"[dim]({forecast.base_customers:g} base customers, x{forecast.multiplier:g})[/dim]"
    )


@app.command()
def play(
    seed: Optional[int] = typer.Option(
        None,
        "--seed", "-s",
        help="Random seed for reproducibility"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        envvar=CONFIG_ENVVAR,
        help="YAML config file with a 'game' section"
    ),
):
    """
    Play the game interactively until you go broke or quit.

    Examples:
        lemonade-stand play
        lemonade-stand play --seed 42 --config lemonade.yaml
    """
    config = _load_game_config(config_file)
    state = new_game(config=config, seed=seed)

    console.print(f"\n[bold yellow]🍋 Lemonade Stand[/bold yellow]")
    console.print(
        f"[dim]Signs ${config.ad_cost:.2f} each, cups ${config.cup_cost:.2f} each, "
        f"overhead ${config.daily_overhead:.2f} per day[/dim]"
    )

    while state.can_play:
        _print_status(state)
        draft = state.draft_plan
        ads = typer.prompt("Advertising signs", default=draft.ads, type=int)
        suggested = max_affordable_cups(state.money, max(0, ads), config)
        cups = typer.prompt(f"Cups of lemonade (up to {suggested} affordable)", default=draft.cups, type=int)
        price = typer.prompt("Price per cup", default=draft.price, type=float)

        plan = plan_day(ads, cups, price)
        console.print(f"[dim]Planned cost: ${plan_cost(plan, config):.2f}[/dim]")

        try:
            outcome = play_day(state, plan)
        except InsufficientFunds as e:
            console.print(f"[red]{escape(str(e))}. Adjust your plan.[/red]")
            continue
        except GameOverViolation as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            break

        emoji = "📈" if outcome.profit >= 0 else "📉"
        console.print(
            f"{emoji} The weather was [cyan]{outcome.actual_weather_type.value}[/cyan]. "
            f"You sold {outcome.sales} cups and made ${outcome.profit:.2f}!"
        )
        console.print(history_table(state.recent_history()))

        if not state.game_over and not typer.confirm("Play another day?", default=True):
            break

    if state.game_over:
        console.print("\n[bold red]Game Over! You don't have enough money to continue.[/bold red]")

    stats = state.history.summary()
    console.print(
        f"\n[bold]Days played:[/bold] {stats.days_played}  "
        f"[bold]Cups sold:[/bold] {stats.total_sales}  "
        f"[bold]Total profit:[/bold] ${stats.total_profit:.2f}  "
        f"[bold]Final money:[/bold] ${state.money:.2f}"
    )


@app.command()
def simulate(
    ads: int = typer.Option(0, "--ads", help="Advertising signs per day"),
    cups: int = typer.Option(20, "--cups", help="Cups prepared per day"),
    price: float = typer.Option(1.00, "--price", help="Price per cup"),
    forecast: bool = typer.Option(
        False,
        "--forecast",
        help="Size each day's plan to the forecast instead of playing a fixed plan"
    ),
    seeds: str = typer.Option("42", "--seeds", help="Comma-separated seeds"),
    max_days: int = typer.Option(30, "--days", "-d", help="Maximum days per game"),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        envvar=CONFIG_ENVVAR,
        help="YAML config file with a 'game' section"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every day"),
):
    """
    Simulate a scripted strategy across one or more seeds.

    Examples:
        lemonade-stand simulate --ads 1 --cups 20 --price 1.00
        lemonade-stand simulate --forecast --price 1.50 --seeds 1,2,3 --days 14
    """
    from .metrics import compute_metrics, format_metrics_summary
    from .runner import VerboseCallback, run_episode
    from .strategies import FixedPlanStrategy, ForecastStrategy

    config = _load_game_config(config_file)
    if forecast:
        strategy = ForecastStrategy(price=price)
    else:
        strategy = FixedPlanStrategy(ads=ads, cups=cups, price=price)

    console.print(f"\n[bold yellow]🍋 Lemonade Stand Simulation[/bold yellow]")
    console.print(f"[dim]Strategy: {escape(strategy.name)}[/dim]")

    callbacks = [VerboseCallback(console)] if verbose else []
    results = []
    for seed in _parse_seeds(seeds):
        if verbose:
            console.print(f"\n[bold]Seed {seed}[/bold]")
        result = run_episode(strategy, seed=seed, config=config, max_days=max_days, callbacks=callbacks)
        results.append(result)

        status = "[red]broke[/red]" if result.game_over else "[green]solvent[/green]"
        console.print(
            f"seed {seed}: {result.days_played} days, {status}, "
            f"final money ${result.final_money:.2f}, profit ${result.total_profit:.2f}"
        )
        if result.error:
            console.print(f"   [yellow]Stopped early: {escape(result.error)}[/yellow]")

    if len(results) == 1:
        console.print(history_table(results[0].outcomes, title="All Days"))

    console.print()
    for metrics in compute_metrics(results):
        console.print(format_metrics_summary(metrics))


@app.command()
def batch(
    config_file: Path = typer.Argument(
        ...,
        help="YAML configuration file with strategies and seeds"
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be run without executing"
    ),
):
    """
    Simulate every strategy in a config file against every seed.

    Examples:
        lemonade-stand batch lemonade.yaml
        lemonade-stand batch lemonade.yaml --dry-run
    """
    from .config import load_config
    from .metrics import compute_metrics
    from .runner import Runner

    if not config_file.exists():
        console.print(f"[red]Config file not found: {config_file}[/red]")
        raise typer.Exit(1)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold yellow]🍋 Lemonade Stand Batch Run[/bold yellow]")
    console.print(f"[dim]Config: {config_file}[/dim]")
    console.print(f"[dim]Name: {escape(config.name)}[/dim]")
    console.print(f"[dim]Total runs: {config.get_total_runs()}[/dim]")

    if dry_run:
        console.print("\n[yellow]Dry run - showing planned runs:[/yellow]")
        for strategy in config.strategies:
            for seed in config.seeds:
                console.print(f"  • {escape(strategy.label)} (seed={seed}, max_days={config.max_days})")
        return

    results = Runner(config, console=console).run()

    table = Table(title="Strategy Comparison")
    table.add_column("Strategy", style="cyan")
    table.add_column("Games", justify="right")
    table.add_column("Mean Profit", justify="right")
    table.add_column("Range", justify="right")
    table.add_column("Survival", justify="right")
    table.add_column("Mean Days", justify="right")
    table.add_column("Sell-through", justify="right")

    for m in compute_metrics(results):
        table.add_row(
            escape(m.strategy),
            str(m.episodes),
            f"${m.mean_profit:.2f}",
            f"${m.min_profit:.2f} .. ${m.max_profit:.2f}",
            f"{m.survival_rate:.0%}",
            f"{m.mean_days:.1f}",
            f"{m.sell_through:.0%}",
        )

    console.print("\n[bold green]Batch complete![/bold green]")
    console.print(table)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        Path("lemonade.yaml"),
        help="Where to write the example config"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """
    Write an example configuration file.

    Example:
        lemonade-stand init-config lemonade.yaml
    """
    from .config import create_example_config

    if path.exists() and not force:
        console.print(f"[red]{path} already exists. Use --force to overwrite.[/red]")
        raise typer.Exit(1)

    create_example_config(path)
    console.print(f"[green]Wrote example config to {path}[/green]")


@app.command()
def weather():
    """Show the weather catalog."""
    from ..weather import WeatherCatalog

    table = Table(title="Weather")
    table.add_column("Type", style="cyan")
    table.add_column("Base Customers", justify="right")
    table.add_column("Multiplier", justify="right")
    for variant in WeatherCatalog():
        table.add_row(variant.type.value, f"{variant.base_customers:g}", f"x{variant.multiplier:g}")
    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
