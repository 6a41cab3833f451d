# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Configuration schema and loader for simulation runs.

Supports YAML configuration files for reproducible runs.

Example config.yaml:
    name: "Strategy Comparison"
    game:
      starting_money: 5.00
      forecast_accuracy: 0.8
    seeds: [1, 2, 3, 42, 100]
    max_days: 30
    strategies:
      - type: fixed
        ads: 1
        cups: 20
        price: 1.00
      - type: forecast
        price: 1.50
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

from ..errors import ConfigError
from ..models import GameConfig


# Valid strategy types
StrategyType = Literal["fixed", "forecast"]
VALID_STRATEGIES = ["fixed", "forecast"]


@dataclass
class StrategyConfig:
    """Configuration for a strategy to simulate."""
    type: StrategyType = "fixed"
    ads: int = 0
    cups: int = 20
    price: float = 1.00
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StrategyConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"Strategy entry must be a mapping, got {data!r}")

        strategy_type = data.get("type", "fixed")
        if strategy_type not in VALID_STRATEGIES:
            raise ConfigError(f"Invalid strategy type: {strategy_type}. Must be one of {VALID_STRATEGIES}")

        try:
            return cls(
                type=strategy_type,
                ads=int(data.get("ads", 0)),
                cups=int(data.get("cups", 20)),
                price=float(data.get("price", 1.00)),
                name=data.get("name"),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid strategy {data!r}: {e}") from e

    @property
    def label(self) -> str:
        if self.name:
            return self.name
        if self.type == "forecast":
            return f"forecast@${self.price:.2f}"
        return f"fixed({self.ads} ads, {self.cups} cups, ${self.price:.2f})"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "ads": self.ads,
            "cups": self.cups,
            "price": self.price,
        }
        if self.name:
            data["name"] = self.name
        return data


@dataclass
class SimulationConfig:
    """
    Complete configuration for a simulation run.

    Every strategy is played once per seed.

    Attributes:
        name: Human-readable name for this run
        game: Game constants (defaults if omitted)
        strategies: Strategies to evaluate
        seeds: Seeds to play each strategy with
        max_days: Stop a game after this many days even if still solvent
    """
    name: str = "Unnamed Simulation"
    game: GameConfig = field(default_factory=GameConfig)
    strategies: list[StrategyConfig] = field(default_factory=lambda: [StrategyConfig()])
    seeds: list[int] = field(default_factory=lambda: [42])
    max_days: int = 30

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SimulationConfig":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        strategies = [StrategyConfig.from_dict(s) for s in data.get("strategies", [])]
        if not strategies:
            strategies = [StrategyConfig()]

        seeds = data.get("seeds", [42])
        if not isinstance(seeds, list) or not all(isinstance(s, int) and not isinstance(s, bool) for s in seeds):
            raise ConfigError(f"Invalid seeds: {seeds!r}. Must be a list of integers")

        max_days = data.get("max_days", 30)
        if isinstance(max_days, bool) or not isinstance(max_days, int) or max_days < 1:
            raise ConfigError(f"Invalid max_days: {max_days!r}. Must be a positive integer")

        return cls(
            name=data.get("name", "Unnamed Simulation"),
            game=GameConfig.from_dict(data.get("game")),
            strategies=strategies,
            seeds=seeds,
            max_days=max_days,
        )

    def get_total_runs(self) -> int:
        """Number of games this configuration plays."""
        return len(self.strategies) * len(self.seeds)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "game": self.game.to_dict(),
            "strategies": [s.to_dict() for s in self.strategies],
            "seeds": list(self.seeds),
            "max_days": self.max_days,
        }


def load_config(path: str | Path) -> SimulationConfig:
    """
    Load a simulation configuration from a YAML file.

    Args:
        path: Path to YAML config file

    Returns:
        SimulationConfig instance

    Raises:
        ConfigError: if the file is missing, is not valid YAML, or holds
            invalid values
    """
    path = Path(path)

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    return SimulationConfig.from_dict(data)


def load_game_config(path: str | Path) -> GameConfig:
    """Load only the `game` section of a config file."""
    return load_config(path).game


def save_config(config: SimulationConfig, path: str | Path) -> None:
    """
    Save a simulation configuration to a YAML file.

    Args:
        config: SimulationConfig to save
        path: Output path
    """
    path = Path(path)
    with open(path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


# Example config template
EXAMPLE_CONFIG = """# Lemonade Stand Simulation Configuration
name: "Strategy Comparison"

game:
  starting_money: 5.00
  daily_overhead: 0.25    # Charged every day, even with nothing for sale
  cup_cost: 0.05
  ad_cost: 0.50
  # min_required_money defaults to cup_cost
  forecast_accuracy: 0.8  # Chance the forecast is right
  ad_multiplier: 3        # Customers per sign
  ad_cap: 30              # Most customers signs can bring
  windy_ad_effectiveness: 0.5
  price_penalty_threshold: 1.00
  price_penalty_rate: 0.2 # 20% fewer customers per dollar above threshold
  default_price: 1.00
  history_window: 5

seeds: [1, 2, 3, 42, 100]
max_days: 30

strategies:
  # Same plan every day
  - type: fixed
    ads: 1
    cups: 20
    price: 1.00

  # Size the plan to the forecast and the cash on hand
  - type: forecast
    price: 1.50

# ==========================================================================
# Strategy types:
#   - fixed: plays the same ads/cups/price every day (scaled down when
#            it cannot be afforded)
#   - forecast: buys signs and cups according to tomorrow's forecast
# ==========================================================================
"""


def create_example_config(path: str | Path = "lemonade.yaml") -> None:
    """
    Create an example configuration file.

    Args:
        path: Output path for the config file
    """
    path = Path(path)
    with open(path, "w") as f:
        f.write(EXAMPLE_CONFIG)
