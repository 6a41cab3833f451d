# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Pytest fixtures for Lemonade Stand tests.
"""

import pytest

from lemonade_stand.game import GameState, new_game
from lemonade_stand.models import GameConfig, WeatherType
from lemonade_stand.weather import ReplayRandom, WeatherCatalog

# Uniform draws that land on each weather type with the default catalog
# (index = floor(u * 6))
DRAW_FOR = {
    WeatherType.HOT: 0.0,
    WeatherType.SUNNY: 0.2,
    WeatherType.MILD: 0.4,
    WeatherType.WINDY: 0.55,
    WeatherType.RAINY: 0.7,
    WeatherType.STORMY: 0.9,
}

# Any draw below forecast_accuracy keeps the forecast
FORECAST_HOLDS = 0.1
FORECAST_MISSES = 0.95


@pytest.fixture
def default_config() -> GameConfig:
    """Default game configuration for tests."""
    return GameConfig()


@pytest.fixture
def catalog() -> WeatherCatalog:
    return WeatherCatalog()


@pytest.fixture
def mild(catalog: WeatherCatalog):
    return catalog.get_variant(WeatherType.MILD)


@pytest.fixture
def windy(catalog: WeatherCatalog):
    return catalog.get_variant(WeatherType.WINDY)


@pytest.fixture
def hot(catalog: WeatherCatalog):
    return catalog.get_variant(WeatherType.HOT)


def scripted_game(
    forecast: WeatherType,
    days: list[tuple[WeatherType, WeatherType]] | None = None,
    config: GameConfig | None = None,
) -> GameState:
    """
    Game whose weather is fully scripted.

    Args:
        forecast: Forecast for day 1
        days: For each day to be played, (actual weather, next forecast).
            The actual weather is produced by a forecast hit when it matches
            the current forecast, otherwise by a miss plus a fallback draw.
        config: Game configuration
    """
    values = [DRAW_FOR[forecast]]
    current = forecast
    for actual, next_forecast in days or []:
        if actual == current:
            values.append(FORECAST_HOLDS)
        else:
            values.extend([FORECAST_MISSES, DRAW_FOR[actual]])
        values.append(DRAW_FOR[next_forecast])
        current = next_forecast
    return new_game(config=config, rng=ReplayRandom(values))


@pytest.fixture
def scripted():
    """Factory fixture for games with scripted weather (see `scripted_game`)."""
    return scripted_game


@pytest.fixture
def mild_game() -> GameState:
    """Game with a Mild forecast where day 1 turns out Mild."""
    return scripted_game(WeatherType.MILD, [(WeatherType.MILD, WeatherType.HOT)])


@pytest.fixture
def seeded_game() -> GameState:
    """Game with a fixed seed for reproducibility."""
    return new_game(seed=42)
