# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Weather catalog and random draws.

All randomness goes through a `RandomSource`: anything with a
`random() -> float` method returning a uniform value in [0, 1).
`random.Random` is the production source. `ReplayRandom` and
`RecordingRandom` make runs reproducible from a recorded sequence.

Draw order matters for replays:
- `draw_random` consumes exactly one value.
- `draw_actual` consumes one value, plus one more when the forecast misses.
"""

from typing import Iterable, List, Optional, Protocol, Sequence

from .models import WEATHER_CATALOG, WeatherType, WeatherVariant


class RandomSource(Protocol):
    """Anything that can produce uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


class ReplayRandom:
    """
    Random source that replays a fixed sequence of values.

    Example:
        >>> rng = ReplayRandom([0.1, 0.95, 0.5])
        >>> rng.random()
        0.1
    """

    def __init__(self, values: Iterable[float]):
        self._values = list(values)
        self._index = 0
        for value in self._values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Replay values must be in [0, 1), got {value}")

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index

    def random(self) -> float:
        if self._index >= len(self._values):
            raise IndexError(
                f"Replay sequence exhausted after {len(self._values)} draws"
            )
        value = self._values[self._index]
        self._index += 1
        return value


class RecordingRandom:
    """Wraps another source and records every value it hands out."""

    def __init__(self, source: RandomSource):
        self._source = source
        self.values: List[float] = []

    def random(self) -> float:
        value = self._source.random()
        self.values.append(value)
        return value

    def replay(self) -> ReplayRandom:
        """A source that reproduces everything drawn so far."""
        return ReplayRandom(self.values)


class WeatherCatalog:
    """The fixed set of weather variants and the draws over it."""

    def __init__(
        self,
        variants: Optional[Sequence[WeatherVariant]] = None,
        forecast_accuracy: float = 0.8,
    ):
        self.variants: List[WeatherVariant] = list(variants or WEATHER_CATALOG)
        self.forecast_accuracy = forecast_accuracy

    def __len__(self) -> int:
        return len(self.variants)

    def __iter__(self):
        return iter(self.variants)

    def get_variant(self, weather_type: WeatherType | str) -> WeatherVariant:
        """Look up a variant by its type tag."""
        weather_type = WeatherType(weather_type)
        for variant in self.variants:
            if variant.type == weather_type:
                return variant
        raise KeyError(f"No weather variant for {weather_type.value}")

    def draw_random(self, rng: RandomSource) -> WeatherVariant:
        """Uniformly random variant. Used for forecasts and missed forecasts."""
        index = int(rng.random() * len(self.variants))
        # Guard against sources that return exactly 1.0
        return self.variants[min(index, len(self.variants) - 1)]

    def draw_actual(self, forecast: WeatherVariant, rng: RandomSource) -> WeatherVariant:
        """
        Draw the weather that actually happens.

        Matches the forecast with probability `forecast_accuracy`. Otherwise a
        fresh uniform draw is made, which may land on the forecast again.
        """
        if rng.random() < self.forecast_accuracy:
            return forecast
        return self.draw_random(rng)

    def to_list(self) -> List[dict]:
        """Catalog as plain dicts for observations."""
        return [
            {
                "type": v.type.value,
                "base_customers": v.base_customers,
                "multiplier": v.multiplier,
            }
            for v in self.variants
        ]
