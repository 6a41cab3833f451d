# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""Exceptions raised by the Lemonade Stand engine."""


class LemonadeStandError(Exception):
    """Base class for all game errors."""


class InsufficientFunds(LemonadeStandError):
    """The planned cost of a day exceeds the money on hand. Nothing was changed."""

    def __init__(self, cost: float, available: float):
        self.cost = cost
        self.available = available
        super().__init__(
            f"Cannot afford plan: ${cost:.2f} needed, ${available:.2f} available"
        )


class GameOverViolation(LemonadeStandError):
    """A day was played after the game ended. Nothing was changed."""

    def __init__(self, day: int, money: float):
        self.day = day
        self.money = money
        super().__init__(
            f"Game is over on day {day} with ${money:.2f}; no further days can be played"
        )


class ConfigError(ValueError):
    """Invalid game configuration."""
