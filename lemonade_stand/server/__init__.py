# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""Server components for the Lemonade Stand Environment."""

from .lemonade_environment import LemonadeEnvironment
from .types import LemonadeAction, LemonadeObservation

__all__ = ["LemonadeEnvironment", "LemonadeAction", "LemonadeObservation"]
