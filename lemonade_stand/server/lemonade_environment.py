# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Lemonade Stand Environment Implementation.

Wraps the game engine as an OpenEnv environment so agents and the HTTP
server can drive it with reset()/step().
"""

import random
from typing import Optional
from uuid import uuid4

from openenv_core.env_server.interfaces import Environment
from openenv_core.env_server.types import State

from ..errors import GameOverViolation, InsufficientFunds
from ..game import GameState, new_game, play_day
from ..models import DayOutcome, GameConfig
from ..planner import plan_cost, plan_day
from .types import LemonadeAction, LemonadeObservation


class LemonadeEnvironment(Environment):
    """
    A lemonade stand simulation environment.

    Each step plays one day. The episode ends when the player can no
    longer afford a single cup.

    Game Mechanics:
    - The forecast is right 80% of the time; otherwise the weather is random
    - Weather sets the base crowd and scales demand
    - Signs bring extra customers (half as many on windy days, capped)
    - Every dollar above $1.00 loses 20% of the crowd
    - Sales are capped by the cups prepared; a fixed overhead is charged daily

    Example:
        >>> env = LemonadeEnvironment(seed=42)
        >>> obs = env.reset()
        >>> print(f"Day {obs.day}: forecast {obs.forecast}, ${obs.money:.2f}")
        >>>
        >>> obs = env.step(LemonadeAction(ads=1, cups=20, price=1.00))
        >>> print(f"Sold {obs.sales} cups, profit: ${obs.profit:.2f}")
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        """
        Initialize the lemonade stand environment.

        Args:
            config: Game configuration (uses defaults if None)
            seed: Random seed for reproducibility
        """
        self.config = config or GameConfig()
        self._seed = seed
        self._state = State(episode_id=str(uuid4()), step_count=0)
        self.game: GameState = new_game(config=self.config, rng=random.Random(seed))

    def reset(self) -> LemonadeObservation:
        """
        Reset the environment for a new game.

        Returns:
            Initial observation with starting state
        """
        self._state = State(episode_id=str(uuid4()), step_count=0)
        self.game = new_game(config=self.config, rng=random.Random(self._seed))
        return self._build_observation(reward=0.0)

    def step(self, action: LemonadeAction) -> LemonadeObservation:
        """
        Play one day.

        Args:
            action: The day's plan

        Returns:
            Observation with the results of the day. If the plan cannot be
            afforded or the game is over, returns an error observation with
            is_error_response=True and the day is not advanced.
        """
        plan = plan_day(action.ads, action.cups, action.price)
        try:
            outcome = play_day(self.game, plan)
        except (InsufficientFunds, GameOverViolation) as e:
            return self._build_observation(reward=0.0, errors=[str(e)])

        self._state.step_count += 1
        return self._build_observation(
            outcome=outcome,
            reward=outcome.profit,
            metadata={
                "planned_cost": plan_cost(plan, self.config),
                "forecast_hit": outcome.actual_weather_type == outcome.forecast_type,
                "money_after": outcome.money_after,
            },
        )

    def _build_observation(
        self,
        outcome: Optional[DayOutcome] = None,
        reward: float = 0.0,
        errors: Optional[list[str]] = None,
        metadata: Optional[dict] = None,
    ) -> LemonadeObservation:
        game = self.game
        obs = LemonadeObservation(
            day=game.day,
            money=game.money,
            forecast=game.forecast.type.value,
            forecast_base_customers=game.forecast.base_customers,
            forecast_multiplier=game.forecast.multiplier,
            can_play=game.can_play,
            game_over=game.game_over,
            recent_history=[o.to_display_dict() for o in game.recent_history()],
            weather_catalog=game.catalog.to_list(),
            action_errors=list(errors or []),
            is_error_response=bool(errors),
            done=game.game_over,
            reward=reward,
            metadata=metadata or {},
        )
        if outcome is not None:
            obs.actual_weather = outcome.actual_weather_type.value
            obs.ads = outcome.ads
            obs.cups = outcome.cups
            obs.price = outcome.price
            obs.sales = outcome.sales
            obs.revenue = outcome.revenue
            obs.cost = outcome.cost
            obs.profit = outcome.profit
        return obs

    @property
    def state(self) -> State:
        """Get the current environment state."""
        return self._state
