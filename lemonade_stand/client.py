# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Lemonade Stand Environment HTTP Client.

This module provides the client for connecting to a Lemonade Stand
Environment server over HTTP.
"""

from typing import Dict

from openenv_core.client_types import StepResult
from openenv_core.env_server.types import State
from openenv_core.http_env_client import HTTPEnvClient

from .server.types import LemonadeAction, LemonadeObservation


class LemonadeEnv(HTTPEnvClient[LemonadeAction, LemonadeObservation]):
    """
    HTTP client for the Lemonade Stand Environment.

    Example:
        >>> client = LemonadeEnv(base_url="http://localhost:8000")
        >>> result = client.reset()
        >>> print(f"Day {result.observation.day}: forecast {result.observation.forecast}")
        >>>
        >>> result = client.step(LemonadeAction(ads=1, cups=20, price=1.00))
        >>> print(f"Sold {result.observation.sales} cups!")
        >>> print(f"Profit: ${result.observation.profit:.2f}")
    """

    def _step_payload(self, action: LemonadeAction) -> Dict:
        """
        Convert LemonadeAction to JSON payload for step request.

        Args:
            action: LemonadeAction instance

        Returns:
            Dictionary representation suitable for JSON encoding
        """
        return {
            "ads": action.ads,
            "cups": action.cups,
            "price": action.price,
        }

    def _parse_result(self, payload: Dict) -> StepResult[LemonadeObservation]:
        """
        Parse server response into StepResult[LemonadeObservation].

        Args:
            payload: JSON response from server

        Returns:
            StepResult with LemonadeObservation
        """
        obs_data = payload.get("observation", {})

        observation = LemonadeObservation(
            day=obs_data.get("day", 1),
            money=obs_data.get("money", 0.0),
            forecast=obs_data.get("forecast", "Mild"),
            forecast_base_customers=obs_data.get("forecast_base_customers", 0),
            forecast_multiplier=obs_data.get("forecast_multiplier", 1.0),
            can_play=obs_data.get("can_play", True),
            game_over=obs_data.get("game_over", False),
            actual_weather=obs_data.get("actual_weather"),
            ads=obs_data.get("ads", 0),
            cups=obs_data.get("cups", 0),
            price=obs_data.get("price", 0.0),
            sales=obs_data.get("sales", 0),
            revenue=obs_data.get("revenue", 0.0),
            cost=obs_data.get("cost", 0.0),
            profit=obs_data.get("profit", 0.0),
            recent_history=obs_data.get("recent_history", []),
            weather_catalog=obs_data.get("weather_catalog"),
            action_errors=obs_data.get("action_errors", []),
            is_error_response=obs_data.get("is_error_response", False),
            done=payload.get("done", False),
            reward=payload.get("reward"),
            metadata=obs_data.get("metadata", {}),
        )

        return StepResult(
            observation=observation,
            reward=payload.get("reward"),
            done=payload.get("done", False),
        )

    def _parse_state(self, payload: Dict) -> State:
        """
        Parse server response into State object.

        Args:
            payload: JSON response from /state endpoint

        Returns:
            State object with episode_id and step_count
        """
        return State(
            episode_id=payload.get("episode_id"),
            step_count=payload.get("step_count", 0),
        )
