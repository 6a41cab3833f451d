# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
FastAPI application for the Lemonade Stand Environment.

This module creates an HTTP server that exposes the LemonadeEnvironment
over HTTP endpoints, making it compatible with HTTPEnvClient.

Usage:
    # Development (with auto-reload):
    uvicorn lemonade_stand.server.app:app --reload --host 0.0.0.0 --port 8000

    # Or run directly:
    lemonade-stand-server
"""

import random
from dataclasses import asdict
from typing import Any, Dict

from fastapi import Body, HTTPException
from openenv_core.env_server.http_server import create_app

from .lemonade_environment import LemonadeEnvironment
from .types import LemonadeAction, LemonadeObservation


def generate_seed() -> int:
    """Generate a random seed between 10000 and 99999."""
    return random.randint(10000, 99999)


def serialize_observation(observation: LemonadeObservation) -> Dict[str, Any]:
    """Split an observation into the response payload shape."""
    obs_dict = asdict(observation)
    reward = obs_dict.pop("reward", None)
    done = obs_dict.pop("done", False)
    return {
        "observation": obs_dict,
        "reward": reward,
        "done": done,
    }


# Create the environment instance (will be recreated with seed on reset)
env = LemonadeEnvironment()

app = create_app(env, LemonadeAction, LemonadeObservation, env_name="lemonade_stand")

# Replace the default /reset and /step routes with versions that support seeds
routes_to_remove = ["/reset", "/step"]
app.router.routes = [route for route in app.router.routes if getattr(route, "path", None) not in routes_to_remove]


@app.post("/reset")
async def reset_with_seed(request: Dict[str, Any] = Body(default={})) -> Dict[str, Any]:
    """
    Reset endpoint with seed support.

    Request body can include:
    - seed: Optional integer seed for deterministic runs

    If no seed is provided, one is generated and returned so the game can
    be reproduced.
    """
    global env

    seed = request.get("seed")
    if seed is None:
        seed = generate_seed()
    elif not isinstance(seed, int) or isinstance(seed, bool):
        raise HTTPException(status_code=422, detail=f"Invalid seed: {seed!r}")

    env = LemonadeEnvironment(config=env.config, seed=seed)
    response = serialize_observation(env.reset())
    response["seed"] = seed
    return response


@app.post("/step")
async def step_action(request: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """
    Step endpoint - plays one day and returns the observation.

    Accepts both {"action": {...}} and the action fields directly.
    """
    action_data = dict(request.get("action", request))
    metadata = action_data.pop("metadata", {})

    unknown = set(action_data) - {"ads", "cups", "price"}
    if unknown:
        raise HTTPException(status_code=422, detail=f"Unknown action fields: {sorted(unknown)}")

    try:
        action = LemonadeAction(
            ads=int(action_data.get("ads", 0)),
            cups=int(action_data.get("cups", 0)),
            price=float(action_data.get("price", 1.00)),
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid action: {e}")
    action.metadata = metadata

    return serialize_observation(env.step(action))


def main():
    """
    Entry point for direct execution.

        lemonade-stand-server
        python -m lemonade_stand.server.app
    """
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
