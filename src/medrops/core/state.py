"""Projection of the physical cart-pole state onto the policy/model observation."""

import math

import numpy as np

from .contracts import OBSERVATION_DIM, STATE_DIM, validate_action
from medrops.exceptions import validate_shape

# Physical state layout
POSITION, VELOCITY, ANGULAR_VELOCITY, ANGLE = range(STATE_DIM)


def to_observation(state: np.ndarray) -> np.ndarray:
    """(x, x_dot, theta_dot, theta) -> (x, x_dot, theta_dot, cos theta, sin theta)."""
    state = validate_shape(state, (STATE_DIM,), "state")
    obs = np.empty(OBSERVATION_DIM, dtype=np.float64)
    obs[:3] = state[:3]
    obs[3] = math.cos(state[ANGLE])
    obs[4] = math.sin(state[ANGLE])
    return obs


def make_query(observation: np.ndarray, action: np.ndarray) -> np.ndarray:
    """Concatenate an observation and an action into a model query."""
    observation = validate_shape(observation, (OBSERVATION_DIM,), "observation")
    return np.concatenate([observation, validate_action(action)])


def angle_dist(a: float, b: float) -> float:
    """Signed angular distance ``b - a`` wrapped into (-pi, pi]."""
    theta = math.fmod(b - a, 2.0 * math.pi)
    if theta > math.pi:
        theta -= 2.0 * math.pi
    elif theta <= -math.pi:
        theta += 2.0 * math.pi
    return theta
