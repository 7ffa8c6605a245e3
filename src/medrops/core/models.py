"""Reference probabilistic models.

These are not learned regressors. They give the rollout engine a known
``predict`` to run against: an arbitrary mean function with constant noise,
and an oracle that reports the true RK4 state change.
"""

from __future__ import annotations

import math
from typing import Callable, Tuple

import numpy as np

from medrops.exceptions import validate_shape

from .contracts import OBSERVATION_DIM, PREDICTION_DIM, QUERY_DIM
from .dynamics import DEFAULT_PARAMS, CartPoleIntegrator, CartPoleParams


class FixedVarianceModel:
    """Mean from a callable over the query, variance fixed."""

    def __init__(self, mean_fn: Callable[[np.ndarray], np.ndarray], variance: float = 0.0):
        self.mean_fn = mean_fn
        self.variance = float(variance)

    def predict(self, query: np.ndarray) -> Tuple[np.ndarray, float]:
        query = validate_shape(query, (QUERY_DIM,), "query")
        return np.asarray(self.mean_fn(query), dtype=np.float64), self.variance


class DynamicsOracleModel:
    """Predicts the exact one-step state change of the true cart-pole.

    The angle is recovered from its (cos, sin) embedding; the equations of
    motion only depend on the angle through those two terms.
    """

    def __init__(self, variance: float = 0.0, dt: float = 0.1, params: CartPoleParams = DEFAULT_PARAMS):
        self.variance = float(variance)
        self.integrator = CartPoleIntegrator(dt=dt, params=params)

    def predict(self, query: np.ndarray) -> Tuple[np.ndarray, float]:
        query = validate_shape(query, (QUERY_DIM,), "query")
        obs = query[:OBSERVATION_DIM]
        u = float(query[OBSERVATION_DIM])

        state = np.empty(PREDICTION_DIM, dtype=np.float64)
        state[:3] = obs[:3]
        state[3] = math.atan2(obs[4], obs[3])
        return self.integrator.step(state, u) - state, self.variance
