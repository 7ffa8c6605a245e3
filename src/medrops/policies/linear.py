"""Linear saturated policy: u = max_u * tanh(W obs + b)."""

from __future__ import annotations

import copy
from typing import Optional

import numpy as np

from medrops.config import get_config
from medrops.core.contracts import ACTION_DIM, OBSERVATION_DIM
from medrops.exceptions import ContractViolationError, validate_shape


class LinearPolicy:
    """Affine map of the observation squashed into [-max_u, max_u].

    Parameters are laid out as the row-major weight matrix (action_dim x
    state_dim) followed by the bias. Until parameters are set the policy is
    exploratory and returns uniformly random actions.
    """

    def __init__(
        self,
        max_u: Optional[float] = None,
        state_dim: int = OBSERVATION_DIM,
        action_dim: int = ACTION_DIM,
        seed: Optional[int] = None,
    ):
        self.max_u = float(max_u if max_u is not None else get_config().policy.max_u)
        self.state_dim = int(state_dim)
        self.action_dim = int(action_dim)
        self._rng = np.random.default_rng(seed)
        self._params = np.zeros(0, dtype=np.float64)
        self._random = True

    @property
    def num_parameters(self) -> int:
        return self.action_dim * (self.state_dim + 1)

    def set_params(self, params: np.ndarray) -> None:
        params = np.asarray(params, dtype=np.float64).reshape(-1)
        if params.size != self.num_parameters:
            raise ContractViolationError(
                "LinearPolicy parameter vector has wrong size",
                details={"expected": self.num_parameters, "actual": params.size},
            )
        self._params = params.copy()
        self._random = False

    def with_parameters(self, params: np.ndarray) -> "LinearPolicy":
        clone = copy.deepcopy(self)
        clone.set_params(params)
        return clone

    def parameters(self) -> np.ndarray:
        return self._params.copy()

    def is_exploratory(self) -> bool:
        return self._random

    def next(self, observation: np.ndarray) -> np.ndarray:
        obs = validate_shape(observation, (self.state_dim,), "observation")
        if self._random:
            return self._rng.uniform(-self.max_u, self.max_u, size=self.action_dim)

        n_w = self.action_dim * self.state_dim
        weights = self._params[:n_w].reshape(self.action_dim, self.state_dim)
        bias = self._params[n_w:]
        return self.max_u * np.tanh(weights @ obs + bias)
