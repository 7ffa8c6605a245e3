"""
Neural-network policy
---------------------
One hidden tanh layer, output squashed to [-max_u, max_u].

The torch module runs in float64 under ``torch.no_grad`` so that concurrent
Monte Carlo tasks can share one policy instance for inference.
"""

from __future__ import annotations

import copy
from typing import Optional

import numpy as np
import torch
import torch.nn as nn
from torch.nn.utils import parameters_to_vector, vector_to_parameters

from medrops.config import get_config
from medrops.core.contracts import ACTION_DIM, OBSERVATION_DIM
from medrops.exceptions import ContractViolationError, validate_shape


class NNPolicy:
    """Feed-forward policy over the 5-dim observation."""

    def __init__(
        self,
        hidden_neurons: Optional[int] = None,
        max_u: Optional[float] = None,
        state_dim: int = OBSERVATION_DIM,
        action_dim: int = ACTION_DIM,
        seed: Optional[int] = None,
    ):
        policy_config = get_config().policy
        self.hidden_neurons = int(hidden_neurons if hidden_neurons is not None else policy_config.hidden_neurons)
        if self.hidden_neurons < 1:
            raise ValueError(f"hidden_neurons must be >= 1, got {self.hidden_neurons}")
        self.max_u = float(max_u if max_u is not None else policy_config.max_u)
        self.state_dim = int(state_dim)
        self.action_dim = int(action_dim)

        self.net = nn.Sequential(
            nn.Linear(self.state_dim, self.hidden_neurons),
            nn.Tanh(),
            nn.Linear(self.hidden_neurons, self.action_dim),
            nn.Tanh(),
        ).double()
        self.net.eval()
        for p in self.net.parameters():
            p.requires_grad_(False)

        self._rng = np.random.default_rng(seed)
        self._random = True

    @property
    def num_parameters(self) -> int:
        return sum(p.numel() for p in self.net.parameters())

    def set_params(self, params: np.ndarray) -> None:
        params = np.asarray(params, dtype=np.float64).reshape(-1)
        if params.size != self.num_parameters:
            raise ContractViolationError(
                "NNPolicy parameter vector has wrong size",
                details={"expected": self.num_parameters, "actual": params.size},
            )
        vector_to_parameters(torch.from_numpy(params.copy()), self.net.parameters())
        self._random = False

    def with_parameters(self, params: np.ndarray) -> "NNPolicy":
        clone = copy.deepcopy(self)
        clone.set_params(params)
        return clone

    def parameters(self) -> np.ndarray:
        return parameters_to_vector(self.net.parameters()).detach().cpu().numpy().copy()

    def is_exploratory(self) -> bool:
        return self._random

    def next(self, observation: np.ndarray) -> np.ndarray:
        obs = validate_shape(observation, (self.state_dim,), "observation")
        if self._random:
            return self._rng.uniform(-self.max_u, self.max_u, size=self.action_dim)

        with torch.no_grad():
            out = self.net(torch.from_numpy(obs))
        return self.max_u * out.numpy()
