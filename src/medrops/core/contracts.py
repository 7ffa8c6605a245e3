"""Typed contracts between the rollout engine and its collaborators.

Policies, probabilistic models, reward functions and visualization sinks are
depended upon through the narrow protocols below; any object with the right
methods is accepted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Protocol, Tuple, runtime_checkable

import numpy as np

from medrops.exceptions import ModelContractError, validate_shape

STATE_DIM = 4
OBSERVATION_DIM = 5
ACTION_DIM = 1
QUERY_DIM = OBSERVATION_DIM + ACTION_DIM
PREDICTION_DIM = 4


def _frozen(array: Any) -> np.ndarray:
    out = np.array(array, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


@runtime_checkable
class Policy(Protocol):
    """Maps an observation to a control action."""

    def next(self, observation: np.ndarray) -> np.ndarray: ...

    def parameters(self) -> np.ndarray: ...

    def is_exploratory(self) -> bool: ...


@runtime_checkable
class ProbabilisticModel(Protocol):
    """Predicts a state-change distribution for an (observation, action) query."""

    def predict(self, query: np.ndarray) -> Tuple[np.ndarray, float]: ...


@runtime_checkable
class RewardFunction(Protocol):
    """Scores a single state transition."""

    def __call__(self, from_state: np.ndarray, action: np.ndarray, to_state: np.ndarray) -> float: ...


@runtime_checkable
class VisualizationSink(Protocol):
    """Receives every simulated step for display purposes."""

    def on_step(self, state: np.ndarray, action: np.ndarray, reward: float) -> None: ...


@dataclass(frozen=True)
class Transition:
    """One recorded step: observation before, action taken, state delta."""

    observation: np.ndarray
    action: np.ndarray
    delta: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "observation", _frozen(self.observation))
        object.__setattr__(self, "action", _frozen(self.action))
        object.__setattr__(self, "delta", _frozen(self.delta))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "observation": self.observation.tolist(),
            "action": self.action.tolist(),
            "delta": self.delta.tolist(),
        }


@dataclass(frozen=True)
class ModelPrediction:
    """Mean state delta and isotropic variance returned by a model."""

    mean: np.ndarray
    variance: float

    @property
    def sigma(self) -> float:
        return math.sqrt(self.variance)

    @classmethod
    def from_output(cls, output: Any) -> "ModelPrediction":
        """Validate a raw ``(mean, variance)`` pair returned by ``predict``."""
        try:
            mean, variance = output
        except (TypeError, ValueError) as e:
            raise ModelContractError(
                "Model prediction must be a (mean, variance) pair",
                details={"type": type(output).__name__},
            ) from e

        mean = validate_shape(mean, (PREDICTION_DIM,), "prediction mean")
        var_arr = np.asarray(variance, dtype=np.float64)
        if var_arr.size != 1:
            raise ModelContractError(
                "Model variance must be a scalar", details={"shape": var_arr.shape}
            )
        var = float(var_arr.reshape(()))
        if not math.isfinite(var) or var < 0.0:
            raise ModelContractError(
                "Model variance must be finite and non-negative", details={"variance": var}
            )
        return cls(mean=_frozen(mean), variance=var)


def validate_action(action: Any) -> np.ndarray:
    """Return the policy output as a 1-element float array or fail."""
    return validate_shape(np.atleast_1d(np.asarray(action, dtype=np.float64)), (ACTION_DIM,), "action")
