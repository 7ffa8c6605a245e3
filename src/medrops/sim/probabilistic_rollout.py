"""
medrops SIM: PROBABILISTIC ROLLOUT
----------------------------------
Runs a policy on a learned dynamics model instead of the true physics.

The state is the running sum of sampled model deltas, starting at zero. Each
model output dimension is drawn from N(mean_i, sigma) and clipped to
[mean_i - sigma, mean_i + sigma], sigma being the square root of the model's
isotropic variance. With zero variance the rollout follows the mean
trajectory exactly, whatever the random stream.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from medrops.core.contracts import (
    STATE_DIM,
    ModelPrediction,
    Policy,
    ProbabilisticModel,
    RewardFunction,
    VisualizationSink,
    validate_action,
)
from medrops.core.state import make_query, to_observation
from medrops.exceptions import ConfigurationError


@dataclass(frozen=True)
class ProbabilisticRolloutResult:
    """Per-step rewards and visited states (states[0] is the initial state)."""

    rewards: np.ndarray
    states: np.ndarray

    @property
    def total_reward(self) -> float:
        return float(np.sum(self.rewards))

    def to_dict(self) -> Dict[str, Any]:
        return {"rewards": self.rewards.tolist(), "states": self.states.tolist()}


def sample_clipped(prediction: ModelPrediction, rng: np.random.Generator) -> np.ndarray:
    """Gaussian sample around the prediction mean, truncated to one sigma."""
    mu = prediction.mean
    sigma = prediction.sigma
    s = rng.normal(mu, sigma)
    return np.clip(s, mu - sigma, mu + sigma)


class ProbabilisticRollout:
    """Single model-based trajectory; holds no state between executions."""

    def execute(
        self,
        policy: Policy,
        model: ProbabilisticModel,
        reward: RewardFunction,
        steps: int,
        rng: np.random.Generator,
        sink: Optional[VisualizationSink] = None,
    ) -> ProbabilisticRolloutResult:
        steps = int(steps)
        if steps < 1:
            raise ConfigurationError("steps must be >= 1", details={"steps": steps})

        state = np.zeros(STATE_DIM, dtype=np.float64)
        obs = to_observation(state)
        states = np.zeros((steps + 1, STATE_DIM), dtype=np.float64)
        rewards = np.zeros(steps, dtype=np.float64)

        for j in range(steps):
            u = validate_action(policy.next(obs))
            prediction = ModelPrediction.from_output(model.predict(make_query(obs, u)))

            final = state + sample_clipped(prediction, rng)
            r = float(reward(state, u, final))
            rewards[j] = r

            state = final
            obs = to_observation(state)
            states[j + 1] = state
            if sink is not None:
                sink.on_step(state.copy(), u.copy(), r)

        return ProbabilisticRolloutResult(rewards=rewards, states=states)
