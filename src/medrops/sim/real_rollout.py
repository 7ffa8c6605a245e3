"""
medrops SIM: REAL ROLLOUT
-------------------------
Runs a policy on the true cart-pole dynamics and records the transitions
used to fit the probabilistic model.

Each step:
- project the physical state onto an observation;
- ask the policy for a force;
- integrate one RK4 step;
- record (observation, action, state delta) and score it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from medrops.config import get_config
from medrops.core.contracts import (
    STATE_DIM,
    Policy,
    RewardFunction,
    Transition,
    VisualizationSink,
    validate_action,
)
from medrops.core.dynamics import CartPoleIntegrator, CartPoleParams, DEFAULT_PARAMS
from medrops.core.state import make_query, to_observation
from medrops.exceptions import ConfigurationError
from medrops.logging import get_logger, log_rollout_summary
from medrops.sim.trial_log import TrialLog

logger = get_logger("real_rollout")


def summarize_rewards(rewards: Sequence[float]) -> Dict[str, float]:
    """Total/mean/min/max of a per-step reward sequence."""
    arr = np.asarray(rewards, dtype=np.float64)
    if arr.size == 0:
        return {"total": 0.0, "mean": 0.0, "min": 0.0, "max": 0.0}
    return {
        "total": float(arr.sum()),
        "mean": float(arr.mean()),
        "min": float(arr.min()),
        "max": float(arr.max()),
    }


@dataclass(frozen=True)
class RealRolloutResult:
    """Transitions and per-step rewards of one real rollout."""

    transitions: Tuple[Transition, ...]
    rewards: np.ndarray

    @property
    def total_reward(self) -> float:
        return float(np.sum(self.rewards))

    def summary(self) -> Dict[str, float]:
        return summarize_rewards(self.rewards)


def to_training_data(transitions: Sequence[Transition]) -> Tuple[np.ndarray, np.ndarray]:
    """Stack transitions into model inputs (N, 6) and targets (N, 4)."""
    if not transitions:
        return np.empty((0, 6), dtype=np.float64), np.empty((0, STATE_DIM), dtype=np.float64)
    X = np.stack([make_query(t.observation, t.action) for t in transitions])
    Y = np.stack([np.asarray(t.delta) for t in transitions])
    return X, Y


class CartPoleSystem:
    """The physical cart-pole: executes policies on the true dynamics."""

    def __init__(
        self,
        config=None,
        horizon: Optional[int] = None,
        dt: Optional[float] = None,
        params: CartPoleParams = DEFAULT_PARAMS,
    ):
        if config is None:
            config = get_config()
        self.horizon = int(horizon if horizon is not None else config.rollout.horizon)
        if self.horizon < 1:
            raise ConfigurationError("horizon must be >= 1", details={"horizon": self.horizon})
        self.integrator = CartPoleIntegrator(
            dt=dt if dt is not None else config.rollout.dt,
            params=params,
        )

    @property
    def dt(self) -> float:
        return self.integrator.dt

    def execute(
        self,
        policy: Policy,
        reward: RewardFunction,
        steps: Optional[int] = None,
        *,
        trial_log: Optional[TrialLog] = None,
        sink: Optional[VisualizationSink] = None,
    ) -> RealRolloutResult:
        """Roll the policy out for ``steps`` steps starting from rest, pole down."""
        steps = self.horizon if steps is None else int(steps)
        if steps < 1:
            raise ConfigurationError("steps must be >= 1", details={"steps": steps})

        logger.debug("Real rollout: {steps} steps, dt={dt}", steps=steps, dt=self.dt)
        state = np.zeros(STATE_DIM, dtype=np.float64)
        transitions: List[Transition] = []
        rewards = np.zeros(steps, dtype=np.float64)

        for i in range(steps):
            obs = to_observation(state)
            u = validate_action(policy.next(obs))
            init = state.copy()

            state = self.integrator.step(state, u[0])

            transitions.append(Transition(observation=obs, action=u, delta=state - init))
            r = float(reward(init, u, state))
            rewards[i] = r
            if sink is not None:
                sink.on_step(state.copy(), u.copy(), r)

        result = RealRolloutResult(transitions=tuple(transitions), rewards=rewards)
        summary = result.summary()
        log_rollout_summary("Real", summary)

        if trial_log is not None and not policy.is_exploratory():
            trial_log.append(policy.parameters(), summary["total"])

        return result
