"""
medrops SIM: MONTE CARLO EVALUATOR
----------------------------------
Estimates the expected total reward of a policy under a probabilistic model
by averaging N independent model rollouts. This is the objective the outer
policy search maximizes.

Concurrency model:
- one task per sample, run to completion on a bounded thread pool;
- policy and model are only read;
- every task draws from its own numpy Generator, seeded from
  SeedSequence(base_seed, spawn_key=(call_index, task_index));
- task totals land in a length-N array indexed by task id and are reduced
  in index order once every task has finished.
"""

import math
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

import numpy as np

from medrops.config import get_config
from medrops.core.contracts import Policy, ProbabilisticModel, RewardFunction
from medrops.exceptions import ConfigurationError, ContractViolationError
from medrops.logging import get_logger, log_error
from medrops.sim.probabilistic_rollout import ProbabilisticRollout

logger = get_logger("evaluator")


class MonteCarloEvaluator:
    """Parallel Monte Carlo estimate of a policy's fitness."""

    def __init__(
        self,
        config=None,
        parallel_evaluations: Optional[int] = None,
        horizon: Optional[int] = None,
        max_workers: Optional[int] = None,
        seed: Optional[int] = None,
    ):
        if config is None:
            config = get_config()

        n = config.evaluation.parallel_evaluations if parallel_evaluations is None else parallel_evaluations
        self.parallel_evaluations = int(n)
        if self.parallel_evaluations < 1:
            raise ConfigurationError(
                "parallel_evaluations must be >= 1",
                details={"parallel_evaluations": self.parallel_evaluations},
            )

        self.horizon = int(horizon if horizon is not None else config.rollout.horizon)
        if self.horizon < 1:
            raise ConfigurationError("horizon must be >= 1", details={"horizon": self.horizon})

        workers = max_workers if max_workers is not None else config.evaluation.max_workers
        if workers is None:
            workers = min(self.parallel_evaluations, os.cpu_count() or 1)
        self.max_workers = int(workers)
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be >= 1", details={"max_workers": self.max_workers})

        seed = config.evaluation.seed if seed is None else seed
        # Fresh OS entropy when unseeded; the schedule is still reproducible from self.entropy.
        self.entropy = np.random.SeedSequence(seed).entropy
        self._calls = 0
        self._lock = threading.Lock()
        self._rollout = ProbabilisticRollout()

    def _next_call_index(self) -> int:
        with self._lock:
            index = self._calls
            self._calls += 1
        return index

    def task_seeds(self, n: int, call_index: int, seed: Optional[int] = None) -> List[np.random.SeedSequence]:
        """Independent seed sequences for the ``n`` tasks of one call."""
        if seed is not None:
            root = np.random.SeedSequence(seed)
        else:
            root = np.random.SeedSequence(self.entropy, spawn_key=(call_index,))
        return root.spawn(n)

    def predict_policy(
        self,
        policy: Policy,
        model: ProbabilisticModel,
        reward: RewardFunction,
        steps: Optional[int] = None,
        *,
        seed: Optional[int] = None,
        order: Optional[Sequence[int]] = None,
    ) -> float:
        """Mean total reward over ``parallel_evaluations`` model rollouts.

        Args:
            policy: Policy under evaluation (read-only).
            model: Probabilistic dynamics model (read-only).
            reward: Per-transition reward function.
            steps: Horizon; defaults to the configured horizon.
            seed: Use this seed for the call instead of the evaluator's
                schedule. Equal seeds give equal results.
            order: Permutation of task ids giving the submission order.

        Raises:
            ConfigurationError: on a non-positive horizon or a bad ``order``.
            ContractViolationError: if ``policy`` is still exploratory. Its
                random actions come from a generator shared by all tasks.
        """
        if policy.is_exploratory():
            raise ContractViolationError(
                "Cannot evaluate an exploratory policy; set its parameters first",
                details={"policy": type(policy).__name__},
            )
        n = self.parallel_evaluations
        if n < 1:
            raise ConfigurationError("parallel_evaluations must be >= 1", details={"parallel_evaluations": n})
        steps = self.horizon if steps is None else int(steps)
        if steps < 1:
            raise ConfigurationError("steps must be >= 1", details={"steps": steps})

        if order is None:
            order = range(n)
        elif sorted(int(i) for i in order) != list(range(n)):
            raise ConfigurationError("order must be a permutation of task ids", details={"n": n})

        call_index = self._next_call_index()
        seeds = self.task_seeds(n, call_index, seed)
        rews = np.zeros(n, dtype=np.float64)

        def run(i: int) -> float:
            rng = np.random.default_rng(seeds[i])
            return self._rollout.execute(policy, model, reward, steps, rng).total_reward

        with ThreadPoolExecutor(max_workers=min(self.max_workers, n)) as pool:
            futures = {int(i): pool.submit(run, int(i)) for i in order}
            for i, fut in futures.items():
                try:
                    rews[i] = fut.result()
                except Exception as e:
                    log_error(e, {"call": call_index, "task": i})
                    pool.shutdown(wait=True, cancel_futures=True)
                    raise

        # Correctly rounded and independent of summation order
        r = math.fsum(rews) / n
        logger.debug(
            "Policy evaluation {call}: mean={mean:.4f} over {n} rollouts of {steps} steps",
            call=call_index,
            mean=r,
            n=n,
            steps=steps,
        )
        return r

    def as_objective(
        self,
        policy,
        model: ProbabilisticModel,
        reward: RewardFunction,
        steps: Optional[int] = None,
    ) -> Callable[[np.ndarray], float]:
        """Wrap evaluation as ``params -> fitness`` for an outer optimizer.

        ``policy`` must provide ``with_parameters(params)`` returning a
        configured copy; the original policy is never modified.
        """

        def objective(params: np.ndarray) -> float:
            return self.predict_policy(policy.with_parameters(params), model, reward, steps)

        return objective


def predict_policy(
    policy: Policy,
    model: ProbabilisticModel,
    reward: RewardFunction,
    steps: Optional[int] = None,
    *,
    parallel_evaluations: Optional[int] = None,
    seed: Optional[int] = None,
    config=None,
) -> float:
    """One-shot Monte Carlo evaluation with a throwaway evaluator."""
    evaluator = MonteCarloEvaluator(
        config=config,
        parallel_evaluations=parallel_evaluations,
        seed=seed,
    )
    return evaluator.predict_policy(policy, model, reward, steps)
