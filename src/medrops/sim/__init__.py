"""Real and model-based rollouts, Monte Carlo evaluation and the trial log."""

from .evaluator import MonteCarloEvaluator, predict_policy
from .probabilistic_rollout import ProbabilisticRollout, ProbabilisticRolloutResult, sample_clipped
from .real_rollout import CartPoleSystem, RealRolloutResult, summarize_rewards, to_training_data
from .sinks import TrajectoryRecorder
from .trial_log import TrialEntry, TrialLog

__all__ = [
    "CartPoleSystem",
    "MonteCarloEvaluator",
    "ProbabilisticRollout",
    "ProbabilisticRolloutResult",
    "RealRolloutResult",
    "TrajectoryRecorder",
    "TrialEntry",
    "TrialLog",
    "predict_policy",
    "sample_clipped",
    "summarize_rewards",
    "to_training_data",
]
