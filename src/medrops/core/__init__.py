"""State codec, dynamics, reward and collaborator contracts."""

from .contracts import (
    ACTION_DIM,
    OBSERVATION_DIM,
    PREDICTION_DIM,
    QUERY_DIM,
    STATE_DIM,
    ModelPrediction,
    Policy,
    ProbabilisticModel,
    RewardFunction,
    Transition,
    VisualizationSink,
)
from .dynamics import CartPoleIntegrator, CartPoleParams, cartpole_dynamics, rk4_step
from .models import DynamicsOracleModel, FixedVarianceModel
from .reward import CartPoleReward, Goal
from .state import angle_dist, make_query, to_observation

__all__ = [
    "ACTION_DIM",
    "OBSERVATION_DIM",
    "PREDICTION_DIM",
    "QUERY_DIM",
    "STATE_DIM",
    "CartPoleIntegrator",
    "CartPoleParams",
    "CartPoleReward",
    "DynamicsOracleModel",
    "FixedVarianceModel",
    "Goal",
    "ModelPrediction",
    "Policy",
    "ProbabilisticModel",
    "RewardFunction",
    "Transition",
    "VisualizationSink",
    "angle_dist",
    "cartpole_dynamics",
    "make_query",
    "rk4_step",
    "to_observation",
]
