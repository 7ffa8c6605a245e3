"""Gaussian radial-basis reward for the cart-pole swing-up task."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from medrops.config import RewardConfig, get_config
from medrops.exceptions import validate_positive

from .state import ANGLE, ANGULAR_VELOCITY, POSITION, VELOCITY, angle_dist


@dataclass(frozen=True)
class Goal:
    """Target state of the swing-up task (pole upright, cart at rest at the origin)."""

    angle: float = math.pi
    angular_velocity: float = 0.0
    velocity: float = 0.0
    position: float = 0.0

    @classmethod
    def from_config(cls, config: RewardConfig) -> "Goal":
        return cls(
            angle=config.goal_angle,
            angular_velocity=config.goal_angular_velocity,
            velocity=config.goal_velocity,
            position=config.goal_position,
        )


class CartPoleReward:
    """exp(-0.5 / sigma_c^2 * |to - goal|^2) with the angle error wrapped.

    ``from_state`` and ``action`` are accepted for interface compatibility and
    ignored. The value lies in (0, 1] and reaches 1 only at the goal.
    """

    def __init__(self, goal: Optional[Goal] = None, bandwidth: Optional[float] = None):
        reward_config = get_config().reward
        self.goal = goal if goal is not None else Goal.from_config(reward_config)
        bandwidth = reward_config.bandwidth if bandwidth is None else bandwidth
        self.bandwidth = validate_positive(float(bandwidth), "bandwidth")

    @classmethod
    def from_config(cls, config: RewardConfig) -> "CartPoleReward":
        return cls(goal=Goal.from_config(config), bandwidth=config.bandwidth)

    def __call__(self, from_state: np.ndarray, action: np.ndarray, to_state: np.ndarray) -> float:
        goal = self.goal
        dx = angle_dist(to_state[ANGLE], goal.angle)
        dy = to_state[ANGULAR_VELOCITY] - goal.angular_velocity
        dz = to_state[VELOCITY] - goal.velocity
        dw = to_state[POSITION] - goal.position
        s_c_sq = self.bandwidth * self.bandwidth
        return math.exp(-0.5 / s_c_sq * (dx * dx + dy * dy + dz * dz + dw * dw))
