"""
medrops CORE: DYNAMICS (Cart-Pole ODE)
--------------------------------------
Closed-form cart-pole equations of motion and a fixed-step RK4 integrator.

State layout: (x, x_dot, theta_dot, theta), theta = 0 with the pole hanging
down. The integrator is generic over the state dimension; the control input
is held constant across the four stages of a step.

No clamping is applied: position and angle are free to grow without bound.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

Derivative = Callable[[np.ndarray, float], np.ndarray]


@dataclass(frozen=True)
class CartPoleParams:
    """Physical constants of the cart-pole."""

    pole_length: float = 0.5
    pole_mass: float = 0.5
    cart_mass: float = 0.5
    gravity: float = 9.82
    friction: float = 0.1


DEFAULT_PARAMS = CartPoleParams()


def cartpole_dynamics(state: np.ndarray, u: float, params: CartPoleParams = DEFAULT_PARAMS) -> np.ndarray:
    """Time derivative of the cart-pole state under control force ``u``."""
    l, m, M, g, b = params.pole_length, params.pole_mass, params.cart_mass, params.gravity, params.friction
    x1, x2, x3 = state[1], state[2], state[3]
    s, c = math.sin(x3), math.cos(x3)

    dx = np.empty(4, dtype=np.float64)
    dx[0] = x1
    dx[1] = (2 * m * l * x2 ** 2 * s + 3 * m * g * s * c + 4 * u - 4 * b * x1) / (4 * (M + m) - 3 * m * c ** 2)
    dx[2] = (-3 * m * l * x2 ** 2 * s * c - 6 * (M + m) * g * s - 6 * (u - b * x1) * c) / (
        4 * l * (m + M) - 3 * m * l * c ** 2
    )
    dx[3] = x2
    return dx


def rk4_step(derivative: Derivative, state: np.ndarray, u: float, dt: float) -> np.ndarray:
    """Advance ``state`` by one classical Runge-Kutta step of size ``dt``."""
    x = np.asarray(state, dtype=np.float64)
    k1 = derivative(x, u)
    k2 = derivative(x + 0.5 * dt * k1, u)
    k3 = derivative(x + 0.5 * dt * k2, u)
    k4 = derivative(x + dt * k3, u)
    return x + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


class CartPoleIntegrator:
    """Integrates the true cart-pole dynamics with a fixed step size."""

    def __init__(self, dt: float = 0.1, params: CartPoleParams = DEFAULT_PARAMS):
        if dt <= 0:
            raise ValueError(f"dt must be > 0, got {dt}")
        self.dt = float(dt)
        self.params = params

    def derivative(self, state: np.ndarray, u: float) -> np.ndarray:
        return cartpole_dynamics(state, u, self.params)

    def step(self, state: np.ndarray, u: float) -> np.ndarray:
        return rk4_step(self.derivative, state, float(u), self.dt)
