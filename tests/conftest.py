"""Pytest configuration and fixtures for medrops."""

import numpy as np
import pytest

from medrops.config import MedropsConfig, reload_config
from medrops.core.models import DynamicsOracleModel, FixedVarianceModel
from medrops.core.reward import CartPoleReward, Goal
from medrops.logging import setup_logging
from medrops.policies import LinearPolicy
from medrops.sim.trial_log import TrialLog

LINEAR_PARAMS = np.array([0.6717, 0.2685, 0.0066, 0.6987, 0.4845, 3.1517])


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """Set environment variables for testing and rebuild the global config from them."""
    monkeypatch.setenv("MEDROPS_LOG_LEVEL", "WARNING")  # Reduce log noise during tests
    setup_logging(reload_config())
    yield


@pytest.fixture
def config() -> MedropsConfig:
    """Create a test configuration."""
    return MedropsConfig(
        experiment_name="test_experiment",
        rollout={"horizon": 10},
        evaluation={"parallel_evaluations": 8, "max_workers": 4, "seed": 42},
    )


@pytest.fixture
def linear_policy() -> LinearPolicy:
    policy = LinearPolicy(max_u=10.0)
    policy.set_params(LINEAR_PARAMS)
    return policy


@pytest.fixture
def random_policy() -> LinearPolicy:
    return LinearPolicy(max_u=10.0, seed=7)


@pytest.fixture
def reward() -> CartPoleReward:
    return CartPoleReward(goal=Goal(), bandwidth=0.25)


@pytest.fixture
def upright_reward() -> CartPoleReward:
    """Reward centred on the hanging-down start so values stay well above zero."""
    return CartPoleReward(goal=Goal(angle=0.0), bandwidth=1.0)


@pytest.fixture
def oracle_model() -> DynamicsOracleModel:
    return DynamicsOracleModel(variance=0.0)


@pytest.fixture
def drift_model():
    """Constant mean delta with unit-scale noise."""
    mean = np.array([0.01, 0.0, 0.02, 0.05])
    return lambda variance: FixedVarianceModel(lambda q: mean, variance=variance)


@pytest.fixture
def trial_log() -> TrialLog:
    return TrialLog()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
