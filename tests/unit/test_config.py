"""Unit tests for configuration management."""

import math
from pathlib import Path

import pytest
from pydantic import ValidationError

from medrops.config import (
    EvaluationConfig,
    LoggingConfig,
    MedropsConfig,
    PolicyConfig,
    RewardConfig,
    RolloutConfig,
    get_config,
    reload_config,
)
from medrops.exceptions import ConfigurationError


class TestLoggingConfig:
    """Test logging configuration."""

    def test_valid_config(self):
        """Test valid logging configuration."""
        config = LoggingConfig(level="INFO", file_path="/tmp/test.log")
        assert config.level == "INFO"
        assert config.file_path == Path("/tmp/test.log")

    def test_invalid_log_level(self):
        """Test invalid log level raises error."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="INVALID")

    def test_log_level_normalization(self):
        """Test log level is normalized to uppercase."""
        config = LoggingConfig(level="info")
        assert config.level == "INFO"


class TestRolloutConfig:
    """Test rollout configuration."""

    def test_defaults(self):
        config = RolloutConfig()
        assert config.horizon == 40
        assert config.dt == pytest.approx(0.1)

    def test_non_positive_horizon(self):
        with pytest.raises(ValidationError):
            RolloutConfig(horizon=0)

    def test_non_positive_dt(self):
        with pytest.raises(ValidationError):
            RolloutConfig(dt=-0.1)


class TestEvaluationConfig:
    """Test Monte Carlo evaluation configuration."""

    def test_defaults(self):
        config = EvaluationConfig()
        assert config.parallel_evaluations == 100
        assert config.max_workers is None

    def test_zero_samples_clamped_to_one(self):
        """A request for zero samples is corrected, never left at zero."""
        assert EvaluationConfig(parallel_evaluations=0).parallel_evaluations == 1
        assert EvaluationConfig(parallel_evaluations=-5).parallel_evaluations == 1

    def test_samples_from_environment(self, monkeypatch):
        monkeypatch.setenv("MEDROPS_PARALLEL_EVALUATIONS", "0")
        assert EvaluationConfig().parallel_evaluations == 1

        monkeypatch.setenv("MEDROPS_PARALLEL_EVALUATIONS", "250")
        assert EvaluationConfig().parallel_evaluations == 250

    def test_fractional_samples_rejected(self):
        with pytest.raises(ValidationError):
            EvaluationConfig(parallel_evaluations=2.9)
        assert EvaluationConfig(parallel_evaluations=3.0).parallel_evaluations == 3

    def test_null_samples_rejected(self):
        with pytest.raises(ValidationError):
            EvaluationConfig(parallel_evaluations=None)

    def test_invalid_max_workers(self):
        with pytest.raises(ValidationError):
            EvaluationConfig(max_workers=0)


class TestRewardAndPolicyConfig:
    """Test goal and policy configuration."""

    def test_reward_defaults(self):
        config = RewardConfig()
        assert config.goal_angle == pytest.approx(math.pi)
        assert config.goal_angular_velocity == 0.0
        assert config.goal_velocity == 0.0
        assert config.goal_position == 0.0
        assert config.bandwidth == pytest.approx(0.25)

    def test_reward_bandwidth_positive(self):
        with pytest.raises(ValidationError):
            RewardConfig(bandwidth=0.0)

    def test_hidden_neurons_clamped(self):
        assert PolicyConfig(hidden_neurons=0).hidden_neurons == 1
        assert PolicyConfig(hidden_neurons=12).hidden_neurons == 12

    def test_hidden_neurons_must_be_whole(self):
        with pytest.raises(ValidationError):
            PolicyConfig(hidden_neurons=4.5)
        with pytest.raises(ValidationError):
            PolicyConfig(hidden_neurons=None)


class TestMedropsConfig:
    """Test main configuration."""

    def test_default_config(self):
        """Test default configuration creation."""
        config = MedropsConfig()
        assert config.experiment_name is not None
        assert config.rollout.horizon == 40
        assert config.evaluation.parallel_evaluations == 100

    def test_nested_overrides(self):
        config = MedropsConfig(rollout={"horizon": 12}, evaluation={"parallel_evaluations": 0})
        assert config.rollout.horizon == 12
        assert config.evaluation.parallel_evaluations == 1

    def test_yaml_loading(self, tmp_path):
        """Test loading configuration from YAML."""
        yaml_content = """
experiment_name: test_experiment
rollout:
  horizon: 25
evaluation:
  parallel_evaluations: 16
  seed: 3
reward:
  goal_angle: 0.0
"""
        yaml_file = tmp_path / "test_config.yaml"
        yaml_file.write_text(yaml_content)

        config = MedropsConfig.from_yaml(yaml_file)
        assert config.experiment_name == "test_experiment"
        assert config.rollout.horizon == 25
        assert config.evaluation.parallel_evaluations == 16
        assert config.evaluation.seed == 3
        assert config.reward.goal_angle == 0.0

    def test_invalid_yaml(self, tmp_path):
        """Test loading invalid YAML raises error."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("invalid: yaml: content: [")

        with pytest.raises(ConfigurationError):
            MedropsConfig.from_yaml(yaml_file)

    def test_non_mapping_yaml(self, tmp_path):
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigurationError):
            MedropsConfig.from_yaml(yaml_file)

    def test_yaml_saving(self, tmp_path):
        """Test saving configuration to YAML."""
        config = MedropsConfig(experiment_name="save_test", rollout={"horizon": 7})
        yaml_file = tmp_path / "saved_config.yaml"

        config.to_yaml(yaml_file)
        assert yaml_file.exists()

        loaded_config = MedropsConfig.from_yaml(yaml_file)
        assert loaded_config.experiment_name == "save_test"
        assert loaded_config.rollout.horizon == 7


def test_reload_config_replaces_global():
    original = get_config()
    try:
        reloaded = reload_config(rollout={"horizon": 5})
        assert get_config() is reloaded
        assert get_config().rollout.horizon == 5
    finally:
        reload_config(**original.model_dump())


def test_reload_config_reads_environment(monkeypatch):
    original = get_config()
    try:
        monkeypatch.setenv("MEDROPS_LOG_LEVEL", "error")
        monkeypatch.setenv("MEDROPS_HORIZON", "17")
        reloaded = reload_config()
        assert reloaded.logging.level == "ERROR"
        assert reloaded.rollout.horizon == 17
    finally:
        reload_config(**original.model_dump())


def test_test_session_runs_at_warning_level():
    assert get_config().logging.level == "WARNING"
