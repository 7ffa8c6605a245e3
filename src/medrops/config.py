"""Configuration management for medrops.

Provides centralized configuration with validation, type safety, and environment variable support.
"""

import math
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import Field, field_validator
from pydantic.types import PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="MEDROPS_LOG_")

    level: str = Field(default="INFO")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )
    file_path: Optional[Path] = Field(default=None)
    max_file_size: str = Field(default="10 MB")
    retention: str = Field(default="30 days")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class RolloutConfig(BaseSettings):
    """Trajectory rollout configuration."""

    model_config = SettingsConfigDict(env_prefix="MEDROPS_")

    horizon: PositiveInt = Field(default=40)
    dt: PositiveFloat = Field(default=0.1)


class EvaluationConfig(BaseSettings):
    """Monte Carlo policy evaluation configuration."""

    model_config = SettingsConfigDict(env_prefix="MEDROPS_")

    parallel_evaluations: int = Field(default=100)
    max_workers: Optional[PositiveInt] = Field(default=None)
    seed: Optional[int] = Field(default=None)

    @field_validator("parallel_evaluations", mode="after")
    @classmethod
    def clamp_parallel_evaluations(cls, v: int) -> int:
        # At least one sample; the evaluator divides by this count.
        return max(1, v)


class RewardConfig(BaseSettings):
    """Goal state and bandwidth of the default reward."""

    model_config = SettingsConfigDict(env_prefix="MEDROPS_")

    goal_angle: float = Field(default=math.pi)
    goal_angular_velocity: float = Field(default=0.0)
    goal_velocity: float = Field(default=0.0)
    goal_position: float = Field(default=0.0)
    bandwidth: PositiveFloat = Field(default=0.25)


class PolicyConfig(BaseSettings):
    """Policy parameterization configuration."""

    model_config = SettingsConfigDict(env_prefix="MEDROPS_")

    max_u: PositiveFloat = Field(default=10.0)
    hidden_neurons: int = Field(default=5)

    @field_validator("hidden_neurons", mode="after")
    @classmethod
    def clamp_hidden_neurons(cls, v: int) -> int:
        return max(1, v)


class MedropsConfig(BaseSettings):
    """Main medrops configuration combining all subsystems."""

    model_config = SettingsConfigDict(
        env_prefix="MEDROPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Sub-configurations
    # Built per instance so environment changes are seen by reload_config()
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    rollout: RolloutConfig = Field(default_factory=RolloutConfig)
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    reward: RewardConfig = Field(default_factory=RewardConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)

    experiment_name: str = Field(default="cartpole")

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "MedropsConfig":
        """Load configuration from YAML file."""
        try:
            with open(yaml_path, "r") as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Invalid YAML configuration", details={"path": str(yaml_path)}
            ) from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                "YAML configuration must be a mapping", details={"path": str(yaml_path)}
            )
        return cls(**config_dict)

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(yaml_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


# Global configuration instance
config = MedropsConfig()


def get_config() -> MedropsConfig:
    """Get the global configuration instance."""
    return config


def reload_config(**overrides: Any) -> MedropsConfig:
    """Reload configuration with overrides."""
    global config
    config = MedropsConfig(**overrides)
    return config
