"""Custom exceptions for medrops.

Provides structured error handling with specific exception types for the
failure modes of rollout and policy evaluation.
"""

from typing import Any, Dict, Optional, Sequence

import numpy as np


class MedropsError(Exception):
    """Base exception for all medrops errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(MedropsError):
    """Raised when there's a configuration-related error."""
    pass


class ValidationError(MedropsError):
    """Raised when input validation fails."""
    pass


class ContractViolationError(ValidationError):
    """Raised when an observation, action or prediction has the wrong size."""
    pass


class ModelContractError(MedropsError):
    """Raised when a probabilistic model returns an invalid prediction."""
    pass


class RolloutError(MedropsError):
    """Raised when a rollout cannot be completed."""
    pass


def validate_positive(value: float, name: str) -> float:
    """Validate that a value is positive."""
    if value <= 0:
        raise ValidationError(f"{name} must be positive", details={"value": value, "parameter": name})
    return value


def validate_shape(array: Any, expected_shape: Sequence[int], name: str) -> np.ndarray:
    """Return ``array`` as a float64 array, failing if its shape is not ``expected_shape``."""
    arr = np.asarray(array, dtype=np.float64)
    if arr.shape != tuple(expected_shape):
        raise ContractViolationError(
            f"{name} has incorrect shape",
            details={
                "actual_shape": arr.shape,
                "expected_shape": tuple(expected_shape),
                "parameter": name,
            },
        )
    return arr
