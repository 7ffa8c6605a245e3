"""Concrete policy parameterizations."""

from .linear import LinearPolicy
from .nn import NNPolicy

__all__ = ["LinearPolicy", "NNPolicy"]
