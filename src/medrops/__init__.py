"""medrops: cart-pole policy rollout and Monte Carlo evaluation.

Simulates candidate control policies on the true cart-pole dynamics and on a
probabilistic dynamics model, and reduces many sampled model rollouts to a
single fitness value for an outer policy search.
"""

__version__ = "0.1.0"

from .config import MedropsConfig, get_config, reload_config
from .exceptions import (
    ConfigurationError,
    ContractViolationError,
    MedropsError,
    ModelContractError,
    ValidationError,
)
from .logging import get_logger, setup_logging
from . import core, policies, sim
from .core import *
from .sim import *
from .policies import *

__all__ = [
    "__version__",
    "ConfigurationError",
    "ContractViolationError",
    "MedropsConfig",
    "MedropsError",
    "ModelContractError",
    "ValidationError",
    "get_config",
    "get_logger",
    "reload_config",
    "setup_logging",
]
__all__ += core.__all__ + sim.__all__ + policies.__all__
