from .config import ConfigManager, RunnerConfig, SUPPORTED_BROWSERS
from .exceptions import (
    SwagLabsBDDError,
    ConfigurationError,
    StepDefinitionError,
    ExecutionError,
    ConditionTimeoutError,
    StepTimeoutError,
)

__all__ = [
    # Configuration
    "ConfigManager",
    "RunnerConfig",
    "SUPPORTED_BROWSERS",

    # Exceptions
    "SwagLabsBDDError",
    "ConfigurationError",
    "StepDefinitionError",
    "ExecutionError",
    "ConditionTimeoutError",
    "StepTimeoutError",
]
