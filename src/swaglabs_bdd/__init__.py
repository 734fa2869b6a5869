"""
Swag Labs BDD - end-to-end browser tests for the SauceDemo store
"""

__version__ = "1.0.0"
__author__ = "Swag Labs BDD Contributors"

from .core import ConfigManager, RunnerConfig
from .executor import TestExecutor, ScenarioWorld, StepDefinitionRegistry

__all__ = [
    "ConfigManager",
    "RunnerConfig",
    "TestExecutor",
    "ScenarioWorld",
    "StepDefinitionRegistry",
]
