from ..executor.step_definitions import StepDefinitionRegistry
from . import common_steps, login_steps, inventory_steps, shopping_steps

STEP_MODULES = [common_steps, login_steps, inventory_steps, shopping_steps]


def register_all_steps(registry: StepDefinitionRegistry) -> StepDefinitionRegistry:
    """Register every bundled step definition on registry"""
    for module in STEP_MODULES:
        registry.register_from_module(module)
    return registry


__all__ = ['STEP_MODULES', 'register_all_steps']
