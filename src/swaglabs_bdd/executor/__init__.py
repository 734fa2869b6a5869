from .executor import TestExecutor
from .hooks import ScenarioHooks
from .world import ScenarioWorld
from .report_collector import ReportCollector
from .step_definitions import (
    StepDefinition,
    StepDefinitionRegistry,
    compile_expression,
    given,
    when,
    then,
    step,
    table_hashes,
    table_raw,
)

__all__ = [
    'TestExecutor',
    'ScenarioHooks',
    'ScenarioWorld',
    'ReportCollector',
    'StepDefinition',
    'StepDefinitionRegistry',
    'compile_expression',
    'given',
    'when',
    'then',
    'step',
    'table_hashes',
    'table_raw',
]
