import re
import inspect
from typing import Dict, List, Callable, Pattern, Optional, Any, Tuple, Union
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)

# Cucumber expression placeholders -> (regex, converter)
PARAMETER_TYPES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    'string': (r'"([^"]*)"', str),
    'int': (r'(-?\d+)', int),
    'float': (r'(-?\d*\.?\d+)', float),
    'word': (r'(\S+)', str),
}

_PLACEHOLDER = re.compile(r'\{(' + '|'.join(PARAMETER_TYPES) + r')\}')


def compile_expression(expression: Union[str, Pattern]) -> Tuple[Pattern, List[Callable[[str], Any]]]:
    """
    Compile a step pattern.

    Patterns starting with '^' (or already compiled) are regular expressions
    and their groups are passed through as strings. Anything else is a
    Cucumber expression: literal text plus {string}/{int}/{float}/{word}
    placeholders, matched against the whole step line.
    """
    if isinstance(expression, re.Pattern):
        return expression, []
    if expression.startswith('^'):
        return re.compile(expression, re.IGNORECASE), []

    parts = []
    converters = []
    position = 0
    for match in _PLACEHOLDER.finditer(expression):
        parts.append(re.escape(expression[position:match.start()]))
        regex, converter = PARAMETER_TYPES[match.group(1)]
        parts.append(regex)
        converters.append(converter)
        position = match.end()
    parts.append(re.escape(expression[position:]))

    return re.compile('^' + ''.join(parts) + '$'), converters


@dataclass
class StepDefinition:
    """Represents a step definition with its pattern and function"""
    keyword: str  # given, when, then
    expression: str
    pattern: Pattern
    function: Callable
    description: str = ""
    converters: List[Callable[[str], Any]] = field(default_factory=list)

    def match(self, step_text: str) -> Optional[re.Match]:
        return self.pattern.search(step_text)

    def extract_params(self, step_text: str) -> List[Any]:
        match = self.match(step_text)
        if not match:
            raise ValueError(f"Step text doesn't match pattern: {step_text}")

        params = list(match.groups())
        for index, converter in enumerate(self.converters):
            if params[index] is not None:
                params[index] = converter(params[index])
        return params

    async def execute(self, context: Any, step_text: str) -> Any:
        """Execute the step function with extracted parameters"""
        params = self.extract_params(step_text)

        # Execute function (handle both sync and async)
        if inspect.iscoroutinefunction(self.function):
            return await self.function(context, *params)
        return self.function(context, *params)


class StepDefinitionRegistry:
    """Registry for step definitions"""

    def __init__(self):
        self.definitions: List[StepDefinition] = []
        self._keyword_aliases = {
            'and': ['given', 'when', 'then'],
            'but': ['given', 'when', 'then'],
            'step': ['given', 'when', 'then'],
        }

    def add_definition(self, keyword: str, pattern: Union[str, Pattern], function: Callable,
                       description: str = ""):
        """Add a step definition to registry"""
        compiled, converters = compile_expression(pattern)

        definition = StepDefinition(
            keyword=keyword.lower(),
            expression=pattern if isinstance(pattern, str) else pattern.pattern,
            pattern=compiled,
            function=function,
            description=description or (inspect.getdoc(function) or "").split('\n')[0],
            converters=converters,
        )

        self.definitions.append(definition)
        logger.debug(f"Registered step: {keyword} {definition.expression}")

    def given(self, pattern: str, description: str = ""):
        """Decorator for Given steps"""

        def decorator(func):
            self.add_definition('given', pattern, func, description)
            return func

        return decorator

    def when(self, pattern: str, description: str = ""):
        """Decorator for When steps"""

        def decorator(func):
            self.add_definition('when', pattern, func, description)
            return func

        return decorator

    def then(self, pattern: str, description: str = ""):
        """Decorator for Then steps"""

        def decorator(func):
            self.add_definition('then', pattern, func, description)
            return func

        return decorator

    def step(self, pattern: str, description: str = ""):
        """Decorator for any step type"""

        def decorator(func):
            self.add_definition('step', pattern, func, description)
            return func

        return decorator

    def find_step_definition(self, keyword: str, step_text: str) -> Optional[StepDefinition]:
        """
        Find matching step definition for given step text.

        Definitions registered under the step's own keyword, or with @step,
        win; otherwise any definition whose pattern matches is used, since
        Gherkin keywords are not part of the step's identity.
        """
        keyword = keyword.lower().strip()
        possible_keywords = self._keyword_aliases.get(keyword, [keyword])

        fallback = None
        for definition in self.definitions:
            if not definition.match(step_text):
                continue
            if definition.keyword in possible_keywords or definition.keyword == 'step':
                logger.debug(f"Found matching step definition: {definition.expression}")
                return definition
            if fallback is None:
                fallback = definition

        if fallback is not None:
            logger.debug(f"Using {fallback.keyword} definition for {keyword} step: {fallback.expression}")
            return fallback

        logger.warning(f"No step definition found for: {keyword} {step_text}")
        return None

    def list_definitions(self) -> List[Dict[str, str]]:
        """List all registered step definitions"""
        return [
            {
                'keyword': defn.keyword,
                'pattern': defn.expression,
                'description': defn.description,
                'function': defn.function.__name__
            }
            for defn in self.definitions
        ]

    def clear(self):
        """Clear all registered definitions"""
        self.definitions.clear()

    def register_from_module(self, module):
        """Register every function in module marked with given/when/then/step"""
        functions = [obj for _, obj in inspect.getmembers(module, inspect.isfunction)
                     if hasattr(obj, '_step_definitions')]
        # Keep source order so the listing reads like the module
        functions.sort(key=lambda func: func.__code__.co_firstlineno)

        for func in functions:
            for step_info in func._step_definitions:
                self.add_definition(
                    step_info['keyword'],
                    step_info['pattern'],
                    func,
                    step_info.get('description', '')
                )


def _mark(keyword: str, pattern: str, description: str):
    def decorator(func):
        if not hasattr(func, '_step_definitions'):
            func._step_definitions = []
        func._step_definitions.append({
            'keyword': keyword,
            'pattern': pattern,
            'description': description
        })
        return func

    return decorator


def given(pattern: str, description: str = ""):
    """Mark function as a Given step"""
    return _mark('given', pattern, description)


def when(pattern: str, description: str = ""):
    """Mark function as a When step"""
    return _mark('when', pattern, description)


def then(pattern: str, description: str = ""):
    """Mark function as a Then step"""
    return _mark('then', pattern, description)


def step(pattern: str, description: str = ""):
    """Mark function as a step usable with any keyword"""
    return _mark('step', pattern, description)


def table_hashes(table) -> List[Dict[str, str]]:
    """Data table rows as dicts keyed by the header row"""
    if table is None:
        return []
    return [dict(zip(table.headings, row.cells)) for row in table.rows]


def table_raw(table) -> List[List[str]]:
    """Data table as plain rows, header row included"""
    if table is None:
        return []
    return [list(table.headings)] + [list(row.cells) for row in table.rows]
