class SwagLabsBDDError(Exception):
    """Base exception for the Swag Labs BDD suite"""
    pass


class ConfigurationError(SwagLabsBDDError):
    """Configuration-related errors"""
    pass


class StepDefinitionError(SwagLabsBDDError):
    """No step definition matches a step line"""
    pass


class ExecutionError(SwagLabsBDDError):
    """Error loading or running feature files"""
    pass


class ConditionTimeoutError(SwagLabsBDDError):
    """A polled condition was not satisfied within its budget"""

    def __init__(self, message: str, timeout_ms: int = 0):
        super().__init__(message)
        self.timeout_ms = timeout_ms


class StepTimeoutError(ConditionTimeoutError):
    """A step ran longer than the global step timeout"""
    pass
