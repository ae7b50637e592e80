from typing import List, Optional


class StrategyNotFoundError(Exception):
    """Raised when the requested assignment strategy is not registered."""

    def __init__(self, strategy_name: str):
        self.strategy_name = strategy_name
        super().__init__(f"Strategy '{strategy_name}' not found")


class InvalidConfigurationError(Exception):
    """Raised when a strategy rejects one of its configuration parameters."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(message)


class InfeasibleAssignmentError(Exception):
    """Raised when a target runs out of eligible candidates before its quota is filled.

    A single solving attempt raises it with ``attempts=None``; the retry loop
    re-raises it with the number of attempts once the cap is exhausted.
    """

    def __init__(
        self,
        target: str,
        remaining: int,
        attempts: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.target = target
        self.remaining = remaining
        self.attempts = attempts
        if message is None:
            message = (
                f"Could not find a valid assignment. Target '{target}' needs "
                f"{remaining} more participant(s), but has no eligible candidates left."
            )
        if attempts is not None:
            message = (
                f"Failed to generate assignment after {attempts} attempts. "
                f"Last error: {message}"
            )
        super().__init__(message)


class ValidationFailureError(Exception):
    """Raised in strict mode when a validator reports a blocking failure."""

    def __init__(self, rule_name: str, message: Optional[str], results: Optional[List] = None):
        self.rule_name = rule_name
        self.message = message or "Unknown error"
        self.results = results or []
        super().__init__(f"Validation failed: {rule_name} - {self.message}")


class EntityNotFoundError(Exception):
    """Raised when an entity id is not present in the entity store."""

    pass


class InvalidEntityError(Exception):
    """Raised when an entity type is unknown or its attributes are malformed."""

    pass


class HistoryFileError(Exception):
    """Raised when the assignment history file cannot be read or parsed."""

    pass


class FileReadingError(Exception):
    """Raised when there is an error reading a file."""

    pass


class FileContentError(Exception):
    """Raised when the content of a file is not as expected."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    StrategyNotFoundError: 404,
    InvalidConfigurationError: 400,
    InfeasibleAssignmentError: 422,
    ValidationFailureError: 422,
    EntityNotFoundError: 404,
    InvalidEntityError: 400,
    HistoryFileError: 500,
    FileReadingError: 500,
    FileContentError: 400,
}
