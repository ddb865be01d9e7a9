"""
Error types for the calculator engine.

All calculator errors extend CalculatorError for consistent handling.
The two concrete kinds only differ in the label a display shows for them.
"""

from typing import Optional


class CalculatorError(Exception):
    """
    Base error class for all calculator errors.
    """

    label = "ERROR"

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    @property
    def reason(self) -> str:
        return self.message

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class SyntaxError(CalculatorError):
    """
    Error thrown for malformed or structurally invalid input.
    """

    label = "Syntax ERROR"


class MathError(CalculatorError):
    """
    Error thrown when a well-formed expression is mathematically undefined
    or exceeds engine limits.
    """

    label = "Math ERROR"


class LimitExceededError(SyntaxError):
    """
    Error thrown when the input itself is larger than allowed.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
