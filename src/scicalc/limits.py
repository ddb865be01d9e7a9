"""
Limits for expression evaluation and result display.

Evaluation limits bound the work a single expression may cause.
Format limits control how a result is rendered on a narrow display.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class EvaluationLimits:
    """Evaluation limits configuration."""

    # Maximum expression string length in characters
    max_expression_length: int = 4096

    # Largest exponent accepted by ^
    max_exponent: int = 2_147_483_637

    # Largest n accepted by n!
    max_factorial_operand: int = 10_000

    # Significant digits for roots, powers, logarithms and trigonometry
    precision: int = 30

    # Fractional digits kept by division
    division_scale: int = 30

    # Largest decimal exponent, in either direction, of a number literal
    max_literal_exponent: int = 10_000

    # Most digits a quotient may need before rounding
    max_result_digits: int = 100_000


@dataclass(frozen=True)
class FormatLimits:
    """Display limits configuration."""

    # Maximum fractional digits kept when a result is too long to show
    max_scale: int = 12

    # Maximum display string length
    max_length: int = 13


DEFAULT_EVALUATION_LIMITS = EvaluationLimits()

DEFAULT_FORMAT_LIMITS = FormatLimits()


def check_expression_length(
    expression: str, limits: Optional[EvaluationLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EVALUATION_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def exceeds_max_exponent(
    exponent: Decimal, limits: Optional[EvaluationLimits] = None
) -> bool:
    """Checks an exponent against the exponent ceiling."""
    limits = limits or DEFAULT_EVALUATION_LIMITS
    return exponent > limits.max_exponent


def exceeds_max_factorial(n: int, limits: Optional[EvaluationLimits] = None) -> bool:
    """Checks a factorial operand against its ceiling."""
    limits = limits or DEFAULT_EVALUATION_LIMITS
    return n > limits.max_factorial_operand


def check_literal_exponent(
    value: Decimal, limits: Optional[EvaluationLimits] = None
) -> None:
    """Validates that a number literal's magnitude is within limits."""
    limits = limits or DEFAULT_EVALUATION_LIMITS
    exponent = value.adjusted()
    if abs(exponent) > limits.max_literal_exponent:
        raise LimitExceededError(
            "max_literal_exponent", limits.max_literal_exponent, abs(exponent)
        )
