"""
Postfix evaluator.

Executes a postfix token sequence on a value stack using decimal
arithmetic and returns a single value.

Arithmetic semantics:
- +, - and × are exact.
- ÷ keeps a fixed number of fractional digits, rounding half up.
- Roots, powers, logarithms and trigonometric functions are computed to a
  fixed number of significant digits.
- Trigonometric functions take their argument in degrees.
"""

import logging
import math
from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_DOWN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import List, Optional, Sequence

from .converter import to_postfix
from .errors import CalculatorError, MathError, SyntaxError
from .limits import (
    DEFAULT_EVALUATION_LIMITS,
    EvaluationLimits,
    exceeds_max_exponent,
    exceeds_max_factorial,
)
from .tokenizer import E, tokenize
from .tokens import (
    FunctionName,
    FunctionToken,
    OperandToken,
    OperatorSymbol,
    OperatorToken,
    Token,
    UnaryOperatorToken,
    UnarySymbol,
)

logger = logging.getLogger("scicalc.evaluator")

# Used for radian conversion only; carries guard digits beyond any
# working precision in use.
_PI_60 = Decimal("3.14159265358979323846264338327950288419716939937510582097494")

_GUARD_DIGITS = 10

_TRAPS = [InvalidOperation, DivisionByZero, Overflow]

# Exact arithmetic: precision is never the limiting factor for +, -, ×.
_EXACT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    rounding=ROUND_HALF_UP,
    traps=_TRAPS,
)

_ZERO = Decimal(0)
_ONE = Decimal(1)


def _is_zero(value: Decimal) -> bool:
    return value.is_zero()


def _is_one(value: Decimal) -> bool:
    return value == _ONE


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """Returns the value in canonical form; -0 becomes 0."""
    if value.is_zero():
        return _ZERO
    return _EXACT.normalize(value)


def _quantum(places: int) -> Decimal:
    return Decimal((0, (1,), -places))


def _sin_series(x: Decimal) -> Decimal:
    """Taylor series for sin(x) at the current context precision."""
    i, last, total, fact, num, sign = 1, 0, x, 1, x, 1
    while total != last:
        last = total
        i += 2
        fact *= i * (i - 1)
        num *= x * x
        sign *= -1
        total += num / fact * sign
    return total


def _cos_series(x: Decimal) -> Decimal:
    """Taylor series for cos(x) at the current context precision."""
    i, last, total, fact, num, sign = 0, 0, Decimal(1), 1, Decimal(1), 1
    while total != last:
        last = total
        i += 2
        fact *= i * (i - 1)
        num *= x * x
        sign *= -1
        total += num / fact * sign
    return total


# sin and cos at 0°, 90°, 180° and 270°
_QUADRANT_SIN = (_ZERO, _ONE, _ZERO, -_ONE)
_QUADRANT_COS = (_ONE, _ZERO, -_ONE, _ZERO)


@dataclass
class EvaluationResult:
    """Result of expression evaluation."""

    value: Optional[Decimal]
    """The evaluated value."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[CalculatorError] = None
    """The error if evaluation failed."""

    @property
    def message(self) -> Optional[str]:
        return self.error.reason if self.error else None

    @property
    def label(self) -> Optional[str]:
        """Display label for a failure: "Syntax ERROR" or "Math ERROR"."""
        return self.error.label if self.error else None


class Evaluator:
    """Evaluates a postfix token sequence and returns the result."""

    def __init__(
        self,
        limits: Optional[EvaluationLimits] = None,
        source: Optional[str] = None,
    ):
        self._limits = limits or DEFAULT_EVALUATION_LIMITS
        self._source = source
        self._precise = Context(
            prec=self._limits.precision, rounding=ROUND_HALF_UP, traps=_TRAPS
        )

    def evaluate(self, postfix: Sequence[Token]) -> Decimal:
        """Evaluates a postfix sequence and returns the value."""
        stack: List[Decimal] = []

        try:
            for token in postfix:
                match token:
                    case OperandToken(value=value):
                        stack.append(value)
                    case OperatorToken():
                        self._evaluate_operator(token, stack)
                    case UnaryOperatorToken():
                        self._evaluate_unary(token, stack)
                    case FunctionToken():
                        self._evaluate_function(token, stack)
                    case _:
                        raise SyntaxError(f"unsupported token: '{token}'")
        except DecimalException as error:
            raise MathError(
                f"undefined result: {type(error).__name__}", expression=self._source
            ) from error

        if not stack:
            raise SyntaxError("empty expression")
        if len(stack) > 1:
            raise SyntaxError("missing operator", expression=self._source)

        return strip_trailing_zeros(stack[0])

    # ============================================================
    # Binary Operators
    # ============================================================

    def _evaluate_operator(self, token: OperatorToken, stack: List[Decimal]) -> None:
        if token.symbol is OperatorSymbol.LEFT_PAREN:
            raise SyntaxError("unclosed parenthesis", token.position, self._source)

        if len(stack) < 2:
            raise SyntaxError(
                f"bad operand type for operator: '{token.lexeme}'",
                token.position,
                self._source,
            )

        right = stack.pop()
        left = stack.pop()

        match token.symbol:
            case OperatorSymbol.PLUS:
                stack.append(_EXACT.add(left, right))
            case OperatorSymbol.MINUS:
                stack.append(_EXACT.subtract(left, right))
            case OperatorSymbol.TIMES:
                stack.append(_EXACT.multiply(left, right))
            case OperatorSymbol.DIVIDE:
                if _is_zero(right):
                    raise MathError(
                        f"division by zero: '{left}÷{right}'",
                        token.position,
                        self._source,
                    )
                stack.append(self._divide(left, right, token))
            case OperatorSymbol.POWER:
                stack.append(self._power(left, right, token))
            case _:
                raise SyntaxError(
                    f"unsupported operator: '{token.lexeme}'",
                    token.position,
                    self._source,
                )

    def _divide(self, left: Decimal, right: Decimal, token: OperatorToken) -> Decimal:
        """Divides, rounding half up to `division_scale` fractional digits."""
        scale = self._limits.division_scale
        if _is_zero(left):
            return _ZERO
        # Integer digits of the quotient, the kept fraction and one guard digit
        digits = left.adjusted() - right.adjusted() + scale + 3
        if digits > self._limits.max_result_digits:
            raise MathError("result too large", token.position, self._source)
        # Truncating first cannot move a value across a rounding midpoint
        context = Context(
            prec=max(digits, 1),
            rounding=ROUND_DOWN,
            Emax=MAX_EMAX,
            Emin=MIN_EMIN,
            traps=_TRAPS,
        )
        quotient = context.divide(left, right)
        return quotient.quantize(
            _quantum(scale), rounding=ROUND_HALF_UP, context=_EXACT
        )

    def _power(self, base: Decimal, exponent: Decimal, token: OperatorToken) -> Decimal:
        if exceeds_max_exponent(exponent, self._limits):
            raise MathError(
                "exceeded maximum exponent size", token.position, self._source
            )
        if _is_one(base):
            return _ONE
        if _is_zero(base):
            return _ZERO
        try:
            return self._precise.power(base, exponent)
        except Overflow as error:
            raise MathError("result too large", token.position, self._source) from error
        except InvalidOperation as error:
            raise MathError(
                f"undefined exponentiation: '{base}^{exponent}'",
                token.position,
                self._source,
            ) from error

    # ============================================================
    # Unary Operators
    # ============================================================

    def _evaluate_unary(self, token: UnaryOperatorToken, stack: List[Decimal]) -> None:
        if not stack:
            raise SyntaxError(
                "no operand found for unary operator", token.position, self._source
            )

        value = stack.pop()

        match token.symbol:
            case UnarySymbol.MINUS:
                stack.append(_EXACT.minus(value))
            case UnarySymbol.FACTORIAL:
                stack.append(self._factorial(value, token))
            case UnarySymbol.SQRT:
                stack.append(self._sqrt(value, token))

    def _factorial(self, value: Decimal, token: Token) -> Decimal:
        if value < 0:
            raise MathError(
                "factorial of a negative number", token.position, self._source
            )
        if value != value.to_integral_value():
            raise MathError(
                "factorial of a non-integer", token.position, self._source
            )
        n = int(value)
        if exceeds_max_factorial(n, self._limits):
            raise MathError(
                "exceeded maximum factorial size", token.position, self._source
            )
        return Decimal(math.factorial(n))

    def _sqrt(self, value: Decimal, token: Token) -> Decimal:
        if value < 0:
            raise MathError(
                "square root of a negative number", token.position, self._source
            )
        return self._precise.sqrt(value)

    # ============================================================
    # Functions
    # ============================================================

    def _evaluate_function(self, token: FunctionToken, stack: List[Decimal]) -> None:
        if not stack:
            raise SyntaxError(
                f"bad operand type for function: '{token.lexeme}'",
                token.position,
                self._source,
            )

        # Angles are in degrees
        value = stack.pop()

        match token.name:
            case FunctionName.SIN:
                stack.append(self._sin(value))
            case FunctionName.COS:
                stack.append(self._cos(value))
            case FunctionName.TAN:
                stack.append(self._tan(value, token))
            case FunctionName.LN:
                stack.append(self._ln(value, token))
            case FunctionName.SQRT:
                stack.append(self._sqrt(value, token))

    def _reduce_degrees(self, degrees: Decimal) -> Decimal:
        """Reduces an angle to the range [-180, 180)."""
        reduced = _EXACT.remainder(degrees, Decimal(360))
        if reduced >= 180:
            reduced = _EXACT.subtract(reduced, Decimal(360))
        elif reduced < -180:
            reduced = _EXACT.add(reduced, Decimal(360))
        return reduced

    @staticmethod
    def _quadrant(degrees: Decimal) -> Optional[int]:
        """Index into the quadrant tables when the angle is a multiple of 90°."""
        if _EXACT.remainder(degrees, Decimal(90)).is_zero():
            return int(_EXACT.divide_int(degrees, Decimal(90))) % 4
        return None

    def _radians(self, degrees: Decimal) -> Decimal:
        return degrees * _PI_60 / 180

    def _trig(self, degrees: Decimal, series, table) -> Decimal:
        reduced = self._reduce_degrees(degrees)
        quadrant = self._quadrant(reduced)
        if quadrant is not None:
            return table[quadrant]
        with localcontext(self._precise) as ctx:
            ctx.prec += _GUARD_DIGITS
            result = series(self._radians(reduced))
        return self._precise.plus(result)

    def _sin(self, degrees: Decimal) -> Decimal:
        return self._trig(degrees, _sin_series, _QUADRANT_SIN)

    def _cos(self, degrees: Decimal) -> Decimal:
        return self._trig(degrees, _cos_series, _QUADRANT_COS)

    def _tan(self, degrees: Decimal, token: FunctionToken) -> Decimal:
        reduced = self._reduce_degrees(degrees)
        quadrant = self._quadrant(reduced)
        if quadrant is not None:
            if _QUADRANT_COS[quadrant].is_zero():
                raise SyntaxError(
                    f"division by zero: 'tan({degrees})'", token.position, self._source
                )
            return _ZERO
        with localcontext(self._precise) as ctx:
            ctx.prec += _GUARD_DIGITS
            radians = self._radians(reduced)
            result = _sin_series(radians) / _cos_series(radians)
        return self._precise.plus(result)

    def _ln(self, value: Decimal, token: FunctionToken) -> Decimal:
        if value < 0:
            raise MathError(
                "logarithm of a negative number", token.position, self._source
            )
        if _is_zero(value):
            raise MathError("logarithm of zero", token.position, self._source)
        if _is_one(value):
            return _ZERO
        if value == E:
            return _ONE
        return self._precise.ln(value)


def evaluate_postfix(
    postfix: Sequence[Token],
    limits: Optional[EvaluationLimits] = None,
    source: Optional[str] = None,
) -> Decimal:
    """
    Evaluates a postfix token sequence.

    Raises:
        SyntaxError: If the sequence is structurally invalid
        MathError: If an operation is mathematically undefined
    """
    return Evaluator(limits, source).evaluate(postfix)


def evaluate(expression: str, limits: Optional[EvaluationLimits] = None) -> Decimal:
    """
    Evaluates a space-separated infix expression.

    Args:
        expression: The expression, e.g. "( 2 + 3 ) × 4"
        limits: Optional evaluation limits

    Returns:
        The result with trailing zeros stripped

    Raises:
        SyntaxError: If the expression is malformed or empty
        MathError: If the expression is mathematically undefined
    """
    tokens = tokenize(expression, limits)
    postfix = to_postfix(tokens, expression)
    value = evaluate_postfix(postfix, limits, expression)
    logger.debug(
        "expression_evaluated",
        extra={"expression": expression, "result": str(value)},
    )
    return value


def try_evaluate(
    expression: str, limits: Optional[EvaluationLimits] = None
) -> EvaluationResult:
    """
    Evaluates an expression and returns the result instead of raising.

    Returns:
        The evaluation result with value and success status
    """
    try:
        value = evaluate(expression, limits)
        return EvaluationResult(value=value, success=True)
    except CalculatorError as error:
        return EvaluationResult(value=None, success=False, error=error)
