"""
Token types for the calculator expression language.

Tokens are produced by the tokenizer and consumed by the shunting-yard
converter and the postfix evaluator. They are immutable and carry no
references to each other.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Literal, Union

# ============================================================
# Symbol Sets
# ============================================================


class OperatorSymbol(Enum):
    """Binary operators and parentheses."""

    PLUS = "+"
    MINUS = "-"
    TIMES = "×"
    DIVIDE = "÷"
    POWER = "^"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"


class UnarySymbol(Enum):
    """Unary operators. MINUS is spelled differently from binary subtraction."""

    MINUS = "minus"
    FACTORIAL = "!"
    SQRT = "√"


class FunctionName(Enum):
    """Single-argument functions."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    LN = "ln"
    SQRT = "√"


# Precedence ranks (lowest to highest):
# 0. Parentheses (never popped by an operator)
# 1. Additive: +, -
# 2. Multiplicative: ×, ÷
# 3. Unary minus
# 4. Power: ^
# 5. Functions, !, √
OPERATOR_PRECEDENCE = {
    OperatorSymbol.LEFT_PAREN: 0,
    OperatorSymbol.RIGHT_PAREN: 0,
    OperatorSymbol.PLUS: 1,
    OperatorSymbol.MINUS: 1,
    OperatorSymbol.TIMES: 2,
    OperatorSymbol.DIVIDE: 2,
    OperatorSymbol.POWER: 4,
}

UNARY_PRECEDENCE = {
    UnarySymbol.MINUS: 3,
    UnarySymbol.FACTORIAL: 5,
    UnarySymbol.SQRT: 5,
}

FUNCTION_PRECEDENCE = 5

# Operators written before their operand. The others are written after it.
PREFIX_UNARY_SYMBOLS = frozenset({UnarySymbol.MINUS})


# ============================================================
# Token Types
# ============================================================


@dataclass(frozen=True)
class OperandToken:
    """A numeric value."""

    value: Decimal
    position: int = 0
    """Position in source expression (for error reporting)."""

    @property
    def type(self) -> Literal["Operand"]:
        return "Operand"

    @property
    def lexeme(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OperatorToken:
    """A binary operator or a parenthesis."""

    symbol: OperatorSymbol
    position: int = 0

    @property
    def type(self) -> Literal["Operator"]:
        return "Operator"

    @property
    def lexeme(self) -> str:
        return self.symbol.value

    @property
    def precedence(self) -> int:
        return OPERATOR_PRECEDENCE[self.symbol]

    @property
    def right_associative(self) -> bool:
        return self.symbol is OperatorSymbol.POWER

    @property
    def is_left_paren(self) -> bool:
        return self.symbol is OperatorSymbol.LEFT_PAREN

    @property
    def is_right_paren(self) -> bool:
        return self.symbol is OperatorSymbol.RIGHT_PAREN


@dataclass(frozen=True)
class UnaryOperatorToken:
    """A unary operator; always right-associative."""

    symbol: UnarySymbol
    position: int = 0

    @property
    def type(self) -> Literal["UnaryOperator"]:
        return "UnaryOperator"

    @property
    def lexeme(self) -> str:
        return self.symbol.value

    @property
    def precedence(self) -> int:
        return UNARY_PRECEDENCE[self.symbol]

    @property
    def right_associative(self) -> bool:
        return True

    @property
    def is_prefix(self) -> bool:
        return self.symbol in PREFIX_UNARY_SYMBOLS


@dataclass(frozen=True)
class FunctionToken:
    """A function applied to the value that follows it."""

    name: FunctionName
    position: int = 0

    @property
    def type(self) -> Literal["Function"]:
        return "Function"

    @property
    def lexeme(self) -> str:
        return self.name.value

    @property
    def precedence(self) -> int:
        return FUNCTION_PRECEDENCE

    @property
    def right_associative(self) -> bool:
        return True


# Union type for all tokens
Token = Union[OperandToken, OperatorToken, UnaryOperatorToken, FunctionToken]


# ============================================================
# Lookup Tables
# ============================================================

OPERATOR_SYMBOLS = {symbol.value: symbol for symbol in OperatorSymbol}

FUNCTION_NAMES = {name.value: name for name in FunctionName}

PAREN_LEXEMES = frozenset({"(", ")"})

# Lexemes after which an operator must be unary
BINARY_OPERATOR_LEXEMES = frozenset(
    symbol.value for symbol in OperatorSymbol if symbol.value not in PAREN_LEXEMES
)


def tokens_to_string(tokens: Iterable[Token]) -> str:
    """Returns the tokens as a space-separated string for debugging."""
    return " ".join(token.lexeme for token in tokens)
