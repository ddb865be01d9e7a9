"""
Tokenizer (lexer) for the calculator expression language.

Splits a space-separated infix expression into typed tokens. Operators,
parentheses and function names must already be separated by whitespace;
the tokenizer does not re-split glued lexemes.
"""

import re
from decimal import Decimal
from typing import List, Optional

from .errors import SyntaxError
from .limits import EvaluationLimits, check_expression_length, check_literal_exponent
from .tokens import (
    BINARY_OPERATOR_LEXEMES,
    FUNCTION_NAMES,
    OPERATOR_SYMBOLS,
    FunctionToken,
    OperandToken,
    OperatorSymbol,
    OperatorToken,
    Token,
    UnaryOperatorToken,
    UnarySymbol,
)

# Named constants, to 30 significant digits
E = Decimal("2.71828182845904523536028747135")
PI = Decimal("3.14159265358979323846264338328")

CONSTANTS = {
    "e": E,
    "π": PI,
}

_LEXEME_PATTERN = re.compile(r"\S+")

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_FACTORIAL_LEXEME = UnarySymbol.FACTORIAL.value

_MINUS_LEXEME = UnarySymbol.MINUS.value


def _parse_number(lexeme: str) -> Optional[Decimal]:
    """Parses a decimal literal, or returns None if the lexeme is not one."""
    if not _NUMBER_PATTERN.fullmatch(lexeme):
        return None
    return Decimal(lexeme)


class Tokenizer:
    """Tokenizer for expression strings."""

    def __init__(self, source: str, limits: Optional[EvaluationLimits] = None):
        self._source = source
        self._limits = limits
        self._tokens: List[Token] = []
        self._previous: Optional[str] = None

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        for match in _LEXEME_PATTERN.finditer(self._source):
            self._scan_lexeme(match.group(), match.start())
            self._previous = match.group()

        return self._tokens

    def _expects_operand(self) -> bool:
        """True when the previous lexeme leaves an operand missing."""
        previous = self._previous
        return (
            previous is None
            or previous == "("
            or previous in BINARY_OPERATOR_LEXEMES
            or previous in FUNCTION_NAMES
            or previous == _MINUS_LEXEME
        )

    def _scan_lexeme(self, lexeme: str, position: int) -> None:
        # Number literals
        number = _parse_number(lexeme)
        if number is not None:
            check_literal_exponent(number, self._limits)
            self._tokens.append(OperandToken(number, position))
            return

        # Named constants
        if lexeme in CONSTANTS:
            self._tokens.append(OperandToken(CONSTANTS[lexeme], position))
            return

        # Factorial is written after its operand
        if lexeme == _FACTORIAL_LEXEME:
            self._tokens.append(UnaryOperatorToken(UnarySymbol.FACTORIAL, position))
            return

        # Negation may also be spelled out
        if lexeme == _MINUS_LEXEME:
            self._tokens.append(UnaryOperatorToken(UnarySymbol.MINUS, position))
            return

        if lexeme in OPERATOR_SYMBOLS:
            self._scan_operator(OPERATOR_SYMBOLS[lexeme], position)
            return

        if lexeme in FUNCTION_NAMES:
            self._tokens.append(FunctionToken(FUNCTION_NAMES[lexeme], position))
            return

        raise SyntaxError(
            f"unrecognised token: '{lexeme}'", position, self._source
        )

    def _scan_operator(self, symbol: OperatorSymbol, position: int) -> None:
        if symbol in (OperatorSymbol.LEFT_PAREN, OperatorSymbol.RIGHT_PAREN):
            self._tokens.append(OperatorToken(symbol, position))
            return

        if not self._expects_operand():
            self._tokens.append(OperatorToken(symbol, position))
            return

        if symbol is OperatorSymbol.MINUS:
            self._tokens.append(UnaryOperatorToken(UnarySymbol.MINUS, position))
            return

        raise SyntaxError(
            f"unexpected operator: '{symbol.value}'", position, self._source
        )


def tokenize(source: str, limits: Optional[EvaluationLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The space-separated expression string to tokenize
        limits: Optional evaluation limits

    Returns:
        List of tokens

    Raises:
        SyntaxError: If the expression contains an unrecognised lexeme
        LimitExceededError: If the expression or a literal is too large
    """
    tokenizer = Tokenizer(source, limits)
    return tokenizer.tokenize()
