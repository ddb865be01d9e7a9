"""
Tests for token types, errors and limits.
"""

import dataclasses
import logging
from decimal import Decimal

import pytest

from scicalc import (
    EvaluationLimits,
    LimitExceededError,
    MathError,
    SyntaxError,
    check_expression_length,
    enable_logging,
)
from scicalc.tokens import (
    FunctionName,
    FunctionToken,
    OperandToken,
    OperatorSymbol,
    OperatorToken,
    UnaryOperatorToken,
    UnarySymbol,
    tokens_to_string,
)


class TestTokenModel:
    """Tests for token metadata."""

    def test_token_types(self):
        assert OperandToken(Decimal(1)).type == "Operand"
        assert OperatorToken(OperatorSymbol.PLUS).type == "Operator"
        assert UnaryOperatorToken(UnarySymbol.MINUS).type == "UnaryOperator"
        assert FunctionToken(FunctionName.SIN).type == "Function"

    def test_precedence_order(self):
        plus = OperatorToken(OperatorSymbol.PLUS)
        times = OperatorToken(OperatorSymbol.TIMES)
        minus = UnaryOperatorToken(UnarySymbol.MINUS)
        power = OperatorToken(OperatorSymbol.POWER)
        factorial = UnaryOperatorToken(UnarySymbol.FACTORIAL)
        sin = FunctionToken(FunctionName.SIN)
        assert plus.precedence < times.precedence < minus.precedence
        assert minus.precedence < power.precedence < factorial.precedence
        assert factorial.precedence == sin.precedence

    def test_same_rank_for_additive_and_multiplicative_pairs(self):
        assert (
            OperatorToken(OperatorSymbol.PLUS).precedence
            == OperatorToken(OperatorSymbol.MINUS).precedence
        )
        assert (
            OperatorToken(OperatorSymbol.TIMES).precedence
            == OperatorToken(OperatorSymbol.DIVIDE).precedence
        )

    def test_associativity(self):
        assert OperatorToken(OperatorSymbol.POWER).right_associative
        assert not OperatorToken(OperatorSymbol.MINUS).right_associative
        assert UnaryOperatorToken(UnarySymbol.MINUS).right_associative

    def test_only_minus_is_prefix(self):
        assert UnaryOperatorToken(UnarySymbol.MINUS).is_prefix
        assert not UnaryOperatorToken(UnarySymbol.FACTORIAL).is_prefix

    def test_tokens_are_immutable(self):
        token = OperandToken(Decimal(1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.value = Decimal(2)

    def test_tokens_compare_by_value(self):
        assert OperatorToken(OperatorSymbol.PLUS, 3) == OperatorToken(OperatorSymbol.PLUS, 3)

    def test_tokens_to_string(self):
        tokens = [
            OperandToken(Decimal("2.5")),
            UnaryOperatorToken(UnarySymbol.MINUS),
            FunctionToken(FunctionName.LN),
        ]
        assert tokens_to_string(tokens) == "2.5 minus ln"


class TestErrors:
    """Tests for the error taxonomy."""

    def test_labels(self):
        assert SyntaxError("x").label == "Syntax ERROR"
        assert MathError("x").label == "Math ERROR"

    def test_reason(self):
        assert MathError("logarithm of zero").reason == "logarithm of zero"

    def test_context_without_position(self):
        assert SyntaxError("empty expression").format_with_context() == "empty expression"

    def test_limit_error_is_a_syntax_error(self):
        error = LimitExceededError("max_expression_length", 4, 9)
        assert isinstance(error, SyntaxError)
        assert error.limit == 4
        assert error.actual == 9


class TestLimits:
    """Tests for limit helpers."""

    def test_expression_within_limit(self):
        check_expression_length("1 + 1", EvaluationLimits(max_expression_length=5))

    def test_expression_over_limit(self):
        with pytest.raises(LimitExceededError):
            check_expression_length("1 + 1 ", EvaluationLimits(max_expression_length=5))


class TestLogging:
    """Tests for logging setup."""

    def test_enable_logging_sets_level(self):
        logger = enable_logging("debug")
        assert logger.name == "scicalc"
        assert logger.level == logging.DEBUG
        enable_logging("warning")
        assert logger.level == logging.WARNING

    def test_enable_logging_adds_one_handler(self):
        logger = enable_logging("warning")
        count = len(logger.handlers)
        enable_logging("warning")
        assert len(logger.handlers) == count

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            enable_logging("chatty")
