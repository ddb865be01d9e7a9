"""
Tests for the shunting-yard converter.
"""

import logging

import pytest

from scicalc import SyntaxError, to_postfix, tokenize, tokens_to_string


def postfix_of(expression: str) -> str:
    """Helper to convert an expression and render the postfix sequence."""
    return tokens_to_string(to_postfix(tokenize(expression), expression))


class TestPrecedence:
    """Tests for operator precedence."""

    def test_multiplication_before_addition(self):
        assert postfix_of("2 + 3 × 4") == "2 3 4 × +"

    def test_parentheses_override_precedence(self):
        assert postfix_of("( 2 + 3 ) × 4") == "2 3 + 4 ×"

    def test_left_associative_subtraction(self):
        assert postfix_of("8 - 3 - 2") == "8 3 - 2 -"

    def test_left_associative_division(self):
        assert postfix_of("8 ÷ 4 ÷ 2") == "8 4 ÷ 2 ÷"

    def test_right_associative_power(self):
        assert postfix_of("2 ^ 3 ^ 2") == "2 3 2 ^ ^"

    def test_unary_minus_binds_looser_than_power(self):
        assert postfix_of("minus 3 ^ 2") == "3 2 ^ minus"

    def test_unary_minus_binds_tighter_than_multiplication(self):
        assert postfix_of("- 3 × 2") == "3 minus 2 ×"

    def test_unary_minus_in_exponent(self):
        assert postfix_of("2 ^ - 1") == "2 1 minus ^"

    def test_double_negation(self):
        assert postfix_of("minus minus 3") == "3 minus minus"

    def test_factorial_binds_tighter_than_addition(self):
        assert postfix_of("2 + 3 !") == "2 3 ! +"

    def test_factorial_binds_tighter_than_power(self):
        assert postfix_of("2 ^ 3 !") == "2 3 ! ^"


class TestFunctions:
    """Tests for function placement."""

    def test_function_follows_its_argument(self):
        assert postfix_of("sin ( 30 )") == "30 sin"

    def test_function_applies_before_binary_operator(self):
        assert postfix_of("sin ( 30 ) + 1") == "30 sin 1 +"

    def test_function_argument_is_whole_parenthesised_expression(self):
        assert postfix_of("ln ( 2 + 3 ) × 2") == "2 3 + ln 2 ×"

    def test_nested_functions(self):
        assert postfix_of("√ ( cos ( 0 ) )") == "0 cos √"

    def test_square_root_without_parentheses(self):
        assert postfix_of("√ 4 + 5") == "4 √ 5 +"


class TestParentheses:
    """Tests for parenthesis handling."""

    def test_nested_parentheses(self):
        assert postfix_of("( ( 1 + 2 ) × ( 3 - 4 ) )") == "1 2 + 3 4 - ×"

    def test_throws_on_unopened_parenthesis(self):
        with pytest.raises(SyntaxError, match="unopened parenthesis"):
            to_postfix(tokenize("2 + 3 )"))

    def test_unclosed_parenthesis_is_left_in_output(self):
        assert postfix_of("( 2 + 3") == "2 3 + ("

    def test_empty_parentheses_give_empty_output(self):
        assert to_postfix(tokenize("( )")) == ()


class TestLogging:
    """Tests for the postfix trace."""

    def test_logs_postfix_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="scicalc.converter"):
            postfix_of("1 + 2")
        records = [r for r in caplog.records if r.getMessage() == "postfix_converted"]
        assert len(records) == 1
        assert records[0].postfix == "1 2 +"
