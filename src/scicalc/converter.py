"""
Shunting-yard converter for the calculator expression language.

Rewrites an infix token sequence into postfix (RPN) order using an
operator stack.

Precedence (lowest to highest):
1. Additive: +, -
2. Multiplicative: ×, ÷
3. Unary minus
4. Power: ^
5. Functions, !, √

^ and every unary operator are right-associative. An unmatched '(' is
left in the output on purpose; the evaluator reports it.
"""

import logging
from typing import List, Sequence, Tuple, Union

from .errors import SyntaxError
from .tokens import (
    FunctionToken,
    OperandToken,
    OperatorToken,
    Token,
    UnaryOperatorToken,
    tokens_to_string,
)

logger = logging.getLogger("scicalc.converter")

StackToken = Union[OperatorToken, UnaryOperatorToken, FunctionToken]


class ShuntingYardConverter:
    """Converts an infix token sequence to postfix order."""

    def __init__(self, tokens: Sequence[Token], source: str = ""):
        self._tokens = tokens
        self._source = source
        self._output: List[Token] = []
        self._stack: List[StackToken] = []

    def convert(self) -> Tuple[Token, ...]:
        """Converts the token sequence and returns the postfix sequence."""
        for token in self._tokens:
            match token:
                case OperandToken():
                    self._output.append(token)
                case FunctionToken():
                    self._stack.append(token)
                case OperatorToken() if token.is_left_paren:
                    self._stack.append(token)
                case OperatorToken() if token.is_right_paren:
                    self._close_paren(token)
                case UnaryOperatorToken() if token.is_prefix:
                    # Nothing to its left can bind to a prefix operator
                    self._stack.append(token)
                case OperatorToken() | UnaryOperatorToken():
                    self._push_operator(token)
                case _:
                    raise SyntaxError(f"postfix error at token: '{token}'")

        while self._stack:
            self._output.append(self._stack.pop())

        postfix = tuple(self._output)
        logger.debug(
            "postfix_converted",
            extra={"source": self._source, "postfix": tokens_to_string(postfix)},
        )
        return postfix

    def _close_paren(self, token: OperatorToken) -> None:
        while True:
            if not self._stack:
                raise SyntaxError(
                    "unopened parenthesis", token.position, self._source or None
                )
            top = self._stack.pop()
            if isinstance(top, OperatorToken) and top.is_left_paren:
                return
            self._output.append(top)

    def _push_operator(self, token: Union[OperatorToken, UnaryOperatorToken]) -> None:
        while self._stack and self._should_pop(self._stack[-1], token):
            self._output.append(self._stack.pop())
        self._stack.append(token)

    @staticmethod
    def _should_pop(
        top: StackToken, incoming: Union[OperatorToken, UnaryOperatorToken]
    ) -> bool:
        if isinstance(top, OperatorToken) and top.is_left_paren:
            return False
        if top.precedence > incoming.precedence:
            return True
        return top.precedence == incoming.precedence and not incoming.right_associative


def to_postfix(tokens: Sequence[Token], source: str = "") -> Tuple[Token, ...]:
    """
    Converts an infix token sequence into postfix order.

    Args:
        tokens: Tokens produced by the tokenizer
        source: Source expression for error reporting

    Returns:
        The postfix token sequence

    Raises:
        SyntaxError: On a ')' without a matching '('
    """
    converter = ShuntingYardConverter(tokens, source)
    return converter.convert()
