"""
Calculator session: the input line and the last answer.

A keypad front end feeds button labels to ``CalculatorSession.press`` and
shows the returned ``Display``. The session builds the space-separated
expression the evaluator expects and turns failures into the short
"Syntax ERROR" / "Math ERROR" labels.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .errors import CalculatorError
from .evaluator import evaluate
from .formatter import format
from .limits import EvaluationLimits
from .tokens import BINARY_OPERATOR_LEXEMES, PAREN_LEXEMES

logger = logging.getLogger("scicalc.session")

EQUALS = "="
DELETE = "DEL"
ALL_CLEAR = "AC"
ANSWER = "ANS"

# Button labels whose inserted text differs from the label
KEY_TEXT = {
    "sin": "sin (",
    "cos": "cos (",
    "tan": "tan (",
    "ln": "ln (",
    "√x": "√",
    "x!": "!",
    "π": "π",
    "e": "e",
}

_KEYED_LEXEMES = (
    BINARY_OPERATOR_LEXEMES
    | PAREN_LEXEMES
    | {lexeme for text in KEY_TEXT.values() for lexeme in text.split()}
)


def _answer_text(value: Decimal) -> str:
    """Shortest literal that reads back as exactly ``value``."""
    plain = f"{value:f}"
    scientific = str(value)
    return plain if len(plain) <= len(scientific) else scientific


@dataclass(frozen=True)
class Display:
    """What a front end shows after a key press."""

    input: str
    output: str


class CalculatorSession:
    """Holds the line being typed and the last answer."""

    def __init__(self, limits: Optional[EvaluationLimits] = None):
        self._limits = limits
        self._line = ""
        self._answer = ""
        self._answer_value: Optional[Decimal] = None
        self._output = ""

    @property
    def line(self) -> str:
        """The expression typed so far, with the spaces the evaluator needs."""
        return self._line

    @property
    def answer(self) -> str:
        """The last successful result, formatted."""
        return self._answer

    @property
    def answer_value(self) -> Optional[Decimal]:
        """The last successful result at full precision; ANS inserts this."""
        return self._answer_value

    @property
    def display(self) -> Display:
        return Display(input=self._line.replace(" ", ""), output=self._output)

    def press(self, label: str) -> Display:
        """Handles one button press and returns the new display."""
        if label == EQUALS:
            self._equals()
        elif label == ALL_CLEAR:
            self._line = ""
            self._output = ""
        elif label == DELETE:
            self._delete()
        elif label == ANSWER:
            if self._answer_value is not None:
                self._append_spaced(_answer_text(self._answer_value))
        elif label in BINARY_OPERATOR_LEXEMES or label in PAREN_LEXEMES:
            self._append_spaced(label)
        elif label in KEY_TEXT:
            self._append_spaced(KEY_TEXT[label])
        else:
            self._line += label
        return self.display

    def _append_spaced(self, text: str) -> None:
        self._line = f"{self._line} {text} "

    def _delete(self) -> None:
        body = self._line.rstrip()
        if not body:
            self._line = ""
            return
        last = body.split()[-1]
        if last not in _KEYED_LEXEMES:
            self._line = body[:-1]
            return
        # Inserted by one key, removed by one key
        rest = body[: -len(last)].rstrip()
        if rest and rest.split()[-1] in _KEYED_LEXEMES:
            rest += " "
        self._line = rest

    def _equals(self) -> None:
        expression = self._line
        try:
            value = evaluate(expression, self._limits)
        except CalculatorError as error:
            logger.warning(
                "evaluation_failed",
                extra={
                    "expression": expression,
                    "label": error.label,
                    "reason": error.reason,
                },
            )
            self._output = error.label
            return

        self._answer_value = value
        self._answer = format(value)
        self._output = self._answer
        self._line = ""
