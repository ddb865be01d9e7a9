"""
Decimal expression engine for a scientific calculator.

Turns a space-separated infix expression such as ``"( 2 + 3 ) × 4"`` into
a ``decimal.Decimal`` result, and renders results for a narrow display.
"""

# Configuration
from .config import CalculatorConfig, apply_config, config_from_env, load_config

# Converter
from .converter import ShuntingYardConverter, to_postfix

# Errors
from .errors import CalculatorError, LimitExceededError, MathError, SyntaxError

# Evaluator
from .evaluator import (
    EvaluationResult,
    Evaluator,
    evaluate,
    evaluate_postfix,
    try_evaluate,
)

# Formatter
from .formatter import (
    format,
    format_decimal,
    get_format_limits,
    parse_display,
    reset_format_limits,
    set_format_limits,
    set_max_length,
    set_max_scale,
)
from .limits import (
    DEFAULT_EVALUATION_LIMITS,
    DEFAULT_FORMAT_LIMITS,
    EvaluationLimits,
    FormatLimits,
    check_expression_length,
    check_literal_exponent,
)
from .log import enable_logging
from .session import CalculatorSession, Display

# Tokenizer
from .tokenizer import E, PI, Tokenizer, tokenize
from .tokens import (
    FunctionName,
    FunctionToken,
    OperandToken,
    OperatorSymbol,
    OperatorToken,
    Token,
    UnaryOperatorToken,
    UnarySymbol,
    tokens_to_string,
)

__all__ = [
    # Token types
    "Token",
    "OperandToken",
    "OperatorToken",
    "UnaryOperatorToken",
    "FunctionToken",
    "OperatorSymbol",
    "UnarySymbol",
    "FunctionName",
    "tokens_to_string",
    # Errors
    "CalculatorError",
    "SyntaxError",
    "MathError",
    "LimitExceededError",
    # Limits
    "EvaluationLimits",
    "FormatLimits",
    "DEFAULT_EVALUATION_LIMITS",
    "DEFAULT_FORMAT_LIMITS",
    "check_expression_length",
    "check_literal_exponent",
    # Tokenizer
    "E",
    "PI",
    "Tokenizer",
    "tokenize",
    # Converter
    "ShuntingYardConverter",
    "to_postfix",
    # Evaluator
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    "evaluate_postfix",
    "try_evaluate",
    # Formatter
    "format",
    "format_decimal",
    "parse_display",
    "get_format_limits",
    "set_format_limits",
    "set_max_scale",
    "set_max_length",
    "reset_format_limits",
    # Configuration
    "CalculatorConfig",
    "load_config",
    "config_from_env",
    "apply_config",
    "enable_logging",
    # Session
    "CalculatorSession",
    "Display",
]
