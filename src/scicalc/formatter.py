"""
Decimal formatter.

Renders a computed value for a display that is only so many characters
wide. Values that fit are shown in plain notation; longer values are
rounded to fewer fractional digits or, failing that, shown in scientific
notation such as ``1.2345679e13``.

The display limits are process-wide. They are changed only through
``set_max_scale`` / ``set_max_length`` (or ``apply_config``), and the last
writer wins.
"""

import builtins
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
)
from typing import Optional

from .errors import SyntaxError
from .limits import DEFAULT_FORMAT_LIMITS, FormatLimits

# Fractional digits kept in a scientific-notation mantissa
SCIENTIFIC_MANTISSA_DIGITS = 7

_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

_format_limits = DEFAULT_FORMAT_LIMITS


# ============================================================
# Process-wide configuration
# ============================================================


def get_format_limits() -> FormatLimits:
    """Returns the current display limits."""
    return _format_limits


def set_format_limits(limits: FormatLimits) -> None:
    global _format_limits
    _format_limits = limits


def set_max_scale(scale: int) -> None:
    """Sets the maximum fractional digits kept for long values."""
    set_format_limits(FormatLimits(max_scale=scale, max_length=_format_limits.max_length))


def set_max_length(length: int) -> None:
    """Sets the maximum display string length."""
    set_format_limits(FormatLimits(max_scale=_format_limits.max_scale, max_length=length))


def reset_format_limits() -> None:
    set_format_limits(DEFAULT_FORMAT_LIMITS)


# ============================================================
# Rendering
# ============================================================


def _plain(value: Decimal) -> str:
    """Renders a value without an exponent."""
    return builtins.format(value, "f")


def _strip(value: Decimal) -> Decimal:
    if value.is_zero():
        return Decimal(0)
    return _EXACT.normalize(value)


def _scale(value: Decimal) -> int:
    """Number of fractional digits in the value's representation."""
    return max(0, -value.as_tuple().exponent)


def _quantum(places: int) -> Decimal:
    return Decimal((0, (1,), -places))


def _round(value: Decimal, places: int) -> Decimal:
    rounded = value.quantize(_quantum(places), rounding=ROUND_HALF_UP, context=_EXACT)
    return _strip(rounded)


def _scientific(value: Decimal) -> str:
    """Renders a value as <mantissa>e<exponent>."""
    if value.is_zero():
        return "0"
    quantum = _quantum(SCIENTIFIC_MANTISSA_DIGITS)
    exponent = value.adjusted()
    mantissa = _EXACT.scaleb(value, -exponent).quantize(
        quantum, rounding=ROUND_HALF_EVEN, context=_EXACT
    )
    if abs(mantissa) >= 10:
        # 9.99999999 rounded up to 10
        mantissa = _EXACT.scaleb(mantissa, -1)
        exponent += 1
    return f"{_plain(_strip(mantissa))}e{exponent}"


def format_decimal(value: Decimal, limits: Optional[FormatLimits] = None) -> str:
    """
    Formats a value for display.

    A value whose plain rendering is too long is rounded to ``max_scale``
    fractional digits when it has at least that many; a value that is
    already at ``max_scale`` is kept as is, so formatting a formatted
    value gives the same text. Anything else, and any non-zero value that
    would round to zero, is shown in scientific notation.

    Rounding starts at exactly ``max_scale`` fractional digits, not only
    above it, so a rounded result may still be longer than ``max_length``:
    ``12.123456789012`` is returned whole, 15 characters against 13.

    Args:
        value: The value to format
        limits: Display limits; defaults to DEFAULT_FORMAT_LIMITS

    Returns:
        The display string
    """
    limits = limits or DEFAULT_FORMAT_LIMITS
    text = _plain(value)
    if len(text) <= limits.max_length:
        return text

    if _scale(value) >= limits.max_scale:
        rounded = _round(value, limits.max_scale)
        if not rounded.is_zero() or value.is_zero():
            return _plain(rounded)

    return _scientific(value)


def format(value: Decimal) -> str:
    """Formats a value using the current process-wide display limits."""
    return format_decimal(value, _format_limits)


def parse_display(text: str) -> Decimal:
    """
    Parses a display string, in plain or scientific notation, back into a value.

    Raises:
        SyntaxError: If the text is not a number
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation as error:
        raise SyntaxError(f"not a number: '{text}'") from error
    if not value.is_finite():
        raise SyntaxError(f"not a number: '{text}'")
    return value
