"""Decimal-string parsing and formatting for numeric Cadence kinds."""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple, Union

from ..types import FIXED_POINT_KINDS, INTEGER_RANGES, Kind, NumericParseError

# Wire numerals: optional sign, ASCII digits, no exponent, no separators.
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_FIXED_POINT_PATTERN = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?")

# Fractional digits carried by Fix64 and UFix64.
FIXED_POINT_SCALE = 8


def integer_bounds(kind: Kind) -> Tuple[Optional[int], Optional[int]]:
    """Return the inclusive (min, max) range of an integer kind."""
    try:
        return INTEGER_RANGES[kind]
    except KeyError:
        raise ValueError(f"{kind} is not an integer kind") from None


def parse_integer(text: str, kind: Optional[Kind] = None, target: Optional[str] = None) -> int:
    """
    Parse a decimal integer payload, optionally range-checked against a kind.

    Args:
        text: Decimal string as carried on the wire
        kind: Integer kind whose range the result must fit, or None for unbounded
        target: Name reported in errors (defaults to the kind name)

    Returns:
        The parsed integer

    Raises:
        NumericParseError: If the text is malformed or out of range
    """
    label = target or (kind.value if kind is not None else "integer")
    if not isinstance(text, str) or not _INTEGER_PATTERN.fullmatch(text):
        raise NumericParseError(label, text, "invalid digit found in string")

    number = int(text)
    if kind is not None:
        check_integer_range(number, kind, label)
    return number


def check_integer_range(number: int, kind: Kind, target: Optional[str] = None) -> int:
    """Fail unless number fits the range of kind; no wraparound."""
    lower, upper = integer_bounds(kind)
    label = target or kind.value
    if lower is not None and number < lower:
        raise NumericParseError(label, str(number), f"number too small to fit in {kind.value}")
    if upper is not None and number > upper:
        raise NumericParseError(label, str(number), f"number too large to fit in {kind.value}")
    return number


def parse_fixed_point(text: str, kind: Kind = Kind.FIX64, target: Optional[str] = None) -> Decimal:
    """
    Parse a fixed-point payload into an exact Decimal.

    Unsigned kinds reject negative values. The number of fractional digits
    is not enforced here.
    """
    label = target or kind.value
    if kind not in FIXED_POINT_KINDS:
        raise ValueError(f"{kind} is not a fixed-point kind")
    if not isinstance(text, str) or not _FIXED_POINT_PATTERN.fullmatch(text):
        raise NumericParseError(label, text, "invalid fixed-point literal")

    number = Decimal(text)
    if kind == Kind.UFIX64 and number < 0:
        raise NumericParseError(label, text, "negative value for unsigned fixed-point")
    return number


def is_integer_literal(text: object) -> bool:
    """Check whether text is a well-formed wire integer."""
    return isinstance(text, str) and _INTEGER_PATTERN.fullmatch(text) is not None


def is_fixed_point_literal(text: object) -> bool:
    """Check whether text is a well-formed wire fixed-point number."""
    return isinstance(text, str) and _FIXED_POINT_PATTERN.fullmatch(text) is not None


def format_decimal(number: Union[float, Decimal, int], target: str = "Fix64") -> str:
    """
    Render a number as a plain decimal string without exponent form.

    Floats go through their shortest repr so that parsing the result
    yields the same float again.
    """
    if isinstance(number, bool):
        raise NumericParseError(target, number, "booleans are not numbers")
    if isinstance(number, int):
        return str(number)
    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            raise NumericParseError(target, number, "non-finite values cannot be encoded")
        number = Decimal(repr(number))
    try:
        if not number.is_finite():
            raise NumericParseError(target, str(number), "non-finite values cannot be encoded")
        text = format(number, "f")
    except (AttributeError, InvalidOperation) as e:
        raise NumericParseError(target, number, str(e)) from e

    if text.startswith("-") and Decimal(text) == 0:
        text = text[1:]
    return text
