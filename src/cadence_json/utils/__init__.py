"""Utility functions for the Cadence-JSON codec."""

from .numeric import format_decimal, parse_fixed_point, parse_integer
from .validation import ValidationUtils

__all__ = ["ValidationUtils", "parse_integer", "parse_fixed_point", "format_decimal"]
