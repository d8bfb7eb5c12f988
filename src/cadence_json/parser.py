"""JSON reader and printer for Cadence-JSON documents."""

import json
import logging
from decimal import Decimal
from typing import Any, Optional, Union

from .types import JSONSyntaxError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class JSONParser:
    """
    Thin wrapper around the standard json module.

    Non-integral numbers are read as Decimal so their digits survive
    untouched, and NaN/Infinity literals are rejected. Reader failures are
    re-raised as JSONSyntaxError.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: Union[str, bytes, bytearray]) -> Any:
        """
        Parse JSON text or UTF-8 bytes into a generic tree.

        Args:
            json_string: JSON text to parse

        Returns:
            The generic tree (dict/list/str/int/Decimal/bool/None)

        Raises:
            JSONSyntaxError: If the input is not valid JSON
        """
        if isinstance(json_string, (bytes, bytearray)):
            try:
                json_string = bytes(json_string).decode("utf-8")
            except UnicodeDecodeError as e:
                raise JSONSyntaxError(f"Input is not valid UTF-8: {e.reason}", f"byte {e.start}") from e

        try:
            data = json.loads(json_string, parse_float=Decimal, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise JSONSyntaxError(f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}",
                                  f"line {e.lineno}, column {e.colno}") from e
        except ValueError as e:
            raise JSONSyntaxError(f"JSON parsing failed: {e}") from e
        except RecursionError as e:
            raise JSONSyntaxError("JSON parsing failed: document is nested too deeply") from e

        self.logger.debug(f"Parsed {len(json_string)} characters of JSON")
        return data

    def serialize(self, data: Any, indent: Optional[int] = None, ensure_ascii: bool = False) -> str:
        """
        Print a generic tree as JSON text.

        Compact output has no whitespace; pass indent for pretty output.
        """
        if indent is None:
            return json.dumps(data, separators=(",", ":"), ensure_ascii=ensure_ascii)
        return json.dumps(data, indent=indent, ensure_ascii=ensure_ascii)
