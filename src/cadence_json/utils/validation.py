"""Validation utilities for Cadence-JSON input text."""

import json
from typing import Any, List, Union

from ..types import ErrorType, ValidationError, ValidationResult

# Nesting beyond this depth is reported as a warning, never rejected.
DEEP_NESTING_WARNING = 64


class ValidationUtils:
    """Utility class for validating raw Cadence-JSON documents."""

    @staticmethod
    def validate_json_string(json_string: Union[str, bytes]) -> ValidationResult:
        """
        Validate JSON syntax and the shape of the document root.

        Args:
            json_string: JSON text or UTF-8 bytes to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if isinstance(json_string, bytes):
            try:
                json_string = json_string.decode("utf-8")
            except UnicodeDecodeError as e:
                errors.append(ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Input is not valid UTF-8: {e.reason}",
                    location=f"byte {e.start}"
                ))
                return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="Invalid JSON syntax: document is nested too deeply",
                location="document"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            warnings.extend(ValidationUtils._structure_warnings(data))
        except RecursionError:
            warnings.append("Deep nesting detected (depth exceeds the recursion limit).")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def is_envelope(data: Any) -> bool:
        """Check whether a tree node is a {"type": ..., "value": ...} envelope."""
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            return False
        return "value" in data or len(data) == 1

    @staticmethod
    def _structure_warnings(data: Any) -> List[str]:
        warnings = []

        if not ValidationUtils.is_envelope(data):
            warnings.append("Root is not a typed envelope; its kinds will be inferred "
                            "and narrow numeric widths cannot be recovered.")

        max_depth = ValidationUtils.calculate_max_depth(data)
        if max_depth > DEEP_NESTING_WARNING:
            warnings.append(f"Deep nesting detected (depth: {max_depth}).")

        return warnings

    @staticmethod
    def calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if not isinstance(data, (dict, list)):
            return current_depth

        children = data.values() if isinstance(data, dict) else data
        max_child_depth = current_depth
        for child in children:
            max_child_depth = max(max_child_depth,
                                  ValidationUtils.calculate_max_depth(child, current_depth + 1))
        return max_child_depth

