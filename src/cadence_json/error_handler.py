"""Error handling for Cadence-JSON input validation and failure reporting."""

import logging
from typing import Optional, Union

from .parser import JSONParser
from .transcoder import ValueDecoder
from .types import (
    CadenceError,
    ErrorResponse,
    ErrorType,
    ValidationError,
    ValidationResult,
)
from .utils.validation import ValidationUtils

_SUGGESTED_ACTIONS = {
    ErrorType.SYNTAX: "Fix the JSON syntax at the reported location and retry.",
    ErrorType.UNKNOWN_KIND: "Use one of the Cadence-JSON type tags; unknown tags are rejected.",
    ErrorType.DECODE_SHAPE: "Check that each 'value' payload has the JSON shape its 'type' requires.",
    ErrorType.TYPE_MISMATCH: "Decode into a target whose kind matches the value, or adjust the input.",
    ErrorType.FIELD_MISSING: "Add the missing field to the composite or rename the record member.",
    ErrorType.ARITY_MISMATCH: "Match the array length to the tuple arity.",
    ErrorType.NUMERIC_PARSE: "Use a plain decimal string that fits the target width.",
    ErrorType.UNSUPPORTED: "Register a binding or implement Encodable/Decodable for the type.",
}


class ErrorHandler:
    """
    Validates Cadence-JSON text without raising and maps failures to remedies.
    """

    def __init__(self, decoder: Optional[ValueDecoder] = None,
                 parser: Optional[JSONParser] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            decoder: Optional ValueDecoder used for the structural check
            parser: Optional JSONParser instance
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)
        self.decoder = decoder or ValueDecoder(logger=self.logger)
        self.parser = parser or JSONParser(self.logger)

    def validate_input(self, input_data: Union[str, bytes]) -> ValidationResult:
        """
        Validate Cadence-JSON text: syntax first, then a full structural decode.

        Args:
            input_data: JSON text or UTF-8 bytes to validate

        Returns:
            ValidationResult with validation details
        """
        result = ValidationUtils.validate_json_string(input_data)
        if not result.is_valid:
            return result

        try:
            self.decoder.decode(self.parser.parse(input_data))
        except CadenceError as e:
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=e.error_type,
                    message=str(e),
                    location=e.context.get("location") or "document"
                )],
                warnings=result.warnings
            )
        return result

    def handle_cadence_error(self, error: CadenceError) -> ErrorResponse:
        """
        Describe a codec failure and suggest a remedy.

        Codec failures are never recovered in place, so can_recover is False.

        Args:
            error: CadenceError to handle

        Returns:
            ErrorResponse with the suggested action
        """
        self.logger.error(f"Cadence-JSON error: {error.error_type.value} - {error}")
        return ErrorResponse(
            can_recover=False,
            suggested_action=_SUGGESTED_ACTIONS.get(
                error.error_type, "Unknown error type. Please check logs and retry."),
            partial_results=None
        )
