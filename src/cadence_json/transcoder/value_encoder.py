"""Structural encoder: Cadence values to generic JSON trees."""

import logging
from typing import Any, Dict, Optional

from ..models import (
    AddressValue,
    ArrayValue,
    BoolValue,
    CadenceValue,
    CapabilityValue,
    CompositeValue,
    DictionaryValue,
    FixedPointValue,
    FunctionValue,
    InclusiveRangeValue,
    IntegerValue,
    OptionalValue,
    PathValue,
    StringValue,
    TypeValue,
    VoidValue,
)
from ..types import UnsupportedTypeError
from .type_codec import TypeCodec


class ValueEncoder:
    """
    Encodes values into generic JSON trees.

    The exact inverse of ValueDecoder for every value built without scalar
    inference: each value becomes a {"type": ..., "value": ...} envelope.
    """

    def __init__(self, type_codec: Optional[TypeCodec] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the value encoder.

        Args:
            type_codec: Optional TypeCodec instance for type descriptors
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.type_codec = type_codec or TypeCodec(self.logger)

    def encode(self, value: CadenceValue) -> Dict[str, Any]:
        """
        Encode a CadenceValue into a generic JSON tree.

        Args:
            value: Value to encode

        Returns:
            The envelope object

        Raises:
            UnsupportedTypeError: If value is not a CadenceValue
        """
        if isinstance(value, VoidValue):
            return {"type": value.type_name}
        if isinstance(value, OptionalValue):
            inner = None if value.inner is None else self.encode(value.inner)
            return self._envelope(value, inner)
        if isinstance(value, (BoolValue, StringValue, AddressValue, IntegerValue, FixedPointValue)):
            return self._envelope(value, value.value)
        if isinstance(value, ArrayValue):
            return self._envelope(value, [self.encode(item) for item in value.items])
        if isinstance(value, DictionaryValue):
            return self._envelope(value, [
                {"key": self.encode(entry.key), "value": self.encode(entry.value)}
                for entry in value.entries
            ])
        if isinstance(value, CompositeValue):
            return self._envelope(value, {
                "id": value.id,
                "fields": [
                    {"name": composite_field.name, "value": self.encode(composite_field.value)}
                    for composite_field in value.fields
                ],
            })
        if isinstance(value, PathValue):
            return self._envelope(value, {
                "domain": value.domain.value,
                "identifier": value.identifier,
            })
        if isinstance(value, TypeValue):
            return self._envelope(value, {"staticType": self.type_codec.encode_type(value.static_type)})
        if isinstance(value, InclusiveRangeValue):
            return self._envelope(value, {
                "start": self.encode(value.start),
                "end": self.encode(value.end),
                "step": self.encode(value.step),
            })
        if isinstance(value, CapabilityValue):
            return self._envelope(value, {
                "id": value.id,
                "address": value.address,
                "borrowType": self.type_codec.encode_type(value.borrow_type),
            })
        if isinstance(value, FunctionValue):
            return self._envelope(value, {"functionType": self.type_codec.encode_type(value.function_type)})

        raise UnsupportedTypeError(type(value), "no encoder for this value")

    @staticmethod
    def _envelope(value: CadenceValue, payload: Any) -> Dict[str, Any]:
        return {"type": value.type_name, "value": payload}
