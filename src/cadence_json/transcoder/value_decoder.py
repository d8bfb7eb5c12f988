"""Structural decoder: generic JSON trees to Cadence values."""

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from ..models import (
    AddressValue,
    ArrayValue,
    BoolValue,
    CadenceValue,
    CapabilityValue,
    CompositeField,
    CompositeValue,
    DictionaryEntry,
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
from ..types import (
    COMPOSITE_KINDS,
    FIXED_POINT_KINDS,
    INTEGER_KINDS,
    DecodeShapeError,
    Kind,
    PathDomain,
    UnknownKindError,
)
from ..utils.numeric import format_decimal
from ..utils.validation import ValidationUtils
from .type_codec import TypeCodec


class ValueDecoder:
    """
    Decodes generic JSON trees (dict/list/str/number/bool/None) into values.

    Envelopes {"type": ..., "value": ...} dispatch on their tag. Objects
    without an envelope become implicit String-keyed dictionaries, and bare
    scalars are inferred (null, Bool, String, Int or Fix64).
    """

    def __init__(self, type_codec: Optional[TypeCodec] = None,
                 logger: Optional[logging.Logger] = None,
                 infer_scalars: bool = True):
        """
        Initialize the value decoder.

        Args:
            type_codec: Optional TypeCodec instance for type descriptors
            logger: Optional logger instance
            infer_scalars: Infer kinds for bare scalars instead of rejecting them
        """
        self.logger = logger or logging.getLogger(__name__)
        self.type_codec = type_codec or TypeCodec(self.logger)
        self.infer_scalars = infer_scalars
        self._decoders: Dict[Kind, Callable[[Kind, Any], CadenceValue]] = {
            Kind.VOID: self._decode_void,
            Kind.OPTIONAL: self._decode_optional,
            Kind.BOOL: self._decode_bool,
            Kind.STRING: self._decode_string,
            Kind.ADDRESS: self._decode_address,
            Kind.ARRAY: self._decode_array,
            Kind.DICTIONARY: self._decode_dictionary,
            Kind.PATH: self._decode_path,
            Kind.TYPE: self._decode_type,
            Kind.INCLUSIVE_RANGE: self._decode_inclusive_range,
            Kind.CAPABILITY: self._decode_capability,
            Kind.FUNCTION: self._decode_function,
        }
        for kind in INTEGER_KINDS:
            self._decoders[kind] = self._decode_integer
        for kind in FIXED_POINT_KINDS:
            self._decoders[kind] = self._decode_fixed_point
        for kind in COMPOSITE_KINDS:
            self._decoders[kind] = self._decode_composite

    def decode(self, data: Any) -> CadenceValue:
        """
        Decode a generic JSON tree into a CadenceValue.

        Args:
            data: Parsed JSON data

        Returns:
            The decoded CadenceValue

        Raises:
            UnknownKindError: If an envelope carries an unrecognized tag
            DecodeShapeError: If a payload does not match its kind's shape,
                or the tree is nested deeper than the interpreter can recurse
        """
        try:
            return self._decode_tree(data)
        except RecursionError:
            raise DecodeShapeError("document", "nested within the recursion limit", data) from None

    def _decode_tree(self, data: Any) -> CadenceValue:
        if isinstance(data, dict):
            if ValidationUtils.is_envelope(data):
                return self._decode_envelope(data["type"], data.get("value"))
            return self._decode_implicit_dictionary(data)
        if isinstance(data, list):
            return ArrayValue(tuple(self._decode_tree(item) for item in data))
        return self._infer_scalar(data)

    def _decode_envelope(self, tag: str, payload: Any) -> CadenceValue:
        try:
            kind = Kind(tag)
        except ValueError:
            raise UnknownKindError(tag) from None
        return self._decoders[kind](kind, payload)

    def _decode_implicit_dictionary(self, data: Dict[str, Any]) -> DictionaryValue:
        self.logger.debug(f"Decoding object without envelope as Dictionary with {len(data)} entries")
        return DictionaryValue(tuple(
            DictionaryEntry(StringValue(key), self._decode_tree(value))
            for key, value in data.items()
        ))

    def _infer_scalar(self, data: Any) -> CadenceValue:
        if not self.infer_scalars:
            raise DecodeShapeError("Value", "a typed envelope", data)
        if data is None:
            return OptionalValue(None)
        if isinstance(data, bool):
            return BoolValue(data)
        if isinstance(data, str):
            return StringValue(data)
        if isinstance(data, int):
            return IntegerValue(Kind.INT, str(data))
        if isinstance(data, (float, Decimal)):
            return FixedPointValue(Kind.FIX64, format_decimal(data))
        raise DecodeShapeError("Value", "a JSON value", data)

    # Per-kind decoders

    def _decode_void(self, kind: Kind, payload: Any) -> VoidValue:
        if payload is not None:
            raise DecodeShapeError(kind.value, "null or absent", payload)
        return VoidValue()

    def _decode_optional(self, kind: Kind, payload: Any) -> OptionalValue:
        if payload is None:
            return OptionalValue(None)
        return OptionalValue(self._decode_tree(payload))

    def _decode_bool(self, kind: Kind, payload: Any) -> BoolValue:
        if not isinstance(payload, bool):
            raise DecodeShapeError(kind.value, "a boolean", payload)
        return BoolValue(payload)

    def _decode_string(self, kind: Kind, payload: Any) -> StringValue:
        return StringValue(self._expect_string(kind, payload))

    def _decode_address(self, kind: Kind, payload: Any) -> AddressValue:
        return AddressValue(self._expect_string(kind, payload))

    def _decode_integer(self, kind: Kind, payload: Any) -> IntegerValue:
        return IntegerValue(kind, self._expect_string(kind, payload))

    def _decode_fixed_point(self, kind: Kind, payload: Any) -> FixedPointValue:
        return FixedPointValue(kind, self._expect_string(kind, payload))

    def _decode_array(self, kind: Kind, payload: Any) -> ArrayValue:
        items = self._expect_list(kind.value, payload)
        return ArrayValue(tuple(self._decode_tree(item) for item in items))

    def _decode_dictionary(self, kind: Kind, payload: Any) -> DictionaryValue:
        items = self._expect_list(kind.value, payload)
        entries = []
        for item in items:
            if not isinstance(item, dict):
                raise DecodeShapeError("Dictionary entry", "an object", item)
            if "key" not in item:
                raise DecodeShapeError("Dictionary entry", "an object with a 'key' member", item)
            if "value" not in item:
                raise DecodeShapeError("Dictionary entry", "an object with a 'value' member", item)
            entries.append(DictionaryEntry(self._decode_tree(item["key"]), self._decode_tree(item["value"])))
        self.logger.debug(f"Decoded Dictionary with {len(entries)} entries")
        return DictionaryValue(tuple(entries))

    def _decode_composite(self, kind: Kind, payload: Any) -> CompositeValue:
        obj = self._expect_object(kind.value, payload)
        type_id = obj.get("id")
        if not isinstance(type_id, str):
            raise DecodeShapeError(f"{kind.value} id", "a string", type_id)
        raw_fields = obj.get("fields")
        if not isinstance(raw_fields, list):
            raise DecodeShapeError(f"{kind.value} fields", "an array", raw_fields)

        fields = []
        for item in raw_fields:
            if not isinstance(item, dict):
                raise DecodeShapeError("Field", "an object", item)
            name = item.get("name")
            if not isinstance(name, str):
                raise DecodeShapeError("Field name", "a string", name)
            if "value" not in item:
                raise DecodeShapeError("Field", "an object with a 'value' member", item)
            fields.append(CompositeField(name, self._decode_tree(item["value"])))

        self.logger.debug(f"Decoded {kind.value} {type_id} with {len(fields)} fields")
        return CompositeValue(kind, type_id, tuple(fields))

    def _decode_path(self, kind: Kind, payload: Any) -> PathValue:
        obj = self._expect_object(kind.value, payload)
        try:
            domain = PathDomain(obj.get("domain"))
        except ValueError:
            raise DecodeShapeError("Path domain", "one of storage, private, public",
                                   obj.get("domain")) from None
        identifier = obj.get("identifier")
        if not isinstance(identifier, str):
            raise DecodeShapeError("Path identifier", "a string", identifier)
        return PathValue(domain, identifier)

    def _decode_type(self, kind: Kind, payload: Any) -> TypeValue:
        obj = self._expect_object(kind.value, payload)
        if "staticType" not in obj:
            raise DecodeShapeError(kind.value, "an object with a 'staticType' member", obj)
        return TypeValue(self.type_codec.decode_type(obj["staticType"]))

    def _decode_inclusive_range(self, kind: Kind, payload: Any) -> InclusiveRangeValue:
        obj = self._expect_object(kind.value, payload)
        bounds = []
        for name in ("start", "end", "step"):
            if name not in obj:
                raise DecodeShapeError(kind.value, f"an object with a {name!r} member", obj)
            bounds.append(self._decode_tree(obj[name]))
        return InclusiveRangeValue(*bounds)

    def _decode_capability(self, kind: Kind, payload: Any) -> CapabilityValue:
        obj = self._expect_object(kind.value, payload)
        capability_id = obj.get("id")
        if not isinstance(capability_id, str):
            raise DecodeShapeError("Capability id", "a string", capability_id)
        address = obj.get("address")
        if not isinstance(address, str):
            raise DecodeShapeError("Capability address", "a string", address)
        if "borrowType" not in obj:
            raise DecodeShapeError(kind.value, "an object with a 'borrowType' member", obj)
        return CapabilityValue(capability_id, address, self.type_codec.decode_type(obj["borrowType"]))

    def _decode_function(self, kind: Kind, payload: Any) -> FunctionValue:
        obj = self._expect_object(kind.value, payload)
        if "functionType" not in obj:
            raise DecodeShapeError(kind.value, "an object with a 'functionType' member", obj)
        return FunctionValue(self.type_codec.decode_type(obj["functionType"]))

    # Shape helpers

    @staticmethod
    def _expect_string(kind: Kind, payload: Any) -> str:
        if not isinstance(payload, str):
            raise DecodeShapeError(kind.value, "a string", payload)
        return payload

    @staticmethod
    def _expect_list(what: str, payload: Any) -> List[Any]:
        if not isinstance(payload, list):
            raise DecodeShapeError(what, "an array", payload)
        return payload

    @staticmethod
    def _expect_object(what: str, payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise DecodeShapeError(what, "an object", payload)
        return payload
