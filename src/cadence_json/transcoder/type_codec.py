"""Static type and authorization codec for Type, Capability and Function values."""

import logging
from typing import Any, Dict, List, Optional

from ..models import (
    NOMINAL_TYPE_KINDS,
    SIMPLE_TYPE_KINDS,
    Authorization,
    AuthorizationKind,
    CapabilityType,
    CompositeType,
    ConstantSizedArrayType,
    DictionaryType,
    Entitlement,
    EntitlementKind,
    EnumType,
    FieldType,
    FunctionType,
    InclusiveRangeType,
    IntersectionType,
    OptionalType,
    ParameterType,
    ReferenceType,
    SimpleType,
    StaticType,
    TypeReference,
    VariableSizedArrayType,
)
from ..types import DecodeShapeError, UnknownKindError, UnsupportedTypeError

# Kinds whose only payload is a nested "type".
_WRAPPER_TYPES = {
    "Optional": OptionalType,
    "VariableSizedArray": VariableSizedArrayType,
    "Capability": CapabilityType,
}


class TypeCodec:
    """
    Converts static types between generic JSON trees and the type model.

    Types are objects discriminated by "kind"; a bare string in type
    position is a repeated reference to an earlier nominal type.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the type codec.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    # Decoding

    def decode_type(self, data: Any) -> StaticType:
        """
        Decode a static type tree.

        Args:
            data: Generic JSON tree in type position

        Returns:
            The decoded StaticType

        Raises:
            UnknownKindError: If the kind is not part of the type grammar
            DecodeShapeError: If the tree does not have the required shape
        """
        if isinstance(data, str):
            return TypeReference(data)
        obj = self._expect_object(data, "Type")
        kind = obj.get("kind")
        if not isinstance(kind, str):
            raise DecodeShapeError("Type", "an object with a string kind", kind)

        if kind in SIMPLE_TYPE_KINDS:
            return SimpleType(kind)
        if kind in _WRAPPER_TYPES:
            return _WRAPPER_TYPES[kind](self.decode_type(self._member(obj, "type", kind)))
        if kind == "ConstantSizedArray":
            size = self._member(obj, "size", kind)
            if isinstance(size, bool) or not isinstance(size, int) or size < 0:
                raise DecodeShapeError(f"{kind} size", "a non-negative integer", size)
            return ConstantSizedArrayType(self.decode_type(self._member(obj, "type", kind)), size)
        if kind == "Dictionary":
            return DictionaryType(
                key=self.decode_type(self._member(obj, "key", kind)),
                value=self.decode_type(self._member(obj, "value", kind)),
            )
        if kind == "Reference":
            return ReferenceType(
                authorization=self.decode_authorization(self._member(obj, "authorization", kind)),
                type=self.decode_type(self._member(obj, "type", kind)),
            )
        if kind == "Intersection":
            types = self._expect_list(self._member(obj, "types", kind), f"{kind} types")
            return IntersectionType(
                type_id=self._string_member(obj, "typeID", kind),
                types=tuple(self.decode_type(item) for item in types),
            )
        if kind in NOMINAL_TYPE_KINDS:
            type_name = obj.get("type", "")
            if not isinstance(type_name, str):
                raise DecodeShapeError(f"{kind} type", "a string", type_name)
            return CompositeType(
                kind=kind,
                type_id=self._string_member(obj, "typeID", kind),
                initializers=self._decode_initializers(obj, kind),
                fields=self._decode_fields(obj, kind),
                type=type_name,
            )
        if kind == "Enum":
            return EnumType(
                type=self.decode_type(self._member(obj, "type", kind)),
                type_id=self._string_member(obj, "typeID", kind),
                initializers=self._decode_initializers(obj, kind),
                fields=self._decode_fields(obj, kind),
            )
        if kind == "Function":
            purity = obj.get("purity")
            if purity is not None and not isinstance(purity, str):
                raise DecodeShapeError(f"{kind} purity", "a string or null", purity)
            parameters = self._expect_list(self._member(obj, "parameters", kind), f"{kind} parameters")
            return FunctionType(
                type_id=self._string_member(obj, "typeID", kind),
                parameters=tuple(self._decode_parameter(item) for item in parameters),
                return_type=self.decode_type(self._member(obj, "return", kind)),
                purity=purity,
            )
        if kind == "InclusiveRange":
            return InclusiveRangeType(self.decode_type(self._member(obj, "element", kind)))

        raise UnknownKindError(kind, family="type")

    def decode_authorization(self, data: Any) -> Authorization:
        """Decode an authorization object attached to a reference type."""
        obj = self._expect_object(data, "Authorization")
        kind = obj.get("kind")
        try:
            authorization_kind = AuthorizationKind(kind)
        except ValueError:
            raise UnknownKindError(kind, family="authorization") from None

        raw_entitlements = obj.get("entitlements")
        if raw_entitlements is None:
            if authorization_kind != AuthorizationKind.UNAUTHORIZED:
                raise DecodeShapeError(f"{kind} entitlements", "an array", raw_entitlements)
            return Authorization(authorization_kind)

        entitlements = self._expect_list(raw_entitlements, f"{kind} entitlements")
        return Authorization(
            authorization_kind,
            tuple(self._decode_entitlement(item) for item in entitlements),
        )

    def _decode_entitlement(self, data: Any) -> Entitlement:
        obj = self._expect_object(data, "Entitlement")
        kind = obj.get("kind")
        try:
            entitlement_kind = EntitlementKind(kind)
        except ValueError:
            raise UnknownKindError(kind, family="entitlement") from None
        return Entitlement(entitlement_kind, self._string_member(obj, "typeID", "Entitlement"))

    def _decode_initializers(self, obj: Dict[str, Any], kind: str) -> tuple:
        overloads = self._expect_list(obj.get("initializers", []), f"{kind} initializers")
        result = []
        for overload in overloads:
            parameters = self._expect_list(overload, f"{kind} initializer")
            result.append(tuple(self._decode_parameter(item) for item in parameters))
        return tuple(result)

    def _decode_fields(self, obj: Dict[str, Any], kind: str) -> tuple:
        fields = self._expect_list(obj.get("fields", []), f"{kind} fields")
        result = []
        for item in fields:
            field_obj = self._expect_object(item, "Field type")
            result.append(FieldType(
                id=self._string_member(field_obj, "id", "Field type"),
                type=self.decode_type(self._member(field_obj, "type", "Field type")),
            ))
        return tuple(result)

    def _decode_parameter(self, data: Any) -> ParameterType:
        obj = self._expect_object(data, "Parameter")
        return ParameterType(
            label=self._string_member(obj, "label", "Parameter"),
            id=self._string_member(obj, "id", "Parameter"),
            type=self.decode_type(self._member(obj, "type", "Parameter")),
        )

    # Encoding

    def encode_type(self, static_type: StaticType) -> Any:
        """
        Encode a static type into a generic JSON tree.

        Raises:
            UnsupportedTypeError: If static_type is not part of the type grammar
        """
        if isinstance(static_type, TypeReference):
            return static_type.type_id
        if isinstance(static_type, SimpleType):
            return {"kind": static_type.kind}
        if isinstance(static_type, (OptionalType, VariableSizedArrayType, CapabilityType)):
            return {"kind": static_type.kind, "type": self.encode_type(static_type.type)}
        if isinstance(static_type, ConstantSizedArrayType):
            return {
                "kind": static_type.kind,
                "type": self.encode_type(static_type.type),
                "size": static_type.size,
            }
        if isinstance(static_type, DictionaryType):
            return {
                "kind": static_type.kind,
                "key": self.encode_type(static_type.key),
                "value": self.encode_type(static_type.value),
            }
        if isinstance(static_type, ReferenceType):
            return {
                "kind": static_type.kind,
                "authorization": self.encode_authorization(static_type.authorization),
                "type": self.encode_type(static_type.type),
            }
        if isinstance(static_type, IntersectionType):
            return {
                "kind": static_type.kind,
                "typeID": static_type.type_id,
                "types": [self.encode_type(item) for item in static_type.types],
            }
        if isinstance(static_type, CompositeType):
            return {
                "kind": static_type.kind,
                "type": static_type.type,
                "typeID": static_type.type_id,
                "initializers": self._encode_initializers(static_type.initializers),
                "fields": self._encode_fields(static_type.fields),
            }
        if isinstance(static_type, EnumType):
            return {
                "kind": static_type.kind,
                "type": self.encode_type(static_type.type),
                "typeID": static_type.type_id,
                "initializers": self._encode_initializers(static_type.initializers),
                "fields": self._encode_fields(static_type.fields),
            }
        if isinstance(static_type, FunctionType):
            encoded = {
                "kind": static_type.kind,
                "typeID": static_type.type_id,
                "parameters": [self._encode_parameter(item) for item in static_type.parameters],
                "return": self.encode_type(static_type.return_type),
            }
            if static_type.purity is not None:
                encoded["purity"] = static_type.purity
            return encoded
        if isinstance(static_type, InclusiveRangeType):
            return {"kind": static_type.kind, "element": self.encode_type(static_type.element)}

        raise UnsupportedTypeError(type(static_type), "not a static type")

    def encode_authorization(self, authorization: Authorization) -> Dict[str, Any]:
        """Encode an authorization; Unauthorized without entitlements is just its kind."""
        encoded: Dict[str, Any] = {"kind": authorization.kind.value}
        if authorization.entitlements is not None:
            encoded["entitlements"] = [
                {"kind": entitlement.kind.value, "typeID": entitlement.type_id}
                for entitlement in authorization.entitlements
            ]
        return encoded

    def _encode_initializers(self, initializers) -> List[List[Dict[str, Any]]]:
        return [[self._encode_parameter(item) for item in overload] for overload in initializers]

    def _encode_fields(self, fields) -> List[Dict[str, Any]]:
        return [{"id": item.id, "type": self.encode_type(item.type)} for item in fields]

    def _encode_parameter(self, parameter: ParameterType) -> Dict[str, Any]:
        return {
            "label": parameter.label,
            "id": parameter.id,
            "type": self.encode_type(parameter.type),
        }

    # Shape helpers

    @staticmethod
    def _expect_object(data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise DecodeShapeError(what, "an object", data)
        return data

    @staticmethod
    def _expect_list(data: Any, what: str) -> List[Any]:
        if not isinstance(data, list):
            raise DecodeShapeError(what, "an array", data)
        return data

    @staticmethod
    def _member(obj: Dict[str, Any], name: str, what: str) -> Any:
        if name not in obj:
            raise DecodeShapeError(what, f"an object with a {name!r} member", obj)
        return obj[name]

    @classmethod
    def _string_member(cls, obj: Dict[str, Any], name: str, what: str) -> str:
        value = cls._member(obj, name, what)
        if not isinstance(value, str):
            raise DecodeShapeError(f"{what} {name}", "a string", value)
        return value
