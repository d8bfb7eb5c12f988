"""Data models for Cadence values and static types."""

from .authorization import Authorization, AuthorizationKind, Entitlement, EntitlementKind
from .static_type import (
    NOMINAL_TYPE_KINDS,
    SIMPLE_TYPE_KINDS,
    CapabilityType,
    CompositeType,
    ConstantSizedArrayType,
    DictionaryType,
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
from .value import (
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

__all__ = [
    "CadenceValue", "VoidValue", "OptionalValue", "BoolValue", "StringValue",
    "AddressValue", "IntegerValue", "FixedPointValue", "ArrayValue",
    "DictionaryEntry", "DictionaryValue", "CompositeField", "CompositeValue",
    "PathValue", "TypeValue", "InclusiveRangeValue", "CapabilityValue",
    "FunctionValue",
    "StaticType", "SimpleType", "TypeReference", "OptionalType",
    "VariableSizedArrayType", "ConstantSizedArrayType", "DictionaryType",
    "CapabilityType", "ReferenceType", "IntersectionType", "CompositeType",
    "EnumType", "FunctionType", "InclusiveRangeType", "FieldType",
    "ParameterType", "SIMPLE_TYPE_KINDS", "NOMINAL_TYPE_KINDS",
    "Authorization", "AuthorizationKind", "Entitlement", "EntitlementKind",
]
