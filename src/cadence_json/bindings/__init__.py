"""Typed bindings between native Python values and Cadence values."""

from .containers import ArrayBinding, AssocListBinding, MapBinding, OptionalBinding, TupleBinding
from .primitives import (
    ADDRESS,
    BOOL,
    DECIMAL,
    FIX64,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    INT128,
    INT256,
    STRING,
    UDECIMAL,
    UFIX64,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINT128,
    UINT256,
    VALUE,
    WORD8,
    WORD16,
    WORD32,
    WORD64,
    WORD128,
    WORD256,
    AddressBinding,
    BoolBinding,
    FixedPointBinding,
    IntegerBinding,
    StringBinding,
    ValueBinding,
)
from .records import RecordBinding, RecordField, cadence_field, cadence_record
from .resolver import DYNAMIC, CapabilityBinding, DynamicBinding, ReceiverBinding, binding_for

__all__ = [
    "ValueBinding", "StringBinding", "AddressBinding", "BoolBinding",
    "IntegerBinding", "FixedPointBinding",
    "ArrayBinding", "OptionalBinding", "MapBinding", "AssocListBinding", "TupleBinding",
    "RecordBinding", "RecordField", "cadence_field", "cadence_record",
    "DynamicBinding", "CapabilityBinding", "ReceiverBinding", "binding_for",
    "VALUE", "STRING", "ADDRESS", "BOOL", "DYNAMIC",
    "INT", "INT8", "INT16", "INT32", "INT64", "INT128", "INT256",
    "UINT", "UINT8", "UINT16", "UINT32", "UINT64", "UINT128", "UINT256",
    "WORD8", "WORD16", "WORD32", "WORD64", "WORD128", "WORD256",
    "FIX64", "UFIX64", "DECIMAL", "UDECIMAL",
]
