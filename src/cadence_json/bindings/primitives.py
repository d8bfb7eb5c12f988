"""Bindings for scalar native types: str, bool, int widths, float and Decimal."""

from decimal import Decimal
from typing import Any, Type

from ..models import (
    AddressValue,
    BoolValue,
    CadenceValue,
    FixedPointValue,
    IntegerValue,
    StringValue,
)
from ..types import (
    FIXED_POINT_KINDS,
    INTEGER_KINDS,
    UNSIZED_INTEGER_KINDS,
    Binding,
    Kind,
    NumericParseError,
    TypeMismatchError,
)
from ..utils.numeric import check_integer_range, format_decimal, parse_fixed_point, parse_integer


def describe(value: Any) -> str:
    """Short description of a value for mismatch errors."""
    if isinstance(value, CadenceValue):
        return value.type_name
    return type(value).__name__


class ValueBinding(Binding):
    """Passes Cadence values through unchanged, optionally restricted to one class."""

    def __init__(self, value_class: Type[CadenceValue] = CadenceValue):
        self.value_class = value_class

    @property
    def name(self) -> str:
        return self.value_class.__name__

    def encode(self, obj: Any) -> CadenceValue:
        if not isinstance(obj, self.value_class):
            raise TypeMismatchError(self.name, describe(obj))
        return obj

    def decode(self, value: CadenceValue) -> CadenceValue:
        if not isinstance(value, self.value_class):
            raise TypeMismatchError(self.name, describe(value))
        return value


class StringBinding(Binding):
    """str <-> String, exact kind only."""

    @property
    def name(self) -> str:
        return "String"

    def encode(self, obj: Any) -> StringValue:
        if not isinstance(obj, str):
            raise TypeMismatchError("str", describe(obj))
        return StringValue(obj)

    def decode(self, value: CadenceValue) -> str:
        if not isinstance(value, StringValue):
            raise TypeMismatchError("String", describe(value))
        return value.value


class AddressBinding(Binding):
    """Hex address str <-> Address."""

    @property
    def name(self) -> str:
        return "Address"

    def encode(self, obj: Any) -> AddressValue:
        if not isinstance(obj, str):
            raise TypeMismatchError("str", describe(obj))
        return AddressValue(obj)

    def decode(self, value: CadenceValue) -> str:
        if not isinstance(value, AddressValue):
            raise TypeMismatchError("Address", describe(value))
        return value.value


class BoolBinding(Binding):
    """bool <-> Bool, exact kind only."""

    @property
    def name(self) -> str:
        return "Bool"

    def encode(self, obj: Any) -> BoolValue:
        if not isinstance(obj, bool):
            raise TypeMismatchError("bool", describe(obj))
        return BoolValue(obj)

    def decode(self, value: CadenceValue) -> bool:
        if not isinstance(value, BoolValue):
            raise TypeMismatchError("Bool", describe(value))
        return value.value


class IntegerBinding(Binding):
    """
    int <-> one integer kind, range-checked in both directions.

    A sized binding also accepts the unsized Int and UInt kinds on decode;
    the unsized bindings accept every integer kind. Values that do not fit
    the binding's width fail with NumericParseError.
    """

    def __init__(self, kind: Kind):
        if kind not in INTEGER_KINDS:
            raise ValueError(f"{kind.value} is not an integer kind")
        self.kind = kind
        if kind in UNSIZED_INTEGER_KINDS:
            self.accepted_kinds = INTEGER_KINDS
        else:
            self.accepted_kinds = frozenset({kind}) | UNSIZED_INTEGER_KINDS

    @property
    def name(self) -> str:
        return self.kind.value

    def encode(self, obj: Any) -> IntegerValue:
        if isinstance(obj, bool) or not isinstance(obj, int):
            raise TypeMismatchError("int", describe(obj))
        check_integer_range(obj, self.kind)
        return IntegerValue(self.kind, str(obj))

    def decode(self, value: CadenceValue) -> int:
        if not isinstance(value, IntegerValue) or value.kind not in self.accepted_kinds:
            raise TypeMismatchError(self.kind.value, describe(value))
        return parse_integer(value.value, self.kind)


class FixedPointBinding(Binding):
    """
    float or Decimal <-> Fix64/UFix64.

    Decoding accepts either fixed-point kind. Floats are rendered through
    their shortest repr so they decode back to the same float.
    """

    def __init__(self, kind: Kind = Kind.FIX64, as_decimal: bool = False):
        if kind not in FIXED_POINT_KINDS:
            raise ValueError(f"{kind.value} is not a fixed-point kind")
        self.kind = kind
        self.as_decimal = as_decimal

    @property
    def name(self) -> str:
        return self.kind.value

    def encode(self, obj: Any) -> FixedPointValue:
        if isinstance(obj, bool) or not isinstance(obj, (int, float, Decimal)):
            raise TypeMismatchError("float", describe(obj))
        text = format_decimal(obj, self.kind.value)
        if self.kind == Kind.UFIX64 and text.startswith("-"):
            raise NumericParseError(self.kind.value, text, "negative value for unsigned fixed-point")
        return FixedPointValue(self.kind, text)

    def decode(self, value: CadenceValue) -> Any:
        if not isinstance(value, FixedPointValue):
            raise TypeMismatchError("Fix64 or UFix64", describe(value))
        number = parse_fixed_point(value.value, value.kind, target=self.kind.value)
        return number if self.as_decimal else float(number)


VALUE = ValueBinding()
STRING = StringBinding()
ADDRESS = AddressBinding()
BOOL = BoolBinding()

INT = IntegerBinding(Kind.INT)
INT8 = IntegerBinding(Kind.INT8)
INT16 = IntegerBinding(Kind.INT16)
INT32 = IntegerBinding(Kind.INT32)
INT64 = IntegerBinding(Kind.INT64)
INT128 = IntegerBinding(Kind.INT128)
INT256 = IntegerBinding(Kind.INT256)
UINT = IntegerBinding(Kind.UINT)
UINT8 = IntegerBinding(Kind.UINT8)
UINT16 = IntegerBinding(Kind.UINT16)
UINT32 = IntegerBinding(Kind.UINT32)
UINT64 = IntegerBinding(Kind.UINT64)
UINT128 = IntegerBinding(Kind.UINT128)
UINT256 = IntegerBinding(Kind.UINT256)
WORD8 = IntegerBinding(Kind.WORD8)
WORD16 = IntegerBinding(Kind.WORD16)
WORD32 = IntegerBinding(Kind.WORD32)
WORD64 = IntegerBinding(Kind.WORD64)
WORD128 = IntegerBinding(Kind.WORD128)
WORD256 = IntegerBinding(Kind.WORD256)

FIX64 = FixedPointBinding(Kind.FIX64)
UFIX64 = FixedPointBinding(Kind.UFIX64)
DECIMAL = FixedPointBinding(Kind.FIX64, as_decimal=True)
UDECIMAL = FixedPointBinding(Kind.UFIX64, as_decimal=True)
