"""Value model: the closed set of Cadence values as immutable dataclasses."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Iterator, Optional, Sequence, Tuple

from ..types import (
    COMPOSITE_KINDS,
    FIXED_POINT_KINDS,
    INTEGER_KINDS,
    Decodable,
    Encodable,
    Kind,
    PathDomain,
    TypeMismatchError,
)
from ..utils.numeric import parse_fixed_point, parse_integer


def _coerce_kind(kind: Any) -> Kind:
    return kind if isinstance(kind, Kind) else Kind(kind)


class CadenceValue:
    """
    Base class of every Cadence value.

    Values are pure data: immutable, compared structurally, without
    identity or back-references.
    """

    kind: ClassVar[Kind]

    @property
    def type_name(self) -> str:
        """Discriminator string used on the wire."""
        return self.kind.value

    def to_cadence_value(self) -> "CadenceValue":
        return self

    @classmethod
    def from_cadence_value(cls, value: "CadenceValue") -> "CadenceValue":
        if not isinstance(value, cls):
            got = value.type_name if isinstance(value, CadenceValue) else type(value).__name__
            raise TypeMismatchError(cls.__name__, got)
        return value


Encodable.register(CadenceValue)
Decodable.register(CadenceValue)


@dataclass(frozen=True)
class VoidValue(CadenceValue):
    """The Void value."""

    kind: ClassVar[Kind] = Kind.VOID


@dataclass(frozen=True)
class OptionalValue(CadenceValue):
    """An optional value; inner None means the optional is nil."""

    inner: Optional[CadenceValue] = None
    kind: ClassVar[Kind] = Kind.OPTIONAL

    def __post_init__(self):
        if self.inner is not None and not isinstance(self.inner, CadenceValue):
            raise TypeError(f"Optional inner must be a CadenceValue, got {type(self.inner).__name__}")

    @property
    def is_nil(self) -> bool:
        return self.inner is None


@dataclass(frozen=True)
class BoolValue(CadenceValue):
    value: bool
    kind: ClassVar[Kind] = Kind.BOOL

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool value must be bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class StringValue(CadenceValue):
    value: str
    kind: ClassVar[Kind] = Kind.STRING

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"String value must be str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class AddressValue(CadenceValue):
    """An account address, hex encoded with a 0x prefix."""

    value: str
    kind: ClassVar[Kind] = Kind.ADDRESS

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"Address value must be str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class IntegerValue(CadenceValue):
    """
    Any integer kind (Int, Int8..Int256, UInt, UInt8..UInt256, Word8..Word256).

    The magnitude is kept as the exact decimal string from the wire;
    conversion to a Python int happens only through to_int().
    """

    kind: Kind
    value: str

    def __post_init__(self):
        kind = _coerce_kind(self.kind)
        if kind not in INTEGER_KINDS:
            raise ValueError(f"{kind.value} is not an integer kind")
        object.__setattr__(self, "kind", kind)
        if not isinstance(self.value, str):
            raise TypeError(f"{kind.value} value must be a decimal string, got {type(self.value).__name__}")

    @classmethod
    def of(cls, kind: Any, number: int) -> "IntegerValue":
        """Build an integer value from a Python int."""
        return cls(kind, str(number))

    def to_int(self, bounded: bool = True) -> int:
        """
        Parse the decimal payload.

        Args:
            bounded: Range-check against this value's own kind

        Raises:
            NumericParseError: If the payload is malformed or out of range
        """
        return parse_integer(self.value, self.kind if bounded else None)


@dataclass(frozen=True)
class FixedPointValue(CadenceValue):
    """A Fix64 or UFix64 value kept as its decimal string."""

    kind: Kind
    value: str

    def __post_init__(self):
        kind = _coerce_kind(self.kind)
        if kind not in FIXED_POINT_KINDS:
            raise ValueError(f"{kind.value} is not a fixed-point kind")
        object.__setattr__(self, "kind", kind)
        if not isinstance(self.value, str):
            raise TypeError(f"{kind.value} value must be a decimal string, got {type(self.value).__name__}")

    def to_decimal(self) -> Decimal:
        """Parse the payload into an exact Decimal."""
        return parse_fixed_point(self.value, self.kind)


@dataclass(frozen=True)
class ArrayValue(CadenceValue):
    """An ordered sequence of values."""

    items: Tuple[CadenceValue, ...] = ()
    kind: ClassVar[Kind] = Kind.ARRAY

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[CadenceValue]:
        return iter(self.items)


@dataclass(frozen=True)
class DictionaryEntry:
    key: CadenceValue
    value: CadenceValue


@dataclass(frozen=True)
class DictionaryValue(CadenceValue):
    """
    A dictionary kept as its ordered entry list.

    Duplicate keys are representable; collapsing them is up to the binding
    that turns entries into a native mapping.
    """

    entries: Tuple[DictionaryEntry, ...] = ()
    kind: ClassVar[Kind] = Kind.DICTIONARY

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[CadenceValue, CadenceValue]]) -> "DictionaryValue":
        return cls(tuple(DictionaryEntry(key, value) for key, value in pairs))

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CompositeField:
    name: str
    value: CadenceValue


@dataclass(frozen=True)
class CompositeValue(CadenceValue):
    """
    A named aggregate (Struct, Resource, Event, Contract or Enum).

    Fields keep the order they were supplied in.
    """

    kind: Kind
    id: str
    fields: Tuple[CompositeField, ...] = ()

    def __post_init__(self):
        kind = _coerce_kind(self.kind)
        if kind not in COMPOSITE_KINDS:
            raise ValueError(f"{kind.value} is not a composite kind")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "fields", tuple(self.fields))

    def get_field(self, name: str) -> Optional[CadenceValue]:
        """Return the value of the first field called name, if any."""
        for composite_field in self.fields:
            if composite_field.name == name:
                return composite_field.value
        return None

    def field_names(self) -> Tuple[str, ...]:
        return tuple(composite_field.name for composite_field in self.fields)


@dataclass(frozen=True)
class PathValue(CadenceValue):
    domain: PathDomain
    identifier: str
    kind: ClassVar[Kind] = Kind.PATH

    def __post_init__(self):
        if not isinstance(self.domain, PathDomain):
            object.__setattr__(self, "domain", PathDomain(self.domain))


@dataclass(frozen=True)
class TypeValue(CadenceValue):
    """A run-time type value wrapping a static type."""

    static_type: Any
    kind: ClassVar[Kind] = Kind.TYPE


@dataclass(frozen=True)
class InclusiveRangeValue(CadenceValue):
    start: CadenceValue
    end: CadenceValue
    step: CadenceValue
    kind: ClassVar[Kind] = Kind.INCLUSIVE_RANGE


@dataclass(frozen=True)
class CapabilityValue(CadenceValue):
    id: str
    address: str
    borrow_type: Any
    kind: ClassVar[Kind] = Kind.CAPABILITY


@dataclass(frozen=True)
class FunctionValue(CadenceValue):
    function_type: Any
    kind: ClassVar[Kind] = Kind.FUNCTION
