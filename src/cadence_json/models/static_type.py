"""Static type grammar carried by Type, Capability and Function values."""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

from .authorization import Authorization

SIMPLE_TYPE_KINDS = frozenset({
    "Account", "AccountCapabilityController", "AccountKey", "Address",
    "AnyResource", "AnyResourceAttachment", "AnyStruct", "AnyStructAttachment",
    "Block", "Bool", "CapabilityPath", "Character", "DeployedContract",
    "DeploymentResult", "Fix64", "FixedPoint", "FixedSizeUnsignedInteger",
    "HashAlgorithm", "HashableStruct", "Int", "Int8", "Int16", "Int32", "Int64",
    "Int128", "Int256", "Integer", "Never", "Number", "Path", "PrivatePath",
    "PublicKey", "PublicPath", "SignatureAlgorithm", "SignedFixedPoint",
    "SignedInteger", "SignedNumber", "StorageCapabilityController", "StoragePath",
    "String", "Type", "UFix64", "UInt", "UInt8", "UInt16", "UInt32", "UInt64",
    "UInt128", "UInt256", "Void", "Word8", "Word16", "Word32", "Word64",
    "Word128", "Word256",
})

NOMINAL_TYPE_KINDS = frozenset({
    "Struct", "Resource", "Event", "Contract",
    "StructInterface", "ResourceInterface", "ContractInterface",
})


class StaticType:
    """Base class of the static type grammar."""

    kind: ClassVar[str]


@dataclass(frozen=True)
class SimpleType(StaticType):
    """A parameterless type such as Int or AnyStruct."""

    kind: str

    def __post_init__(self):
        if self.kind not in SIMPLE_TYPE_KINDS:
            raise ValueError(f"{self.kind!r} is not a simple type kind")


@dataclass(frozen=True)
class TypeReference(StaticType):
    """A repeated occurrence of a nominal type, referenced by type id."""

    type_id: str
    kind: ClassVar[str] = "TypeReference"


@dataclass(frozen=True)
class OptionalType(StaticType):
    type: StaticType
    kind: ClassVar[str] = "Optional"


@dataclass(frozen=True)
class VariableSizedArrayType(StaticType):
    type: StaticType
    kind: ClassVar[str] = "VariableSizedArray"


@dataclass(frozen=True)
class ConstantSizedArrayType(StaticType):
    type: StaticType
    size: int
    kind: ClassVar[str] = "ConstantSizedArray"

    def __post_init__(self):
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 0:
            raise ValueError(f"size must be a non-negative integer, got {self.size!r}")


@dataclass(frozen=True)
class DictionaryType(StaticType):
    key: StaticType
    value: StaticType
    kind: ClassVar[str] = "Dictionary"


@dataclass(frozen=True)
class CapabilityType(StaticType):
    type: StaticType
    kind: ClassVar[str] = "Capability"


@dataclass(frozen=True)
class ReferenceType(StaticType):
    authorization: Authorization
    type: StaticType
    kind: ClassVar[str] = "Reference"


@dataclass(frozen=True)
class IntersectionType(StaticType):
    type_id: str
    types: Tuple[StaticType, ...] = ()
    kind: ClassVar[str] = "Intersection"

    def __post_init__(self):
        object.__setattr__(self, "types", tuple(self.types))


@dataclass(frozen=True)
class FieldType:
    id: str
    type: StaticType


@dataclass(frozen=True)
class ParameterType:
    label: str
    id: str
    type: StaticType


def _freeze_initializers(initializers) -> Tuple[Tuple[ParameterType, ...], ...]:
    return tuple(tuple(overload) for overload in initializers)


@dataclass(frozen=True)
class CompositeType(StaticType):
    """A nominal declaration: struct, resource, event, contract or interface."""

    kind: str
    type_id: str
    initializers: Tuple[Tuple[ParameterType, ...], ...] = ()
    fields: Tuple[FieldType, ...] = ()
    type: str = ""

    def __post_init__(self):
        if self.kind not in NOMINAL_TYPE_KINDS:
            raise ValueError(f"{self.kind!r} is not a nominal type kind")
        object.__setattr__(self, "initializers", _freeze_initializers(self.initializers))
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class EnumType(StaticType):
    """An enum declaration; type is its raw value type."""

    type: StaticType
    type_id: str
    initializers: Tuple[Tuple[ParameterType, ...], ...] = ()
    fields: Tuple[FieldType, ...] = ()
    kind: ClassVar[str] = "Enum"

    def __post_init__(self):
        object.__setattr__(self, "initializers", _freeze_initializers(self.initializers))
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class FunctionType(StaticType):
    type_id: str
    parameters: Tuple[ParameterType, ...]
    return_type: StaticType
    purity: Optional[str] = None
    kind: ClassVar[str] = "Function"

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))


@dataclass(frozen=True)
class InclusiveRangeType(StaticType):
    element: StaticType
    kind: ClassVar[str] = "InclusiveRange"
