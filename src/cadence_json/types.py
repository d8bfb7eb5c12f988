"""Core type definitions for the Cadence-JSON codec."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Kind(Enum):
    """Discriminator tags of the Cadence-JSON value envelope."""
    VOID = "Void"
    OPTIONAL = "Optional"
    BOOL = "Bool"
    STRING = "String"
    ADDRESS = "Address"
    INT = "Int"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    INT128 = "Int128"
    INT256 = "Int256"
    UINT = "UInt"
    UINT8 = "UInt8"
    UINT16 = "UInt16"
    UINT32 = "UInt32"
    UINT64 = "UInt64"
    UINT128 = "UInt128"
    UINT256 = "UInt256"
    WORD8 = "Word8"
    WORD16 = "Word16"
    WORD32 = "Word32"
    WORD64 = "Word64"
    WORD128 = "Word128"
    WORD256 = "Word256"
    FIX64 = "Fix64"
    UFIX64 = "UFix64"
    ARRAY = "Array"
    DICTIONARY = "Dictionary"
    STRUCT = "Struct"
    RESOURCE = "Resource"
    EVENT = "Event"
    CONTRACT = "Contract"
    ENUM = "Enum"
    PATH = "Path"
    TYPE = "Type"
    INCLUSIVE_RANGE = "InclusiveRange"
    CAPABILITY = "Capability"
    FUNCTION = "Function"


class PathDomain(Enum):
    """Storage domains a path can point into."""
    STORAGE = "storage"
    PRIVATE = "private"
    PUBLIC = "public"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    UNKNOWN_KIND = "unknown_kind"
    DECODE_SHAPE = "decode_shape"
    TYPE_MISMATCH = "type_mismatch"
    FIELD_MISSING = "field_missing"
    ARITY_MISMATCH = "arity_mismatch"
    NUMERIC_PARSE = "numeric_parse"
    UNSUPPORTED = "unsupported"


# Inclusive (min, max) per sized integer kind; None means unbounded on that side.
INTEGER_RANGES: Dict[Kind, Tuple[Optional[int], Optional[int]]] = {
    Kind.INT: (None, None),
    Kind.INT8: (-(2 ** 7), 2 ** 7 - 1),
    Kind.INT16: (-(2 ** 15), 2 ** 15 - 1),
    Kind.INT32: (-(2 ** 31), 2 ** 31 - 1),
    Kind.INT64: (-(2 ** 63), 2 ** 63 - 1),
    Kind.INT128: (-(2 ** 127), 2 ** 127 - 1),
    Kind.INT256: (-(2 ** 255), 2 ** 255 - 1),
    Kind.UINT: (0, None),
    Kind.UINT8: (0, 2 ** 8 - 1),
    Kind.UINT16: (0, 2 ** 16 - 1),
    Kind.UINT32: (0, 2 ** 32 - 1),
    Kind.UINT64: (0, 2 ** 64 - 1),
    Kind.UINT128: (0, 2 ** 128 - 1),
    Kind.UINT256: (0, 2 ** 256 - 1),
    Kind.WORD8: (0, 2 ** 8 - 1),
    Kind.WORD16: (0, 2 ** 16 - 1),
    Kind.WORD32: (0, 2 ** 32 - 1),
    Kind.WORD64: (0, 2 ** 64 - 1),
    Kind.WORD128: (0, 2 ** 128 - 1),
    Kind.WORD256: (0, 2 ** 256 - 1),
}

INTEGER_KINDS = frozenset(INTEGER_RANGES)
FIXED_POINT_KINDS = frozenset({Kind.FIX64, Kind.UFIX64})
NUMERIC_KINDS = INTEGER_KINDS | FIXED_POINT_KINDS
COMPOSITE_KINDS = frozenset({
    Kind.STRUCT, Kind.RESOURCE, Kind.EVENT, Kind.CONTRACT, Kind.ENUM,
})
UNSIZED_INTEGER_KINDS = frozenset({Kind.INT, Kind.UINT})


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


class CadenceError(Exception):
    """Base exception for every codec failure."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context or {}


class UnknownKindError(CadenceError):
    """A discriminator tag outside the closed set was encountered."""

    def __init__(self, tag: Any, family: str = "value"):
        super().__init__(f"Unknown {family} kind: {tag!r}", ErrorType.UNKNOWN_KIND,
                         context={"tag": tag, "family": family})
        self.tag = tag


class DecodeShapeError(CadenceError):
    """A payload did not have the JSON shape its kind requires."""

    def __init__(self, kind: str, expected: str, got: Any):
        got_name = json_type_name(got)
        super().__init__(f"{kind} value must be {expected}, got {got_name}", ErrorType.DECODE_SHAPE,
                         context={"kind": kind, "expected": expected, "got": got_name})
        self.kind = kind
        self.expected = expected


class TypeMismatchError(CadenceError):
    """A value of one kind was offered to a binding expecting another."""

    def __init__(self, expected: str, got: str):
        super().__init__(f"Type mismatch: expected {expected}, got {got}", ErrorType.TYPE_MISMATCH,
                         context={"expected": expected, "got": got})
        self.expected = expected
        self.got = got


class FieldMissingError(CadenceError):
    """A composite lacked a field a record binding requires."""

    def __init__(self, name: str, type_id: Optional[str] = None):
        where = f" in {type_id}" if type_id else ""
        super().__init__(f"Field {name} not found{where}", ErrorType.FIELD_MISSING,
                         context={"name": name, "type_id": type_id})
        self.name = name


class ArityMismatchError(CadenceError):
    """An array length did not equal the arity of the target tuple."""

    def __init__(self, expected: int, got: int):
        super().__init__(f"Expected array of length {expected} for tuple, got {got}",
                         ErrorType.ARITY_MISMATCH, context={"expected": expected, "got": got})
        self.expected = expected
        self.got = got


class NumericParseError(CadenceError):
    """A decimal payload was malformed or out of range for its target."""

    def __init__(self, target: str, text: Any, reason: str):
        super().__init__(f"Failed to parse {target} from {text!r}: {reason}", ErrorType.NUMERIC_PARSE,
                         context={"target": target, "text": text, "reason": reason})
        self.target = target
        self.text = text


class UnsupportedTypeError(CadenceError):
    """No encoder or binding exists for the requested target."""

    def __init__(self, target: Any, detail: str = ""):
        name = getattr(target, "__name__", None) or repr(target)
        message = f"Unsupported type: {name}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, ErrorType.UNSUPPORTED, context={"target": name})
        self.target = target


class JSONSyntaxError(CadenceError):
    """The underlying JSON reader rejected the input text."""

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(message, ErrorType.SYNTAX, context={"location": location})
        self.location = location


def json_type_name(data: Any) -> str:
    """Name the JSON shape of a generic tree node for error messages."""
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float, Decimal)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__


# Abstract base classes for interfaces

class Encodable(ABC):
    """Capability of a native value to produce its own Cadence value."""

    @abstractmethod
    def to_cadence_value(self) -> Any:
        """Convert this object into a CadenceValue."""
        pass


class Decodable(ABC):
    """Capability of a native type to build itself from a Cadence value."""

    @classmethod
    @abstractmethod
    def from_cadence_value(cls, value: Any) -> Any:
        """Build an instance from a CadenceValue."""
        pass


class StructuralReceiver(ABC):
    """Capability of a type to be materialized from a normalized plain tree."""

    @classmethod
    @abstractmethod
    def from_structure(cls, structure: Any) -> Any:
        """Build an instance from plain JSON-like data (dict members for composites)."""
        pass


class Binding(ABC):
    """Abstract interface for a native type binding."""

    @abstractmethod
    def encode(self, obj: Any) -> Any:
        """Encode a native object into a CadenceValue."""
        pass

    @abstractmethod
    def decode(self, value: Any) -> Any:
        """Decode a CadenceValue into a native object."""
        pass

    @property
    def name(self) -> str:
        """Human-readable name used in error messages."""
        return type(self).__name__
