"""Resolve Python type hints into bindings, plus the runtime-typed dynamic binding."""

import collections.abc
import types
import typing
from decimal import Decimal
from typing import Any, Dict, Mapping

from ..models import (
    ArrayValue,
    BoolValue,
    CadenceValue,
    DictionaryEntry,
    DictionaryValue,
    IntegerValue,
    OptionalValue,
    StringValue,
)
from ..types import (
    Binding,
    Decodable,
    Encodable,
    Kind,
    StructuralReceiver,
    TypeMismatchError,
    UnsupportedTypeError,
)
from .containers import ArrayBinding, MapBinding, OptionalBinding, TupleBinding
from .primitives import BOOL, DECIMAL, FIX64, INT, STRING, VALUE, ValueBinding, describe

# types.UnionType (X | Y) exists from Python 3.10 on.
_UNION_ORIGINS = (typing.Union, getattr(types, "UnionType", typing.Union))
_EMPTY_TUPLES = (typing.Tuple[()], tuple[()])

_SEQUENCE_ORIGINS = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    set: set,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
    frozenset: frozenset,
}
_MAPPING_ORIGINS = {
    dict: dict,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
}


class DynamicBinding(Binding):
    """
    Encodes by inspecting each runtime value.

    str, bool, int, float/Decimal, None, lists/tuples and mappings map to
    String, Bool, Int, Fix64, nil Optional, Array and Dictionary. Encodable
    objects encode themselves and Cadence values pass through. Decoding
    returns the Cadence value unchanged since no native target is known.
    """

    @property
    def name(self) -> str:
        return "Any"

    def encode(self, obj: Any) -> CadenceValue:
        if isinstance(obj, CadenceValue):
            return obj
        if obj is None:
            return OptionalValue(None)
        if isinstance(obj, bool):
            return BoolValue(obj)
        if isinstance(obj, str):
            return StringValue(obj)
        if isinstance(obj, int):
            return IntegerValue(Kind.INT, str(obj))
        if isinstance(obj, (float, Decimal)):
            return FIX64.encode(obj)
        if isinstance(obj, Encodable):
            return obj.to_cadence_value()
        if isinstance(obj, Mapping):
            return DictionaryValue(tuple(
                DictionaryEntry(self.encode(key), self.encode(item)) for key, item in obj.items()
            ))
        if isinstance(obj, (list, tuple)):
            return ArrayValue(tuple(self.encode(item) for item in obj))
        raise UnsupportedTypeError(type(obj), "no Cadence encoding for this runtime type")

    def decode(self, value: CadenceValue) -> CadenceValue:
        if not isinstance(value, CadenceValue):
            raise TypeMismatchError("CadenceValue", describe(value))
        return value


class CapabilityBinding(Binding):
    """Binding for a class that implements Encodable and/or Decodable itself."""

    def __init__(self, target: type):
        self.target = target

    @property
    def name(self) -> str:
        return self.target.__name__

    def encode(self, obj: Any) -> CadenceValue:
        if not issubclass(self.target, Encodable):
            raise UnsupportedTypeError(self.target, "not Encodable")
        if not isinstance(obj, self.target):
            raise TypeMismatchError(self.name, describe(obj))
        return obj.to_cadence_value()

    def decode(self, value: CadenceValue) -> Any:
        if not issubclass(self.target, Decodable):
            raise UnsupportedTypeError(self.target, "not Decodable")
        return self.target.from_cadence_value(value)


class ReceiverBinding(Binding):
    """
    Binding for a StructuralReceiver class.

    Decoding goes through the fallback bridge; encoding requires the
    object to be Encodable.
    """

    def __init__(self, target: type, bridge: Any = None):
        self.target = target
        self.bridge = bridge

    @property
    def name(self) -> str:
        return self.target.__name__

    def encode(self, obj: Any) -> CadenceValue:
        if not isinstance(obj, Encodable):
            raise UnsupportedTypeError(self.target, "structural receivers decode only")
        return obj.to_cadence_value()

    def decode(self, value: CadenceValue) -> Any:
        if self.bridge is None:
            from ..fallback import FallbackBridge

            self.bridge = FallbackBridge()
        return self.bridge.materialize(value, self.target)


DYNAMIC = DynamicBinding()

_SCALAR_BINDINGS: Dict[Any, Binding] = {
    str: STRING,
    bool: BOOL,
    int: INT,
    float: FIX64,
    Decimal: DECIMAL,
}


def binding_for(hint: Any) -> Binding:
    """
    Resolve a binding for a Python type or typing hint.

    Args:
        hint: A Binding, a class, or a typing construct such as List[int]

    Returns:
        The binding to encode and decode values of that type

    Raises:
        UnsupportedTypeError: If no binding exists for the hint
    """
    if isinstance(hint, Binding):
        return hint
    if hint is Any or hint is object:
        return DYNAMIC
    if isinstance(hint, (str, typing.ForwardRef)):
        raise UnsupportedTypeError(hint, "unresolved forward reference")

    if isinstance(hint, type):
        if issubclass(hint, CadenceValue):
            return VALUE if hint is CadenceValue else ValueBinding(hint)
        if hint in _SCALAR_BINDINGS:
            return _SCALAR_BINDINGS[hint]
        if issubclass(hint, (Encodable, Decodable)):
            return CapabilityBinding(hint)
        if issubclass(hint, StructuralReceiver):
            return ReceiverBinding(hint)

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin in _UNION_ORIGINS:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(members) < len(args):
            return OptionalBinding(binding_for(members[0]))
        raise UnsupportedTypeError(hint, "only Optional[T] unions are supported")

    if origin is tuple or hint is tuple:
        # Tuple[()] reports no args on newer interpreters and ((),) on older ones.
        if hint in _EMPTY_TUPLES or args == ((),):
            return TupleBinding()
        if not args:
            return ArrayBinding(DYNAMIC, tuple)
        if len(args) == 2 and args[1] is Ellipsis:
            return ArrayBinding(binding_for(args[0]), tuple)
        return TupleBinding(*(binding_for(arg) for arg in args))

    container = _SEQUENCE_ORIGINS.get(origin or hint)
    if container is not None:
        element = binding_for(args[0]) if args else DYNAMIC
        return ArrayBinding(element, container)

    factory = _MAPPING_ORIGINS.get(origin or hint)
    if factory is not None:
        if args:
            return MapBinding(binding_for(args[0]), binding_for(args[1]), factory)
        return MapBinding(DYNAMIC, DYNAMIC, factory)

    raise UnsupportedTypeError(hint)
