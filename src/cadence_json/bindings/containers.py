"""Bindings for container native types: sequences, optionals, maps and tuples."""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple

from ..models import (
    ArrayValue,
    CadenceValue,
    DictionaryEntry,
    DictionaryValue,
    OptionalValue,
)
from ..types import ArityMismatchError, Binding, TypeMismatchError
from .primitives import describe


class ArrayBinding(Binding):
    """Sequence <-> Array, element-wise, order preserved."""

    def __init__(self, element: Binding, container: Callable[[Iterable[Any]], Any] = list):
        self.element = element
        self.container = container

    @property
    def name(self) -> str:
        return f"Array<{self.element.name}>"

    def encode(self, obj: Any) -> ArrayValue:
        if isinstance(obj, (str, bytes, Mapping)) or not isinstance(obj, Iterable):
            raise TypeMismatchError("sequence", describe(obj))
        return ArrayValue(tuple(self.element.encode(item) for item in obj))

    def decode(self, value: CadenceValue) -> Any:
        if not isinstance(value, ArrayValue):
            raise TypeMismatchError("Array", describe(value))
        # Stops at the first element that fails.
        return self.container(self.element.decode(item) for item in value.items)


class OptionalBinding(Binding):
    """None <-> nil Optional, anything else <-> Optional wrapping the inner binding."""

    def __init__(self, inner: Binding):
        self.inner = inner

    @property
    def name(self) -> str:
        return f"Optional<{self.inner.name}>"

    def encode(self, obj: Any) -> OptionalValue:
        if obj is None:
            return OptionalValue(None)
        return OptionalValue(self.inner.encode(obj))

    def decode(self, value: CadenceValue) -> Any:
        if not isinstance(value, OptionalValue):
            raise TypeMismatchError("Optional", describe(value))
        if value.inner is None:
            return None
        return self.inner.decode(value.inner)


class MapBinding(Binding):
    """
    Native dict <-> Dictionary.

    Encoding follows the mapping's own iteration order. Decoding inserts
    entries in wire order, so a repeated key keeps its last value.
    """

    def __init__(self, key: Binding, value: Binding, factory: Callable[[], Dict[Any, Any]] = dict):
        self.key = key
        self.value = value
        self.factory = factory

    @property
    def name(self) -> str:
        return f"Dictionary<{self.key.name}, {self.value.name}>"

    def encode(self, obj: Any) -> DictionaryValue:
        if not isinstance(obj, Mapping):
            raise TypeMismatchError("mapping", describe(obj))
        return DictionaryValue(tuple(
            DictionaryEntry(self.key.encode(key), self.value.encode(item))
            for key, item in obj.items()
        ))

    def decode(self, value: CadenceValue) -> Dict[Any, Any]:
        if not isinstance(value, DictionaryValue):
            raise TypeMismatchError("Dictionary", describe(value))
        result = self.factory()
        for entry in value.entries:
            key = self.key.decode(entry.key)
            item = self.value.decode(entry.value)
            try:
                result[key] = item
            except TypeError:
                raise TypeMismatchError("hashable key", type(key).__name__) from None
        return result


class AssocListBinding(Binding):
    """
    List of (key, value) pairs <-> Dictionary.

    Keeps wire order and duplicate keys, unlike MapBinding.
    """

    def __init__(self, key: Binding, value: Binding):
        self.key = key
        self.value = value

    @property
    def name(self) -> str:
        return f"Entries<{self.key.name}, {self.value.name}>"

    def encode(self, obj: Any) -> DictionaryValue:
        if isinstance(obj, Mapping):
            pairs = obj.items()
        elif isinstance(obj, Iterable) and not isinstance(obj, (str, bytes)):
            pairs = obj
        else:
            raise TypeMismatchError("sequence of pairs", describe(obj))

        entries = []
        for pair in pairs:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise TypeMismatchError("(key, value) pair", describe(pair))
            entries.append(DictionaryEntry(self.key.encode(pair[0]), self.value.encode(pair[1])))
        return DictionaryValue(tuple(entries))

    def decode(self, value: CadenceValue) -> List[Tuple[Any, Any]]:
        if not isinstance(value, DictionaryValue):
            raise TypeMismatchError("Dictionary", describe(value))
        return [(self.key.decode(entry.key), self.value.decode(entry.value)) for entry in value.entries]


class TupleBinding(Binding):
    """Fixed-arity tuple <-> Array of exactly that many elements."""

    def __init__(self, *elements: Binding):
        self.elements = elements

    @property
    def name(self) -> str:
        return f"Tuple<{', '.join(element.name for element in self.elements)}>"

    def encode(self, obj: Any) -> ArrayValue:
        if not isinstance(obj, (tuple, list)):
            raise TypeMismatchError("tuple", describe(obj))
        if len(obj) != len(self.elements):
            raise ArityMismatchError(len(self.elements), len(obj))
        return ArrayValue(tuple(element.encode(item) for element, item in zip(self.elements, obj)))

    def decode(self, value: CadenceValue) -> Tuple[Any, ...]:
        if not isinstance(value, ArrayValue):
            raise TypeMismatchError("Array", describe(value))
        if len(value.items) != len(self.elements):
            raise ArityMismatchError(len(self.elements), len(value.items))
        return tuple(element.decode(item) for element, item in zip(self.elements, value.items))
