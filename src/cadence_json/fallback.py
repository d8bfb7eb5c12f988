"""Best-effort bridge from Cadence values to plain trees and receiver types."""

import dataclasses
import json
import logging
import typing
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from .bindings.primitives import describe
from .models import (
    ArrayValue,
    CadenceValue,
    CompositeValue,
    DictionaryValue,
    OptionalValue,
    StringValue,
    VoidValue,
)
from .transcoder import ValueEncoder
from .types import (
    FIXED_POINT_KINDS,
    INTEGER_KINDS,
    FieldMissingError,
    StructuralReceiver,
    TypeMismatchError,
    UnsupportedTypeError,
    json_type_name,
)
from .utils.numeric import is_fixed_point_literal, is_integer_literal

_INTEGER_TAGS = frozenset(kind.value for kind in INTEGER_KINDS)
_FIXED_POINT_TAGS = frozenset(kind.value for kind in FIXED_POINT_KINDS)
_PRIMITIVES = (str, int, float, bool, type(None))


class FallbackBridge:
    """
    Lets types without a dedicated binding be built from Cadence values.

    The value is structurally encoded, then two passes run over the tree:
    numeric widening turns integer and fixed-point payload strings into
    Python numbers, and primitive unwrapping collapses every envelope whose
    payload is a primitive into that bare payload. The result is handed to
    a target implementing StructuralReceiver.

    Widening fixed-point payloads to float can lose precision; use a
    dedicated binding where exact values matter.
    """

    def __init__(self, encoder: Optional[ValueEncoder] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the fallback bridge.

        Args:
            encoder: Optional ValueEncoder instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.encoder = encoder or ValueEncoder(logger=self.logger)

    def widen_numbers(self, tree: Any) -> Any:
        """
        Replace numeric payload strings with Python numbers, recursively.

        Integer kinds become int and fixed-point kinds become float.
        Payloads that do not parse are left unchanged.
        """
        if isinstance(tree, list):
            return [self.widen_numbers(item) for item in tree]
        if not isinstance(tree, dict):
            return tree

        tag = tree.get("type")
        payload = tree.get("value")
        if tag in _INTEGER_TAGS and is_integer_literal(payload):
            return {**tree, "value": int(payload)}
        if tag in _FIXED_POINT_TAGS and is_fixed_point_literal(payload):
            return {**tree, "value": float(payload)}
        return {key: self.widen_numbers(item) for key, item in tree.items()}

    def unwrap_primitives(self, tree: Any) -> Any:
        """Collapse every {"type": T, "value": V} node with a primitive V to V, bottom-up."""
        if isinstance(tree, list):
            return [self.unwrap_primitives(item) for item in tree]
        if not isinstance(tree, dict):
            return tree

        unwrapped = {key: self.unwrap_primitives(item) for key, item in tree.items()}
        if isinstance(unwrapped.get("type"), str) and "value" in unwrapped \
                and isinstance(unwrapped["value"], _PRIMITIVES):
            return unwrapped["value"]
        return unwrapped

    def normalize(self, value: CadenceValue) -> Any:
        """Encode a value and run both normalization passes over the tree."""
        return self.unwrap_primitives(self.widen_numbers(self.encoder.encode(value)))

    def to_plain(self, value: CadenceValue) -> Any:
        """
        Convert a value into plain JSON-like data.

        Composites become dicts of their members, dictionaries become dicts
        named by the key rule of to_mapping, and arrays become lists.
        Descriptor kinds (Path, Type, Capability, ...) stay as envelopes.
        """
        if isinstance(value, DictionaryValue):
            return self._mapping(value, self.to_plain)
        if isinstance(value, CompositeValue):
            return {
                composite_field.name: self.to_plain(composite_field.value)
                for composite_field in value.fields
            }
        if isinstance(value, ArrayValue):
            return [self.to_plain(item) for item in value.items]
        if isinstance(value, OptionalValue):
            return None if value.inner is None else self.to_plain(value.inner)
        if isinstance(value, VoidValue):
            return None
        return self.normalize(value)

    def to_mapping(self, value: CadenceValue) -> Dict[Any, Any]:
        """
        Convert a Dictionary value into a dict.

        String keys use their text. Other keys use their normalized payload
        when it is a primitive, and their compact encoded JSON text otherwise.
        Values are normalized. A repeated name keeps the last value.

        Raises:
            TypeMismatchError: If value is not a Dictionary
        """
        if not isinstance(value, DictionaryValue):
            raise TypeMismatchError("Dictionary", describe(value))
        return self._mapping(value, self.normalize)

    def materialize(self, value: CadenceValue, target: type) -> Any:
        """
        Build a target instance through its StructuralReceiver capability.

        Composites are passed as a dict of plain members, dictionaries as the
        dict produced by the key rule, and anything else as its plain form.

        Raises:
            UnsupportedTypeError: If target is not a StructuralReceiver
        """
        if not (isinstance(target, type) and issubclass(target, StructuralReceiver)):
            raise UnsupportedTypeError(target, "does not implement StructuralReceiver")

        structure = self.to_plain(value)
        self.logger.debug(f"Materializing {target.__name__} from {value.type_name}")
        return target.from_structure(structure)

    def _mapping(self, value: DictionaryValue, convert: Callable[[CadenceValue], Any]) -> Dict[Any, Any]:
        result = {}
        for entry in value.entries:
            name = self._member_name(entry.key)
            if name in result:
                self.logger.warning(f"Dictionary key {name!r} appears more than once; keeping the last value")
            result[name] = convert(entry.value)
        return result

    def _member_name(self, key: CadenceValue) -> Any:
        if isinstance(key, StringValue):
            return key.value
        normalized = self.normalize(key)
        if isinstance(normalized, _PRIMITIVES):
            return normalized
        name = json.dumps(self.encoder.encode(key), separators=(",", ":"))
        self.logger.warning(f"Dictionary key of kind {key.type_name} has no primitive form; using {name}")
        return name


class DataclassReceiver(StructuralReceiver):
    """
    StructuralReceiver mixin for dataclasses.

    Members are matched to init fields by name; unknown members are ignored
    and fields with defaults may be absent. A field annotated with another
    StructuralReceiver type is built from its nested member dict.
    """

    @classmethod
    def from_structure(cls, structure: Any) -> Any:
        if not dataclasses.is_dataclass(cls):
            raise UnsupportedTypeError(cls, "DataclassReceiver must be mixed into a dataclass")
        if not isinstance(structure, Mapping):
            raise TypeMismatchError("members object", json_type_name(structure))

        hints = typing.get_type_hints(cls)
        members = {}
        for declared in dataclasses.fields(cls):
            if not declared.init:
                continue
            if declared.name not in structure:
                if declared.default is dataclasses.MISSING and declared.default_factory is dataclasses.MISSING:
                    raise FieldMissingError(declared.name, cls.__name__)
                continue
            member = structure[declared.name]
            hint = hints.get(declared.name)
            if isinstance(hint, type) and issubclass(hint, StructuralReceiver) and isinstance(member, Mapping):
                member = hint.from_structure(member)
            members[declared.name] = member
        return cls(**members)
