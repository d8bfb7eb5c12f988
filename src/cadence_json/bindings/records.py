"""Record bindings: named records <-> Composite values."""

import dataclasses
import logging
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from ..models import CadenceValue, CompositeField, CompositeValue
from ..types import (
    COMPOSITE_KINDS,
    Binding,
    Decodable,
    Encodable,
    FieldMissingError,
    Kind,
    TypeMismatchError,
)
from .primitives import describe

# Key under which cadence_field() stores its options in dataclass field metadata.
FIELD_METADATA_KEY = "cadence"


def cadence_field(binding: Any = None, rename: Optional[str] = None, **kwargs) -> Any:
    """
    Declare a dataclass field with Cadence options.

    Args:
        binding: Binding or type hint to use instead of the annotation
        rename: Name the field carries on the wire
        **kwargs: Passed through to dataclasses.field()

    Returns:
        A dataclasses.field() with the options in its metadata
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[FIELD_METADATA_KEY] = {"binding": binding, "rename": rename}
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True)
class RecordField:
    """One declared record member: attribute name, binding and wire name."""

    name: str
    binding: Any
    wire_name: Optional[str] = None

    @property
    def field_name(self) -> str:
        return self.wire_name or self.name


class RecordBinding(Binding):
    """
    Binding for a named record with members in declaration order.

    Encoding emits one composite field per member, under the member's wire
    name. Decoding looks each member up by wire name, decodes it with the
    member's own binding, and only then calls the factory, so a missing or
    malformed member never yields a partially built record.
    """

    def __init__(self, type_id: str, fields: Sequence[RecordField],
                 factory: Callable[..., Any], kind: Kind = Kind.STRUCT,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the record binding.

        Args:
            type_id: Composite id emitted on encode
            fields: Record members in declaration order
            factory: Callable taking the members as keyword arguments
            kind: Composite kind (Struct by default)
            logger: Optional logger instance
        """
        if kind not in COMPOSITE_KINDS:
            raise ValueError(f"{kind.value} is not a composite kind")
        self.type_id = type_id
        self.fields = tuple(fields)
        self.factory = factory
        self.kind = kind
        self.logger = logger or logging.getLogger(__name__)
        self._bindings: Optional[Dict[str, Binding]] = None
        self._record_class: Optional[type] = None

    @property
    def name(self) -> str:
        return self.type_id

    @classmethod
    def from_dataclass(cls, record_class: type, type_id: Optional[str] = None,
                       kind: Kind = Kind.STRUCT,
                       renames: Optional[Mapping[str, str]] = None) -> "RecordBinding":
        """
        Build the binding for a dataclass from its declared init fields.

        Field bindings come from cadence_field(binding=...) when given, else
        from the type annotation, resolved on first use so that forward
        references to later classes work.
        """
        renames = dict(renames or {})
        fields = []
        for declared in dataclasses.fields(record_class):
            if not declared.init:
                continue
            options = declared.metadata.get(FIELD_METADATA_KEY, {})
            wire_name = options.get("rename") or renames.get(declared.name)
            fields.append(RecordField(declared.name, options.get("binding"), wire_name))

        unknown = set(renames) - {record_field.name for record_field in fields}
        if unknown:
            raise ValueError(f"renames refer to unknown fields: {sorted(unknown)}")

        binding = cls(type_id or record_class.__name__, fields, record_class, kind)
        binding._record_class = record_class
        return binding

    def encode(self, obj: Any) -> CompositeValue:
        bindings = self._field_bindings()
        composite_fields = []
        for record_field in self.fields:
            member = getattr(obj, record_field.name)
            composite_fields.append(CompositeField(
                record_field.field_name, bindings[record_field.name].encode(member)))
        return CompositeValue(self.kind, self.type_id, tuple(composite_fields))

    def decode(self, value: CadenceValue) -> Any:
        if not isinstance(value, CompositeValue) or value.kind != self.kind:
            raise TypeMismatchError(self.kind.value, describe(value))

        bindings = self._field_bindings()
        members = {}
        for record_field in self.fields:
            field_value = value.get_field(record_field.field_name)
            if field_value is None:
                raise FieldMissingError(record_field.field_name, value.id)
            members[record_field.name] = bindings[record_field.name].decode(field_value)

        self.logger.debug(f"Decoded {self.type_id} from {value.id} with {len(members)} members")
        return self.factory(**members)

    def _field_bindings(self) -> Dict[str, Binding]:
        if self._bindings is None:
            from .resolver import binding_for

            hints = self._annotations()
            resolved = {}
            for record_field in self.fields:
                target = record_field.binding
                if target is None:
                    target = hints.get(record_field.name, Any)
                resolved[record_field.name] = binding_for(target)
            self._bindings = resolved
        return self._bindings

    def _annotations(self) -> Dict[str, Any]:
        if self._record_class is None:
            return {}
        return typing.get_type_hints(self._record_class)


def cadence_record(cls: Optional[type] = None, *, id: Optional[str] = None,
                   kind: Kind = Kind.STRUCT,
                   renames: Optional[Mapping[str, str]] = None):
    """
    Class decorator giving a dataclass Encodable and Decodable support.

    The composite id defaults to the class name. Usable bare
    (@cadence_record) or with options (@cadence_record(renames={...})).
    """

    def wrap(record_class: type) -> type:
        if not dataclasses.is_dataclass(record_class):
            raise TypeError(f"{record_class.__name__} must be a dataclass")

        binding = RecordBinding.from_dataclass(record_class, type_id=id, kind=kind, renames=renames)
        record_class.__cadence_binding__ = binding
        record_class.to_cadence_value = _to_cadence_value
        record_class.from_cadence_value = classmethod(_from_cadence_value)
        Encodable.register(record_class)
        Decodable.register(record_class)
        return record_class

    if cls is None:
        return wrap
    return wrap(cls)


def _to_cadence_value(self) -> CompositeValue:
    return type(self).__cadence_binding__.encode(self)


def _from_cadence_value(cls, value: CadenceValue) -> Any:
    return cls.__cadence_binding__.decode(value)
