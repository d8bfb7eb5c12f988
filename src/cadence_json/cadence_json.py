"""Main Cadence-JSON codec: text and bytes to typed values and back."""

import logging
from typing import IO, Any, Iterable, Mapping, Optional, Union

from .bindings import DYNAMIC, VALUE, binding_for
from .error_handler import ErrorHandler
from .fallback import FallbackBridge
from .models import (
    ArrayValue,
    BoolValue,
    CadenceValue,
    DictionaryEntry,
    DictionaryValue,
    OptionalValue,
    StringValue,
)
from .parser import JSONParser
from .transcoder import TypeCodec, ValueDecoder, ValueEncoder
from .types import Binding, TypeMismatchError


class CadenceJSON:
    """
    Codec facade chaining the JSON reader, the structural transcoder and
    the typed bindings.

    Reading goes text -> generic tree -> CadenceValue -> native value;
    writing runs the same chain in reverse. Instances hold no per-call
    state and can be shared between threads.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 infer_scalars: bool = True,
                 indent: int = 2,
                 ensure_ascii: bool = False):
        """
        Initialize the codec.

        Args:
            logger: Optional logger instance
            infer_scalars: Infer kinds for bare JSON scalars instead of rejecting them
            indent: Indentation used by the pretty printers
            ensure_ascii: Escape non-ASCII characters in printed output
        """
        self.logger = logger or logging.getLogger(__name__)
        self.indent = indent
        self.ensure_ascii = ensure_ascii

        self.parser = JSONParser(self.logger)
        self.type_codec = TypeCodec(self.logger)
        self.decoder = ValueDecoder(self.type_codec, self.logger, infer_scalars=infer_scalars)
        self.encoder = ValueEncoder(self.type_codec, self.logger)
        self.bridge = FallbackBridge(self.encoder, self.logger)
        self.error_handler = ErrorHandler(self.decoder, self.parser, self.logger)

    # Value level

    def loads(self, json_string: Union[str, bytes]) -> CadenceValue:
        """
        Parse Cadence-JSON text into a CadenceValue.

        Raises:
            JSONSyntaxError: If the text is not valid JSON
            CadenceError: If the tree is not a valid Cadence-JSON value
        """
        value = self.decoder.decode(self.parser.parse(json_string))
        self.logger.info(f"Decoded {len(json_string)} bytes of Cadence-JSON into {value.type_name}")
        return value

    def dumps(self, value: CadenceValue, pretty: bool = False) -> str:
        """Print a CadenceValue as Cadence-JSON text."""
        text = self.parser.serialize(self.encoder.encode(value),
                                     indent=self.indent if pretty else None,
                                     ensure_ascii=self.ensure_ascii)
        self.logger.info(f"Encoded {value.type_name} into {len(text)} characters of Cadence-JSON")
        return text

    # Typed level

    def to_value(self, obj: Any, binding: Any = None) -> CadenceValue:
        """
        Encode a native object into a CadenceValue.

        Args:
            obj: Object to encode
            binding: Binding or type hint; runtime types are inspected when omitted
        """
        return self._binding(binding, DYNAMIC).encode(obj)

    def from_value(self, value: CadenceValue, target: Any = CadenceValue) -> Any:
        """Decode a CadenceValue into target (a Binding or type hint)."""
        return self._binding(target, VALUE).decode(value)

    def from_str(self, json_string: str, target: Any = CadenceValue) -> Any:
        """Parse text and bind the result to target."""
        return self.from_value(self.loads(json_string), target)

    def from_slice(self, data: bytes, target: Any = CadenceValue) -> Any:
        """Parse UTF-8 bytes and bind the result to target."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeMismatchError("bytes", type(data).__name__)
        return self.from_value(self.loads(bytes(data)), target)

    def from_reader(self, stream: IO, target: Any = CadenceValue) -> Any:
        """Read a whole text or binary stream and bind the result to target."""
        return self.from_value(self.loads(stream.read()), target)

    def to_string(self, obj: Any, binding: Any = None) -> str:
        """Encode obj as compact Cadence-JSON text."""
        return self.dumps(self.to_value(obj, binding))

    def to_string_pretty(self, obj: Any, binding: Any = None) -> str:
        """Encode obj as indented Cadence-JSON text."""
        return self.dumps(self.to_value(obj, binding), pretty=True)

    def to_vec(self, obj: Any, binding: Any = None) -> bytes:
        """Encode obj as compact Cadence-JSON UTF-8 bytes."""
        return self.to_string(obj, binding).encode("utf-8")

    def to_vec_pretty(self, obj: Any, binding: Any = None) -> bytes:
        """Encode obj as indented Cadence-JSON UTF-8 bytes."""
        return self.to_string_pretty(obj, binding).encode("utf-8")

    @staticmethod
    def _binding(target: Any, default: Binding) -> Binding:
        if target is None:
            return default
        return binding_for(target)


_default_codec = CadenceJSON()


def loads(json_string: Union[str, bytes]) -> CadenceValue:
    """Parse Cadence-JSON text into a CadenceValue."""
    return _default_codec.loads(json_string)


def dumps(value: CadenceValue, pretty: bool = False) -> str:
    """Print a CadenceValue as Cadence-JSON text."""
    return _default_codec.dumps(value, pretty)


def from_str(json_string: str, target: Any = CadenceValue) -> Any:
    return _default_codec.from_str(json_string, target)


def from_slice(data: bytes, target: Any = CadenceValue) -> Any:
    return _default_codec.from_slice(data, target)


def from_reader(stream: IO, target: Any = CadenceValue) -> Any:
    return _default_codec.from_reader(stream, target)


def to_string(obj: Any, binding: Any = None) -> str:
    return _default_codec.to_string(obj, binding)


def to_string_pretty(obj: Any, binding: Any = None) -> str:
    return _default_codec.to_string_pretty(obj, binding)


def to_vec(obj: Any, binding: Any = None) -> bytes:
    return _default_codec.to_vec(obj, binding)


def to_vec_pretty(obj: Any, binding: Any = None) -> bytes:
    return _default_codec.to_vec_pretty(obj, binding)


# Helper constructors

def to_cadence_string(text: str) -> StringValue:
    return StringValue(text)


def to_cadence_bool(flag: bool) -> BoolValue:
    return BoolValue(flag)


def to_cadence_optional(obj: Any, binding: Any = None) -> OptionalValue:
    """Wrap obj in an Optional; None gives the nil Optional."""
    if obj is None:
        return OptionalValue(None)
    return OptionalValue(binding_for(binding or DYNAMIC).encode(obj))


def to_cadence_array(items: Iterable[Any], binding: Any = None) -> ArrayValue:
    """Encode each item with binding (runtime types when omitted) into an Array."""
    element = binding_for(binding or DYNAMIC)
    return ArrayValue(tuple(element.encode(item) for item in items))


def to_cadence_dictionary(entries: Union[Mapping[Any, Any], Iterable[Any]],
                          key_binding: Any = None, value_binding: Any = None) -> DictionaryValue:
    """
    Encode a mapping, or an iterable of (key, value) pairs, into a Dictionary.

    Entry order follows the input order.
    """
    key = binding_for(key_binding or DYNAMIC)
    value = binding_for(value_binding or DYNAMIC)
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    return DictionaryValue(tuple(
        DictionaryEntry(key.encode(entry_key), value.encode(entry_value))
        for entry_key, entry_value in pairs
    ))
