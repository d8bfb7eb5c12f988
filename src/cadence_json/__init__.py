"""
Cadence-JSON - Bidirectional codec between JSON and the Cadence value model.

Decodes Cadence-JSON text into immutable values and native Python objects,
and encodes them back.
"""

__version__ = "1.0.0"

from .bindings import (
    AssocListBinding,
    MapBinding,
    RecordBinding,
    RecordField,
    binding_for,
    cadence_field,
    cadence_record,
)
from .cadence_json import (
    CadenceJSON,
    dumps,
    from_reader,
    from_slice,
    from_str,
    loads,
    to_cadence_array,
    to_cadence_bool,
    to_cadence_dictionary,
    to_cadence_optional,
    to_cadence_string,
    to_string,
    to_string_pretty,
    to_vec,
    to_vec_pretty,
)
from .fallback import DataclassReceiver, FallbackBridge
from .models import CadenceValue
from .types import (
    ArityMismatchError,
    CadenceError,
    DecodeShapeError,
    Decodable,
    Encodable,
    FieldMissingError,
    JSONSyntaxError,
    Kind,
    NumericParseError,
    StructuralReceiver,
    TypeMismatchError,
    UnknownKindError,
    UnsupportedTypeError,
)

__all__ = [
    "CadenceJSON",
    "loads", "dumps",
    "from_str", "from_slice", "from_reader",
    "to_string", "to_string_pretty", "to_vec", "to_vec_pretty",
    "to_cadence_string", "to_cadence_bool", "to_cadence_optional",
    "to_cadence_array", "to_cadence_dictionary",
    "CadenceValue", "Kind",
    "binding_for", "cadence_record", "cadence_field", "RecordBinding", "RecordField",
    "MapBinding", "AssocListBinding",
    "FallbackBridge", "DataclassReceiver",
    "Encodable", "Decodable", "StructuralReceiver",
    "CadenceError", "UnknownKindError", "DecodeShapeError", "TypeMismatchError",
    "FieldMissingError", "ArityMismatchError", "NumericParseError",
    "UnsupportedTypeError", "JSONSyntaxError",
]
