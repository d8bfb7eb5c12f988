"""Integration tests for the CadenceJSON facade and module-level functions."""

import io
import json
from typing import Dict, List, Tuple

import pytest

import cadence_json
from cadence_json import (
    CadenceJSON,
    CadenceValue,
    to_cadence_array,
    to_cadence_bool,
    to_cadence_dictionary,
    to_cadence_optional,
    to_cadence_string,
)
from cadence_json.bindings import AssocListBinding, INT, STRING, UINT8
from cadence_json.models import (
    ArrayValue,
    BoolValue,
    DictionaryEntry,
    DictionaryValue,
    IntegerValue,
    OptionalValue,
    StringValue,
)
from cadence_json.types import (
    ArityMismatchError,
    DecodeShapeError,
    JSONSyntaxError,
    Kind,
    NumericParseError,
    TypeMismatchError,
    UnknownKindError,
)


class TestCadenceJSON:
    """Tests for CadenceJSON class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = CadenceJSON()

    def test_loads_dumps(self):
        """Test value-level text round trip."""
        text = '{"type":"Array","value":[{"type":"Int8","value":"-1"},{"type":"Void"}]}'
        value = self.codec.loads(text)
        assert isinstance(value, ArrayValue)
        assert self.codec.dumps(value) == text

    def test_loads_bytes(self):
        """Test that UTF-8 bytes are accepted."""
        value = self.codec.loads('{"type":"String","value":"héllo"}'.encode("utf-8"))
        assert value == StringValue("héllo")

    def test_dumps_keeps_unicode(self):
        """Test that non-ASCII text is printed as is by default."""
        assert self.codec.dumps(StringValue("é")) == '{"type":"String","value":"é"}'
        assert CadenceJSON(ensure_ascii=True).dumps(StringValue("é")) == '{"type":"String","value":"\\u00e9"}'

    def test_dumps_pretty(self):
        """Test indented output."""
        text = self.codec.dumps(BoolValue(True), pretty=True)
        assert text == '{\n  "type": "Bool",\n  "value": true\n}'

    def test_syntax_error(self):
        """Test that invalid JSON fails with JSONSyntaxError."""
        with pytest.raises(JSONSyntaxError) as exc_info:
            self.codec.loads('{"type": "Int",')
        assert exc_info.value.location.startswith("line 1")

    def test_too_deep_for_reader(self):
        """Test that text nested past the reader's limit is a syntax error."""
        with pytest.raises(JSONSyntaxError):
            self.codec.loads('{"type":"Optional","value":' * 3000 + "null" + "}" * 3000)

    def test_too_deep_for_decoder(self):
        """Test that a tree too deep to decode fails with a shape error."""
        with pytest.raises(DecodeShapeError, match="recursion limit"):
            self.codec.loads('{"type":"Optional","value":' * 500 + "null" + "}" * 500)

    def test_nan_rejected(self):
        """Test that NaN literals are not JSON."""
        with pytest.raises(JSONSyntaxError):
            self.codec.loads("NaN")

    def test_unknown_kind(self):
        """Test that Frobnicate is rejected end to end."""
        with pytest.raises(UnknownKindError, match="Frobnicate"):
            self.codec.loads('{"type":"Frobnicate","value":null}')

    def test_infer_scalars_disabled(self):
        """Test the infer_scalars switch."""
        with pytest.raises(DecodeShapeError):
            CadenceJSON(infer_scalars=False).loads("[1, 2]")

    def test_inferred_fraction_is_exact(self):
        """Test that non-integral numbers keep their literal digits."""
        assert self.codec.loads("0.30000000000000004") == \
            cadence_json.models.FixedPointValue(Kind.FIX64, "0.30000000000000004")
        assert self.codec.loads("1.10") == cadence_json.models.FixedPointValue(Kind.FIX64, "1.10")


class TestTypedBoundary:
    """Tests for from_str/from_slice/from_reader and to_string/to_vec."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = CadenceJSON()

    def test_primitive_round_trips(self):
        """Test decode(encode(x)) == x for primitive bindings."""
        for obj, hint in (("Alice", str), (True, bool), (-42, int), (2.25, float), (200, UINT8)):
            assert self.codec.from_str(self.codec.to_string(obj, hint), hint) == obj

    def test_default_target_is_value(self):
        """Test that omitting the target yields the CadenceValue."""
        assert self.codec.from_str('{"type":"Bool","value":true}') == BoolValue(True)

    def test_from_slice(self, person_class, person_json):
        """Test decoding from bytes."""
        assert self.codec.from_slice(person_json.encode("utf-8"), person_class) == person_class("Alice", 30)
        with pytest.raises(TypeMismatchError):
            self.codec.from_slice(person_json, person_class)

    def test_from_reader(self, person_class, person_json):
        """Test decoding from text and binary streams."""
        assert self.codec.from_reader(io.StringIO(person_json), person_class).name == "Alice"
        assert self.codec.from_reader(io.BytesIO(person_json.encode()), person_class).age == 30

    def test_to_vec(self, person_class, person_json):
        """Test encoding to bytes."""
        assert self.codec.to_vec(person_class("Alice", 30)) == person_json.encode("utf-8")
        assert self.codec.to_vec_pretty(person_class("Alice", 30)).startswith(b'{\n  "type": "Struct"')

    def test_fruit_dictionary(self, fruit_dictionary_json):
        """Test that the fruit dictionary decodes and re-encodes to an equal map."""
        fruits = self.codec.from_str(fruit_dictionary_json, Dict[str, int])
        assert fruits == {"banana": 10, "cherry": 15, "apple": 5}
        again = self.codec.from_str(self.codec.to_string(fruits, Dict[str, int]), Dict[str, int])
        assert again == fruits

    def test_fruit_dictionary_reordered(self, fruit_dictionary_json):
        """Test that wire order does not change the decoded map."""
        tree = json.loads(fruit_dictionary_json)
        tree["value"].reverse()
        assert self.codec.from_str(json.dumps(tree), Dict[str, int]) == \
            {"banana": 10, "cherry": 15, "apple": 5}

    def test_duplicate_keys_into_map(self):
        """Test that the last duplicate wins in a native map."""
        text = json.dumps({"type": "Dictionary", "value": [
            {"key": {"type": "String", "value": "a"}, "value": {"type": "Int", "value": "1"}},
            {"key": {"type": "String", "value": "a"}, "value": {"type": "Int", "value": "2"}},
        ]})
        assert self.codec.from_str(text, Dict[str, int]) == {"a": 2}
        assert self.codec.from_str(text, AssocListBinding(STRING, INT)) == [("a", 1), ("a", 2)]

    def test_tuple_arity(self):
        """Test that a 3-element array does not decode into a pair."""
        text = self.codec.to_string([1, 2, 3], List[int])
        with pytest.raises(ArityMismatchError):
            self.codec.from_str(text, Tuple[int, int])

    def test_uint8_overflow(self):
        """Test that UInt8 300 fails for an 8-bit target."""
        with pytest.raises(NumericParseError):
            self.codec.from_str('{"type":"UInt8","value":"300"}', UINT8)

    def test_implicit_dictionary_into_map(self):
        """Test that a plain object decodes into a str-keyed map."""
        assert self.codec.from_str('{"a": 1, "b": 2}', Dict[str, int]) == {"a": 1, "b": 2}

    def test_dynamic_encoding(self):
        """Test encoding without a binding."""
        assert json.loads(self.codec.to_string({"n": [1, None]})) == {"type": "Dictionary", "value": [
            {"key": {"type": "String", "value": "n"},
             "value": {"type": "Array", "value": [
                 {"type": "Int", "value": "1"},
                 {"type": "Optional", "value": None},
             ]}},
        ]}


class TestModuleFunctions:
    """Tests for module-level convenience functions and helpers."""

    def test_functions(self, person_class, person_json):
        """Test the default-codec functions."""
        person = person_class("Alice", 30)
        assert cadence_json.to_string(person) == person_json
        assert cadence_json.from_str(person_json, person_class) == person
        assert cadence_json.from_slice(cadence_json.to_vec(person), person_class) == person
        assert cadence_json.from_reader(io.StringIO(cadence_json.to_string_pretty(person)), person_class) == person
        assert cadence_json.to_vec_pretty(person).decode() == cadence_json.to_string_pretty(person)
        assert isinstance(cadence_json.loads(person_json), CadenceValue)
        assert cadence_json.dumps(cadence_json.loads(person_json)) == person_json

    def test_helper_constructors(self):
        """Test the to_cadence_* helpers."""
        assert to_cadence_string("x") == StringValue("x")
        assert to_cadence_bool(False) == BoolValue(False)
        assert to_cadence_optional(None) == OptionalValue(None)
        assert to_cadence_optional(5, UINT8) == OptionalValue(IntegerValue(Kind.UINT8, "5"))
        assert to_cadence_array(["a", "b"]) == ArrayValue((StringValue("a"), StringValue("b")))

    def test_dictionary_helper(self):
        """Test dictionaries from mappings and pair lists."""
        expected = DictionaryValue((
            DictionaryEntry(StringValue("k"), IntegerValue(Kind.UINT8, "1")),
            DictionaryEntry(StringValue("k"), IntegerValue(Kind.UINT8, "2")),
        ))
        assert to_cadence_dictionary([("k", 1), ("k", 2)], value_binding=UINT8) == expected
        assert len(to_cadence_dictionary({"a": 1, "b": 2})) == 2
