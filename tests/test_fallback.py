"""Tests for the fallback bridge."""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from cadence_json import CadenceJSON, DataclassReceiver, FallbackBridge
from cadence_json.models import (
    ArrayValue,
    BoolValue,
    CompositeField,
    CompositeValue,
    DictionaryValue,
    FixedPointValue,
    IntegerValue,
    OptionalValue,
    StringValue,
)
from cadence_json.transcoder import ValueDecoder
from cadence_json.types import FieldMissingError, Kind, TypeMismatchError, UnsupportedTypeError


@dataclass
class Seller(DataclassReceiver):
    address: str
    verified: bool = False


@dataclass
class Listed(DataclassReceiver):
    listingID: int
    price: float
    tags: List[str] = field(default_factory=list)
    seller: Optional[str] = None


@dataclass
class Shop(DataclassReceiver):
    name: str
    owner: Seller


@dataclass
class NotAReceiver:
    name: str


class TestNormalizationPasses:
    """Tests for widen_numbers and unwrap_primitives."""

    def setup_method(self):
        """Set up test fixtures."""
        self.bridge = FallbackBridge()

    def test_widen_numbers(self):
        """Test that numeric payload strings become numbers."""
        tree = {"type": "Array", "value": [
            {"type": "UInt64", "value": "18446744073709551615"},
            {"type": "Fix64", "value": "-1.50000000"},
            {"type": "String", "value": "7"},
        ]}
        assert self.bridge.widen_numbers(tree) == {"type": "Array", "value": [
            {"type": "UInt64", "value": 18446744073709551615},
            {"type": "Fix64", "value": -1.5},
            {"type": "String", "value": "7"},
        ]}

    def test_widen_leaves_malformed(self):
        """Test that unparsable payloads are left unchanged."""
        tree = {"type": "Int", "value": "12abc"}
        assert self.bridge.widen_numbers(tree) == tree

    def test_widen_does_not_mutate(self):
        """Test that the input tree is left untouched."""
        tree = {"type": "Int", "value": "1"}
        self.bridge.widen_numbers(tree)
        assert tree == {"type": "Int", "value": "1"}

    def test_unwrap_primitives(self):
        """Test that envelopes with primitive payloads collapse bottom-up."""
        tree = {"type": "Optional", "value": {"type": "Bool", "value": True}}
        assert self.bridge.unwrap_primitives(tree) is True
        assert self.bridge.unwrap_primitives({"type": "Optional", "value": None}) is None

    def test_unwrap_keeps_containers(self):
        """Test that container envelopes are kept with their items unwrapped."""
        tree = {"type": "Array", "value": [{"type": "String", "value": "a"}]}
        assert self.bridge.unwrap_primitives(tree) == {"type": "Array", "value": ["a"]}

    def test_normalize(self):
        """Test both passes over an encoded value."""
        assert self.bridge.normalize(IntegerValue(Kind.UINT8, "30")) == 30


class TestPlainConversion:
    """Tests for to_plain and to_mapping."""

    def setup_method(self):
        """Set up test fixtures."""
        self.bridge = FallbackBridge()

    def test_to_plain_event(self, event_tree):
        """Test flattening a composite with nested values."""
        value = ValueDecoder().decode(event_tree)
        assert self.bridge.to_plain(value) == {
            "listingID": 18446744073709551615,
            "price": 12.5,
            "seller": "0xf8d6e0586b0a20c7",
            "tags": ["art", "rare"],
            "storage": {"type": "Path", "value": {"domain": "storage", "identifier": "market"}},
            "nothing": None,
        }

    def test_to_mapping_string_keys(self, codec, fruit_dictionary_json):
        """Test that String keys name the members."""
        value = codec.loads(fruit_dictionary_json)
        assert self.bridge.to_mapping(value) == {"banana": 10, "cherry": 15, "apple": 5}

    def test_to_mapping_primitive_keys(self):
        """Test that primitive non-String keys use their payload."""
        value = DictionaryValue.from_pairs([
            (IntegerValue(Kind.UINT8, "2"), StringValue("two")),
            (BoolValue(True), StringValue("yes")),
        ])
        assert self.bridge.to_mapping(value) == {2: "two", True: "yes"}

    def test_to_mapping_structured_key(self, caplog):
        """Test that structured keys fall back to their JSON text."""
        key = ArrayValue((IntegerValue(Kind.INT, "1"),))
        value = DictionaryValue.from_pairs([(key, StringValue("v"))])
        with caplog.at_level(logging.WARNING):
            mapping = self.bridge.to_mapping(value)
        assert mapping == {'{"type":"Array","value":[{"type":"Int","value":"1"}]}': "v"}
        assert "no primitive form" in caplog.text

    def test_structured_key_named_alike_everywhere(self, caplog):
        """Test that to_plain names structured keys exactly as to_mapping does."""
        key = ArrayValue((IntegerValue(Kind.INT, "1"),))
        value = DictionaryValue.from_pairs([(key, StringValue("a"))])
        assert self.bridge.to_plain(value) == self.bridge.to_mapping(value)

        with caplog.at_level(logging.WARNING):
            nested = self.bridge.to_plain(ArrayValue((value,)))
        assert nested == [{'{"type":"Array","value":[{"type":"Int","value":"1"}]}': "a"}]
        assert "no primitive form" in caplog.text

    def test_to_mapping_duplicates_last_wins(self, caplog):
        """Test that a repeated name keeps the last value and warns."""
        value = DictionaryValue.from_pairs([
            (StringValue("k"), IntegerValue(Kind.INT, "1")),
            (StringValue("k"), IntegerValue(Kind.INT, "2")),
        ])
        with caplog.at_level(logging.WARNING):
            assert self.bridge.to_mapping(value) == {"k": 2}
        assert "more than once" in caplog.text

    def test_to_mapping_requires_dictionary(self):
        """Test that only dictionaries map."""
        with pytest.raises(TypeMismatchError):
            self.bridge.to_mapping(ArrayValue(()))


class TestMaterialize:
    """Tests for materialize and DataclassReceiver."""

    def setup_method(self):
        """Set up test fixtures."""
        self.bridge = FallbackBridge()
        self.decoder = ValueDecoder()

    def test_materialize_event(self, event_tree):
        """Test building a receiver from a composite."""
        listed = self.bridge.materialize(self.decoder.decode(event_tree), Listed)
        assert listed == Listed(
            listingID=18446744073709551615,
            price=12.5,
            tags=["art", "rare"],
            seller="0xf8d6e0586b0a20c7",
        )

    def test_materialize_nested_receiver(self):
        """Test that nested receiver fields are built from member dicts."""
        value = CompositeValue(Kind.STRUCT, "Shop", [
            CompositeField("name", StringValue("Corner")),
            CompositeField("owner", CompositeValue(Kind.STRUCT, "Seller", [
                CompositeField("address", StringValue("0x01")),
            ])),
        ])
        assert self.bridge.materialize(value, Shop) == Shop("Corner", Seller("0x01"))

    def test_materialize_missing_required_member(self):
        """Test that required members must be present."""
        value = CompositeValue(Kind.STRUCT, "Seller", [CompositeField("verified", BoolValue(True))])
        with pytest.raises(FieldMissingError, match="address"):
            self.bridge.materialize(value, Seller)

    def test_materialize_rejects_non_receiver(self):
        """Test that targets must declare the receiver capability."""
        value = CompositeValue(Kind.STRUCT, "NotAReceiver", [CompositeField("name", StringValue("x"))])
        with pytest.raises(UnsupportedTypeError, match="StructuralReceiver"):
            self.bridge.materialize(value, NotAReceiver)

    def test_materialize_non_mapping_structure(self):
        """Test that dataclass receivers need a members object."""
        with pytest.raises(TypeMismatchError):
            self.bridge.materialize(OptionalValue(StringValue("x")), Seller)

    def test_receiver_through_codec(self, event_tree):
        """Test that the codec routes receiver targets through the bridge."""
        codec = CadenceJSON()
        listed = codec.from_str(json.dumps(event_tree), Listed)
        assert listed.price == 12.5
        assert isinstance(listed.listingID, int)

    def test_fixed_point_widening_is_float(self):
        """Test that fixed-point members arrive as floats."""
        value = CompositeValue(Kind.STRUCT, "Listed", [
            CompositeField("listingID", IntegerValue(Kind.UINT64, "1")),
            CompositeField("price", FixedPointValue(Kind.UFIX64, "0.10000000")),
        ])
        listed = self.bridge.materialize(value, Listed)
        assert listed.price == 0.1
        assert listed.tags == []
