"""Tests for record bindings."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from cadence_json import CadenceJSON, Decodable, Encodable
from cadence_json.bindings import (
    INT,
    STRING,
    UINT64,
    RecordBinding,
    RecordField,
    cadence_field,
    cadence_record,
)
from cadence_json.models import (
    CompositeField,
    CompositeValue,
    IntegerValue,
    StringValue,
)
from cadence_json.types import FieldMissingError, Kind, NumericParseError, TypeMismatchError


@cadence_record(id="A.01.Market.Listing", kind=Kind.EVENT, renames={"listing_id": "listingID"})
@dataclass
class Listing:
    listing_id: int = cadence_field(binding=UINT64)
    tags: List[str] = field(default_factory=list)
    seller: Optional[str] = None


@cadence_record
@dataclass
class Inventory:
    owner: str = cadence_field(rename="ownerName")
    counts: Dict[str, int] = field(default_factory=dict)
    latest: Optional["Listing"] = None


class TestRecordBinding:
    """Tests for generated record bindings."""

    def test_person_wire_format(self, codec, person_class, person_json):
        """Test the exact wire text of a two-field record."""
        person = person_class(name="Alice", age=30)
        assert codec.to_string(person) == person_json
        assert codec.from_str(person_json, person_class) == person

    def test_capabilities_registered(self, person_class):
        """Test that decorated classes are Encodable and Decodable."""
        assert issubclass(person_class, Encodable)
        assert issubclass(person_class, Decodable)
        person = person_class("Bob", 41)
        assert person_class.from_cadence_value(person.to_cadence_value()) == person

    def test_id_defaults_to_class_name(self, person_class):
        """Test the default composite id and kind."""
        value = person_class("Bob", 41).to_cadence_value()
        assert value.id == "Person"
        assert value.kind is Kind.STRUCT

    def test_rename_on_wire(self):
        """Test that renamed members use the mapped name on the wire."""
        value = Listing(listing_id=7, tags=["a"]).to_cadence_value()
        assert value.kind is Kind.EVENT
        assert value.id == "A.01.Market.Listing"
        assert value.field_names() == ("listingID", "tags", "seller")
        assert Listing.from_cadence_value(value) == Listing(listing_id=7, tags=["a"])

    def test_cadence_field_rename(self):
        """Test per-field renames and nested records."""
        inventory = Inventory(owner="Alice", counts={"apple": 5}, latest=Listing(1))
        value = inventory.to_cadence_value()
        assert value.field_names() == ("ownerName", "counts", "latest")
        assert Inventory.from_cadence_value(value) == inventory

    def test_decode_ignores_field_order_and_extras(self, person_class):
        """Test lookup by name rather than position."""
        value = CompositeValue(Kind.STRUCT, "Person", [
            CompositeField("extra", StringValue("ignored")),
            CompositeField("age", IntegerValue(Kind.UINT8, "30")),
            CompositeField("name", StringValue("Alice")),
        ])
        assert person_class.from_cadence_value(value) == person_class("Alice", 30)

    def test_missing_field(self, person_class):
        """Test that a missing member fails with FieldMissing."""
        value = CompositeValue(Kind.STRUCT, "Person", [CompositeField("name", StringValue("Alice"))])
        with pytest.raises(FieldMissingError, match="Field age not found"):
            person_class.from_cadence_value(value)

    def test_renamed_field_missing_reports_wire_name(self):
        """Test that the missing name is the wire name."""
        value = CompositeValue(Kind.EVENT, "A.01.Market.Listing", [
            CompositeField("listing_id", IntegerValue(Kind.UINT64, "1")),
        ])
        with pytest.raises(FieldMissingError, match="listingID"):
            Listing.from_cadence_value(value)

    def test_malformed_member_aborts(self, person_class):
        """Test that a bad member aborts the whole record."""
        value = CompositeValue(Kind.STRUCT, "Person", [
            CompositeField("name", StringValue("Alice")),
            CompositeField("age", IntegerValue(Kind.UINT8, "300")),
        ])
        with pytest.raises(NumericParseError):
            person_class.from_cadence_value(value)

    def test_wrong_composite_kind(self, person_class):
        """Test that a Resource does not decode into a Struct record."""
        value = CompositeValue(Kind.RESOURCE, "Person", [])
        with pytest.raises(TypeMismatchError):
            person_class.from_cadence_value(value)

    def test_not_a_dataclass(self):
        """Test that the decorator requires a dataclass."""
        with pytest.raises(TypeError, match="must be a dataclass"):
            @cadence_record
            class Plain:
                pass

    def test_unknown_rename(self):
        """Test that renames must name declared fields."""
        with pytest.raises(ValueError, match="unknown fields"):
            @cadence_record(renames={"nope": "x"})
            @dataclass
            class Point:
                x: int

    def test_pretty_output(self, person_class):
        """Test pretty printing of a record."""
        text = CadenceJSON(indent=4).to_string_pretty(person_class("Alice", 30))
        assert text.startswith('{\n    "type": "Struct"')


class TestExplicitRecordBinding:
    """Tests for RecordBinding assembled by hand."""

    def setup_method(self):
        """Set up test fixtures."""

        class Point:
            def __init__(self, x, y):
                self.x = x
                self.y = y

        self.point_class = Point
        self.binding = RecordBinding("A.01.Geo.Point", [
            RecordField("x", INT),
            RecordField("y", INT, wire_name="yCoord"),
        ], Point)

    def test_encode(self):
        """Test encoding a non-dataclass object."""
        value = self.binding.encode(self.point_class(1, -2))
        assert value == CompositeValue(Kind.STRUCT, "A.01.Geo.Point", [
            CompositeField("x", IntegerValue(Kind.INT, "1")),
            CompositeField("yCoord", IntegerValue(Kind.INT, "-2")),
        ])

    def test_decode(self):
        """Test decoding through the factory."""
        point = self.binding.decode(self.binding.encode(self.point_class(3, 4)))
        assert (point.x, point.y) == (3, 4)

    def test_field_name(self):
        """Test the wire name fallback."""
        assert RecordField("x", STRING).field_name == "x"
        assert RecordField("x", STRING, "X").field_name == "X"

    def test_rejects_non_composite_kind(self):
        """Test that the record kind must be a composite kind."""
        with pytest.raises(ValueError):
            RecordBinding("X", [], dict, kind=Kind.ARRAY)
