"""Pytest configuration and fixtures."""

import json
import tempfile
from dataclasses import dataclass
from pathlib import Path

import pytest

from cadence_json import CadenceJSON, cadence_field, cadence_record
from cadence_json.bindings import UINT8


@cadence_record
@dataclass
class Person:
    name: str
    age: int = cadence_field(binding=UINT8)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def codec():
    """Codec with default settings."""
    return CadenceJSON()


@pytest.fixture
def person_class():
    """Record type Person(name: String, age: UInt8)."""
    return Person


@pytest.fixture
def person_json():
    """Wire form of Person(name="Alice", age=30)."""
    return ('{"type":"Struct","value":{"id":"Person","fields":['
            '{"name":"name","value":{"type":"String","value":"Alice"}},'
            '{"name":"age","value":{"type":"UInt8","value":"30"}}]}}')


@pytest.fixture
def fruit_dictionary_json():
    """Dictionary of fruit names to Int counts."""
    return json.dumps({
        "type": "Dictionary",
        "value": [
            {"key": {"type": "String", "value": "banana"}, "value": {"type": "Int", "value": "10"}},
            {"key": {"type": "String", "value": "cherry"}, "value": {"type": "Int", "value": "15"}},
            {"key": {"type": "String", "value": "apple"}, "value": {"type": "Int", "value": "5"}},
        ],
    })


@pytest.fixture
def event_tree():
    """Generic tree of an event carrying nested containers and descriptors."""
    return {
        "type": "Event",
        "value": {
            "id": "A.0000000000000001.Market.Listed",
            "fields": [
                {"name": "listingID", "value": {"type": "UInt64", "value": "18446744073709551615"}},
                {"name": "price", "value": {"type": "UFix64", "value": "12.50000000"}},
                {"name": "seller", "value": {"type": "Optional", "value": {"type": "Address", "value": "0xf8d6e0586b0a20c7"}}},
                {"name": "tags", "value": {"type": "Array", "value": [
                    {"type": "String", "value": "art"},
                    {"type": "String", "value": "rare"},
                ]}},
                {"name": "storage", "value": {"type": "Path", "value": {"domain": "storage", "identifier": "market"}}},
                {"name": "nothing", "value": {"type": "Optional", "value": None}},
            ],
        },
    }
