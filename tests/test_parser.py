"""Tests for JSON parser."""

from decimal import Decimal

import pytest

from cadence_json.parser import JSONParser
from cadence_json.types import ErrorType, JSONSyntaxError


class TestJSONParser:
    """Tests for JSONParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = JSONParser()

    def test_parse_envelope(self):
        """Test parsing a typed envelope."""
        data = self.parser.parse('{"type": "Int", "value": "1"}')
        assert data == {"type": "Int", "value": "1"}

    def test_parse_fraction_as_decimal(self):
        """Test that non-integral numbers are read as Decimal."""
        data = self.parser.parse("[1, 2.50]")
        assert data == [1, Decimal("2.50")]
        assert isinstance(data[1], Decimal)
        assert str(data[1]) == "2.50"

    def test_parse_bytes(self):
        """Test parsing UTF-8 bytes."""
        assert self.parser.parse(b'"\xc3\xa9"') == "é"

    def test_parse_invalid_utf8(self):
        """Test that undecodable bytes are a syntax error."""
        with pytest.raises(JSONSyntaxError, match="UTF-8") as exc_info:
            self.parser.parse(b'"\xff"')
        assert exc_info.value.error_type == ErrorType.SYNTAX

    def test_parse_invalid_json(self):
        """Test that malformed text reports its location."""
        with pytest.raises(JSONSyntaxError) as exc_info:
            self.parser.parse('{"type": }')
        assert exc_info.value.location == "line 1, column 10"

    @pytest.mark.parametrize("text", ["NaN", "[Infinity]", "-Infinity"])
    def test_parse_rejects_non_finite(self, text):
        """Test that non-standard constants are rejected."""
        with pytest.raises(JSONSyntaxError):
            self.parser.parse(text)

    def test_serialize_compact(self):
        """Test that compact output has no whitespace."""
        assert self.parser.serialize({"type": "Int", "value": "1"}) == '{"type":"Int","value":"1"}'

    def test_serialize_pretty(self):
        """Test indented output."""
        assert self.parser.serialize([1], indent=2) == "[\n  1\n]"

    def test_parse_too_deep(self):
        """Test that nesting beyond the reader's limit is a syntax error."""
        with pytest.raises(JSONSyntaxError, match="nested too deeply") as exc_info:
            self.parser.parse("[" * 100000 + "]" * 100000)
        assert exc_info.value.error_type == ErrorType.SYNTAX
