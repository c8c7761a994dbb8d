"""
Tests for the Value Normalizer

These tests verify key/value validation and wire normalization:
- validate_key(): reject non-strings, empty keys and unencodable keys
- validate_value(): reject None, "" and non-finite floats
- normalize_value(): canonical string form for numbers and structures
- coerce_number(): numeric form of stored values

Run with: python -m pytest tests/test_normalizer.py -v
"""

import pytest

from hexodb.errors import HexoKeyError, HexoValueError
from hexodb.protocol.normalizer import (
    coerce_number,
    format_number,
    normalize_value,
    validate_key,
    validate_value,
)


class TestValidateKey:
    """Test validate_key()."""

    def test_valid_key_returned_unchanged(self):
        """Test that a valid key passes through."""
        assert validate_key("user:1") == "user:1"

    def test_unicode_key_allowed(self):
        """Test that non-ASCII keys are valid (they are percent-encoded)."""
        assert validate_key("clé/ü") == "clé/ü"

    @pytest.mark.parametrize("key", ["", None, 42, ["a"]])
    def test_invalid_key_types(self, key):
        """Test that empty and non-string keys are rejected."""
        with pytest.raises(HexoKeyError):
            validate_key(key)

    @pytest.mark.parametrize("key", ["a b", "a\tb", "a&b", "a=b", "a?b", "a#b"])
    def test_illegal_characters(self, key):
        """Test that whitespace and query delimiters are rejected."""
        with pytest.raises(HexoKeyError):
            validate_key(key)

    def test_key_too_long(self):
        """Test the maximum key length."""
        validate_key("k" * 256)
        with pytest.raises(HexoKeyError):
            validate_key("k" * 257)

    def test_key_error_is_builtin_key_error(self):
        """Test that callers can catch the builtin KeyError."""
        with pytest.raises(KeyError):
            validate_key("")

    def test_key_error_message_not_quoted(self):
        """Test that the message reads normally (KeyError would repr it)."""
        with pytest.raises(HexoKeyError) as exc_info:
            validate_key("")
        assert str(exc_info.value) == "Invalid key provided!"


class TestValidateValue:
    """Test validate_value()."""

    @pytest.mark.parametrize("value", ["bar", 0, 0.0, False, [], {}, {"a": 1}])
    def test_valid_values(self, value):
        """Test that falsy-but-present values are accepted."""
        assert validate_value(value) == value

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_values(self, value):
        """Test that None and empty string are rejected."""
        with pytest.raises(HexoValueError):
            validate_value(value)

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_floats(self, value):
        """Test that inf and nan cannot be stored."""
        with pytest.raises(ValueError):
            validate_value(value)


class TestNormalizeValue:
    """Test normalize_value() and format_number()."""

    def test_string_passes_through(self):
        assert normalize_value("hello") == "hello"

    def test_integers_are_lossless(self):
        """Test that large integers keep every digit."""
        assert normalize_value(42) == "42"
        assert normalize_value(-7) == "-7"
        assert normalize_value(2 ** 70) == "1180591620717411303424"

    def test_floats_use_positional_notation(self):
        """Test that floats never use exponential notation."""
        assert format_number(0.1) == "0.1"
        assert format_number(1e-05) == "0.00001"
        assert format_number(1e16) == "10000000000000000.0"
        assert format_number(2.5) == "2.5"
        assert format_number(3.0) == "3.0"

    def test_bool_is_json_not_number(self):
        """Test that booleans are sent as JSON literals."""
        assert normalize_value(True) == "true"
        assert normalize_value(False) == "false"

    def test_structures_are_compact_json(self):
        """Test that dicts and lists are serialized without spaces."""
        assert normalize_value({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'
        assert normalize_value([1, "x"]) == '[1,"x"]'

    def test_unserializable_value(self):
        """Test that a non-JSON value is a value error."""
        with pytest.raises(HexoValueError):
            normalize_value(object())


class TestCoerceNumber:
    """Test coerce_number()."""

    def test_numbers(self):
        assert coerce_number(5) == 5
        assert coerce_number(2.5) == 2.5

    def test_canonical_numeric_strings(self):
        """Test that strings written by this client read back as numbers."""
        assert coerce_number("5") == 5
        assert isinstance(coerce_number("5"), int)
        assert coerce_number("-0.25") == -0.25
        assert coerce_number(normalize_value(1e-05)) == 1e-05

    @pytest.mark.parametrize("value", [True, "abc", "1e5", "", None, {"a": 1}, [1]])
    def test_non_numeric(self, value):
        """Test that other values are not numeric."""
        assert coerce_number(value) is None
