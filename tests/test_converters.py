"""Tests for scrub.converters module."""

import pytest

from scrub import ScrubError, ScrubOptions, TypeClassifier, TypeCoercer
from scrub.converters import parse_float, parse_int


@pytest.fixture
def coercer():
    return TypeCoercer(TypeClassifier())


class TestParsing:
    """Test leading-number parsing."""

    def test_parse_float(self):
        assert parse_float("1.5") == 1.5
        assert parse_float("  -2.5e2 apples") == -250.0
        assert parse_float(".5") == 0.5
        assert parse_float("abc") is None

    def test_parse_int(self):
        assert parse_int("42") == 42
        assert parse_int(" -7px") == -7
        assert parse_int("1.9") == 1
        assert parse_int("x1") is None


class TestNumberCoercion:
    """Test coercion to numbers."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("100", 100),
            ("-1", -1),
            ("0.52", 0.52),
            ("1.7", 1.7),
            ("0", 0),
            ("1e3", 1000.0),
            ("12px", 12),
        ],
    )
    def test_numbers(self, coercer, text, expected):
        result = coercer.coerce(text, "number", ScrubOptions())
        assert result == expected
        assert not isinstance(result, str)

    def test_integers_stay_integers(self, coercer):
        assert isinstance(coercer.coerce("100", "number", ScrubOptions()), int)
        assert isinstance(coercer.coerce("0", "number", ScrubOptions()), int)

    @pytest.mark.parametrize(
        "text", ["abc", "0abc", "00", "0.0", "-0", " 0", ".5", "Infinity", ""]
    )
    def test_left_as_string(self, coercer, text):
        assert coercer.coerce(text, "number", ScrubOptions()) == text

    def test_do_not_coerce(self, coercer):
        options = ScrubOptions(do_not_coerce=True)
        assert coercer.coerce("100", "number", options) == "100"

    def test_non_strings_untouched(self, coercer):
        assert coercer.coerce(5, "boolean", ScrubOptions()) == 5

    def test_other_types_untouched(self, coercer):
        assert coercer.coerce("100", "string", ScrubOptions()) == "100"
        assert coercer.coerce("100", "number|string", ScrubOptions()) == "100"


class TestBooleanCoercion:
    """Test coercion to booleans."""

    @pytest.mark.parametrize(
        "text,expected",
        [("true", True), ("Yes", True), ("1", True), ("foo", False), ("0", False), ("-1", False)],
    )
    def test_booleans(self, coercer, text, expected):
        assert coercer.coerce(text, "boolean", ScrubOptions()) is expected


class TestClone:
    """Test default cloning."""

    def test_scalars_returned_as_is(self, coercer):
        assert coercer.clone("x") == "x"
        assert coercer.clone(None) is None

    def test_deep_copy(self, coercer):
        original = {"a": [1, {"b": 2}]}
        copy = coercer.clone(original)
        assert copy == original
        assert copy is not original
        assert copy["a"][1] is not original["a"][1]

    def test_circular(self, coercer):
        circular: list = []
        circular.append(circular)
        result = coercer.clone(circular)
        assert isinstance(result, ScrubError)
        assert result.code == "badSpec"

    def test_not_serializable(self, coercer):
        result = coercer.clone([object()])
        assert isinstance(result, ScrubError)
        assert isinstance(result.__cause__, TypeError)
