"""Tests for value sanitization and serialization."""

import math

import pytest

from pnwkit.core.errors import QueryValidationError, SecurityGuardError
from pnwkit.core.sanitizer import (
    MAX_ARRAY_SIZE,
    MAX_STRING_LENGTH,
    is_enum_value,
    sanitize_string,
    serialize_arguments,
    serialize_filter_value,
    serialize_object,
    validate_field_name,
)


# =============================================================================
# sanitize_string
# =============================================================================


def test_sanitize_escapes_backslash_before_quotes():
    assert sanitize_string('a"b\\c') == 'a\\"b\\\\c'


@pytest.mark.parametrize(
    "raw, escaped",
    [
        ("line\nbreak", "line\\nbreak"),
        ("carriage\rreturn", "carriage\\rreturn"),
        ("tab\there", "tab\\there"),
        ("form\ffeed", "form\\ffeed"),
        ("back\bspace", "back\\bspace"),
    ],
)
def test_sanitize_escapes_control_characters(raw, escaped):
    assert sanitize_string(raw) == escaped


def test_sanitize_plain_string_is_unchanged():
    assert sanitize_string("Rose Empire 2") == "Rose Empire 2"
    assert sanitize_string(sanitize_string("plain")) == "plain"


def test_sanitize_is_not_a_fixed_point_for_special_characters():
    once = sanitize_string('say "hi"\n')
    assert sanitize_string(once) != once


def test_sanitize_length_limit():
    assert sanitize_string("a" * MAX_STRING_LENGTH) == "a" * MAX_STRING_LENGTH
    with pytest.raises(QueryValidationError, match="exceeds maximum length"):
        sanitize_string("a" * (MAX_STRING_LENGTH + 1))


def test_sanitize_rejects_null_byte():
    with pytest.raises(SecurityGuardError, match="null byte"):
        sanitize_string("abc\0def")


def test_sanitize_rejects_non_string():
    with pytest.raises(QueryValidationError, match="must be a string"):
        sanitize_string(42)


# =============================================================================
# serialize_object
# =============================================================================


def test_serialize_object_renders_enum_values_bare():
    assert serialize_object({"column": "SCORE", "order": "DESC"}) == "{column:SCORE, order:DESC}"


def test_serialize_object_numbers_booleans_and_none():
    assert serialize_object({"limit": 5, "ratio": 0.5, "flag": True, "skip": None}) == (
        "{limit:5, ratio:0.5, flag:true}"
    )


@pytest.mark.parametrize("key", ["__proto__", "constructor", "prototype"])
def test_serialize_object_rejects_forbidden_keys(key):
    with pytest.raises(SecurityGuardError, match="Forbidden field name"):
        serialize_object({key: "X"})


def test_serialize_object_rejects_invalid_key():
    with pytest.raises(QueryValidationError, match="Invalid GraphQL field name"):
        serialize_object({"bad-key": "X"})


def test_serialize_object_rejects_non_enum_string():
    with pytest.raises(QueryValidationError, match="Invalid enum value format"):
        serialize_object({"order": "desc) { evil }"})


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_serialize_object_rejects_non_finite_numbers(value):
    with pytest.raises(SecurityGuardError, match="Invalid number value"):
        serialize_object({"n": value})


@pytest.mark.parametrize("value", [None, [], ["a"], "text"])
def test_serialize_object_requires_mapping(value):
    with pytest.raises(QueryValidationError, match="plain object"):
        serialize_object(value)


def test_serialize_object_rejects_nested_values():
    with pytest.raises(QueryValidationError, match="Unsupported value type"):
        serialize_object({"inner": {"a": 1}})


# =============================================================================
# serialize_filter_value
# =============================================================================


def test_serialize_scalars():
    assert serialize_filter_value(1000) == "1000"
    assert serialize_filter_value(2.5) == "2.5"
    assert serialize_filter_value(False) == "false"
    assert serialize_filter_value("Arrgh") == '"Arrgh"'
    assert serialize_filter_value("ASC") == "ASC"


def test_serialize_whole_number_floats_as_integers():
    assert serialize_filter_value(1000.0) == "1000"
    assert serialize_filter_value(-3.0) == "-3"
    assert serialize_filter_value([1.0, 1.5]) == "[1, 1.5]"
    assert serialize_object({"limit": 5.0}) == "{limit:5}"


def test_serialize_array_mixes_quoted_strings_and_enum_tokens():
    assert serialize_filter_value(["north america", "EUROPE", 3, True]) == (
        '["north america", EUROPE, 3, true]'
    )


def test_serialize_array_of_order_clauses():
    value = [{"column": "SCORE", "order": "DESC"}, {"column": "ID", "order": "ASC"}]
    assert serialize_filter_value(value) == "[{column:SCORE, order:DESC}, {column:ID, order:ASC}]"


def test_serialize_tuple_like_list():
    assert serialize_filter_value((1, 2)) == "[1, 2]"


def test_serialize_array_size_limit():
    rendered = serialize_filter_value(list(range(MAX_ARRAY_SIZE)))
    assert rendered.startswith("[") and rendered.endswith("]")
    assert len(rendered[1:-1].split(", ")) == MAX_ARRAY_SIZE

    with pytest.raises(QueryValidationError, match="Array size exceeds maximum"):
        serialize_filter_value(list(range(MAX_ARRAY_SIZE + 1)))


def test_serialize_escapes_injection_attempt():
    rendered = serialize_filter_value('x") { __schema { types { name } } } #')
    assert rendered == '"x\\") { __schema { types { name } } } #"'


@pytest.mark.parametrize("value", [{1, 2}, object(), b"bytes", [[1, 2]]])
def test_serialize_unsupported_types(value):
    with pytest.raises(QueryValidationError, match="Unsupported filter value type"):
        serialize_filter_value(value)


def test_serialize_none_is_an_error():
    with pytest.raises(QueryValidationError):
        serialize_filter_value(None)


def test_serialize_non_finite_float():
    with pytest.raises(SecurityGuardError):
        serialize_filter_value(float("nan"))


# =============================================================================
# Names and argument lists
# =============================================================================


def test_is_enum_value():
    assert is_enum_value("SCORE")
    assert is_enum_value("_PRIVATE_1")
    assert not is_enum_value("Score")
    assert not is_enum_value("1ST")
    assert not is_enum_value(5)


def test_validate_field_name():
    assert validate_field_name("nation_name") == "nation_name"
    with pytest.raises(QueryValidationError, match="Invalid field name format"):
        validate_field_name("id name")
    with pytest.raises(QueryValidationError, match="Field name too long"):
        validate_field_name("a" * 101)
    with pytest.raises(QueryValidationError, match="Invalid field name"):
        validate_field_name(None)


def test_serialize_arguments_drops_none_and_keeps_order():
    assert serialize_arguments({"min_score": 1000, "vmode": None, "color": ["beige"]}) == [
        "min_score: 1000",
        'color: ["beige"]',
    ]


def test_serialize_arguments_rejects_bad_names():
    with pytest.raises(QueryValidationError):
        serialize_arguments({"min_score) { x }": 1})
    with pytest.raises(SecurityGuardError):
        serialize_arguments({"constructor": 1})
