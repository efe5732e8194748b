"""
Value sanitization for GraphQL query text.

Turns caller-supplied filter values into literal GraphQL syntax:

    "O'Brien \"the\" 2nd"   -> "O'Brien \\"the\\" 2nd"
    [1, 2, 3]               -> [1, 2, 3]
    {"column": "SCORE"}     -> {column:SCORE}
    "DESC"                  -> DESC   (enum token, emitted bare)

Every check raises immediately; nothing is coerced or partially emitted.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from .errors import QueryValidationError, SecurityGuardError


MAX_STRING_LENGTH = 10_000
MAX_ARRAY_SIZE = 1_000
MAX_FIELD_NAME_LENGTH = 100

FORBIDDEN_KEYS = frozenset({"__proto__", "constructor", "prototype"})

# Pre-compiled regex patterns (reused across calls)
FIELD_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")
ENUM_VALUE_PATTERN = re.compile(r"^[_A-Z][_0-9A-Z]*$")

# Backslash must come first so later escapes are not doubled
_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\f", "\\f"),
    ("\b", "\\b"),
)


# =============================================================================
# Strings and names
# =============================================================================


def sanitize_string(value: str) -> str:
    """
    Escape a string for use inside a double-quoted GraphQL literal.

    Args:
        value: Raw caller-supplied text

    Returns:
        The escaped text, without surrounding quotes

    Raises:
        QueryValidationError: If value is not a str or is too long
        SecurityGuardError: If value contains a null byte
    """
    if not isinstance(value, str):
        raise QueryValidationError("Input must be a string")

    if len(value) > MAX_STRING_LENGTH:
        raise QueryValidationError(
            f"Input exceeds maximum length of {MAX_STRING_LENGTH} characters"
        )

    if "\0" in value:
        raise SecurityGuardError("String contains null byte")

    for char, escaped in _ESCAPES:
        value = value.replace(char, escaped)
    return value


def is_enum_value(value: Any) -> bool:
    """Check if a value is an upper-snake-case enum token (e.g. SCORE, DESC)."""
    return isinstance(value, str) and ENUM_VALUE_PATTERN.match(value) is not None


def validate_field_name(name: Any) -> str:
    """
    Ensure a field, relation or argument name is a safe GraphQL identifier.

    Returns:
        The name, unchanged
    """
    if not isinstance(name, str):
        raise QueryValidationError(f"Invalid field name: {name!r}")

    if len(name) > MAX_FIELD_NAME_LENGTH:
        raise QueryValidationError(f"Field name too long: {name[:50]}...")

    if not FIELD_NAME_PATTERN.match(name):
        raise QueryValidationError(f"Invalid field name format: {name}")

    return name


# =============================================================================
# Scalars, objects and arrays
# =============================================================================


def _serialize_number(value: int | float) -> str:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SecurityGuardError(f"Invalid number value: {value}")
        # Int-typed arguments reject "1000.0"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def serialize_object(obj: Mapping[str, Any]) -> str:
    """
    Serialize a mapping as a GraphQL input object with bare enum values.

    Used for ordering clauses such as ``{"column": "SCORE", "order": "DESC"}``,
    which renders as ``{column:SCORE, order:DESC}``. Only the mapping's own
    items are considered; ``None`` values are skipped.

    Raises:
        QueryValidationError: On a non-mapping input, an invalid key or an
            unsupported value type
        SecurityGuardError: On a forbidden key or a non-finite number
    """
    if obj is None or not isinstance(obj, Mapping):
        raise QueryValidationError("Input must be a plain object")

    pairs: list[str] = []
    for key, val in obj.items():
        if val is None:
            continue

        if not isinstance(key, str):
            raise QueryValidationError(f"Invalid GraphQL field name: {key!r}")

        if key in FORBIDDEN_KEYS:
            raise SecurityGuardError(f"Forbidden field name: {key}")

        if not FIELD_NAME_PATTERN.match(key):
            raise QueryValidationError(f"Invalid GraphQL field name: {key}")

        if isinstance(val, bool):
            serialized = "true" if val else "false"
        elif isinstance(val, (int, float)):
            serialized = _serialize_number(val)
        elif isinstance(val, str):
            if not is_enum_value(val):
                raise QueryValidationError(f"Invalid enum value format: {val}")
            serialized = val
        else:
            raise QueryValidationError(
                f"Unsupported value type in GraphQL object: {type(val).__name__}"
            )

        pairs.append(f"{key}:{serialized}")

    return "{" + ", ".join(pairs) + "}"


def _serialize_single_value(value: Any) -> str:
    if isinstance(value, str):
        return value if is_enum_value(value) else f'"{sanitize_string(value)}"'

    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return _serialize_number(value)

    if isinstance(value, Mapping):
        return serialize_object(value)

    raise QueryValidationError(f"Unsupported filter value type: {type(value).__name__}")


def serialize_filter_value(value: Any) -> str:
    """
    Serialize a filter argument value.

    Lists and tuples become ``[a, b, c]``; everything else goes through the
    single value rules (strings quoted unless they are enum tokens, numbers
    must be finite, mappings become input objects).

    Raises:
        QueryValidationError: On None, an oversized array or an unsupported type
    """
    if value is None:
        raise QueryValidationError("Cannot serialize null or undefined value")

    if isinstance(value, (list, tuple)):
        if len(value) > MAX_ARRAY_SIZE:
            raise QueryValidationError(
                f"Array size exceeds maximum of {MAX_ARRAY_SIZE} elements"
            )
        return "[" + ", ".join(_serialize_single_value(v) for v in value) + "]"

    return _serialize_single_value(value)


def serialize_arguments(arguments: Mapping[str, Any]) -> list[str]:
    """
    Render ``name: value`` pairs for every non-None argument, in insertion order.

    Argument names are validated like field names.
    """
    rendered: list[str] = []
    for key, value in arguments.items():
        if value is None:
            continue
        if key in FORBIDDEN_KEYS:
            raise SecurityGuardError(f"Forbidden argument name: {key}")
        validate_field_name(key)
        rendered.append(f"{key}: {serialize_filter_value(value)}")
    return rendered
