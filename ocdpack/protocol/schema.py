"""JSON schemas for individual listing entries."""

from __future__ import annotations

from typing import Any, Iterable

from jsonschema import Draft202012Validator

_NULLABLE_STRING: dict[str, Any] = {"type": ["string", "null"]}
_NULLABLE_STRING_LIST: dict[str, Any] = {
    "type": ["array", "null"],
    "items": {"type": "string"},
}


def build_entry_schema(
    *,
    string_keys: Iterable[str],
    string_list_keys: Iterable[str] = (),
    title: str | None = None,
) -> dict[str, Any]:
    """Build the schema one array element must satisfy.

    Every mapped key is optional; unknown keys are allowed so newer tool
    releases can add fields without breaking older readers.
    """
    properties: dict[str, Any] = {}
    for key in string_keys:
        properties[key] = dict(_NULLABLE_STRING)
    for key in string_list_keys:
        properties[key] = dict(_NULLABLE_STRING_LIST)

    schema: dict[str, Any] = {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "additionalProperties": True,
        "properties": properties,
    }
    if title:
        schema["title"] = title
    return schema


def entry_validator(schema: dict[str, Any]) -> Draft202012Validator:
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def first_schema_error(validator: Draft202012Validator, entry: Any) -> str | None:
    """Return a readable description of the first violation, if any."""
    errors = sorted(validator.iter_errors(entry), key=lambda err: list(err.path))
    if not errors:
        return None
    first = errors[0]
    location = ".".join(str(part) for part in first.path) or "$"
    return f"{location}: {first.message}"
