"""Decode and validate the versioned JSON envelope emitted by pyOCD."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Any

from ocdpack.core.types import (
    ERROR_KEY,
    FORMAT_MAJOR_VERSION,
    STATUS_KEY,
    VERSION_KEY,
    VERSION_MAJOR_KEY,
    VERSION_MINOR_KEY,
)
from ocdpack.protocol.exceptions import (
    InvalidFormatError,
    MissingKeyError,
    ParseError,
    TypeMismatchError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Envelope:
    """A top-level document that passed every envelope check."""

    document: dict[str, Any]
    major: int
    minor: int | None
    status: int


def decode(text: str, expected_major: int = FORMAT_MAJOR_VERSION) -> Envelope:
    """Parse ``text`` and validate the envelope.

    Checks run in order and the first failure wins: ``version.major`` present,
    ``version.major == expected_major``, ``status`` present, ``status == 0``.

    Raises:
        ParseError: ``text`` is not JSON.
        InvalidFormatError: An envelope check failed.
    """
    try:
        document = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as error:
        # RecursionError: nesting deeper than the decoder can handle.
        logger.debug("parse error in tool output: %s", error)
        raise ParseError(f"Output is not valid JSON ({error})") from error

    if not isinstance(document, dict):
        raise _reject(
            f"Envelope must be a JSON object, got {_json_type(document)}",
            check="envelope",
        )

    version = document.get(VERSION_KEY)
    if not isinstance(version, dict) or VERSION_MAJOR_KEY not in version:
        raise _reject("No data format major version in output", check="version_missing")

    major = version[VERSION_MAJOR_KEY]
    if not _is_int(major) or major != expected_major:
        raise _reject(
            f"Unsupported data format version {major!r}; expected major {expected_major}",
            check="version_mismatch",
            found_major=major,
        )

    if STATUS_KEY not in document:
        raise _reject("No status in output", check="status_missing")

    status = document[STATUS_KEY]
    if not _is_int(status) or status != 0:
        error_message = document.get(ERROR_KEY)
        if not isinstance(error_message, str):
            error_message = None
        raise _reject(
            f"Error {status!r} reported by tool: {error_message or 'unknown error'}",
            check="status_error",
            status=status,
            error_message=error_message,
        )

    minor = version.get(VERSION_MINOR_KEY)
    return Envelope(
        document=document,
        major=major,
        minor=minor if _is_int(minor) else None,
        status=status,
    )


def extract_array(envelope: Envelope, key: str) -> list[Any]:
    """Return a copy of the array stored under ``key``.

    Raises:
        MissingKeyError: ``key`` is absent.
        TypeMismatchError: The value is not a JSON array.
    """
    if key not in envelope.document:
        raise MissingKeyError(key)
    value = envelope.document[key]
    if not isinstance(value, list):
        raise TypeMismatchError(key, _json_type(value))
    return list(value)


def _reject(message: str, **details: Any) -> InvalidFormatError:
    logger.debug("rejecting envelope: %s", message)
    return InvalidFormatError(message, **details)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
