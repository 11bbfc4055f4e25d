"""Protocol decoding exceptions."""

from __future__ import annotations

from typing import Any, Literal

from ocdpack.errors import OcdkitError

EnvelopeCheck = Literal[
    "envelope",
    "version_missing",
    "version_mismatch",
    "status_missing",
    "status_error",
]


class DecodeError(OcdkitError):
    """Base class for output that cannot be trusted."""

    kind = "decode"


class ParseError(DecodeError):
    """Standard output was not valid JSON."""

    kind = "parse"


class InvalidFormatError(DecodeError):
    """The envelope violated the protocol contract.

    ``check`` names the first invariant that failed.
    """

    kind = "invalid_format"

    def __init__(
        self,
        message: str,
        *,
        check: EnvelopeCheck,
        found_major: Any = None,
        status: Any = None,
        error_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.check = check
        self.found_major = found_major
        self.status = status
        self.error_message = error_message

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["check"] = self.check
        if self.found_major is not None:
            payload["found_major"] = self.found_major
        if self.status is not None:
            payload["status"] = self.status
        if self.error_message is not None:
            payload["error_message"] = self.error_message
        return payload


class MissingKeyError(DecodeError):
    """The requested payload key is absent from the envelope."""

    kind = "missing_key"

    def __init__(self, key: str) -> None:
        super().__init__(f"Envelope has no '{key}' entry")
        self.key = key


class TypeMismatchError(DecodeError):
    """The requested payload key does not hold a JSON array."""

    kind = "type_mismatch"

    def __init__(self, key: str, actual_type: str) -> None:
        super().__init__(f"Envelope entry '{key}' is {actual_type}, expected array")
        self.key = key
        self.actual_type = actual_type
