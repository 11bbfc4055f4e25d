"""Versioned JSON envelope decoding."""

from ocdpack.protocol.decoder import Envelope, decode, extract_array
from ocdpack.protocol.exceptions import (
    DecodeError,
    EnvelopeCheck,
    InvalidFormatError,
    MissingKeyError,
    ParseError,
    TypeMismatchError,
)
from ocdpack.protocol.schema import build_entry_schema, entry_validator, first_schema_error

__all__ = [
    "Envelope",
    "decode",
    "extract_array",
    "DecodeError",
    "EnvelopeCheck",
    "InvalidFormatError",
    "MissingKeyError",
    "ParseError",
    "TypeMismatchError",
    "build_entry_schema",
    "entry_validator",
    "first_schema_error",
]
