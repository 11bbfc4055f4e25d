"""Core records and protocol constants for ocdkit."""

from ocdpack.core.models import Board, Target, Version
from ocdpack.core.types import (
    BOARDS_KEY,
    FORMAT_MAJOR_VERSION,
    LIST_ARGUMENTS,
    ListArgument,
    TARGETS_KEY,
)

__all__ = [
    "Board",
    "Target",
    "Version",
    "BOARDS_KEY",
    "TARGETS_KEY",
    "FORMAT_MAJOR_VERSION",
    "LIST_ARGUMENTS",
    "ListArgument",
]
