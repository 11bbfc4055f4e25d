"""Stable public API surface for ocdkit.

This module is the supported import path for library users.
"""

from __future__ import annotations

import logging

from ocdpack.client import PyOCDClient
from ocdpack.config import ClientConfig, ConfigError
from ocdpack.core import FORMAT_MAJOR_VERSION, Board, Target, Version
from ocdpack.errors import OcdkitError
from ocdpack.process import (
    DEFAULT_TIMEOUT_SECONDS,
    CommandTimeoutError,
    LaunchError,
    ProcessError,
    ReadError,
)
from ocdpack.protocol import (
    DecodeError,
    InvalidFormatError,
    MissingKeyError,
    ParseError,
    TypeMismatchError,
)

__version__ = "0.1.0"

logging.getLogger("ocdkit").addHandler(logging.NullHandler())


def _client(executable: str, timeout_seconds: float, expected_major: int) -> PyOCDClient:
    return PyOCDClient(
        ClientConfig(
            executable=executable,
            timeout_seconds=timeout_seconds,
            expected_major=expected_major,
        )
    )


def list_boards(
    executable: str = "pyocd",
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    expected_major: int = FORMAT_MAJOR_VERSION,
) -> list[Board]:
    """List debug probes reported by ``pyocd json --probes``.

    Args:
        executable: Path or program name of the pyocd executable.
        timeout_seconds: Seconds to wait for output before killing pyocd.
        expected_major: JSON data format major version to accept.

    Returns:
        Boards in the order pyocd reported them. Malformed entries are skipped.

    Raises:
        ProcessError: pyocd could not be launched, timed out, or its output
            could not be read.
        DecodeError: The output was not a valid envelope or had no board list.
    """
    return _client(executable, timeout_seconds, expected_major).list_boards()


def list_targets(
    executable: str = "pyocd",
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    expected_major: int = FORMAT_MAJOR_VERSION,
) -> list[Target]:
    """List target types reported by ``pyocd json --targets``.

    Args:
        executable: Path or program name of the pyocd executable.
        timeout_seconds: Seconds to wait for output before killing pyocd.
        expected_major: JSON data format major version to accept.

    Returns:
        Targets in the order pyocd reported them. Malformed entries are skipped.

    Raises:
        ProcessError: pyocd could not be launched, timed out, or its output
            could not be read.
        DecodeError: The output was not a valid envelope or had no target list.
    """
    return _client(executable, timeout_seconds, expected_major).list_targets()


def get_version(
    executable: str = "pyocd",
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> Version | None:
    """Return the version printed by ``pyocd --version``.

    Args:
        executable: Path or program name of the pyocd executable.
        timeout_seconds: Seconds to wait for output before killing pyocd.

    Returns:
        Parsed version, or ``None`` when pyocd printed nothing.

    Raises:
        ProcessError: pyocd could not be launched, timed out, or its output
            could not be read.
    """
    return _client(executable, timeout_seconds, FORMAT_MAJOR_VERSION).get_version()


__all__ = [
    "__version__",
    "Board",
    "Target",
    "Version",
    "ClientConfig",
    "PyOCDClient",
    "OcdkitError",
    "ConfigError",
    "ProcessError",
    "LaunchError",
    "CommandTimeoutError",
    "ReadError",
    "DecodeError",
    "ParseError",
    "InvalidFormatError",
    "MissingKeyError",
    "TypeMismatchError",
    "list_boards",
    "list_targets",
    "get_version",
]
