"""Bounded subprocess execution."""

from ocdpack.process.exceptions import (
    CommandTimeoutError,
    LaunchError,
    ProcessError,
    ReadError,
)
from ocdpack.process.runner import (
    DEFAULT_TIMEOUT_SECONDS,
    EXIT_GRACE_SECONDS,
    PopenFactory,
    ProcessRunner,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "EXIT_GRACE_SECONDS",
    "PopenFactory",
    "ProcessRunner",
    "ProcessError",
    "LaunchError",
    "CommandTimeoutError",
    "ReadError",
]
