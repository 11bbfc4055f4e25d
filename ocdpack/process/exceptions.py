"""Process execution exceptions."""

from __future__ import annotations

from typing import Any, Sequence

from ocdpack.errors import OcdkitError


class ProcessError(OcdkitError):
    """Base class for failures while running the external tool."""

    kind = "process"

    def __init__(self, message: str, *, command: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command = tuple(command)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["command"] = list(self.command)
        return payload


class LaunchError(ProcessError):
    """The program could not be started."""

    kind = "launch"


class CommandTimeoutError(ProcessError):
    """The watchdog killed the program before its output was drained."""

    kind = "timeout"

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        timeout_seconds: float,
    ) -> None:
        super().__init__(message, command=command)
        self.timeout_seconds = timeout_seconds

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["timeout_seconds"] = self.timeout_seconds
        return payload


class ReadError(ProcessError):
    """Reading standard output failed before the watchdog fired."""

    kind = "read"
