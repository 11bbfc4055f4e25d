"""Shared error base for ocdkit subsystems."""

from __future__ import annotations

from typing import Any


class OcdkitError(Exception):
    """Base class for every error raised by the query pipeline.

    Subclasses set ``kind`` to a short stable identifier so callers can render
    diagnostics without matching on message text. The underlying cause, when
    there is one, is chained with ``raise ... from``.
    """

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind, "message": self.message}
        cause = self.__cause__
        if cause is not None:
            payload["cause"] = f"{type(cause).__name__}: {cause}"
        return payload
