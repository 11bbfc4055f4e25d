"""Immutable records projected from pyOCD output."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_VERSION_SEGMENT = re.compile(r"\+?[0-9]+")
# Segments are unsigned 32-bit values; anything larger falls back to 0.
_VERSION_SEGMENT_MAX = 0xFFFFFFFF


@dataclass(frozen=True, slots=True)
class Board:
    """A debug probe and the board it is attached to."""

    name: str | None = None
    vendor_name: str | None = None
    product_name: str | None = None
    target_name: str | None = None
    description: str | None = None
    unique_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "vendor_name": self.vendor_name,
            "product_name": self.product_name,
            "target_name": self.target_name,
            "description": self.description,
            "unique_id": self.unique_id,
        }

    def __str__(self) -> str:
        return f"<Board: {self.name} [{self.target_name}] {self.unique_id}>"


@dataclass(frozen=True, slots=True)
class Target:
    """A target device type supported by pyOCD."""

    name: str | None = None
    vendor: str | None = None
    part_number: str | None = None
    part_families: tuple[str, ...] = field(default_factory=tuple)
    svd_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "vendor": self.vendor,
            "part_number": self.part_number,
            "part_families": list(self.part_families),
            "svd_path": self.svd_path,
        }

    def __str__(self) -> str:
        return f"<Target: {self.name} [{self.part_number}]>"


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """pyOCD release version."""

    major: int = 0
    minor: int = 0
    micro: int = 0

    @classmethod
    def from_string(cls, version_string: str) -> "Version | None":
        """Parse a dotted version such as ``v0.36.0``.

        Returns ``None`` for empty input. Each of the first three segments is
        parsed on its own; a segment that is missing, unparsable or above
        2**32 - 1 becomes ``0`` without affecting its siblings.
        """
        if not version_string:
            return None
        if version_string.startswith("v"):
            version_string = version_string[1:]

        pieces = version_string.split(".", 3)

        numbers = [0, 0, 0]
        for index, label in enumerate(("major", "minor", "micro")):
            if index >= len(pieces):
                break
            piece = pieces[index]
            if _VERSION_SEGMENT.fullmatch(piece) is None:
                logger.debug("failed to parse pyocd %s version: %s", label, ".".join(pieces))
                continue
            value = int(piece)
            if value > _VERSION_SEGMENT_MAX:
                logger.debug("pyocd %s version out of range: %s", label, ".".join(pieces))
                continue
            numbers[index] = value
        return cls(*numbers)

    def to_dict(self) -> dict[str, int]:
        return {"major": self.major, "minor": self.minor, "micro": self.micro}

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.micro}"
