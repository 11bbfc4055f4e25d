"""Query pyOCD for connected boards, supported targets and its version."""

from __future__ import annotations

import logging

from ocdpack.config import ClientConfig
from ocdpack.core.models import Board, Target, Version
from ocdpack.core.types import BOARDS_KEY, LIST_ARGUMENTS, TARGETS_KEY, ListArgument
from ocdpack.process.runner import ProcessRunner
from ocdpack.projection.projector import BOARD_MAPPING, TARGET_MAPPING, project
from ocdpack.protocol.decoder import Envelope, decode, extract_array

logger = logging.getLogger(__name__)

Command = tuple[str, ...]


def build_list_command(executable: str, list_arg: ListArgument) -> Command:
    if not executable:
        raise ValueError("executable must be non-empty")
    if list_arg not in LIST_ARGUMENTS:
        raise ValueError(
            f"Unsupported list argument: {list_arg}. "
            f"Expected one of: {', '.join(LIST_ARGUMENTS)}."
        )
    return (executable, "json", list_arg)


def build_version_command(executable: str) -> Command:
    if not executable:
        raise ValueError("executable must be non-empty")
    return (executable, "--version")


class PyOCDClient:
    """Run the pyOCD listing pipeline: execute, decode, project.

    The client holds only its configuration and runner, so separate calls
    never share state. Every failure propagates as an ``OcdkitError``
    subclass; nothing is retried.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        runner: ProcessRunner | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.runner = runner or ProcessRunner()

    def query(self, list_arg: ListArgument) -> Envelope:
        """Run ``pyocd json <list_arg>`` and return the validated envelope."""
        command = build_list_command(self.config.executable, list_arg)
        text = self.runner.run(command, self.config.timeout_seconds)
        return decode(text, self.config.expected_major)

    def list_boards(self) -> list[Board]:
        envelope = self.query("--probes")
        boards = project(extract_array(envelope, BOARDS_KEY), BOARD_MAPPING)
        logger.debug("pyocd reported %d board(s)", len(boards))
        return boards

    def list_targets(self) -> list[Target]:
        envelope = self.query("--targets")
        targets = project(extract_array(envelope, TARGETS_KEY), TARGET_MAPPING)
        logger.debug("pyocd reported %d target(s)", len(targets))
        return targets

    def get_version(self) -> Version | None:
        """Return the tool version, or ``None`` when it printed nothing usable."""
        command = build_version_command(self.config.executable)
        output = self.runner.run(command, self.config.timeout_seconds).strip()
        return Version.from_string(output)
