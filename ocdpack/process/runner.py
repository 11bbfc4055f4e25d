"""Bounded execution of an external command with a watchdog timer."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
import signal
import subprocess
import threading
from typing import IO, Any, Callable, Sequence

from ocdpack.process.exceptions import CommandTimeoutError, LaunchError, ReadError

logger = logging.getLogger(__name__)

PopenFactory = Callable[..., "subprocess.Popen[str]"]

DEFAULT_TIMEOUT_SECONDS = 60.0
# Time a process gets to exit on its own after closing stdout before it is killed.
EXIT_GRACE_SECONDS = 1.0
# Children run in their own session so the whole group, including any
# grandchild holding the stdout pipe, can be killed at once.
_USE_PROCESS_GROUP = os.name == "posix"


@dataclass(slots=True)
class _DrainState:
    """Flags shared between the draining thread and the watchdog."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    finished: bool = False
    timed_out: bool = False

    def claim_timeout(self) -> bool:
        with self.lock:
            if self.finished:
                return False
            self.timed_out = True
            return True

    def finish(self) -> bool:
        """Mark draining complete and report whether the watchdog won."""
        with self.lock:
            self.finished = True
            return self.timed_out


class ProcessRunner:
    """Run a command and return its standard output.

    Each call owns exactly one child process, which is killed and reaped on
    every exit path. Instances keep no per-call state, so one runner may be
    shared by concurrent callers.
    """

    def __init__(
        self,
        *,
        popen: PopenFactory | None = None,
        exit_grace_seconds: float = EXIT_GRACE_SECONDS,
    ) -> None:
        self._popen: PopenFactory = popen or subprocess.Popen
        self._exit_grace_seconds = max(0.0, exit_grace_seconds)

    def run(
        self,
        command: Sequence[str],
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> str:
        """Launch ``command`` and drain its stdout within ``timeout`` seconds.

        Raises:
            LaunchError: The program could not be started.
            CommandTimeoutError: The timeout elapsed before stdout reached EOF.
            ReadError: Reading stdout failed and the timeout had not elapsed.
        """
        argv = tuple(command)
        if not argv:
            raise ValueError("command must contain at least the program path")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        logger.debug("launching %s (timeout=%ss)", " ".join(argv), timeout)
        try:
            process = self._popen(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                start_new_session=_USE_PROCESS_GROUP,
            )
        except (OSError, ValueError) as error:
            # ValueError covers argv entries Popen refuses, such as embedded NUL bytes.
            raise LaunchError(
                f"Error while launching command: {' '.join(argv)}",
                command=argv,
            ) from error

        state = _DrainState()
        watchdog = threading.Timer(timeout, _expire, args=(process, state, argv))
        watchdog.daemon = True
        watchdog.start()

        output = ""
        read_error: BaseException | None = None
        try:
            output = _drain(process.stdout)
        except (OSError, ValueError) as error:
            # UnicodeDecodeError is a ValueError.
            read_error = error
        finally:
            fired = state.finish()
            watchdog.cancel()
            grace = 0.0 if fired or read_error is not None else self._exit_grace_seconds
            _reap(process, grace=grace)

        if fired:
            raise CommandTimeoutError(
                f"Command timed out after {timeout} seconds: {' '.join(argv)}",
                command=argv,
                timeout_seconds=timeout,
            )
        if read_error is not None:
            raise ReadError(
                f"Error reading stdout of command: {' '.join(argv)}",
                command=argv,
            ) from read_error
        return output


def _expire(process: "subprocess.Popen[Any]", state: _DrainState, argv: tuple[str, ...]) -> None:
    if not state.claim_timeout():
        return
    logger.debug("watchdog fired, killing %s", " ".join(argv))
    _kill(process)


def _drain(stream: IO[str] | None) -> str:
    if stream is None:
        return ""
    lines: list[str] = []
    try:
        for line in stream:
            lines.append(line if line.endswith("\n") else line + "\n")
    finally:
        try:
            stream.close()
        except OSError:
            logger.debug("failed to close stdout pipe", exc_info=True)
    return "".join(lines)


def _kill(process: "subprocess.Popen[Any]") -> None:
    if _USE_PROCESS_GROUP:
        try:
            os.killpg(process.pid, signal.SIGKILL)
            return
        except OSError:
            logger.debug("could not kill process group %s", process.pid, exc_info=True)
    try:
        process.kill()
    except ProcessLookupError:
        return


def _reap(process: "subprocess.Popen[Any]", *, grace: float) -> None:
    # The child is not waited on before this point, so its pid (and process
    # group id) cannot have been reused yet.
    if grace > 0:
        try:
            process.wait(timeout=grace)
        except subprocess.TimeoutExpired:
            _kill(process)
    else:
        _kill(process)
    process.wait()
