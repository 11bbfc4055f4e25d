"""Client configuration and environment loading."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from ocdpack.core.types import FORMAT_MAJOR_VERSION
from ocdpack.errors import OcdkitError
from ocdpack.process.runner import DEFAULT_TIMEOUT_SECONDS

EXECUTABLE_ENV_VAR = "OCDKIT_PYOCD_PATH"
TIMEOUT_ENV_VAR = "OCDKIT_TIMEOUT_SECONDS"
EXPECTED_MAJOR_ENV_VAR = "OCDKIT_EXPECTED_MAJOR"
DEFAULT_EXECUTABLE = "pyocd"


class ConfigError(OcdkitError, ValueError):
    """Invalid client configuration."""

    kind = "config"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Settings for one :class:`~ocdpack.client.PyOCDClient`."""

    executable: str = DEFAULT_EXECUTABLE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    expected_major: int = FORMAT_MAJOR_VERSION

    def __post_init__(self) -> None:
        if not isinstance(self.executable, str) or not self.executable.strip():
            raise ConfigError("executable must be a non-empty path or program name")
        if isinstance(self.timeout_seconds, bool) or not isinstance(
            self.timeout_seconds, (int, float)
        ):
            raise ConfigError("timeout_seconds must be a number")
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds must be positive")
        if isinstance(self.expected_major, bool) or not isinstance(self.expected_major, int):
            raise ConfigError("expected_major must be an integer")
        if self.expected_major < 0:
            raise ConfigError("expected_major must be non-negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build a config from ``OCDKIT_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        executable = (env.get(EXECUTABLE_ENV_VAR) or "").strip() or DEFAULT_EXECUTABLE

        timeout_seconds = DEFAULT_TIMEOUT_SECONDS
        raw_timeout = (env.get(TIMEOUT_ENV_VAR) or "").strip()
        if raw_timeout:
            try:
                timeout_seconds = float(raw_timeout)
            except ValueError as error:
                raise ConfigError(
                    f"{TIMEOUT_ENV_VAR} must be a number of seconds, got {raw_timeout!r}"
                ) from error

        expected_major = FORMAT_MAJOR_VERSION
        raw_major = (env.get(EXPECTED_MAJOR_ENV_VAR) or "").strip()
        if raw_major:
            try:
                expected_major = int(raw_major)
            except ValueError as error:
                raise ConfigError(
                    f"{EXPECTED_MAJOR_ENV_VAR} must be an integer, got {raw_major!r}"
                ) from error

        return cls(
            executable=executable,
            timeout_seconds=timeout_seconds,
            expected_major=expected_major,
        )
