import json
from importlib.metadata import PackageNotFoundError, version as package_version
import logging
from dataclasses import dataclass
from typing import Any, NoReturn

import typer

from ocdpack.client import PyOCDClient
from ocdpack.config import ClientConfig, ConfigError
from ocdpack.errors import OcdkitError

app = typer.Typer(help="Query pyOCD for debug probes, targets and its version.")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("ocdkit")
    except PackageNotFoundError:
        from ocdkit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version())
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show ocdkit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log debug details (launches, rejected envelopes, skipped entries) to stderr.",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.stable_json = stable_json
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err)


def _fail(
    message: str,
    *,
    exit_code: int,
    json_output: bool,
    error: OcdkitError | None = None,
) -> NoReturn:
    if json_output:
        payload: dict[str, Any] = {
            "status": "error",
            "exit_code": exit_code,
            "message": message,
        }
        if error is not None:
            payload["error"] = error.to_dict()
        _echo_json(payload)
    else:
        _echo(message, err=True)
    raise typer.Exit(code=exit_code)


def _build_client(
    command_name: str,
    *,
    pyocd: str | None,
    timeout_seconds: float | None,
    expected_major: int | None,
    json_output: bool,
) -> PyOCDClient:
    try:
        base = ClientConfig.from_env()
        config = ClientConfig(
            executable=pyocd if pyocd is not None else base.executable,
            timeout_seconds=(
                timeout_seconds if timeout_seconds is not None else base.timeout_seconds
            ),
            expected_major=expected_major if expected_major is not None else base.expected_major,
        )
    except ConfigError as error:
        _fail(
            f"{command_name} failed: {error}",
            exit_code=2,
            json_output=json_output,
            error=error,
        )
    return PyOCDClient(config)


_PYOCD_OPTION = typer.Option(
    None,
    "--pyocd",
    help="Path to the pyocd executable.",
)
_TIMEOUT_OPTION = typer.Option(
    None,
    "--timeout",
    help="Seconds to wait for pyocd output before killing it.",
)
_EXPECTED_MAJOR_OPTION = typer.Option(
    None,
    "--expected-major",
    help="JSON data format major version to accept.",
)


@app.command()
def boards(
    pyocd: str | None = _PYOCD_OPTION,
    timeout_seconds: float | None = _TIMEOUT_OPTION,
    expected_major: int | None = _EXPECTED_MAJOR_OPTION,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable board listing.",
    ),
) -> None:
    """List connected debug probes."""
    client = _build_client(
        "boards",
        pyocd=pyocd,
        timeout_seconds=timeout_seconds,
        expected_major=expected_major,
        json_output=json_output,
    )
    try:
        records = client.list_boards()
    except OcdkitError as error:
        _fail(
            f"boards failed: {error}",
            exit_code=1,
            json_output=json_output,
            error=error,
        )

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": f"{len(records)} board(s) found",
                "boards": [record.to_dict() for record in records],
            }
        )
        return
    if not records:
        _echo("no boards found")
        return
    for record in records:
        _echo(
            f"{record.unique_id or '-'}  {record.name or '-'}  "
            f"[{record.target_name or '-'}]  {record.description or ''}".rstrip()
        )


@app.command()
def targets(
    pyocd: str | None = _PYOCD_OPTION,
    timeout_seconds: float | None = _TIMEOUT_OPTION,
    expected_major: int | None = _EXPECTED_MAJOR_OPTION,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable target listing.",
    ),
) -> None:
    """List target types supported by pyOCD."""
    client = _build_client(
        "targets",
        pyocd=pyocd,
        timeout_seconds=timeout_seconds,
        expected_major=expected_major,
        json_output=json_output,
    )
    try:
        records = client.list_targets()
    except OcdkitError as error:
        _fail(
            f"targets failed: {error}",
            exit_code=1,
            json_output=json_output,
            error=error,
        )

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": f"{len(records)} target(s) found",
                "targets": [record.to_dict() for record in records],
            }
        )
        return
    for record in records:
        families = ",".join(record.part_families)
        _echo(
            f"{record.name or '-'}  {record.vendor or '-'}  "
            f"{record.part_number or '-'}  {families}".rstrip()
        )


@app.command(name="tool-version")
def tool_version(
    pyocd: str | None = _PYOCD_OPTION,
    timeout_seconds: float | None = _TIMEOUT_OPTION,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable version output.",
    ),
) -> None:
    """Report the installed pyOCD version."""
    client = _build_client(
        "tool-version",
        pyocd=pyocd,
        timeout_seconds=timeout_seconds,
        expected_major=None,
        json_output=json_output,
    )
    try:
        parsed = client.get_version()
    except OcdkitError as error:
        _fail(
            f"tool-version failed: {error}",
            exit_code=1,
            json_output=json_output,
            error=error,
        )

    if parsed is None:
        _fail(
            "tool-version failed: pyocd reported no version",
            exit_code=1,
            json_output=json_output,
        )

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": "pyocd version",
                "version": parsed.to_dict(),
            }
        )
    else:
        _echo(str(parsed), force=True)


def main() -> None:
    app()
