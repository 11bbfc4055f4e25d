from __future__ import annotations

import os
from pathlib import Path
import stat
import sys

import pytest

FIXTURE_TOOL = Path(__file__).resolve().parent / "fixtures" / "tools" / "fake_pyocd.py"


@pytest.fixture
def fake_pyocd(tmp_path: Path) -> str:
    """Executable wrapper that runs the fixture pyocd with the test interpreter."""
    if os.name == "nt":
        pytest.skip("shebang launchers are POSIX-only")
    launcher = tmp_path / "pyocd"
    launcher.write_text(
        "\n".join(
            [
                f"#!{sys.executable}",
                "import runpy",
                "import sys",
                f"sys.argv[0] = {str(FIXTURE_TOOL)!r}",
                f"runpy.run_path({str(FIXTURE_TOOL)!r}, run_name='__main__')",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(launcher)
