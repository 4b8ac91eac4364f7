"""Tests for external command execution."""

import os
import sys
from pathlib import Path

import pytest

from adobeio.e2e_runner.errors import CommandError
from adobeio.e2e_runner.process import reset_directory, run_command


async def test_run_command_success(tmp_path: Path) -> None:
    """run_command runs in cwd with the given environment."""
    script = (
        "import os, pathlib; "
        "pathlib.Path('out.txt').write_text(os.environ['E2E_VALUE'])"
    )

    env = {**os.environ, "E2E_VALUE": "ok"}

    await run_command([sys.executable, "-c", script], tmp_path, env)

    assert (tmp_path / "out.txt").read_text() == "ok"


async def test_run_command_failure(tmp_path: Path) -> None:
    """run_command raises CommandError on non-zero exit."""
    args = [sys.executable, "-c", "raise SystemExit(3)"]

    with pytest.raises(CommandError, match="exit code 3") as exc_info:
        await run_command(args, tmp_path, dict(os.environ))

    assert exc_info.value.returncode == 3
    assert exc_info.value.command == args


def test_reset_directory_creates(tmp_path: Path) -> None:
    """reset_directory creates a missing directory."""
    target = tmp_path / ".repos"

    reset_directory(target)

    assert target.is_dir()


def test_reset_directory_empties(tmp_path: Path) -> None:
    """reset_directory removes previous contents."""
    target = tmp_path / ".repos"
    (target / "old-clone").mkdir(parents=True)
    (target / "old-clone" / "file.txt").write_text("stale")

    reset_directory(target)

    assert list(target.iterdir()) == []
