"""Run external commands (git, npm) for a target."""

import asyncio
import logging
import shutil
from collections.abc import Awaitable, Callable, Mapping, Sequence
from pathlib import Path

from adobeio.e2e_runner.errors import CommandError

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str], Path, Mapping[str, str]], Awaitable[None]]


async def run_command(args: Sequence[str], cwd: Path, env: Mapping[str, str]) -> None:
    """Run a command to completion.

    stderr is inherited from this process, stdout is captured and logged at
    debug level.

    Args:
        args: Argument vector, program first
        cwd: Working directory for the command
        env: Complete environment for the command

    Raises:
        CommandError: If the command exits with a non-zero status

    """
    logger.debug(f"Running: {' '.join(args)} (cwd={cwd})")
    process = await asyncio.create_subprocess_exec(
        *args,
        cwd=cwd,
        env=dict(env),
        stdout=asyncio.subprocess.PIPE,
    )
    stdout, _ = await process.communicate()

    for line in stdout.decode(errors="replace").splitlines():
        logger.debug(line)

    if process.returncode != 0:
        raise CommandError(args, process.returncode or 1)


def reset_directory(path: Path) -> None:
    """Delete ``path`` if it exists and recreate it empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
