"""Standardized subprocess execution for external build tools.

CommandRunner captures stdout/stderr and the exit status of one child
process per call. A non-zero exit is a normal CommandResult; only a failure
to start the executable raises (LaunchError). Callers decide whether a
failed result is fatal.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from flatc_gen.errors import LaunchError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of a single command execution."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """True when the command exited 0."""
        return self.returncode == 0


class CommandRunner:
    """Runs external commands in a working directory.

    There is no timeout: a hung clone or build blocks until the process
    exits or is killed from outside.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd

    def run(
        self,
        cmd: list[str],
        env: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> CommandResult:
        """Run a command to completion and capture its output.

        Args:
            cmd: Command and arguments.
            env: Environment variables merged over os.environ.
            cwd: Override the working directory for this call.

        Returns:
            CommandResult with exit status and captured output.

        Raises:
            LaunchError: If the executable cannot be found or started.
        """
        cmd = [str(part) for part in cmd]
        workdir = cwd if cwd is not None else self.cwd

        merged_env = None
        if env:
            merged_env = {**os.environ, **env}

        logger.debug("Running %s (cwd=%s)", cmd, workdir)
        start = time.monotonic()
        try:
            proc = subprocess.run(
                cmd,
                cwd=workdir,
                env=merged_env,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            raise LaunchError(cmd, str(exc)) from exc

        duration = time.monotonic() - start
        logger.debug("%s exited %d after %.1fs", cmd[0], proc.returncode, duration)
        return CommandResult(
            command=cmd,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
            duration_seconds=duration,
        )
