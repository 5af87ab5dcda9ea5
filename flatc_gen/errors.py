"""Exception types raised by flatc-gen.

Every failure is a FlatcGenError subclass so library callers can catch one
type. Only the CLI turns these into a non-zero process exit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from flatc_gen.tools.command_runner import CommandResult


class FlatcGenError(Exception):
    """Base class for all flatc-gen errors."""


class CacheDirectoryError(FlatcGenError):
    """Raised when the shared cache directory cannot be resolved or created."""


class LockFileError(CacheDirectoryError):
    """Raised when the build lock file cannot be created or opened.

    Attributes:
        lock_path: The offending lock file path.
    """

    def __init__(self, lock_path: Path, reason: str) -> None:
        super().__init__(f"Cannot use lock file {lock_path}: {reason}")
        self.lock_path = lock_path


class LockTimeoutError(FlatcGenError):
    """Raised when the build lock is not acquired within the attempt ceiling.

    Attributes:
        lock_path: The lock file that could not be locked.
        attempts: Number of failed acquisition attempts.
    """

    def __init__(self, lock_path: Path, attempts: int) -> None:
        super().__init__(f"Cannot get lock of {lock_path} after {attempts} attempts")
        self.lock_path = lock_path
        self.attempts = attempts


class LaunchError(FlatcGenError):
    """Raised when an external command cannot be started at all."""

    def __init__(self, command: list[str], reason: str) -> None:
        super().__init__(f"Command not found or not executable: {command} ({reason})")
        self.command = command
        self.reason = reason


class ExternalCommandError(FlatcGenError):
    """Raised when an external command runs but exits non-zero.

    Attributes:
        name: Short name of the failing step (e.g. "git clone", "cmake").
        result: The captured CommandResult.
    """

    def __init__(self, name: str, result: CommandResult) -> None:
        super().__init__(f"{name} failed with error code: {result.returncode}")
        self.name = name
        self.result = result

    def diagnostics(self) -> str:
        """Full captured output of the failing command, stdout then stderr."""
        return "\n".join(
            [
                f"=== {self.name} output ===",
                self.result.stdout,
                self.result.stderr,
            ]
        )


class MissingInputError(FlatcGenError):
    """Raised when the input schema file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Flatbuffer file {path} does not exist.")
        self.path = path
