"""In-memory fake implementations for testing.

Fakes are preferred over mocks because they implement the real interface
and let tests assert on outcomes (files created, commands recorded) rather
than call order.

Available fakes:
- FakeCommandRunner: Deterministic command execution with fail-closed semantics

Usage:
    from tests.fakes import FakeCommandRunner

    def test_something():
        runner = FakeCommandRunner()
        runner.register("git", "clone")
"""

from tests.fakes.command_runner import (
    FakeCommandRunner,
    RecordedCall,
    build_creates_binary,
    clone_creates_tree,
)

__all__ = [
    "FakeCommandRunner",
    "RecordedCall",
    "build_creates_binary",
    "clone_creates_tree",
]
