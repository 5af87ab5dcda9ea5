"""Fetch and build flatc once in the shared cache.

Every process that needs flatc goes through FlatcBuilder.ensure_tool_binary.
The clone and both cmake steps run under the cache lock: parallel cmake runs
in the same tree corrupt each other, and two clones into the same directory
fail.

Cache layout:
    <cache_root>/flatc-gen.lock        zero-byte rendezvous file
    <cache_root>/flatbuffers/          cloned source tree
    <cache_root>/flatbuffers/build/flatc
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from flatc_gen.config import FlatcGenConfig
from flatc_gen.errors import ExternalCommandError
from flatc_gen.tools.command_runner import CommandResult, CommandRunner
from flatc_gen.tools.env import ensure_cache_root, get_cache_root
from flatc_gen.tools.locking import acquire_lock, touch_lock_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachePaths:
    """Resolved locations inside the shared cache."""

    cache_root: Path
    lock_file: Path
    source_tree: Path
    binary: Path


def check_output(result: CommandResult, name: str) -> CommandResult:
    """Escalate a failed command to ExternalCommandError.

    Only the command and exit code are logged here. The captured output
    travels on the exception (see ExternalCommandError.diagnostics) and is
    printed once by whoever reports the failure.
    """
    if not result.ok:
        logger.error(
            "Exit command: %s (error code %s)", result.command, result.returncode
        )
        raise ExternalCommandError(name, result)
    return result


class FlatcBuilder:
    """Clones and builds flatc into the shared cache under the build lock."""

    def __init__(
        self,
        config: FlatcGenConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config if config is not None else FlatcGenConfig()
        self.runner = runner if runner is not None else CommandRunner()

    def resolve_cache_root(self) -> Path:
        if self.config.cache_dir is not None:
            return ensure_cache_root(self.config.cache_dir)
        return get_cache_root(self.config.namespace)

    def paths(self) -> CachePaths:
        """Resolve (and create) the cache root and derive the other paths."""
        cache_root = self.resolve_cache_root()
        source_tree = cache_root / self.config.source_dir_name
        return CachePaths(
            cache_root=cache_root,
            lock_file=cache_root / self.config.lock_file_name,
            source_tree=source_tree,
            binary=source_tree / "build" / self.config.binary_name,
        )

    def ensure_tool_binary(self) -> Path:
        """Make sure flatc is built in the shared cache and return its path.

        The source tree is cloned only if absent; the cmake configure and
        build steps always run. The returned path is not checked for
        existence.

        Raises:
            CacheDirectoryError: If the cache root cannot be created.
            LockTimeoutError: If another process holds the lock too long.
            LaunchError: If git or cmake cannot be started.
            ExternalCommandError: If clone, configure or build fails.
        """
        paths = self.paths()
        logger.info("Use global cache dir: %s", paths.cache_root)

        touch_lock_file(paths.lock_file)
        with acquire_lock(
            paths.lock_file,
            max_attempts=self.config.lock_max_attempts,
            poll_interval=self.config.lock_poll_interval,
        ):
            if not paths.source_tree.exists():
                self.fetch(paths)
            self.build(paths)

        logger.info("flatc binary: %s", paths.binary)
        return paths.binary

    def fetch(self, paths: CachePaths) -> None:
        # TODO: default repo_ref to a release tag instead of upstream HEAD
        cmd = ["git", "clone"]
        if self.config.repo_ref:
            cmd += ["--branch", self.config.repo_ref]
        cmd += [self.config.repo_url, self.config.source_dir_name]

        logger.info("Cloning %s into %s", self.config.repo_url, paths.source_tree)
        result = self.runner.run(cmd, cwd=paths.cache_root)
        check_output(result, "git clone")

    def build(self, paths: CachePaths) -> None:
        logger.info("Building %s in %s", self.config.build_target, paths.source_tree)
        result = self.runner.run(["cmake", "-Bbuild", "-H."], cwd=paths.source_tree)
        check_output(result, "cmake")
        result = self.runner.run(
            ["cmake", "--build", "build", "--target", self.config.build_target],
            cwd=paths.source_tree,
        )
        check_output(result, "cmake")


def build_flatc(
    config: FlatcGenConfig | None = None, runner: CommandRunner | None = None
) -> Path:
    """Download and build flatc in the shared cache, returning its path."""
    return FlatcBuilder(config=config, runner=runner).ensure_tool_binary()
