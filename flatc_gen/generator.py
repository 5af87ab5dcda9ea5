"""Generate source code from FlatBuffers schemas."""

from __future__ import annotations

import logging
from pathlib import Path

from flatc_gen.builder import FlatcBuilder, check_output
from flatc_gen.config import FlatcGenConfig
from flatc_gen.errors import MissingInputError
from flatc_gen.tools.command_runner import CommandRunner

logger = logging.getLogger(__name__)


def flatc_gen(
    path: str | Path,
    out_dir: str | Path,
    config: FlatcGenConfig | None = None,
    runner: CommandRunner | None = None,
) -> None:
    """Generate code for the schema at path into out_dir.

    The schema is checked before the cache is touched, so a typo in the
    path never waits on the build lock or triggers a build.

    Args:
        path: The .fbs schema file.
        out_dir: Directory passed to flatc's -o flag, as-is.
        config: Build and language settings. Defaults to FlatcGenConfig().
        runner: Command runner used for every external command.

    Raises:
        MissingInputError: If path does not exist.
        FlatcGenError: Any error from building or running flatc.
    """
    path = Path(path)
    if not path.exists():
        raise MissingInputError(path)

    config = config if config is not None else FlatcGenConfig()
    runner = runner if runner is not None else CommandRunner()

    flatc = FlatcBuilder(config=config, runner=runner).ensure_tool_binary()
    logger.info("Generating %s code for %s into %s", config.language, path, out_dir)
    result = runner.run(
        [str(flatc), f"--{config.language}", "-o", str(out_dir), "-b", str(path)]
    )
    check_output(result, "flatc")
