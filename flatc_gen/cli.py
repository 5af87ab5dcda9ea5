#!/usr/bin/env python3
"""
flatc-gen CLI: build flatc once in a shared cache and generate code with it.

Usage:
    flatc-gen generate [OPTIONS] SCHEMA OUT_DIR
    flatc-gen build [OPTIONS]
    flatc-gen status
"""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from .builder import FlatcBuilder
from .config import FlatcGenConfig
from .errors import ExternalCommandError, FlatcGenError
from .generator import flatc_gen
from .log_output.console import (
    Colors,
    configure_logging,
    log,
    log_verbose,
    set_verbose,
)
from .tools.env import USER_CONFIG_DIR, load_user_env
from .tools.locking import is_locked

app = typer.Typer(
    name="flatc-gen",
    help="Build flatc once in a shared cache and generate code from .fbs schemas",
    add_completion=False,
)


def _setup(verbose: bool) -> FlatcGenConfig:
    """Load .env, configure logging and build the config from the environment."""
    load_user_env()
    set_verbose(verbose)
    configure_logging(verbose)
    try:
        return FlatcGenConfig.from_env()
    except FlatcGenError as exc:
        _fail(exc)


def _fail(exc: FlatcGenError) -> NoReturn:
    """Print the error and any captured command output, then exit 1."""
    if isinstance(exc, ExternalCommandError):
        print(exc.diagnostics(), file=sys.stderr)
    log("✗", str(exc), Colors.RED, err=True)
    raise typer.Exit(1)


VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose/--quiet",
        "-v/-q",
        help="Show debug logging including every command executed",
    ),
]


@app.command()
def generate(
    schema: Annotated[
        Path,
        typer.Argument(help="FlatBuffers schema (.fbs) to compile"),
    ],
    out_dir: Annotated[
        Path,
        typer.Argument(help="Directory for generated source"),
    ],
    language: Annotated[
        str | None,
        typer.Option(
            "--language",
            "-l",
            help="flatc generator flag without dashes, e.g. rust, cpp, python (default: rust)",
        ),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Generate code from a schema, building flatc first if needed."""
    config = _setup(verbose)
    if language:
        config = dataclasses.replace(config, language=language)

    log_verbose("◐", f"language: {config.language}")
    try:
        flatc_gen(schema, out_dir, config=config)
    except FlatcGenError as exc:
        _fail(exc)
    log("✓", f"Generated {config.language} code for {schema} in {out_dir}", Colors.GREEN)


@app.command()
def build(verbose: VerboseOption = False) -> None:
    """Fetch and build flatc in the shared cache (pre-warm) and print its path."""
    config = _setup(verbose)
    try:
        binary = FlatcBuilder(config=config).ensure_tool_binary()
    except FlatcGenError as exc:
        _fail(exc)
    log("✓", "flatc ready", Colors.GREEN)
    print(binary)


@app.command()
def status() -> None:
    """Show the shared cache state."""
    config = _setup(False)
    try:
        paths = FlatcBuilder(config=config).paths()
        locked = is_locked(paths.lock_file)
    except FlatcGenError as exc:
        _fail(exc)

    print()
    log("●", "flatc-gen status", Colors.MAGENTA)
    print()

    config_env = USER_CONFIG_DIR / ".env"
    if config_env.exists():
        log("◐", f"config: {config_env}", Colors.GRAY, dim=True)
    else:
        log("○", f"config: {config_env} (not found)", Colors.GRAY, dim=True)

    log("◐", f"cache: {paths.cache_root}", Colors.GRAY, dim=True)

    if locked:
        log("⚠", f"Build lock held: {paths.lock_file}", Colors.YELLOW)
    else:
        log("○", "Build lock free", Colors.GRAY)

    if paths.source_tree.exists():
        log("✓", f"Source tree: {paths.source_tree}", Colors.GREEN)
    else:
        log("○", "Source tree not cloned", Colors.GRAY)

    if paths.binary.exists():
        log("✓", f"flatc: {paths.binary}", Colors.GREEN)
    else:
        log("○", "flatc not built", Colors.GRAY)
    print()
