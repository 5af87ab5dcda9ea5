#!/usr/bin/env python3
"""
flatc-gen: shared-cache flatc builder and code generator.

This module is a thin shim that exposes the CLI app from flatc_gen.cli.

Usage:
    flatc-gen generate [OPTIONS] SCHEMA OUT_DIR
    flatc-gen build
    flatc-gen status
"""

from .cli import app

if __name__ == "__main__":
    app()
