"""flatc-gen: build flatc once in a shared cache and generate code with it."""

from .builder import FlatcBuilder, build_flatc
from .config import ConfigurationError, FlatcGenConfig
from .errors import (
    CacheDirectoryError,
    ExternalCommandError,
    FlatcGenError,
    LaunchError,
    LockFileError,
    LockTimeoutError,
    MissingInputError,
)
from .generator import flatc_gen

__version__ = "0.1.0"
__all__ = [
    "CacheDirectoryError",
    "ConfigurationError",
    "ExternalCommandError",
    "FlatcBuilder",
    "FlatcGenConfig",
    "FlatcGenError",
    "LaunchError",
    "LockFileError",
    "LockTimeoutError",
    "MissingInputError",
    "__version__",
    "build_flatc",
    "flatc_gen",
]
