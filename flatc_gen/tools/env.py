"""Environment configuration and path resolution for flatc-gen.

Centralizes the shared cache location and dotenv loading. The cache root
is resolved fresh on every call so env overrides (including ones loaded
from .env) always take effect.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from flatc_gen.errors import CacheDirectoryError

# Directory name under the OS cache dir shared by every flatc-gen process
CACHE_NAMESPACE = "flatc-gen"

# User config directory (stores .env)
USER_CONFIG_DIR = Path.home() / ".config" / "flatc-gen"


def get_os_cache_dir() -> Path:
    """Get the OS-standard per-user cache directory.

    Linux and other POSIX: $XDG_CACHE_HOME or ~/.cache
    macOS: ~/Library/Caches
    Windows: %LOCALAPPDATA%

    Raises:
        CacheDirectoryError: If the platform offers no cache location.
    """
    if sys.platform == "win32":
        local_app_data = os.environ.get("LOCALAPPDATA")
        if not local_app_data:
            raise CacheDirectoryError(
                "Cannot get global cache directory: LOCALAPPDATA is not set"
            )
        return Path(local_app_data)

    try:
        home = Path.home()
    except RuntimeError as exc:
        raise CacheDirectoryError(
            f"Cannot get global cache directory: {exc}"
        ) from exc

    if sys.platform == "darwin":
        return home / "Library" / "Caches"

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    # Relative XDG_CACHE_HOME values are invalid and ignored
    if xdg_cache and Path(xdg_cache).is_absolute():
        return Path(xdg_cache)
    return home / ".cache"


# Can be overridden via FLATC_GEN_CACHE_DIR environment variable
def get_cache_root(namespace: str = CACHE_NAMESPACE) -> Path:
    """Resolve the shared cache root and make sure it exists.

    FLATC_GEN_CACHE_DIR, when set, is used as the cache root directly.
    Otherwise the root is the OS cache directory joined with namespace.
    Safe to call repeatedly.

    Raises:
        CacheDirectoryError: If no location can be resolved or created.
    """
    override = os.environ.get("FLATC_GEN_CACHE_DIR")
    if override:
        root = Path(override)
    else:
        root = get_os_cache_dir() / namespace
    return ensure_cache_root(root)


def ensure_cache_root(root: Path) -> Path:
    """Create root (with parents) if missing; never fails if it exists."""
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CacheDirectoryError(
            f"Failed to create cache directory {root}: {exc}"
        ) from exc
    if not root.is_dir():
        raise CacheDirectoryError(f"Cache path {root} is not a directory")
    return root


def load_user_env() -> None:
    """Load environment from ${USER_CONFIG_DIR}/.env (~/.config/flatc-gen/.env).

    Existing environment variables win over values in the file.
    """
    load_dotenv(dotenv_path=USER_CONFIG_DIR / ".env")
