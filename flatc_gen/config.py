"""Configuration dataclass for flatc-gen.

Provides FlatcGenConfig for centralized configuration management. Library
users can construct it directly; the CLI loads it from environment variables
via from_env().

Environment Variables:
    FLATC_GEN_CACHE_DIR: Shared cache root (default: OS cache dir + "flatc-gen")
    FLATC_GEN_REPO_URL: Git URL of the flatbuffers source
    FLATC_GEN_REPO_REF: Branch or tag to clone (default: upstream HEAD)
    FLATC_GEN_LANGUAGE: flatc output language flag (default: rust)
    FLATC_GEN_LOCK_ATTEMPTS: Lock acquisition attempts (default: 30)
    FLATC_GEN_LOCK_POLL_SECONDS: Seconds between lock attempts (default: 1.0)
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from flatc_gen.errors import FlatcGenError
from flatc_gen.tools.env import CACHE_NAMESPACE
from flatc_gen.tools.locking import DEFAULT_MAX_ATTEMPTS, DEFAULT_POLL_INTERVAL

DEFAULT_REPO_URL = "https://github.com/google/flatbuffers"


class ConfigurationError(FlatcGenError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {e}" for e in errors
        )
        super().__init__(message)


@dataclass(frozen=True)
class FlatcGenConfig:
    """Centralized configuration for building and running flatc.

    Attributes:
        cache_dir: Shared cache root. None resolves the OS cache directory
            plus namespace at call time.
            Env: FLATC_GEN_CACHE_DIR
        namespace: Directory name under the OS cache dir; also names the
            lock file.
        repo_url: Git URL cloned when the source tree is absent.
            Env: FLATC_GEN_REPO_URL
        repo_ref: Branch or tag passed to `git clone --branch`. None clones
            upstream HEAD.
            Env: FLATC_GEN_REPO_REF
        language: flatc generator flag without dashes (e.g. "rust", "cpp").
            Env: FLATC_GEN_LANGUAGE
        lock_max_attempts: Failed lock attempts tolerated before giving up.
            Env: FLATC_GEN_LOCK_ATTEMPTS
        lock_poll_interval: Seconds between lock attempts.
            Env: FLATC_GEN_LOCK_POLL_SECONDS

    Example:
        config = FlatcGenConfig(cache_dir=Path("/tmp/flatc-cache"), language="cpp")
        config = FlatcGenConfig.from_env()
    """

    cache_dir: Path | None = None
    namespace: str = CACHE_NAMESPACE
    repo_url: str = DEFAULT_REPO_URL
    repo_ref: str | None = None
    language: str = "rust"
    lock_max_attempts: int = DEFAULT_MAX_ATTEMPTS
    lock_poll_interval: float = DEFAULT_POLL_INTERVAL

    source_dir_name: str = "flatbuffers"
    build_target: str = "flatc"

    @property
    def lock_file_name(self) -> str:
        return f"{self.namespace}.lock"

    @property
    def binary_name(self) -> str:
        if sys.platform == "win32":
            return f"{self.build_target}.exe"
        return self.build_target

    @classmethod
    def from_env(cls, *, validate: bool = True) -> FlatcGenConfig:
        """Create FlatcGenConfig from environment variables.

        Args:
            validate: If True (default), raise ConfigurationError on any
                invalid value.

        Returns:
            FlatcGenConfig with values from the environment or defaults.

        Raises:
            ConfigurationError: If validate=True and configuration is invalid.
        """
        errors: list[str] = []

        cache_dir_env = os.environ.get("FLATC_GEN_CACHE_DIR") or None
        cache_dir = Path(cache_dir_env) if cache_dir_env else None

        max_attempts = DEFAULT_MAX_ATTEMPTS
        raw_attempts = os.environ.get("FLATC_GEN_LOCK_ATTEMPTS")
        if raw_attempts:
            try:
                max_attempts = int(raw_attempts)
            except ValueError:
                errors.append(
                    f"FLATC_GEN_LOCK_ATTEMPTS must be an integer, got: {raw_attempts!r}"
                )

        poll_interval = DEFAULT_POLL_INTERVAL
        raw_interval = os.environ.get("FLATC_GEN_LOCK_POLL_SECONDS")
        if raw_interval:
            try:
                poll_interval = float(raw_interval)
            except ValueError:
                errors.append(
                    f"FLATC_GEN_LOCK_POLL_SECONDS must be a number, got: {raw_interval!r}"
                )

        config = cls(
            cache_dir=cache_dir,
            repo_url=os.environ.get("FLATC_GEN_REPO_URL") or DEFAULT_REPO_URL,
            repo_ref=os.environ.get("FLATC_GEN_REPO_REF") or None,
            language=os.environ.get("FLATC_GEN_LANGUAGE") or "rust",
            lock_max_attempts=max_attempts,
            lock_poll_interval=poll_interval,
        )

        if validate:
            errors.extend(config.validate())
            if errors:
                raise ConfigurationError(errors)

        return config

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors: list[str] = []

        if self.cache_dir is not None and not self.cache_dir.is_absolute():
            errors.append(
                f"cache_dir should be an absolute path, got: {self.cache_dir}"
            )
        if not self.namespace:
            errors.append("namespace must not be empty")
        if not self.repo_url:
            errors.append("repo_url must not be empty")
        if not self.language:
            errors.append("language must not be empty")
        if self.lock_max_attempts < 1:
            errors.append(
                f"lock_max_attempts must be at least 1, got: {self.lock_max_attempts}"
            )
        if self.lock_poll_interval <= 0:
            errors.append(
                f"lock_poll_interval must be positive, got: {self.lock_poll_interval}"
            )

        return errors
