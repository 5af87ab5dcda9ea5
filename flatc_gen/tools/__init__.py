"""Tools package: command execution, environment, and locking utilities."""

from flatc_gen.tools.command_runner import CommandResult, CommandRunner
from flatc_gen.tools.env import get_cache_root, load_user_env
from flatc_gen.tools.locking import acquire_lock, is_locked, touch_lock_file

__all__ = [
    "CommandResult",
    "CommandRunner",
    "acquire_lock",
    "get_cache_root",
    "is_locked",
    "load_user_env",
    "touch_lock_file",
]
