"""Console logging helpers for flatc-gen.

Colored, timestamped status lines for the CLI plus stdlib logging setup.
"""

import logging
import sys
from datetime import datetime

# Global verbose setting (can be modified at runtime)
_verbose_enabled: bool = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose output globally."""
    global _verbose_enabled
    _verbose_enabled = enabled


class Colors:
    """ANSI color codes for terminal output (bright variants)."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    RED = "\033[91m"
    GRAY = "\033[90m"
    WHITE = "\033[97m"
    # Subdued style for secondary info
    MUTED = "\033[90m"


def log(
    icon: str,
    message: str,
    color: str = Colors.RESET,
    dim: bool = False,
    err: bool = False,
) -> None:
    """Print a timestamped status line, to stderr when err is set."""
    style = Colors.MUTED if dim else ""
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(
        f"{Colors.GRAY}{timestamp}{Colors.RESET} {style}{color}{icon} {message}{Colors.RESET}",
        file=sys.stderr if err else sys.stdout,
    )


def log_verbose(icon: str, message: str, color: str = Colors.MUTED) -> None:
    """Log only when verbose mode is enabled."""
    if _verbose_enabled:
        log(icon, message, color, dim=True)


def configure_logging(verbose: bool = False) -> None:
    """Route library loggers to stderr (DEBUG when verbose, else INFO)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
