"""Terminal helpers shared by the makedict command-line tools."""

import logging
import os
import sys


# CI mode detection
CI_MODE = os.environ.get("CI") == "true" or os.environ.get("MAKEDICT_CI") == "1"

# Terminal colors (disabled in CI mode or non-TTY)
USE_COLOR = sys.stdout.isatty() and not CI_MODE


def color(code: str, text: str) -> str:
    """Apply ANSI color code if colors are enabled."""
    if USE_COLOR:
        return f"\033[{code}m{text}\033[0m"
    return text


RED = lambda t: color("0;31", t)
GREEN = lambda t: color("0;32", t)
YELLOW = lambda t: color("1;33", t)
BOLD = lambda t: color("1", t)
DIM = lambda t: color("2", t)


def format_size(size_bytes: float) -> str:
    """Format bytes as human-readable size."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}" if unit != "B" else f"{int(size_bytes)} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
