import os
import sys


def get_terminal_size() -> tuple[int, int] | None:
    """Return (columns, rows) of the terminal, or None if stdout is not a tty."""
    if not sys.stdout.isatty():
        return None
    try:
        size = os.get_terminal_size(sys.stdout.fileno())
    except (OSError, ValueError):
        return None
    if not size.columns or not size.lines:
        return None
    return (size.columns, size.lines)
