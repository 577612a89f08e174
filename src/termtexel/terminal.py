import os
import sys
from dataclasses import dataclass

from termtexel.errors import TerminalSizeError


@dataclass(frozen=True)
class TermSize:
    char_width: int
    char_height: int


def get_terminal_size() -> TermSize:
    """Return the character size of the terminal attached to stdout.

    Raises TerminalSizeError when stdout is not a tty; picking a fallback is up
    to the caller.
    """
    if not sys.stdout.isatty():
        raise TerminalSizeError("stdout is not a terminal")
    try:
        size = os.get_terminal_size(sys.stdout.fileno())
    except OSError as e:
        raise TerminalSizeError(f"Could not query terminal size: {e}") from e
    return TermSize(char_width=size.columns, char_height=size.lines)
