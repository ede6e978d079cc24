"""Key codes, the interrupt error and the standard streams used by prompts."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import IO, Any

KEY_ARROW_LEFT = "\x02"
KEY_ARROW_RIGHT = "\x06"
KEY_ARROW_UP = "\x10"
KEY_ARROW_DOWN = "\x0e"
KEY_SPACE = " "
KEY_ENTER = "\r"
KEY_BACKSPACE = "\b"
KEY_DELETE = "\x7f"
KEY_INTERRUPT = "\x03"
KEY_END_TRANSMISSION = "\x04"
KEY_ESCAPE = "\x1b"
KEY_DELETE_WORD = "\x17"  # Ctrl+W
KEY_DELETE_LINE = "\x18"  # Ctrl+X
SPECIAL_KEY_HOME = "\x01"
SPECIAL_KEY_END = "\x11"
SPECIAL_KEY_DELETE = "\x12"
IGNORE_KEY = "\x00"


class InterruptError(Exception):
    """Raised when the user interrupts a prompt (Ctrl+C)."""

    def __init__(self, message: str = "interrupt") -> None:
        super().__init__(message)


@dataclass
class Stdio:
    """The input, output and error streams a prompt talks to."""

    stdin: IO[Any] = field(default_factory=lambda: sys.stdin)
    stdout: IO[Any] = field(default_factory=lambda: sys.stdout)
    stderr: IO[Any] = field(default_factory=lambda: sys.stderr)


def sound_bell(out: IO[str]) -> None:
    """Ring the terminal bell on ``out``."""
    out.write("\a")