"""Cursor movement, line erasing and cursor position queries over ANSI escapes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import IO, Any

COORDINATE_SYSTEM_BEGIN = 1

_DSR_PATTERN = re.compile(rb"\x1b\[(\d+);(\d+)R$")


class EraseLineMode(IntEnum):
    """Which part of the current line to erase."""

    END = 0
    START = 1
    ALL = 2


def erase_line(out: IO[str], mode: EraseLineMode) -> None:
    """Erase part of the current line according to ``mode``."""
    out.write(f"\x1b[{int(mode)}K")


@dataclass
class Coord:
    """A position on the terminal screen, 1-based."""

    x: int
    y: int

    def is_at_line_end(self, size: Coord) -> bool:
        return self.x == size.x

    def is_at_line_begin(self) -> bool:
        return self.x == COORDINATE_SYSTEM_BEGIN


class Cursor:
    """Moves the terminal cursor by writing escape sequences to ``stdout``."""

    def __init__(self, stdin: IO[Any] | None = None, stdout: IO[str] | None = None) -> None:
        self.stdin = stdin
        self.stdout = stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        flush = getattr(self.stdout, "flush", None)
        if flush is not None:
            flush()

    def up(self, n: int) -> None:
        self._write(f"\x1b[{n}A")

    def down(self, n: int) -> None:
        self._write(f"\x1b[{n}B")

    def forward(self, n: int) -> None:
        self._write(f"\x1b[{n}C")

    def back(self, n: int) -> None:
        self._write(f"\x1b[{n}D")

    def next_line(self, n: int) -> None:
        """Move to the beginning of the line ``n`` lines down."""
        self._write(f"\x1b[{n}E")

    def previous_line(self, n: int) -> None:
        """Move to the beginning of the line ``n`` lines up."""
        self._write(f"\x1b[{n}F")

    def horizontal_absolute(self, x: int) -> None:
        self._write(f"\x1b[{x}G")

    def show(self) -> None:
        self._write("\x1b[?25h")

    def hide(self) -> None:
        self._write("\x1b[?25l")

    def move(self, x: int, y: int) -> None:
        self._write(f"\x1b[{x};{y}f")

    def save(self) -> None:
        self._write("\x1b7")

    def restore(self) -> None:
        self._write("\x1b8")

    def move_next_line(self, cur: Coord, terminal_size: Coord) -> None:
        """Go to the next line, scrolling first when on the last row."""
        if cur.y == terminal_size.y:
            self._write("\n")
        self.next_line(1)

    def _read_until_r(self) -> bytes:
        source = getattr(self.stdin, "buffer", self.stdin)
        text = bytearray()
        while True:
            chunk = source.read(1)
            if not chunk:
                raise EOFError("end of input while waiting for cursor position report")
            if isinstance(chunk, str):
                chunk = chunk.encode()
            text += chunk
            if text.endswith(b"R"):
                return bytes(text)

    def location(self, buf: bytearray | None) -> Coord:
        """Ask the terminal where the cursor is.

        Bytes read from input that are not part of the position report are
        appended to ``buf`` so that they are not lost.
        """
        self._write("\x1b[6n")
        while True:
            text = self._read_until_r()
            match = _DSR_PATTERN.search(text)
            if match is None:
                if buf is not None:
                    buf.extend(text)
                continue
            if buf is not None:
                buf.extend(text[: match.start()])
            row, col = int(match.group(1)), int(match.group(2))
            return Coord(col, row)

    def size(self, buf: bytearray | None) -> Coord:
        """Return the terminal's width and height as a coordinate."""
        self.hide()
        self.save()
        self.move(999, 999)
        bottom = self.location(buf)
        self.restore()
        self.show()
        return bottom