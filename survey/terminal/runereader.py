"""Reading keystrokes and editable lines from a terminal."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any

from survey.terminal.cursor import (
    COORDINATE_SYSTEM_BEGIN,
    Cursor,
    EraseLineMode,
    erase_line,
)
from survey.terminal.keys import (
    IGNORE_KEY,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_END_TRANSMISSION,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    SPECIAL_KEY_DELETE,
    SPECIAL_KEY_END,
    SPECIAL_KEY_HOME,
    InterruptError,
    Stdio,
    sound_bell,
)

_READ_CHUNK = 4096

_ESCAPE_KEYS = {
    "D": KEY_ARROW_LEFT,
    "C": KEY_ARROW_RIGHT,
    "A": KEY_ARROW_UP,
    "B": KEY_ARROW_DOWN,
    "H": SPECIAL_KEY_HOME,
    "F": SPECIAL_KEY_END,
}


class BufferedReader:
    """Serves bytes held in ``buffer`` before reading from ``stdin``."""

    def __init__(self, stdin: IO[Any], buffer: bytearray | None = None) -> None:
        self.stdin = stdin
        self.buffer = buffer if buffer is not None else bytearray()

    def read(self, size: int = _READ_CHUNK) -> bytes:
        if self.buffer:
            data = bytes(self.buffer[:size])
            del self.buffer[:size]
            return data
        source = getattr(self.stdin, "buffer", self.stdin)
        reader = getattr(source, "read1", None) or source.read
        data = reader(size)
        if isinstance(data, str):
            data = data.encode()
        return data or b""


class TerminalRuneReaderState:
    """Decodes characters and escape sequences from a terminal input stream."""

    def __init__(self, stdin: IO[Any]) -> None:
        self.stdin = stdin
        self.buffer = bytearray()
        self._reader = BufferedReader(stdin, self.buffer)
        self._pending = bytearray()
        self._saved_attrs: list[Any] | None = None

    def set_term_mode(self) -> None:
        """Turn off echo, canonical mode and signal generation."""
        import termios

        fd = self.stdin.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        new_attrs = list(self._saved_attrs)
        new_attrs[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG)
        termios.tcsetattr(fd, termios.TCSANOW, new_attrs)

    def restore_term_mode(self) -> None:
        """Put back the terminal settings saved by ``set_term_mode``."""
        import termios

        if self._saved_attrs is None:
            return
        termios.tcsetattr(self.stdin.fileno(), termios.TCSANOW, self._saved_attrs)

    def _fill(self) -> bool:
        data = self._reader.read(_READ_CHUNK)
        if not data:
            return False
        self._pending.extend(data)
        return True

    def _discard(self, count: int) -> None:
        while count and (self._pending or self._fill()):
            del self._pending[0]
            count -= 1

    def _read_char(self) -> str:
        if not self._pending and not self._fill():
            raise EOFError("end of input")
        first = self._pending[0]
        if first < 0x80:
            width = 1
        elif first >> 5 == 0b110:
            width = 2
        elif first >> 4 == 0b1110:
            width = 3
        elif first >> 3 == 0b11110:
            width = 4
        else:
            width = 1
        while len(self._pending) < width and self._fill():
            pass
        try:
            char = bytes(self._pending[:width]).decode("utf-8")
        except UnicodeDecodeError:
            del self._pending[0]
            return "\ufffd"
        del self._pending[:width]
        return char

    def read_rune(self) -> str:
        """Read one key, translating escape sequences into key codes."""
        char = self._read_char()
        if char != "\x1b":
            return char
        if not self._pending:
            return KEY_ESCAPE
        char = self._read_char()
        if char != "[":
            raise ValueError(f"Unexpected Escape Sequence: {chr(0x1b) + char!r}")
        char = self._read_char()
        if char in _ESCAPE_KEYS:
            return _ESCAPE_KEYS[char]
        # the sequence ends with '~', which is dropped
        self._discard(1)
        if char == "3":
            return SPECIAL_KEY_DELETE
        return IGNORE_KEY


class RuneReader:
    """Reads keys and whole editable lines from the streams of ``stdio``."""

    def __init__(self, stdio: Stdio) -> None:
        self.stdio = stdio
        self._state = TerminalRuneReaderState(stdio.stdin)

    def set_term_mode(self) -> None:
        self._state.set_term_mode()

    def restore_term_mode(self) -> None:
        self._state.restore_term_mode()

    @contextmanager
    def raw_mode(self) -> Iterator[RuneReader]:
        """Keep the terminal in key-by-key mode for the duration of the block."""
        self.set_term_mode()
        try:
            yield self
        finally:
            self.restore_term_mode()

    def read_rune(self) -> str:
        return self._state.read_rune()

    def _write(self, text: str) -> None:
        self.stdio.stdout.write(text)

    def _flush(self) -> None:
        flush = getattr(self.stdio.stdout, "flush", None)
        if flush is not None:
            flush()

    def _print_char(self, char: str, mask: str) -> None:
        self._write(mask if mask else char)

    def read_line(self, mask: str = "") -> str:
        """Read a line with in-place editing; ``mask`` replaces echoed characters."""
        out = self.stdio.stdout
        line: list[str] = []
        index = 0
        cursor = Cursor(self.stdio.stdin, out)
        buffer = self._state.buffer

        terminal_size = cursor.size(buffer)
        current = cursor.location(buffer)

        while True:
            self._flush()
            key = self._state.read_rune()
            current.x += 1

            if key in ("\r", "\n", KEY_END_TRANSMISSION):
                while index > 0:
                    if current.is_at_line_begin():
                        erase_line(out, EraseLineMode.END)
                        cursor.previous_line(1)
                        cursor.forward(terminal_size.x)
                        current.x = terminal_size.x
                        current.y -= 1
                    else:
                        cursor.back(1)
                        current.x -= 1
                    index -= 1
                cursor.move_next_line(current, terminal_size)
                self._flush()
                return "".join(line)

            if key == KEY_INTERRUPT:
                self._write("\r\n")
                self._flush()
                raise InterruptError()

            if key in (KEY_BACKSPACE, KEY_DELETE):
                if index > 0 and line:
                    if index == len(line):
                        line.pop()
                        if current.x == 1:
                            cursor.previous_line(1)
                            cursor.forward(terminal_size.x)
                        else:
                            cursor.back(1)
                        erase_line(out, EraseLineMode.END)
                    else:
                        del line[index - 1]
                        cursor.save()
                        cursor.back(1)
                        for char in line[index - 1:]:
                            erase_line(out, EraseLineMode.END)
                            self._print_char(char, mask)
                        if current.y < terminal_size.y:
                            cursor.next_line(1)
                            erase_line(out, EraseLineMode.END)
                        cursor.restore()
                        if current.is_at_line_begin():
                            cursor.previous_line(1)
                            cursor.forward(terminal_size.x)
                        else:
                            cursor.back(1)
                    index -= 1
                else:
                    sound_bell(out)
                continue

            if key == KEY_ARROW_LEFT:
                if index > 0:
                    if current.is_at_line_begin():
                        cursor.previous_line(1)
                        cursor.forward(terminal_size.x)
                    else:
                        cursor.back(1)
                    index -= 1
                else:
                    sound_bell(out)
                continue

            if key == KEY_ARROW_RIGHT:
                if index < len(line):
                    if current.is_at_line_end(terminal_size):
                        cursor.next_line(1)
                    else:
                        cursor.forward(1)
                    index += 1
                else:
                    sound_bell(out)
                continue

            if key == SPECIAL_KEY_HOME:
                while index > 0:
                    if current.is_at_line_begin():
                        cursor.previous_line(1)
                        cursor.forward(terminal_size.x)
                        current.x = terminal_size.x
                        current.y -= 1
                    else:
                        cursor.back(1)
                        current.x -= 1
                    index -= 1
                continue

            if key == SPECIAL_KEY_END:
                while index != len(line):
                    if current.is_at_line_end(terminal_size):
                        cursor.next_line(1)
                        current.x = COORDINATE_SYSTEM_BEGIN
                        current.y += 1
                    else:
                        cursor.forward(1)
                        current.x += 1
                    index += 1
                continue

            if key == SPECIAL_KEY_DELETE:
                if index != len(line):
                    cursor.save()
                    del line[index]
                    for char in line[index:]:
                        erase_line(out, EraseLineMode.END)
                        self._print_char(char, mask)
                    if current.y < terminal_size.y:
                        cursor.next_line(1)
                        erase_line(out, EraseLineMode.END)
                    cursor.restore()
                    if not line or index == len(line):
                        erase_line(out, EraseLineMode.END)
                continue

            if key == IGNORE_KEY or unicodedata.category(key) == "Cc":
                continue

            if index == len(line):
                line.append(key)
                index += 1
                self._print_char(key, mask)
                continue

            line.insert(index, key)
            cursor.save()
            erase_line(out, EraseLineMode.END)
            for char in line[index:]:
                erase_line(out, EraseLineMode.END)
                self._print_char(char, mask)
                current.x += 1
            if current.is_at_line_end(terminal_size) and current.y == terminal_size.y:
                self._write("\n")
                cursor.restore()
                cursor.up(1)
            else:
                cursor.restore()
            current = cursor.location(buffer)
            if current.is_at_line_end(terminal_size):
                cursor.next_line(1)
            else:
                cursor.forward(1)
            index += 1