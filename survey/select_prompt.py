"""A prompt that lets the user pick one option with the arrow keys."""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import IO, Any, Callable

from survey.ask import Prompt, PromptConfig, paginate
from survey.terminal.cursor import Cursor, EraseLineMode, erase_line
from survey.terminal.keys import (
    KEY_ARROW_DOWN,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DELETE_LINE,
    KEY_DELETE_WORD,
    KEY_END_TRANSMISSION,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    KEY_SPACE,
    InterruptError,
    Stdio,
)
from survey.terminal.runereader import RuneReader

QUESTION_ICON = "?"
HELP_ICON = "?"
ERROR_ICON = "X"
SELECT_FOCUS_ICON = ">"
HELP_INPUT_RUNE = "?"

_COLORS = {
    "cyan": "\x1b[36m",
    "cyan+b": "\x1b[1;36m",
    "green+hb": "\x1b[1;92m",
    "default+hb": "\x1b[1;39m",
    "red": "\x1b[31m",
    "reset": "\x1b[0m",
}

FilterFunc = Callable[[str, list[str]], list[str]]


def default_filter(filter_text: str, options: list[str]) -> list[str]:
    """Keep the options that contain ``filter_text``, ignoring case."""
    needle = filter_text.lower()
    return [option for option in options if needle in option.lower()]


@dataclass
class SelectTemplateData:
    """What a rendering of the select prompt shows."""

    select: Select
    page_entries: list[str] = field(default_factory=list)
    selected_index: int = 0
    answer: str = ""
    show_answer: bool = False
    show_help: bool = False


def render_select(data: SelectTemplateData) -> str:
    """Return the text of the select prompt described by ``data``."""
    select = data.select

    def paint(name: str) -> str:
        return _COLORS[name] if select.color else ""

    parts = []
    if data.show_help:
        parts.append(f"{paint('cyan')}{HELP_ICON} {select.help}{paint('reset')}\n")
    parts.append(f"{paint('green+hb')}{QUESTION_ICON} {paint('reset')}")
    parts.append(f"{paint('default+hb')}{select.message}{select.filter_message}{paint('reset')}")
    if data.show_answer:
        parts.append(f"{paint('cyan')} {data.answer}{paint('reset')}\n")
        return "".join(parts)

    hint = "Use arrows to move, type to filter"
    if select.help and not data.show_help:
        hint += f", {HELP_INPUT_RUNE} for more help"
    parts.append(f"  {paint('cyan')}[{hint}]{paint('reset')}\n")
    for ix, choice in enumerate(data.page_entries):
        if ix == data.selected_index:
            parts.append(f"{paint('cyan+b')}{SELECT_FOCUS_ICON} ")
        else:
            parts.append(f"{paint('default+hb')}  ")
        parts.append(f"{choice}{paint('reset')}\n")
    return "".join(parts)


def _is_tty(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


@dataclass(eq=False)
class Select(Prompt):
    """Presents a list of options; the user moves with arrows and types to filter."""

    message: str = ""
    options: list[str] = field(default_factory=list)
    default: str = ""
    help: str = ""
    page_size: int = 0
    vim_mode: bool = False
    filter_message: str = ""
    filter: FilterFunc | None = None
    color: bool = True
    _filter_text: str = field(default="", init=False, repr=False)
    _selected_index: int = field(default=0, init=False, repr=False)
    _use_default: bool = field(default=False, init=False, repr=False)
    _showing_help: bool = field(default=False, init=False, repr=False)
    _stdio: Stdio | None = field(default=None, init=False, repr=False)
    _line_count: int = field(default=0, init=False, repr=False)

    def with_stdio(self, stdio: Stdio) -> None:
        """Use ``stdio`` for all input and output."""
        self._stdio = stdio

    def _streams(self) -> Stdio:
        if self._stdio is None:
            self._stdio = Stdio()
        return self._stdio

    def _write(self, out: IO[str], text: str) -> None:
        out.write(text)
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def _erase_rendered(self, out: IO[str]) -> None:
        if self._line_count == 0:
            return
        cursor = Cursor(self._streams().stdin, out)
        cursor.horizontal_absolute(0)
        erase_line(out, EraseLineMode.ALL)
        for _ in range(self._line_count):
            cursor.previous_line(1)
            erase_line(out, EraseLineMode.ALL)
        self._line_count = 0

    def render(self, data: SelectTemplateData) -> None:
        """Replace what was drawn before with the prompt described by ``data``."""
        out = self._streams().stdout
        self._erase_rendered(out)
        text = render_select(data)
        self._write(out, text)
        self._line_count = text.count("\n")

    def error(self, err: Exception) -> None:
        """Replace the prompt with a message saying why the answer was rejected."""
        out = self._streams().stdout
        self._erase_rendered(out)
        red = _COLORS["red"] if self.color else ""
        reset = _COLORS["reset"] if self.color else ""
        self._write(out, f"{red}{ERROR_ICON} Sorry, your reply was invalid: {err}{reset}\n")

    def _filtered_options(self) -> list[str]:
        if not self._filter_text:
            return self.options
        chooser = self.filter or default_filter
        return chooser(self._filter_text, self.options)

    def _page_size(self, config: PromptConfig) -> int:
        return self.page_size or config.page_size

    def on_change(self, key: str, config: PromptConfig) -> bool:
        """Handle one key press; return True when the answer is chosen."""
        options = self._filtered_options()
        old_filter = self._filter_text

        if key in (KEY_ENTER, "\n"):
            return bool(options) and self._selected_index < len(options)
        if key == KEY_ARROW_UP or (self.vim_mode and key == "k" and options):
            self._use_default = False
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
        elif key == KEY_ARROW_DOWN or (self.vim_mode and key == "j" and options):
            self._use_default = False
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
        elif key == HELP_INPUT_RUNE and self.help:
            self._showing_help = True
        elif key == KEY_ESCAPE:
            self.vim_mode = not self.vim_mode
        elif key in (KEY_DELETE_WORD, KEY_DELETE_LINE):
            self._filter_text = ""
        elif key in (KEY_DELETE, KEY_BACKSPACE):
            self._filter_text = self._filter_text[:-1]
        elif key >= KEY_SPACE:
            self._filter_text += key
            self.vim_mode = False
            self._use_default = False

        self.filter_message = f" {self._filter_text}" if self._filter_text else ""
        if old_filter != self._filter_text:
            options = self._filtered_options()
            if options and len(options) <= self._selected_index:
                self._selected_index = len(options) - 1

        entries, idx = paginate(self._page_size(config), options, self._selected_index)
        self.render(
            SelectTemplateData(
                self,
                page_entries=entries,
                selected_index=idx,
                show_help=self._showing_help,
            )
        )
        return False

    def prompt(self, config: PromptConfig | None = None) -> str:
        """Show the options and return the one the user picks."""
        config = config or PromptConfig()
        if not self.options:
            raise ValueError("please provide options to select from")

        selected = 0
        if self.default and self.default in self.options:
            selected = self.options.index(self.default)
        self._selected_index = selected

        entries, idx = paginate(self._page_size(config), self.options, selected)
        self.render(SelectTemplateData(self, page_entries=entries, selected_index=idx))

        self._use_default = True
        stdio = self._streams()
        reader = RuneReader(stdio)
        cursor = Cursor(stdio.stdin, stdio.stdout)

        with ExitStack() as stack:
            if _is_tty(stdio.stdin):
                stack.enter_context(reader.raw_mode())
            cursor.hide()
            stack.callback(cursor.show)
            while True:
                key = reader.read_rune()
                if key == KEY_INTERRUPT:
                    raise InterruptError()
                if key == KEY_END_TRANSMISSION:
                    break
                if self.on_change(key, config):
                    break

        options = self._filtered_options()
        self._filter_text = ""
        self.filter_message = ""

        if self._use_default or self._selected_index >= len(options):
            if self.default:
                return self.default
            return options[0] if options else ""
        return options[self._selected_index]

    def cleanup(self, value: Any) -> None:
        """Replace the prompt with the chosen answer."""
        self.render(SelectTemplateData(self, answer=str(value), show_answer=True))