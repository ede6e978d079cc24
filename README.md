# survey

Interactive prompts for terminal programs. The package asks a user one or
more questions, checks each answer with validators, can reshape the answer
with transformers, and records the results in a dictionary or on an
object's attributes.

## Installing

```
pip install .
```

## Asking one question

```python
from survey.ask import ask_one
from survey.select_prompt import Select

answers = {}
color = ask_one(
    Select(message="Choose a color:", options=["red", "blue", "green"]),
    answers,
)
```

`ask_one` returns the answer; a dictionary passed as the response also
receives it under the key `""`.

With a `Select` prompt the user moves with the up and down arrows, which
wrap around at either end. Typing narrows the list with a case-insensitive
substring filter (`default_filter`, or a function given as `filter`);
Backspace removes the last filter character and Ctrl+W or Ctrl+X clears it.
Enter accepts the option under the cursor. Esc toggles vim mode, in which
`j` and `k` also move. If the prompt has `help` text, `?` shows it. If the
user has not moved or filtered, the answer is `default` when one is set,
otherwise the first option. `page_size` limits how many options are shown
at once; `color=False` turns off colour escapes. A `Select` without options
raises `ValueError`.

## Several questions

```python
from survey.ask import Question, ask, with_page_size
from survey.select_prompt import Select
from survey.transform import title
from survey.validate import required

questions = [
    Question(
        name="color",
        prompt=Select(message="Choose a color:", options=["red", "blue", "green"]),
        validate=required,
        transform=title,
    ),
]

answers = {}
ask(questions, answers, with_page_size(5))
```

`ask` writes each answer into a mapping under the question's name, or onto
an object's attribute of that name (also tried lower-cased, with `-`
replaced by `_`), and returns all answers as a dictionary. Passing `None` as
the response raises `ValueError`.

A validator rejects an answer by raising `ValueError`;
`survey.validate.ValidationError` is such an error. The prompt then shows
the reason and asks again. `with_validator` adds a validator applied to
every question. Validators combine with `compose_validators`; the package
also provides `required` (which accepts `False`), `max_length` and
`min_length`. A transformer returns a new answer, or `None` to leave it as
it was; transformers combine with `compose_transformers`, and the package
provides `to_lower`, `title` and `transform_string`.

The default page size is 7. Pressing Ctrl+C during a prompt raises
`survey.terminal.keys.InterruptError`.

## Choosing the streams

By default prompts read from standard input and write to standard output.
To use other streams, pass `with_stdio(stdin, stdout, stderr)` to `ask` or
`ask_one`.

## Terminal helpers

`survey.terminal` holds the lower-level pieces: `Cursor` writes ANSI cursor
movements and asks the terminal for the cursor position and screen size,
`erase_line` clears part of a line, and `RuneReader` reads single keys
(turning arrow, Home, End and Delete escape sequences into key codes) or a
whole line with in-place editing and optional masking via `read_line`.
`RuneReader.raw_mode()` is a context manager that turns off echo and line
buffering while it is active.

## What it does not do

The only prompt provided is `Select`. There are no text-input, password,
confirmation, multi-select or editor prompts, and no command-line program.
Terminal mode switching uses `termios`, so key-by-key input works on POSIX
systems only.

## Running the tests

```
pip install .[test]
pytest
```