import io

import pytest

from survey.ask import PromptConfig, Question, ask, ask_one, with_stdio
from survey.select_prompt import (
    ERROR_ICON,
    HELP_ICON,
    HELP_INPUT_RUNE,
    QUESTION_ICON,
    SELECT_FOCUS_ICON,
    Select,
    SelectTemplateData,
    default_filter,
    render_select,
)
from survey.terminal.keys import (
    KEY_ARROW_DOWN,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_ENTER,
    InterruptError,
    Stdio,
)
from survey.validate import required

OPTIONS = ["foo", "bar", "baz", "buz"]


def make_word_prompt(**extra):
    return Select(message="Pick your word:", options=list(OPTIONS), default="baz", color=False, **extra)


def colors(**extra):
    return Select(message="Choose a color:", options=["red", "blue", "green"], color=False, **extra)


def run(select, keys):
    stdin = io.BytesIO(keys)
    stdout = io.StringIO()
    select.with_stdio(Stdio(stdin, stdout, stdout))
    answer = select.prompt(PromptConfig())
    return answer, stdout.getvalue()


QUESTION_OUTPUT = "\n".join(
    [
        f"{QUESTION_ICON} Pick your word:  [Use arrows to move, type to filter]",
        "  foo",
        "  bar",
        f"{SELECT_FOCUS_ICON} baz",
        "  buz\n",
    ]
)


def test_render_question_output():
    prompt = make_word_prompt()
    data = SelectTemplateData(prompt, page_entries=OPTIONS, selected_index=2)
    assert render_select(data) == QUESTION_OUTPUT


def test_render_answer_output():
    prompt = make_word_prompt()
    data = SelectTemplateData(prompt, answer="buz", show_answer=True, page_entries=OPTIONS)
    assert render_select(data) == f"{QUESTION_ICON} Pick your word: buz\n"


def test_render_help_hidden():
    prompt = make_word_prompt(help="This is helpful")
    data = SelectTemplateData(prompt, page_entries=OPTIONS, selected_index=2)
    expected = "\n".join(
        [
            f"{QUESTION_ICON} Pick your word:  [Use arrows to move, type to filter, "
            f"{HELP_INPUT_RUNE} for more help]",
            "  foo",
            "  bar",
            f"{SELECT_FOCUS_ICON} baz",
            "  buz\n",
        ]
    )
    assert render_select(data) == expected


def test_render_help_shown_through_stream():
    prompt = make_word_prompt(help="This is helpful")
    out = io.StringIO()
    prompt.with_stdio(Stdio(io.BytesIO(), out, out))
    prompt.render(SelectTemplateData(prompt, page_entries=OPTIONS, selected_index=2, show_help=True))
    expected = f"{HELP_ICON} This is helpful\n" + QUESTION_OUTPUT
    assert expected in out.getvalue()


def test_render_with_color_adds_escapes():
    prompt = Select(message="Pick:", options=["a"])
    text = render_select(SelectTemplateData(prompt, page_entries=["a"]))
    assert "\x1b[0m" in text
    assert "Pick:" in text


@pytest.mark.parametrize(
    ("select", "keys", "expected"),
    [
        (colors(), KEY_ARROW_DOWN.encode() + b"\n", "blue"),
        (colors(default="green"), b"\n", "green"),
        (colors(default="blue"), KEY_ARROW_UP.encode() + b"\n", "red"),
        (colors(page_size=1), KEY_ARROW_UP.encode() + b"\n", "green"),
        (colors(vim_mode=True), b"j\n", "blue"),
        (colors(), b"re" + KEY_ARROW_DOWN.encode() + b"\n", "green"),
        (colors(), b"RE" + KEY_ARROW_DOWN.encode() + b"\n", "green"),
        (colors(default="blue"), b"red\n", "red"),
        (
            colors(),
            b"z\n" + KEY_ENTER.encode() + b"\n" + KEY_BACKSPACE.encode() + b"\n" + KEY_ENTER.encode() + b"\n",
            "red",
        ),
        (colors(), b"zz\x17\n", "red"),
        (colors(default="green"), b"\x04", "green"),
    ],
)
def test_prompt_interactions(select, keys, expected):
    answer, _ = run(select, keys)
    assert answer == expected


def test_prompt_with_custom_filter():
    def long_only(filter_text, options):
        return [v for v in default_filter(filter_text, options) if len(v) >= 5]

    answer, _ = run(colors(filter=long_only), b"re\n")
    assert answer == "green"


def test_prompt_shows_help():
    answer, output = run(colors(help="My favourite color is red"), b"?\n")
    assert answer == "red"
    assert "My favourite color is red" in output


def test_prompt_shows_filter():
    _, output = run(colors(), b"re\n")
    assert "Choose a color: re" in output


def test_prompt_without_options_fails():
    with pytest.raises(ValueError, match="please provide options to select from"):
        run(Select(message="Choose one:", color=False), b"\n")


def test_prompt_interrupt():
    with pytest.raises(InterruptError):
        run(colors(), b"\x03")


def test_on_change_enter_depends_on_options():
    select = colors()
    out = io.StringIO()
    select.with_stdio(Stdio(io.BytesIO(), out, out))
    config = PromptConfig()
    assert select.on_change(KEY_ENTER, config) is True
    assert select.on_change("z", config) is False
    assert select.on_change(KEY_ENTER, config) is False
    assert select.filter_message == " z"


def test_cleanup_shows_answer():
    select = colors()
    answer, _ = run(select, b"\n")
    out = select._stdio.stdout
    select.cleanup(answer)
    assert out.getvalue().endswith(f"{QUESTION_ICON} Choose a color: red\n")


def test_error_output():
    select = colors()
    out = io.StringIO()
    select.with_stdio(Stdio(io.BytesIO(), out, out))
    select.error(ValueError("Football is not a valid month"))
    assert out.getvalue() == f"{ERROR_ICON} Sorry, your reply was invalid: Football is not a valid month\n"


def test_default_filter_is_case_insensitive():
    assert default_filter("RE", ["red", "blue", "green"]) == ["red", "green"]


def test_ask_with_select():
    stdin = io.BytesIO(b"yellow\n")
    stdout = io.StringIO()
    select = Select(message="Choose a color:", options=["red", "blue", "green", "yellow"], color=False)
    answers = {}
    ask([Question(name="color", prompt=select, validate=required)], answers, with_stdio(stdin, stdout, stdout))
    assert answers == {"color": "yellow"}
    assert "Choose a color:  [Use arrows to move, type to filter]" in stdout.getvalue()


def test_ask_one_with_select():
    stdin = io.BytesIO(KEY_ARROW_DOWN.encode() + b"\n")
    stdout = io.StringIO()
    answer = ask_one(colors(), {}, with_stdio(stdin, stdout, stdout))
    assert answer == "blue"