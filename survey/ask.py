"""Asking a list of questions, validating and transforming the answers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Callable

from survey.terminal.keys import Stdio

Validator = Callable[[Any], None]
Transformer = Callable[[Any], Any]
AskOption = Callable[["AskOptions"], None]


@dataclass
class PromptConfig:
    """Settings shared by every prompt of one ask."""

    page_size: int = 7


class Prompt(ABC):
    """An object that takes input from the user and returns an answer.

    A prompt may also define ``with_stdio(stdio)`` to receive the streams to
    use, and ``prompt_again(invalid, err)`` to be asked again after a
    rejected answer.
    """

    @abstractmethod
    def prompt(self, config: PromptConfig) -> Any:
        """Ask the user and return the answer."""

    @abstractmethod
    def cleanup(self, value: Any) -> None:
        """Show the final, accepted answer."""

    @abstractmethod
    def error(self, err: Exception) -> None:
        """Show why the last answer was rejected."""


@dataclass(kw_only=True)
class Question:
    """One question of a survey: where to store it, how to ask and check it."""

    name: str = ""
    prompt: Prompt
    validate: Validator | None = None
    transform: Transformer | None = None


@dataclass
class AskOptions:
    """Options collected from the option functions passed to ``ask``."""

    stdio: Stdio = field(default_factory=Stdio)
    validators: list[Validator] = field(default_factory=list)
    prompt_config: PromptConfig = field(default_factory=PromptConfig)


def with_stdio(stdin: Any, stdout: Any, stderr: Any) -> AskOption:
    """Use the given streams instead of the process's standard streams."""

    def apply(options: AskOptions) -> None:
        options.stdio = Stdio(stdin, stdout, stderr)

    return apply


def with_validator(validator: Validator) -> AskOption:
    """Apply ``validator`` to the answer of every question."""

    def apply(options: AskOptions) -> None:
        options.validators.append(validator)

    return apply


def with_page_size(page_size: int) -> AskOption:
    """Set the default number of options shown at once."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.page_size = page_size

    return apply


def _validation_error(validator: Validator, answer: Any) -> ValueError | None:
    try:
        validator(answer)
    except ValueError as exc:
        return exc
    return None


def _write_answer(target: Any, name: str, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[name] = value
        return
    if not name:
        return
    for candidate in (name, name.lower(), name.replace("-", "_").lower()):
        if candidate.isidentifier() and hasattr(target, candidate):
            setattr(target, candidate, value)
            return
    raise ValueError(f"could not find field matching {name}")


def ask(questions: list[Question], response: Any, *options: AskOption) -> dict[str, Any]:
    """Ask every question in turn and record the answers in ``response``.

    ``response`` is either a mapping, which receives each answer under the
    question's name, or an object whose attribute of that name is set.
    A validator rejects an answer by raising ``ValueError``; the question is
    then asked again. The answers are also returned as a dictionary.
    """
    settings = AskOptions()
    for option in options:
        option(settings)

    if response is None:
        raise ValueError("cannot call ask() without a place to record the answers")

    answers: dict[str, Any] = {}
    for question in questions:
        prompt = question.prompt
        receive_stdio = getattr(prompt, "with_stdio", None)
        if callable(receive_stdio):
            receive_stdio(settings.stdio)

        answer = prompt.prompt(settings.prompt_config)

        validators = [question.validate, *settings.validators]
        for validator in validators:
            if validator is None:
                continue
            while (invalid := _validation_error(validator, answer)) is not None:
                prompt.error(invalid)
                prompt_again = getattr(prompt, "prompt_again", None)
                if callable(prompt_again):
                    answer = prompt_again(answer, invalid)
                else:
                    answer = prompt.prompt(settings.prompt_config)

        if question.transform is not None:
            transformed = question.transform(answer)
            if transformed is not None:
                answer = transformed

        prompt.cleanup(answer)
        _write_answer(response, question.name, answer)
        answers[question.name] = answer

    return answers


def ask_one(prompt: Prompt, response: Any, *options: AskOption) -> Any:
    """Ask a single unnamed question and return its answer.

    A mapping given as ``response`` receives the answer under the key ``""``.
    """
    answers = ask([Question(prompt=prompt)], response, *options)
    return answers[""]


def paginate(page_size: int, choices: list[str], sel: int) -> tuple[list[str], int]:
    """Return the page of ``choices`` around ``sel`` and ``sel``'s index in it."""
    if len(choices) < page_size:
        start, end, cursor = 0, len(choices), sel
    elif sel < page_size // 2:
        start, end, cursor = 0, page_size, sel
    elif len(choices) - sel - 1 < page_size // 2:
        start = len(choices) - page_size
        end = len(choices)
        cursor = sel - start
    else:
        above = page_size // 2
        below = page_size - above
        cursor = page_size // 2
        start = sel - above
        end = sel + below
    return choices[start:end], cursor