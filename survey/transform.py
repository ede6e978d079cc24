"""Transformers that turn an answer into a different representation."""

from __future__ import annotations

from typing import Any, Callable

from survey.validate import is_zero

Transformer = Callable[[Any], Any]


def transform_string(f: Callable[[str], str]) -> Transformer:
    """Wrap a string function as a transformer.

    The transformer returns None, leaving the answer untouched, when the
    answer is empty or not a string.
    """

    def transform(ans: Any) -> Any:
        if is_zero(ans) or not isinstance(ans, str):
            return None
        return f(ans)

    return transform


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    if ch.isalpha() or ch.isdigit():
        return False
    return ch.isspace()


def _title_words(text: str) -> str:
    result = []
    prev = " "
    for ch in text:
        result.append(ch.title() if _is_separator(prev) else ch)
        prev = ch
    return "".join(result)


def to_lower(ans: Any) -> Any:
    """Lower-case a string answer; other answers give None."""
    return transform_string(str.lower)(ans)


def title(ans: Any) -> Any:
    """Capitalise the first letter of every word of a string answer."""
    return transform_string(_title_words)(ans)


def compose_transformers(*transformers: Transformer) -> Transformer:
    """Combine transformers, applying each to the result of the previous one."""

    def transform(ans: Any) -> Any:
        for transformer in transformers:
            ans = transformer(ans)
        return ans

    return transform