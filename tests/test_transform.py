import pytest

from survey.transform import compose_transformers, title, to_lower, transform_string

SAMPLES = ["hello my name is", "where are you from", "does that matter?"]


@pytest.mark.parametrize("f", [str.upper, str.lower])
@pytest.mark.parametrize("text", SAMPLES)
def test_transform_string(f, text):
    assert transform_string(f)(text) == f(text)


def test_transform_string_skips_empty():
    assert transform_string(str.upper)("") is None


def test_transform_string_skips_non_string():
    assert transform_string(str.upper)(5) is None


def test_compose_transformers():
    transformer = compose_transformers(title, to_lower)
    ans = "my name is"
    assert transformer(ans) == ans.lower()


def test_title_capitalises_words():
    assert title("hello my name is") == "Hello My Name Is"


def test_title_leaves_rest_of_word():
    assert title("hELLO wORLD") == "HELLO WORLD"


def test_to_lower():
    assert to_lower("Johnny Appleseed") == "johnny appleseed"


def test_to_lower_non_string():
    assert to_lower(["A"]) is None


def test_compose_with_nothing_is_identity():
    assert compose_transformers()("Same") == "Same"