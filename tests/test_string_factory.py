import pytest

from page_factory.string_factory import damballa, normalize


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Click Me For Fun!", "click_me_for_fun"),
        (" Re--Set ", "re_set"),
        ("Sign In link", "sign_in_link"),
        ("Save & Continue >>", "save_continue"),
        ("Step 2: Review", "step_2_review"),
        ("already_snake_case", "already_snake_case"),
        ("Café Menü", "café_menü"),
        ("!!!", ""),
        ("", ""),
    ],
)
def test_normalize_examples(text, expected):
    assert normalize(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "Click Me For Fun!",
        " Re--Set ",
        "__Leading and trailing__",
        "a _-_ b",
        "İstanbul Office",
        "Tabs\tand\nnewlines",
        "MiXeD-CaSe_and spaces",
    ],
)
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_separator_runs_collapse_to_one_underscore():
    assert normalize("a - - b") == "a_b"
    assert "__" not in normalize("x -- _ -- y")


def test_damballa_is_the_same_function():
    assert damballa is normalize
