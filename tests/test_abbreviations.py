from __future__ import annotations

import pytest

from tzlab.zones import abbreviate


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Pacific Standard Time", "PST"),
        ("Mountain Standard Time", "MST"),
        ("Mexico (Central)", "M(C)"),
        ("UTC+11", "U+11"),
        ("UTC-05:30", "U-05:30"),
        ("Central Standard Time (Mexico)", "CST(M)"),
        ("W. Europe Standard Time", "WEST"),
        ("Coordinated Universal Time", "CUT"),
    ],
)
def test_abbreviate(name, expected):
    assert abbreviate(name) == expected


def test_sign_starting_a_word_copies_the_rest():
    assert abbreviate("UTC -02:00 offset") == "U-02:00 offset"


def test_extra_spaces_and_empty_name():
    assert abbreviate("  Arabian   Standard Time ") == "AST"
    assert abbreviate("") == ""
