from __future__ import annotations

import pytest

from logic.word_matcher import find_whole_word_offsets, is_word_char


def offsets(line: str, word: str, case_sensitive: bool = True) -> list[int]:
    return list(find_whole_word_offsets(line, word, case_sensitive))


def test_finds_whole_words() -> None:
    assert offsets("Hello, Strings.Greeting is nice", "Strings") == [7]
    assert offsets("Hello, Strings.Greeting is nice", "Greeting") == [15]


def test_part_of_longer_identifier_is_not_a_match() -> None:
    assert offsets("Strings.Greeting", "Str") == []
    assert offsets("MyStrings.Greeting", "Strings") == []
    assert offsets("Strings2.Greeting", "Strings") == []


def test_matches_at_line_boundaries() -> None:
    assert offsets("Key", "Key") == [0]
    assert offsets("Key = Key", "Key") == [0, 6]


def test_underscore_is_a_boundary() -> None:
    assert offsets("_Key_", "Key") == [1]


def test_non_qualifying_occurrence_does_not_hide_later_match() -> None:
    assert offsets("KeyKey Key", "Key") == [7]


def test_case_sensitivity() -> None:
    assert offsets("strings.greeting", "Strings") == []
    assert offsets("strings.greeting", "Strings", case_sensitive=False) == [0]
    assert offsets("STRINGS Strings", "strings", case_sensitive=False) == [0, 8]


def test_special_characters_are_literal() -> None:
    assert offsets("a.b a+b", "a+b", case_sensitive=False) == [4]


def test_empty_word_yields_nothing() -> None:
    assert offsets("anything", "") == []
    assert offsets("", "") == []


def test_no_match_yields_nothing() -> None:
    assert offsets("", "Key") == []
    assert offsets("nothing here", "Key") == []


@pytest.mark.parametrize(
    "line, word",
    [
        ("Res.Key(Res.Key2, xRes.Key)", "Res"),
        ("Key9 Key 9Key Key", "Key"),
        ("über Key,Key;Key", "Key"),
        ("ÄKey Key", "Key"),
    ],
)
def test_reported_offsets_are_flanked_by_non_word_characters(line: str, word: str) -> None:
    found = offsets(line, word)
    assert found
    for start in found:
        end = start + len(word)
        assert line[start:end] == word
        assert start == 0 or not is_word_char(line[start - 1])
        assert end == len(line) or not is_word_char(line[end])
