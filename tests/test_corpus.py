"""Unit tests for word counting and word patterns."""

import pytest

import subtok as stok
from subtok.errors import PatternError


def test_count_words_default_pattern():
    """Letters runs are counted case-insensitively."""
    freqs = stok.count_words("The tall, taller man; the tallest!")
    assert freqs == {"the": 2, "tall": 1, "taller": 1, "man": 1, "tallest": 1}
    assert list(freqs) == ["the", "tall", "taller", "man", "tallest"]


def test_count_words_keeps_case():
    """Case is preserved when lowercase is off."""
    freqs = stok.count_words("Tall tall", lowercase=False)
    assert freqs == {"Tall": 1, "tall": 1}


def test_count_words_list_input():
    """List input is treated as separate lines."""
    assert stok.count_words(["fast", "fast"]) == {"fast": 2}


def test_count_words_builtin_patterns():
    """Built-in patterns differ in what counts as a word."""
    text = "gpt4 café"
    assert stok.count_words(text, stok.get_pattern("ascii")) == {
        "gpt": 1,
        "caf": 1,
    }
    assert stok.count_words(text, stok.get_pattern("alnum")) == {
        "gpt4": 1,
        "café": 1,
    }


def test_count_words_skips_empty_matches():
    """Patterns that can match nothing or whitespace never yield words."""
    assert stok.count_words("ab  cd", r"\w*|\s+") == {"ab": 1, "cd": 1}


def test_count_words_invalid_pattern_raises():
    """An invalid regex raises PatternError."""
    with pytest.raises(PatternError):
        stok.count_words("fast", "[")


def test_list_patterns():
    """All built-in pattern names are listed."""
    assert stok.list_patterns() == ["letters", "ascii", "alnum"]


def test_get_pattern_case_insensitive():
    """Pattern lookup ignores case."""
    assert stok.get_pattern("LETTERS") == stok.WordPattern.LETTERS.value


def test_get_pattern_unknown_raises():
    """Unknown pattern names raise PatternError."""
    with pytest.raises(PatternError):
        stok.get_pattern("gpt2")
