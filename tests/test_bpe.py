"""Unit tests for pair counting, pair selection and merging."""

from collections import Counter

import pytest

from subtok import (
    EmptyVocabularyError,
    SymbolVocabulary,
    TokenFrequencyTable,
    count_pair_frequencies,
    merge_pair,
    merge_symbols,
    most_frequent_pair,
)


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def table():
    """Return the initial table of the textbook corpus."""
    return TokenFrequencyTable.from_word_freqs(
        {"fast": 4, "faster": 3, "tall": 5, "taller": 4}
    )


@pytest.fixture
def vocab():
    """Return the default base vocabulary."""
    return SymbolVocabulary.from_alphabet()


# Table construction
# ---------------------------------------------------------------------------


def test_table_splits_words_into_characters(table):
    """Each word becomes its characters followed by the end-of-word marker."""
    assert table.joined() == {
        "f a s t _": 4,
        "f a s t e r _": 3,
        "t a l l _": 5,
        "t a l l e r _": 4,
    }


def test_table_keeps_existing_end_marker():
    """A word that already ends with the marker is not marked twice."""
    marked = TokenFrequencyTable.from_word_freqs({"fast_": 4})
    bare = TokenFrequencyTable.from_word_freqs({"fast": 4})
    assert marked == bare
    assert ("f", "a", "s", "t", "_") in marked


def test_table_sums_words_with_same_segmentation():
    """Marked and bare spellings of one word share an entry."""
    table = TokenFrequencyTable.from_word_freqs({"fast": 4, "fast_": 2})
    assert len(table) == 1
    assert table.total_frequency() == 6


# Pair counting
# ---------------------------------------------------------------------------


def test_count_pair_frequencies_weights_by_word_frequency(table):
    """Pair counts are summed word frequencies."""
    pairs = count_pair_frequencies(table)
    assert pairs[("t", "a")] == 9
    assert pairs[("f", "a")] == 7
    assert pairs[("l", "_")] == 5
    assert pairs[("t", "e")] == 3


def test_count_pair_frequencies_never_crosses_words():
    """No pair is formed from the end of one word and the start of the next."""
    table = TokenFrequencyTable.from_word_freqs({"ab": 1, "cd": 1})
    pairs = count_pair_frequencies(table)
    assert set(pairs) == {("a", "b"), ("b", "_"), ("c", "d"), ("d", "_")}
    assert ("_", "c") not in pairs
    assert ("b", "c") not in pairs


def test_count_pair_frequencies_counts_repeats_within_word():
    """Repeated pairs inside one word each contribute."""
    table = TokenFrequencyTable.from_word_freqs({"abab": 2})
    assert count_pair_frequencies(table)[("a", "b")] == 4


# Pair selection
# ---------------------------------------------------------------------------


def test_most_frequent_pair_unique_maximum():
    """A unique maximum is always chosen."""
    counts = Counter({("a", "b"): 2, ("c", "d"): 5, ("e", "f"): 1})
    assert most_frequent_pair(counts) == ("c", "d")


def test_most_frequent_pair_ties_go_to_first_encountered(table):
    """Among equal counts the first pair counted wins."""
    pairs = count_pair_frequencies(table)
    # ("t","a"), ("a","l") and ("l","l") all occur 9 times
    assert most_frequent_pair(pairs) == ("t", "a")


def test_most_frequent_pair_empty_raises():
    """Selecting from no pairs raises EmptyVocabularyError."""
    with pytest.raises(EmptyVocabularyError):
        most_frequent_pair(Counter())


def test_fully_merged_table_has_no_pairs():
    """Single-symbol words yield no pairs."""
    table = TokenFrequencyTable({("tall_",): 5, ("fast_",): 4})
    pairs = count_pair_frequencies(table)
    with pytest.raises(EmptyVocabularyError):
        most_frequent_pair(pairs)


# Merging
# ---------------------------------------------------------------------------


def test_merge_symbols_non_overlapping():
    """Occurrences are merged left to right without overlap."""
    assert merge_symbols(("a", "a", "a"), ("a", "a")) == ("aa", "a")
    assert merge_symbols(("a", "b", "a", "b"), ("a", "b")) == ("ab", "ab")


def test_merge_symbols_matches_whole_symbols_only():
    """A pair never matches text spread across a different symbol split."""
    seg = ("ab", "c", "a", "bc")
    assert merge_symbols(seg, ("b", "c")) == seg


def test_merge_pair_updates_table_and_vocab(table, vocab):
    """Merging replaces the pair and records the new symbol."""
    merged = merge_pair(("t", "a"), table, vocab)
    assert merged.joined()["ta l l _"] == 5
    assert merged.joined()["f a s t e r _"] == 3
    assert vocab.symbols[-1] == "ta"


def test_merge_pair_conserves_frequency(table, vocab):
    """Total frequency mass is unchanged by a merge."""
    merged = merge_pair(("f", "a"), table, vocab)
    assert merged.total_frequency() == table.total_frequency() == 16


def test_merge_pair_leaves_input_table_untouched(table, vocab):
    """The input table is not modified."""
    before = table.joined()
    merge_pair(("t", "a"), table, vocab)
    assert table.joined() == before


def test_merge_pair_twice_is_noop(table, vocab):
    """Re-merging an already merged pair changes nothing and does not raise."""
    once = merge_pair(("t", "a"), table, vocab)
    size = len(vocab)
    twice = merge_pair(("t", "a"), once, vocab)
    assert twice == once
    assert len(vocab) == size


def test_merge_pair_reduces_boundaries(table, vocab):
    """Merging never increases the number of symbols."""
    merged = merge_pair(("l", "l"), table, vocab)
    before = sum(len(seg) for seg in table)
    after = sum(len(seg) for seg in merged)
    assert after == before - 2


# Vocabulary
# ---------------------------------------------------------------------------


def test_vocabulary_base_layout(vocab):
    """Base vocabulary is the alphabet followed by both markers."""
    assert len(vocab) == 28
    assert vocab.symbols[:3] == ("a", "b", "c")
    assert vocab.symbols[-2:] == ("_", "[UNK]")


def test_vocabulary_add_is_idempotent(vocab):
    """Adding an existing symbol does not duplicate it."""
    assert vocab.add("ta") is True
    assert vocab.add("ta") is False
    assert vocab.symbols.count("ta") == 1


def test_merge_pair_sums_entries_that_collide():
    """Entries that become the same segmentation keep their combined frequency."""
    table = TokenFrequencyTable({("a", "b", "_"): 2, ("ab", "_"): 3})
    merged = merge_pair(("a", "b"), table, SymbolVocabulary())
    assert merged.joined() == {"ab _": 5}
    assert merged.total_frequency() == table.total_frequency()
