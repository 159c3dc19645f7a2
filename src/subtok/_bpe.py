"""
Core Byte Pair Encoding (BPE) operations over a word-frequency table.
"""

from collections import Counter

from .errors import EmptyVocabularyError
from .types import Segmentation, Symbol, SymbolPair
from .vocab import SymbolVocabulary, TokenFrequencyTable


def count_pair_frequencies(table: TokenFrequencyTable) -> Counter[SymbolPair]:
    """
    Compute the weighted frequency of every adjacent symbol pair in the table.

    Pairs are only formed inside a single word's segmentation, so no pair ever
    spans two words. Each occurrence contributes the frequency of its word.
    Pairs are inserted in first-encountered order, which ``most_frequent_pair``
    relies on to break ties.

    :param table: Current word segmentations with their frequencies.
    :return: Mapping of symbol pairs to summed frequency.
    """
    pairs: Counter[SymbolPair] = Counter()

    for seg, freq in table.items():
        for sym0, sym1 in zip(seg, seg[1:]):
            pairs[(sym0, sym1)] += freq

    return pairs


def most_frequent_pair(pair_counts: Counter[SymbolPair]) -> SymbolPair:
    """
    Return the pair with the highest count.

    Ties go to the pair inserted first into ``pair_counts``.

    :raises EmptyVocabularyError: If there are no pairs left to merge.
    """
    if not pair_counts:
        raise EmptyVocabularyError("no adjacent symbol pairs left to merge")
    # most_common(1) uses max(), which keeps the first of equal counts
    return pair_counts.most_common(1)[0][0]


def merge_symbols(seg: Segmentation, target: SymbolPair) -> Segmentation:
    """
    Replace every occurrence of ``target`` in ``seg`` with the merged symbol.

    Occurrences are matched left to right without overlap, so merging
    ``("a", "a")`` in ``a a a`` yields ``aa a``.
    """
    merged: Symbol = target[0] + target[1]
    newseg: list[Symbol] = []

    i = 0
    while i < len(seg):
        # check if we can form a pair and it matches the target
        if i < len(seg) - 1 and seg[i] == target[0] and seg[i + 1] == target[1]:
            newseg.append(merged)
            i += 2
        else:
            newseg.append(seg[i])
            i += 1

    return tuple(newseg)


def merge_pair(
    pair: SymbolPair, table: TokenFrequencyTable, vocabulary: SymbolVocabulary
) -> TokenFrequencyTable:
    """
    Merge ``pair`` across the whole table and record the new symbol.

    The merged symbol is added to ``vocabulary`` unless already present.
    Frequencies are carried over unchanged, and entries that end up with the
    same segmentation are summed. A pair that no longer occurs leaves every
    segmentation as it was.

    :param pair: Adjacent symbol pair to merge.
    :param table: Table to merge over; it is not modified.
    :param vocabulary: Vocabulary that receives the merged symbol.
    :return: New table with the pair merged.
    """
    vocabulary.add(pair[0] + pair[1])
    merged: Counter[Segmentation] = Counter()
    for seg, freq in table.items():
        merged[merge_symbols(seg, pair)] += freq
    return TokenFrequencyTable(merged)
