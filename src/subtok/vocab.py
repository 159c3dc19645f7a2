"""
Symbol vocabulary and word-frequency table used during BPE learning.
"""

import logging
import string
from collections.abc import Iterable, Iterator, Mapping
from typing import Final

from .errors import TrainingError
from .types import Segmentation, Symbol

# marker appended to every word so merges never cross word boundaries
END_OF_WORD: Final[Symbol] = "_"
# emitted by the segmenter for an unmatched remainder, never learned
UNKNOWN: Final[Symbol] = "[UNK]"
DEFAULT_ALPHABET: Final[str] = string.ascii_lowercase
# joins symbols in the human-readable views and the model file
SEPARATOR: Final[str] = " "

log = logging.getLogger(__name__)


class SymbolVocabulary:
    """
    Ordered, duplicate-free collection of symbols.

    Insertion order is base symbols first, then merged symbols in the order
    they were learned. Membership tests are backed by a set.
    """

    def __init__(self, symbols: Iterable[Symbol] = ()) -> None:
        self._symbols: list[Symbol] = []
        self._index: set[Symbol] = set()
        for sym in symbols:
            self.add(sym)

    @classmethod
    def from_alphabet(
        cls,
        alphabet: Iterable[Symbol] = DEFAULT_ALPHABET,
        eow: Symbol = END_OF_WORD,
        unk: Symbol = UNKNOWN,
    ) -> "SymbolVocabulary":
        """Build the base vocabulary: alphabet characters, then both markers."""
        vocab = cls(alphabet)
        vocab.add(eow)
        vocab.add(unk)
        return vocab

    def add(self, symbol: Symbol) -> bool:
        """Append ``symbol`` unless present; return whether it was added."""
        if symbol in self._index:
            return False
        self._symbols.append(symbol)
        self._index.add(symbol)
        return True

    @property
    def symbols(self) -> tuple[Symbol, ...]:
        """Symbols in insertion order."""
        return tuple(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolVocabulary):
            return NotImplemented
        return self._symbols == other._symbols

    def __repr__(self) -> str:
        return f"SymbolVocabulary({self._symbols!r})"


class TokenFrequencyTable:
    """
    Mapping from a word's current segmentation to its corpus frequency.

    Segmentations are tuples of symbols rather than separator-joined strings,
    so a merge can only ever match whole adjacent symbols. Entry order follows
    the order in which words were first supplied.
    """

    def __init__(self, entries: Mapping[Segmentation, int] | None = None) -> None:
        self._entries: dict[Segmentation, int] = {}
        if entries:
            for seg, freq in entries.items():
                self._add(tuple(seg), freq)

    @classmethod
    def from_word_freqs(
        cls, word_freqs: Mapping[str, int], eow: Symbol = END_OF_WORD
    ) -> "TokenFrequencyTable":
        """
        Build the initial table from raw word frequencies.

        Each word gets the end-of-word marker appended (unless it already ends
        with it) and is split into one symbol per character; the marker itself
        stays a single symbol.

        :param word_freqs: Mapping of raw word to positive frequency.
        :param eow: End-of-word marker.
        :raises TrainingError: If a word contains whitespace or a frequency is not positive.
        """
        table = cls()
        for word, freq in word_freqs.items():
            if any(c.isspace() for c in word):
                raise TrainingError("words must not contain whitespace", word=word)
            table._add(split_word(word, eow), freq)
        return table

    def _add(self, seg: Segmentation, freq: int) -> None:
        """Add ``freq`` to ``seg``, summing entries that share a segmentation."""
        if isinstance(freq, bool) or not isinstance(freq, int) or freq < 1:
            raise TrainingError(
                "frequency must be a positive integer",
                word="".join(seg),
                freq=freq,
            )
        self._entries[seg] = self._entries.get(seg, 0) + freq

    def items(self) -> Iterator[tuple[Segmentation, int]]:
        return iter(self._entries.items())

    def total_frequency(self) -> int:
        """Sum of frequencies over all entries."""
        return sum(self._entries.values())

    def joined(self, separator: str = SEPARATOR) -> dict[str, int]:
        """Return a ``"t a l l _" -> freq`` view for inspection."""
        return {separator.join(seg): freq for seg, freq in self._entries.items()}

    def __iter__(self) -> Iterator[Segmentation]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, seg: object) -> bool:
        return seg in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenFrequencyTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"TokenFrequencyTable({self.joined()!r})"


def split_word(word: str, eow: Symbol = END_OF_WORD) -> Segmentation:
    """Split ``word`` into characters followed by the end-of-word marker."""
    if eow and word.endswith(eow):
        word = word[: -len(eow)]
    return (*word, eow)
