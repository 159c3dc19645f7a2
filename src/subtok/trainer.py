"""Standalone BPE vocabulary learning over word frequencies."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging

from ._bpe import count_pair_frequencies, merge_pair, most_frequent_pair
from ._decorators import measure_time
from .errors import EmptyVocabularyError, TrainingError
from .types import Symbol, SymbolPair
from .vocab import (
    DEFAULT_ALPHABET,
    END_OF_WORD,
    UNKNOWN,
    SymbolVocabulary,
    TokenFrequencyTable,
)

log = logging.getLogger(__name__)


@dataclass
class BPETrainingResult:
    """Results from one BPE learning run."""

    vocab: SymbolVocabulary
    table: TokenFrequencyTable
    merges: list[SymbolPair] = field(default_factory=list)
    n_merges_completed: int = 0
    # vocabulary before the first merge
    base_symbols: tuple[Symbol, ...] = ()


@measure_time
def learn(
    word_freqs: Mapping[str, int],
    num_merges: int,
    alphabet: Iterable[Symbol] = DEFAULT_ALPHABET,
    *,
    eow: Symbol = END_OF_WORD,
    unk: Symbol = UNKNOWN,
    verbose: bool = False,
) -> BPETrainingResult:
    """
    Learn a subword vocabulary by repeatedly merging the most frequent pair.

    Each word is split into characters plus the end-of-word marker. The
    vocabulary starts as the alphabet, the two markers and any corpus
    character missing from the alphabet; every merge appends one symbol.
    Learning stops early, with a warning, once every word is a single symbol.

    Example:
       >>> result = learn({"fast": 4, "faster": 3, "tall": 5, "taller": 4}, 10)
       >>> result.table.joined()["tall er_"]
       4

    :param word_freqs: Mapping of raw word to positive frequency.
    :param num_merges: Maximum number of merges to perform.
    :param alphabet: Base characters present in the vocabulary before learning.
    :param eow: End-of-word marker appended to every word.
    :param unk: Unknown marker reserved for segmentation.
    :param verbose: Log each learned merge when ``True``.
    :returns: Final vocabulary, final table, merge history and merge count.
    :raises TrainingError: If the input is empty or invalid.
    """
    if num_merges < 0:
        raise TrainingError(f"num_merges must be non-negative, got {num_merges}")
    if not word_freqs:
        raise TrainingError("empty word frequencies, no training performed")
    for marker in (eow, unk):
        if not marker or any(c.isspace() for c in marker):
            raise TrainingError(
                "markers must be non-empty and free of whitespace", word=marker
            )
    alphabet = list(alphabet)
    for sym in alphabet:
        if not sym or any(c.isspace() for c in sym):
            raise TrainingError(
                "alphabet symbols must be non-empty and free of whitespace", word=sym
            )

    table = TokenFrequencyTable.from_word_freqs(word_freqs, eow=eow)
    vocab = SymbolVocabulary.from_alphabet(alphabet, eow=eow, unk=unk)
    for sym in (s for seg in table for s in seg):
        if vocab.add(sym):
            log.debug(f"added corpus character outside the alphabet: {sym!r}")

    log.debug(
        f"learning from {len(table)} words, initial vocabulary of {len(vocab)} symbols"
    )

    base_symbols = vocab.symbols
    merges: list[SymbolPair] = []
    for i in range(num_merges):
        try:
            pair = most_frequent_pair(count_pair_frequencies(table))
        except EmptyVocabularyError:
            log.warning(
                f"no more symbol pairs to merge after {i} merges "
                f"(requested {num_merges}) stopping early"
            )
            break
        table = merge_pair(pair, table, vocab)
        merges.append(pair)

        if verbose:
            log.info("merge #%d/%d: %s -> %r", i + 1, num_merges, pair, "".join(pair))

    return BPETrainingResult(
        vocab=vocab,
        table=table,
        merges=merges,
        n_merges_completed=len(merges),
        base_symbols=base_symbols,
    )


__all__ = ["BPETrainingResult", "learn"]
