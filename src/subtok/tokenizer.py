"""
Greedy longest-match subword segmentation and a trainable tokenizer facade.
"""

import logging
from collections.abc import Collection, Iterable, Iterator, Mapping
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Final, TextIO

from ._sanitise import render_symbol
from .corpus import count_words
from .errors import ModelLoadError, TrainingError
from .trainer import learn
from .types import Symbol, SymbolPair
from .vocab import (
    DEFAULT_ALPHABET,
    END_OF_WORD,
    SEPARATOR,
    UNKNOWN,
    SymbolVocabulary,
    TokenFrequencyTable,
)

PREFIX: Final[str] = "SubTok"
try:
    _version = version("subtok")
except PackageNotFoundError:
    _version = "dev"

VERSION: Final[str] = _version
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"

log = logging.getLogger(__name__)


def segment(
    word: str,
    vocabulary: Collection[Symbol],
    *,
    eow: Symbol = END_OF_WORD,
    unk: Symbol = UNKNOWN,
) -> list[Symbol]:
    """
    Split a word into known symbols, longest match first, from the left.

    The end-of-word marker is appended unless the word already ends with it.
    At each position the longest substring found in ``vocabulary`` is taken;
    if no prefix of the remainder is known, a single unknown marker is emitted
    and segmentation stops. Never raises.

    :param word: Raw word, with or without the end-of-word marker.
    :param vocabulary: Known symbols, only used for membership tests.
    :param eow: End-of-word marker.
    :param unk: Marker emitted for an unmatched remainder.
    :returns: Matched symbols, possibly followed by ``unk``.
    """
    if not word.endswith(eow):
        word += eow

    output: list[Symbol] = []
    start, end = 0, len(word)
    while start < len(word) and start < end:
        if word[start:end] in vocabulary:
            output.append(word[start:end])
            start = end
            end = len(word)
        else:
            end -= 1
    # window shrank to nothing: the rest of the word is unknown
    if start < len(word):
        output.append(unk)

    return output


def segment_batch(
    words: Iterable[str],
    vocabulary: Collection[Symbol],
    *,
    eow: Symbol = END_OF_WORD,
    unk: Symbol = UNKNOWN,
) -> list[list[Symbol]]:
    """Segment each word in order."""
    return [segment(word, vocabulary, eow=eow, unk=unk) for word in words]


class SubwordTokenizer:
    """
    Trainable BPE subword tokenizer.

    Learns merges from word frequencies (or raw text), segments words against
    the learned vocabulary, and provides serialization methods.
    """

    def __init__(
        self,
        alphabet: Iterable[Symbol] = DEFAULT_ALPHABET,
        *,
        eow: Symbol = END_OF_WORD,
        unk: Symbol = UNKNOWN,
        pattern: str = "",
    ) -> None:
        """Initialize an untrained tokenizer with its base alphabet and markers."""
        self.alphabet: list[Symbol] = list(alphabet)
        self.eow = eow
        self.unk = unk
        # regex pattern for splitting raw training text into words
        self.pat = pattern
        # learned pairs in merge order
        self.merges: list[SymbolPair] = []
        self.vocab: SymbolVocabulary = SymbolVocabulary.from_alphabet(
            self.alphabet, eow=eow, unk=unk
        )
        # vocabulary before the first merge, alphabet and corpus characters
        self.base_symbols: list[Symbol] = list(self.vocab)
        # final training segmentation, absent after load()
        self.table: TokenFrequencyTable | None = None
        self._trained = False

    def train(
        self, word_freqs: Mapping[str, int], num_merges: int, verbose: bool = False
    ) -> None:
        """
        Learn up to ``num_merges`` merges from raw word frequencies.

        :param word_freqs: Mapping of raw word to positive frequency.
        :param num_merges: Maximum number of merges to learn.
        :param verbose: Log each learned merge when ``True``.
        :raises TrainingError: If the input is empty or invalid.
        """
        result = learn(
            word_freqs,
            num_merges,
            self.alphabet,
            eow=self.eow,
            unk=self.unk,
            verbose=verbose,
        )
        self.merges = result.merges
        self.base_symbols = list(result.base_symbols)
        self.vocab = result.vocab
        self.table = result.table
        self._trained = True

    def train_from_text(
        self, text: str | list[str], num_merges: int, verbose: bool = False
    ) -> None:
        """
        Count words in raw text with the tokenizer's pattern, then train.

        :raises PatternError: If the tokenizer's pattern is invalid.
        :raises TrainingError: If the text contains no words.
        """
        word_freqs = count_words(text, self.pat or None)
        self.train(word_freqs, num_merges, verbose=verbose)

    def segment(self, word: str) -> list[Symbol]:
        """Segment one word against the learned vocabulary."""
        self._check_trained("segmenting")
        return segment(word, self.vocab, eow=self.eow, unk=self.unk)

    def segment_batch(self, words: Iterable[str]) -> list[list[Symbol]]:
        """Segment multiple words against the learned vocabulary."""
        self._check_trained("segmenting")
        return segment_batch(words, self.vocab, eow=self.eow, unk=self.unk)

    def vocab_size(self) -> int:
        """Return the number of symbols in the vocabulary."""
        return len(self.vocab)

    def save(self, file_prefix: str) -> None:
        """
        Save tokenizer state to disk.

        Creates two files: a .model file with base symbols and merges and a
        .vocab file with human-readable symbol derivations.

        :param file_prefix: Path prefix for output files.
        :raises TrainingError: If the tokenizer has not been trained yet.
        """
        self._check_trained("saving")
        log.info(f"saving tokenizer to {file_prefix}")
        self._save_model(file_prefix)
        self._save_vocab(file_prefix)
        log.info("tokenizer saved successfully")

    def load(self, model_filename: str) -> None:
        """
        Load tokenizer state from a .model file.

        Restores markers, base symbols and merges, then rebuilds the vocabulary
        by replaying the merges in order.

        :param model_filename: Path to the .model file.
        :raises ModelLoadError: If file does not exist, extension is not .model,
                                version mismatch occurs or the file is malformed.
        """
        path = Path(model_filename)

        if not path.exists():
            raise ModelLoadError("model filepath does not exist", model_path=str(path))

        if path.suffix != MODEL_SUFFIX:
            raise ModelLoadError("expected .model file", model_path=str(path))

        log.info(f"loading model from {path}")

        with path.open("r", encoding="utf-8") as f:
            reader = _ModelReader(f, str(path))

            # verify version match
            header = reader.next_line().split(" ")
            if len(header) != 2 or header[0] != PREFIX:
                raise reader.error("not a subtok model file")
            if header[1] != VERSION:
                raise ModelLoadError(
                    "model version mismatch",
                    model_path=str(path),
                    version_mismatch=(header[1], VERSION),
                )

            eow = reader.field("eow")
            unk = reader.field("unk")
            pat = reader.field("re", allow_empty=True)

            reader.marker()
            n_base = reader.next_line()
            try:
                n_base = int(n_base)
                if n_base < 0:
                    raise ValueError(n_base)
            except ValueError as e:
                raise reader.error(f"invalid base symbol count: {n_base}") from e

            base: list[Symbol] = []
            for _ in range(n_base):
                sym = reader.next_line()
                if not sym:
                    raise reader.error("missing base symbol")
                base.append(sym)
            reader.marker()

            log.debug(f"loaded {len(base)} base symbols")

            merges: list[SymbolPair] = []
            for line in reader:
                parts = line.split()
                if len(parts) != 2:
                    raise reader.error(f"invalid merge format: {line!r}")
                merges.append((parts[0], parts[1]))

            log.debug(f"loaded {len(merges)} merge rules")

        vocab = SymbolVocabulary(base)
        for left, right in merges:
            vocab.add(left + right)

        # update tokenizer state only after a successful read
        self.eow, self.unk, self.pat = eow, unk, pat
        self.alphabet = [sym for sym in base if sym not in (eow, unk)]
        self.base_symbols = base
        self.merges = merges
        self.vocab = vocab
        self.table = None
        self._trained = True

        log.info(
            f"model loaded successfully: {len(self.merges)} merge rules, {len(self.vocab)} total symbols"
        )

    def _save_model(self, file_prefix: str) -> None:
        """Persist markers, base symbols and merges to a .model file."""
        model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
        # create directory if does not exist
        model_path.parent.mkdir(parents=True, exist_ok=True)

        base = self.base_symbols
        log.debug(
            f"saving {len(base)} base symbols and {len(self.merges)} merge rules to {model_path}"
        )

        with model_path.open("w", encoding="utf-8", newline="\n") as f:
            # header: version, markers, word pattern if exists
            f.write(f"{PREFIX} {VERSION}\n")
            f.write(f"eow {self.eow}\n")
            f.write(f"unk {self.unk}\n")
            f.write(f"re {self.pat}\n")
            f.write("---\n")
            f.write(f"{len(base)}\n")
            for sym in base:
                f.write(f"{sym}\n")
            f.write("---\n")
            for left, right in self.merges:
                f.write(f"{left}{SEPARATOR}{right}\n")

    def _save_vocab(self, file_prefix: str) -> None:
        """Persist human-readable symbol derivations to a .vocab file."""
        vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
        vocab_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving vocab to {vocab_path}")

        # first merge that produced each symbol
        derivations: dict[Symbol, SymbolPair] = {}
        for pair in self.merges:
            derivations.setdefault(pair[0] + pair[1], pair)

        n_base = len(self.base_symbols)
        with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
            for i, sym in enumerate(self.vocab):
                if i >= n_base and sym in derivations:
                    left, right = derivations[sym]
                    f.write(
                        f"[{i}] [{render_symbol(left)}][{render_symbol(right)}] -> {render_symbol(sym)}\n"
                    )
                else:
                    f.write(f"[{i}] {render_symbol(sym)}\n")

    def _check_trained(self, action: str) -> None:
        if not self._trained:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before {action}"
            )


class _ModelReader:
    """Line reader over a .model file that tracks the current line number."""

    def __init__(self, f: TextIO, model_path: str) -> None:
        self.f = f
        self.model_path = model_path
        self.line_no = 0

    def next_line(self) -> str:
        self.line_no += 1
        return self.f.readline().rstrip("\n")

    def __iter__(self) -> Iterator[str]:
        for line in self.f:
            self.line_no += 1
            yield line.rstrip("\n")

    def error(self, message: str) -> ModelLoadError:
        return ModelLoadError(message, model_path=self.model_path, line_no=self.line_no)

    def field(self, name: str, allow_empty: bool = False) -> str:
        """Read a ``<name> <value>`` header line."""
        line = self.next_line()
        if not line.startswith(f"{name} "):
            raise self.error(f"expected {name} header line got {line!r}")
        value = line[len(name) + 1 :]
        if not value and not allow_empty:
            raise self.error(f"empty {name} header value")
        return value

    def marker(self) -> None:
        line = self.next_line()
        if line != "---":
            raise self.error(f"sequence marker missing: (expected ---) (got {line!r})")
