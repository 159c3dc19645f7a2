"""SubTok: BPE subword vocabulary learning and greedy segmentation."""

from ._bpe import count_pair_frequencies, merge_pair, merge_symbols, most_frequent_pair
from .corpus import count_words
from .errors import (
    EmptyVocabularyError,
    ModelLoadError,
    PatternError,
    SubTokError,
    TrainingError,
)
from .factory import from_pretrained, get_pattern, list_patterns
from .pattern import WordPattern
from .tokenizer import SubwordTokenizer, segment, segment_batch
from .trainer import BPETrainingResult, learn
from .vocab import (
    DEFAULT_ALPHABET,
    END_OF_WORD,
    UNKNOWN,
    SymbolVocabulary,
    TokenFrequencyTable,
)

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("subtok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "SubwordTokenizer",
    "SymbolVocabulary",
    "TokenFrequencyTable",
    "BPETrainingResult",
    "WordPattern",
    "SubTokError",
    "EmptyVocabularyError",
    "TrainingError",
    "ModelLoadError",
    "PatternError",
    "DEFAULT_ALPHABET",
    "END_OF_WORD",
    "UNKNOWN",
    "learn",
    "segment",
    "segment_batch",
    "count_pair_frequencies",
    "most_frequent_pair",
    "merge_pair",
    "merge_symbols",
    "count_words",
    "get_pattern",
    "list_patterns",
    "from_pretrained",
]
