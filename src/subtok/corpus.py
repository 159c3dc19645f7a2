"""Turn raw text into the word frequencies consumed by ``learn``."""

from collections import Counter
import logging

from .pattern import WordPattern, compile_pattern
from .types import WordFrequencies

log = logging.getLogger(__name__)


def count_words(
    text: str | list[str],
    pattern: str | None = None,
    lowercase: bool = True,
) -> WordFrequencies:
    """
    Count word occurrences in raw text.

    Words are the matches of ``pattern`` (default: runs of letters), counted
    in order of first appearance.

    :param text: Raw text as a single string or list of strings.
    :param pattern: Regex used to find words; defaults to ``WordPattern.LETTERS``.
    :param lowercase: Lowercase text before matching so words fit a lowercase alphabet.
    :returns: Mapping of word to frequency.
    :raises PatternError: If ``pattern`` is not a valid regex.
    """
    compiled = compile_pattern(pattern or WordPattern.LETTERS.value)

    # handle list input
    if isinstance(text, list):
        text = "\n".join(text)
    if lowercase:
        text = text.lower()

    counts: Counter[str] = Counter()
    for m in compiled.finditer(text):
        word = m.group(0)
        # patterns such as \s* can produce empty or whitespace matches
        if word and not any(c.isspace() for c in word):
            counts[word] += 1

    log.debug(f"counted {len(counts)} distinct words ({counts.total()} total)")
    return dict(counts)
