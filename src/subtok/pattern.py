"""Built-in word patterns for extracting training words from raw text."""

from enum import Enum

import regex as re

from .errors import PatternError


class WordPattern(str, Enum):
    """
    Pre-defined regex patterns that split raw text into words.

    Matches never contain whitespace, so every match is a valid training word.
    """

    # any run of Unicode letters
    LETTERS = r"\p{L}+"
    # plain English words
    ASCII = r"[A-Za-z]+"
    # letters and digits, e.g. "gpt4"
    ALNUM = r"[\p{L}\p{N}]+"

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise PatternError(
                f"Unknown pattern: {name!r}. "
                f"Valid patterns: {', '.join(pat.name.lower() for pat in cls)}"
            )


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile and validate a regex pattern.

    :param pattern: Regex pattern string to compile.
    :return: Compiled regex pattern.
    :raises PatternError: If pattern is invalid.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e)
