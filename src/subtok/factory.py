"""Factory functions for word patterns and tokenizers."""

from typing import Literal

from .pattern import WordPattern
from .tokenizer import SubwordTokenizer

Pattern = Literal["letters", "ascii", "alnum"]


def list_patterns() -> list[str]:
    """Return names of all available built-in word patterns."""
    return [pat.name.lower() for pat in WordPattern]


def get_pattern(name: Pattern) -> str:
    """
    Look up a built-in word pattern by name (case-insensitive).

    :raises PatternError: If no pattern has that name.
    """
    return WordPattern.get(name)


def from_pretrained(model_path: str) -> SubwordTokenizer:
    """
    Load a pre-trained tokenizer from disk.

    :param model_path: Path to the .model file.
    :return: Loaded tokenizer instance with vocabulary and configuration.
    :raises ModelLoadError: If file doesn't exist, has wrong extension, or is malformed.

    .. code-block:: python

        tokenizer = from_pretrained("path/to/model.model")
        symbols = tokenizer.segment("taller")
    """
    tokenizer = SubwordTokenizer()
    tokenizer.load(model_path)
    return tokenizer
