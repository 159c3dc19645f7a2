"""Custom exception hierarchy for subtok errors."""

import regex as re


def _with_context(message: str, **context: object) -> str:
    """Append ``(key: value)`` for every context value that is set."""
    parts = [f"({key}: {value})" for key, value in context.items() if value is not None]
    return " ".join([message, *parts])


class SubTokError(Exception):
    """Base exception for all subtok errors."""


class EmptyVocabularyError(SubTokError):
    """Raised when no adjacent symbol pairs remain to be merged."""

    def __init__(self, message: str, *, n_entries: int | None = None) -> None:
        super().__init__(_with_context(message, entries=n_entries))
        self.n_entries = n_entries


class TrainingError(SubTokError):
    """Raised when vocabulary learning fails or an untrained tokenizer is used."""

    def __init__(
        self,
        message: str,
        *,
        word: str | None = None,
        freq: int | None = None,
    ) -> None:
        super().__init__(
            _with_context(message, word=None if word is None else repr(word), freq=freq)
        )
        self.word = word
        self.freq = freq


class ModelLoadError(SubTokError):
    """
    Raised when a .model file cannot be read back into a tokenizer.

    :param model_path: File being loaded.
    :param line_no: 1-based line of the offending content, when known.
    :param version_mismatch: ``(found, expected)`` model versions.
    """

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        line_no: int | None = None,
        version_mismatch: tuple[str, str] | None = None,
    ) -> None:
        found, expected = version_mismatch or (None, None)
        super().__init__(
            _with_context(
                message, path=model_path, line=line_no, found=found, expected=expected
            )
        )
        self.model_path = model_path
        self.line_no = line_no
        self.version_mismatch = version_mismatch


class PatternError(SubTokError):
    """
    Raised when a word pattern is unknown or fails to compile.

    :param pattern: The regex pattern that failed.
    :param regex_err: The underlying error from the ``regex`` library.
    """

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        super().__init__(
            _with_context(
                message,
                pattern=None if pattern is None else repr(pattern),
                reason=regex_err,
            )
        )
        self.pattern = pattern
        self.regex_err = regex_err
