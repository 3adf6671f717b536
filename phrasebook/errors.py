"""
Base exceptions for phrasebook.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from PhrasebookUserError.

Programming errors and bugs should NOT inherit from PhrasebookUserError —
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class PhrasebookUserError(Exception):
    """
    Base class for all user-facing errors in phrasebook.

    These errors indicate problems that the phrase author or caller can fix:
    malformed phrases, missing keys, broken phrase files, etc.
    """
    pass


class InvalidSyntaxError(PhrasebookUserError):
    """Phrase text could not be tokenized or parsed."""

    def __init__(self, detail: str = "", position: Optional[int] = None):
        self.detail = detail
        self.position = position
        message = "Invalid translation syntax"
        if detail:
            message += f": {detail}"
        if position is not None:
            message += f" at position {position}"
        super().__init__(message)


class EvaluationError(PhrasebookUserError):
    """A phrase expression failed during evaluation (e.g. calling a non-function)."""
    pass


class MissingTranslationError(PhrasebookUserError):
    def __init__(self, locale: str, key: str):
        self.locale = locale
        self.key = key
        super().__init__(f"The locale '{locale}' is missing the translation with the key '{key}'")


class MissingPhraseError(PhrasebookUserError):
    """select_phrase() found neither the selected phrase nor a default."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing selectable phrase key: {key}")


class UnsupportedLocaleError(PhrasebookUserError):
    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f"Unsupported locale: {locale}")


class PhraseFileError(PhrasebookUserError):
    """Phrase file is missing, unreadable or does not match the expected schema."""
    pass


class InternalInconsistencyError(Exception):
    """
    Interpreter met a syntax-tree node it does not know.

    Only possible when parser and interpreter disagree about the node set,
    so this is a bug, not a user error.
    """
    pass


__all__ = [
    "PhrasebookUserError",
    "InvalidSyntaxError",
    "EvaluationError",
    "MissingTranslationError",
    "MissingPhraseError",
    "UnsupportedLocaleError",
    "PhraseFileError",
    "InternalInconsistencyError",
]
