"""
phrasebook — interpolation of ${...} expressions in translation phrases.
"""

from __future__ import annotations

from .cache import ParseCache
from .errors import (
    EvaluationError,
    InternalInconsistencyError,
    InvalidSyntaxError,
    MissingPhraseError,
    MissingTranslationError,
    PhraseFileError,
    PhrasebookUserError,
    UnsupportedLocaleError,
)
from .interpolation import UNDEFINED, PhraseAST, interpret, join_parts, parse, tokenize
from .loader import PhraseFile, load_phrase_file, load_translations
from .store import Translations

__all__ = [
    "tokenize",
    "parse",
    "interpret",
    "join_parts",
    "PhraseAST",
    "UNDEFINED",
    "ParseCache",
    "Translations",
    "PhraseFile",
    "load_phrase_file",
    "load_translations",
    "PhrasebookUserError",
    "InvalidSyntaxError",
    "EvaluationError",
    "MissingTranslationError",
    "MissingPhraseError",
    "UnsupportedLocaleError",
    "PhraseFileError",
    "InternalInconsistencyError",
]
