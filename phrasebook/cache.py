"""
In-memory cache of parsed phrases.

Maps a translation key to the PhraseAST of its current text, so
repeated renders of the same key never re-tokenize or re-parse.
The owner of the phrase texts evicts a key whenever its text is
replaced; entries also remember the text they were parsed from and
are never served for a different text.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from .interpolation.model import PhraseAST
from .interpolation.parser import PhraseParser

logger = logging.getLogger(__name__)

CACHE_ENV = "PHRASEBOOK_CACHE"


def _norm_bool(x: Any) -> bool:
    if isinstance(x, bool):
        return x
    if x is None:
        return False
    s = str(x).strip().lower()
    return s not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class CacheSnapshot:
    enabled: bool
    entries: int
    hits: int
    misses: int


class ParseCache:
    """
    Thread-safe per-key AST memo.

    Parsing runs outside the lock. When two threads miss on the same key
    at once both parse; the ASTs are equal and the first stored one wins.
    """

    def __init__(self, parser: Optional[PhraseParser] = None, *, enabled: Optional[bool] = None):
        # ENV wins, then the flag, then enabled by default
        env = os.environ.get(CACHE_ENV, None)
        if env is not None:
            self.enabled = _norm_bool(env)
        elif enabled is not None:
            self.enabled = bool(enabled)
        else:
            self.enabled = True

        self.parser = parser or PhraseParser()
        self._entries: Dict[str, Tuple[str, PhraseAST]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get_or_parse(self, key: str, text: str) -> PhraseAST:
        """
        Returns the cached AST for a key, parsing and storing it on a miss.

        Args:
            key: Translation key
            text: Current phrase text of the key

        Raises:
            InvalidSyntaxError: When the text cannot be parsed (nothing is stored)
        """
        if not self.enabled:
            return self.parser.parse(text)

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] == text:
                self._hits += 1
                return entry[1]
            self._misses += 1

        ast = self.parser.parse(text)

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] == text:
                return entry[1]
            self._entries[key] = (text, ast)

        logger.debug(f"Parsed and cached phrase '{key}' ({len(ast)} nodes)")
        return ast

    def get(self, key: str) -> Optional[PhraseAST]:
        with self._lock:
            entry = self._entries.get(key)
        return entry[1] if entry is not None else None

    def evict(self, key: str) -> bool:
        """Drops the AST of a key. Returns True if something was dropped."""
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug(f"Evicted cached phrase '{key}'")
        return removed

    def evict_many(self, keys: Iterable[str]) -> int:
        """Drops the ASTs of several keys. Returns how many were dropped."""
        with self._lock:
            return sum(1 for key in list(keys) if self.evict(key))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheSnapshot:
        with self._lock:
            return CacheSnapshot(
                enabled=self.enabled,
                entries=len(self._entries),
                hits=self._hits,
                misses=self._misses,
            )

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["ParseCache", "CacheSnapshot", "CACHE_ENV"]
