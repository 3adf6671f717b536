"""
Translation store for a single locale.

Keeps the phrase texts by dot-notation key, a default interpolation
context and a parse cache. Rendering a key parses its phrase once and
interprets it on every call against the merged context.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Union

from .cache import ParseCache
from .errors import MissingPhraseError, MissingTranslationError
from .interpolation.interpreter import PhraseInterpreter
from .interpolation.values import join_parts, to_text
from .plural import get_plural_rule

logger = logging.getLogger(__name__)

SelectType = Literal["key", "plural", "ordinal"]

TranslationTree = Mapping[str, Union[str, "TranslationTree"]]


def flatten_translations(tree: TranslationTree, prefix: str = "") -> Dict[str, str]:
    """
    Flattens nested translations into dot-notation keys.

    {"menu": {"open": "Open"}} → {"menu.open": "Open"}
    """
    flat: Dict[str, str] = {}
    for key, value in tree.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_translations(value, full_key))
        elif isinstance(value, str):
            flat[full_key] = value
        else:
            raise TypeError(
                f"Translation '{full_key}' must be a string or a mapping, got {type(value).__name__}"
            )
    return flat


class Translations:
    """
    Phrases of one locale plus the context used to render them.

    Phrases can call back into the store: the default context binds
    `t`, `tToParts`, `selectPhrase`, `getPluralRule` and `getOrdinalRule`.
    """

    def __init__(
        self,
        locale: str,
        *,
        translations: Optional[TranslationTree] = None,
        default_context: Optional[Mapping[str, Any]] = None,
        cache: Optional[ParseCache] = None,
    ):
        self.locale = locale
        self.cache = cache if cache is not None else ParseCache()
        self.interpreter = PhraseInterpreter()

        self._translations: Dict[str, str] = {}
        self._context: Dict[str, Any] = {}

        self.extend_context({
            "t": self.t,
            "tToParts": self.t_to_parts,
            "selectPhrase": self.select_phrase,
            "getPluralRule": self.get_plural_rule,
            "getOrdinalRule": self.get_ordinal_rule,
            **(default_context or {}),
        })
        self.extend_translations(translations or {})

    # ---------------------------- store ---------------------------- #

    @property
    def translations(self) -> Mapping[str, str]:
        """Read-only view of the flattened phrase texts."""
        return dict(self._translations)

    @property
    def context(self) -> Mapping[str, Any]:
        """Read-only view of the default interpolation context."""
        return dict(self._context)

    def extend_translations(self, translations: TranslationTree) -> "Translations":
        """
        Adds or replaces phrases. Nested mappings are flattened into dot keys.

        Cached ASTs of replaced keys are evicted.

        Returns:
            self, for chaining
        """
        flat = flatten_translations(translations)
        self._translations.update(flat)
        self.cache.evict_many(flat.keys())
        logger.debug(f"Extended '{self.locale}' translations with {len(flat)} key(s)")
        return self

    def extend_context(self, context: Mapping[str, Any]) -> "Translations":
        """Adds or replaces default context entries. Returns self."""
        self._context = {**self._context, **context}
        return self

    def has_translation(self, key: str) -> bool:
        return key in self._translations

    def keys(self) -> Iterator[str]:
        return iter(sorted(self._translations))

    # ---------------------------- rendering ---------------------------- #

    def t_to_parts(self, key: str, context: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """
        Renders a phrase into its evaluated parts.

        Useful when parts are not plain strings and the caller wants to
        keep them (e.g. to build rich markup).

        Raises:
            MissingTranslationError: When the key is unknown
            InvalidSyntaxError: When the phrase cannot be parsed
            EvaluationError: When the phrase calls something that is not a function
        """
        try:
            text = self._translations[key]
        except KeyError:
            raise MissingTranslationError(self.locale, key) from None

        ast = self.cache.get_or_parse(key, text)
        return self.interpreter.interpret(ast, {**self._context, **(context or {})})

    def t(self, key: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """Renders a phrase into a string."""
        return join_parts(self.t_to_parts(key, context))

    # ---------------------------- helpers ---------------------------- #

    def get_plural_rule(self, value: Union[int, float]) -> str:
        return get_plural_rule(self.locale, value, ordinal=False)

    def get_ordinal_rule(self, value: Union[int, float]) -> str:
        return get_plural_rule(self.locale, value, ordinal=True)

    def select_phrase(self, value: Any, type_: SelectType, phrases: Mapping[str, Any]) -> str:
        """
        Selects a phrase from a mapping.

        - type "key": value is used as the key
        - type "plural" / "ordinal": the plural or ordinal category of value is the key

        Falls back to the "default" phrase when the selected one is missing.

        Raises:
            MissingPhraseError: When neither the selected phrase nor "default" exists
        """
        if type_ == "plural":
            key = self.get_plural_rule(value)
        elif type_ == "ordinal":
            key = self.get_ordinal_rule(value)
        else:
            key = value

        if not isinstance(key, str):
            key = to_text(key)

        phrase = phrases.get(key)
        if isinstance(phrase, str):
            return phrase

        default = phrases.get("default")
        if isinstance(default, str):
            return default

        raise MissingPhraseError(key)


__all__ = ["Translations", "TranslationTree", "SelectType", "flatten_translations"]
