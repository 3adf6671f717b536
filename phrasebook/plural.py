"""
Plural and ordinal category selection.

Returns CLDR plural categories ("zero", "one", "two", "few", "many",
"other") for a number. Only the rules of languages registered here are
known; other locales raise UnsupportedLocaleError.
"""

from __future__ import annotations

from typing import Callable, Dict, Union

from .errors import UnsupportedLocaleError

Number = Union[int, float]
PluralRuleFn = Callable[[Number, bool], str]

PLURAL_CATEGORIES = ("zero", "one", "two", "few", "many", "other")


def _split_number(n: Number) -> tuple:
    """Splits a number into its integer digits and visible fraction digits."""
    text = repr(n) if isinstance(n, float) else str(n)
    text = text.lstrip("-")
    if "." in text:
        integer, fraction = text.split(".", 1)
        if fraction == "0" and isinstance(n, float) and n.is_integer():
            fraction = ""
        return integer, fraction
    return text, ""


def _english(n: Number, ordinal: bool) -> str:
    integer, fraction = _split_number(n)
    is_integer = not fraction

    if ordinal:
        if not is_integer:
            return "other"
        n10 = integer[-1:]
        n100 = integer[-2:]
        if n10 == "1" and n100 != "11":
            return "one"
        if n10 == "2" and n100 != "12":
            return "two"
        if n10 == "3" and n100 != "13":
            return "few"
        return "other"

    return "one" if integer == "1" and is_integer else "other"


def _other_only(n: Number, ordinal: bool) -> str:
    return "other"


_RULES: Dict[str, PluralRuleFn] = {
    "en": _english,
    # Languages without plural inflection
    "ja": _other_only,
    "ko": _other_only,
    "zh": _other_only,
}


def register_plural_rule(language: str, rule: PluralRuleFn) -> None:
    """Registers (or replaces) the rule of a language or a full locale tag."""
    _RULES[language.lower()] = rule


def get_plural_rule(locale: str, value: Number, ordinal: bool = False) -> str:
    """
    Returns the plural (or ordinal) category of a number for a locale.

    The full tag is tried first ("en-GB"), then its language ("en").

    Raises:
        UnsupportedLocaleError: When no rule is known for the locale
    """
    tag = locale.replace("_", "-").lower()
    rule = _RULES.get(tag) or _RULES.get(tag.split("-")[0])
    if rule is None:
        raise UnsupportedLocaleError(locale)
    return rule(value, ordinal)


__all__ = ["PLURAL_CATEGORIES", "PluralRuleFn", "register_plural_rule", "get_plural_rule"]
