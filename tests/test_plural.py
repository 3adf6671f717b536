"""
Tests for plural and ordinal categories.
"""

import pytest

from phrasebook import plural
from phrasebook.errors import UnsupportedLocaleError
from phrasebook.plural import PLURAL_CATEGORIES, get_plural_rule, register_plural_rule


class TestEnglishRules:

    @pytest.mark.parametrize("value,expected", [
        (1, "one"),
        (1.0, "one"),
        (-1, "one"),
        (0, "other"),
        (2, "other"),
        (1.5, "other"),
        (21, "other"),
    ])
    def test_cardinal(self, value, expected):
        assert get_plural_rule("en-GB", value) == expected

    @pytest.mark.parametrize("value,expected", [
        (1, "one"),
        (2, "two"),
        (3, "few"),
        (4, "other"),
        (11, "other"),
        (12, "other"),
        (13, "other"),
        (21, "one"),
        (22, "two"),
        (23, "few"),
        (101, "one"),
        (111, "other"),
        (2.5, "other"),
    ])
    def test_ordinal(self, value, expected):
        assert get_plural_rule("en", value, ordinal=True) == expected


class TestLocaleLookup:

    @pytest.mark.parametrize("locale", ["en", "en-GB", "en_US", "EN-us"])
    def test_tag_variants(self, locale):
        assert get_plural_rule(locale, 1) == "one"

    def test_languages_without_plural_forms(self):
        for locale in ("ja", "ko-KR", "zh-Hant"):
            assert get_plural_rule(locale, 1) == "other"
            assert get_plural_rule(locale, 2, ordinal=True) == "other"

    def test_unknown_locale_raises(self):
        with pytest.raises(UnsupportedLocaleError, match="Unsupported locale: xx-YY"):
            get_plural_rule("xx-YY", 1)

    def test_register_rule(self, monkeypatch):
        monkeypatch.setattr(plural, "_RULES", dict(plural._RULES))
        register_plural_rule("xx", lambda n, ordinal: "many")
        assert get_plural_rule("xx-YY", 5) == "many"

    def test_full_tag_rule_takes_precedence(self, monkeypatch):
        monkeypatch.setattr(plural, "_RULES", dict(plural._RULES))
        register_plural_rule("en-XA", lambda n, ordinal: "zero")
        assert get_plural_rule("en-XA", 1) == "zero"
        assert get_plural_rule("en-GB", 1) == "one"

    def test_categories_are_cldr_names(self):
        assert PLURAL_CATEGORIES == ("zero", "one", "two", "few", "many", "other")
