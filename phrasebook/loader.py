"""
Phrase file loading.

A phrase file is YAML (or JSON) with the locale, optional default
context values and the translation tree:

    locale: en-GB
    context:
      brand: Acme
    translations:
      greeting: "Hello ${name}"
      cart:
        items: "${count} ${selectPhrase(count, 'plural', {one: 'item', other: 'items'})}"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .cache import ParseCache
from .errors import PhraseFileError
from .store import Translations, flatten_translations

_yaml = YAML(typ="safe")


class PhraseFile(BaseModel):
    """Validated content of a phrase file."""
    model_config = ConfigDict(extra="forbid")

    locale: str
    context: Dict[str, Any] = {}
    translations: Dict[str, Any] = {}

    @field_validator("locale")
    @classmethod
    def _locale_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("locale must not be empty")
        return value

    @field_validator("translations")
    @classmethod
    def _translations_are_phrases(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        try:
            flatten_translations(value)
        except TypeError as e:
            raise ValueError(str(e)) from None
        return value


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns its root mapping."""
    if not path.is_file():
        raise PhraseFileError(f"Phrase file not found: {path}")
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise PhraseFileError(f"Failed to parse phrase file {path}: {e}") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise PhraseFileError(f"Phrase file must be a mapping: {path}")
    return raw


def load_phrase_file(path: Path) -> PhraseFile:
    """
    Loads and validates a phrase file.

    Raises:
        PhraseFileError: Missing file, broken YAML or schema violations
    """
    raw = _read_yaml_map(path)
    try:
        return PhraseFile.model_validate(raw)
    except ValidationError as e:
        raise PhraseFileError(f"Invalid phrase file {path}:\n{e}") from e


def build_translations(phrase_file: PhraseFile, *, cache: Optional[ParseCache] = None) -> Translations:
    """Creates a translation store from a loaded phrase file."""
    return Translations(
        phrase_file.locale,
        translations=phrase_file.translations,
        default_context=phrase_file.context,
        cache=cache,
    )


def load_translations(path: Path, *, cache: Optional[ParseCache] = None) -> Translations:
    """Shortcut: load_phrase_file() + build_translations()."""
    return build_translations(load_phrase_file(path), cache=cache)


__all__ = ["PhraseFile", "load_phrase_file", "build_translations", "load_translations"]
