from pathlib import Path

import pytest

from phrasebook.cache import CACHE_ENV
from phrasebook.store import Translations
from tests.infrastructure.file_utils import write_phrase_file


@pytest.fixture(autouse=True)
def _no_cache_env(monkeypatch):
    # tests decide about caching themselves
    monkeypatch.delenv(CACHE_ENV, raising=False)


@pytest.fixture
def phrase_file(tmp_path: Path) -> Path:
    """Small English phrase file with nested keys and helper calls."""
    return write_phrase_file(
        tmp_path / "en-GB.yaml",
        """
        locale: en-GB
        context:
          brand: Acme
        translations:
          greeting: "Hello ${name}"
          welcome: "Welcome to ${brand}"
          cart:
            items: "${count} ${selectPhrase(count, 'plural', {one: 'item', other: 'items'})}"
        """,
    )


@pytest.fixture
def translations() -> Translations:
    return Translations(
        "en-GB",
        translations={
            "foo": "bar",
            "greeting": "The quick ${animalColor} ${animalSpecies} jumps over the lazy dog",
            "menu": {"open": "Open", "close": "Close"},
        },
    )
