"""
Language catalog: fetched language records plus the static, per-language vocabulary
(category labels keyed by language id, author names keyed by culture code).

The vocabulary tables are validated when loaded, so a language that is only partly
translated is rejected at startup instead of halfway through a scrape.
"""
import logging
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from prayerbook.core.errors import (
    ConfigurationGapError,
    LanguageNotFoundError,
    MissingTranslationError,
)
from prayerbook.prayers.schemas import Language

logger = logging.getLogger(__name__)

CATEGORY_LABELS: Dict[int, Dict[str, str]] = {
    1: {  # English
        "code": "en",
        "obligatory": "Obligatory",
        "tablets": "Tablets",
        "occasional": "Occasional",
        "fast": "Fast",
    },
    3: {  # German
        "code": "de",
        "obligatory": "Pflichtgebet",
        "tablets": "Tafel",
        "occasional": "Gelegentlich",
        "fast": "Fasten",
    },
}

AUTHOR_NAMES: Dict[str, Dict[int, str]] = {
    "en": {1: "The Báb", 2: "Bahá'u'lláh", 3: "`Abdu'l-Bahá"},  # English
    "de": {1: "Der Báb", 2: "Bahá'u'lláh", 3: "`Abdu'l-Bahá"},  # German
    "es": {1: "El Báb", 2: "Bahá'u'lláh", 3: "`Abdu'l-Bahá"},  # Spanish
    "fr": {1: "Le Bab", 2: "Bahá'u'lláh", 3: "`Abdu'l-Bahá"},  # French
    "nl": {1: "de Báb", 2: "Bahá'u'lláh", 3: "`Abdu'l-Bahá"},  # Dutch
    "is": {1: "Bábinn", 2: "Bahá’u’lláh", 3: "`Abdu'l-Bahá"},  # Icelandic
    "fj": {1: "Na Báb", 2: "Bahá’u’lláh", 3: "`Abdu'l-Bahá"},  # Fijian
    "cs": {1: "Báb", 2: "Bahá’u’lláh", 3: "`Abdu'l-Bahá"},  # Czech
    "sk": {1: "Báb", 2: "Bahá’u’lláh", 3: "`Abdu'l-Bahá"},  # Slovak
}


class CategoryLabels(BaseModel):
    """The four category labels of one language, in that language."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=1)
    obligatory: str = Field(min_length=1)
    tablets: str = Field(min_length=1)
    occasional: str = Field(min_length=1)
    fast: str = Field(min_length=1)


class LanguageTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    labels: Dict[int, CategoryLabels]
    authors: Dict[str, Dict[int, str]]

    @model_validator(mode="after")
    def _check_complete(self) -> "LanguageTables":
        for language_id, labels in self.labels.items():
            if not self.authors.get(labels.code):
                raise ValueError(
                    f"language {language_id} ({labels.code}) has category labels but no author table"
                )
        return self


def load_language_tables(overrides: Optional[Dict[str, Any]] = None) -> LanguageTables:
    """
    Build the vocabulary tables from the built-in ones plus the `languages` config section.
    A label entry replaces the built-in entry for that id; an author table replaces the one for that code.
    """
    overrides = overrides or {}
    if not isinstance(overrides, dict):
        raise ConfigurationGapError("languages must be a dictionary")
    for name in ("labels", "authors"):
        if not isinstance(overrides.get(name) or {}, dict):
            raise ConfigurationGapError(f"languages.{name} must be a dictionary")

    labels: Dict[Any, Any] = dict(CATEGORY_LABELS)
    labels.update(overrides.get("labels") or {})
    authors: Dict[Any, Any] = dict(AUTHOR_NAMES)
    authors.update(overrides.get("authors") or {})
    try:
        tables = LanguageTables(labels=labels, authors=authors)
    except ValidationError as e:
        raise ConfigurationGapError(f"Incomplete language tables: {e}") from e
    logger.debug(f"Loaded labels for {len(tables.labels)} language(s), authors for {len(tables.authors)}")
    return tables


class LanguageCatalog:
    """Fetched languages keyed by id, with label and author lookups."""

    def __init__(self, languages: Iterable[Language], tables: Optional[LanguageTables] = None):
        self.languages: Dict[int, Language] = {lang.id: lang for lang in languages}
        self.tables = tables or load_language_tables()

    def __len__(self) -> int:
        return len(self.languages)

    def get(self, language_id: int) -> Language:
        language = self.languages.get(language_id)
        if language is None:
            raise LanguageNotFoundError(language_id)
        return language

    def _labels(self, language: Language, what: str) -> CategoryLabels:
        labels = self.tables.labels.get(language.id)
        if labels is None:
            raise MissingTranslationError(what, language.english_name or language.culture)
        return labels

    def obligatory(self, language: Language) -> str:
        return self._labels(language, "Obligatory").obligatory

    def tablets(self, language: Language) -> str:
        return self._labels(language, "Tablets").tablets

    def occasional(self, language: Language) -> str:
        return self._labels(language, "Occasional").occasional

    def fast(self, language: Language) -> str:
        return self._labels(language, "Fast").fast

    def author_name(self, language: Language, author_id: int) -> str:
        authors = self.tables.authors.get(language.culture)
        if not authors:
            raise MissingTranslationError("author names", language.english_name or language.culture)
        name = authors.get(author_id)
        if name is None:
            raise MissingTranslationError(f"author {author_id}", language.english_name or language.culture)
        return name

    def require_supported(self, language: Language) -> None:
        """Fail before scraping if the language has no labels or no author table."""
        self._labels(language, "Obligatory")
        if not self.tables.authors.get(language.culture):
            raise MissingTranslationError("author names", language.english_name or language.culture)
