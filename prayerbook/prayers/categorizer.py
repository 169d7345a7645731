"""
Assigns each prayer a category (and for some kinds a title) from its first tag.
"""
import logging
from collections import Counter
from enum import Enum
from typing import Dict, Iterable

from prayerbook.core.errors import InvalidPrayerError, UnknownTagKindError
from prayerbook.prayers.languages import LanguageCatalog
from prayerbook.prayers.schemas import Language, Prayer

logger = logging.getLogger(__name__)


class TagKind(str, Enum):
    GENERAL = "GENERAL"
    OCCASIONAL = "OCCASIONAL"
    TABLETS = "TABLETS"
    OBLIGATORY = "OBLIGATORY"

    @classmethod
    def parse(cls, value: str) -> "TagKind":
        # Exact match only; the content API spells the occasional kind OCCASSIONAL
        if value == "OCCASSIONAL":
            return cls.OCCASIONAL
        try:
            return cls(value)
        except ValueError:
            raise UnknownTagKindError(value) from None


def categorize_prayer(prayer: Prayer, language: Language, catalog: LanguageCatalog) -> None:
    """Set prayer.category (and prayer.title for obligatory/occasional prayers). Only the first tag counts."""
    if not prayer.tags:
        raise InvalidPrayerError(f"Prayer {prayer.id} has no tags")

    tag = prayer.tags[0]
    kind = TagKind.parse(tag.kind)
    if kind is TagKind.GENERAL:
        prayer.category = tag.name
    elif kind is TagKind.OBLIGATORY:
        prayer.category = catalog.obligatory(language)
        prayer.title = tag.name
    elif kind is TagKind.OCCASIONAL:
        prayer.category = catalog.occasional(language)
        prayer.title = tag.name
    elif kind is TagKind.TABLETS:
        prayer.category = catalog.tablets(language)
    logger.debug(f"Prayer {prayer.id}: {kind.value} -> {prayer.category}")


def categorize(prayers: Iterable[Prayer], language: Language, catalog: LanguageCatalog) -> Dict[str, int]:
    """Categorize all prayers; returns prayer count per category."""
    counts: Counter = Counter()
    for prayer in prayers:
        categorize_prayer(prayer, language, catalog)
        counts[prayer.category] += 1
    return dict(counts)
