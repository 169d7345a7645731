"""
SQLAlchemy models for the stores.

- LanguagePrayerRecord: one row per prayer in a per-language store (<culture>.db).
- MergedPrayerRecord: one row per prayer per language in the combined store, with search fields.
"""
from sqlalchemy import Column, Integer, String, Text

from prayerbook.core.db import LanguageStoreBase, MergedStoreBase


class LanguagePrayerRecord(LanguageStoreBase):
    """A categorized, marked-up prayer of a single language."""
    __tablename__ = "prayers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    category = Column(Text, nullable=False)
    prayer_text = Column("prayerText", Text, nullable=False)  # marked-up body
    opening_words = Column("openingWords", Text, nullable=False)
    citation = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    language = Column(Text, nullable=False)  # culture code, e.g. "en"


class MergedPrayerRecord(MergedStoreBase):
    """
    Union of all per-language rows. Prayer ids are only unique within one language,
    so (id, language) is the key.
    """
    __tablename__ = "prayers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    language = Column(String(32), primary_key=True)
    category = Column(Text, nullable=False)
    prayer_text = Column("prayerText", Text, nullable=False)
    opening_words = Column("openingWords", Text, nullable=False)
    citation = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    word_count = Column("wordCount", Integer, nullable=False)
    search_text = Column("searchText", Text, nullable=False)


# Built after all sources are merged, see service.build_merged_indexes
MERGED_INDEXES = (
    ("idx_prayers_search_text", "searchText"),
    ("idx_prayers_language", "language"),
    ("idx_prayers_category", "category"),
)
