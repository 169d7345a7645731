"""
Service layer: write per-language stores and merge them into the combined store.

- save_language_prayers: recreate <culture>.db and insert all prayers in one transaction.
- merge_stores: recreate the combined store, copy each source in its own transaction
  (adding search text and word count), then build the lookup indexes.
"""
import logging
from pathlib import Path
from typing import Iterable, List

from sqlalchemy import select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from prayerbook.core.db import (
    LanguageStoreBase,
    MergedStoreBase,
    PathLike,
    create_store,
    open_store,
    remove_store,
    session_scope,
)
from prayerbook.core.errors import PersistenceError
from prayerbook.prayers.languages import LanguageCatalog
from prayerbook.prayers.models import MERGED_INDEXES, LanguagePrayerRecord, MergedPrayerRecord
from prayerbook.prayers.schemas import Language, Prayer
from prayerbook.prayers.search_text import normalize

logger = logging.getLogger(__name__)


def store_path_for(language: Language, directory: PathLike = ".") -> Path:
    return Path(directory) / f"{language.culture}.db"


def build_language_records(
    prayers: Iterable[Prayer], language: Language, catalog: LanguageCatalog
) -> List[LanguagePrayerRecord]:
    """Rows for a per-language store. Author lookups fail here, before any file is touched."""
    return [
        LanguagePrayerRecord(
            id=prayer.id,
            category=prayer.category,
            prayer_text=prayer.html_prayer,
            opening_words=prayer.display_opening_words,
            citation=prayer.citation,
            author=catalog.author_name(language, prayer.author_id),
            language=language.culture,
        )
        for prayer in prayers
    ]


def save_language_prayers(
    store_path: PathLike, language: Language, prayers: Iterable[Prayer], catalog: LanguageCatalog
) -> int:
    """Replace the language's store with the given prayers. All rows or none; returns the row count."""
    records = build_language_records(prayers, language, catalog)

    engine = create_store(store_path, LanguageStoreBase.metadata)
    try:
        try:
            with session_scope(engine) as session:
                session.add_all(records)
        finally:
            engine.dispose()
    except SQLAlchemyError as e:
        # engine is disposed by now, so the file can be removed
        remove_store(store_path)
        raise PersistenceError(f"Unable to populate {store_path}: {e}") from e

    logger.info(f"Saved {len(records)} prayer(s) to {store_path}")
    return len(records)


def get_language_records(store_path: PathLike) -> List[LanguagePrayerRecord]:
    """Return every row of a per-language store."""
    engine = open_store(store_path)
    try:
        with session_scope(engine) as session:
            return list(session.execute(select(LanguagePrayerRecord)).scalars().all())
    except SQLAlchemyError as e:
        raise PersistenceError(f"Unable to read {store_path}: {e}") from e
    finally:
        engine.dispose()


def merge_store(source_path: PathLike, merged_engine: Engine) -> int:
    """Copy one per-language store into the combined store in a single transaction."""
    rows = get_language_records(source_path)
    try:
        with session_scope(merged_engine) as session:
            for row in rows:
                search = normalize(row.prayer_text)
                session.add(
                    MergedPrayerRecord(
                        id=row.id,
                        language=row.language,
                        category=row.category,
                        prayer_text=row.prayer_text,
                        opening_words=row.opening_words,
                        citation=row.citation,
                        author=row.author,
                        word_count=search.word_count,
                        search_text=search.text,
                    )
                )
    except SQLAlchemyError as e:
        raise PersistenceError(f"Unable to merge {source_path}: {e}") from e

    logger.info(f"Merged {len(rows)} prayer(s) from {source_path}")
    return len(rows)


def build_merged_indexes(merged_engine: Engine) -> None:
    try:
        with session_scope(merged_engine) as session:
            for name, column in MERGED_INDEXES:
                session.execute(text(f'CREATE INDEX IF NOT EXISTS {name} ON prayers ("{column}")'))
    except SQLAlchemyError as e:
        raise PersistenceError(f"Unable to build indexes: {e}") from e
    logger.info(f"Built {len(MERGED_INDEXES)} index(es)")


def merge_stores(source_paths: Iterable[PathLike], merged_path: PathLike) -> int:
    """Recreate the combined store from the given per-language stores; returns total rows merged."""
    engine = create_store(merged_path, MergedStoreBase.metadata)
    try:
        total = 0
        for source_path in source_paths:
            total += merge_store(source_path, engine)
        build_merged_indexes(engine)
    finally:
        engine.dispose()
    return total
