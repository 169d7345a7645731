"""Tests for per-language store writes and the merge into the combined store."""

import sqlite3

import pytest

from prayerbook.core.errors import MissingTranslationError, PersistenceError
from prayerbook.prayers.categorizer import categorize
from prayerbook.prayers import service as service_module
from prayerbook.prayers.markup import mark_up_all
from prayerbook.prayers.service import (
    get_language_records,
    merge_stores,
    save_language_prayers,
    store_path_for,
)


@pytest.fixture
def english_prayers(make_prayer, english, catalog):
    prayers = [
        make_prayer(1, text="O Thou kind Lord!\n*`Abdu'l-Bahá", kind="GENERAL", tag_name="Unity", author_id=3),
        make_prayer(2, text="##Recite once\nI bear witness, O my God.", kind="OBLIGATORY",
                    tag_name="Short Obligatory Prayer", author_id=2),
    ]
    categorize(prayers, english, catalog)
    mark_up_all(prayers)
    return prayers


def _rows(path, sql):
    conn = sqlite3.connect(path)
    try:
        return conn.execute(sql).fetchall()
    finally:
        conn.close()


class TestSaveLanguagePrayers:

    def test_store_path_uses_culture_code(self, english, tmp_path):
        assert store_path_for(english, tmp_path) == tmp_path / "en.db"

    def test_writes_one_row_per_prayer(self, english, english_prayers, catalog, tmp_path):
        path = tmp_path / "en.db"
        assert save_language_prayers(path, english, english_prayers, catalog) == 2

        rows = _rows(path, "SELECT id, category, prayerText, openingWords, citation, author, language "
                           "FROM prayers ORDER BY id")
        assert rows[0] == (
            1, "Unity", '<p class="opening"><span class="versal">O</span> Thou kind Lord!</p>',
            "O Thou kind Lord!…", "`Abdu'l-Bahá", "`Abdu'l-Bahá", "en",
        )
        # Title set by the categorizer wins over derived opening words
        assert rows[1][1] == "Obligatory"
        assert rows[1][3] == "Short Obligatory Prayer"
        assert rows[1][5] == "Bahá'u'lláh"

    def test_language_store_has_no_search_columns(self, english, english_prayers, catalog, tmp_path):
        path = tmp_path / "en.db"
        save_language_prayers(path, english, english_prayers, catalog)
        columns = [row[1] for row in _rows(path, "PRAGMA table_info(prayers)")]
        assert columns == ["id", "category", "prayerText", "openingWords", "citation", "author", "language"]

    def test_rerun_recreates_instead_of_accumulating(self, english, english_prayers, catalog, tmp_path):
        path = tmp_path / "en.db"
        save_language_prayers(path, english, english_prayers, catalog)
        first = _rows(path, "SELECT * FROM prayers ORDER BY id")
        save_language_prayers(path, english, english_prayers, catalog)
        second = _rows(path, "SELECT * FROM prayers ORDER BY id")
        assert first == second
        assert len(second) == 2

    def test_duplicate_ids_roll_back_and_remove_store(self, english, english_prayers, catalog, tmp_path):
        path = tmp_path / "en.db"
        duplicate = english_prayers[0].model_copy()
        with pytest.raises(PersistenceError):
            save_language_prayers(path, english, english_prayers + [duplicate], catalog)
        assert not path.exists()

    @pytest.mark.parametrize("duplicate", [False, True])
    def test_engine_disposed_once(self, english, english_prayers, catalog, tmp_path, monkeypatch, duplicate):
        disposals = []
        real_create_store = service_module.create_store

        def create_store(path, metadata):
            engine = real_create_store(path, metadata)
            real_dispose = engine.dispose

            def dispose(*args, **kwargs):
                disposals.append(path)
                return real_dispose(*args, **kwargs)

            monkeypatch.setattr(engine, "dispose", dispose)
            return engine

        monkeypatch.setattr(service_module, "create_store", create_store)
        path = tmp_path / "en.db"
        if duplicate:
            with pytest.raises(PersistenceError):
                save_language_prayers(path, english, english_prayers + [english_prayers[0].model_copy()], catalog)
            assert not path.exists()
        else:
            save_language_prayers(path, english, english_prayers, catalog)
        assert disposals == [path]

    def test_unknown_author_fails_before_touching_store(self, english, english_prayers, catalog, tmp_path):
        path = tmp_path / "en.db"
        save_language_prayers(path, english, english_prayers, catalog)
        english_prayers[0].author_id = 42
        with pytest.raises(MissingTranslationError):
            save_language_prayers(path, english, english_prayers, catalog)
        assert len(_rows(path, "SELECT * FROM prayers")) == 2

    def test_get_language_records(self, english, english_prayers, catalog, tmp_path):
        path = tmp_path / "en.db"
        save_language_prayers(path, english, english_prayers, catalog)
        records = get_language_records(path)
        assert sorted(r.id for r in records) == [1, 2]


class TestMergeStores:

    @pytest.fixture
    def two_stores(self, make_prayer, english, german, catalog, tmp_path):
        en = make_prayer(1, text="O Thou kind Lord!", tag_name="Unity", author_id=3)
        de = make_prayer(1, text="O Gott, mein Gott!", tag_name="Einheit", author_id=3, language_id=3)
        paths = []
        for language, prayer in ((english, en), (german, de)):
            categorize([prayer], language, catalog)
            mark_up_all([prayer])
            path = store_path_for(language, tmp_path)
            save_language_prayers(path, language, [prayer], catalog)
            paths.append(path)
        return paths

    def test_merges_rows_with_search_fields(self, two_stores, tmp_path):
        merged = tmp_path / "merged.db"
        assert merge_stores(two_stores, merged) == 2

        rows = _rows(merged, "SELECT id, language, searchText, wordCount FROM prayers ORDER BY language")
        assert rows == [
            (1, "de", "O Gott, mein Gott!", 4),
            (1, "en", "O Thou kind Lord!", 4),
        ]

    def test_builds_indexes(self, two_stores, tmp_path):
        merged = tmp_path / "merged.db"
        merge_stores(two_stores, merged)
        names = {row[0] for row in _rows(merged, "SELECT name FROM sqlite_master WHERE type = 'index'")}
        assert {"idx_prayers_search_text", "idx_prayers_language", "idx_prayers_category"} <= names

    def test_merge_recreates_combined_store(self, two_stores, tmp_path):
        merged = tmp_path / "merged.db"
        merge_stores(two_stores, merged)
        merge_stores(two_stores[:1], merged)
        assert len(_rows(merged, "SELECT * FROM prayers")) == 1

    def test_same_store_twice_fails_but_keeps_first_copy(self, two_stores, tmp_path):
        merged = tmp_path / "merged.db"
        with pytest.raises(PersistenceError):
            merge_stores([two_stores[0], two_stores[0]], merged)
        assert len(_rows(merged, "SELECT * FROM prayers")) == 1

    def test_missing_source_store(self, two_stores, tmp_path):
        with pytest.raises(PersistenceError, match="Store not found"):
            merge_stores([tmp_path / "xx.db"], tmp_path / "merged.db")
