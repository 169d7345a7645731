"""
Batch runs: scrape one language into its store, or merge stores into the combined one.
Each phase completes before the next starts.
"""
import logging
from pathlib import Path
from typing import Iterable, Optional

from prayerbook.core.config import Config
from prayerbook.prayers.categorizer import categorize
from prayerbook.prayers.client import PrayerApiClient
from prayerbook.prayers.languages import LanguageCatalog, LanguageTables, load_language_tables
from prayerbook.prayers.markup import mark_up_all
from prayerbook.prayers.service import merge_stores, save_language_prayers, store_path_for


class ScrapeLanguageTask:
    """Fetch, categorize and mark up one language's prayers, then write <culture>.db."""

    def __init__(
        self,
        config: Config,
        client: Optional[PrayerApiClient] = None,
        tables: Optional[LanguageTables] = None,
    ):
        self.config = config
        self.client = client or PrayerApiClient(config.section("api"))
        self.tables = tables or load_language_tables(config.section("languages"))
        self.opening_words_length = config.opening_words_length
        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self, language_id: int) -> Path:
        self.logger.info("Looking up language…")
        catalog = LanguageCatalog(self.client.fetch_languages(), self.tables)
        language = catalog.get(language_id)
        catalog.require_supported(language)
        self.logger.info(f"Looking up language… DONE! ({language.english_name}, {language.culture})")

        self.logger.info("Retrieving prayers…")
        prayers = self.client.fetch_prayers(language_id).prayers
        self.logger.info(f"Retrieving prayers… DONE! ({len(prayers)} prayer(s))")

        counts = categorize(prayers, language, catalog)
        for category, count in sorted(counts.items()):
            self.logger.info(f"{category}: {count}")

        mark_up_all(prayers, self.opening_words_length)

        store_path = store_path_for(language, self.config.output_dir)
        self.logger.info("Populating database…")
        save_language_prayers(store_path, language, prayers, catalog)
        self.logger.info(f"Populating database… DONE! ({store_path})")
        return store_path


class MergeStoresTask:
    """Union per-language stores into the combined, indexed store."""

    def __init__(self, config: Config):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self, store_paths: Iterable[str]) -> Path:
        merged_path = self.config.merged_file
        self.logger.info(f"Merging into {merged_path}…")
        total = merge_stores(store_paths, merged_path)
        self.logger.info(f"Merging… DONE! ({total} prayer(s))")
        return merged_path
