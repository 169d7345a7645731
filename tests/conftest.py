"""Pytest configuration and fixtures."""
import pytest

from prayerbook.core.config import Config
from prayerbook.prayers.languages import LanguageCatalog
from prayerbook.prayers.schemas import Language, Prayer, PrayersResponse

LANGUAGES_PAYLOAD = [
    {"Id": 1, "Name": "English", "English": "English", "Culture": "en", "IsLeftToRight": True, "PrayerCount": 3},
    {"Id": 3, "Name": "Deutsch", "English": "German", "Culture": "de", "IsLeftToRight": True, "PrayerCount": 1},
    {"Id": 9, "Name": "Klingon", "English": "Klingon", "Culture": "tlh", "IsLeftToRight": True, "PrayerCount": 0},
]


def prayer_payload(prayer_id, text, kind="GENERAL", tag_name="Healing", author_id=2, language_id=1, title=None):
    return {
        "Id": prayer_id,
        "AuthorId": author_id,
        "LanguageId": language_id,
        "Text": text,
        "FirstTagName": tag_name,
        "Tags": [{"Id": 100 + prayer_id, "Name": tag_name, "Kind": kind}],
        "Title": title,
    }


PRAYERS_PAYLOAD = {
    "ErrorMessage": None,
    "IsInError": False,
    "Version": 7,
    "Prayers": [
        prayer_payload(1, "O Thou kind Lord!\nUnite all.\n*The Báb", kind="GENERAL", tag_name="Unity", author_id=1),
        prayer_payload(
            2,
            "##To be recited once in twenty-four hours\nWhosoever wisheth to pray, let him wash his hands.",
            kind="OBLIGATORY",
            tag_name="Long Obligatory Prayer",
        ),
        prayer_payload(3, "#Tablet of Ahmad\nHe is the King, the All-Knowing.", kind="TABLETS", tag_name="Ahmad", author_id=2),
    ],
}


@pytest.fixture
def languages():
    return [Language.model_validate(item) for item in LANGUAGES_PAYLOAD]


@pytest.fixture
def english(languages):
    return languages[0]


@pytest.fixture
def german(languages):
    return languages[1]


@pytest.fixture
def unsupported(languages):
    return languages[2]


@pytest.fixture
def catalog(languages):
    return LanguageCatalog(languages)


@pytest.fixture
def make_prayer():
    def _make(prayer_id=1, text="O Thou kind Lord!", kind="GENERAL", tag_name="Healing", **kwargs):
        return Prayer.model_validate(prayer_payload(prayer_id, text, kind=kind, tag_name=tag_name, **kwargs))
    return _make


@pytest.fixture
def config(tmp_path):
    config = Config()
    config.data["output"]["directory"] = str(tmp_path)
    return config


class StubApiClient:
    """Stands in for PrayerApiClient; serves the payloads above without HTTP."""

    def __init__(self, languages=None, prayers=None):
        self.languages = LANGUAGES_PAYLOAD if languages is None else languages
        self.prayers = PRAYERS_PAYLOAD if prayers is None else prayers
        self.prayer_requests = []

    def fetch_languages(self):
        return [Language.model_validate(item) for item in self.languages]

    def fetch_prayers(self, language_id):
        self.prayer_requests.append(language_id)
        return PrayersResponse.model_validate(self.prayers)


@pytest.fixture
def stub_client():
    return StubApiClient()
