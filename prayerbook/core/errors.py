"""
Typed failures raised by prayerbook. Only the run controller in prayerbook.main catches them.
"""


class PrayerbookError(Exception):
    """Base class for every fatal condition of a run."""


class ConfigurationError(PrayerbookError):
    """Config file missing or malformed."""


class ConfigurationGapError(ConfigurationError):
    """Supported languages/tags are incomplete relative to the data encountered."""


class MissingTranslationError(ConfigurationGapError):
    def __init__(self, what: str, language: str):
        super().__init__(f"No translation for '{what}' found for {language}")
        self.what = what
        self.language = language


class UnknownTagKindError(ConfigurationGapError):
    def __init__(self, kind: str):
        super().__init__(f"Unknown tag kind - {kind}")
        self.kind = kind


class LanguageNotFoundError(PrayerbookError):
    def __init__(self, language_id: int):
        super().__init__(f"language {language_id} not found")
        self.language_id = language_id


class InvalidPrayerError(PrayerbookError):
    """Prayer record violates a precondition (e.g. carries no tags)."""


class TransportError(PrayerbookError):
    """Remote API call failed or returned a payload we could not decode."""


class PersistenceError(PrayerbookError):
    """Store write, read or commit failed."""
