"""
Pydantic views of the content API payloads: languages, tags, prayers and the prayer-list envelope.
Prayers also carry the fields derived by the categorizer and the markup engine.
"""
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Language(BaseModel):
    """One entry of the language catalog. Immutable once fetched."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(validation_alias=AliasChoices("Id", "id"))
    name: str = Field(default="", validation_alias=AliasChoices("Name", "name"))
    english_name: str = Field(default="", validation_alias=AliasChoices("English", "english_name"))
    culture: str = Field(validation_alias=AliasChoices("Culture", "culture"))
    left_to_right: bool = Field(default=True, validation_alias=AliasChoices("IsLeftToRight", "left_to_right"))
    prayer_count: int = Field(default=0, validation_alias=AliasChoices("PrayerCount", "prayer_count"))


class Tag(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(validation_alias=AliasChoices("Id", "id"))
    name: str = Field(validation_alias=AliasChoices("Name", "name"))
    kind: str = Field(validation_alias=AliasChoices("Kind", "kind"))  # GENERAL, OBLIGATORY, ...


class Prayer(BaseModel):
    """A prayer as served by the API. category/citation/html_prayer/opening_words are filled in later."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(validation_alias=AliasChoices("Id", "id"))
    author_id: int = Field(validation_alias=AliasChoices("AuthorId", "author_id"))
    language_id: int = Field(validation_alias=AliasChoices("LanguageId", "language_id"))
    text: Optional[str] = Field(default="", validation_alias=AliasChoices("Text", "text"))
    first_tag_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("FirstTagName", "first_tag_name"))
    tags: List[Tag] = Field(default_factory=list, validation_alias=AliasChoices("Tags", "tags"))
    title: Optional[str] = Field(default=None, validation_alias=AliasChoices("Title", "title"))

    category: str = ""
    citation: str = ""
    html_prayer: str = ""
    opening_words: str = ""

    @property
    def display_opening_words(self) -> str:
        """Opening words as stored: the title wins over the derived excerpt."""
        return self.title or self.opening_words


class PrayersResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error_message: Optional[str] = Field(default=None, validation_alias=AliasChoices("ErrorMessage", "error_message"))
    is_in_error: bool = Field(default=False, validation_alias=AliasChoices("IsInError", "is_in_error"))
    version: Optional[int] = Field(default=None, validation_alias=AliasChoices("Version", "version"))
    prayers: List[Prayer] = Field(default_factory=list, validation_alias=AliasChoices("Prayers", "prayers"))
