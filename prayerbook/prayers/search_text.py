"""
Plain search text and word count from a marked-up prayer body.
Only the tags the markup engine (and older app data) produce are removed; anything else is kept as is.
"""
from dataclasses import dataclass

STRIPPED_TAGS = (
    "<p>",
    "</p>",
    '<p class="opening">',
    '<span class="versal">',
    "</span>",
    '<p class="noindent">',
    "<br/>",
    "<i>",
    "</i>",
    '<p class="comment">',
    '<p class="commentcaps">',
    "<em>",
    "</em>",
)


@dataclass(frozen=True)
class SearchText:
    text: str
    word_count: int


def strip_markup(html: str) -> str:
    text = html or ""
    for tag in STRIPPED_TAGS:
        text = text.replace(tag, "")
    return text


def count_words(text: str) -> int:
    return len(text.split())


def normalize(html: str) -> SearchText:
    text = strip_markup(html)
    return SearchText(text=text, word_count=count_words(text))
