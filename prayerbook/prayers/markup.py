"""
Markup engine: turns the API's newline-delimited prayer text into the marked-up body
stored in the app database, plus the opening words and citation fields.

Paragraph sigils:
    ##text   comment in caps        -> <p class="commentcaps">text</p>
    #text    author-supplied opening words, never part of the body
    *text    comment                -> <p class="comment">text</p>
             (citation instead, when it is the last paragraph)
    text     body paragraph; the first one opens the prayer with a versal
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from prayerbook.prayers.schemas import Prayer

DEFAULT_OPENING_WORDS_LENGTH = 45
ELLIPSIS = "…"
PARAGRAPH_SEPARATOR = "\n\n"


class ParagraphKind(Enum):
    COMMENT_CAPS = "commentcaps"
    OPENING_WORDS = "opening_words"
    CITATION = "citation"
    COMMENT = "comment"
    TEXT = "text"


class MarkupState(Enum):
    AWAITING_OPENING = "awaiting_opening"  # no body paragraph emitted yet
    IN_BODY = "in_body"


@dataclass
class MarkedUpText:
    html: str = ""
    opening_words: str = ""
    citation: str = ""


def split_paragraphs(text: str) -> List[str]:
    """Split on newlines, trim each paragraph and drop the empty ones."""
    return [part.strip() for part in (text or "").split("\n") if part.strip()]


def classify_paragraph(paragraph: str, is_last: bool) -> Tuple[ParagraphKind, str]:
    """Return the paragraph's kind and its content with the sigil removed."""
    if paragraph.startswith("##"):
        return ParagraphKind.COMMENT_CAPS, paragraph[2:]
    if paragraph.startswith("#"):
        return ParagraphKind.OPENING_WORDS, paragraph[1:]
    if paragraph.startswith("*"):
        if is_last:
            return ParagraphKind.CITATION, paragraph[1:]
        return ParagraphKind.COMMENT, paragraph[1:]
    return ParagraphKind.TEXT, paragraph


def derive_opening_words(paragraph: str, length: int = DEFAULT_OPENING_WORDS_LENGTH) -> str:
    """First `length` characters of the paragraph plus an ellipsis (always appended)."""
    return paragraph[:length] + ELLIPSIS


def opening_paragraph(paragraph: str) -> str:
    return f'<p class="opening"><span class="versal">{paragraph[:1]}</span>{paragraph[1:]}</p>'


def join_blocks(blocks: Iterable[str]) -> str:
    return PARAGRAPH_SEPARATOR.join(blocks)


def mark_up(text: str, opening_words_length: int = DEFAULT_OPENING_WORDS_LENGTH) -> MarkedUpText:
    """Run the one-pass paragraph classifier over raw prayer text."""
    paragraphs = split_paragraphs(text)
    result = MarkedUpText()
    blocks: List[str] = []
    state = MarkupState.AWAITING_OPENING

    last = len(paragraphs) - 1
    for i, paragraph in enumerate(paragraphs):
        kind, content = classify_paragraph(paragraph, is_last=(i == last))

        if kind is ParagraphKind.COMMENT_CAPS:
            blocks.append(f'<p class="commentcaps">{content}</p>')
        elif kind is ParagraphKind.OPENING_WORDS:
            result.opening_words = content
        elif kind is ParagraphKind.CITATION:
            result.citation = content
        elif kind is ParagraphKind.COMMENT:
            blocks.append(f'<p class="comment">{content}</p>')
        elif state is MarkupState.AWAITING_OPENING:
            result.opening_words = derive_opening_words(content, opening_words_length)
            blocks.append(opening_paragraph(content))
            state = MarkupState.IN_BODY
        else:
            blocks.append(f"<p>{content}</p>")

    result.html = join_blocks(blocks)
    return result


def mark_up_prayer(prayer: Prayer, opening_words_length: int = DEFAULT_OPENING_WORDS_LENGTH) -> None:
    """Fill in html_prayer, opening_words and citation on the prayer."""
    marked = mark_up(prayer.text, opening_words_length)
    prayer.html_prayer = marked.html
    prayer.opening_words = marked.opening_words
    prayer.citation = marked.citation


def mark_up_all(prayers: Iterable[Prayer], opening_words_length: int = DEFAULT_OPENING_WORDS_LENGTH) -> None:
    for prayer in prayers:
        mark_up_prayer(prayer, opening_words_length)
