"""Highlight matched search terms in displayed text."""
import html
from typing import Optional

from core.matcher import locate_matches

MARK_OPEN = '<mark>'
MARK_CLOSE = '</mark>'


def highlight(text: Optional[str], term: str, open_tag: str = MARK_OPEN, close_tag: str = MARK_CLOSE) -> str:
    """
    Wrap every match of term in the original text with marker tags.

    The text is HTML-escaped outside the tags; matches are located on the
    original text, so folded letters and diacritics are highlighted as written.

    Args:
        text: Displayed text
        term: Search term
        open_tag: Opening marker
        close_tag: Closing marker

    Returns:
        Escaped text with highlighted matches ("" for empty text)
    """
    if not text or not isinstance(text, str):
        return ""

    parts = []
    cursor = 0
    for span in locate_matches(text, term):
        parts.append(html.escape(text[cursor:span.start]))
        parts.append(f"{open_tag}{html.escape(span.text)}{close_tag}")
        cursor = span.end
    parts.append(html.escape(text[cursor:]))
    return "".join(parts)
