"""Flexible regex patterns for Arabic search terms."""
import logging
import re
from typing import Dict, List, Tuple

from utils.arabic_normalizer import PATTERN_PROFILE, normalize

logger = logging.getLogger(__name__)

# Characters with meaning in the pattern syntax
_SPECIAL_CHARS = re.compile(r"[.*+?^${}()|[\]\\]")
_WHITESPACE = re.compile(r"\s+")

ALIF_CLASS = "[اأإآ]"
YA_CLASS = "[يى]"
HA_CLASS = "[هة]"
FLEXIBLE_WHITESPACE = r"\s*"

_LETTER_CLASSES: Dict[str, str] = {
    "ا": ALIF_CLASS,
    "ي": YA_CLASS,
    "ى": YA_CLASS,
    "ه": HA_CLASS,
    "ة": HA_CLASS,
}
_FLEXIBLE_LETTER_CLASSES: Dict[str, str] = {**_LETTER_CLASSES, "ا": ALIF_CLASS + "?"}


class PatternMatcher:
    """Compiled, case-insensitive pattern."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex = re.compile(pattern, re.IGNORECASE)

    def test(self, text: str) -> bool:
        """Check whether the pattern matches a non-empty part of text."""
        if not text or not isinstance(text, str):
            return False
        return any(m.end() > m.start() for m in self._regex.finditer(text))

    def matches_empty(self) -> bool:
        """True when the pattern can match without consuming any text."""
        return self._regex.search("") is not None

    def spans(self, text: str) -> List[Tuple[int, int]]:
        """Non-empty (start, end) spans of every occurrence in text."""
        if not text or not isinstance(text, str):
            return []
        return [m.span() for m in self._regex.finditer(text) if m.end() > m.start()]


def compile_pattern(pattern: str) -> PatternMatcher:
    """Compile a pattern. Raises re.error for an invalid pattern."""
    return PatternMatcher(pattern)


def escape_pattern(text: str) -> str:
    """Escape every pattern metacharacter in text."""
    return _SPECIAL_CHARS.sub(lambda m: "\\" + m.group(0), text)


def store_pattern(pattern: str) -> str:
    """Case-insensitive pattern for the data store's REGEXP operator."""
    return f"(?i){pattern}" if pattern else pattern


def _expand(escaped: str, classes: Dict[str, str]) -> str:
    # Escaped text has no unescaped metacharacters, so each letter maps independently
    words = _WHITESPACE.split(escaped)
    return FLEXIBLE_WHITESPACE.join("".join(classes.get(ch, ch) for ch in word) for word in words)


def _build(term: str, classes: Dict[str, str]) -> str:
    if not term or not isinstance(term, str):
        return ""

    try:
        normalized = normalize(term, PATTERN_PROFILE)
        pattern = _expand(escape_pattern(normalized), classes)
        re.compile(pattern)
        return pattern
    except Exception as e:
        logger.warning(f"Pattern build failed for '{term}', using literal pattern: {e}")
        return escape_pattern(term.strip())


def build_pattern(term: str) -> str:
    """
    Build a pattern that matches term across Arabic spelling variants.

    The term is normalized, escaped, and then ا/ي/ى/ه/ة are widened to their
    variant classes and whitespace becomes optional.

    Args:
        term: Search term

    Returns:
        Pattern string, or "" for empty input
    """
    return _build(term, _LETTER_CLASSES)


def build_flexible_pattern(term: str) -> str:
    """Like build_pattern, but an alif may also be missing entirely."""
    return _build(term, _FLEXIBLE_LETTER_CLASSES)
