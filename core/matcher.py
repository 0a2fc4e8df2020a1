"""
Match evaluation for Arabic search terms.

- Ordered strategies, first success wins: direct containment on the search
  form, flexible pattern, per-variation retry, plain literal containment.

- A strategy that raises counts as "no match" and the next one runs.

- Numeric terms skip normalization and compare literally.

- Highlight spans always point into the original text.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from models.schemas import MatchResult, MatchSpan
from utils.arabic_normalizer import (
    ARABIC_DIGITS,
    is_dropped_char,
    normalize_for_search,
    normalize_with_offsets,
)
from utils.arabic_patterns import build_flexible_pattern, build_pattern, compile_pattern
from utils.name_variations import variations

logger = logging.getLogger(__name__)

MatchStrategy = Callable[[str, str], bool]

_NUMERIC_TERM = re.compile(rf"^[0-9{ARABIC_DIGITS}]+$")


def is_numeric_term(term: str) -> bool:
    """True when the term is only ASCII or Arabic-Indic digits."""
    if not term or not isinstance(term, str):
        return False
    return bool(_NUMERIC_TERM.match(term.strip()))


# ---------------------------
# Strategies
# ---------------------------


def _direct_containment(text: str, term: str) -> bool:
    canonical_term = normalize_for_search(term)
    return bool(canonical_term) and canonical_term in normalize_for_search(text)


def _pattern_match(text: str, term: str) -> bool:
    pattern = build_flexible_pattern(term)
    if not pattern:
        return False
    return compile_pattern(pattern).test(normalize_for_search(text))


def _variation_retry(text: str, term: str) -> bool:
    for candidate in sorted(variations(term)):
        if _direct_containment(text, candidate) or _pattern_match(text, candidate):
            return True
    return False


def _literal_containment(text: str, term: str) -> bool:
    needle = term.strip().lower()
    return bool(needle) and needle in text.lower()


MATCH_STRATEGIES: Tuple[Tuple[str, MatchStrategy], ...] = (
    ("direct", _direct_containment),
    ("pattern", _pattern_match),
    ("variations", _variation_retry),
    ("literal", _literal_containment),
)


def _first_matching_tier(text: str, term: str) -> Optional[str]:
    for name, strategy in MATCH_STRATEGIES:
        try:
            if strategy(text, term):
                return name
        except Exception as e:
            logger.debug(f"Match strategy '{name}' failed for term '{term}': {e}")
    return None


# ---------------------------
# Public API
# ---------------------------


def _decide(text: str, term: str) -> Optional[str]:
    if not text or not term or not isinstance(text, str) or not isinstance(term, str):
        return None

    if is_numeric_term(term):
        return "numeric" if term.strip() in text else None

    return _first_matching_tier(text, term)


def matches(text: str, term: str) -> bool:
    """
    Check if text matches a search term.

    Args:
        text: Field value to check (e.g. a student name)
        term: Search term as typed by the user

    Returns:
        True on a match; False for no match or empty/non-string input
    """
    return _decide(text, term) is not None


def evaluate(text: str, term: str) -> MatchResult:
    """Match decision with the winning strategy and highlight spans."""
    tier = _decide(text, term)
    if tier is None:
        return MatchResult(matched=False)
    return MatchResult(matched=True, tier=tier, spans=locate_matches(text, term))


def _merge(spans: List[Tuple[int, int]]) -> List[Tuple[int, int]]:
    merged: List[Tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def _spans_for_pattern(text: str, folded: str, offsets: List[int], pattern: str) -> List[Tuple[int, int]]:
    if not pattern:
        return []
    try:
        found = compile_pattern(pattern).spans(folded)
    except re.error as e:
        logger.debug(f"Skipping highlight pattern '{pattern}': {e}")
        return []

    spans = []
    for start, end in found:
        original_start = offsets[start]
        original_end = offsets[end - 1] + 1
        # Absorb diacritics/tatweel sitting right after the last matched letter
        while original_end < len(text) and is_dropped_char(text[original_end]):
            original_end += 1
        spans.append((original_start, original_end))
    return spans


def _term_spans(text: str, term: str) -> List[Tuple[int, int]]:
    # Strict before flexible, the term before its variations; literal text last
    folded, offsets = normalize_with_offsets(text)
    candidates = sorted(variations(term))
    for builder in (build_pattern, build_flexible_pattern):
        raw = _spans_for_pattern(text, folded, offsets, builder(term))
        if not raw:
            for candidate in candidates:
                raw.extend(_spans_for_pattern(text, folded, offsets, builder(candidate)))
        if raw:
            return raw

    needle = term.strip()
    if not needle:
        return []
    return [m.span() for m in re.finditer(re.escape(needle), text, re.IGNORECASE)]


def locate_matches(text: str, term: str) -> List[MatchSpan]:
    """
    Locate matched regions of the original text.

    Tries the strict pattern, then the flexible (optional alif) pattern, each
    for the term and then its variations, so that any text matched through
    the pattern tiers also gets spans.

    Args:
        text: Displayed text (never a normalized copy)
        term: Search term

    Returns:
        Ordered, non-overlapping spans into text; empty when nothing matches
    """
    if not text or not term or not isinstance(text, str) or not isinstance(term, str):
        return []

    try:
        if is_numeric_term(term):
            literal = re.escape(term.strip())
            raw = [m.span() for m in re.finditer(literal, text)]
        else:
            raw = _term_spans(text, term)
    except Exception as e:
        logger.warning(f"Highlight lookup failed for term '{term}': {e}")
        return []

    return [MatchSpan(start=s, end=e, text=text[s:e]) for s, e in _merge(raw)]
