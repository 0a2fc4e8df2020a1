"""Alternate spellings of Arabic names for lookup."""
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from cachetools import TTLCache, cached

import config
from utils.arabic_normalizer import (
    BASIC_PROFILE,
    NormalizationOptions,
    normalize,
    normalize_ar,
    normalize_for_search,
)

logger = logging.getLogger(__name__)

Substitution = Tuple[str, str]

# Spot fixes applied to the raw name: hamza forms, ya/alif maksura, ta marbuta/ha
LETTER_SUBSTITUTIONS: Tuple[Substitution, ...] = (
    ("أ", "ا"),
    ("إ", "ا"),
    ("آ", "ا"),
    ("ى", "ي"),
    ("ي", "ى"),
    ("ة", "ه"),
    ("ه", "ة"),
)

# Given names treated as interchangeable spellings.
# Domain judgment, not exhaustive: override with NAME_EQUIVALENCES_FILE.
DEFAULT_NAME_EQUIVALENCES: Tuple[Substitution, ...] = (
    ("على", "علي"),
    ("علي", "على"),
    ("محمد", "محمود"),
    ("احمد", "أحمد"),
)

# Basic profile with exactly one feature switched off
PARTIAL_PROFILES: Tuple[NormalizationOptions, ...] = tuple(
    NormalizationOptions(**{**BASIC_PROFILE.model_dump(), flag: False})
    for flag in (
        "strip_diacritics",
        "fold_alif_variants",
        "remove_tatweel",
        "fold_digits_to_ascii",
    )
)


def _parse_equivalences(raw) -> Tuple[Substitution, ...]:
    pairs: List[Substitution] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Name equivalence must be a [from, to] pair, got {item!r}")
        source, target = item
        if not isinstance(source, str) or not isinstance(target, str) or not source:
            raise ValueError(f"Invalid name equivalence pair: {item!r}")
        pairs.append((source, target))
    return tuple(pairs)


@cached(TTLCache(maxsize=8, ttl=config.CACHE_TTL))
def load_name_equivalences(path: str = "") -> Tuple[Substitution, ...]:
    """
    Load the name equivalence table.

    Args:
        path: JSON file holding a list of [from, to] pairs; empty for the built-in table

    Returns:
        Tuple of (from, to) substitutions. A missing or malformed file falls
        back to the built-in table.
    """
    if not path:
        return DEFAULT_NAME_EQUIVALENCES

    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            return _parse_equivalences(json.load(f))
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load name equivalences from '{path}', using defaults: {e}")
        return DEFAULT_NAME_EQUIVALENCES


def _substitute(name: str, substitutions: Iterable[Substitution]) -> List[str]:
    return [name.replace(source, target) for source, target in substitutions]


def variations(name: str, equivalences: Optional[Sequence[Substitution]] = None) -> Set[str]:
    """
    Generate plausible alternate spellings of a name.

    Includes the trimmed original, its basic and search forms, its form under
    each partial profile, and manual letter/name substitutions (each added
    raw and basic-normalized).

    Args:
        name: Name as typed by the user
        equivalences: Name equivalence pairs (defaults to the configured table)

    Returns:
        Set of non-empty variations; empty for empty or non-string input
    """
    if not name or not isinstance(name, str):
        return set()

    clean_name = name.strip()
    if not clean_name:
        return set()

    found = {clean_name, normalize_ar(clean_name), normalize_for_search(clean_name)}

    for options in PARTIAL_PROFILES:
        try:
            found.add(normalize(clean_name, options))
        except Exception as e:
            logger.debug(f"Skipping variation for options {options}: {e}")

    if equivalences is None:
        equivalences = load_name_equivalences(config.NAME_EQUIVALENCES_FILE)

    manual = _substitute(clean_name, LETTER_SUBSTITUTIONS) + _substitute(clean_name, equivalences)
    for variation in manual:
        found.add(variation)
        found.add(normalize_ar(variation))

    return {v.strip() for v in found if v and v.strip()}
