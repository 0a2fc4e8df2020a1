"""Arabic text normalization utilities."""
import logging
import re
import unicodedata
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Arabic diacritics (تشكيل), superscript alif and Quranic marks
_AR_DIACRITICS = re.compile(r"[\u0617-\u061A\u064B-\u065F\u0670]")
# Tatweel (تطويل)
_TATWEEL = "\u0640"

ALIF = "ا"
ALIF_VARIANTS = "أإآ"
_ALIF_FOLD = str.maketrans({ch: ALIF for ch in ALIF_VARIANTS})

# Arabic-Indic (٠١٢٣) and extended Arabic-Indic (۰۱۲۳) digits to Latin
ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
EXTENDED_ARABIC_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_DIGIT_FOLD = str.maketrans(ARABIC_DIGITS + EXTENDED_ARABIC_DIGITS, "0123456789" * 2)

_ARABIC_RANGES = r"\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF"
_PUNCTUATION = re.compile(rf"([^{_ARABIC_RANGES}\w\s])")
_DIGIT_RUN = re.compile(r"(\d+)")
_WHITESPACE = re.compile(r"\s+")


class NormalizationOptions(BaseModel):
    """Which normalization steps to apply. Defaults match the basic profile."""

    model_config = ConfigDict(frozen=True)

    fold_alif_variants: bool = True
    strip_diacritics: bool = True
    remove_tatweel: bool = True
    fold_digits_to_ascii: bool = True
    tokenize_punctuation: bool = False
    tokenize_digits: bool = False
    stabilize_diacritic_forms: bool = False
    strip_punctuation: bool = False


# Storage-time normalization and default search
BASIC_PROFILE = NormalizationOptions()

# Most permissive form, used for containment checks
SEARCH_PROFILE = NormalizationOptions(
    tokenize_punctuation=True,
    tokenize_digits=True,
    strip_punctuation=True,
)

# Search profile that keeps punctuation as tokens, so it can be escaped into patterns
PATTERN_PROFILE = NormalizationOptions(
    tokenize_punctuation=True,
    tokenize_digits=True,
)


def normalize(text: str, options: NormalizationOptions = BASIC_PROFILE) -> str:
    """
    Normalize Arabic text for matching.

    - Removes diacritics (تشكيل)
    - Stabilizes remaining diacritics to NFC code points
    - Converts (أ/إ/آ → ا)
    - Removes tatweel (ـ)
    - Converts Arabic-Indic digits (٠١٢٣) to Latin (0123)
    - Strips or tokenizes punctuation and digit runs (search profile)
    - Collapses whitespace and lowercases

    Args:
        text: Text to normalize
        options: Normalization options (defaults to the basic profile)

    Returns:
        Normalized text, or "" for empty or non-string input
    """
    if not text or not isinstance(text, str):
        return ""

    try:
        return _apply(text, options)
    except Exception as e:
        logger.warning(f"Arabic normalization failed, using fallback: {e}")
        return _fallback_normalize(text)


def _apply(s: str, options: NormalizationOptions) -> str:
    # Lowercase first so no later step sees characters that case folding would change
    s = s.lower()

    if options.strip_diacritics:
        s = _AR_DIACRITICS.sub("", s)

    if options.stabilize_diacritic_forms:
        s = unicodedata.normalize("NFC", s)

    if options.fold_alif_variants:
        s = s.translate(_ALIF_FOLD)

    if options.remove_tatweel:
        s = s.replace(_TATWEEL, "")

    if options.fold_digits_to_ascii:
        s = s.translate(_DIGIT_FOLD)

    if options.strip_punctuation:
        s = _PUNCTUATION.sub("", s)

    if options.tokenize_punctuation:
        s = _PUNCTUATION.sub(r" \1 ", s)

    if options.tokenize_digits:
        s = _DIGIT_RUN.sub(r" \1 ", s)

    return _WHITESPACE.sub(" ", s).strip()


def _fallback_normalize(s: str) -> str:
    s = s.translate(_ALIF_FOLD).replace("ى", "ي").replace("ة", "ه")
    s = _AR_DIACRITICS.sub("", s).replace(_TATWEEL, "")
    return _WHITESPACE.sub(" ", s).strip().lower()


def normalize_ar(s: str) -> str:
    """Normalize text with the basic profile (storage and default search)."""
    return normalize(s, BASIC_PROFILE)


def normalize_for_search(s: str) -> str:
    """Normalize text with the search profile (most permissive form)."""
    return normalize(s, SEARCH_PROFILE)


def is_dropped_char(ch: str) -> bool:
    """True for characters the basic profile removes (diacritics, tatweel)."""
    return ch == _TATWEEL or bool(_AR_DIACRITICS.match(ch))


def normalize_with_offsets(text: str) -> Tuple[str, List[int]]:
    """
    Fold text character by character, keeping a map back to the original.

    Applies the per-character part of the basic profile (diacritics, tatweel,
    alif variants, digits, lowercase) without collapsing whitespace, so that
    a span found in the folded text can be projected onto the original.

    Args:
        text: Original text

    Returns:
        (folded text, offsets) where offsets[i] is the index in ``text`` of
        the character that produced folded[i]
    """
    if not text or not isinstance(text, str):
        return "", []

    folded: List[str] = []
    offsets: List[int] = []
    for index, ch in enumerate(text):
        if is_dropped_char(ch):
            continue
        for out in ch.lower().translate(_ALIF_FOLD).translate(_DIGIT_FOLD):
            folded.append(out)
            offsets.append(index)
    return "".join(folded), offsets
