"""
Text Matching - Normalization & typo-tolerant matching for destination search
"""
import re
import unicodedata
from typing import Optional

# Positional differences tolerated before a term stops matching
MAX_DIFFERENCES = 2

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """
    Lower-case, strip diacritics, collapse whitespace runs and trim.
    Absent input normalizes to an empty string.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", stripped).strip()


def is_match(search_term: Optional[str], value: Optional[str]) -> bool:
    """
    Check whether a search term approximately matches a field value.

    An empty term matches everything. Otherwise the value matches when it
    contains the term, or when the two differ in at most MAX_DIFFERENCES
    positions. The comparison is positional, not an edit distance: an
    insertion near the start shifts every following character.
    """
    if not search_term:
        return True

    normalized_search = normalize_text(search_term)
    normalized_value = normalize_text(value)

    if normalized_search in normalized_value:
        return True

    differences = 0
    max_length = max(len(normalized_search), len(normalized_value))
    for i in range(max_length):
        if differences > MAX_DIFFERENCES:
            break
        search_char = normalized_search[i] if i < len(normalized_search) else None
        value_char = normalized_value[i] if i < len(normalized_value) else None
        if search_char != value_char:
            differences += 1

    return differences <= MAX_DIFFERENCES
