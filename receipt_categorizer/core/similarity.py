"""
Edit distance and similarity ratio for short strings (merchant names, keywords).

Both are quadratic in the input lengths in the worst case, so callers should
keep the inputs to tens of characters.
"""

from rapidfuzz.distance import Levenshtein


def distance(a: str, b: str) -> int:
    """
    Levenshtein distance: the minimum number of single-character insertions,
    deletions and substitutions turning `a` into `b`.
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Return 1 - distance / longest length, in [0, 1]. Two empty strings are identical."""
    if not a and not b:
        return 1.0
    return Levenshtein.normalized_similarity(a, b)
