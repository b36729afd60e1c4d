"""
String similarity for spotting near-duplicate catalog names.

Candidate sets are small (a brand's products, a city's races), so every
candidate is compared directly with no index.
"""
import math
from typing import Any, Callable, Optional, Sequence, TypeVar

from rapidfuzz.distance import Levenshtein


DEFAULT_THRESHOLD = 85

T = TypeVar("T")


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance with unit cost for insert, delete and substitute.
    Case-sensitive; callers lower-case first.
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> int:
    """
    Similarity percentage (0-100) between two names.

    Trimmed and lower-cased before comparing. Equal strings score 100,
    an empty side scores 0.
    """
    s1 = a.lower().strip()
    s2 = b.lower().strip()

    if s1 == s2:
        return 100
    if not s1 or not s2:
        return 0

    distance = edit_distance(s1, s2)
    max_length = max(len(s1), len(s2))
    percentage = (max_length - distance) / max_length * 100

    # Half-up rounding
    return int(math.floor(percentage + 0.5))


def is_similar(a: str, b: str, threshold: int = DEFAULT_THRESHOLD) -> bool:
    """Check if two names are close enough to be considered duplicates."""
    return similarity(a, b) >= threshold


def item_name(item: Any) -> str:
    """Extract the comparable name from a catalog model or raw document."""
    name = getattr(item, "display_name", None)
    if name is not None:
        return name
    if isinstance(item, dict):
        for key in ("productName", "product_name", "raceName", "race_name", "name"):
            if item.get(key):
                return str(item[key])
    return ""


def find_similar(
    term: str,
    candidates: Sequence[T],
    threshold: int = DEFAULT_THRESHOLD,
    name_of: Optional[Callable[[T], str]] = None,
) -> list[T]:
    """
    Filter candidates whose name is similar to ``term``.

    Args:
        term: Name being submitted
        candidates: Existing items, in the order they should be reported
        threshold: Minimum similarity percentage
        name_of: Name extractor, defaults to ``item_name``

    Returns:
        Matching candidates in input order
    """
    extract = name_of or item_name
    return [item for item in candidates if is_similar(term, extract(item), threshold)]
