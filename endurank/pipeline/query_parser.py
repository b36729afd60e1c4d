"""
Natural-language query parser: turns a free-text race search into
structured filters.

Matching is by substring against the gazetteers, longest phrase first,
so "half ironman" yields half and not also full. A phrase cannot reuse
characters already claimed by a longer phrase of the same table. Short
substrings can still hit inside unrelated words ("oly" in "holy"); that
recall-over-precision behaviour is kept on purpose. Two-letter state
codes are the one exception: they must stand alone as a word.
"""
import calendar
import re
from datetime import date
from typing import Iterable, Optional

from ..models.query import DateRange, LocationFilter, ParsedQuery, PriceRange, QueryFilters
from .gazetteers import (
    AMBIGUOUS_STATE_CODES,
    DISTANCE_SYNONYMS,
    INTENT_KEYWORDS,
    MAJOR_CITIES,
    MONTHS,
    ORGANIZER_DISPLAY_NAMES,
    ORGANIZERS,
    QUALIFIER_TERMS,
    REGIONS,
    SEASONS,
    STATE_CODES,
    STATE_NAMES,
    STOP_WORDS,
)


MAX_PRICE_PATTERN = re.compile(r"(?:under|less than|below)\s+\$?(\d+)")
MIN_PRICE_PATTERN = re.compile(r"(?:over|more than|above)\s+\$?(\d+)")
MONTH_PATTERN = re.compile(
    r"\b(" + "|".join(sorted(MONTHS, key=len, reverse=True)) + r")\b"
)
STATE_CODE_PATTERN = re.compile(r"\b[A-Za-z]{2}\b")

TOKEN_PUNCTUATION = ".,!?;:\"'()[]"


def _scan(text: str, phrases: Iterable[str]) -> list[tuple[int, str]]:
    """
    Find phrases in text, longest first.

    Returns (position, phrase) pairs ordered by position. A shorter phrase
    overlapping an earlier hit is ignored.
    """
    taken = [False] * len(text)
    hits = []

    for phrase in sorted(phrases, key=len, reverse=True):
        start = text.find(phrase)
        while start != -1:
            end = start + len(phrase)
            if not any(taken[start:end]):
                for i in range(start, end):
                    taken[i] = True
                hits.append((start, phrase))
            start = text.find(phrase, start + 1)

    hits.sort()
    return hits


def _unique(values: Iterable[str]) -> list[str]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def detect_intent(lower: str) -> str:
    """First intent (find, compare, recommend, info) with a keyword hit; find otherwise."""
    for intent, keywords in INTENT_KEYWORDS.items():
        if any(keyword in lower for keyword in keywords):
            return intent
    return "find"


def _extract_states(text: str, lower: str) -> tuple[list[tuple[int, str]], list[str]]:
    """Return (position, code) hits and the phrases/tokens that produced them."""
    hits = []
    consumed = []

    for position, name in _scan(lower, STATE_NAMES):
        hits.append((position, STATE_NAMES[name]))
        consumed.append(name)

    for match in STATE_CODE_PATTERN.finditer(text):
        token = match.group()
        code = token.upper()
        if code not in STATE_CODES:
            continue
        if token.lower() in AMBIGUOUS_STATE_CODES and not token.isupper():
            continue
        hits.append((match.start(), code))
        consumed.append(token.lower())

    hits.sort()
    return hits, consumed


def _extract_price_range(lower: str) -> Optional[PriceRange]:
    max_match = MAX_PRICE_PATTERN.search(lower)
    min_match = MIN_PRICE_PATTERN.search(lower)
    if not max_match and not min_match:
        return None
    return PriceRange(
        min=int(min_match.group(1)) if min_match else None,
        max=int(max_match.group(1)) if max_match else None,
    )


def _month_range(year: int, first_month: int, last_month: int) -> DateRange:
    last_day = calendar.monthrange(year, last_month)[1]
    return DateRange(start=date(year, first_month, 1), end=date(year, last_month, last_day))


def _extract_date_range(lower: str, year: int) -> Optional[DateRange]:
    """Month name first, then summer, fall/autumn, spring. Only one rule applies."""
    month_match = MONTH_PATTERN.search(lower)
    if month_match:
        month = MONTHS[month_match.group(1)]
        return _month_range(year, month, month)

    for terms, (first_month, last_month) in SEASONS:
        if any(term in lower for term in terms):
            return _month_range(year, first_month, last_month)

    return None


def _residual_keywords(
    lower: str,
    distances: list[str],
    cities: list[str],
    consumed: list[str],
) -> list[str]:
    consumed_words = {word for phrase in consumed for word in phrase.split()}
    keywords = []

    for raw in lower.split():
        word = raw.strip(TOKEN_PUNCTUATION)
        if len(word) <= 2 or word in STOP_WORDS or word in consumed_words:
            continue
        if any(d in word for d in distances):
            continue
        if any(c in word for c in cities):
            continue
        keywords.append(word)

    return keywords


def parse_query(query: str, today: Optional[date] = None) -> ParsedQuery:
    """
    Parse a free-text race search.

    Args:
        query: Raw search text
        today: Reference date for month and season ranges (defaults to today)

    Returns:
        ParsedQuery; an empty or unrecognised query yields intent "find"
        and no filters
    """
    text = " ".join(query.split())
    lower = text.lower()
    year = (today or date.today()).year

    distance_hits = _scan(lower, DISTANCE_SYNONYMS)
    distances = _unique(DISTANCE_SYNONYMS[phrase] for _, phrase in distance_hits)

    state_hits, state_phrases = _extract_states(text, lower)
    states = _unique(code for _, code in state_hits)

    cities = [city for _, city in _scan(lower, MAJOR_CITIES)]

    regions = []
    for _, region in _scan(lower, REGIONS):
        regions.append(region)
        for code in REGIONS[region]:
            if code not in states:
                states.append(code)

    organizers = [org for _, org in _scan(lower, ORGANIZERS)]

    filters = QueryFilters(
        price_range=_extract_price_range(lower),
        date_range=_extract_date_range(lower, year),
        is_qualifier=True if any(term in lower for term in QUALIFIER_TERMS) else None,
    )

    consumed = [phrase for _, phrase in distance_hits] + state_phrases + cities
    keywords = _residual_keywords(lower, distances, cities, consumed)

    return ParsedQuery(
        original=query,
        intent=detect_intent(lower),
        locations=LocationFilter(cities=cities, states=states, regions=regions),
        distances=distances,
        organizers=organizers,
        keywords=keywords,
        filters=filters,
    )


def _title(phrase: str) -> str:
    return " ".join(word.capitalize() for word in phrase.split())


def generate_summary(parsed: ParsedQuery) -> str:
    """
    Short restatement of what was understood, e.g.
    "Best Sprint, Olympic races in CA, TX by Ironman (World Championship qualifiers)".
    """
    parts = []

    if parsed.intent == "recommend":
        parts.append("Best")
    elif parsed.intent == "compare":
        parts.append("Comparing")

    if parsed.distances:
        parts.append(", ".join(d.capitalize() for d in parsed.distances))

    parts.append("races")

    locations = parsed.locations
    if locations.cities:
        parts.append("in " + ", ".join(_title(c) for c in locations.cities))
    elif locations.states:
        parts.append("in " + ", ".join(locations.states))
    elif locations.regions:
        parts.append("in " + ", ".join(_title(r) for r in locations.regions))

    if parsed.organizers:
        parts.append("by " + ", ".join(
            ORGANIZER_DISPLAY_NAMES.get(o, _title(o)) for o in parsed.organizers
        ))

    if parsed.filters.is_qualifier:
        parts.append("(World Championship qualifiers)")

    return " ".join(parts).strip()
