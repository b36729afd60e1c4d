"""
Static lookup tables for the query parser and race ingestion.
Read-only: mappings are MappingProxyType, lists are tuples.
"""
from types import MappingProxyType


# Distance synonyms -> canonical distance
DISTANCE_SYNONYMS = MappingProxyType({
    "sprint": "sprint",
    "sprints": "sprint",
    "super sprint": "sprint",
    "short": "sprint",

    "olympic": "olympic",
    "olympics": "olympic",
    "standard": "olympic",
    "oly": "olympic",

    "half": "half",
    "70.3": "half",
    "70 3": "half",
    "ironman 70.3": "half",
    "halfironman": "half",
    "half ironman": "half",
    "half-ironman": "half",
    "1/2": "half",

    "full": "full",
    "140.6": "full",
    "140 6": "full",
    "ironman 140.6": "full",
    "ironman": "full",
    "full ironman": "full",
    "full-ironman": "full",
})

# US state names and nicknames -> two-letter code
STATE_NAMES = MappingProxyType({
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA", "cali": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA", "mass": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
    "washington dc": "DC", "washington d.c.": "DC",
})

STATE_CODES = frozenset(STATE_NAMES.values())

# Codes that are also everyday English words; in lower case they only
# count when written in capitals ("IN", "OR") in the original query.
AMBIGUOUS_STATE_CODES = frozenset({
    "al", "co", "de", "hi", "id", "in", "la", "ma", "me", "oh", "ok", "or", "pa",
})

MAJOR_CITIES = (
    "new york", "los angeles", "chicago", "houston", "phoenix", "philadelphia",
    "san antonio", "san diego", "dallas", "san jose", "austin", "jacksonville",
    "fort worth", "columbus", "charlotte", "san francisco", "indianapolis",
    "seattle", "denver", "washington", "boston", "nashville", "baltimore",
    "portland", "las vegas", "detroit", "memphis", "louisville", "milwaukee",
    "albuquerque", "tucson", "fresno", "sacramento", "mesa", "atlanta",
    "kansas city", "colorado springs", "raleigh", "miami", "oakland", "tampa",
    "boulder", "madison", "minneapolis", "st. louis", "orlando", "chattanooga",
    "oceanside", "santa rosa", "coeur d'alene", "lake placid", "tempe",
)

REGIONS = MappingProxyType({
    "west coast": ("CA", "OR", "WA"),
    "southwest": ("AZ", "NM", "NV", "UT", "CO"),
    "midwest": ("IL", "IN", "IA", "KS", "MI", "MN", "MO", "NE", "ND", "OH", "SD", "WI"),
    "southeast": ("AL", "AR", "FL", "GA", "KY", "LA", "MS", "NC", "SC", "TN", "VA", "WV"),
    "northeast": ("CT", "DE", "ME", "MD", "MA", "NH", "NJ", "NY", "PA", "RI", "VT"),
    "mountain west": ("ID", "MT", "WY"),
})

# State -> display region for ingested races. Wider than REGIONS: Texas,
# Hawaii and Alaska get their own.
STATE_REGIONS = MappingProxyType({
    **{code: "West Coast" for code in REGIONS["west coast"]},
    **{code: "Southwest" for code in REGIONS["southwest"]},
    **{code: "Midwest" for code in REGIONS["midwest"]},
    **{code: "Southeast" for code in REGIONS["southeast"]},
    **{code: "Northeast" for code in REGIONS["northeast"]},
    **{code: "Mountain West" for code in REGIONS["mountain west"]},
    "TX": "Texas",
    "HI": "Hawaii",
    "AK": "Alaska",
})

ORGANIZERS = (
    "ironman",
    "usa triathlon",
    "usat",
    "life time",
    "lifetime",
    "challenge",
    "rev3",
    "columbia",
    "tri-california",
)

ORGANIZER_DISPLAY_NAMES = MappingProxyType({
    "ironman": "Ironman",
    "usa triathlon": "USA Triathlon",
    "usat": "USAT",
    "life time": "Life Time",
    "lifetime": "Lifetime",
    "challenge": "Challenge",
    "rev3": "Rev3",
    "columbia": "Columbia",
    "tri-california": "Tri-California",
})

# Checked in this order; the first intent with a keyword hit wins
INTENT_KEYWORDS = MappingProxyType({
    "find": ("find", "show", "list", "search", "looking for", "want"),
    "compare": ("compare", "vs", "versus", "difference", "between"),
    "recommend": ("best", "recommend", "suggest", "top", "good", "popular"),
    "info": ("what", "when", "where", "how", "tell me", "info", "information"),
})

MONTHS = MappingProxyType({
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
})

# Season -> (first month, last month), checked in this order
SEASONS = (
    (("summer",), (6, 8)),
    (("fall", "autumn"), (9, 11)),
    (("spring",), (3, 5)),
)

QUALIFIER_TERMS = ("qualifier", "qualifying", "world championship")

STOP_WORDS = frozenset({
    "the", "a", "an", "in", "on", "at", "for", "to", "of", "with",
    "is", "are", "what", "where", "when", "how",
})
