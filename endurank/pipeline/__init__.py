"""Pipeline modules for scoring, matching and search."""

from .scoring import ScoringEngine, cost_sensitivity_factor, normalized_price
from .similarity import edit_distance, find_similar, is_similar, similarity
from .validation import DuplicateValidator
from .query_parser import generate_summary, parse_query
from .ranking import SearchRanker

__all__ = [
    "ScoringEngine",
    "cost_sensitivity_factor",
    "normalized_price",
    "edit_distance",
    "find_similar",
    "is_similar",
    "similarity",
    "DuplicateValidator",
    "generate_summary",
    "parse_query",
    "SearchRanker",
]
