"""Pipeline stages: candidate pool, reasons, scoring, ranking, sections, plus trending, similar items and itinerary discovery."""

from .candidate_pool import apply_filters, flatten_pools, get_candidate_pool
from .diversity import diversify
from .itinerary_ranking import discover_itineraries, score_itinerary
from .orchestrator import generate_discovery_feed
from .ranking import rank_candidates, score_candidate
from .reasons import generate_reasons
from .scoring import calculate_score, estimate_popularity, estimate_recency
from .sections import build_sections, top_categories
from .similar import find_similar_items, similarity_score
from .trending import rank_trending, trending_score, wilson_lower_bound

__all__ = [
    "apply_filters",
    "build_sections",
    "calculate_score",
    "discover_itineraries",
    "diversify",
    "estimate_popularity",
    "estimate_recency",
    "find_similar_items",
    "flatten_pools",
    "generate_discovery_feed",
    "generate_reasons",
    "get_candidate_pool",
    "rank_candidates",
    "rank_trending",
    "score_candidate",
    "score_itinerary",
    "similarity_score",
    "top_categories",
    "trending_score",
    "wilson_lower_bound",
]
