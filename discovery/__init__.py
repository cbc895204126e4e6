"""
Wayfare Discovery: personalised discovery-feed scoring

Single entry point for the discovery package:
- models/: FeedConfig, candidate records, reasons, snapshots, feed response
- stages/: candidate_pool, reasons, scoring, ranking, sections, orchestrator,
  trending, similar, itinerary_ranking, diversity
- utils/: haversine distance, ISO date handling
"""

from .models import (
    DEFAULT_CONFIG,
    CandidatePools,
    CandidateType,
    DiscoveryFeedResponse,
    FeedConfig,
    FeedFilters,
    ItemMetrics,
    ItineraryFilters,
    RecommendationItem,
    RecommendationReason,
    RecommendationSource,
    ScoredItinerary,
    SocialData,
    TravelPreferences,
    UserPreferences,
)
from .stages import (
    calculate_score,
    discover_itineraries,
    find_similar_items,
    generate_discovery_feed,
    generate_reasons,
    rank_trending,
    trending_score,
)
from .utils import haversine_distance

__all__ = [
    "DEFAULT_CONFIG",
    "CandidatePools",
    "CandidateType",
    "DiscoveryFeedResponse",
    "FeedConfig",
    "FeedFilters",
    "ItemMetrics",
    "ItineraryFilters",
    "RecommendationItem",
    "RecommendationReason",
    "RecommendationSource",
    "ScoredItinerary",
    "SocialData",
    "TravelPreferences",
    "UserPreferences",
    "calculate_score",
    "discover_itineraries",
    "find_similar_items",
    "generate_discovery_feed",
    "generate_reasons",
    "haversine_distance",
    "rank_trending",
    "trending_score",
]
