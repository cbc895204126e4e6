"""Data models for the discovery feed."""

from .common import CamelModel
from .config import DEFAULT_CONFIG, FeedConfig, resolve_config
from .feed import DiscoveryFeedResponse, SimilarGroup, SimilarItem
from .items import (
    CandidateRecord,
    CandidateType,
    Deal,
    Destination,
    Itinerary,
    Promotion,
    RecommendationItem,
    UserProfile,
    ensure_records,
)
from .itinerary_discovery import DateWindow, ItineraryFilters, ScoredItinerary, TravelPreferences
from .metrics import ItemMetrics, ensure_metrics
from .reasons import ENGAGEMENT_SOURCES, RecommendationReason, RecommendationSource
from .snapshots import (
    CandidatePools,
    FeedFilters,
    GeoPoint,
    SocialData,
    UserPreferences,
    ensure_model,
)

__all__ = [
    "CamelModel",
    "DEFAULT_CONFIG",
    "ENGAGEMENT_SOURCES",
    "CandidatePools",
    "CandidateRecord",
    "CandidateType",
    "DateWindow",
    "Deal",
    "Destination",
    "DiscoveryFeedResponse",
    "FeedConfig",
    "FeedFilters",
    "GeoPoint",
    "ItemMetrics",
    "Itinerary",
    "ItineraryFilters",
    "Promotion",
    "RecommendationItem",
    "RecommendationReason",
    "RecommendationSource",
    "ScoredItinerary",
    "SimilarGroup",
    "SimilarItem",
    "SocialData",
    "TravelPreferences",
    "UserPreferences",
    "UserProfile",
    "ensure_metrics",
    "ensure_model",
    "ensure_records",
    "resolve_config",
]
