"""
Itinerary discovery: search, score, diversify and paginate published itineraries.

final_score = relevance * 0.4 + popularity * 0.25 + freshness * 0.15
            + quality * 0.15 + proximity * 0.05

- relevance: stated preferences (destinations, categories, travel style)
- popularity: log-scaled weighted engagement from ItemMetrics
- freshness: exp(-days / 30) since the latest of created_at/updated_at
- quality: record completeness blended with the average rating
- proximity: user location text contained in the itinerary location

The public entry point is discover_itineraries.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from ..models.items import Itinerary
from ..models.itinerary_discovery import ItineraryFilters, ScoredItinerary, TravelPreferences
from ..models.metrics import ItemMetrics
from ..utils.dates import parse_iso
from .diversity import diversify

logger = logging.getLogger(__name__)

RELEVANCE_WEIGHT = 0.4
POPULARITY_WEIGHT = 0.25
FRESHNESS_WEIGHT = 0.15
QUALITY_WEIGHT = 0.15
PROXIMITY_WEIGHT = 0.05

# Engagement weight per ItemMetrics counter
ENGAGEMENT_WEIGHTS = {
    "view_count": 1,
    "save_count": 5,
    "like_count": 3,
    "comment_count": 4,
    "share_count": 7,
}

NEUTRAL_SCORE = 0.5
NO_METRICS_POPULARITY = 0.3
FRESHNESS_DECAY_DAYS = 30.0


def relevance_score(itinerary: Itinerary, preferences: Optional[TravelPreferences]) -> float:
    """0.5 base, +0.2 destination match, +0.2 * category share, +0.1 travel style; max 1."""
    if preferences is None:
        return NEUTRAL_SCORE

    score = NEUTRAL_SCORE
    factors = 0
    location = (itinerary.location or "").lower()

    if preferences.preferred_destinations and location:
        if any(dest.lower() in location for dest in preferences.preferred_destinations):
            score += 0.2
        factors += 1

    if preferences.preferred_categories and itinerary.categories:
        matches = sum(1 for c in itinerary.categories if c in preferences.preferred_categories)
        score += matches / len(itinerary.categories) * 0.2
        factors += 1

    if preferences.travel_style and itinerary.travel_style:
        if itinerary.travel_style == preferences.travel_style:
            score += 0.1
        factors += 1

    return min(score, 1.0) if factors else NEUTRAL_SCORE


def popularity_score(metrics: Optional[ItemMetrics]) -> float:
    """log10(weighted engagement + 1) / 4, capped at 1; 0.3 without metrics."""
    if metrics is None:
        return NO_METRICS_POPULARITY
    engagement = sum(getattr(metrics, field) * weight for field, weight in ENGAGEMENT_WEIGHTS.items())
    return min(math.log10(max(engagement, 0) + 1) / 4, 1.0)


def freshness_score(itinerary: Itinerary, now: Optional[datetime] = None) -> float:
    """exp(-days / 30) since the most recent of created_at/updated_at; 0 when neither parses."""
    dates = [d for d in (parse_iso(itinerary.created_at), parse_iso(itinerary.updated_at)) if d is not None]
    if not dates:
        return 0.0
    now = now or datetime.now(timezone.utc)
    age_days = (now - max(dates)).total_seconds() / 86400.0
    return math.exp(-max(age_days, 0.0) / FRESHNESS_DECAY_DAYS)


def quality_score(itinerary: Itinerary, metrics: Optional[ItemMetrics]) -> float:
    """Completeness (max 0.8) * 0.6 + rating share (avg / 5, else 0.5) * 0.4."""
    completeness = 0.0
    if itinerary.title:
        completeness += 0.1
    if itinerary.description and len(itinerary.description) > 10:
        completeness += 0.2
    if itinerary.location:
        completeness += 0.1
    if itinerary.start_date and itinerary.end_date:
        completeness += 0.1
    if itinerary.activities:
        completeness += 0.2
    if itinerary.image_url:
        completeness += 0.1

    rating = NEUTRAL_SCORE
    if metrics is not None and metrics.average_rating > 0:
        rating = metrics.average_rating / 5

    return min(completeness * 0.6 + rating * 0.4, 1.0)


def proximity_score(itinerary: Itinerary, user_location: Optional[str]) -> float:
    """1.0 when the itinerary location contains the user's location text, else 0.5."""
    if not user_location or not itinerary.location:
        return NEUTRAL_SCORE
    if user_location.lower() in itinerary.location.lower():
        return 1.0
    return NEUTRAL_SCORE


def _contains(text: Optional[str], needle: str) -> bool:
    return bool(text) and needle.lower() in text.lower()


def _passes_filters(itinerary: Itinerary, filters: ItineraryFilters) -> bool:
    """Private itineraries never pass; every present filter must hold."""
    if itinerary.is_public is False:
        return False
    if filters.categories and not set(itinerary.categories or []) & set(filters.categories):
        return False
    if filters.location and not _contains(itinerary.location, filters.location):
        return False
    if filters.date_range is not None:
        if filters.date_range.start:
            start, bound = parse_iso(itinerary.start_date), parse_iso(filters.date_range.start)
            if start is None or bound is None or start < bound:
                return False
        if filters.date_range.end:
            end, bound = parse_iso(itinerary.end_date), parse_iso(filters.date_range.end)
            if end is None or bound is None or end > bound:
                return False
    if filters.search_query:
        query = filters.search_query
        if not any(_contains(text, query) for text in (itinerary.title, itinerary.description, itinerary.location)):
            return False
    return True


def score_itinerary(
    itinerary: Itinerary,
    preferences: Optional[TravelPreferences],
    metrics: Optional[ItemMetrics],
    user_location: Optional[str],
    now: Optional[datetime] = None,
) -> ScoredItinerary:
    relevance = relevance_score(itinerary, preferences)
    popularity = popularity_score(metrics)
    freshness = freshness_score(itinerary, now)
    quality = quality_score(itinerary, metrics)
    proximity = proximity_score(itinerary, user_location)
    final = (
        relevance * RELEVANCE_WEIGHT
        + popularity * POPULARITY_WEIGHT
        + freshness * FRESHNESS_WEIGHT
        + quality * QUALITY_WEIGHT
        + proximity * PROXIMITY_WEIGHT
    )
    return ScoredItinerary(
        item=itinerary,
        relevance_score=relevance,
        popularity_score=popularity,
        freshness_score=freshness,
        quality_score=quality,
        proximity_score=proximity,
        final_score=final,
    )


def discover_itineraries(
    user_id: Optional[str],
    itineraries: List[Union[Dict, Itinerary]],
    preferences: Optional[Union[Dict, TravelPreferences]] = None,
    metrics: Optional[List[Union[Dict, ItemMetrics]]] = None,
    user_location: Optional[str] = None,
    filters: Optional[Union[Dict, ItineraryFilters]] = None,
    now: Optional[datetime] = None,
) -> List[ScoredItinerary]:
    """
    Rank itineraries for one (possibly anonymous) user.

    Steps:
    1. Drop private itineraries and apply the search filters
    2. Score relevance/popularity/freshness/quality/proximity and blend them
    3. Sort by final score (descending, stable)
    4. Diversify the head by category and location (at most 20 results)
    5. Slice [offset, offset + limit)

    Args:
        user_id: Requesting user, None for anonymous (logging only)
        itineraries: Candidate itineraries
        preferences: Stated travel preferences; neutral relevance when None
        metrics: Engagement counters; matched to itineraries by item_id
        user_location: Free-text location of the user, for proximity
        filters: Search filters and pagination; defaults when None
        now: Reference time for freshness; current UTC time when None

    Returns:
        One page of ScoredItinerary, best first
    """
    records = [Itinerary.model_validate(i) if isinstance(i, dict) else i for i in itineraries]
    if isinstance(preferences, dict):
        preferences = TravelPreferences.model_validate(preferences)
    if isinstance(filters, dict):
        filters = ItineraryFilters.model_validate(filters)
    filters = filters or ItineraryFilters()
    metrics_by_id: Dict[str, ItemMetrics] = {}
    for m in metrics or []:
        m = ItemMetrics.model_validate(m) if isinstance(m, dict) else m
        metrics_by_id[m.item_id] = m
    now = now or datetime.now(timezone.utc)

    matching = [r for r in records if _passes_filters(r, filters)]
    scored = [
        score_itinerary(r, preferences, metrics_by_id.get(r.id), user_location, now)
        for r in matching
    ]
    scored.sort(key=lambda s: s.final_score, reverse=True)
    diversified = diversify(scored)
    page = diversified[filters.offset: filters.offset + filters.limit]

    logger.info(
        "[discover] user=%s itineraries=%d matching=%d page=%d offset=%d",
        user_id, len(records), len(matching), len(page), filters.offset,
    )
    return page
