"""
Ranking: attach reasons and a score to every candidate, then sort.

Per candidate: generate_reasons -> recency/popularity heuristics -> calculate_score.
Sorting is stable and descending, so ties keep pool order.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.items import CandidateType, RecommendationItem
from ..models.snapshots import SocialData, UserPreferences
from .reasons import generate_reasons
from .scoring import calculate_score, estimate_popularity, estimate_recency

logger = logging.getLogger(__name__)

# Types that are given a location for the nearby check.
LOCATED_TYPES = frozenset({CandidateType.ITINERARY, CandidateType.DESTINATION, CandidateType.PROMOTION})

ORIGIN = {"latitude": 0.0, "longitude": 0.0}


def _item_location(candidate: RecommendationItem, config: FeedConfig) -> Optional[dict]:
    """
    Location used for the nearby check.

    Deals and users have none. Other types sit at the origin unless
    config.use_item_coordinates is on and the record has its own coordinates.
    """
    if candidate.type not in LOCATED_TYPES:
        return None
    if config.use_item_coordinates:
        own = candidate.item.coordinates()
        if own is not None:
            return own
    return ORIGIN


def score_candidate(
    user_id: str,
    candidate: RecommendationItem,
    preferences: UserPreferences,
    social: SocialData,
    trending_items: Sequence[str],
    config: FeedConfig = DEFAULT_CONFIG,
    reference_date: Optional[datetime] = None,
) -> RecommendationItem:
    """Return a copy of candidate with reasons and score filled in."""
    reasons = generate_reasons(
        user_id,
        candidate.id,
        candidate.type.value,
        preferences.likes,
        preferences.searches,
        preferences.views,
        social.friends,
        social.following,
        trending_items,
        user_location=preferences.location,
        item_location=_item_location(candidate, config),
        config=config,
        item_start_date=getattr(candidate.item, "start_date", None),
        reference_date=reference_date,
    )
    recency = estimate_recency(candidate, config)
    popularity = estimate_popularity(candidate, config)
    score = calculate_score(reasons, recency, popularity, config)
    return candidate.model_copy(update={"reasons": reasons, "score": score})


def rank_candidates(
    user_id: str,
    candidates: List[RecommendationItem],
    preferences: UserPreferences,
    social: SocialData,
    trending_items: Sequence[str],
    config: FeedConfig = DEFAULT_CONFIG,
    reference_date: Optional[datetime] = None,
) -> List[RecommendationItem]:
    """Score every candidate and return them sorted by score (descending, stable)."""
    scored = [
        score_candidate(user_id, c, preferences, social, trending_items, config, reference_date)
        for c in candidates
    ]
    scored.sort(key=lambda c: c.score, reverse=True)
    if scored:
        logger.debug(
            "[ranking] user=%s scored=%d top=%s(%.2f)",
            user_id, len(scored), scored[0].id, scored[0].score,
        )
    return scored
