"""
Feed orchestrator: runs candidate pool -> ranking -> sections to produce the
discovery feed.

The main entry point is generate_discovery_feed. It is a pure function of its
inputs: the same inputs (including pool order) give the same sections in the
same order.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models.config import FeedConfig, resolve_config
from ..models.feed import DiscoveryFeedResponse
from ..models.snapshots import (
    CandidatePools,
    FeedFilters,
    SocialData,
    UserPreferences,
    ensure_model,
)
from .candidate_pool import get_candidate_pool
from .ranking import rank_candidates
from .sections import build_sections

logger = logging.getLogger(__name__)


def generate_discovery_feed(
    user_id: str,
    user_preferences: Union[Dict[str, Any], UserPreferences],
    social_data: Union[Dict[str, Any], SocialData],
    available_items: Union[Dict[str, Any], CandidatePools],
    trending_items: Sequence[str],
    filters: Optional[Union[Dict[str, Any], FeedFilters]] = None,
    config: Optional[FeedConfig] = None,
    reference_date: Optional[datetime] = None,
) -> DiscoveryFeedResponse:
    """
    Build the personalised discovery feed.

    Steps:
    1. Flatten the five pools and apply filters
    2. Generate reasons, recency/popularity and a score per candidate
    3. Sort by score (descending, stable)
    4. Slice the sorted list into the seven sections

    Args:
        user_id: Id of the requesting user (logging only)
        user_preferences: likes/searches/views/categories/location snapshot
        social_data: friend likes and followed ids
        available_items: itineraries, deals, promotions, destinations, users
        trending_items: ids currently trending
        filters: optional types/categories/price_range/date_range
        config: scorer constants; DEFAULT_CONFIG when None
        reference_date: "now" for seasonal detection; current UTC time when None

    Returns:
        DiscoveryFeedResponse with every section populated (possibly empty)
    """
    config = resolve_config(config)

    # Normalize inputs to models (server passes dicts)
    preferences = ensure_model(UserPreferences, user_preferences)
    social = ensure_model(SocialData, social_data)
    pools = ensure_model(CandidatePools, available_items)
    feed_filters = ensure_model(FeedFilters, filters) if filters is not None else None
    trending: List[str] = list(trending_items or [])

    candidates = get_candidate_pool(pools, feed_filters)
    ranked = rank_candidates(
        user_id,
        candidates,
        preferences,
        social,
        trending,
        config,
        reference_date=reference_date,
    )
    feed = build_sections(ranked, preferences.categories, config)

    logger.info(
        "[feed] user=%s pool=%d candidates=%d personal=%d trending=%d for_you=%d nearby=%d friends=%d similar=%d",
        user_id,
        pools.total(),
        len(candidates),
        len(feed.personal_recommendations),
        len(feed.trending),
        len(feed.for_you),
        len(feed.nearby),
        len(feed.friends_liked),
        len(feed.similar),
    )
    return feed
