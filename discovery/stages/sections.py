"""
Feed sections: named, overlapping views over the sorted candidate list.

personal = top N overall; trending/forYou/nearby/friendsLiked/seasonal = top N with a
matching reason source; similar = top items in the user's favourite categories.
"""

from collections import Counter
from typing import List

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.feed import DiscoveryFeedResponse, SimilarGroup
from ..models.items import RecommendationItem
from ..models.reasons import ENGAGEMENT_SOURCES, RecommendationSource


def _with_source(
    ranked: List[RecommendationItem],
    limit: int,
    *sources: RecommendationSource,
) -> List[RecommendationItem]:
    return [c for c in ranked if c.has_source(*sources)][:limit]


def top_categories(categories: List[str], limit: int) -> List[str]:
    """Most frequent categories first; ties keep first-occurrence order."""
    return [category for category, _ in Counter(categories).most_common(limit)]


def build_similar_groups(
    ranked: List[RecommendationItem],
    categories: List[str],
    config: FeedConfig = DEFAULT_CONFIG,
) -> List[SimilarGroup]:
    """One group per top preference category, each holding its best-ranked items."""
    return [
        SimilarGroup(
            category=category,
            items=[c for c in ranked if c.category == category][: config.similar_items_limit],
        )
        for category in top_categories(categories, config.similar_categories_limit)
    ]


def build_sections(
    ranked: List[RecommendationItem],
    preference_categories: List[str],
    config: FeedConfig = DEFAULT_CONFIG,
) -> DiscoveryFeedResponse:
    """Slice the ranked list into the seven discovery sections."""
    limit = config.section_limit
    return DiscoveryFeedResponse(
        personal_recommendations=ranked[: config.personal_limit],
        trending=_with_source(ranked, limit, RecommendationSource.TRENDING),
        for_you=_with_source(ranked, limit, *ENGAGEMENT_SOURCES),
        nearby=_with_source(ranked, limit, RecommendationSource.LOCATION),
        seasonal=_with_source(ranked, limit, RecommendationSource.SEASONAL),
        friends_liked=_with_source(ranked, limit, RecommendationSource.FRIEND),
        similar=build_similar_groups(ranked, preference_categories, config),
    )
