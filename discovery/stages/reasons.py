"""
Reason generation: explain why a candidate may interest the user.

Every signal is checked independently (no short-circuit). A candidate that matches
nothing still gets one generic trending reason, so every scored item has at least
one reason.

The public entry point is generate_reasons.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.reasons import RecommendationReason, RecommendationSource
from ..utils.dates import parse_iso
from ..utils.geo import haversine_distance, round_half_up

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Popular with users like you"


def _coordinates(location: Any) -> Optional[Tuple[float, float]]:
    """(lat, lon) from a GeoPoint or a dict; None when either value is missing."""
    if location is None:
        return None
    if isinstance(location, dict):
        lat, lon = location.get("latitude"), location.get("longitude")
    else:
        lat, lon = getattr(location, "latitude", None), getattr(location, "longitude", None)
    if lat is None or lon is None:
        return None
    try:
        return float(lat), float(lon)
    except (TypeError, ValueError):
        return None


def _friends_who_liked(item_id: str, friend_likes: Dict[str, List[str]]) -> List[str]:
    """Friend ids whose like list contains item_id, in mapping order."""
    return [friend_id for friend_id, likes in friend_likes.items() if item_id in likes]


def _friend_description(count: int) -> str:
    return f"{count} friend{'s' if count > 1 else ''} liked this"


def _location_reason(
    user_location: Any,
    item_location: Any,
    config: FeedConfig,
) -> Optional[RecommendationReason]:
    """Location reason when both points are known and closer than the nearby radius."""
    user_point = _coordinates(user_location)
    item_point = _coordinates(item_location)
    if user_point is None or item_point is None:
        return None
    distance = haversine_distance(user_point[0], user_point[1], item_point[0], item_point[1])
    if distance >= config.nearby_radius_km:
        return None
    return RecommendationReason(
        source=RecommendationSource.LOCATION,
        weight=config.location_weight,
        description=f"{round_half_up(distance)}km from you",
    )


def _is_in_season(item_start_date: Optional[str], reference_date: Optional[datetime]) -> bool:
    """True if the item starts in the same calendar month as the reference date."""
    start = parse_iso(item_start_date)
    if start is None:
        return False
    reference = reference_date or datetime.now(timezone.utc)
    return start.month == reference.month


def generate_reasons(
    user_id: str,
    item_id: str,
    item_type: str,
    user_likes: Sequence[str],
    user_searches: Sequence[str],
    user_views: Sequence[str],
    friend_likes: Dict[str, List[str]],
    followed_users: Sequence[str],
    trending_items: Sequence[str],
    user_location: Any = None,
    item_location: Any = None,
    config: FeedConfig = DEFAULT_CONFIG,
    item_start_date: Optional[str] = None,
    reference_date: Optional[datetime] = None,
) -> List[RecommendationReason]:
    """
    Build the ordered reason list for one candidate.

    Order: liked, searched, viewed, friend, followed, trending, location, seasonal.
    Seasonal is only considered when config.seasonal_enabled is set. If nothing
    matched, returns a single trending reason with config.fallback_weight.
    """
    reasons: List[RecommendationReason] = []

    if item_id in user_likes:
        reasons.append(RecommendationReason(
            source=RecommendationSource.LIKED,
            weight=config.liked_weight,
            description="Based on items you've liked",
        ))

    if item_id in user_searches:
        reasons.append(RecommendationReason(
            source=RecommendationSource.SEARCHED,
            weight=config.searched_weight,
            description="Based on your recent searches",
        ))

    if item_id in user_views:
        reasons.append(RecommendationReason(
            source=RecommendationSource.VIEWED,
            weight=config.viewed_weight,
            description="Because you viewed this recently",
        ))

    friends = _friends_who_liked(item_id, friend_likes)
    if friends:
        reasons.append(RecommendationReason(
            source=RecommendationSource.FRIEND,
            weight=config.friend_weight,
            description=_friend_description(len(friends)),
            related_items=friends,
        ))

    if item_id in followed_users:
        reasons.append(RecommendationReason(
            source=RecommendationSource.FOLLOWED,
            weight=config.followed_weight,
            description="From someone you follow",
        ))

    if item_id in trending_items:
        reasons.append(RecommendationReason(
            source=RecommendationSource.TRENDING,
            weight=config.trending_weight,
            description="Trending right now",
        ))

    location_reason = _location_reason(user_location, item_location, config)
    if location_reason is not None:
        reasons.append(location_reason)

    if config.seasonal_enabled and _is_in_season(item_start_date, reference_date):
        reasons.append(RecommendationReason(
            source=RecommendationSource.SEASONAL,
            weight=config.seasonal_weight,
            description="Popular this season",
        ))

    if not reasons:
        reasons.append(RecommendationReason(
            source=RecommendationSource.TRENDING,
            weight=config.fallback_weight,
            description=FALLBACK_DESCRIPTION,
        ))

    logger.debug(
        "[reasons] user=%s item=%s type=%s sources=%s",
        user_id, item_id, item_type, [r.source.value for r in reasons],
    )
    return reasons
