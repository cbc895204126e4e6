"""
Trending: score items by engagement quality and freshness.

trending_score = wilson_lower_bound(likes, views) * 0.7 + exp(-days_since_update / 7) * 0.3

The Wilson lower bound (95% confidence) keeps a 1-view/1-like item from outranking a
1000-view/900-like one. The public entry points are trending_score and rank_trending.
"""

import math
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from ..models.metrics import ItemMetrics, ensure_metrics
from ..utils.dates import days_since

WILSON_Z = 1.96
QUALITY_WEIGHT = 0.7
RECENCY_WEIGHT = 0.3
RECENCY_HALF_WINDOW_DAYS = 7.0


def wilson_lower_bound(positive: int, total: int, z: float = WILSON_Z) -> float:
    """Lower bound of the Wilson score interval for positive/total; 0 when total is 0."""
    if total <= 0:
        return 0.0
    p = min(max(positive, 0) / total, 1.0)
    z2 = z * z
    centre = p + z2 / (2 * total)
    margin = z * math.sqrt((p * (1 - p) + z2 / (4 * total)) / total)
    return (centre - margin) / (1 + z2 / total)


def recency_factor(updated_at: Optional[str], now: Optional[datetime] = None) -> float:
    """exp(-days / 7) since updated_at; 0 when the timestamp is missing or invalid."""
    age = days_since(updated_at, now)
    if age is None:
        return 0.0
    return math.exp(-max(age, 0.0) / RECENCY_HALF_WINDOW_DAYS)


def trending_score(metrics: ItemMetrics, now: Optional[datetime] = None) -> float:
    """Blend of like-ratio confidence and update recency for one item."""
    quality = wilson_lower_bound(metrics.like_count, metrics.view_count)
    return quality * QUALITY_WEIGHT + recency_factor(metrics.updated_at, now) * RECENCY_WEIGHT


def rank_trending(
    metrics: List[Union[Dict, ItemMetrics]],
    limit: int = 20,
    now: Optional[datetime] = None,
) -> List[str]:
    """
    Item ids ordered by trending score (descending, stable), dropping zero scores.

    The result is the trending list passed to generate_discovery_feed.
    """
    now = now or datetime.now(timezone.utc)
    scored = [(m.item_id, trending_score(m, now)) for m in ensure_metrics(metrics)]
    scored = [(item_id, score) for item_id, score in scored if score > 0]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return [item_id for item_id, _ in scored[:limit]]
