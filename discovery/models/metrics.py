"""
Engagement metrics model: per-item interaction counters.

Used by the trending stage. Built by the server's interaction store or from
dicts via ItemMetrics.model_validate(d) / ensure_metrics().
"""

from typing import Dict, List, Optional, Union

from pydantic import ConfigDict

from .common import CamelModel


class ItemMetrics(CamelModel):
    """
    Interaction counters for one item.

    average_rating: 0-5 star mean, 0 when unrated; feeds itinerary quality.
    updated_at: ISO timestamp of the latest interaction; drives the recency part of
    the trending score.
    """

    model_config = ConfigDict(extra="allow")

    item_id: str
    view_count: int = 0
    save_count: int = 0
    like_count: int = 0
    share_count: int = 0
    comment_count: int = 0
    average_rating: float = 0.0
    updated_at: Optional[str] = None


def ensure_metrics(items: List[Union[Dict, "ItemMetrics"]]) -> List["ItemMetrics"]:
    """Convert list of dicts or ItemMetrics to list of ItemMetrics models."""
    return [
        ItemMetrics.model_validate(m) if isinstance(m, dict) else m
        for m in items
    ]
