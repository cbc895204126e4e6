"""
Reason model: why a candidate was put in front of the user.

A candidate may carry several reasons; their weights are summed by the score
calculator after multiplying each by its source constant.
"""

from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict

from .common import CamelModel


class RecommendationSource(str, Enum):
    LIKED = "liked"
    SEARCHED = "searched"
    VIEWED = "viewed"
    FRIEND = "friend"
    FOLLOWED = "followed"
    TRENDING = "trending"
    LOCATION = "location"
    SEASONAL = "seasonal"


# Sources that make an item part of the "for you" section.
ENGAGEMENT_SOURCES = frozenset(
    {RecommendationSource.LIKED, RecommendationSource.SEARCHED, RecommendationSource.VIEWED}
)


class RecommendationReason(CamelModel):
    """
    One weighted explanation for a recommendation.

    weight: 0-1 strength of the signal.
    related_items: ids behind the signal (e.g. the friends who liked the item).
    """

    model_config = ConfigDict(frozen=True)

    source: RecommendationSource
    weight: float
    description: str
    related_items: Optional[List[str]] = None
