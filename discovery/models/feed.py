"""
Feed output models: the seven-section discovery response and the similar-item result.
"""

from typing import List

from .common import CamelModel
from .items import RecommendationItem


class SimilarGroup(CamelModel):
    """Top items in one of the user's favourite categories."""

    category: str
    items: List[RecommendationItem] = []


class DiscoveryFeedResponse(CamelModel):
    """
    Named views over the scored candidate list.

    Sections are not a partition: the same item may appear in several of them.
    """

    personal_recommendations: List[RecommendationItem] = []
    trending: List[RecommendationItem] = []
    for_you: List[RecommendationItem] = []
    nearby: List[RecommendationItem] = []
    seasonal: List[RecommendationItem] = []
    friends_liked: List[RecommendationItem] = []
    similar: List[SimilarGroup] = []


class SimilarItem(CamelModel):
    item: RecommendationItem
    similarity: float
