"""
Similar items: rank other catalog records of the same kind against a source record.

similarity = 0.5 base
           + 0.3 if the candidate location contains the source location
           + 0.2 * share of the source categories the candidate also has
           + 0.15 if travel styles match
           + 0.1 if budgets match
capped at 1.0.

The public entry point is find_similar_items.
"""

from typing import List, Optional, Set

from ..models.feed import SimilarItem
from ..models.items import CandidateRecord, RecommendationItem
from ..models.snapshots import CandidatePools
from .candidate_pool import flatten_pools

BASE_SIMILARITY = 0.5
LOCATION_BONUS = 0.3
CATEGORY_BONUS = 0.2
TRAVEL_STYLE_BONUS = 0.15
BUDGET_BONUS = 0.1


def _categories(candidate: RecommendationItem) -> Set[str]:
    """Own category plus any extra `categories` list on the record."""
    out = set(getattr(candidate.item, "categories", None) or [])
    if candidate.category:
        out.add(candidate.category)
    return out


def _same_text(a: CandidateRecord, b: CandidateRecord, field: str) -> bool:
    va, vb = getattr(a, field, None), getattr(b, field, None)
    return bool(va) and bool(vb) and va == vb


def similarity_score(source: RecommendationItem, candidate: RecommendationItem) -> float:
    """Feature-overlap similarity of candidate to source, in [0.5, 1.0]."""
    score = BASE_SIMILARITY

    source_location = getattr(source.item, "location", None)
    candidate_location = getattr(candidate.item, "location", None)
    if source_location and candidate_location and source_location.lower() in candidate_location.lower():
        score += LOCATION_BONUS

    source_categories = _categories(source)
    candidate_categories = _categories(candidate)
    if source_categories and candidate_categories:
        shared = source_categories & candidate_categories
        score += len(shared) / len(source_categories) * CATEGORY_BONUS

    if _same_text(source.item, candidate.item, "travel_style"):
        score += TRAVEL_STYLE_BONUS
    if _same_text(source.item, candidate.item, "budget"):
        score += BUDGET_BONUS

    return min(score, 1.0)


def find_source(pools: CandidatePools, item_id: str) -> Optional[RecommendationItem]:
    """First candidate in pool order with the given id, or None."""
    return next((c for c in flatten_pools(pools) if c.id == item_id), None)


def find_similar_items(
    item_id: str,
    pools: CandidatePools,
    limit: int = 6,
) -> Optional[List[SimilarItem]]:
    """
    Up to `limit` records of the same kind as item_id, most similar first.

    Returns None when item_id is not in the pools. The source item itself is never
    included; ties keep pool order.
    """
    source = find_source(pools, item_id)
    if source is None:
        return None
    results = [
        SimilarItem(item=c, similarity=similarity_score(source, c))
        for c in flatten_pools(pools)
        if c.type == source.type and c.id != source.id
    ]
    results.sort(key=lambda s: s.similarity, reverse=True)
    return results[:limit]
