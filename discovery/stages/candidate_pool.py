"""
Candidate pool: flatten the five record pools and apply the optional filters.

Filters: type allow-list, category allow-list, deal price range, itinerary/promotion
start-date range. Every present filter must pass; records a filter does not apply
to pass through it untouched.

The public entry point is get_candidate_pool.
"""

from typing import List, Optional

from ..models.items import CandidateRecord, CandidateType, RecommendationItem
from ..models.snapshots import CandidatePools, FeedFilters
from ..utils.dates import OPEN_RANGE_END, parse_iso


def _to_candidate(record: CandidateRecord, kind: CandidateType, category: Optional[str]) -> RecommendationItem:
    return RecommendationItem(id=record.id, type=kind, item=record, category=category)


def flatten_pools(pools: CandidatePools) -> List[RecommendationItem]:
    """
    All records as unscored candidates, in pool order.

    Itineraries, deals and promotions are categorised by their own `type`;
    destinations and users by their kind.
    """
    candidates: List[RecommendationItem] = []
    candidates.extend(_to_candidate(r, CandidateType.ITINERARY, r.type) for r in pools.itineraries)
    candidates.extend(_to_candidate(r, CandidateType.DEAL, r.type) for r in pools.deals)
    candidates.extend(_to_candidate(r, CandidateType.PROMOTION, r.type) for r in pools.promotions)
    candidates.extend(_to_candidate(r, CandidateType.DESTINATION, "destination") for r in pools.destinations)
    candidates.extend(_to_candidate(r, CandidateType.USER, "user") for r in pools.users)
    return candidates


def _passes_type_filter(candidate: RecommendationItem, filters: FeedFilters) -> bool:
    if not filters.types:
        return True
    return candidate.type.value in filters.types


def _passes_category_filter(candidate: RecommendationItem, filters: FeedFilters) -> bool:
    """Uncategorised candidates never pass a non-empty category filter."""
    if not filters.categories:
        return True
    if not candidate.category:
        return False
    return candidate.category in filters.categories


def _passes_price_filter(candidate: RecommendationItem, filters: FeedFilters) -> bool:
    """Only deals with a price are checked; bounds are inclusive."""
    if filters.price_range is None:
        return True
    price = getattr(candidate.item, "price", None)
    if candidate.type is not CandidateType.DEAL or price is None:
        return True
    low, high = filters.price_range
    return low <= price <= high


def _passes_date_filter(candidate: RecommendationItem, filters: FeedFilters) -> bool:
    """
    Only itineraries/promotions with a start date are checked; bounds are inclusive.
    A missing range end means open-ended. Unparsable dates fail the check.
    """
    if filters.date_range is None:
        return True
    if candidate.type not in (CandidateType.ITINERARY, CandidateType.PROMOTION):
        return True
    start_date = getattr(candidate.item, "start_date", None)
    if start_date is None:
        return True
    start = parse_iso(start_date)
    range_start = parse_iso(filters.date_range[0])
    range_end = parse_iso(filters.date_range[1]) if filters.date_range[1] else OPEN_RANGE_END
    if start is None or range_start is None or range_end is None:
        return False
    return range_start <= start <= range_end


def apply_filters(
    candidates: List[RecommendationItem],
    filters: Optional[FeedFilters],
) -> List[RecommendationItem]:
    """Return candidates that pass every present filter, preserving order."""
    if filters is None:
        return list(candidates)
    return [
        c for c in candidates
        if _passes_type_filter(c, filters)
        and _passes_category_filter(c, filters)
        and _passes_price_filter(c, filters)
        and _passes_date_filter(c, filters)
    ]


def get_candidate_pool(
    pools: CandidatePools,
    filters: Optional[FeedFilters] = None,
) -> List[RecommendationItem]:
    """Flatten the pools and apply filters; candidates come back unscored."""
    return apply_filters(flatten_pools(pools), filters)
