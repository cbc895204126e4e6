"""
Diversity: reorder a ranked itinerary list so the head covers distinct categories
and locations.

Two passes over the list sorted by final_score (desc):
1. Take items whose first category and location have not been seen yet, up to
   first_pass_size.
2. Fill up to max_results with the best remaining items in score order.
"""

from typing import List, Set

from ..models.itinerary_discovery import ScoredItinerary


def diversify(
    ranked: List[ScoredItinerary],
    first_pass_size: int = 10,
    max_results: int = 20,
    min_size: int = 5,
) -> List[ScoredItinerary]:
    """
    Spread categories and locations across the head of ranked.

    Args:
        ranked: Itineraries sorted by final_score (desc). Not mutated.
        first_pass_size: Most items the distinct pass may pick.
        max_results: Length cap of the result.
        min_size: Lists this short are returned unchanged.

    Returns:
        Reordered list of at most max_results itineraries (lists of min_size or
        fewer come back as they are).
    """
    if len(ranked) <= min_size:
        return list(ranked)

    selected: List[ScoredItinerary] = []
    seen_categories: Set[str] = set()
    seen_locations: Set[str] = set()

    for scored in ranked:
        if len(selected) >= first_pass_size:
            break
        category = (scored.item.categories or [""])[0]
        location = scored.item.location or ""
        if category in seen_categories or location in seen_locations:
            continue
        selected.append(scored)
        if category:
            seen_categories.add(category)
        if location:
            seen_locations.add(location)

    picked = {id(s) for s in selected}
    remaining = [s for s in ranked if id(s) not in picked]
    selected.extend(remaining[: max(max_results - len(selected), 0)])
    return selected
