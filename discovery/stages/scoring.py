"""
Score calculation and the per-candidate recency/popularity heuristics.

calculate_score is a linear weighted sum:
    Σ(reason.weight * source weight) + recency * decay * 10 + popularity * 5
No clamping; more or stronger reasons always rank higher.
"""

from typing import Sequence

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.items import CandidateType, RecommendationItem
from ..models.reasons import RecommendationReason

# Candidate types that carry a creation date and get the higher recency value.
DATED_TYPES = frozenset({CandidateType.ITINERARY, CandidateType.DEAL, CandidateType.PROMOTION})


def calculate_score(
    reasons: Sequence[RecommendationReason],
    recency: float,
    popularity: float,
    config: FeedConfig = DEFAULT_CONFIG,
) -> float:
    """
    Combine reasons, recency (0-1) and popularity (0-1) into one ranking score.

    base = Σ reason.weight * config.source_weights[reason.source]
    final = base + recency * time_decay_factor * recency_multiplier
                 + popularity * popularity_multiplier
    """
    base = sum(r.weight * config.source_weight(r.source) for r in reasons)
    recency_boost = recency * config.time_decay_factor * config.recency_multiplier
    popularity_boost = popularity * config.popularity_multiplier
    return base + recency_boost + popularity_boost


def estimate_recency(candidate: RecommendationItem, config: FeedConfig = DEFAULT_CONFIG) -> float:
    """Fixed recency per candidate type (itinerary/deal/promotion vs the rest)."""
    return config.recency_dated if candidate.type in DATED_TYPES else config.recency_default


def estimate_popularity(candidate: RecommendationItem, config: FeedConfig = DEFAULT_CONFIG) -> float:
    """
    Popularity from the record: capped likes ratio for itineraries, discount ratio
    for deals, flat default for everything else (or when the field is absent).
    """
    record = candidate.item
    if candidate.type is CandidateType.ITINERARY and getattr(record, "likes", None) is not None:
        return min(record.likes / config.likes_normalizer, 1.0)
    if candidate.type is CandidateType.DEAL and getattr(record, "discount", None) is not None:
        return record.discount / config.discount_normalizer
    return config.popularity_default
