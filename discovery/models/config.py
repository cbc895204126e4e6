"""
Feed configuration: source weights, boosts, heuristics and section sizes.

FeedConfig defaults give the standard ranking. The server may pass a
dict (e.g. from a FEED_CONFIG_PATH JSON file); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field, model_validator

from .reasons import RecommendationSource


def _default_source_weights() -> Dict[RecommendationSource, float]:
    return {
        RecommendationSource.LIKED: 10.0,
        RecommendationSource.SEARCHED: 8.0,
        RecommendationSource.VIEWED: 5.0,
        RecommendationSource.FRIEND: 7.0,
        RecommendationSource.FOLLOWED: 6.0,
        RecommendationSource.TRENDING: 4.0,
        RecommendationSource.LOCATION: 6.0,
        RecommendationSource.SEASONAL: 3.0,
    }


class FeedConfig(BaseModel):
    """Configuration for the discovery feed scorer."""

    # -------------------------------------------------------------------------
    # Score Calculator
    # score = Σ(reason.weight * source_weights[source])
    #         + recency * time_decay_factor * recency_multiplier
    #         + popularity * popularity_multiplier
    # -------------------------------------------------------------------------

    # Per-source constant applied to each reason weight.
    source_weights: Dict[RecommendationSource, float] = Field(default_factory=_default_source_weights)

    time_decay_factor: float = 0.8
    recency_multiplier: float = 10.0
    popularity_multiplier: float = 5.0

    # -------------------------------------------------------------------------
    # Reason Generator: weight attached to each emitted reason (0-1)
    # -------------------------------------------------------------------------

    liked_weight: float = 1.0
    searched_weight: float = 0.8
    viewed_weight: float = 0.5
    friend_weight: float = 0.7
    followed_weight: float = 0.6
    trending_weight: float = 0.4
    location_weight: float = 0.6
    seasonal_weight: float = 0.5
    # Weight of the generic reason added when nothing else matched.
    fallback_weight: float = 0.3

    # Items closer than this (great-circle, km) get a location reason.
    nearby_radius_km: float = 50.0

    # Seasonal detection: item start month == reference month.
    # Off by default.
    seasonal_enabled: bool = False

    # When False every itinerary/destination/promotion is located at (0, 0).
    # When True the record's own latitude/longitude are used if present.
    use_item_coordinates: bool = False

    # -------------------------------------------------------------------------
    # Recency / popularity heuristics
    # -------------------------------------------------------------------------

    # Recency for itineraries, deals and promotions; everything else gets the default.
    recency_dated: float = 0.8
    recency_default: float = 0.5
    # Itinerary popularity = min(likes / likes_normalizer, 1).
    likes_normalizer: float = 1000.0
    # Deal popularity = discount / discount_normalizer.
    discount_normalizer: float = 100.0
    popularity_default: float = 0.5

    # -------------------------------------------------------------------------
    # Feed sections
    # -------------------------------------------------------------------------

    personal_limit: int = 5
    section_limit: int = 10
    similar_categories_limit: int = 3
    similar_items_limit: int = 6

    @model_validator(mode="after")
    def weights_non_negative(self):
        missing = [s.value for s in RecommendationSource if s not in self.source_weights]
        if missing:
            raise ValueError(f"Missing source weights for: {', '.join(missing)}")
        negative = [s.value for s, w in self.source_weights.items() if w < 0]
        if negative:
            raise ValueError(f"Source weights must be non-negative, got negative for: {', '.join(negative)}")
        for name in (
            "personal_limit",
            "section_limit",
            "similar_categories_limit",
            "similar_items_limit",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        return self

    def source_weight(self, source: RecommendationSource) -> float:
        return self.source_weights.get(source, 0.0)

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "FeedConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "scoring" in config_dict:
            flat.update(config_dict["scoring"])
        if "reasons" in config_dict:
            flat.update(
                {f"{k}_weight" if not k.endswith("_weight") else k: v for k, v in config_dict["reasons"].items()}
            )
        if "heuristics" in config_dict:
            flat.update(config_dict["heuristics"])
        if "sections" in config_dict:
            flat.update(config_dict["sections"])
        if "source_weights" in config_dict:
            merged = _default_source_weights()
            merged.update({RecommendationSource(k): v for k, v in config_dict["source_weights"].items()})
            flat["source_weights"] = merged
        for key in ("nearby_radius_km", "seasonal_enabled", "use_item_coordinates"):
            if key in config_dict:
                flat[key] = config_dict[key]
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = FeedConfig()


def resolve_config(config: Optional["FeedConfig"]) -> "FeedConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
