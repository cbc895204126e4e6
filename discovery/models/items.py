"""
Candidate models: the five record kinds the discovery feed can surface.

Records are built from catalog/API dicts via Model.model_validate(d); unknown fields
are kept so the response can echo the full record back. RecommendationItem wraps a
record with its type tag, category, score and reasons.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import ConfigDict, model_validator

from .common import CamelModel
from .reasons import RecommendationReason, RecommendationSource


class CandidateType(str, Enum):
    ITINERARY = "itinerary"
    DEAL = "deal"
    PROMOTION = "promotion"
    DESTINATION = "destination"
    USER = "user"


class CandidateRecord(CamelModel):
    """Fields shared by every catalog record."""

    model_config = ConfigDict(extra="allow")

    id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def coordinates(self) -> Optional[Dict[str, float]]:
        """{'latitude', 'longitude'} when the record carries both, else None."""
        if self.latitude is None or self.longitude is None:
            return None
        return {"latitude": self.latitude, "longitude": self.longitude}


class Itinerary(CandidateRecord):
    """A published trip or event."""

    title: Optional[str] = ""
    type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    likes: Optional[float] = None
    saves: Optional[float] = None
    views: Optional[float] = None
    travel_style: Optional[str] = None
    budget: Optional[str] = None
    categories: Optional[List[str]] = None
    activities: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_public: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Deal(CandidateRecord):
    """A discounted hotel/flight/activity/restaurant offer."""

    title: Optional[str] = ""
    type: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    discount: Optional[float] = None
    provider: Optional[str] = None
    rating: Optional[float] = None
    valid_until: Optional[str] = None


class Promotion(CandidateRecord):
    """A business or personal promotion with a run window."""

    title: Optional[str] = ""
    type: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: Optional[str] = None


class Destination(CandidateRecord):
    name: Optional[str] = ""
    country: Optional[str] = None
    description: Optional[str] = None
    popularity: Optional[float] = None
    tags: List[str] = []


class UserProfile(CandidateRecord):
    name: Optional[str] = ""
    username: Optional[str] = None
    avatar: Optional[str] = None


RECORD_CLASSES = {
    CandidateType.ITINERARY: Itinerary,
    CandidateType.DEAL: Deal,
    CandidateType.PROMOTION: Promotion,
    CandidateType.DESTINATION: Destination,
    CandidateType.USER: UserProfile,
}

AnyRecord = Union[Itinerary, Deal, Promotion, Destination, UserProfile]


class RecommendationItem(CamelModel):
    """
    A candidate in the feed: type tag plus the typed record it wraps.

    score starts at 0 and is filled in by the feed assembler; reasons accumulate
    in insertion order.
    """

    id: str
    type: CandidateType
    item: AnyRecord
    score: float = 0.0
    reasons: List[RecommendationReason] = []
    category: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def coerce_record(cls, data: Any) -> Any:
        """Validate a raw `item` dict against the record class named by `type`."""
        if isinstance(data, dict):
            kind = data.get("type")
            record = data.get("item")
            if kind is not None and isinstance(record, dict):
                record_cls = RECORD_CLASSES[CandidateType(kind)]
                data = {**data, "item": record_cls.model_validate(record)}
        return data

    @model_validator(mode="after")
    def record_matches_type(self):
        expected = RECORD_CLASSES[self.type]
        if type(self.item) is not expected:
            raise ValueError(
                f"{self.type.value} item must wrap a {expected.__name__}, got {type(self.item).__name__}"
            )
        return self

    def has_source(self, *sources: RecommendationSource) -> bool:
        """True if any attached reason comes from one of the given sources."""
        return any(r.source in sources for r in self.reasons)


def ensure_records(
    record_cls: type,
    items: List[Union[Dict[str, Any], CandidateRecord]],
) -> List[CandidateRecord]:
    """Convert list of dicts or records to list of record_cls models for the pipeline."""
    return [
        record_cls.model_validate(r) if isinstance(r, dict) else r
        for r in items
    ]
