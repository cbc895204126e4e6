"""
Request-scoped inputs: preference, social and candidate snapshots, plus filters.

All of these are read-only for the pipeline. Built from API dicts via
Model.model_validate(d) or the ensure_* helpers.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import field_validator

from .common import CamelModel
from .items import (
    Deal,
    Destination,
    Itinerary,
    Promotion,
    UserProfile,
)


class GeoPoint(CamelModel):
    """A user position. Either coordinate may be missing; the nearby check then skips it."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None


class UserPreferences(CamelModel):
    """
    What the user has interacted with.

    categories may repeat; the number of repeats is the affinity for that category.
    """

    likes: List[str] = []
    searches: List[str] = []
    views: List[str] = []
    categories: List[str] = []
    location: Optional[GeoPoint] = None


class SocialData(CamelModel):
    """friends: friend id -> item ids that friend liked. following: followed ids."""

    friends: Dict[str, List[str]] = {}
    following: List[str] = []


class CandidatePools(CamelModel):
    """The five pools the feed is assembled from, in flattening order."""

    itineraries: List[Itinerary] = []
    deals: List[Deal] = []
    promotions: List[Promotion] = []
    destinations: List[Destination] = []
    users: List[UserProfile] = []

    def total(self) -> int:
        return (
            len(self.itineraries)
            + len(self.deals)
            + len(self.promotions)
            + len(self.destinations)
            + len(self.users)
        )


class FeedFilters(CamelModel):
    """
    Optional narrowing of the candidate set; every present filter must pass.

    types are candidate type names; unknown names match nothing. price_range applies
    to deals only; date_range to itinerary/promotion start dates.
    The end of date_range may be omitted (open-ended).
    """

    types: Optional[List[str]] = None
    categories: Optional[List[str]] = None
    price_range: Optional[Tuple[float, float]] = None
    date_range: Optional[Tuple[str, Optional[str]]] = None

    @field_validator("date_range", mode="before")
    @classmethod
    def pad_open_ended(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)) and len(value) == 1:
            return (value[0], None)
        return value


def ensure_model(model_cls: type, value: Union[Dict[str, Any], Any, None]) -> Any:
    """Return value as model_cls (validating dicts); None becomes an empty model."""
    if value is None:
        return model_cls()
    if isinstance(value, dict):
        return model_cls.model_validate(value)
    return value
