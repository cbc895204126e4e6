"""Discovery feed request/response models."""

from typing import List, Optional

from pydantic import Field

from discovery.models.common import CamelModel
from discovery.models.feed import SimilarItem
from discovery.models.itinerary_discovery import ItineraryFilters, ScoredItinerary, TravelPreferences
from discovery.models.snapshots import (
    CandidatePools,
    FeedFilters,
    SocialData,
    UserPreferences,
)


class FeedRequest(CamelModel):
    """
    Discovery feed request.

    Anything left out is supplied by the server: preferences from recorded
    interactions, social data from the social graph, pools and trending from
    the catalog.
    """

    user_id: str
    preferences: Optional[UserPreferences] = None
    social: Optional[SocialData] = None
    pools: Optional[CandidatePools] = None
    trending: Optional[List[str]] = None
    filters: Optional[FeedFilters] = None


class InteractionRequest(CamelModel):
    user_id: str
    item_id: str
    interaction_type: str
    category: Optional[str] = None


class InteractionResponse(CamelModel):
    success: bool = True
    message: str
    timestamp: str


class SourceItemInfo(CamelModel):
    id: str
    type: str
    category: Optional[str] = None


class SimilarResponse(CamelModel):
    success: bool = True
    data: List[SimilarItem] = []
    total: int = 0
    source_item: SourceItemInfo


class TrendingResponse(CamelModel):
    success: bool = True
    trending: List[str] = []
    total: int = 0


class ItineraryDiscoveryRequest(CamelModel):
    """
    Itinerary discovery request. user_id may be omitted for anonymous browsing;
    limit/offset here override the ones inside filters.
    """

    user_id: Optional[str] = None
    preferences: Optional[TravelPreferences] = None
    location: Optional[str] = None
    filters: Optional[ItineraryFilters] = None
    limit: int = Field(20, ge=1, le=100)
    offset: int = Field(0, ge=0)


class ItineraryDiscoveryResponse(CamelModel):
    success: bool = True
    data: List[ScoredItinerary] = []
    total: int = 0
    limit: int
    offset: int
