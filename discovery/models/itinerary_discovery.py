"""
Itinerary discovery models: stated travel preferences, search filters and the
per-itinerary score breakdown returned by discover_itineraries.
"""

from typing import List, Optional

from pydantic import Field

from .common import CamelModel
from .items import Itinerary


class TravelPreferences(CamelModel):
    """What the user said they like (as opposed to what they interacted with)."""

    preferred_destinations: List[str] = []
    preferred_categories: List[str] = []
    travel_style: Optional[str] = None


class DateWindow(CamelModel):
    """start bounds the itinerary start date, end bounds its end date; both optional."""

    start: Optional[str] = None
    end: Optional[str] = None


class ItineraryFilters(CamelModel):
    """
    Search filters plus pagination for itinerary discovery.

    location and search_query are case-insensitive substring matches; search_query
    looks at title, description and location.
    """

    categories: Optional[List[str]] = None
    location: Optional[str] = None
    date_range: Optional[DateWindow] = None
    search_query: Optional[str] = None
    limit: int = Field(20, ge=1)
    offset: int = Field(0, ge=0)


class ScoredItinerary(CamelModel):
    """An itinerary with its five component scores and the blended final score."""

    item: Itinerary
    relevance_score: float
    popularity_score: float
    freshness_score: float
    quality_score: float
    proximity_score: float
    final_score: float
