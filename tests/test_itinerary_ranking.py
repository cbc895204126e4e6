"""
Itinerary discovery tests: component scores, search filters, diversity and pagination.

Run:
----
    pytest tests/test_itinerary_ranking.py -v
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from discovery import discover_itineraries
from discovery.models import ItemMetrics, Itinerary, ScoredItinerary, TravelPreferences
from discovery.stages.diversity import diversify
from discovery.stages.itinerary_ranking import (
    freshness_score,
    popularity_score,
    proximity_score,
    quality_score,
    relevance_score,
)

NOW = datetime(2025, 7, 1, tzinfo=timezone.utc)


def _itin(**fields):
    return Itinerary.model_validate({"id": "x", **fields})


def _scored(item_id, score, categories=None, location=None):
    return ScoredItinerary(
        item=_itin(id=item_id, categories=categories, location=location),
        relevance_score=0, popularity_score=0, freshness_score=0,
        quality_score=0, proximity_score=0, final_score=score,
    )


@pytest.fixture
def complete_itinerary():
    return {
        "id": "full",
        "title": "Lisbon food week",
        "description": "Seven days of markets and tascas",
        "location": "Lisbon, Portugal",
        "startDate": "2025-08-01",
        "endDate": "2025-08-07",
        "activities": ["market tour"],
        "imageUrl": "https://img/1.jpg",
        "categories": ["food", "nightlife"],
        "travelStyle": "relaxed",
        "createdAt": "2025-06-01T00:00:00Z",
    }


class TestComponentScores:
    def test_relevance_without_preferences(self, complete_itinerary):
        assert relevance_score(_itin(**complete_itinerary), None) == 0.5

    def test_relevance_all_factors(self, complete_itinerary):
        prefs = TravelPreferences(
            preferred_destinations=["lisbon"],
            preferred_categories=["food", "culture"],
            travel_style="relaxed",
        )
        # 0.5 + 0.2 destination + 0.2 * 1/2 categories + 0.1 style
        assert relevance_score(_itin(**complete_itinerary), prefs) == pytest.approx(0.9)

    def test_relevance_no_applicable_factor(self):
        prefs = TravelPreferences(preferred_destinations=["Lisbon"])
        assert relevance_score(_itin(), prefs) == 0.5

    def test_relevance_counted_factor_without_match(self):
        prefs = TravelPreferences(travel_style="adventure")
        assert relevance_score(_itin(travel_style="relaxed"), prefs) == 0.5

    def test_popularity(self):
        assert popularity_score(None) == 0.3
        assert popularity_score(ItemMetrics(item_id="x")) == 0.0
        assert popularity_score(ItemMetrics(item_id="x", view_count=9999)) == pytest.approx(1.0)
        assert popularity_score(ItemMetrics(item_id="x", view_count=10 ** 6)) == 1.0
        # 10 views + 2 saves * 5 + 1 like * 3 + 1 comment * 4 + 1 share * 7 = 34
        metrics = ItemMetrics(item_id="x", view_count=10, save_count=2, like_count=1, comment_count=1, share_count=1)
        assert popularity_score(metrics) == pytest.approx(math.log10(35) / 4)

    def test_freshness(self):
        assert freshness_score(_itin(created_at=NOW.isoformat()), NOW) == pytest.approx(1.0)
        month_old = (NOW - timedelta(days=30)).isoformat()
        assert freshness_score(_itin(created_at=month_old), NOW) == pytest.approx(math.exp(-1))

    def test_freshness_uses_latest_date(self):
        itin = _itin(created_at="2024-01-01T00:00:00Z", updated_at=NOW.isoformat())
        assert freshness_score(itin, NOW) == pytest.approx(1.0)

    def test_freshness_without_dates(self):
        assert freshness_score(_itin(), NOW) == 0.0
        assert freshness_score(_itin(created_at="soon"), NOW) == 0.0

    def test_quality(self, complete_itinerary):
        full = _itin(**complete_itinerary)
        assert quality_score(full, None) == pytest.approx(0.8 * 0.6 + 0.5 * 0.4)
        rated = ItemMetrics(item_id="full", average_rating=5)
        assert quality_score(full, rated) == pytest.approx(0.8 * 0.6 + 1.0 * 0.4)
        assert quality_score(_itin(), None) == pytest.approx(0.2)

    def test_short_description_does_not_count(self):
        assert quality_score(_itin(description="tiny"), None) == pytest.approx(0.2)

    def test_proximity(self):
        itin = _itin(location="Lisbon, Portugal")
        assert proximity_score(itin, "lisbon") == 1.0
        assert proximity_score(itin, "Porto") == 0.5
        assert proximity_score(itin, None) == 0.5
        assert proximity_score(_itin(), "Lisbon") == 0.5


class TestFilters:
    @pytest.fixture
    def catalog(self):
        return [
            {"id": "a", "title": "Food crawl", "location": "Lisbon", "categories": ["food"],
             "startDate": "2025-08-01", "endDate": "2025-08-05"},
            {"id": "b", "title": "Surf camp", "location": "Ericeira", "categories": ["sport"],
             "startDate": "2025-09-01", "endDate": "2025-09-10", "description": "Waves near Lisbon"},
            {"id": "c", "title": "Secret", "location": "Lisbon", "isPublic": False},
            {"id": "d", "title": "Undated", "location": "Porto"},
        ]

    def _ids(self, catalog, filters):
        return {r.item.id for r in discover_itineraries(None, catalog, filters=filters, now=NOW)}

    def test_private_always_excluded(self, catalog):
        assert self._ids(catalog, None) == {"a", "b", "d"}

    def test_categories(self, catalog):
        assert self._ids(catalog, {"categories": ["food", "museum"]}) == {"a"}

    def test_location(self, catalog):
        assert self._ids(catalog, {"location": "lisbon"}) == {"a"}

    def test_search_query(self, catalog):
        assert self._ids(catalog, {"searchQuery": "LISBON"}) == {"a", "b"}

    def test_date_window(self, catalog):
        assert self._ids(catalog, {"dateRange": {"start": "2025-08-15"}}) == {"b"}
        assert self._ids(catalog, {"dateRange": {"end": "2025-08-31"}}) == {"a"}
        assert self._ids(catalog, {"dateRange": {"start": "2025-07-01", "end": "2025-09-30"}}) == {"a", "b"}


class TestDiversify:
    def test_short_lists_unchanged(self):
        ranked = [_scored(f"i{n}", 1.0 - n / 10, categories=["food"]) for n in range(5)]
        assert diversify(ranked) == ranked

    def test_distinct_first(self):
        ranked = [
            _scored("food-lisbon", 0.9, ["food"], "Lisbon"),
            _scored("food-porto", 0.8, ["food"], "Porto"),
            _scored("sport-lisbon", 0.7, ["sport"], "Lisbon"),
            _scored("sport-faro", 0.6, ["sport"], "Faro"),
            _scored("art-porto", 0.5, ["art"], "Porto"),
            _scored("art-braga", 0.4, ["art"], "Braga"),
        ]
        ids = [s.item.id for s in diversify(ranked)]
        assert ids == ["food-lisbon", "sport-faro", "art-porto", "food-porto", "sport-lisbon", "art-braga"]

    def test_items_without_category_or_location_are_never_blocked(self):
        ranked = [_scored(f"i{n}", 1.0 - n / 10) for n in range(8)]
        assert [s.item.id for s in diversify(ranked)] == [f"i{n}" for n in range(8)]

    def test_caps(self):
        ranked = [_scored(f"i{n}", 1.0 - n / 100, [f"c{n}"], f"loc{n}") for n in range(30)]
        result = diversify(ranked)
        assert len(result) == 20
        # distinct pass stops at 10, the fill continues in score order
        assert [s.item.id for s in result] == [f"i{n}" for n in range(20)]


class TestDiscoverItineraries:
    def test_ordered_by_final_score(self, complete_itinerary):
        catalog = [
            {"id": "bare"},
            complete_itinerary,
        ]
        results = discover_itineraries("u1", catalog, now=NOW)
        assert [r.item.id for r in results] == ["full", "bare"]
        top = results[0]
        expected = (
            top.relevance_score * 0.4
            + top.popularity_score * 0.25
            + top.freshness_score * 0.15
            + top.quality_score * 0.15
            + top.proximity_score * 0.05
        )
        assert top.final_score == pytest.approx(expected)

    def test_metrics_matched_by_id(self):
        catalog = [{"id": "quiet"}, {"id": "busy"}]
        metrics = [{"itemId": "busy", "viewCount": 500, "likeCount": 50}]
        results = discover_itineraries(None, catalog, metrics=metrics, now=NOW)
        assert [r.item.id for r in results] == ["busy", "quiet"]
        assert results[1].popularity_score == 0.3

    def test_preferences_and_location(self):
        catalog = [{"id": "porto", "location": "Porto"}, {"id": "lisbon", "location": "Lisbon"}]
        results = discover_itineraries(
            "u1", catalog,
            preferences={"preferredDestinations": ["Lisbon"]},
            user_location="Lisbon",
            now=NOW,
        )
        assert results[0].item.id == "lisbon"
        assert results[0].proximity_score == 1.0

    def test_pagination(self):
        catalog = [{"id": f"i{n}", "title": "t" * (n + 1)} for n in range(8)]
        first = discover_itineraries(None, catalog, filters={"limit": 3}, now=NOW)
        second = discover_itineraries(None, catalog, filters={"limit": 3, "offset": 3}, now=NOW)
        assert len(first) == 3 and len(second) == 3
        assert not {r.item.id for r in first} & {r.item.id for r in second}

    def test_offset_past_results(self):
        catalog = [{"id": f"i{n}"} for n in range(30)]
        assert discover_itineraries(None, catalog, filters={"offset": 20}, now=NOW) == []

    def test_empty_catalog(self):
        assert discover_itineraries("u1", [], now=NOW) == []

    def test_invalid_pagination_rejected(self):
        with pytest.raises(ValueError):
            discover_itineraries(None, [], filters={"limit": 0})
