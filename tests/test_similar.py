"""
Similar-item finder tests.

Run:
----
    pytest tests/test_similar.py -v
"""

import pytest

from discovery import find_similar_items
from discovery.models import CandidatePools


@pytest.fixture
def pools(itinerary, deal):
    return CandidatePools.model_validate({
        "itineraries": [
            itinerary,
            {"id": "tokyo", "type": "event", "location": "Tokyo, Japan"},
            {
                "id": "lisbon-twin",
                "type": "trip",
                "location": "Lisbon, Portugal",
                "travelStyle": "relaxed",
                "budget": "medium",
            },
            {"id": "lisbon-cheap", "type": "trip", "location": "Lisbon, Portugal", "budget": "low"},
        ],
        "deals": [deal],
    })


class TestFindSimilarItems:
    def test_unknown_item(self, pools):
        assert find_similar_items("missing", pools) is None

    def test_excludes_source_and_other_kinds(self, pools):
        results = find_similar_items("itin-1", pools)
        ids = [r.item.id for r in results]
        assert "itin-1" not in ids
        assert "deal-1" not in ids
        assert len(ids) == 3

    def test_ranked_by_similarity(self, pools):
        results = find_similar_items("itin-1", pools)
        assert [r.item.id for r in results] == ["lisbon-twin", "lisbon-cheap", "tokyo"]
        # location + category + style + budget overshoots and is capped
        assert results[0].similarity == 1.0
        assert results[1].similarity == pytest.approx(1.0)
        assert results[2].similarity == pytest.approx(0.5)

    def test_partial_overlap(self, pools):
        results = find_similar_items("tokyo", pools)
        scores = {r.item.id: r.similarity for r in results}
        assert scores == {"itin-1": 0.5, "lisbon-twin": 0.5, "lisbon-cheap": 0.5}

    def test_limit(self, pools):
        assert len(find_similar_items("itin-1", pools, limit=1)) == 1

    def test_only_item_of_its_kind(self, pools):
        assert find_similar_items("deal-1", pools) == []
