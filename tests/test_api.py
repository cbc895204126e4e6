"""
HTTP API tests over in-memory stores.

Run:
----
    pytest tests/test_api.py -v
"""

from server.services import InMemoryCatalogProvider, InMemorySocialGraphStore


def _use_catalog(app_state, pools, trending=None):
    app_state.catalog = InMemoryCatalogProvider(pools, trending)


class TestRoot:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Wayfare Discovery API"
        assert "/api/discovery/feed" in body["endpoints"]["discovery"]

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestFeedEndpoint:
    def test_request_supplied_data(self, client):
        response = client.post("/api/discovery/feed", json={
            "userId": "u1",
            "preferences": {"likes": ["trip-1"]},
            "social": {"friends": {"alice": ["trip-1"]}},
            "pools": {"itineraries": [{"id": "trip-1", "type": "trip", "title": "Coast walk"}]},
            "trending": [],
        })
        assert response.status_code == 200
        body = response.json()
        assert set(body) == {
            "personalRecommendations", "trending", "forYou", "nearby", "seasonal", "friendsLiked", "similar",
        }
        entry = body["personalRecommendations"][0]
        assert entry["id"] == "trip-1"
        assert entry["type"] == "itinerary"
        assert entry["category"] == "trip"
        assert entry["item"]["title"] == "Coast walk"
        assert entry["score"] >= 10
        assert body["friendsLiked"][0]["reasons"][1]["relatedItems"] == ["alice"]

    def test_filters(self, client, app_state, deal):
        _use_catalog(app_state, {"deals": [{**deal, "id": "cheap", "price": 20}, deal]})
        response = client.post("/api/discovery/feed", json={"userId": "u1", "filters": {"priceRange": [0, 50]}})
        assert response.status_code == 200
        assert [i["id"] for i in response.json()["personalRecommendations"]] == ["cheap"]

    def test_fills_from_stores(self, client, app_state, itinerary, destination):
        _use_catalog(app_state, {"itineraries": [itinerary], "destinations": [destination]}, trending=["dest-1"])
        app_state.social_store = InMemorySocialGraphStore({"u1": {"friends": {"bob": ["dest-1"]}}})
        client.post("/api/discovery/interaction", json={
            "userId": "u1", "itemId": "itin-1", "interactionType": "like", "category": "trip",
        })

        body = client.post("/api/discovery/feed", json={"userId": "u1"}).json()
        assert [i["id"] for i in body["forYou"]] == ["itin-1"]
        assert [i["id"] for i in body["trending"]] == ["dest-1"]
        assert [i["id"] for i in body["friendsLiked"]] == ["dest-1"]
        assert body["similar"][0]["category"] == "trip"
        assert [i["id"] for i in body["similar"][0]["items"]] == ["itin-1"]

    def test_missing_user_id(self, client):
        assert client.post("/api/discovery/feed", json={}).status_code == 422

    def test_unknown_filter_type_gives_empty_feed(self, client, app_state, itinerary):
        _use_catalog(app_state, {"itineraries": [itinerary]})
        response = client.post("/api/discovery/feed", json={"userId": "u1", "filters": {"types": ["spaceship"]}})
        assert response.status_code == 200
        assert response.json()["personalRecommendations"] == []

    def test_partial_location_is_tolerated(self, client, app_state, itinerary):
        _use_catalog(app_state, {"itineraries": [itinerary]})
        response = client.post("/api/discovery/feed", json={
            "userId": "u1", "preferences": {"location": {"latitude": 0.1}},
        })
        assert response.status_code == 200
        body = response.json()
        assert [i["id"] for i in body["personalRecommendations"]] == ["itin-1"]
        assert body["nearby"] == []


class TestInteractionEndpoint:
    def test_tracks(self, client, app_state):
        response = client.post("/api/discovery/interaction", json={
            "userId": "u1", "itemId": "a", "interactionType": "view",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "view interaction tracked successfully"
        assert body["timestamp"]
        assert app_state.interaction_store.get_preferences("u1").views == ["a"]

    def test_invalid_type(self, client, app_state):
        response = client.post("/api/discovery/interaction", json={
            "userId": "u1", "itemId": "a", "interactionType": "bookmark",
        })
        assert response.status_code == 400
        assert "interactionType must be one of" in response.json()["detail"]
        assert app_state.interaction_store.get_metrics() == []


class TestSimilarEndpoint:
    def test_missing_item_id(self, client):
        assert client.get("/api/discovery/similar").status_code == 400

    def test_unknown_item(self, client):
        assert client.get("/api/discovery/similar", params={"itemId": "nope"}).status_code == 404

    def test_similar(self, client, app_state, itinerary):
        _use_catalog(app_state, {"itineraries": [
            itinerary,
            {**itinerary, "id": "itin-2"},
            {"id": "itin-3", "type": "event"},
        ]})
        response = client.get("/api/discovery/similar", params={"itemId": "itin-1", "limit": 1})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 1
        assert body["data"][0]["item"]["id"] == "itin-2"
        assert body["data"][0]["similarity"] == 1.0
        assert body["sourceItem"] == {"id": "itin-1", "type": "itinerary", "category": "trip"}

    def test_limit_bounds(self, client):
        assert client.get("/api/discovery/similar", params={"itemId": "x", "limit": 0}).status_code == 422


class TestTrendingRefresh:
    def test_refresh(self, client, app_state):
        store = app_state.interaction_store
        store.record("u1", "hot", "view")
        store.record("u1", "hot", "like")
        store.record("u2", "hot", "view")
        store.record("u1", "warm", "view")
        store.record("u1", "silent", "search")

        response = client.post("/api/discovery/trending/refresh")
        assert response.status_code == 200
        body = response.json()
        assert body["trending"] == ["hot", "warm"]
        assert body["total"] == 2
        assert app_state.catalog.get_trending() == ["hot", "warm"]

    def test_refresh_without_interactions(self, client, app_state):
        body = client.post("/api/discovery/trending/refresh").json()
        assert body["trending"] == []


class TestItineraryDiscoveryEndpoint:
    def _catalog(self, app_state):
        _use_catalog(app_state, {"itineraries": [
            {"id": "porto", "title": "Port wine", "location": "Porto, Portugal"},
            {"id": "lisbon", "title": "Trams", "location": "Lisbon, Portugal"},
            {"id": "hidden", "title": "Private", "location": "Lisbon, Portugal", "isPublic": False},
        ]})

    def test_ranks_by_preferences(self, client, app_state):
        self._catalog(app_state)
        response = client.post("/api/discovery/itineraries", json={
            "userId": "u1", "preferences": {"preferredDestinations": ["lisbon"]},
        })
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [r["item"]["id"] for r in body["data"]] == ["lisbon", "porto"]
        assert body["data"][0]["relevanceScore"] == 0.7
        assert body["data"][1]["relevanceScore"] == 0.5
        assert body["total"] == 2
        assert (body["limit"], body["offset"]) == (20, 0)

    def test_anonymous_with_search_and_pagination(self, client, app_state):
        self._catalog(app_state)
        response = client.post("/api/discovery/itineraries", json={
            "filters": {"searchQuery": "portugal"}, "limit": 1, "offset": 1,
        })
        assert response.status_code == 200
        body = response.json()
        assert [r["item"]["id"] for r in body["data"]] == ["lisbon"]
        assert (body["limit"], body["offset"]) == (1, 1)

    def test_uses_recorded_engagement(self, client, app_state):
        self._catalog(app_state)
        for _ in range(3):
            app_state.interaction_store.record(None, "lisbon", "share")
        body = client.post("/api/discovery/itineraries", json={}).json()
        assert body["data"][0]["item"]["id"] == "lisbon"
        assert body["data"][0]["popularityScore"] > body["data"][1]["popularityScore"]

    def test_bad_pagination(self, client):
        assert client.post("/api/discovery/itineraries", json={"limit": 0}).status_code == 422
        assert client.post("/api/discovery/itineraries", json={"offset": -1}).status_code == 422
