import json

from fastapi.testclient import TestClient


MOVIE = {
    "id": 27205,
    "type": "movie",
    "title": "Inception",
    "poster_path": "/inception.jpg",
    "overview": "Dreams.",
    "release_date": "2010-07-15",
    "vote_average": 8.4,
    "dateAdded": "2024-01-01T00:00:00.000Z",
}

SHOW = {
    "id": 1396,
    "type": "tv",
    "title": "Breaking Bad",
    "overview": "Chemistry.",
    "release_date": "2008-01-20",
    "vote_average": 8.9,
    "dateAdded": "2024-01-02T00:00:00.000Z",
}


def test_root_and_health(client: TestClient):
    assert client.get("/").status_code == 200

    response = client.get("/api/v1/system/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_empty_catalog_on_first_start(client: TestClient, catalog_path):
    response = client.get("/api/v1/catalog")

    assert response.status_code == 200
    body = response.json()
    assert body["watchlist"] == []
    assert body["watched"] == []
    assert body["customLists"] == []
    assert "lastUpdated" in body
    assert not catalog_path.exists()


def test_add_to_watchlist_persists(client: TestClient, catalog_path):
    response = client.post("/api/v1/watchlist", json=MOVIE)

    assert response.status_code == 200
    assert response.json()["watchlist"][0]["title"] == "Inception"

    document = json.loads(catalog_path.read_text(encoding="utf-8"))
    assert document["watchlist"][0]["dateAdded"] == MOVIE["dateAdded"]

    status = client.get("/api/v1/catalog/status/movie/27205").json()
    assert status["inWatchlist"] is True
    assert status["watched"] is False


def test_add_to_watchlist_by_tmdb_id(client: TestClient):
    response = client.post("/api/v1/watchlist/tv/1396")

    assert response.status_code == 200
    entry = response.json()["watchlist"][0]
    assert entry["title"] == "Breaking Bad"
    assert entry["release_date"] == "2008-01-20"

    assert client.post("/api/v1/watchlist/movie/999").status_code == 404


def test_remove_from_watchlist(client: TestClient):
    client.post("/api/v1/watchlist", json=MOVIE)

    response = client.delete("/api/v1/watchlist/movie/27205")

    assert response.status_code == 200
    assert response.json()["watchlist"] == []
    assert client.delete("/api/v1/watchlist/movie/27205").status_code == 200


def test_mark_as_watched_moves_item(client: TestClient):
    client.post("/api/v1/watchlist", json=MOVIE)

    response = client.post("/api/v1/watched", json={**MOVIE, "userRating": 5, "watchedDate": "2024-03-01"})

    body = response.json()
    assert response.status_code == 200
    assert body["watchlist"] == []
    assert body["watched"][0]["userRating"] == 5
    assert body["watched"][0]["forceWatched"] is False


def test_mark_as_watched_by_tmdb_id(client: TestClient):
    response = client.post("/api/v1/watched/movie/27205", json={"userRating": 4, "notes": "again"})

    assert response.status_code == 200
    entry = response.json()["watched"][0]
    assert entry["title"] == "Inception"
    assert entry["userRating"] == 4
    assert entry["notes"] == "again"


def test_force_watched_show_cannot_be_removed(client: TestClient):
    response = client.post("/api/v1/watched/tv/1396/seasons", json={"seasonNumber": 1, "userRating": 5})
    assert response.status_code == 200
    entry = response.json()["watched"][0]
    assert entry["title"] == "Breaking Bad"
    assert entry["forceWatched"] is True

    response = client.delete("/api/v1/watched/tv/1396")
    assert response.status_code == 409
    assert response.json()["detail"]["blockingSeasons"] == [1]

    response = client.delete("/api/v1/watched/tv/1396/seasons/1")
    assert response.status_code == 200
    assert response.json()["watched"][0]["forceWatched"] is False

    response = client.delete("/api/v1/watched/tv/1396")
    assert response.status_code == 200
    assert response.json()["watched"] == []


def test_season_request_with_item_skips_lookup(client: TestClient):
    show = {**SHOW, "id": 555, "title": "Local show"}

    response = client.post("/api/v1/watched/tv/555/seasons", json={"seasonNumber": 2, "item": show})

    assert response.status_code == 200
    entry = response.json()["watched"][0]
    assert entry["title"] == "Local show"
    assert [season["seasonNumber"] for season in entry["seasons"]] == [2]


def test_season_watch_for_unknown_show(client: TestClient):
    response = client.post("/api/v1/watched/tv/999/seasons", json={"seasonNumber": 1})

    assert response.status_code == 404


def test_invalid_rating_is_rejected(client: TestClient):
    response = client.post("/api/v1/watched", json={**MOVIE, "userRating": 9})

    assert response.status_code == 422
    assert client.get("/api/v1/catalog").json()["watched"] == []


def test_custom_list_lifecycle(client: TestClient):
    response = client.post("/api/v1/lists", json={"name": "Favorites", "description": "Best ones"})
    assert response.status_code == 201
    list_id = response.json()["id"]
    assert list_id.startswith("list_")
    assert response.json()["list"]["items"] == []

    response = client.post(f"/api/v1/lists/{list_id}/items", json=MOVIE)
    assert response.status_code == 200
    assert [item["id"] for item in response.json()["items"]] == [27205]

    response = client.post(f"/api/v1/lists/{list_id}/items", json={**MOVIE, "title": "Duplicate"})
    assert [item["title"] for item in response.json()["items"]] == ["Inception"]

    response = client.patch(f"/api/v1/lists/{list_id}", json={"name": "Top picks"})
    assert response.status_code == 200
    assert response.json()["name"] == "Top picks"

    response = client.delete(f"/api/v1/lists/{list_id}/items/movie/27205")
    assert response.status_code == 200
    assert response.json()["items"] == []

    response = client.delete(f"/api/v1/lists/{list_id}")
    assert response.status_code == 200
    assert response.json()["customLists"] == []


def test_unknown_list_returns_404(client: TestClient):
    assert client.get("/api/v1/lists/list_missing").status_code == 404
    assert client.post("/api/v1/lists/list_missing/items", json=MOVIE).status_code == 404
    assert client.patch("/api/v1/lists/list_missing", json={"name": "x"}).status_code == 404
    assert client.delete("/api/v1/lists/list_missing").status_code == 200


def test_blank_list_name_is_rejected(client: TestClient):
    assert client.post("/api/v1/lists", json={"name": "   "}).status_code == 422


def test_stats_and_items(client: TestClient):
    client.post("/api/v1/watchlist", json=MOVIE)
    client.post("/api/v1/watched", json={**SHOW, "userRating": 4})
    list_id = client.post("/api/v1/lists", json={"name": "Favorites"}).json()["id"]
    client.post(f"/api/v1/lists/{list_id}/items", json=MOVIE)

    stats = client.get("/api/v1/catalog/stats").json()
    assert stats == {
        "totalItems": 2,
        "watchlistCount": 1,
        "watchedCount": 1,
        "customListsCount": 1,
        "movieCount": 1,
        "tvShowCount": 1,
        "averageRating": 4.0,
    }

    items = client.get("/api/v1/catalog/items", params={"sort_by": "title"}).json()
    assert [item["title"] for item in items] == ["Breaking Bad", "Inception"]

    items = client.get("/api/v1/catalog/items", params={"view": "watched"}).json()
    assert items[0]["userRating"] == 4

    items = client.get("/api/v1/catalog/items", params={"view": "list", "list_id": list_id, "type": "tv"}).json()
    assert items == []

    assert client.get("/api/v1/catalog/items", params={"view": "list"}).status_code == 404
    assert client.get("/api/v1/catalog/items", params={"view": "bogus"}).status_code == 400


def test_replace_catalog(client: TestClient, catalog_path):
    document = {
        "watchlist": [MOVIE],
        "watched": [],
        "customLists": [],
        "lastUpdated": "2020-01-01T00:00:00.000Z",
    }

    response = client.put("/api/v1/catalog", json=document)

    assert response.status_code == 200
    assert response.json()["lastUpdated"] != "2020-01-01T00:00:00.000Z"
    assert json.loads(catalog_path.read_text(encoding="utf-8"))["watchlist"][0]["id"] == 27205

    response = client.put("/api/v1/catalog", json={"watchlist": []})
    assert response.status_code == 400


def test_reload_reads_file(client: TestClient, catalog_path):
    client.post("/api/v1/watchlist", json=MOVIE)
    document = json.loads(catalog_path.read_text(encoding="utf-8"))
    document["watchlist"] = []
    catalog_path.write_text(json.dumps(document), encoding="utf-8")

    response = client.post("/api/v1/catalog/reload")

    assert response.status_code == 200
    assert response.json()["watchlist"] == []


def test_catalog_survives_restart(make_client):
    first = make_client()
    first.post("/api/v1/watchlist", json=MOVIE)

    second = make_client()

    assert second.get("/api/v1/catalog").json()["watchlist"][0]["id"] == 27205


def test_reject_policy_blocks_watched_item(make_client):
    client = make_client(dual_membership_policy="reject")
    client.post("/api/v1/watched", json=MOVIE)

    response = client.post("/api/v1/watchlist", json=MOVIE)

    assert response.status_code == 409


def test_allow_policy_keeps_both(client: TestClient):
    client.post("/api/v1/watched", json=MOVIE)

    body = client.post("/api/v1/watchlist", json=MOVIE).json()

    assert len(body["watchlist"]) == 1
    assert len(body["watched"]) == 1


def test_search_and_details(client: TestClient):
    response = client.get("/api/v1/search", params={"query": "breaking", "media_type": "tv"})
    assert response.status_code == 200
    assert [result["name"] for result in response.json()["results"]] == ["Breaking Bad"]

    assert client.get("/api/v1/search", params={"query": "x", "media_type": "person"}).status_code == 422

    details = client.get("/api/v1/media/movie/27205").json()
    assert details["runtime"] == 148
    assert details["poster_url"] == "https://image.tmdb.org/t/p/w500/inception.jpg"
    assert details["release_year"] == "2010"
    assert details["display_release_date"] == "July 15, 2010"
    assert client.get("/api/v1/media/tv/42").status_code == 404

    popular = client.get("/api/v1/media/popular/movie").json()
    assert popular["results"][0]["title"] == "Inception"


def test_storage_status(client: TestClient, catalog_path):
    client.post("/api/v1/watchlist", json=MOVIE)

    body = client.get("/api/v1/system/storage").json()

    assert body["path"] == str(catalog_path)
    assert body["exists"] is True
    assert body["tmdbConfigured"] is True


def test_unloaded_catalog_returns_503(client: TestClient):
    catalog_service = client.app.state.catalog_service
    client.app.state.catalog_service = None
    try:
        assert client.get("/api/v1/catalog").status_code == 503
    finally:
        client.app.state.catalog_service = catalog_service
