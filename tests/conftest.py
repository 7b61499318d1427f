import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.core.dependencies import get_tmdb_service
from app.core.exceptions import TMDBError
from app.schemas.catalog import Catalog
from app.schemas.catalog_item import CatalogItem, MediaType
from app.schemas.tmdb import TMDBMovieDetails, TMDBMovieRecord, TMDBSearchResponse, TMDBTVDetails, TMDBTVRecord
from app.schemas.watched import SeasonWatch, WatchedItem
from app.services.media_utils import add_display_fields


def make_item(item_id=1, media_type=MediaType.movie, title="Inception", **extra) -> CatalogItem:
    data = {
        "id": item_id,
        "type": media_type,
        "title": title,
        "overview": f"{title} overview",
        "release_date": "2010-07-16",
        "vote_average": 8.4,
        "date_added": "2024-01-01T00:00:00.000Z",
    }
    data.update(extra)
    return CatalogItem(**data)


def make_watched(item_id=1, media_type=MediaType.movie, title="Inception", seasons=None, **extra) -> WatchedItem:
    base = make_item(item_id, media_type, title).model_dump()
    base.update(extra)
    return WatchedItem(**base, seasons=seasons)


def season(number, rating=None, watched_date="2024-02-01") -> SeasonWatch:
    return SeasonWatch(season_number=number, user_rating=rating, watched_date=watched_date)


@pytest.fixture
def empty_catalog() -> Catalog:
    return Catalog.empty()


class StubTMDBService:
    """네트워크 없이 동작하는 TMDB 서비스"""

    movies = {
        27205: {"id": 27205, "title": "Inception", "release_date": "2010-07-15", "overview": "Dreams.",
                "poster_path": "/inception.jpg", "vote_average": 8.4, "runtime": 148},
    }
    shows = {
        1396: {"id": 1396, "name": "Breaking Bad", "first_air_date": "2008-01-20", "overview": "Chemistry.",
               "poster_path": "/bb.jpg", "vote_average": 8.9, "number_of_seasons": 5,
               "seasons": [{"id": 3572, "name": "Season 1", "season_number": 1, "episode_count": 7}]},
    }

    async def get_movie_details(self, movie_id, language=None):
        if movie_id not in self.movies:
            raise TMDBError("TMDB API error: Not Found", 404)
        return add_display_fields(TMDBMovieDetails.model_validate({**self.movies[movie_id], "media_type": "movie"}))

    async def get_tv_details(self, tv_id, language=None):
        if tv_id not in self.shows:
            raise TMDBError("TMDB API error: Not Found", 404)
        return add_display_fields(TMDBTVDetails.model_validate({**self.shows[tv_id], "media_type": "tv"}))

    async def get_details(self, media_type, item_id, language=None):
        if media_type == MediaType.movie:
            return await self.get_movie_details(item_id)
        return await self.get_tv_details(item_id)

    async def search(self, query, media_type=None, page=1, language=None):
        results = []
        if media_type in (None, MediaType.movie):
            results += [TMDBMovieRecord.model_validate({**m, "media_type": "movie"}) for m in self.movies.values()
                        if query.lower() in m["title"].lower()]
        if media_type in (None, MediaType.tv):
            results += [TMDBTVRecord.model_validate({**s, "media_type": "tv"}) for s in self.shows.values()
                        if query.lower() in s["name"].lower()]
        return TMDBSearchResponse(page=page, results=results, total_pages=1, total_results=len(results))

    async def get_popular_movies(self, page=1, language=None):
        return await self.search("", MediaType.movie, page)

    async def get_popular_tv(self, page=1, language=None):
        return await self.search("", MediaType.tv, page)

    async def get_trending(self, media_type="all", time_window="day", language=None):
        fixed = None if media_type == "all" else MediaType(media_type)
        return await self.search("", fixed)


@pytest.fixture
def catalog_path(tmp_path):
    return tmp_path / "data" / "catalog.json"


@pytest.fixture
def make_client(catalog_path, monkeypatch):
    clients = []

    def _make(**env):
        monkeypatch.setenv("CATALOG_FILE_PATH", str(catalog_path))
        monkeypatch.setenv("TMDB_API_KEY", "test-key")
        for key, value in env.items():
            monkeypatch.setenv(key.upper(), value)
        get_settings.cache_clear()

        from app.main import app

        app.dependency_overrides[get_tmdb_service] = lambda: StubTMDBService()
        client = TestClient(app)
        client.__enter__()
        clients.append((app, client))
        return client

    yield _make

    for app, client in clients:
        client.__exit__(None, None, None)
        app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture
def client(make_client):
    return make_client()
