import pytest

from app.schemas.catalog import Catalog
from app.schemas.catalog_item import MediaType
from app.services import catalog_evaluator as evaluator
from app.services import catalog_mutator as mutator
from app.services.catalog_evaluator import SortOption

from conftest import make_item, make_watched, season


@pytest.fixture
def populated_catalog(empty_catalog) -> Catalog:
    catalog = mutator.add_to_watchlist(empty_catalog, make_item(1, title="Inception"))
    catalog = mutator.add_to_watchlist(catalog, make_item(2, MediaType.tv, "Dark"))
    catalog = mutator.mark_as_watched(catalog, make_watched(3, title="Heat", user_rating=4))
    catalog = mutator.mark_as_watched(
        catalog, make_watched(4, MediaType.tv, "Severance", seasons=[season(1, rating=5)])
    )
    catalog, list_id = mutator.create_custom_list(catalog, "Favorites")
    catalog = mutator.add_to_custom_list(catalog, list_id, make_item(1, title="Inception"))
    catalog = mutator.add_to_custom_list(catalog, list_id, make_item(5, title="Alien"))
    return catalog


def test_stats_of_empty_catalog(empty_catalog):
    stats = evaluator.get_catalog_stats(empty_catalog)

    assert stats.total_items == 0
    assert stats.watchlist_count == 0
    assert stats.watched_count == 0
    assert stats.custom_lists_count == 0
    assert stats.movie_count == 0
    assert stats.tv_show_count == 0
    assert stats.average_rating == 0


def test_stats_count_unique_items(populated_catalog):
    stats = evaluator.get_catalog_stats(populated_catalog)

    assert stats.total_items == 5
    assert stats.watchlist_count == 2
    assert stats.watched_count == 2
    assert stats.custom_lists_count == 1
    assert stats.movie_count == 3
    assert stats.tv_show_count == 2


def test_average_rating_ignores_unrated_and_season_ratings(populated_catalog):
    # 시즌 별점(5)은 평균에 포함되지 않음
    assert evaluator.get_catalog_stats(populated_catalog).average_rating == 4


@pytest.mark.parametrize(
    "ratings, expected",
    [
        ([5, 4], 4.5),
        ([5, 4, 4], 4.3),
        ([1, 2, 2, 2, 2, 2, 2, 2], 1.9),
        ([5, 4, 4, 4], 4.3),
        ([2, 3, 3, 3], 2.8),
    ],
)
def test_average_rating_rounding(empty_catalog, ratings, expected):
    catalog = empty_catalog
    for index, rating in enumerate(ratings):
        catalog = mutator.mark_as_watched(catalog, make_watched(100 + index, user_rating=rating))

    assert evaluator.get_catalog_stats(catalog).average_rating == expected


def test_all_catalog_items_prefers_first_occurrence(empty_catalog):
    catalog = mutator.add_to_watchlist(empty_catalog, make_item(1, title="From watchlist"))
    catalog, list_id = mutator.create_custom_list(catalog, "Favorites")
    catalog = mutator.add_to_custom_list(catalog, list_id, make_item(1, title="From list"))
    catalog = mutator.add_to_custom_list(catalog, list_id, make_item(2, title="Only in list"))

    items = evaluator.get_all_catalog_items(catalog)

    assert [item.title for item in items] == ["From watchlist", "Only in list"]


def test_item_status(populated_catalog):
    status = evaluator.get_item_status(populated_catalog, 4, MediaType.tv)

    assert status.watched is True
    assert status.force_watched is True
    assert status.watched_seasons == [1]
    assert status.in_watchlist is False

    status = evaluator.get_item_status(populated_catalog, 1, MediaType.movie)
    assert status.in_watchlist is True
    assert status.watched is False
    assert len(status.lists) == 1

    status = evaluator.get_item_status(populated_catalog, 1, MediaType.tv)
    assert status.in_watchlist is False
    assert status.lists == []


def test_season_queries(populated_catalog):
    assert evaluator.is_season_watched(populated_catalog, 4, 1)
    assert not evaluator.is_season_watched(populated_catalog, 4, 2)
    assert not evaluator.is_season_watched(populated_catalog, 2, 1)
    assert evaluator.has_watched_seasons(evaluator.get_watched_item(populated_catalog, 4, MediaType.tv))
    assert not evaluator.has_watched_seasons(evaluator.get_watched_item(populated_catalog, 3, MediaType.movie))


def test_find_in_custom_lists(populated_catalog):
    found = evaluator.find_in_custom_lists(populated_catalog, 5, MediaType.movie)

    assert [custom_list.name for custom_list in found] == ["Favorites"]
    assert evaluator.find_in_custom_lists(populated_catalog, 3, MediaType.movie) == []


def test_sort_by_release_date_puts_undated_last():
    items = [
        make_item(1, title="Undated", release_date=""),
        make_item(2, title="Old", release_date="1999-03-31"),
        make_item(3, title="New", release_date="2023-07-21"),
    ]

    newest_first = evaluator.sort_by_release_date(items)
    oldest_first = evaluator.sort_by_release_date(items, ascending=True)

    assert [item.title for item in newest_first] == ["New", "Old", "Undated"]
    assert [item.title for item in oldest_first] == ["Old", "New", "Undated"]
    assert [item.title for item in items] == ["Undated", "Old", "New"]


def test_sort_by_title_is_case_insensitive():
    items = [make_item(1, title="beta"), make_item(2, title="Alpha"), make_item(3, title="gamma")]

    assert [item.title for item in evaluator.sort_by_title(items)] == ["Alpha", "beta", "gamma"]
    assert [item.title for item in evaluator.sort_by_title(items, ascending=False)] == ["gamma", "beta", "Alpha"]


def test_sort_by_date_added_newest_first():
    items = [
        make_item(1, title="Middle", date_added="2024-02-01T00:00:00.000Z"),
        make_item(2, title="Newest", date_added="2024-03-01T00:00:00.000Z"),
        make_item(3, title="Oldest", date_added="2024-01-01T00:00:00.000Z"),
    ]

    assert [item.title for item in evaluator.sort_by_date_added(items)] == ["Newest", "Middle", "Oldest"]


def test_sort_items_dispatches_by_option():
    items = [make_item(1, title="Low", vote_average=5.1), make_item(2, title="High", vote_average=9.0)]

    assert [item.title for item in evaluator.sort_items(items, SortOption.rating)] == ["High", "Low"]
    assert [item.title for item in evaluator.sort_items(items, "rating", ascending=True)] == ["Low", "High"]
    assert [item.title for item in evaluator.sort_items(items, SortOption.title)] == ["High", "Low"]


def test_filters():
    items = [
        make_item(1, title="Inception", overview="A thief who steals secrets"),
        make_item(2, MediaType.tv, "Dark", overview="Time travel in a small town"),
    ]

    assert [item.id for item in evaluator.filter_by_type(items, MediaType.tv)] == [2]
    assert [item.id for item in evaluator.filter_by_title(items, "TIME")] == [2]
    assert [item.id for item in evaluator.filter_by_title(items, "incep")] == [1]
    assert len(evaluator.filter_by_title(items, "  ")) == 2


@pytest.mark.parametrize(
    "item",
    [
        make_watched(1, MediaType.tv, "Dark", seasons=[season(1)]),
        make_watched(1, MediaType.tv, "Dark", seasons=[]),
        make_watched(1, MediaType.tv, "Dark"),
        make_watched(1, seasons=[season(1)]),
    ],
)
def test_has_watched_seasons_matches_force_watched(item):
    assert evaluator.has_watched_seasons(item) is item.force_watched
