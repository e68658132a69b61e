"""Tests for counting the users watching an item."""

import sqlite3

import pytest

from poptape_lists_api.app.core import db
from poptape_lists_api.app.core.errors import InvalidItemId, StorageError
from poptape_lists_api.app.services.list_service import ListService
from poptape_lists_api.app.services.watch_service import WatchService
from tests.conftest import USER_ONE, USER_THREE, USER_TWO, new_item_id


def test_unwatched_item_counts_zero(database):
    assert WatchService.count_watchers(new_item_id()) == 0


def test_counts_distinct_watchlists(database):
    item = new_item_id()
    for user in (USER_ONE, USER_TWO, USER_THREE):
        ListService.add_item(user, "watchlist", item)
        ListService.add_item(user, "watchlist", new_item_id())
    ListService.add_item(USER_ONE, "watchlist", item)

    assert WatchService.count_watchers(item) == 3


def test_only_watchlists_are_counted(database):
    item = new_item_id()
    ListService.add_item(USER_ONE, "watchlist", item)
    ListService.add_item(USER_TWO, "favourites", item)
    ListService.add_item(USER_THREE, "viewed", item)

    assert WatchService.count_watchers(item) == 1


def test_count_follows_removals(database):
    item = new_item_id()
    ListService.add_item(USER_ONE, "watchlist", item)
    ListService.add_item(USER_TWO, "watchlist", item)

    ListService.remove_item(USER_ONE, "watchlist", item)

    assert WatchService.count_watchers(item) == 1


def test_count_accepts_any_uuid_spelling(database):
    item = new_item_id()
    ListService.add_item(USER_ONE, "watchlist", item)

    assert WatchService.count_watchers(item.upper()) == 1


def test_malformed_item_id_is_rejected(database):
    with pytest.raises(InvalidItemId):
        WatchService.count_watchers("abc")


def test_storage_failure_is_surfaced(database, monkeypatch):
    def broken_connection():
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(db, "get_connection", broken_connection)

    with pytest.raises(StorageError):
        WatchService.count_watchers(new_item_id())
