"""Tests for the generic repository."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from portfolio_cms.config import Settings
from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.models import Album, AlbumImage, Todo
from portfolio_cms.errors import ConflictError, NotFoundError

PARIS = timezone(timedelta(hours=2))


@pytest.fixture
def todos(cms_env: Settings) -> Repository[Todo]:
    return Repository(Todo, "Todo")


def test_insert_assigns_ids(todos: Repository[Todo]) -> None:
    first = todos.insert(Todo(text="write tests"))
    second = todos.insert(Todo(text="ship"))

    assert first.id is not None
    assert second.id > first.id
    assert first.completed is False


def test_find_filters_and_orders(todos: Repository[Todo]) -> None:
    todos.insert_many([Todo(text="a"), Todo(text="b", completed=True), Todo(text="c")])

    open_items = todos.find({"completed": False}, order_by=["-id"])

    assert [todo.text for todo in open_items] == ["c", "a"]
    assert todos.count() == 3
    assert todos.count({"completed": True}) == 1


def test_find_one_returns_none_when_missing(todos: Repository[Todo]) -> None:
    assert todos.find_one({"text": "nothing"}) is None


def test_find_by_id_raises_not_found(todos: Repository[Todo]) -> None:
    with pytest.raises(NotFoundError, match="Todo not found"):
        todos.find_by_id(404)


def test_unknown_field_is_rejected(todos: Repository[Todo]) -> None:
    with pytest.raises(ValueError, match="no field"):
        todos.find({"title": "x"})


def test_update_by_id_applies_mutation(todos: Repository[Todo]) -> None:
    todo = todos.insert(Todo(text="flip me"))

    def complete(record: Todo) -> None:
        record.completed = True

    updated = todos.update_by_id(todo.id, complete)

    assert updated.completed is True
    assert todos.find_by_id(todo.id).completed is True


def test_update_by_id_missing_record(todos: Repository[Todo]) -> None:
    with pytest.raises(NotFoundError):
        todos.update_by_id(99, lambda record: None)


def test_delete_by_id_reports_existence(todos: Repository[Todo]) -> None:
    todo = todos.insert(Todo(text="gone"))

    assert todos.delete_by_id(todo.id) is True
    assert todos.delete_by_id(todo.id) is False


def test_unique_violation_becomes_conflict(cms_env: Settings) -> None:
    albums = Repository(Album, "Album")
    albums.insert(Album(name="Trips", thumbnail="1-a.png"))

    with pytest.raises(ConflictError, match="Album already exists"):
        albums.insert(Album(name="Trips", thumbnail="2-b.png"))


def test_count_grouped_and_delete_many(cms_env: Settings) -> None:
    albums = Repository(Album, "Album")
    images = Repository(AlbumImage, "Image")
    trips = albums.insert(Album(name="Trips", thumbnail="t.png"))
    pets = albums.insert(Album(name="Pets", thumbnail="p.png"))
    images.insert_many(
        [
            AlbumImage(album_id=trips.id, filename="1.png"),
            AlbumImage(album_id=trips.id, filename="2.png"),
            AlbumImage(album_id=pets.id, filename="3.png"),
        ]
    )

    assert images.count_grouped("album_id") == {trips.id: 2, pets.id: 1}
    assert images.delete_many({"album_id": trips.id}) == 2
    assert images.count() == 1


def test_ids_beyond_integer_range_are_not_found(todos: Repository[Todo]) -> None:
    huge = 2**70

    with pytest.raises(NotFoundError):
        todos.find_by_id(huge)
    with pytest.raises(NotFoundError):
        todos.update_by_id(huge, lambda record: None)
    assert todos.delete_by_id(huge) is False


def test_datetimes_read_back_as_utc(cms_env: Settings) -> None:
    albums = Repository(Album, "Album")
    created = albums.insert(
        Album(name="Trips", thumbnail="t.png", date=datetime(2024, 5, 1, 14, 0, tzinfo=PARIS))
    )

    loaded = albums.find_by_id(created.id)

    assert loaded.date == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    assert loaded.date.utcoffset() == timedelta(0)
