from datetime import datetime, timezone

import pytest

from hummingbird.models import (
    Anime,
    Entry,
    Genre,
    LibraryEntry,
    expect,
    list_of,
    parse_time,
)


def test_entry_always_sends_id_and_token():
    assert Entry(id="log-horizon").to_dict() == {"id": "log-horizon", "auth_token": ""}


def test_entry_sends_only_set_fields():
    entry = Entry(id="x", auth_token="T", notes="crazy", rewatching=False)
    assert entry.to_dict() == {"id": "x", "auth_token": "T", "rewatching": False, "notes": "crazy"}


def test_to_dict_nested():
    anime = Anime(title="Nichijou", genres=[Genre(name="Comedy")])
    assert anime.to_dict() == {"title": "Nichijou", "genres": [{"name": "Comedy"}]}


def test_to_dict_datetime():
    entry = LibraryEntry(id=1, updated_at=datetime(2014, 8, 18, tzinfo=timezone.utc))
    assert entry.to_dict() == {"id": 1, "updated_at": "2014-08-18T00:00:00+00:00"}


def test_from_dict_ignores_unknown_fields():
    assert Genre.from_dict({"name": "Action", "id": 3}) == Genre(name="Action")


def test_from_dict_rejects_non_object():
    with pytest.raises(TypeError):
        Anime.from_dict("Log Horizon")


def test_parse_time():
    assert parse_time("2014-06-20T05:31:27.074Z") == datetime(2014, 6, 20, 5, 31, 27, 74000, tzinfo=timezone.utc)
    with pytest.raises(TypeError):
        parse_time(1403242287)
    with pytest.raises(ValueError):
        parse_time("yesterday")


def test_list_of():
    assert list_of(Genre.from_dict)([{"name": "A"}]) == [Genre(name="A")]
    with pytest.raises(TypeError):
        list_of(Genre.from_dict)({"name": "A"})


def test_expect():
    assert expect(str)("token") == "token"
    with pytest.raises(TypeError):
        expect(str)(42)
    with pytest.raises(TypeError):
        expect(bool)("true")


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "not-an-int"},
        {"episodes_watched": "four"},
        {"private": "yes"},
        {"episodes_watched": True},
        {"notes": 12},
    ],
)
def test_from_dict_rejects_wrong_field_types(payload):
    with pytest.raises(TypeError):
        LibraryEntry.from_dict(payload)


def test_from_dict_accepts_int_for_float_and_null():
    anime = Anime.from_dict({"community_rating": 4, "title": None})
    assert anime.community_rating == 4
    assert anime.title is None
    with pytest.raises(TypeError):
        Anime.from_dict({"community_rating": True})
