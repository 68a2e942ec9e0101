import pytest
import requests_mock

from hummingbird.errors import HTTPStatusError, InvalidURLError
from hummingbird.models import Anime, Genre


def test_get(client, base_url):
    with requests_mock.Mocker() as mocker:
        mocker.get(base_url + "anime/log-horizon", json={"title": "Log Horizon"})
        anime = client.anime.get("log-horizon", "english")
        assert anime == Anime(title="Log Horizon")
        assert anime.id is None
        assert anime.genres is None
        assert mocker.last_request.method == "GET"
        assert mocker.last_request.path == "/api/v1/anime/log-horizon"
        assert mocker.last_request.qs == {"title_language_preference": ["english"]}


def test_get_full_payload(client, base_url):
    payload = {
        "id": 7622,
        "slug": "log-horizon",
        "status": "Finished Airing",
        "url": "https://hummingbird.me/anime/log-horizon",
        "title": "Log Horizon",
        "alternate_title": "",
        "episode_count": 25,
        "episode_length": 25,
        "show_type": "TV",
        "started_airing": "2013-10-05",
        "finished_airing": "2014-03-22",
        "community_rating": 4.16741419054807,
        "age_rating": "PG13",
        "genres": [{"name": "Action"}, {"name": "Adventure"}],
        "unknown_field": "ignored",
    }
    with requests_mock.Mocker() as mocker:
        mocker.get(base_url + "anime/7622", json=payload)
        anime = client.anime.get(7622)
        assert anime.id == 7622
        assert anime.episode_count == 25
        assert anime.genres == [Genre(name="Action"), Genre(name="Adventure")]
        assert anime.community_rating == pytest.approx(4.167, rel=1e-3)
        assert mocker.last_request.query == ""


def test_get_not_found(client, base_url):
    with requests_mock.Mocker() as mocker:
        mocker.get(base_url + "anime/invalid-anime", status_code=404, text="not found\n")
        with pytest.raises(HTTPStatusError) as excinfo:
            client.anime.get("invalid-anime")
        assert excinfo.value.response is not None
        assert excinfo.value.status_code == 404
        assert mocker.last_request.query == ""


def test_get_bad_anime_id(client):
    with requests_mock.Mocker() as mocker:
        with pytest.raises(InvalidURLError):
            client.anime.get("%foo")
        assert not mocker.called


def test_get_escapes_id(client, base_url):
    with requests_mock.Mocker() as mocker:
        mocker.get(requests_mock.ANY, json={})
        client.anime.get("a b/c")
        assert mocker.last_request.url == base_url + "anime/a%20b%2Fc"


def test_search(client, base_url):
    with requests_mock.Mocker() as mocker:
        mocker.get(
            base_url + "search/anime",
            json=[{"title": "Log Horizon1"}, {"title": "Log Horizon2"}],
        )
        result = client.anime.search("log horizon")
        assert result == [Anime(title="Log Horizon1"), Anime(title="Log Horizon2")]
        assert mocker.last_request.qs == {"query": ["log horizon"]}


def test_search_empty(client, base_url):
    with requests_mock.Mocker() as mocker:
        mocker.get(base_url + "search/anime", json=[])
        assert client.anime.search("nothing") == []


def test_search_http_error(client, base_url):
    with requests_mock.Mocker() as mocker:
        mocker.get(base_url + "search/anime", status_code=500, text="something broke\n")
        with pytest.raises(HTTPStatusError) as excinfo:
            client.anime.search("log horizon")
        assert excinfo.value.response is not None
        assert excinfo.value.message == "something broke"
