import pytest
import requests_mock

from hummingbird.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from hummingbird.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings == Settings(base_url=DEFAULT_BASE_URL, timeout=DEFAULT_TIMEOUT)
    assert not settings.has_credentials


def test_from_env():
    settings = Settings.from_env(
        {
            "HUMMINGBIRD_BASE_URL": "https://example.test/api/v1/",
            "HUMMINGBIRD_TIMEOUT": "2.5",
            "HUMMINGBIRD_USERNAME": "TestUser",
            "HUMMINGBIRD_PASSWORD": "TestPass",
        }
    )
    assert settings.base_url == "https://example.test/api/v1/"
    assert settings.timeout == 2.5
    assert settings.has_credentials


def test_bad_timeout():
    with pytest.raises(ValueError):
        Settings.from_env({"HUMMINGBIRD_TIMEOUT": "soon"})


def test_client_uses_settings(base_url):
    settings = Settings(base_url=base_url, timeout=3.0, username="TestUser", password="TestPass")
    with settings.client() as client:
        assert client.base_url == base_url
        assert client.timeout == 3.0
        with requests_mock.Mocker() as mocker:
            mocker.post(base_url + "users/authenticate", json="token1234")
            assert client.user.authenticate() == "token1234"
            assert mocker.last_request.json()["username"] == "TestUser"
