import pytest

from hummingbird.client import HummingbirdClient

BASE_URL = "http://hummingbird.test/api/v1/"


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def client():
    with HummingbirdClient(base_url=BASE_URL) as c:
        yield c
