import pytest

from fynncloud.app import build_app
from tests.fixtures.backend import TEST_BASE_URL, FakeBackend


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def app(backend):
    return build_app(base_url=TEST_BASE_URL, user={"id": "u1", "name": "Fynn"}, transport=backend.transport)
