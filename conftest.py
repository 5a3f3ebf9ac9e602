import itertools

import pytest
from fastapi.testclient import TestClient

from api import create_app
from library import Library


def _sequential_ids(prefix: str = "book"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def lib():
    # Seeded store whose ids are book-1, book-2, ... so tests can address them
    return Library(id_factory=_sequential_ids())


@pytest.fixture
def empty_lib():
    return Library(id_factory=_sequential_ids(), seed=())


@pytest.fixture
def client(lib):
    app = create_app(library=lib)
    with TestClient(app) as test_client:
        yield test_client
