from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.domain.asset_store import AssetStore


class SequenceSource:
    """Uniform source that replays fixed draws, cycling when exhausted."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = 0

    def next(self) -> float:
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return value


@pytest.fixture()
def app():
    return create_app({"TESTING": True, "LOG_LEVEL": "DEBUG"})


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def store() -> AssetStore:
    return AssetStore()


@pytest.fixture()
def sequence_source():
    return SequenceSource
