from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from clicker.app import create_app
from clicker.core import API_PREFIX, make_engine
from clicker.services import ClickerGame, JsonSnapshotStore, SqlUserStore

from .helpers import fake_is_profane


@pytest.fixture
def snapshot_path(tmp_path):
    return tmp_path / "users.json"


@pytest.fixture
def json_store(snapshot_path):
    store = JsonSnapshotStore(snapshot_path)
    store.load()
    return store


@pytest.fixture
def sql_store(tmp_path):
    store = SqlUserStore(make_engine(tmp_path / "clicker.db"))
    store.load()
    return store


@pytest.fixture(params=["json", "sqlite"])
def store(request, json_store, sql_store):
    return json_store if request.param == "json" else sql_store


@pytest.fixture
def game(store):
    return ClickerGame(store, is_profane=fake_is_profane)


@pytest.fixture
def client(json_store):
    with TestClient(create_app(store=json_store, is_profane=fake_is_profane)) as test_client:
        yield test_client


@pytest.fixture
def api():
    def _path(path: str) -> str:
        return f"{API_PREFIX}{path}"

    return _path
