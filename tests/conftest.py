import json

import pytest
from fastapi.testclient import TestClient

from user_store_api.app.core.config import Settings
from user_store_api.app.main import create_app


SEED_USER = {
    "id": "1",
    "created_at": "2024-01-02T03:04:05Z",
    "display_name": "A",
    "email": "a@x.com",
}


@pytest.fixture()
def store_path(tmp_path):
    return tmp_path / "users.json"


@pytest.fixture()
def write_store(store_path):
    """Write a raw store document to the temporary store file."""

    def _write(increment=0, users=None):
        doc = {"increment": increment, "list": users or {}}
        store_path.write_text(json.dumps(doc), encoding="utf-8")
        return doc

    return _write


@pytest.fixture()
def read_store(store_path):
    def _read():
        return json.loads(store_path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture()
def settings(store_path):
    return Settings(store_path=str(store_path), log_level="WARNING", request_timeout=5)


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    # Entering the context runs startup, which creates the empty store.
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def seeded_client(app, write_store):
    write_store(increment=1, users={"1": dict(SEED_USER)})
    with TestClient(app) as c:
        yield c
