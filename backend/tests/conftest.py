# backend/tests/conftest.py
import asyncio
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from tugas.core.config import Settings
from tugas.main import create_app

PASSWORD = "rahasia123"


@pytest.fixture()
def mongo_db():
    """
    Fresh in-memory Motor-compatible database per test.
    mongomock clients can share one store, hence the unique name.
    """
    return AsyncMongoMockClient()[f"tugas_test_{uuid.uuid4().hex}"]


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    public = tmp_path / "public"
    pages = tmp_path / "pages"
    public.mkdir()
    pages.mkdir()
    (pages / "halo.html").write_text("<h1>halo page</h1>", encoding="utf-8")
    (pages / "register.html").write_text("<h1>register page</h1>", encoding="utf-8")
    (pages / "about.html").write_text("<h1>about page</h1>", encoding="utf-8")
    (public / "style.css").write_text("body { color: black; }", encoding="utf-8")

    return Settings(
        _env_file=None,
        SESSION_SECRET="test-secret",
        PUBLIC_DIR=public,
        PAGES_DIR=pages,
        CORS_ORIGINS=[],
        ENVIRONMENT="test",
    )


@pytest.fixture()
def app(test_settings, mongo_db):
    return create_app(test_settings, database=mongo_db)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def other_client(app):
    """A second browser talking to the same app, with its own cookie jar."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def run():
    """
    Run a coroutine against the mock database from a sync test.
    mongomock-motor does not bind to an event loop, so a throwaway loop is fine.
    """
    return asyncio.run


def register(client: TestClient, username: str, password: str = PASSWORD):
    return client.post("/api/register", json={"username": username, "password": password})


def login(client: TestClient, username: str, password: str = PASSWORD):
    return client.post("/api/login", json={"username": username, "password": password})


def create_task(client: TestClient, name: str = "PR Matematika", **fields):
    body = {"name": name, "mapel": "Matematika", "deadline": "2026-11-01", "rating": 3}
    body.update(fields)
    return client.post("/api/tugas", json=body)
