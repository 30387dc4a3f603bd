from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core.db import get_db
from main import app


class StubDatabase:
    """
    Stand-in store client; tests replace the repository functions instead.
    """

    async def fetch_one(self, sql, *args):
        raise AssertionError("unexpected query: repository function was not patched")

    async def fetch_all(self, sql, *args):
        raise AssertionError("unexpected query: repository function was not patched")

    async def execute(self, sql, *args):
        raise AssertionError("unexpected query: repository function was not patched")


class RecordingDatabase:
    """
    Store client that records statements and returns canned results.
    """

    def __init__(self, one=None, rows=None):
        self.one = one
        self.rows = rows or []
        self.calls = []

    async def fetch_one(self, sql, *args):
        self.calls.append((sql, args))
        return self.one

    async def fetch_all(self, sql, *args):
        self.calls.append((sql, args))
        return self.rows

    async def execute(self, sql, *args):
        self.calls.append((sql, args))


@pytest.fixture()
def recording_db():
    return RecordingDatabase()


@pytest.fixture()
def stub_db():
    return StubDatabase()


@pytest.fixture()
def client(stub_db):
    app.dependency_overrides[get_db] = lambda: stub_db
    # Not entered as a context manager: the lifespan (real pool) stays off.
    client_instance = TestClient(app)
    try:
        yield client_instance
    finally:
        client_instance.close()
        app.dependency_overrides.clear()


@pytest.fixture()
def lenient_client(stub_db):
    """
    Like `client`, but returns 500 responses instead of re-raising them.
    """
    app.dependency_overrides[get_db] = lambda: stub_db
    client_instance = TestClient(app, raise_server_exceptions=False)
    try:
        yield client_instance
    finally:
        client_instance.close()
        app.dependency_overrides.clear()
