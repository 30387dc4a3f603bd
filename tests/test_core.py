"""
Tests for shared building blocks: store client config and error translation.
"""

from __future__ import annotations

import asyncio

import asyncpg
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core import db
from core.errors import ApiError, missing_inputs, not_found, register_error_handlers


class TestDatabaseUrl:
    def test_reads_database_url(self, monkeypatch) -> None:
        monkeypatch.delenv("APP_ENV", raising=False)
        monkeypatch.setenv("DATABASE_URL", " postgresql://u:p@localhost/biztime ")
        assert db.database_url() == "postgresql://u:p@localhost/biztime"

    def test_drops_sslmode(self, monkeypatch) -> None:
        monkeypatch.delenv("APP_ENV", raising=False)
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/biztime?sslmode=require&application_name=api")
        assert db.database_url() == "postgresql://localhost/biztime?application_name=api"

    def test_missing_raises(self, monkeypatch) -> None:
        monkeypatch.delenv("APP_ENV", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError, match="DATABASE_URL is not set"):
            db.database_url()

    def test_test_env_uses_test_database(self, monkeypatch) -> None:
        monkeypatch.setenv("APP_ENV", "test")
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/biztime")
        monkeypatch.setenv("TEST_DATABASE_URL", "postgresql://localhost/biztime_test")
        assert db.database_url() == "postgresql://localhost/biztime_test"


class TestDatabase:
    def test_pool_sizes_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("DB_POOL_MIN_SIZE", "2")
        monkeypatch.setenv("DB_POOL_MAX_SIZE", "not-a-number")
        database = db.Database("postgresql://localhost/biztime")
        assert database.min_size == 2
        assert database.max_size == 5

    def test_pool_requires_connect(self) -> None:
        database = db.Database("postgresql://localhost/biztime")
        with pytest.raises(RuntimeError, match="not initialized"):
            database.pool

    def test_close_without_connect_is_noop(self) -> None:
        database = db.Database("postgresql://localhost/biztime")
        asyncio.run(database.close())
        with pytest.raises(RuntimeError):
            database.pool


class TestTextParam:
    def test_renders_like_the_store_expects(self) -> None:
        assert db.text_param(None) is None
        assert db.text_param("abc") == "abc"
        assert db.text_param(123) == "123"
        assert db.text_param(1.5) == "1.5"
        assert db.text_param(True) == "true"
        assert db.text_param({"a": 1}) == '{"a": 1}'


class TestErrorSignal:
    def test_to_dict(self) -> None:
        assert ApiError("Company cannot be found", 404).to_dict() == {
            "message": "Company cannot be found",
            "status": 404,
        }

    def test_helpers(self) -> None:
        assert not_found("Invoice cannot be found").status == 404
        assert missing_inputs().to_dict() == {"message": "Please provide all inputs", "status": 404}


@pytest.fixture()
def error_client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/classified")
    async def classified() -> dict:
        raise ApiError("Nope", 404)

    @app.get("/store")
    async def store() -> dict:
        raise asyncpg.exceptions.NotNullViolationError(
            'null value in column "name" of relation "companies" violates not-null constraint'
        )

    @app.get("/driver")
    async def driver() -> dict:
        raise asyncpg.InterfaceError("invalid input for query argument $1: 'abc'")

    @app.get("/boom")
    async def boom() -> dict:
        raise ValueError("something broke")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorTranslation:
    def test_classified(self, error_client) -> None:
        resp = error_client.get("/classified")
        assert resp.status_code == 404
        assert resp.json() == {"error": {"message": "Nope", "status": 404}}

    def test_store_failure(self, error_client) -> None:
        resp = error_client.get("/store")
        assert resp.status_code == 500
        assert resp.json() == {
            "message": 'null value in column "name" of relation "companies" violates not-null constraint'
        }

    def test_driver_failure(self, error_client) -> None:
        resp = error_client.get("/driver")
        assert resp.status_code == 500
        assert resp.json() == {"message": "invalid input for query argument $1: 'abc'"}

    def test_unexpected(self, error_client) -> None:
        resp = error_client.get("/boom")
        assert resp.status_code == 500
        assert resp.json() == {"message": "something broke"}

    def test_unknown_route(self, error_client) -> None:
        resp = error_client.get("/missing")
        assert resp.status_code == 404
        assert resp.json() == {"error": {"message": "Not Found", "status": 404}}


def test_health(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
