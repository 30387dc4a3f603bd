"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The application lifespan builds one
instance per process, connects it on startup and closes it on shutdown
(see `api/main.py`). Handlers receive it through the `get_db` dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import json
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    name = "TEST_DATABASE_URL" if os.environ.get("APP_ENV", "").strip().lower() == "test" else "DATABASE_URL"
    url = os.environ.get(name, "").strip()
    if not url:
        raise RuntimeError(f"{name} is not set.")
    return _sanitize_database_url(url)


def text_param(value: Any) -> str | None:
    """
    Render a client-supplied value as a text parameter.

    Request values are passed through untyped; the statement casts them
    (`$1::text::integer`) so bad input fails in Postgres with its own message.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float | None = None,
    ) -> None:
        self.dsn = dsn
        self.min_size = min_size if min_size is not None else _env_int("DB_POOL_MIN_SIZE", 1)
        self.max_size = max_size if max_size is not None else _env_int("DB_POOL_MAX_SIZE", 5)
        self.command_timeout = (
            command_timeout if command_timeout is not None else _env_int("DB_COMMAND_TIMEOUT", 30)
        )
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        await self.pool.execute(sql, *args)


def get_db(request: Request) -> Database:
    """
    FastAPI dependency: the process-wide store client set up by the lifespan.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database is not configured on app.state.")
    return db
