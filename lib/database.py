# =============================================================================
# lib/database.py - Pooled Database Access Layer
# =============================================================================
# Thin wrapper around a SQLAlchemy AsyncEngine that runs parameterized SQL
# and returns plain row dicts.
#
# Every statement goes through sqlalchemy.text() with bound parameters;
# callers never format values into SQL strings.
#
# Usage:
#   db = Database(settings.DATABASE_URL)
#   await db.connect()
#   rows = await db.query("SELECT * FROM items WHERE id = :id", {"id": 1})
# =============================================================================

from __future__ import annotations

import logging
import re
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncIterator, Mapping

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from lib.schema import metadata

logger = logging.getLogger(__name__)

Params = Mapping[str, Any] | None


class DatabaseErrorKind(str, Enum):
    """
    Classification of database failures.

    - constraint_violation: the request broke a unique/foreign key rule
    - unavailable: the database could not be reached
    - query_failed: anything else (bad SQL, driver error)
    """
    CONSTRAINT_VIOLATION = "constraint_violation"
    UNAVAILABLE = "unavailable"
    QUERY_FAILED = "query_failed"


class DatabaseError(Exception):
    """
    Error raised by Database for any failed statement.

    Keeps the raw driver message in `detail` for logs. `kind` is what
    the HTTP layer uses to pick a status code and a safe message.
    """

    def __init__(self, kind: DatabaseErrorKind, detail: str):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.detail}"

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "DatabaseError":
        """Classify a SQLAlchemy exception."""
        if isinstance(exc, IntegrityError):
            kind = DatabaseErrorKind.CONSTRAINT_VIOLATION
        elif isinstance(exc, (OperationalError, InterfaceError)) or (
            isinstance(exc, DBAPIError) and exc.connection_invalidated
        ):
            kind = DatabaseErrorKind.UNAVAILABLE
        else:
            kind = DatabaseErrorKind.QUERY_FAILED
        detail = str(getattr(exc, "orig", None) or exc)
        return cls(kind, detail)


def normalize_database_url(url: str) -> str:
    """
    Make sure Postgres URLs use the asyncpg driver.

    Example: "postgres://u:p@host/db" -> "postgresql+asyncpg://u:p@host/db"
    """
    return re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", url, count=1)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _rows(result) -> list[dict[str, Any]]:
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]


class Transaction:
    """
    Statements bound to one connection inside an open transaction.

    Obtained from Database.transaction(); commits when the block exits
    cleanly and rolls back otherwise.
    """

    def __init__(self, conn: AsyncConnection):
        self._conn = conn

    async def query(self, sql: str, params: Params = None) -> list[dict[str, Any]]:
        try:
            result = await self._conn.execute(text(sql), dict(params or {}))
            return _rows(result)
        except SQLAlchemyError as e:
            raise DatabaseError.from_exception(e) from e

    async def fetch_one(self, sql: str, params: Params = None) -> dict[str, Any] | None:
        rows = await self.query(sql, params)
        return rows[0] if rows else None


class Database:
    """
    Shared connection pool for the whole application.

    One instance is created by the app factory and handed to every
    router factory. Each call checks a connection out of the pool and
    returns it before the call completes.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        self.url = normalize_database_url(url)
        self.engine: AsyncEngine = self._create_engine(self.url, pool_size, max_overflow, echo)

    @staticmethod
    def _create_engine(url: str, pool_size: int, max_overflow: int, echo: bool) -> AsyncEngine:
        if make_url(url).get_backend_name() == "sqlite":
            # In-memory SQLite only exists on a single connection
            engine = create_async_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
            return engine
        return create_async_engine(
            url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> None:
        """
        Verify the database is reachable.

        Called at startup so the process fails fast instead of serving
        requests against a broken dependency.

        Raises:
            DatabaseError: If the round trip fails
        """
        await self.query("SELECT 1")
        logger.info(f"Connected to database ({self.engine.url.render_as_string(hide_password=True)})")

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.info("Database pool closed")

    async def create_schema(self) -> None:
        """Create all tables (development and tests; production uses migrations)."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
        except SQLAlchemyError as e:
            raise DatabaseError.from_exception(e) from e

    async def drop_schema(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.drop_all)
        except SQLAlchemyError as e:
            raise DatabaseError.from_exception(e) from e

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    async def query(self, sql: str, params: Params = None) -> list[dict[str, Any]]:
        """
        Run one statement and return its rows.

        Runs in its own short transaction, so INSERT/UPDATE/DELETE
        (with or without RETURNING) are committed as well.

        Args:
            sql: SQL with :named placeholders
            params: Values for the placeholders

        Returns:
            List of row dicts (empty for statements without rows)

        Raises:
            DatabaseError: If the statement fails
        """
        async with self.transaction() as tx:
            return await tx.query(sql, params)

    async def fetch_one(self, sql: str, params: Params = None) -> dict[str, Any] | None:
        """Run one statement and return its first row, or None."""
        rows = await self.query(sql, params)
        return rows[0] if rows else None

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """
        Run several statements atomically.

        Example:
            async with db.transaction() as tx:
                item = await tx.fetch_one("INSERT ... RETURNING id", {...})
                await tx.query("INSERT INTO photo_urls ...", {...})
        """
        try:
            async with self.engine.begin() as conn:
                yield Transaction(conn)
        except SQLAlchemyError as e:
            # Checkout and commit failures (e.g. deferred constraints) surface here
            raise DatabaseError.from_exception(e) from e
