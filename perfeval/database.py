"""Database store: engine lifecycle, schema bootstrap and snapshots."""

import logging
import os
import sqlite3
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DatabaseError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from perfeval.exceptions import StoreError, StoreInitializationError, StoreNotInitializedError

logger = logging.getLogger(__name__)

# Range of a SQLite INTEGER column; larger values cannot be bound
SQLITE_MIN_INT = -(2**63)
SQLITE_MAX_INT = 2**63 - 1


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite leaves FK enforcement off unless enabled per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """
    Owns the SQLite engine behind the query functions.

    Must be initialized once before use; every commit is durable on disk, and
    snapshot() writes a standalone copy of the whole database to a single file.
    """

    def __init__(
        self,
        database_url: str,
        snapshot_path: Path | str | None = None,
        echo: bool = False,
    ) -> None:
        self.database_url = database_url
        self.snapshot_path = Path(snapshot_path) if snapshot_path else None
        self._echo = echo
        self._engine: AsyncEngine | None = None

    @property
    def initialized(self) -> bool:
        return self._engine is not None

    @property
    def database_path(self) -> Path | None:
        """Filesystem path of the database, None for in-memory databases."""
        database = make_url(self.database_url).database
        if not database or database == ":memory:":
            return None
        return Path(database)

    async def initialize(self) -> None:
        """Open (or create) the database file and ensure the schema exists."""
        if self._engine is not None:
            raise StoreError("Store is already initialized")

        # Registers the tables on Base.metadata
        from perfeval import models  # noqa: F401

        path = self.database_path
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)

        engine = create_async_engine(self.database_url, echo=self._echo)
        event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
        try:
            async with engine.begin() as conn:
                check = (await conn.execute(text("PRAGMA quick_check"))).scalar()
                if check != "ok":
                    raise StoreInitializationError(
                        f"Database integrity check failed: {check}"
                    )
                await conn.run_sync(Base.metadata.create_all)
        except (DatabaseError, sqlite3.Error, OSError) as exc:
            await engine.dispose()
            raise StoreInitializationError(
                f"Cannot open database {self.database_url}: {exc}"
            ) from exc
        except StoreInitializationError:
            await engine.dispose()
            raise

        self._engine = engine
        logger.info("Database initialized at %s", path or "memory")

        if self.snapshot_path is not None:
            await self.snapshot()

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreNotInitializedError()
        return self._engine

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Connection for reads; nothing is committed."""
        engine = self._require_engine()
        async with engine.connect() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Connection inside a transaction: commit on exit, rollback on error."""
        engine = self._require_engine()
        async with engine.begin() as conn:
            yield conn

    async def snapshot(self, path: Path | str | None = None) -> Path:
        """
        Write the whole database to a single file and return its path.

        The copy is built next to the target and renamed over it, so an
        existing snapshot is only replaced by a complete one.
        """
        engine = self._require_engine()
        target = Path(path) if path is not None else self.snapshot_path
        if target is None:
            raise StoreError("No snapshot path configured")

        target.parent.mkdir(parents=True, exist_ok=True)
        partial = target.with_name(target.name + ".tmp")
        partial.unlink(missing_ok=True)
        try:
            async with engine.connect() as conn:
                # VACUUM cannot run inside a transaction
                await conn.execution_options(isolation_level="AUTOCOMMIT")
                await conn.execute(text("VACUUM INTO :path"), {"path": str(partial)})
            os.replace(partial, target)
        except Exception:
            partial.unlink(missing_ok=True)
            raise

        logger.info("Database snapshot written to %s", target)
        return target

    async def close(self) -> None:
        """Refresh the configured snapshot, then release the engine."""
        if self._engine is not None:
            try:
                if self.snapshot_path is not None:
                    await self.snapshot()
            finally:
                await self._engine.dispose()
                self._engine = None


def get_store(request: Request) -> Store:
    """Dependency returning the application's store."""
    return request.app.state.store


StoreDep = Annotated[Store, Depends(get_store)]


async def get_db(store: StoreDep) -> AsyncGenerator[AsyncConnection, None]:
    """Dependency for read-only connections."""
    async with store.connection() as conn:
        yield conn
