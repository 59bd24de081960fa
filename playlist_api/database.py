"""
Playlist API: Database Handle & Session Management
=====================================================

What:  Async SQLAlchemy engine, session factory, schema bootstrap and the
       FastAPI session dependency.
How:   A `Database` object owns one engine and one session factory. The
       application factory creates it once and stores it on `app.state`;
       every request borrows a session from it through `get_db_session`.
Who:   Used by route handlers via FastAPI's dependency injection system and
       by the lifespan handler for startup/shutdown.
When:  Engine is created with the app; sessions are created per-request.

Lifetime rules:
    init      create_app() builds Database(settings.database_url)
    startup   lifespan → database.create_schema()   (CREATE TABLE IF NOT EXISTS)
    requests  get_db_session → database.session()   (commit / rollback / close)
    shutdown  lifespan → database.dispose()         (closes pooled connections)

    An in-memory SQLite database only exists while a connection to it is
    open, and each new connection sees a fresh, empty store. For those URLs
    the engine uses StaticPool: exactly one connection, shared by every
    session for the whole life of the Database object. Sessions on that
    connection take an asyncio.Lock, so one request's rollback can never
    discard another request's uncommitted writes.
"""

import asyncio
import logging
from contextlib import AbstractAsyncContextManager, asynccontextmanager, nullcontext
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from playlist_api.config import Settings, is_in_memory_url, settings as default_settings
from playlist_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers its table on `Base.metadata`, which
    `Database.create_schema()` uses to create missing tables at startup.
    """
    pass


def build_engine_options(url: str, config: Settings) -> Dict[str, Any]:
    """
    Keyword arguments for `create_async_engine` appropriate to `url`.

    In-memory SQLite: StaticPool + check_same_thread=False (one connection
    reused from whichever thread the driver runs on). Everything else: a
    regular pool sized from settings.
    """
    options: Dict[str, Any] = {"echo": config.log_level == "DEBUG"}

    if is_in_memory_url(url):
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
        return options

    options["pool_pre_ping"] = config.db_pool_pre_ping
    if not url.startswith("sqlite"):
        options["pool_size"] = config.db_pool_size
        options["max_overflow"] = config.db_max_overflow
        options["pool_recycle"] = 3600
    return options


class Database:
    """
    Process-scoped handle to the storage layer.

    Attributes:
        url:             SQLAlchemy URL this handle was created for
        engine:          AsyncEngine owning the connection pool
        session_factory: async_sessionmaker producing AsyncSession instances

    Sessions and connections from an in-memory handle are serialized; a
    pooled handle hands them out concurrently.
    """

    def __init__(self, url: str, config: Settings = default_settings):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **build_engine_options(url, config))
        # expire_on_commit=False: returned ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        # One shared connection means one transaction at a time
        self._guard: AbstractAsyncContextManager = (
            asyncio.Lock() if is_in_memory_url(url) else nullcontext()
        )

    @property
    def is_in_memory(self) -> bool:
        return is_in_memory_url(self.url)

    async def create_schema(self) -> None:
        """Create the Songs and Playlists tables if they do not exist yet."""
        # Import models so their tables are registered on Base.metadata
        from playlist_api.models import playlist, song  # noqa: F401

        safe_url = self.engine.url.render_as_string(hide_password=True)
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error("Could not create schema on %s: %s", safe_url, str(e))
            raise DatabaseError(
                message="Could not initialize the database.",
                context={"url": safe_url, "original_error": type(e).__name__},
            ) from e
        logger.info("Database schema ready (%s)", safe_url)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Unit-of-work session scope.

        Commits when the block exits normally, rolls back and re-raises on
        any exception, and always closes the session (returning its
        connection to the pool). On an in-memory handle the whole scope
        holds the lock, so scopes must not be nested.
        """
        async with self._guard:
            async with self.session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
                finally:
                    await session.close()

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator[AsyncConnection, None]:
        """A raw connection, serialized with sessions like `session()`."""
        async with self._guard:
            async with self.engine.connect() as conn:
                yield conn

    async def dispose(self) -> None:
        """Close all pooled connections. For in-memory URLs this discards the data."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the Database attached to the running application
    (`request.app.state.database`). It commits after the handler returns and
    rolls back if the handler raises; storage errors are re-raised for the
    global exception handlers.

    Example usage in a route:
        @router.get("/songs")
        async def list_songs(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
