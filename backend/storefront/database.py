"""
Storefront Backend — Database Connection Management
=====================================================

What:  Async SQLAlchemy engine and session factory owned by a `Database` object.
How:   The FastAPI lifespan builds one `Database`, connects it (engine + a
       SELECT 1 round trip) before the app serves requests and disposes it on
       shutdown. Services receive the `Database` at construction time and open
       their own sessions from it.
Who:   storefront.main (lifespan), storefront.dependencies, services, tests.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs (tests, local experiments) skip the sizing arguments; the
    SQLite pools do not accept them.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from storefront.config import Settings
from storefront.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object used by Alembic and by `create_all`
    when DB_CREATE_TABLES is enabled.
    """
    pass


class Database:
    """
    Connection-scoped database handle.

    Lifecycle:
        db = Database(url)        # nothing opened yet
        await db.connect()        # engine created, SELECT 1 must succeed
        async with db.session() as session: ...
        await db.dispose()        # pooled connections closed

    Calling `session()` before `connect()` (or after `dispose()`) raises
    RuntimeError.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._pool_pre_ping = pool_pre_ping
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Builds a Database from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._engine

    def _engine_options(self) -> dict:
        options = {
            "pool_pre_ping": self._pool_pre_ping,
            "echo": self._echo,
        }
        if not self.is_sqlite:
            options.update(
                pool_size=self._pool_size,
                max_overflow=self._max_overflow,
                pool_recycle=3600,
            )
        return options

    async def connect(self, create_tables: bool = False) -> None:
        """
        Create the engine and verify the database answers.

        What:    Startup step; must finish before any request is handled.
        How:     Creates the async engine and session factory, runs SELECT 1,
                 and optionally creates missing tables from the ORM metadata.

        Raises:
            DatabaseError: The database could not be reached. The engine is
                           disposed before raising.
        """
        if self._engine is not None:
            return

        engine = create_async_engine(self.url, **self._engine_options())
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if create_tables:
                    # Import registers every model with Base.metadata
                    import storefront.models  # noqa: F401

                    await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            await engine.dispose()
            logger.error("Could not connect to database: %s", str(e))
            raise DatabaseError(
                message="Could not connect to the database.",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        self._engine = engine
        # expire_on_commit=False: ORM objects stay readable after commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to database (%s)", engine.url.render_as_string(hide_password=True))

    def session(self) -> AsyncSession:
        """
        Open a new AsyncSession.

        Usage:
            async with database.session() as session:
                async with session.begin():
                    ...
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._session_factory()

    async def ping(self) -> bool:
        """Lightweight connectivity check used by GET /health."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connections closed")
