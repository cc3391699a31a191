"""Database Session Manager — lazily connected async pool with rollback and error mapping.

Invariants:
    - The engine is created on first use, never at import time
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to PersistenceError (core/errors.py)
    - A connectivity failure (refused connect or invalidated connection) disposes
      the engine; the next session reconnects. Statement errors keep the engine

Design Decisions:
    - Explicit handle passed into the ledger store instead of ambient connection state
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing only applied to server databases (SQLite uses its own pools)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from noodles.core.errors import PersistenceError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int | None = None,
        max_overflow: int | None = None,
    ):
        self.database_url = database_url
        self._engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            self._engine_kwargs["pool_recycle"] = 3600
            if pool_size is not None:
                self._engine_kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                self._engine_kwargs["max_overflow"] = max_overflow
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Engine, connecting on first access."""
        self._connect()
        return self._engine

    def _connect(self) -> async_sessionmaker[AsyncSession]:
        if self._engine is None or self._session_factory is None:
            logger.info("Creating ledger database engine")
            self._engine = create_async_engine(
                self.database_url, **self._engine_kwargs,
            )
            self._session_factory = async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_factory

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._connect()()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise PersistenceError("Integrity constraint violated", "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            if e.connection_invalidated:
                await session.close()
                await self.reset()
            raise PersistenceError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise PersistenceError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise PersistenceError("Database operation failed", "unknown")
        except OSError as e:
            # driver-level connect failures (refused, unreachable) bypass SQLAlchemy
            await session.rollback()
            logger.error(f"DB connection failed: {e}")
            await session.close()
            await self.reset()
            raise PersistenceError("Connection or operational error", "execute")
        finally:
            await session.close()

    async def reset(self) -> None:
        """Drop the current engine so the next session reconnects."""
        if self._engine is not None:
            engine, self._engine = self._engine, None
            self._session_factory = None
            await engine.dispose()
            logger.warning("Ledger database engine disposed; will reconnect on next use")

    async def close(self) -> None:
        await self.reset()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency for the persistence handle."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
