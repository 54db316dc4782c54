"""
CampusHub Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       FastAPI session dependency.
Why:   Centralizes all database connection logic in one place.
How:   One engine per process with connection pooling; one session (and one
       transaction) per request, committed on success and rolled back on error.

The store is the only place uniqueness and session state are serialized.
Several server processes may sit in front of the same database, so nothing
here relies on in-process locks.
"""

import logging
from contextlib import contextmanager
from typing import Any, AsyncGenerator, Dict, Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from campushub.config import settings
from campushub.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """
    Pool options only apply to server databases; SQLite uses its own pools.

    Bound parameters are never rendered into logs or exception text: they
    carry password hashes and session token digests.
    """
    options: Dict[str, Any] = {
        "echo": settings.log_level == "DEBUG",
        "hide_parameters": True,
    }
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


def build_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, **_engine_options(url))


engine = build_engine(settings.database_url)

# expire_on_commit=False: objects stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives Alembic."""
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    On success the transaction is committed; on any error it is rolled back
    and the exception propagates to the global handlers. Nothing is retried.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@contextmanager
def store_guard(operation: str) -> Iterator[None]:
    """
    Translate driver/connection failures into StoreUnavailableError.

    IntegrityError is left alone: callers that depend on a unique constraint
    catch it themselves.
    """
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        logger.error("Store failure during %s: %s", operation, type(e).__name__)
        raise StoreUnavailableError(context={"operation": operation, "error_type": type(e).__name__})


async def create_all() -> None:
    """Create every table known to Base.metadata (development convenience)."""
    import campushub.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def dispose_engine() -> None:
    """Close all pooled connections during application shutdown."""
    await engine.dispose()
