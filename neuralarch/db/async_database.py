# neuralarch/db/async_database.py

import os
import asyncio
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlalchemy import text
import logging

from .database import Base, get_database_url, to_async_url, redact_url
from neuralarch.middleware.error_handler import DatabaseNotConfiguredError

logger = logging.getLogger(__name__)

async_engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[async_sessionmaker] = None
ASYNC_DATABASE_URL: Optional[str] = None


def _create_engine(async_url: str) -> AsyncEngine:
    echo = os.getenv("DB_ECHO", "false").lower() == "true"

    if async_url.startswith("sqlite+aiosqlite://"):
        # SQLite: one connection per checkout, nothing shared across event loops
        return create_async_engine(async_url, echo=echo, poolclass=NullPool)

    return create_async_engine(
        async_url,
        pool_size=int(os.getenv("DB_POOL_SIZE", "20")),
        max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "30")),
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args={
            "timeout": int(os.getenv("DB_TIMEOUT", "30"))
        }
    )


def configure_database(database_url: Optional[str] = None) -> bool:
    """
    (Re)build the engine and session factory from DATABASE_URL.
    Leaves both as None when no URL is configured; nothing connects here.
    """
    global async_engine, AsyncSessionLocal, ASYNC_DATABASE_URL

    database_url = database_url or get_database_url()
    if not database_url:
        logger.warning("DATABASE_URL is not set - persistence is disabled")
        async_engine = None
        AsyncSessionLocal = None
        ASYNC_DATABASE_URL = None
        return False

    ASYNC_DATABASE_URL = to_async_url(database_url)
    async_engine = _create_engine(ASYNC_DATABASE_URL)
    # expire_on_commit=False: committed rows stay readable for serialization
    AsyncSessionLocal = async_sessionmaker(
        autoflush=False,
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    logger.info(f"Using async database: {redact_url(ASYNC_DATABASE_URL)}")
    return True


def is_configured() -> bool:
    return AsyncSessionLocal is not None


def get_session_factory() -> async_sessionmaker:
    if AsyncSessionLocal is None:
        raise DatabaseNotConfiguredError()
    return AsyncSessionLocal


# --- Dependency function for FastAPI ---
async def get_async_db():
    """
    Dependency to get an asynchronous database session.
    Raises DatabaseNotConfiguredError (503) when DATABASE_URL is unset.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables():
    """Create every table registered on Base"""
    # models must be imported so their tables are on Base.metadata
    import neuralarch.models  # noqa: F401

    if async_engine is None:
        raise DatabaseNotConfiguredError()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables():
    import neuralarch.models  # noqa: F401

    if async_engine is None:
        raise DatabaseNotConfiguredError()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# --- Health check function ---
async def check_database_health(retries: int = 1, delay: int = 1) -> bool:
    """
    Verifies database connectivity with retry logic.
    Returns False when not configured or unreachable.
    """
    if AsyncSessionLocal is None:
        return False

    for i in range(retries):
        try:
            async with AsyncSessionLocal() as session:
                await session.execute(text("SELECT 1"))
                return True
        except OperationalError as e:
            if i < retries - 1:
                logger.warning(f"Database connection attempt {i + 1} failed: {e}. Retrying in {delay} seconds...")
                await asyncio.sleep(delay)
            else:
                logger.error(f"Database connection failed after {retries} attempts: {e}")
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Unexpected error during database health check: {e}")
            return False
    return False


# --- Engine disposal function ---
async def dispose_async_engine():
    """
    Properly dispose of the async engine to free up resources.
    """
    if async_engine is None:
        return
    await async_engine.dispose()
    logger.info("Async database engine disposed successfully.")


configure_database()
