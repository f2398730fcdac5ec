"""
Database connection and session management for SQLAlchemy 2.0.
The content tables live in the hosted Supabase PostgreSQL project; without a
DATABASE_URL the app runs on a throwaway in-memory SQLite database.
"""
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy import text
from urllib.parse import urlparse
import logging
import socket

from app.config import settings

logger = logging.getLogger(__name__)

FALLBACK_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
POSTGRES_SCHEMES = ("postgresql://", "postgresql+asyncpg://")

Base = declarative_base()


def build_engine(url: str) -> AsyncEngine:
    """Async engine for url; the connection pool is tuned only for PostgreSQL."""
    if not url:
        logger.warning(
            "DATABASE_URL is not set. Falling back to an in-memory database; "
            "content will not be persisted to the backend project."
        )
        return create_async_engine(FALLBACK_DATABASE_URL, echo=False)

    if not url.startswith("postgresql"):
        return create_async_engine(url, echo=False)

    return create_async_engine(
        url,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args={"server_settings": {"application_name": "slowwwy-cms"}},
    )


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:
    """
    FastAPI dependency for database sessions.
    Commits on success and rolls back if the request handler raised.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {str(e)}")
            raise
        finally:
            await session.close()


def describe_database_url(url: str) -> str:
    """
    Human readable summary of a PostgreSQL URL for startup logs,
    including whether its hostname resolves.

    Raises:
        ValueError: if the URL is empty, not PostgreSQL or has no hostname
    """
    if not url:
        raise ValueError("DATABASE_URL is empty")
    if not url.startswith(POSTGRES_SCHEMES):
        raise ValueError(f"expected a postgresql+asyncpg:// URL, got scheme '{urlparse(url).scheme}'")

    parsed = urlparse(url)
    if not parsed.hostname:
        raise ValueError("no hostname found in DATABASE_URL")

    try:
        socket.getaddrinfo(parsed.hostname, None)
        dns = "resolves"
    except socket.gaierror as e:
        dns = f"does not resolve ({str(e)})"

    return f"host {parsed.hostname}:{parsed.port or 5432} {dns}, database {parsed.path or '/postgres'}"


async def init_db():
    """
    Verify the backend connection with SELECT 1.
    Used by the startup event, which logs failures instead of exiting.
    """
    if not settings.DATABASE_URL:
        logger.warning("DATABASE_URL not set, skipping database initialization")
        return

    try:
        diagnostic = describe_database_url(settings.DATABASE_URL)
    except ValueError as e:
        logger.error(f"Invalid DATABASE_URL: {str(e)}")
        raise

    logger.info(f"Connecting to backend database: {diagnostic}")
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        hint = ""
        if "authentication failed" in str(e).lower():
            hint = " Check the username and password in DATABASE_URL."
        logger.error(f"Database connection failed ({type(e).__name__}): {str(e)}.{hint} [{diagnostic}]")
        raise

    logger.info("Database connection initialized successfully")


async def create_tables():
    """Create all content tables. Used for local development without migrations."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Content tables created")


async def close_db():
    """Dispose of the engine's connection pool."""
    await engine.dispose()
    logger.info("Database connections closed")
