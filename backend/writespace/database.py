"""Database engine and declarative base."""
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_memory_url(database_url: str) -> bool:
    return database_url.startswith("sqlite") and (
        ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite+aiosqlite:")
    )


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for a database URL.

    In-memory SQLite is pinned to a single connection, otherwise every
    pooled connection would see its own empty database.
    """
    if is_memory_url(database_url):
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(database_url, echo=echo)
