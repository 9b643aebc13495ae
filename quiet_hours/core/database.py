"""Async database engine, session factory and declarative base."""

import logging
import math
from typing import AsyncGenerator, Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from quiet_hours.core.config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""


def _unary(fn):
    def wrapper(value):
        return None if value is None else fn(value)

    return wrapper


def _least(*values):
    present = [value for value in values if value is not None]
    return min(present) if present else None


# name -> (number of arguments, implementation)
SQLITE_FUNCTIONS = {
    "radians": (1, _unary(math.radians)),
    "sin": (1, _unary(math.sin)),
    "cos": (1, _unary(math.cos)),
    "sqrt": (1, _unary(math.sqrt)),
    "asin": (1, _unary(math.asin)),
    "least": (-1, _least),
}


def install_sqlite_support(engine: AsyncEngine) -> None:
    """Enable foreign keys, register the distance query's math functions and
    make every transaction take the write lock up front.

    The driver would otherwise defer BEGIN to the first write, leaving a
    read-then-insert sequence (the booking overlap check) unserialized.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, _connection_record):
        # SQLAlchemy emits BEGIN itself from the "begin" hook below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        for name, (num_args, fn) in SQLITE_FUNCTIONS.items():
            dbapi_connection.create_function(name, num_args, fn)

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine_for(url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine, applying pool settings where the driver supports them."""
    settings = get_settings()

    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=settings.db_echo, **kwargs)
        install_sqlite_support(engine)
        return engine

    options = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "echo": settings.db_echo,
    }
    options.update(kwargs)
    engine = create_async_engine(url, **options)
    logger.info(
        f"Connection pool: size={settings.db_pool_size}, "
        f"max_overflow={settings.db_max_overflow}, timeout={settings.db_pool_timeout}s"
    )
    return engine


engine = create_engine_for(get_settings().database_url)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request."""
    async with AsyncSessionLocal() as session:
        yield session
