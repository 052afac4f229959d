# app/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

from app.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    APP_ENV,
)

Base = declarative_base()


def _postgres_options() -> tuple[dict, dict]:
    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        # Supabase pooler certificate is not verifiable from every host
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    connect_args = {
        "ssl": ssl_ctx,
        # transaction-mode pgbouncer has no prepared statements
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
    }
    pool_args = {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }
    return connect_args, pool_args


def _sqlite_options() -> tuple[dict, dict]:
    return {"check_same_thread": False}, {"poolclass": NullPool}


_connect_args, _pool_args = (
    _postgres_options() if DB_TYPE == "postgres" else _sqlite_options()
)

engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    connect_args=_connect_args,
    **_pool_args,
)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


if DB_TYPE == "sqlite":
    # SQLite ignores foreign keys unless asked per connection
    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_foreign_keys(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request. Uncommitted work is rolled back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# registers every table on Base.metadata
import app.models  # noqa: E402,F401


async def init_models(drop_existing: bool = False):
    """Create all tables. Development and tests only."""
    if APP_ENV != "development":
        raise RuntimeError("init_models() is only allowed in development")

    async with engine.begin() as conn:
        if drop_existing:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine():
    await engine.dispose()
