"""Database access for the fact ledger: async engine, sessions, error mapping.

Features:
- SQLAlchemy asyncio engine (aiosqlite by default, asyncpg for PostgreSQL)
- Foreign keys enforced on SQLite connections
- Insert-ignore helper so idempotent writes never surface unique conflicts
- Session scopes that translate driver failures into ledger errors

Each write operation runs in its own session with one enclosing transaction,
so a failure at any step leaves nothing behind. No state is shared across
requests beyond the connection pool.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from loguru import logger
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ledger_system.config.settings import settings
from ledger_system.data_management.errors import (
    DanglingReferenceError,
    StorageUnavailableError,
)
from ledger_system.data_management.orm import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


class Database:
    """
    Engine and session factory for the relational store.

    Usage:
        db = Database("sqlite+aiosqlite:///:memory:")
        await db.create_all()
        async with db.session(write=True) as session:
            ...
        await db.dispose()
    """

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        """
        Initialize the engine.

        Args:
            url: SQLAlchemy async URL. Defaults to settings.database_url.
            echo: Echo SQL. Defaults to settings.database_echo.
        """
        self.url = url or settings.database_url
        engine_kwargs = {
            "echo": settings.database_echo if echo is None else echo,
        }
        if _is_memory_sqlite(self.url):
            # One shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        self.dialect_name = self.engine.dialect.name

        if self.dialect_name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self._sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
        self.logger = logger.bind(component="Database")
        self.logger.info("Database engine created", dialect=self.dialect_name)

    async def create_all(self) -> None:
        """Create every ledger table that does not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OperationalError, InterfaceError) as e:
            self.logger.error(f"Schema creation failed: {e}")
            raise StorageUnavailableError(str(e)) from e
        self.logger.info("Schema ready")

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self, write: bool = False) -> AsyncIterator[AsyncSession]:
        """
        Open a session, optionally inside one transaction.

        Args:
            write: Wrap the block in a transaction committed on success and
                rolled back on any exception.

        Raises:
            DanglingReferenceError: A foreign-key constraint rejected a write.
            StorageUnavailableError: The store could not be reached.
        """
        try:
            async with self._sessionmaker() as session:
                if write:
                    async with session.begin():
                        yield session
                else:
                    yield session
        except IntegrityError as e:
            self.logger.warning(f"Integrity violation: {e.orig}")
            raise DanglingReferenceError(str(e.orig)) from e
        except (OperationalError, InterfaceError) as e:
            self.logger.error(f"Storage unavailable: {e}")
            raise StorageUnavailableError(str(e)) from e

    def insert_ignore(self, model):
        """
        Build an INSERT that silently skips unique-constraint conflicts.

        Foreign-key violations are not conflicts and still raise.

        Args:
            model: ORM class to insert into.
        """
        if self.dialect_name == "postgresql":
            return pg_insert(model).on_conflict_do_nothing()
        if self.dialect_name == "sqlite":
            return sqlite_insert(model).on_conflict_do_nothing()
        raise NotImplementedError(f"Unsupported dialect: {self.dialect_name}")
