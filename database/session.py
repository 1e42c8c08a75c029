"""
Async SQLAlchemy engine and session factory, owned by an explicit
``Database`` object.

The application opens one ``Database`` at startup and closes it at
shutdown; everything that needs storage receives it by injection::

    db = Database(config.database_url)
    await db.open()
    ...
    await db.close()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from database.models import Base

logger = logging.getLogger(__name__)


def mask_url(url: str) -> str:
    """Render a database URL with its password hidden."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "<unparseable database url>"


class Database:
    """Storage client with an explicit open / close lifecycle."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        connect_timeout: int = 10,
    ) -> None:
        self.url = url
        self.echo = echo
        self.connect_timeout = connect_timeout
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "echo": self.echo,
            # bound parameters include password hashes
            "hide_parameters": True,
            "connect_args": {"timeout": self.connect_timeout},
        }
        if make_url(self.url).get_backend_name() != "sqlite":
            options.update(pool_size=10, max_overflow=20, pool_recycle=3600)
        return options

    async def open(self, create_tables: bool = True) -> None:
        """Create the engine, check connectivity and (optionally) create tables.

        Raises whatever the driver raises when the database is unreachable;
        the engine is disposed again in that case.
        """
        if self._engine is not None:
            return

        engine = create_async_engine(self.url, **self._engine_options())
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if create_tables:
                    await conn.run_sync(Base.metadata.create_all)
        except BaseException:
            await engine.dispose()
            raise

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to database %s", mask_url(self.url))

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    def session(self) -> AsyncSession:
        """Return a new session; use as ``async with db.session() as s``."""
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    async def list_tables(self) -> List[str]:
        async with self.engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    @property
    def database_name(self) -> Optional[str]:
        return make_url(self.url).database
