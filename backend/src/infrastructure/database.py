import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    def __init__(self, database_url: str, echo: bool = False):
        url = make_url(database_url)
        engine_options = {}
        if url.get_backend_name() != "sqlite":
            engine_options.update(pool_size=30, max_overflow=10, pool_recycle=3600)
        self.engine = create_async_engine(url, future=True, echo=echo, **engine_options)
        self.async_session_maker = async_sessionmaker(
            self.engine, expire_on_commit=False, class_=AsyncSession
        )
        # never include the password
        self._connection_repr: str = url.render_as_string(hide_password=True)

    async def check_connection(self):
        try:
            async with self.engine.connect() as connection:
                result = await connection.execute(text("SELECT 1"))
                if result.scalar() == 1:
                    logger.info(f"Database connection successful {self._connection_repr}")
                else:
                    logger.error(f"Database connection check failed {self._connection_repr}.")
        except Exception as e:
            logger.error(f"Database connection error {self._connection_repr}: {e}")
            raise

    async def create_tables(self):
        # registers the mapped tables on Base.metadata
        from app.orm import contact, user, waitlist  # noqa: F401

        async with self.engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.async_session_maker() as session:
            yield session

    async def dispose(self):
        await self.engine.dispose()
        logger.info("Database connection closed")
