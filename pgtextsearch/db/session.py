from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ..config import Settings, settings as default_settings


class Base(DeclarativeBase):
    pass


class Database:
    """Движок и фабрика сессий. Открывается при старте, закрывается через dispose()."""

    def __init__(self, settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None) -> None:
        self.settings = settings or default_settings
        self.engine = engine or create_async_engine(self.settings.db_url, echo=self.settings.db_echo, future=True)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def init_models(self) -> None:
        # Import models to register metadata
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
