"""Database configuration module.

The storage client is an explicit object: the application builds one
``SalesStore`` at startup, hands it to request handlers through a
dependency, and disposes it at shutdown.
"""
from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SalesStore:
    """Owns the async engine and the session factory used for reads."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SalesStore":
        return cls(create_async_engine(database_url, echo=echo))

    def session(self) -> AsyncSession:
        """Open a new session. Use as ``async with store.session() as s``."""
        return self.session_factory()

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @property
    def cache_key(self) -> str:
        """Database URL without the password; identifies cached reads."""
        return self.engine.url.render_as_string(hide_password=True)

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_store(request: Request) -> SalesStore:
    """Dependency returning the store created by the application lifespan."""
    return request.app.state.store
