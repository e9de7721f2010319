from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from config import settings


def _get_engine_kwargs(database_url: str, echo: bool) -> dict:
    """Return dialect-specific engine options for SQLite vs server databases."""
    kwargs = {"echo": echo}
    if database_url.split(":")[0].lower().startswith("sqlite"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, **_get_engine_kwargs(database_url, echo))


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = build_engine(settings.database_url, echo=settings.debug)

AsyncSessionLocal = build_sessionmaker(engine)


class Base(DeclarativeBase):
    pass


async def init_db(bind: AsyncEngine = engine) -> None:
    # Table classes must be registered on Base.metadata before create_all.
    import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
