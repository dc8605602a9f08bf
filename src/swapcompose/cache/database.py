"""Engine and session management for the sql cache backend.

Engines are kept per database URL, so settings objects pointing at
different databases never share connections.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from swapcompose.cache.models import Base
from swapcompose.config import Settings, get_settings

_engines: dict[str, AsyncEngine] = {}
_session_factories: dict[str, async_sessionmaker[AsyncSession]] = {}


def normalize_database_url(db_url: str) -> str:
    """Use the aiosqlite driver for plain sqlite URLs."""
    if db_url.startswith("sqlite:///") and "aiosqlite" not in db_url:
        return "sqlite+aiosqlite:///" + db_url[len("sqlite:///"):]
    return db_url


def get_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Return the engine for ``settings.cache_database_url``, creating it once."""
    settings = settings or get_settings()
    url = normalize_database_url(settings.cache_database_url)
    engine = _engines.get(url)
    if engine is None:
        engine = create_async_engine(url, echo=settings.debug and not settings.is_production)
        _engines[url] = engine
    return engine


def get_session_factory(settings: Optional[Settings] = None) -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the engine for ``settings``."""
    settings = settings or get_settings()
    url = normalize_database_url(settings.cache_database_url)
    factory = _session_factories.get(url)
    if factory is None:
        factory = async_sessionmaker(
            bind=get_engine(settings),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        _session_factories[url] = factory
    return factory


async def init_cache_db(engine: Optional[AsyncEngine] = None) -> None:
    """Create the cache tables."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_cache_db() -> None:
    """Dispose every engine created here."""
    engines = list(_engines.values())
    _engines.clear()
    _session_factories.clear()
    for engine in engines:
        await engine.dispose()
