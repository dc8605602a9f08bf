"""Set cache persisted in a SQL database through SQLAlchemy async sessions."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from swapcompose.cache.base import SetCache
from swapcompose.cache.database import get_session_factory
from swapcompose.cache.models import CacheSetMember
from swapcompose.errors import CacheBackendError

logger = logging.getLogger(__name__)


class SqlSetCache(SetCache):
    """Set cache stored as (set_key, member) rows.

    Survives process restarts and can be shared between processes pointing
    at the same database. Tables must exist (see ``init_cache_db``).
    """

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    async def sismember(self, set_key: str, member: str) -> bool:
        try:
            async with self.session_factory() as session:
                return await self._exists(session, set_key, member)
        except SQLAlchemyError as e:
            logger.warning(f"Cache lookup failed for {set_key}: {e}")
            raise CacheBackendError(f"Cache lookup failed for {set_key}: {e}") from e

    async def sadd(self, set_key: str, member: str) -> None:
        try:
            async with self.session_factory() as session:
                if await self._exists(session, set_key, member):
                    return
                session.add(CacheSetMember(set_key=set_key, member=member))
                try:
                    await session.commit()
                except IntegrityError:
                    # Concurrent writer inserted the same member first
                    await session.rollback()
                    logger.debug(f"{member} already cached in {set_key}")
                    return
        except SQLAlchemyError as e:
            logger.warning(f"Cache write failed for {set_key}: {e}")
            raise CacheBackendError(f"Cache write failed for {set_key}: {e}") from e

        logger.debug(f"Cached {member} in {set_key}")

    @staticmethod
    async def _exists(session: AsyncSession, set_key: str, member: str) -> bool:
        stmt = select(CacheSetMember.id).where(
            CacheSetMember.set_key == set_key, CacheSetMember.member == member
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
