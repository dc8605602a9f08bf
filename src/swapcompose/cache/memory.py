"""Process-local set cache."""

import logging
from collections import defaultdict

from swapcompose.cache.base import SetCache

logger = logging.getLogger(__name__)


class InMemorySetCache(SetCache):
    """Dict-of-sets cache living for the lifetime of the process.

    Operations never await, so they are atomic with respect to other
    coroutines on the same event loop.
    """

    def __init__(self):
        self._sets: defaultdict[str, set[str]] = defaultdict(set)

    async def sismember(self, set_key: str, member: str) -> bool:
        members = self._sets.get(set_key)
        return members is not None and member in members

    async def sadd(self, set_key: str, member: str) -> None:
        self._sets[set_key].add(member)
        logger.debug(f"Cached {member} in {set_key}")

    def members(self, set_key: str) -> set[str]:
        """Snapshot of the members stored at `set_key`."""
        return set(self._sets.get(set_key, ()))

    def clear(self) -> None:
        """Drop every set (useful for testing)."""
        self._sets.clear()
