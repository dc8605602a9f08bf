"""Set-backed cache interface."""

from abc import ABC, abstractmethod


class SetCache(ABC):
    """Minimal set store: membership test and idempotent add."""

    @abstractmethod
    async def sismember(self, set_key: str, member: str) -> bool:
        """Return True if `member` is in the set stored at `set_key`."""
        pass

    @abstractmethod
    async def sadd(self, set_key: str, member: str) -> None:
        """Add `member` to the set stored at `set_key` (no-op if present)."""
        pass
