"""Set cache backends for remembered approvals."""

from swapcompose.cache.base import SetCache
from swapcompose.cache.memory import InMemorySetCache
from swapcompose.cache.sql import SqlSetCache

__all__ = ["SetCache", "InMemorySetCache", "SqlSetCache"]
