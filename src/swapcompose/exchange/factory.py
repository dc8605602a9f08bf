"""Factory for wiring call sequence builders from settings."""

import logging
from typing import Optional

from swapcompose.cache.base import SetCache
from swapcompose.cache.memory import InMemorySetCache
from swapcompose.chain.query import ChainQuery, RpcChainQuery
from swapcompose.config import Settings, get_settings
from swapcompose.exchange.allowance import AllowanceOracle, ApprovalCache
from swapcompose.exchange.builder import CallSequenceBuilder
from swapcompose.exchange.keys import CacheKeys

logger = logging.getLogger(__name__)

# Shared across builders so every integration in the process sees the same memo
_memory_cache: Optional[InMemorySetCache] = None


def create_set_cache(settings: Optional[Settings] = None) -> SetCache:
    """Create the cache backend selected by ``cache_backend``."""
    global _memory_cache
    settings = settings or get_settings()
    backend = settings.cache_backend.lower()

    if backend == "sql":
        from swapcompose.cache.database import get_session_factory
        from swapcompose.cache.sql import SqlSetCache
        return SqlSetCache(get_session_factory(settings))

    if backend != "memory":
        raise ValueError(f"Unknown cache backend: {settings.cache_backend}")

    if _memory_cache is None:
        _memory_cache = InMemorySetCache()
    return _memory_cache


def create_chain_query(settings: Optional[Settings] = None) -> ChainQuery:
    """Create a JSON-RPC chain query client."""
    settings = settings or get_settings()
    return RpcChainQuery(settings.rpc_url, timeout=settings.rpc_timeout)


def create_call_sequence_builder(
    integration_id: str,
    settings: Optional[Settings] = None,
    cache: Optional[SetCache] = None,
    chain_query: Optional[ChainQuery] = None,
) -> CallSequenceBuilder:
    """Create a builder for one integration on the configured network.

    Args:
        integration_id: Integration identity; scopes the approval cache
        settings: Settings to use (defaults to environment settings)
        cache: Set cache backend (defaults to the configured backend)
        chain_query: Read-only call client (defaults to JSON-RPC)
    """
    settings = settings or get_settings()
    keys = CacheKeys.for_integration(settings.cache_prefix, settings.network_id, integration_id)

    oracle = AllowanceOracle(
        cache=ApprovalCache(cache or create_set_cache(settings), keys.approves),
        chain_query=chain_query or create_chain_query(settings),
        owner_address=settings.router_address,
    )
    logger.debug(f"Created builder for {integration_id} on network {settings.network_id}")
    return CallSequenceBuilder(oracle, approve_target=settings.effective_approve_target)


def reset_memory_cache() -> None:
    """Forget the shared in-memory cache (useful for testing)."""
    global _memory_cache
    _memory_cache = None
