"""Pytest configuration and fixtures."""

import asyncio
import os
from typing import Optional

import pytest
from eth_abi import encode as abi_encode

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["DEBUG"] = "false"

from swapcompose.cache.memory import InMemorySetCache
from swapcompose.chain.query import ChainQuery
from swapcompose.config import Settings
from swapcompose.errors import ChainQueryError
from swapcompose.exchange.allowance import AllowanceOracle, ApprovalCache
from swapcompose.exchange.builder import CallSequenceBuilder
from swapcompose.exchange.keys import CacheKeys

ROUTER = "0xDEF171Fe48CF0115B1d80b88dc8eAB59176FEe57"
HELPER = "0x216B4B4Ba9F3e719726886d34a177484278Bfcae"
TOKEN = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"  # USDC
OTHER_TOKEN = "0xdAC17F958D2ee523a2206206994597C13D831ec7"  # USDT
SPENDER = "0xE592427A0AEce92De3Edee1F18E0157C05861564"
NATIVE = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
INTEGRATION = "TestDex"


class FakeChainQuery(ChainQuery):
    """Serves allowance results from a dict and records every call."""

    def __init__(self, allowances: Optional[dict[str, int]] = None):
        self.allowances: dict[str, int] = {
            k.lower(): v for k, v in (allowances or {}).items()
        }
        self.calls: list[tuple[str, str]] = []
        self.error: Optional[BaseException] = None
        self.raw_result: Optional[bytes] = None

    def set_allowance(self, token: str, value: int) -> None:
        self.allowances[token.lower()] = value

    async def call(self, target: str, calldata: str) -> bytes:
        self.calls.append((target, calldata))
        # Yield so concurrent callers interleave like real I/O
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        if self.raw_result is not None:
            return self.raw_result
        return abi_encode(["uint256"], [self.allowances.get(target.lower(), 0)])


def fail_with(message: str = "node unavailable") -> ChainQueryError:
    return ChainQueryError(message, target=TOKEN)


@pytest.fixture
def settings() -> Settings:
    """Settings for a test network and router."""
    return Settings(
        _env_file=None,
        network_id=1,
        router_address=ROUTER,
        approve_target_address=HELPER,
        cache_prefix="swapcompose",
    )


@pytest.fixture
def cache_keys() -> CacheKeys:
    return CacheKeys.for_integration("swapcompose", 1, INTEGRATION)


@pytest.fixture
def memory_cache() -> InMemorySetCache:
    return InMemorySetCache()


@pytest.fixture
def chain_query() -> FakeChainQuery:
    return FakeChainQuery()


@pytest.fixture
def oracle(memory_cache, chain_query, cache_keys) -> AllowanceOracle:
    """Allowance oracle over an in-memory cache and a fake chain."""
    return AllowanceOracle(
        cache=ApprovalCache(memory_cache, cache_keys.approves),
        chain_query=chain_query,
        owner_address=ROUTER,
    )


@pytest.fixture
def builder(oracle) -> CallSequenceBuilder:
    return CallSequenceBuilder(oracle, approve_target=HELPER)
