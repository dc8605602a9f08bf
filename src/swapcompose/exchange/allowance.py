"""Approval cache and allowance oracle.

Approvals are granted for the maximum amount, so once a (token, spender)
pair has been seen with enough allowance it is remembered and never read
on-chain again. Entries are never invalidated: an external revocation stays
invisible until the swap itself fails on-chain.
"""

import logging
from typing import Union

from eth_abi.exceptions import DecodingError

from swapcompose.cache.base import SetCache
from swapcompose.chain.abi import erc20_interface
from swapcompose.chain.query import ChainQuery
from swapcompose.errors import AllowanceCheckError, ChainQueryError
from swapcompose.exchange.keys import approval_key, is_native_token, normalize_address, parse_amount

logger = logging.getLogger(__name__)


class ApprovalCache:
    """Remembers (token, spender) pairs known to hold sufficient approval.

    Binds a `SetCache` to one set key, normally ``CacheKeys.approves`` of an
    integration.
    """

    def __init__(self, backend: SetCache, set_key: str):
        self.backend = backend
        self.set_key = set_key.lower()

    async def contains(self, token: str, spender: str) -> bool:
        return await self.backend.sismember(self.set_key, approval_key(token, spender))

    async def add(self, token: str, spender: str) -> None:
        await self.backend.sadd(self.set_key, approval_key(token, spender))


class AllowanceOracle:
    """Answers whether `spender` may move `amount` of `token` for the owner.

    Issues at most one on-chain read per unseen pair; sufficient results are
    cached, insufficient ones are not so a later call can see a raised
    allowance.
    """

    def __init__(self, cache: ApprovalCache, chain_query: ChainQuery, owner_address: str):
        """Initialize the oracle.

        Args:
            cache: Approval cache for this network and integration
            chain_query: Read-only call client
            owner_address: Address whose allowances are read (the router)
        """
        self.cache = cache
        self.chain_query = chain_query
        self.owner_address = normalize_address(owner_address)

    async def has_sufficient_allowance(
        self,
        token: str,
        spender: str,
        amount: Union[str, int],
    ) -> bool:
        """
        Check whether the owner has approved at least `amount` to `spender`.

        Args:
            token: Token address (native placeholder always passes)
            spender: Address that will pull the tokens
            amount: Required amount in token base units

        Returns:
            True if allowance is sufficient

        Raises:
            InvalidInputError: Malformed address or amount (before any I/O)
            AllowanceCheckError: The on-chain read failed
            CacheBackendError: The cache backend failed
        """
        if is_native_token(token):
            return True

        required = parse_amount(amount)
        normalize_address(token)
        normalize_address(spender)

        if await self.cache.contains(token, spender):
            logger.debug(f"Approval cache hit: {token} -> {spender}")
            return True

        allowance = await self.get_allowance(token, spender)
        is_approved = allowance >= required

        if is_approved:
            await self.cache.add(token, spender)
            logger.info(f"Allowance sufficient for {token} -> {spender}: {allowance} >= {required}")
        else:
            logger.info(f"Allowance insufficient for {token} -> {spender}: {allowance} < {required}")

        return is_approved

    async def get_allowance(self, token: str, spender: str) -> int:
        """Read the owner's current allowance for `spender` over `token`."""
        calldata = erc20_interface.encode_function_data(
            "allowance", [self.owner_address, normalize_address(spender)]
        )

        try:
            raw = await self.chain_query.call(normalize_address(token), calldata)
        except ChainQueryError as e:
            logger.warning(f"Allowance read failed for {token} -> {spender}: {e}")
            raise AllowanceCheckError(token, spender, str(e)) from e

        try:
            (allowance,) = erc20_interface.decode_function_result("allowance", raw)
        except (DecodingError, ValueError) as e:
            logger.warning(f"Allowance decode failed for {token} -> {spender}: {e}")
            raise AllowanceCheckError(token, spender, f"undecodable result: {e}") from e

        return int(allowance)
