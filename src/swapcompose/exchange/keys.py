"""Address normalization, amount parsing and cache key derivation."""

from dataclasses import dataclass
from typing import Union

from eth_utils import is_hex_address

from swapcompose.constants import NATIVE_TOKEN
from swapcompose.errors import InvalidInputError


def normalize_address(address: str) -> str:
    """Validate an EVM address and lower-case it.

    Checksums are not enforced; addresses compare case-insensitively.
    Surrounding whitespace is rejected, not stripped.
    """
    if not isinstance(address, str):
        raise InvalidInputError(f"Invalid EVM address: {address!r}")
    if address != address.strip() or not address.startswith("0x") or not is_hex_address(address):
        raise InvalidInputError(f"Invalid EVM address: {address!r}")
    return address.lower()


def is_native_token(address: str) -> bool:
    """Check whether `address` is the native asset placeholder."""
    return isinstance(address, str) and address.strip().lower() == NATIVE_TOKEN.lower()


def parse_amount(amount: Union[str, int]) -> int:
    """Parse a non-negative integer amount given as a decimal string."""
    if isinstance(amount, bool):
        raise InvalidInputError(f"Invalid amount: {amount!r}")
    if isinstance(amount, int):
        if amount < 0:
            raise InvalidInputError(f"Amount must be non-negative: {amount}")
        return amount
    if isinstance(amount, str) and amount.strip().isdigit() and amount.strip().isascii():
        return int(amount.strip())
    raise InvalidInputError(f"Amount must be a non-negative integer string: {amount!r}")


def approval_key(token: str, spender: str) -> str:
    """Cache element identifying one approval fact: ``{token}_{spender}``."""
    return f"{normalize_address(token)}_{normalize_address(spender)}"


@dataclass(frozen=True)
class CacheKeys:
    """Cache namespaces owned by one integration on one network."""

    approves: str
    states: str
    pool_configs: str

    @classmethod
    def for_integration(cls, prefix: str, network_id: int, integration_id: str) -> "CacheKeys":
        base = f"{prefix}_{network_id}_{integration_id}".lower()
        return cls(
            approves=f"{base}_approves",
            states=f"{base}_states",
            pool_configs=f"{base}_poolconfigs",
        )
