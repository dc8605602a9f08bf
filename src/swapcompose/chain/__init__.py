"""On-chain read adapters and contract calldata helpers."""

from swapcompose.chain.abi import (
    ERC20_ABI,
    SIMPLE_SWAP_HELPER_ABI,
    ContractInterface,
    erc20_interface,
    simple_swap_helper_interface,
)
from swapcompose.chain.query import ChainQuery, RpcChainQuery

__all__ = [
    "ERC20_ABI",
    "SIMPLE_SWAP_HELPER_ABI",
    "ContractInterface",
    "erc20_interface",
    "simple_swap_helper_interface",
    "ChainQuery",
    "RpcChainQuery",
]
