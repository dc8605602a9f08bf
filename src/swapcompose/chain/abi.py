"""Minimal ABI fragments and a small contract interface for calldata.

Only plain (non-tuple) argument types are needed here, so function
signatures are derived directly from the ABI inputs.
"""

from typing import Any, Sequence, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_utils import decode_hex, encode_hex, function_signature_to_4byte_selector
from web3 import Web3

ERC20_ABI = [
    {
        "inputs": [{"name": "owner", "type": "address"}, {"name": "spender", "type": "address"}],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "spender", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# Router-side helper: approve(token, target, amount) lets the router grant
# `target` an allowance over its own `token` balance.
SIMPLE_SWAP_HELPER_ABI = [
    {
        "inputs": [
            {"name": "token", "type": "address"},
            {"name": "target", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


class ContractInterface:
    """Encodes calls to, and decodes results from, functions of one ABI."""

    def __init__(self, abi: Sequence[dict]):
        self._functions: dict[str, dict] = {
            item["name"]: item for item in abi if item.get("type") == "function"
        }

    def _get_function(self, name: str) -> dict:
        try:
            return self._functions[name]
        except KeyError:
            raise ValueError(f"Function not found in ABI: {name}") from None

    @staticmethod
    def _types(params: Sequence[dict]) -> list[str]:
        return [param["type"] for param in params]

    def signature(self, name: str) -> str:
        """Canonical signature, e.g. ``allowance(address,address)``."""
        fn = self._get_function(name)
        return f"{name}({','.join(self._types(fn['inputs']))})"

    def selector(self, name: str) -> str:
        """4-byte function selector as 0x-hex."""
        return encode_hex(function_signature_to_4byte_selector(self.signature(name)))

    def encode_function_data(self, name: str, args: Sequence[Any]) -> str:
        """Encode a call to `name` with `args` as 0x-prefixed calldata."""
        fn = self._get_function(name)
        input_types = self._types(fn["inputs"])
        if len(input_types) != len(args):
            raise ValueError(
                f"{name} expects {len(input_types)} argument(s), got {len(args)}"
            )

        values = [
            Web3.to_checksum_address(arg) if abi_type == "address" else arg
            for abi_type, arg in zip(input_types, args)
        ]
        selector = function_signature_to_4byte_selector(self.signature(name))
        return encode_hex(selector + abi_encode(input_types, values))

    def decode_function_result(self, name: str, data: Union[bytes, str]) -> tuple:
        """Decode the return data of `name`."""
        fn = self._get_function(name)
        raw = decode_hex(data) if isinstance(data, str) else data
        return tuple(abi_decode(self._types(fn["outputs"]), raw))


erc20_interface = ContractInterface(ERC20_ABI)
simple_swap_helper_interface = ContractInterface(SIMPLE_SWAP_HELPER_ABI)
