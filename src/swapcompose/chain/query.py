"""Read-only contract calls over JSON-RPC.

`ChainQuery` is the seam the allowance oracle depends on. `RpcChainQuery`
issues a plain ``eth_call`` with httpx; tests substitute their own
implementation or an ``httpx.MockTransport``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from eth_utils import decode_hex

from swapcompose.errors import ChainQueryError

logger = logging.getLogger(__name__)


class ChainQuery(ABC):
    """Performs read-only calls against contracts."""

    @abstractmethod
    async def call(self, target: str, calldata: str) -> bytes:
        """
        Execute a read-only call.

        Args:
            target: Contract address
            calldata: 0x-prefixed encoded call

        Returns:
            Raw return data

        Raises:
            ChainQueryError: If the call fails for any reason
        """
        pass


class RpcChainQuery(ChainQuery):
    """`ChainQuery` backed by a JSON-RPC node (``eth_call`` at ``latest``)."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the query client.

        Args:
            rpc_url: JSON-RPC endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the node in tests)
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._transport = transport
        self._request_id = 0

    def _next_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def call(self, target: str, calldata: str) -> bytes:
        payload = {
            "jsonrpc": "2.0",
            "method": "eth_call",
            "params": [{"to": target, "data": calldata}, "latest"],
            "id": self._next_id(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.rpc_url, json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"eth_call to {target} failed: {type(e).__name__}: {e}")
            raise ChainQueryError(
                f"eth_call request failed: {e}",
                target=target,
                details={"error": type(e).__name__},
            ) from e
        except ValueError as e:
            raise ChainQueryError(
                "eth_call returned a non-JSON response", target=target
            ) from e

        if not isinstance(body, dict):
            raise ChainQueryError("eth_call returned an unexpected payload", target=target)

        if body.get("error"):
            error = body["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            logger.warning(f"eth_call to {target} returned error: {message}")
            raise ChainQueryError(
                f"eth_call returned error: {message}",
                target=target,
                details={"error": error},
            )

        result = body.get("result")
        if not isinstance(result, str) or not result.startswith("0x"):
            raise ChainQueryError(f"eth_call returned malformed result: {result!r}", target=target)

        try:
            return decode_hex(result)
        except ValueError as e:
            raise ChainQueryError(f"eth_call result is not valid hex: {result!r}", target=target) from e
