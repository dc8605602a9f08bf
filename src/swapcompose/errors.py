"""Exception hierarchy for call composition."""

from typing import Optional


class SwapComposeError(Exception):
    """Base class for all swapcompose errors."""

    pass


class TransportError(SwapComposeError):
    """An on-chain read or cache operation failed.

    Never a negative answer: callers must not treat it as insufficient
    allowance and it is never cached.
    """

    pass


class ChainQueryError(TransportError):
    """Raised when a read-only contract call fails or cannot be decoded."""

    def __init__(self, message: str, target: str = "", details: Optional[dict] = None):
        super().__init__(message)
        self.target = target
        self.details = details or {}


class CacheBackendError(TransportError):
    """Raised when the set cache backend fails."""

    pass


class AllowanceCheckError(TransportError):
    """Raised when the allowance of a token/spender pair could not be read."""

    def __init__(self, token: str, spender: str, reason: str):
        super().__init__(f"Allowance check failed for {token} -> {spender}: {reason}")
        self.token = token
        self.spender = spender


class InvalidInputError(SwapComposeError, ValueError):
    """Raised for malformed addresses or amounts, before any I/O happens."""

    pass
