"""Approval-aware composition of swap call sequences."""

from swapcompose.exchange.allowance import AllowanceOracle, ApprovalCache
from swapcompose.exchange.builder import CallSequence, CallSequenceBuilder, CallStep, SwapRequest
from swapcompose.exchange.deadline import friendly_deadline
from swapcompose.exchange.factory import (
    create_call_sequence_builder,
    create_chain_query,
    create_set_cache,
)
from swapcompose.exchange.keys import CacheKeys, approval_key, is_native_token

__all__ = [
    # Core
    "AllowanceOracle",
    "ApprovalCache",
    "CallSequenceBuilder",
    # Types
    "CallStep",
    "CallSequence",
    "SwapRequest",
    "CacheKeys",
    # Helpers
    "approval_key",
    "is_native_token",
    "friendly_deadline",
    # Factory functions
    "create_call_sequence_builder",
    "create_chain_query",
    "create_set_cache",
]
