"""Shared constants."""

# Placeholder address used by aggregators for the chain's native asset
NATIVE_TOKEN = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

MAX_UINT256 = 2**256 - 1

DEFAULT_CACHE_PREFIX = "swapcompose"

# Local deadline offset for calls that need one; the router enforces the real one
FRIENDLY_LOCAL_DEADLINE = 7 * 24 * 60 * 60
