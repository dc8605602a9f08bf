"""Local deadline placeholder.

The router enforces a global deadline, but some integrations still take a
deadline argument. A bounded offset keeps calldata cheaper than passing
``type(uint256).max`` while rarely expiring before the router's own check.
"""

import time

from swapcompose.constants import FRIENDLY_LOCAL_DEADLINE


def friendly_deadline() -> str:
    """Current unix time plus seven days, as a decimal string."""
    return str(int(time.time()) + FRIENDLY_LOCAL_DEADLINE)
