"""Call sequence composition for router swaps.

A swap becomes an ordered list of (target, calldata, value) steps run by an
atomic multi-call executor:

    pre-calls -> approve (only if needed) -> swap

Order matters: the approval must land before the swap that consumes it.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from swapcompose.chain.abi import simple_swap_helper_interface
from swapcompose.constants import MAX_UINT256
from swapcompose.exchange.allowance import AllowanceOracle
from swapcompose.exchange.keys import is_native_token, normalize_address, parse_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallStep:
    """One call of a multi-call transaction."""

    target: str
    calldata: str
    value: str = "0"


@dataclass
class CallSequence:
    """Ordered calls plus the network fee carried alongside them."""

    steps: list[CallStep] = field(default_factory=list)
    network_fee: str = "0"

    @property
    def callees(self) -> list[str]:
        return [step.target for step in self.steps]

    @property
    def calldata(self) -> list[str]:
        return [step.calldata for step in self.steps]

    @property
    def values(self) -> list[str]:
        return [step.value for step in self.steps]

    @property
    def total_value(self) -> int:
        """Native value attached across all steps."""
        return sum(int(step.value) for step in self.steps)

    def to_dict(self) -> dict:
        """Parallel-array form consumed by multi-call executors."""
        return {
            "callees": self.callees,
            "calldata": self.calldata,
            "values": self.values,
            "networkFee": self.network_fee,
        }


class SwapRequest(BaseModel):
    """Everything needed to compose the calls of one swap."""

    src_token: str = Field(..., description="Source token address")
    src_amount: str = Field(..., description="Source amount in base units")
    dest_token: str = Field(..., description="Destination token address")
    dest_amount: str = Field(..., description="Destination amount in base units")
    swap_calldata: str = Field(..., description="Pre-encoded swap call (0x-hex)")
    swap_callee: str = Field(..., description="Contract executing the swap")
    spender: Optional[str] = Field(None, description="Spender to approve (defaults to swap_callee)")
    network_fee: str = Field(default="0", description="Extra native value for the swap call")
    pre_calls: list[CallStep] = Field(default_factory=list, description="Calls run before the swap")

    @field_validator("src_token", "dest_token", "swap_callee")
    @classmethod
    def validate_address(cls, v: str) -> str:
        normalize_address(v)
        return v

    @field_validator("spender")
    @classmethod
    def validate_spender(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            normalize_address(v)
        return v

    @field_validator("src_amount", "dest_amount", "network_fee", mode="before")
    @classmethod
    def validate_amount(cls, v) -> str:
        return str(parse_amount(v))

    @field_validator("swap_calldata")
    @classmethod
    def validate_calldata(cls, v: str) -> str:
        if not v.startswith("0x"):
            raise ValueError("swap_calldata must be 0x-prefixed hex")
        return v

    @field_validator("pre_calls")
    @classmethod
    def validate_pre_calls(cls, v: list[CallStep]) -> list[CallStep]:
        steps = []
        for step in v:
            normalize_address(step.target)
            if not step.calldata.startswith("0x"):
                raise ValueError("pre-call calldata must be 0x-prefixed hex")
            steps.append(CallStep(step.target, step.calldata, str(parse_amount(step.value))))
        return steps

    @property
    def effective_spender(self) -> str:
        return self.spender or self.swap_callee


class CallSequenceBuilder:
    """Builds approval-aware call sequences for one integration."""

    def __init__(self, oracle: AllowanceOracle, approve_target: str):
        """Initialize the builder.

        Args:
            oracle: Allowance oracle bound to this integration's cache
            approve_target: Helper contract that executes approve calls
        """
        self.oracle = oracle
        self.approve_target = normalize_address(approve_target)

    async def get_approve_steps(self, token: str, spender: str, amount: str) -> CallSequence:
        """Return the approval sub-sequence: empty, or one max-approve call."""
        if await self.oracle.has_sufficient_allowance(token, spender, amount):
            return CallSequence()

        # Unlimited approval so later swaps of the same pair skip this step
        approve_calldata = simple_swap_helper_interface.encode_function_data(
            "approve", [token, spender, MAX_UINT256]
        )
        logger.info(f"Adding approve step: {token} -> {spender}")

        return CallSequence(
            steps=[CallStep(target=self.approve_target, calldata=approve_calldata, value="0")],
        )

    async def build(self, request: SwapRequest) -> CallSequence:
        """
        Compose the calls for `request`.

        Returns:
            CallSequence of pre-calls, optional approval and the swap call

        Raises:
            AllowanceCheckError: The allowance could not be read
        """
        approve = await self.get_approve_steps(
            request.src_token,
            request.effective_spender,
            request.src_amount,
        )

        swap_value = int(request.network_fee)
        if is_native_token(request.src_token):
            swap_value += int(request.src_amount)

        swap_step = CallStep(
            target=request.swap_callee,
            calldata=request.swap_calldata,
            value=str(swap_value),
        )

        sequence = CallSequence(
            steps=[*request.pre_calls, *approve.steps, swap_step],
            network_fee=request.network_fee,
        )
        logger.debug(
            f"Built {len(sequence.steps)} call(s) for {request.src_token} -> {request.dest_token} "
            f"(approve: {bool(approve.steps)}, value: {swap_value})"
        )
        return sequence
