"""Router call parameters for executing a trade.

Turns a Trade into the method name and arguments of the V2 router02
swap functions, applying the caller's slippage tolerance and deadline.
Amounts and the deadline are 0x-prefixed hex strings, as JSON-RPC
clients expect; encode() produces the ABI calldata directly.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import structlog
from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from pairswap.constants import TradeType
from pairswap.deployments import get_router_address
from pairswap.entities.fractions.fraction import Fraction
from pairswap.entities.trade import Trade
from pairswap.errors import DeploymentUnavailableError, InvalidSlippageError
from pairswap.models.types import validate_and_parse_address

logger = structlog.get_logger()

ZERO_HEX = "0x0"

SWAP_EXACT_TOKENS_FOR_TOKENS = "swapExactTokensForTokens"
SWAP_EXACT_TOKENS_FOR_TOKENS_FEE_ON_TRANSFER = (
    "swapExactTokensForTokensSupportingFeeOnTransferTokens"
)
SWAP_TOKENS_FOR_EXACT_TOKENS = "swapTokensForExactTokens"

# All three swap functions share one argument list
SWAP_ARG_TYPES = ("uint256", "uint256", "address[]", "address", "uint256")


def to_hex(value: int) -> str:
    return hex(value)


@dataclass(frozen=True)
class TradeOptions:
    """Execution options for a swap.

    Exactly one of ttl and deadline must be given.

    Attributes:
        allowed_slippage: Non-negative tolerance applied to the trade's free side
        recipient: Address receiving the output tokens
        ttl: Seconds from now until the swap expires
        deadline: Absolute unix timestamp at which the swap expires
        fee_on_transfer: Use the variant that supports fee-on-transfer tokens
    """

    allowed_slippage: Fraction
    recipient: str
    ttl: int | None = None
    deadline: int | None = None
    fee_on_transfer: bool = False

    def __post_init__(self) -> None:
        if self.allowed_slippage.less_than(0):
            raise InvalidSlippageError(
                f"allowed_slippage is negative: {self.allowed_slippage!r}"
            )
        if (self.ttl is None) == (self.deadline is None):
            raise ValueError("Exactly one of ttl and deadline must be set")
        if self.ttl is not None and self.ttl <= 0:
            raise ValueError(f"ttl must be positive, got {self.ttl}")
        if self.deadline is not None and self.deadline < 0:
            raise ValueError(f"deadline cannot be negative, got {self.deadline}")
        object.__setattr__(self, "recipient", validate_and_parse_address(self.recipient))

    def resolve_deadline(self) -> int:
        if self.deadline is not None:
            return self.deadline
        return int(time.time()) + self.ttl  # type: ignore[operator]


@dataclass(frozen=True)
class SwapParameters:
    """A router method call.

    Attributes:
        method_name: Router function to call
        args: (amount, amount limit, path, recipient, deadline); amounts and
            deadline as hex strings
        value: Ether to send with the call, as a hex string
    """

    method_name: str
    args: tuple[str, str, tuple[str, ...], str, str]
    value: str = ZERO_HEX

    @property
    def signature(self) -> str:
        return f"{self.method_name}({','.join(SWAP_ARG_TYPES)})"

    @property
    def selector(self) -> str:
        """0x-prefixed 4-byte function selector."""
        return "0x" + keccak(text=self.signature)[:4].hex()

    def encode(self) -> str:
        """ABI-encode the call as 0x-prefixed calldata."""
        amount, amount_limit, path, recipient, deadline = self.args
        encoded_args = encode(
            list(SWAP_ARG_TYPES),
            [
                int(amount, 16),
                int(amount_limit, 16),
                [bytes.fromhex(address[2:]) for address in path],
                bytes.fromhex(recipient[2:]),
                int(deadline, 16),
            ],
        )
        return self.selector + encoded_args.hex()


class Router:
    """Builds router02 calls for token-to-token trades."""

    @staticmethod
    def swap_call_parameters(trade: Trade, options: TradeOptions) -> SwapParameters:
        """Produce the router call executing a trade.

        Exact-input trades fix the input and bound the output from below;
        exact-output trades fix the output and bound the input from above.

        Raises:
            ValueError: If fee_on_transfer is requested for an exact-output trade
        """
        amount_in = to_hex(trade.maximum_amount_in(options.allowed_slippage).raw)
        amount_out = to_hex(trade.minimum_amount_out(options.allowed_slippage).raw)
        path = tuple(token.address for token in trade.route.path)
        deadline = to_hex(options.resolve_deadline())

        if trade.trade_type == TradeType.EXACT_INPUT:
            method_name = (
                SWAP_EXACT_TOKENS_FOR_TOKENS_FEE_ON_TRANSFER
                if options.fee_on_transfer
                else SWAP_EXACT_TOKENS_FOR_TOKENS
            )
            args = (amount_in, amount_out, path, options.recipient, deadline)
        else:
            if options.fee_on_transfer:
                raise ValueError("Fee-on-transfer swaps cannot fix the output amount")
            method_name = SWAP_TOKENS_FOR_EXACT_TOKENS
            args = (amount_out, amount_in, path, options.recipient, deadline)

        logger.debug(
            "swap_call_parameters_built",
            method=method_name,
            hops=len(trade.route),
            deadline=deadline,
        )
        return SwapParameters(method_name=method_name, args=args, value=ZERO_HEX)

    @staticmethod
    def router_address(trade: Trade) -> str:
        """Router contract able to execute a trade.

        Raises:
            ValueError: If the route mixes liquidity providers
            DeploymentUnavailableError: If the provider has no router on the chain
        """
        providers = {pair.provider for pair in trade.route.pairs}
        if len(providers) != 1:
            raise ValueError(
                f"Route mixes providers {sorted(p.name for p in providers)}; no single router"
            )
        provider = providers.pop()
        address = get_router_address(trade.route.chain_id, provider)
        if address is None:
            raise DeploymentUnavailableError(
                f"No {provider.name} router on chain {trade.route.chain_id}"
            )
        return address


__all__ = [
    "Router",
    "SwapParameters",
    "TradeOptions",
    "SWAP_EXACT_TOKENS_FOR_TOKENS",
    "SWAP_EXACT_TOKENS_FOR_TOKENS_FEE_ON_TRANSFER",
    "SWAP_TOKENS_FOR_EXACT_TOKENS",
    "ZERO_HEX",
]
