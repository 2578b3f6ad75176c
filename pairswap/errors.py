"""Error classes for pair pricing and routing.

Every error derives from PairswapError. Caller-input errors also derive
from ValueError so they can be handled alongside ordinary validation
failures.
"""


class PairswapError(Exception):
    """Base error for pairswap operations."""

    pass


class ChainMismatchError(PairswapError, ValueError):
    """Operands from different chains were combined."""

    pass


class CurrencyMismatchError(PairswapError, ValueError):
    """Amounts or prices denominated in different tokens were combined."""

    pass


class InsufficientReservesError(PairswapError):
    """A pair has zero or exhausted liquidity for the requested direction.

    Raised by exact-output quotes when the requested output is not below
    the output reserve, and by any quote against an empty reserve.
    """

    pass


class InsufficientInputAmountError(PairswapError):
    """Input amount is zero, or too small to produce any output."""

    pass


class InsufficientOutputAmountError(PairswapError):
    """Requested output amount is zero."""

    pass


class InvalidRouteError(PairswapError, ValueError):
    """Pairs do not form a contiguous chain between the route tokens."""

    pass


class TokenNotInPairError(InvalidRouteError):
    """A token was quoted against a pair that does not hold it."""

    pass


class InvalidSlippageError(PairswapError, ValueError):
    """Slippage tolerance is negative."""

    pass


class AddressValidationError(PairswapError, ValueError):
    """Address string is not a valid 20-byte hex address."""

    pass


class ArithmeticInvariantError(PairswapError, ArithmeticError):
    """An internally computed value is impossible (a defect, not bad input)."""

    pass


class DeploymentUnavailableError(PairswapError, LookupError):
    """No factory or init code hash is known for a provider on a chain."""

    pass


class DataSourceError(PairswapError):
    """The chain data source failed to answer a decimals or reserves query."""

    pass


__all__ = [
    "PairswapError",
    "ChainMismatchError",
    "CurrencyMismatchError",
    "InsufficientReservesError",
    "InsufficientInputAmountError",
    "InsufficientOutputAmountError",
    "InvalidRouteError",
    "TokenNotInPairError",
    "InvalidSlippageError",
    "AddressValidationError",
    "ArithmeticInvariantError",
    "DeploymentUnavailableError",
    "DataSourceError",
]
