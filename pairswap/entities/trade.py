"""Simulated swaps along a route.

A Trade fixes one side of a swap (exact input or exact output) and walks
the route through each pair's quote to find the other side. Everything
about the trade is computed once, at construction.
"""

from __future__ import annotations

from pairswap.constants import FEE_DENOMINATOR, FEE_NUMERATOR, Rounding, TradeType
from pairswap.entities.fractions.fraction import Fraction, round_div
from pairswap.entities.fractions.percent import Percent
from pairswap.entities.fractions.price import Price
from pairswap.entities.fractions.token_amount import TokenAmount
from pairswap.entities.pair import Pair
from pairswap.entities.route import Route
from pairswap.errors import (
    ArithmeticInvariantError,
    CurrencyMismatchError,
    InvalidSlippageError,
)

# Rounding slack tolerated before a negative price impact is treated as a defect
PRICE_IMPACT_EPSILON = Percent(1, 10**9)

_ONE = Fraction(1)


def compute_price_impact(
    mid_price: Price, input_amount: TokenAmount, output_amount: TokenAmount
) -> Percent:
    """Shortfall of the actual output against the mid-price quote.

    price_impact = (mid * in - out) / (mid * in)
    """
    exact_quote = mid_price.as_fraction.multiply(input_amount.raw)
    slippage = exact_quote.subtract(output_amount.raw).divide(exact_quote)
    return Percent(slippage.numerator, slippage.denominator)


def compute_realized_lp_fee(hops: int) -> Percent:
    """Fraction of the input kept by LPs over `hops` pairs: 1 - 0.997**hops."""
    kept = Fraction(FEE_NUMERATOR**hops, FEE_DENOMINATOR**hops)
    fee = _ONE.subtract(kept)
    return Percent(fee.numerator, fee.denominator)


def _validate_tolerance(slippage_tolerance: Fraction) -> None:
    if slippage_tolerance.less_than(0):
        raise InvalidSlippageError(f"Slippage tolerance is negative: {slippage_tolerance!r}")


class Trade:
    """A swap along a route with one side fixed.

    Attributes:
        route: Route the swap follows
        trade_type: EXACT_INPUT or EXACT_OUTPUT
        input_amount: Amount sold into the first pair
        output_amount: Amount received from the last pair
        execution_price: output / input actually obtained
        next_mid_price: Route mid price after the swap settles
        price_impact: Shortfall against the pre-trade mid price (includes the LP fee)
        realized_lp_fee: LP fee share over the route's hops
        price_impact_without_fee: price_impact minus realized_lp_fee
    """

    __slots__ = (
        "_route",
        "_trade_type",
        "_input_amount",
        "_output_amount",
        "_next_pairs",
        "_execution_price",
        "_next_mid_price",
        "_price_impact",
        "_realized_lp_fee",
    )

    def __init__(self, route: Route, amount: TokenAmount, trade_type: TradeType) -> None:
        """Simulate the swap.

        Raises:
            CurrencyMismatchError: If amount is not in the route's fixed-side token
            InsufficientInputAmountError: If a hop would produce no output
            InsufficientReservesError: If a hop lacks liquidity
            InsufficientOutputAmountError: If the requested output is zero
            ArithmeticInvariantError: If the computed price impact is negative
        """
        pairs = route.pairs
        amounts: list[TokenAmount | None] = [None] * len(route.path)
        next_pairs: list[Pair | None] = [None] * len(pairs)

        if trade_type == TradeType.EXACT_INPUT:
            if amount.token != route.input_token:
                raise CurrencyMismatchError(
                    f"Exact input amount {amount!r} is not in route input {route.input_token!r}"
                )
            amounts[0] = amount
            for i, pair in enumerate(pairs):
                output_amount, next_pair = pair.get_output_amount(amounts[i])  # type: ignore[arg-type]
                amounts[i + 1] = output_amount
                next_pairs[i] = next_pair
        else:
            if amount.token != route.output_token:
                raise CurrencyMismatchError(
                    f"Exact output amount {amount!r} is not in route output {route.output_token!r}"
                )
            amounts[-1] = amount
            for i in range(len(pairs) - 1, -1, -1):
                input_amount, next_pair = pairs[i].get_input_amount(amounts[i + 1])  # type: ignore[arg-type]
                amounts[i] = input_amount
                next_pairs[i] = next_pair

        self._route = route
        self._trade_type = trade_type
        self._input_amount: TokenAmount = amounts[0]  # type: ignore[assignment]
        self._output_amount: TokenAmount = amounts[-1]  # type: ignore[assignment]
        self._next_pairs: tuple[Pair, ...] = tuple(next_pairs)  # type: ignore[arg-type]

        self._execution_price = Price.from_amounts(self._input_amount, self._output_amount)
        self._next_mid_price = Route(self._next_pairs, route.input_token).mid_price
        self._price_impact = compute_price_impact(
            route.mid_price, self._input_amount, self._output_amount
        )
        if self._price_impact.less_than(-PRICE_IMPACT_EPSILON):
            raise ArithmeticInvariantError(
                f"Negative price impact {self._price_impact!r} on {route!r}"
            )
        self._realized_lp_fee = compute_realized_lp_fee(len(pairs))

    @classmethod
    def exact_in(cls, route: Route, amount_in: TokenAmount) -> Trade:
        return cls(route, amount_in, TradeType.EXACT_INPUT)

    @classmethod
    def exact_out(cls, route: Route, amount_out: TokenAmount) -> Trade:
        return cls(route, amount_out, TradeType.EXACT_OUTPUT)

    @property
    def route(self) -> Route:
        return self._route

    @property
    def trade_type(self) -> TradeType:
        return self._trade_type

    @property
    def input_amount(self) -> TokenAmount:
        return self._input_amount

    @property
    def output_amount(self) -> TokenAmount:
        return self._output_amount

    @property
    def next_pairs(self) -> tuple[Pair, ...]:
        """Pair snapshots after the swap, in route order."""
        return self._next_pairs

    @property
    def execution_price(self) -> Price:
        return self._execution_price

    @property
    def next_mid_price(self) -> Price:
        return self._next_mid_price

    @property
    def price_impact(self) -> Percent:
        return self._price_impact

    @property
    def realized_lp_fee(self) -> Percent:
        return self._realized_lp_fee

    @property
    def price_impact_without_fee(self) -> Percent:
        impact = self._price_impact.subtract(self._realized_lp_fee)
        return Percent(impact.numerator, impact.denominator)

    def minimum_amount_out(self, slippage_tolerance: Fraction) -> TokenAmount:
        """Least output acceptable under the tolerance.

        Exact-output trades return the fixed output. Exact-input trades
        return floor(output / (1 + tolerance)).

        Raises:
            InvalidSlippageError: If the tolerance is negative
        """
        _validate_tolerance(slippage_tolerance)
        if self._trade_type == TradeType.EXACT_OUTPUT:
            return self._output_amount
        adjusted = _ONE.add(slippage_tolerance).invert().multiply(self._output_amount.raw)
        return TokenAmount(self._output_amount.token, adjusted.quotient)

    def maximum_amount_in(self, slippage_tolerance: Fraction) -> TokenAmount:
        """Most input acceptable under the tolerance.

        Exact-input trades return the fixed input. Exact-output trades
        return ceil(input * (1 + tolerance)).

        Raises:
            InvalidSlippageError: If the tolerance is negative
        """
        _validate_tolerance(slippage_tolerance)
        if self._trade_type == TradeType.EXACT_INPUT:
            return self._input_amount
        adjusted = _ONE.add(slippage_tolerance).multiply(self._input_amount.raw)
        return TokenAmount(
            self._input_amount.token,
            round_div(adjusted.numerator, adjusted.denominator, Rounding.ROUND_UP),
        )

    def __repr__(self) -> str:
        return (
            f"Trade({self._trade_type.name}, {self._input_amount!r} -> "
            f"{self._output_amount!r}, hops={len(self._route)})"
        )


def input_output_comparator(a: Trade, b: Trade) -> int:
    """Order trades by output descending, then input ascending.

    Raises:
        CurrencyMismatchError: If the trades do not share input and output tokens
    """
    if a.input_amount.token != b.input_amount.token:
        raise CurrencyMismatchError("Trades have different input tokens")
    if a.output_amount.token != b.output_amount.token:
        raise CurrencyMismatchError("Trades have different output tokens")

    if a.output_amount.raw == b.output_amount.raw:
        if a.input_amount.raw == b.input_amount.raw:
            return 0
        return -1 if a.input_amount.raw < b.input_amount.raw else 1
    return 1 if a.output_amount.raw < b.output_amount.raw else -1


def trade_comparator(a: Trade, b: Trade) -> int:
    """Rank trades: better amounts, then lower price impact, then fewer hops."""
    io_comparison = input_output_comparator(a, b)
    if io_comparison != 0:
        return io_comparison

    if a.price_impact.less_than(b.price_impact):
        return -1
    if a.price_impact.greater_than(b.price_impact):
        return 1

    return len(a.route.path) - len(b.route.path)


__all__ = [
    "PRICE_IMPACT_EPSILON",
    "Trade",
    "compute_price_impact",
    "compute_realized_lp_fee",
    "input_output_comparator",
    "trade_comparator",
]
