"""Tokens, amounts, prices, pairs, routes and trades."""

from pairswap.entities.fractions import Fraction, Percent, Price, TokenAmount, round_div
from pairswap.entities.pair import Pair
from pairswap.entities.route import Route
from pairswap.entities.token import WETH, Token
from pairswap.entities.trade import (
    PRICE_IMPACT_EPSILON,
    Trade,
    input_output_comparator,
    trade_comparator,
)

__all__ = [
    "Fraction",
    "Pair",
    "Percent",
    "PRICE_IMPACT_EPSILON",
    "Price",
    "Route",
    "Token",
    "TokenAmount",
    "Trade",
    "WETH",
    "input_output_comparator",
    "round_div",
    "trade_comparator",
]
