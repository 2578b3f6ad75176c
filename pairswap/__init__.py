"""Pairswap - constant-product pair pricing and best-trade routing."""

from pairswap.constants import ChainId, LiquidityProvider, Rounding, TradeType
from pairswap.entities import (
    WETH,
    Fraction,
    Pair,
    Percent,
    Price,
    Route,
    Token,
    TokenAmount,
    Trade,
)
from pairswap.fetcher import DecimalsCache, Fetcher, StaticChainDataSource
from pairswap.router import Router, SwapParameters, TradeOptions
from pairswap.routing import best_trade_exact_in, best_trade_exact_out

__version__ = "0.1.0"
__all__ = [
    "ChainId",
    "DecimalsCache",
    "Fetcher",
    "Fraction",
    "LiquidityProvider",
    "Pair",
    "Percent",
    "Price",
    "Rounding",
    "Route",
    "Router",
    "StaticChainDataSource",
    "SwapParameters",
    "Token",
    "TokenAmount",
    "Trade",
    "TradeOptions",
    "TradeType",
    "WETH",
    "best_trade_exact_in",
    "best_trade_exact_out",
    "__version__",
]
