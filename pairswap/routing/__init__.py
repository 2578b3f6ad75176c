"""Best-trade enumeration across pairs."""

from pairswap.routing.search import best_trade_exact_in, best_trade_exact_out

__all__ = ["best_trade_exact_in", "best_trade_exact_out"]
