from pairswap.entities.fractions.fraction import Fraction, round_div
from pairswap.entities.fractions.percent import Percent
from pairswap.entities.fractions.price import Price
from pairswap.entities.fractions.token_amount import TokenAmount

__all__ = ["Fraction", "Percent", "Price", "TokenAmount", "round_div"]
