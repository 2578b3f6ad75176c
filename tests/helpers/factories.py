"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_token, make_pair

    token = make_token(0)
    pair = make_pair(token_a, 1000, token_b, 1000)
"""

from pairswap.constants import LiquidityProvider
from pairswap.entities import Pair, Token, TokenAmount
from tests.helpers.constants import (
    CHAIN_ID,
    TOKEN_0_ADDRESS,
    TOKEN_1_ADDRESS,
    TOKEN_2_ADDRESS,
    TOKEN_3_ADDRESS,
)

_SYNTHETIC_ADDRESSES = (TOKEN_0_ADDRESS, TOKEN_1_ADDRESS, TOKEN_2_ADDRESS, TOKEN_3_ADDRESS)


def make_token(
    index: int,
    decimals: int = 18,
    chain_id: int = CHAIN_ID,
) -> Token:
    """Create one of the synthetic test tokens t0..t3.

    Args:
        index: Which synthetic token (0-3); lower index sorts first
        decimals: Token decimals (default: 18)
        chain_id: Chain of the token (default: mainnet)

    Returns:
        Token with symbol "t<index>"
    """
    return Token(chain_id, _SYNTHETIC_ADDRESSES[index], decimals, f"t{index}", f"token {index}")


def make_pair(
    token_a: Token,
    reserve_a: int,
    token_b: Token,
    reserve_b: int,
    provider: LiquidityProvider = LiquidityProvider.UNISWAP,
) -> Pair:
    """Create a pair from two tokens and raw reserves."""
    return Pair(TokenAmount(token_a, reserve_a), TokenAmount(token_b, reserve_b), provider)
