"""Test helpers module for shared test utilities.

- constants: Token addresses and known pool addresses
- factories: Token and pair factory functions
"""

from tests.helpers.constants import (
    CHAIN_ID,
    DAI_ADDRESS,
    DGD_ADDRESS,
    RECIPIENT,
    USDC_ADDRESS,
    USDC_DAI_PAIR_ADDRESS,
    WETH_ADDRESS,
)
from tests.helpers.factories import make_pair, make_token

__all__ = [
    # Constants
    "CHAIN_ID",
    "DAI_ADDRESS",
    "DGD_ADDRESS",
    "RECIPIENT",
    "USDC_ADDRESS",
    "USDC_DAI_PAIR_ADDRESS",
    "WETH_ADDRESS",
    # Factories
    "make_pair",
    "make_token",
]
