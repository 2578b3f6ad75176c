"""Protocol constants for constant-product pair pricing.

Centralizes chain identifiers, liquidity provider tags and the integer
parameters used by the on-chain pair and router contracts.
"""

from enum import Enum, IntEnum


class ChainId(IntEnum):
    """EVM chains with known pair deployments."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    KOVAN = 42


class LiquidityProvider(IntEnum):
    """Pair implementation family (selects factory and init code hash)."""

    PLASMA = 0
    UNISWAP = 1
    SUSHISWAP = 2


class TradeType(IntEnum):
    """Which side of a trade is fixed."""

    EXACT_INPUT = 0
    EXACT_OUTPUT = 1


class Rounding(IntEnum):
    """Rounding policy for decimal rendering of exact fractions."""

    ROUND_DOWN = 0
    ROUND_HALF_UP = 1
    ROUND_UP = 2


class SolidityType(str, Enum):
    """Solidity unsigned integer types validated by the math helpers."""

    UINT8 = "uint8"
    UINT112 = "uint112"
    UINT256 = "uint256"


SOLIDITY_TYPE_MAXIMA = {
    SolidityType.UINT8: 2**8 - 1,
    SolidityType.UINT112: 2**112 - 1,
    SolidityType.UINT256: 2**256 - 1,
}

UINT256_MAX = SOLIDITY_TYPE_MAXIMA[SolidityType.UINT256]

# Liquidity permanently locked by the first mint
MINIMUM_LIQUIDITY = 1000

# 0.3% swap fee expressed as the pair contract does: 997 / 1000
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Protocol fee share when feeTo is set: 1/6 of growth in sqrt(k)
PROTOCOL_FEE_DIVISOR = 5

# Liquidity tokens minted by pairs always use 18 decimals
LIQUIDITY_TOKEN_DECIMALS = 18

__all__ = [
    "ChainId",
    "LiquidityProvider",
    "TradeType",
    "Rounding",
    "SolidityType",
    "SOLIDITY_TYPE_MAXIMA",
    "UINT256_MAX",
    "MINIMUM_LIQUIDITY",
    "FEE_NUMERATOR",
    "FEE_DENOMINATOR",
    "PROTOCOL_FEE_DIVISOR",
    "LIQUIDITY_TOKEN_DECIMALS",
]
