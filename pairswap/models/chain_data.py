"""Pydantic models for answers returned by chain data sources.

Data sources hand back raw values (ints, hex strings, tuples from ABI
decoding). These models validate them before Token and Pair objects are
built, so range errors surface at the data-source boundary.
"""

from pydantic import BaseModel, ConfigDict

from pairswap.models.types import Address, Uint8, Uint112


class TokenData(BaseModel):
    """ERC20 metadata needed to build a Token."""

    model_config = ConfigDict(frozen=True)

    chain_id: int
    address: Address
    decimals: Uint8


class ReservesData(BaseModel):
    """Result of a pair's getReserves() call.

    Reserves are ordered by the pair's canonical token0/token1.
    """

    model_config = ConfigDict(frozen=True)

    pair_address: Address
    reserve0: Uint112
    reserve1: Uint112


__all__ = ["TokenData", "ReservesData"]
