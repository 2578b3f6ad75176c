"""Validation types and data-source payload models."""

from pairswap.models.chain_data import ReservesData, TokenData
from pairswap.models.types import (
    Address,
    Uint8,
    Uint112,
    Uint256,
    is_valid_address,
    normalize_address,
    validate_and_parse_address,
    validate_solidity_int,
)

__all__ = [
    "Address",
    "Uint8",
    "Uint112",
    "Uint256",
    "ReservesData",
    "TokenData",
    "is_valid_address",
    "normalize_address",
    "validate_and_parse_address",
    "validate_solidity_int",
]
