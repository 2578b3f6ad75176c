"""Shared validation types for addresses and unsigned integers.

Used by the data-source payload models and by Token construction.
"""

from typing import Annotated, Any

import structlog
from eth_utils import is_address, is_checksum_address, to_checksum_address
from pydantic import AfterValidator, BeforeValidator, Field

from pairswap.constants import SOLIDITY_TYPE_MAXIMA, SolidityType
from pairswap.errors import AddressValidationError

logger = structlog.get_logger()


def validate_solidity_int(value: Any, solidity_type: SolidityType) -> int:
    """Validate that a value fits in the given Solidity unsigned type.

    Args:
        value: Integer, or decimal/0x-hex string
        solidity_type: Target type (uint8, uint112, uint256)

    Returns:
        The value as int

    Raises:
        ValueError: If value is not integer-like, negative, or too large
    """
    if isinstance(value, bool):
        raise ValueError(f"{solidity_type.value} cannot be a bool")
    if isinstance(value, str):
        try:
            value = int(value, 16) if value.startswith("0x") else int(value)
        except ValueError as err:
            raise ValueError(f"{solidity_type.value} must be an integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"{solidity_type.value} must be int or str, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{value} is not a {solidity_type.value}: negative")
    if value > SOLIDITY_TYPE_MAXIMA[solidity_type]:
        raise ValueError(f"{value} is not a {solidity_type.value}: overflow")
    return value


def normalize_address(address: str) -> str:
    """Normalize an address to lowercase with 0x prefix.

    Does not validate; use validate_and_parse_address for that.
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed 20-byte hex address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) != 42:
        return False
    return bool(is_address(address.lower()))


def validate_and_parse_address(address: str) -> str:
    """Validate an address and return its checksummed form.

    Mixed-case input with a bad checksum is rejected. All-lowercase or
    all-uppercase input is accepted but logged, since it carries no checksum.

    Raises:
        AddressValidationError: If address is not a valid address
    """
    if not is_valid_address(address):
        raise AddressValidationError(f"{address} is not a valid address.")
    body = address[2:]
    has_checksum = body != body.lower() and body != body.upper()
    if has_checksum and not is_checksum_address(address):
        raise AddressValidationError(f"{address} has an invalid checksum.")
    checksummed = to_checksum_address(address)
    if address != checksummed:
        logger.warning("address_not_checksummed", address=address, checksummed=checksummed)
    return checksummed


# Checksummed address
Address = Annotated[
    str,
    Field(pattern=r"^0x[a-fA-F0-9]{40}$"),
    AfterValidator(validate_and_parse_address),
]

Uint8 = Annotated[
    int,
    BeforeValidator(lambda v: validate_solidity_int(v, SolidityType.UINT8)),
    Field(description="8-bit unsigned integer"),
]

Uint112 = Annotated[
    int,
    BeforeValidator(lambda v: validate_solidity_int(v, SolidityType.UINT112)),
    Field(description="112-bit unsigned integer (pair reserve slot)"),
]

Uint256 = Annotated[
    int,
    BeforeValidator(lambda v: validate_solidity_int(v, SolidityType.UINT256)),
    Field(description="256-bit unsigned integer"),
]

__all__ = [
    "Address",
    "Uint8",
    "Uint112",
    "Uint256",
    "validate_solidity_int",
    "normalize_address",
    "is_valid_address",
    "validate_and_parse_address",
]
