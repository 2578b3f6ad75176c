"""Integer square root matching the pair contract's Babylonian method."""

from __future__ import annotations

from pairswap.constants import SolidityType
from pairswap.models.types import validate_solidity_int


def validate_solidity_type_instance(value: int, solidity_type: SolidityType) -> None:
    """Raise ValueError unless value is an int within the Solidity type's range."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{value!r} is not a {solidity_type.value}.")
    validate_solidity_int(value, solidity_type)


def sqrt(y: int) -> int:
    """Floor square root of a uint256, as computed on-chain.

    Uses the same iteration as Math.sqrt in the pair contract so that
    liquidity minted on the first deposit matches exactly.

    Args:
        y: Value to take the root of (0 <= y < 2**256)

    Returns:
        floor(sqrt(y))

    Raises:
        ValueError: If y is not a uint256
    """
    validate_solidity_type_instance(y, SolidityType.UINT256)
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
        return z
    if y != 0:
        return 1
    return 0


__all__ = ["sqrt", "validate_solidity_type_instance"]
