"""ERC20 token identity."""

from __future__ import annotations

from dataclasses import dataclass

from eth_utils import to_checksum_address

from pairswap.constants import ChainId, SolidityType
from pairswap.errors import ChainMismatchError
from pairswap.models.types import validate_and_parse_address, validate_solidity_int


@dataclass(frozen=True, eq=False)
class Token:
    """An ERC20 token on a specific chain.

    Two tokens are the same token exactly when chain_id and address match;
    symbol, name and decimals do not take part in equality.

    Attributes:
        chain_id: EVM chain identifier
        address: Checksummed contract address
        decimals: Number of decimals (uint8)
        symbol: Optional display symbol
        name: Optional display name
    """

    chain_id: int
    address: str
    decimals: int
    symbol: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.chain_id, int) or self.chain_id <= 0:
            raise ValueError(f"chain_id must be a positive int, got {self.chain_id!r}")
        object.__setattr__(self, "address", validate_and_parse_address(self.address))
        object.__setattr__(
            self, "decimals", validate_solidity_int(self.decimals, SolidityType.UINT8)
        )

    def equals(self, other: Token) -> bool:
        """Check whether two tokens are the same token."""
        if self is other:
            return True
        return self.chain_id == other.chain_id and self.address == other.address

    def sorts_before(self, other: Token) -> bool:
        """Check if this token comes first in the pair contract's token order.

        Raises:
            ChainMismatchError: If the tokens are on different chains
            ValueError: If both tokens have the same address
        """
        if self.chain_id != other.chain_id:
            raise ChainMismatchError(
                f"Cannot order tokens across chains: {self.chain_id} vs {other.chain_id}"
            )
        if self.address == other.address:
            raise ValueError(f"Cannot order a token against itself: {self.address}")
        return self.address.lower() < other.address.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def __repr__(self) -> str:
        label = self.symbol or self.address
        return f"Token({label}, chain={self.chain_id})"


def _weth(chain_id: ChainId, address: str) -> Token:
    return Token(chain_id, to_checksum_address(address), 18, "WETH", "Wrapped Ether")


# Canonical wrapped ether per chain
WETH: dict[int, Token] = {
    ChainId.MAINNET: _weth(ChainId.MAINNET, "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"),
    ChainId.ROPSTEN: _weth(ChainId.ROPSTEN, "0xc778417e063141139fce010982780140aa0cd5ab"),
    ChainId.RINKEBY: _weth(ChainId.RINKEBY, "0xc778417e063141139fce010982780140aa0cd5ab"),
    ChainId.GOERLI: _weth(ChainId.GOERLI, "0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6"),
    ChainId.KOVAN: _weth(ChainId.KOVAN, "0xd0a1e359811322d97991e03f863a0c30c2cf029c"),
}

__all__ = ["Token", "WETH"]
