"""Exact token quantities in base units."""

from __future__ import annotations

from pairswap.constants import Rounding, SolidityType
from pairswap.entities.fractions.fraction import Fraction, _is_int
from pairswap.entities.token import Token
from pairswap.errors import ChainMismatchError, CurrencyMismatchError
from pairswap.models.types import validate_solidity_int


class TokenAmount(Fraction):
    """A raw (base-unit) quantity of a token.

    The fraction value is raw / 10**decimals, so comparisons and rendering
    work in whole-token terms while `raw` stays an exact uint256.

    Attributes:
        token: The token this amount is denominated in
        raw: Integer quantity in base units
    """

    __slots__ = ("_token",)
    _denominated = True

    def __init__(self, token: Token, raw: int) -> None:
        """Create an amount.

        Raises:
            ValueError: If raw is not a uint256
        """
        raw = validate_solidity_int(raw, SolidityType.UINT256)
        super().__init__(raw, 10**token.decimals)
        self._token = token

    @property
    def token(self) -> Token:
        return self._token

    @property
    def raw(self) -> int:
        return self.numerator

    def _check_same_token(self, other: TokenAmount) -> None:
        if self._token.chain_id != other._token.chain_id:
            raise ChainMismatchError(
                f"Cannot combine amounts on chains {self._token.chain_id} "
                f"and {other._token.chain_id}"
            )
        if self._token != other._token:
            raise CurrencyMismatchError(
                f"Cannot combine {self._token.address} with {other._token.address}"
            )

    def add(self, other: TokenAmount) -> TokenAmount:  # type: ignore[override]
        self._check_same_token(other)
        return TokenAmount(self._token, self.raw + other.raw)

    def subtract(self, other: TokenAmount) -> TokenAmount:  # type: ignore[override]
        """Subtract another amount of the same token.

        Raises:
            ValueError: If the result would be negative
        """
        self._check_same_token(other)
        return TokenAmount(self._token, self.raw - other.raw)

    def __add__(self, other: object) -> TokenAmount:
        if not isinstance(other, TokenAmount):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> TokenAmount:
        if not isinstance(other, TokenAmount):
            return NotImplemented
        return self.subtract(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TokenAmount):
            return self._token == other._token and self.raw == other.raw
        if isinstance(other, Fraction) or _is_int(other):
            return False
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, TokenAmount):
            self._check_same_token(other)
            return self.raw < other.raw
        return super().__lt__(other)

    def __gt__(self, other: object) -> bool:
        if isinstance(other, TokenAmount):
            self._check_same_token(other)
            return self.raw > other.raw
        return super().__gt__(other)

    def __le__(self, other: object) -> bool:
        if isinstance(other, TokenAmount):
            self._check_same_token(other)
            return self.raw <= other.raw
        return super().__le__(other)

    def __ge__(self, other: object) -> bool:
        if isinstance(other, TokenAmount):
            self._check_same_token(other)
            return self.raw >= other.raw
        return super().__ge__(other)

    def __hash__(self) -> int:
        return hash((self._token, self.raw))

    def __repr__(self) -> str:
        return f"TokenAmount({self._token.symbol or self._token.address}, {self.raw})"

    def __str__(self) -> str:
        return f"{self.to_exact()} {self._token.symbol or ''}".strip()

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_DOWN,
    ) -> str:
        return super().to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int | None = None,
        rounding: Rounding = Rounding.ROUND_DOWN,
    ) -> str:
        """Render with a fixed number of decimals (default: token decimals).

        Raises:
            ValueError: If decimal_places exceeds the token's decimals
        """
        if decimal_places is None:
            decimal_places = self._token.decimals
        if decimal_places > self._token.decimals:
            raise ValueError(
                f"decimal_places {decimal_places} exceeds token decimals {self._token.decimals}"
            )
        return super().to_fixed(decimal_places, rounding)

    def to_exact(self) -> str:
        """Render the exact value with no rounding and no trailing zeros."""
        decimals = self._token.decimals
        if decimals == 0:
            return str(self.raw)
        padded = str(self.raw).rjust(decimals + 1, "0")
        integer_part, fractional_part = padded[:-decimals], padded[-decimals:].rstrip("0")
        return f"{integer_part}.{fractional_part}" if fractional_part else integer_part


__all__ = ["TokenAmount"]
