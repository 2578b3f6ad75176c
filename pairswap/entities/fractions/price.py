"""Exchange rates between two tokens."""

from __future__ import annotations

from pairswap.constants import Rounding
from pairswap.entities.fractions.fraction import Fraction, _is_int
from pairswap.entities.fractions.token_amount import TokenAmount
from pairswap.entities.token import Token
from pairswap.errors import CurrencyMismatchError


class Price(Fraction):
    """Quote-token raw units per base-token raw unit.

    The stored ratio is in raw units; `adjusted` rescales by the token
    decimals so that a price of 1 DAI per USDC renders as "1".

    Attributes:
        base_token: Token being priced
        quote_token: Token the price is expressed in
        scalar: 10**base.decimals / 10**quote.decimals
    """

    __slots__ = ("_base_token", "_quote_token", "_scalar")
    _denominated = True

    def __init__(
        self,
        base_token: Token,
        quote_token: Token,
        denominator: int,
        numerator: int,
    ) -> None:
        super().__init__(numerator, denominator)
        self._base_token = base_token
        self._quote_token = quote_token
        self._scalar = Fraction(10**base_token.decimals, 10**quote_token.decimals)

    @classmethod
    def from_amounts(cls, base_amount: TokenAmount, quote_amount: TokenAmount) -> Price:
        """Price implied by trading base_amount for quote_amount."""
        return cls(base_amount.token, quote_amount.token, base_amount.raw, quote_amount.raw)

    @property
    def base_token(self) -> Token:
        return self._base_token

    @property
    def quote_token(self) -> Token:
        return self._quote_token

    @property
    def scalar(self) -> Fraction:
        return self._scalar

    @property
    def raw(self) -> Fraction:
        """The unscaled ratio in raw units."""
        return self.as_fraction

    @property
    def adjusted(self) -> Fraction:
        """The ratio in whole-token units."""
        return self.as_fraction.multiply(self._scalar)

    def invert(self) -> Price:
        return Price(self._quote_token, self._base_token, self.numerator, self.denominator)

    def multiply(self, other: Fraction | int) -> Fraction:
        """Chain with another price, or scale by a plain number.

        Price(A->B) * Price(B->C) is Price(A->C).

        Raises:
            CurrencyMismatchError: If other is a Price whose base is not this quote
        """
        if not isinstance(other, Price):
            return super().multiply(other)
        if self._quote_token != other._base_token:
            raise CurrencyMismatchError(
                f"Cannot chain price in {self._quote_token!r} with price of {other._base_token!r}"
            )
        return Price(
            self._base_token,
            other._quote_token,
            self.denominator * other.denominator,
            self.numerator * other.numerator,
        )

    def __mul__(self, other: object) -> Fraction:
        if isinstance(other, Price):
            return self.multiply(other)
        return super().__mul__(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Price):
            return (
                self._base_token == other._base_token
                and self._quote_token == other._quote_token
                and self.equal_to(other)
            )
        if isinstance(other, Fraction) or _is_int(other):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._base_token, self._quote_token, super().__hash__()))

    def quote(self, amount: TokenAmount) -> TokenAmount:
        """Convert a base-token amount into quote-token raw units (floored).

        Raises:
            CurrencyMismatchError: If amount is not in the base token
        """
        if amount.token != self._base_token:
            raise CurrencyMismatchError(
                f"Cannot quote {amount.token!r} with a price of {self._base_token!r}"
            )
        return TokenAmount(self._quote_token, self.as_fraction.multiply(amount.raw).quotient)

    def to_significant(
        self,
        significant_digits: int = 6,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.adjusted.to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int = 4,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.adjusted.to_fixed(decimal_places, rounding)

    def __repr__(self) -> str:
        base = self._base_token.symbol or self._base_token.address
        quote = self._quote_token.symbol or self._quote_token.address
        return f"Price({quote}/{base}, {self.numerator}/{self.denominator})"

    def __str__(self) -> str:
        return self.to_significant()


__all__ = ["Price"]
