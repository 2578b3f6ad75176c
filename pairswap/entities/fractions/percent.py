"""Percentages stored as exact fractions."""

from __future__ import annotations

from pairswap.constants import Rounding
from pairswap.entities.fractions.fraction import Fraction

_ONE_HUNDRED = Fraction(100)


class Percent(Fraction):
    """A Fraction rendered as a percentage.

    Percent(1, 200) is 0.5%; to_significant() renders "0.5".
    """

    __slots__ = ()

    @classmethod
    def from_fraction(cls, fraction: Fraction) -> Percent:
        return cls(fraction.numerator, fraction.denominator)

    @classmethod
    def from_bips(cls, bips: int) -> Percent:
        """Build from basis points (50 -> 0.5%)."""
        return cls(bips, 10_000)

    def to_significant(
        self,
        significant_digits: int = 5,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.as_fraction.multiply(_ONE_HUNDRED).to_significant(significant_digits, rounding)

    def to_fixed(
        self,
        decimal_places: int = 2,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        return self.as_fraction.multiply(_ONE_HUNDRED).to_fixed(decimal_places, rounding)

    def __str__(self) -> str:
        return f"{self.to_significant()}%"


__all__ = ["Percent"]
