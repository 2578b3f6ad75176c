"""Exact rational numbers with rounding-controlled decimal rendering.

Fractions are never reduced and never converted to floating point.
Comparisons cross-multiply, and decimal strings are produced from integer
quotients and remainders so that rendering matches what an integer-only
contract would compute.
"""

from __future__ import annotations

from math import gcd
from typing import Any

from pairswap.constants import Rounding

__all__ = ["Fraction", "round_div"]


def round_div(numerator: int, denominator: int, rounding: Rounding) -> int:
    """Divide non-negative numerator by positive denominator with a rounding policy.

    The remainder decides the rounding:
    - ROUND_DOWN: discard it
    - ROUND_UP: any non-zero remainder rounds up
    - ROUND_HALF_UP: a remainder of at least half the denominator rounds up
    """
    quotient, remainder = divmod(numerator, denominator)
    if remainder == 0 or rounding == Rounding.ROUND_DOWN:
        return quotient
    if rounding == Rounding.ROUND_UP:
        return quotient + 1
    if rounding == Rounding.ROUND_HALF_UP:
        return quotient + 1 if 2 * remainder >= denominator else quotient
    raise ValueError(f"Unknown rounding policy: {rounding!r}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _at_least_power_of_ten(numerator: int, denominator: int, exponent: int) -> bool:
    """Check numerator / denominator >= 10**exponent for positive operands."""
    if exponent >= 0:
        return numerator >= denominator * 10**exponent
    return numerator * 10 ** (-exponent) >= denominator


class Fraction:
    """Arbitrary-precision ratio of two integers.

    The denominator is kept positive; the sign lives on the numerator.
    Arithmetic accepts Fractions or ints and returns a plain Fraction.

    Attributes:
        numerator: Signed integer numerator (read-only)
        denominator: Positive integer denominator (read-only)
    """

    __slots__ = ("_numerator", "_denominator")

    # Set by subclasses carrying tokens; those only equal their own kind
    _denominated = False

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        """Create a fraction.

        Raises:
            TypeError: If numerator or denominator is not an int
            ZeroDivisionError: If denominator is zero
        """
        if not _is_int(numerator) or not _is_int(denominator):
            raise TypeError(
                "Fraction requires int numerator and denominator, got "
                f"{type(numerator).__name__}/{type(denominator).__name__}"
            )
        if denominator == 0:
            raise ZeroDivisionError(f"Fraction denominator is zero: {numerator}/0")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def quotient(self) -> int:
        """Integer part, truncated toward zero (Solidity division)."""
        magnitude = abs(self._numerator) // self._denominator
        return -magnitude if self._numerator < 0 else magnitude

    @property
    def remainder(self) -> Fraction:
        """Fractional part left after `quotient`, with the numerator's sign."""
        return Fraction(self._numerator - self.quotient * self._denominator, self._denominator)

    @property
    def as_fraction(self) -> Fraction:
        """This value as a plain Fraction, without subclass annotations."""
        return Fraction(self._numerator, self._denominator)

    def invert(self) -> Fraction:
        """Swap numerator and denominator.

        Raises:
            ZeroDivisionError: If the fraction is zero
        """
        return Fraction(self._denominator, self._numerator)

    # --- Arithmetic ---

    def add(self, other: Fraction | int) -> Fraction:
        other_fraction = _coerce(other)
        if self._denominator == other_fraction._denominator:
            return Fraction(self._numerator + other_fraction._numerator, self._denominator)
        return Fraction(
            self._numerator * other_fraction._denominator
            + other_fraction._numerator * self._denominator,
            self._denominator * other_fraction._denominator,
        )

    def subtract(self, other: Fraction | int) -> Fraction:
        other_fraction = _coerce(other)
        if self._denominator == other_fraction._denominator:
            return Fraction(self._numerator - other_fraction._numerator, self._denominator)
        return Fraction(
            self._numerator * other_fraction._denominator
            - other_fraction._numerator * self._denominator,
            self._denominator * other_fraction._denominator,
        )

    def multiply(self, other: Fraction | int) -> Fraction:
        other_fraction = _coerce(other)
        return Fraction(
            self._numerator * other_fraction._numerator,
            self._denominator * other_fraction._denominator,
        )

    def divide(self, other: Fraction | int) -> Fraction:
        """Divide by another value.

        Raises:
            ZeroDivisionError: If other is zero
        """
        other_fraction = _coerce(other)
        if other_fraction._numerator == 0:
            raise ZeroDivisionError(f"Division by zero fraction: {self!r} / {other_fraction!r}")
        return Fraction(
            self._numerator * other_fraction._denominator,
            self._denominator * other_fraction._numerator,
        )

    def __add__(self, other: object) -> Fraction:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return Fraction.add(self, other)  # type: ignore[arg-type]

    def __radd__(self, other: object) -> Fraction:
        if not _is_int(other):
            return NotImplemented
        return Fraction(other).add(self)  # type: ignore[arg-type]

    def __sub__(self, other: object) -> Fraction:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return Fraction.subtract(self, other)  # type: ignore[arg-type]

    def __rsub__(self, other: object) -> Fraction:
        if not _is_int(other):
            return NotImplemented
        return Fraction(other).subtract(self)  # type: ignore[arg-type]

    def __mul__(self, other: object) -> Fraction:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return Fraction.multiply(self, other)  # type: ignore[arg-type]

    def __rmul__(self, other: object) -> Fraction:
        if not _is_int(other):
            return NotImplemented
        return Fraction(other).multiply(self)  # type: ignore[arg-type]

    def __truediv__(self, other: object) -> Fraction:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return Fraction.divide(self, other)  # type: ignore[arg-type]

    def __rtruediv__(self, other: object) -> Fraction:
        if not _is_int(other):
            return NotImplemented
        return Fraction(other).divide(self)  # type: ignore[arg-type]

    def __neg__(self) -> Fraction:
        return Fraction(-self._numerator, self._denominator)

    # --- Comparison (cross-multiplication, denominators are positive) ---

    def less_than(self, other: Fraction | int) -> bool:
        other_fraction = _coerce(other)
        return (
            self._numerator * other_fraction._denominator
            < other_fraction._numerator * self._denominator
        )

    def equal_to(self, other: Fraction | int) -> bool:
        other_fraction = _coerce(other)
        return (
            self._numerator * other_fraction._denominator
            == other_fraction._numerator * self._denominator
        )

    def greater_than(self, other: Fraction | int) -> bool:
        other_fraction = _coerce(other)
        return (
            self._numerator * other_fraction._denominator
            > other_fraction._numerator * self._denominator
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        if isinstance(other, Fraction) and other._denominated and not self._denominated:
            return NotImplemented
        return Fraction.equal_to(self, other)  # type: ignore[arg-type]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return Fraction.less_than(self, other)  # type: ignore[arg-type]

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return not Fraction.greater_than(self, other)  # type: ignore[arg-type]

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return Fraction.greater_than(self, other)  # type: ignore[arg-type]

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Fraction) and not _is_int(other):
            return NotImplemented
        return not Fraction.less_than(self, other)  # type: ignore[arg-type]

    def __hash__(self) -> int:
        divisor = gcd(self._numerator, self._denominator) or 1
        numerator, denominator = self._numerator // divisor, self._denominator // divisor
        # Whole values hash like the int they equal
        if denominator == 1:
            return hash(numerator)
        return hash((numerator, denominator))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._numerator}, {self._denominator})"

    # --- Decimal rendering ---

    def to_significant(
        self,
        significant_digits: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        """Render with the given number of significant digits.

        Trailing zeros after the decimal point are dropped, and large values
        are padded with zeros rather than written in exponent notation
        (54321 to 2 digits is "54000").

        Args:
            significant_digits: Positive number of significant digits
            rounding: Rounding policy applied to the discarded remainder

        Raises:
            ValueError: If significant_digits is not a positive int
        """
        if not _is_int(significant_digits) or significant_digits <= 0:
            raise ValueError(f"{significant_digits!r} is not a positive integer.")
        return _render_significant(
            self._numerator, self._denominator, significant_digits, rounding
        )

    def to_fixed(
        self,
        decimal_places: int,
        rounding: Rounding = Rounding.ROUND_HALF_UP,
    ) -> str:
        """Render with exactly decimal_places digits after the point.

        Args:
            decimal_places: Non-negative number of fractional digits
            rounding: Rounding policy applied to the discarded remainder

        Raises:
            ValueError: If decimal_places is not a non-negative int
        """
        if not _is_int(decimal_places) or decimal_places < 0:
            raise ValueError(f"{decimal_places!r} is negative.")
        return _render_fixed(self._numerator, self._denominator, decimal_places, rounding)


def _coerce(value: Fraction | int) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if _is_int(value):
        return Fraction(value)
    raise TypeError(f"Cannot combine Fraction with {type(value).__name__}")


def _render_fixed(numerator: int, denominator: int, places: int, rounding: Rounding) -> str:
    negative = numerator < 0
    scaled = round_div(abs(numerator) * 10**places, denominator, rounding)
    digits = str(scaled)
    if places > 0:
        digits = digits.rjust(places + 1, "0")
        digits = f"{digits[:-places]}.{digits[-places:]}"
    return f"-{digits}" if negative and scaled != 0 else digits


def _render_significant(numerator: int, denominator: int, digits: int, rounding: Rounding) -> str:
    if numerator == 0:
        return "0"
    negative = numerator < 0
    magnitude = abs(numerator)

    # Order of magnitude: 10**exponent <= magnitude/denominator < 10**(exponent+1)
    exponent = len(str(magnitude)) - len(str(denominator))
    if not _at_least_power_of_ten(magnitude, denominator, exponent):
        exponent -= 1

    scale = digits - 1 - exponent
    if scale >= 0:
        rounded = round_div(magnitude * 10**scale, denominator, rounding)
    else:
        rounded = round_div(magnitude, denominator * 10 ** (-scale), rounding)
    if rounded == 10**digits:
        # 9.99 -> 10.0 carried into a new leading digit
        rounded //= 10
        scale -= 1

    if scale <= 0:
        text = str(rounded) + "0" * (-scale)
    else:
        padded = str(rounded).rjust(scale + 1, "0")
        integer_part, fractional_part = padded[:-scale], padded[-scale:].rstrip("0")
        text = f"{integer_part}.{fractional_part}" if fractional_part else integer_part
    return f"-{text}" if negative else text
