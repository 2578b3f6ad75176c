"""Tests for exact Fraction arithmetic and decimal rendering."""

import pytest

from pairswap.constants import Rounding
from pairswap.entities.fractions import Fraction, round_div


class TestRoundDiv:
    """Integer division under each rounding policy."""

    def test_exact_division_ignores_policy(self):
        for rounding in Rounding:
            assert round_div(10, 5, rounding) == 2

    def test_round_down(self):
        assert round_div(7, 2, Rounding.ROUND_DOWN) == 3

    def test_round_up(self):
        assert round_div(7, 3, Rounding.ROUND_UP) == 3
        assert round_div(1, 1000, Rounding.ROUND_UP) == 1

    def test_round_half_up(self):
        """Half rounds away from zero; below half rounds down."""
        assert round_div(5, 2, Rounding.ROUND_HALF_UP) == 3
        assert round_div(4, 3, Rounding.ROUND_HALF_UP) == 1


class TestConstruction:
    def test_denominator_defaults_to_one(self):
        assert Fraction(5).denominator == 1

    def test_zero_denominator_raises(self):
        with pytest.raises(ZeroDivisionError):
            Fraction(1, 0)

    def test_zero_denominator_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            Fraction(1, 0)

    def test_negative_denominator_moves_sign(self):
        fraction = Fraction(1, -2)
        assert fraction.numerator == -1
        assert fraction.denominator == 2

    def test_not_reduced(self):
        fraction = Fraction(2, 4)
        assert (fraction.numerator, fraction.denominator) == (2, 4)

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            Fraction(0.5)  # type: ignore[arg-type]


class TestQuotientAndRemainder:
    def test_quotient_floors_positive(self):
        assert Fraction(8, 3).quotient == 2

    def test_quotient_truncates_negative(self):
        assert Fraction(-8, 3).quotient == -2

    def test_remainder(self):
        assert Fraction(8, 3).remainder == Fraction(2, 3)

    def test_invert(self):
        assert Fraction(3, 4).invert() == Fraction(4, 3)

    def test_invert_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            Fraction(0, 4).invert()


class TestArithmetic:
    def test_add_same_denominator(self):
        result = Fraction(1, 10).add(Fraction(4, 10))
        assert (result.numerator, result.denominator) == (5, 10)

    def test_add_different_denominator(self):
        assert Fraction(1, 3).add(Fraction(1, 6)) == Fraction(1, 2)

    def test_add_int(self):
        assert Fraction(1, 2) + 1 == Fraction(3, 2)
        assert 1 + Fraction(1, 2) == Fraction(3, 2)

    def test_subtract(self):
        assert Fraction(1, 2) - Fraction(1, 3) == Fraction(1, 6)
        assert 1 - Fraction(1, 4) == Fraction(3, 4)

    def test_multiply(self):
        assert Fraction(2, 3) * Fraction(3, 4) == Fraction(1, 2)
        assert 3 * Fraction(1, 3) == 1

    def test_divide(self):
        assert Fraction(1, 2) / Fraction(1, 4) == 2

    def test_divide_by_zero_raises(self):
        with pytest.raises(ZeroDivisionError):
            Fraction(1, 2).divide(Fraction(0))

    def test_negation(self):
        assert -Fraction(1, 2) == Fraction(-1, 2)

    def test_huge_values_stay_exact(self):
        big = Fraction(2**256 - 1, 3)
        assert (big * 3).quotient == 2**256 - 1


class TestComparison:
    def test_cross_multiplied_equality(self):
        assert Fraction(1, 2) == Fraction(2, 4)
        assert hash(Fraction(1, 2)) == hash(Fraction(2, 4))

    def test_ordering(self):
        assert Fraction(1, 3) < Fraction(1, 2)
        assert Fraction(2, 3) > Fraction(1, 2)
        assert Fraction(1, 2) <= Fraction(2, 4)
        assert Fraction(1, 2) >= Fraction(2, 4)

    def test_explicit_methods(self):
        assert Fraction(1, 3).less_than(Fraction(1, 2))
        assert Fraction(1, 2).equal_to(Fraction(3, 6))
        assert Fraction(3, 2).greater_than(1)

    def test_comparison_with_unrelated_type(self):
        assert Fraction(1) != "1"

    def test_whole_value_hashes_like_int(self):
        assert Fraction(6, 3) == 2
        assert hash(Fraction(6, 3)) == hash(2)
        assert len({Fraction(4, 2), 2}) == 1


class TestToSignificant:
    def test_one_third(self):
        assert Fraction(1, 3).to_significant(4) == "0.3333"

    def test_trailing_zeros_dropped(self):
        assert Fraction(1, 2).to_significant(5) == "0.5"

    def test_integer_value(self):
        assert Fraction(54321).to_significant(5) == "54321"

    def test_large_value_padded_with_zeros(self):
        assert Fraction(54321).to_significant(2) == "54000"

    def test_round_half_up_default(self):
        assert Fraction(2, 3).to_significant(2) == "0.67"

    def test_round_down(self):
        assert Fraction(2, 3).to_significant(2, Rounding.ROUND_DOWN) == "0.66"

    def test_round_up(self):
        assert Fraction(1, 3).to_significant(2, Rounding.ROUND_UP) == "0.34"

    def test_carry_into_new_digit(self):
        assert Fraction(999, 1000).to_significant(2) == "1"

    def test_small_value(self):
        assert Fraction(1, 40000).to_significant(3) == "0.000025"

    def test_zero(self):
        assert Fraction(0).to_significant(3) == "0"

    def test_negative(self):
        assert Fraction(-1, 3).to_significant(2) == "-0.33"

    @pytest.mark.parametrize("digits", [0, -1])
    def test_non_positive_digits_raise(self, digits):
        with pytest.raises(ValueError):
            Fraction(1, 3).to_significant(digits)


class TestToFixed:
    def test_pads_fractional_digits(self):
        assert Fraction(1, 2).to_fixed(3) == "0.500"

    def test_zero_places(self):
        assert Fraction(5, 2).to_fixed(0) == "3"

    def test_round_down(self):
        assert Fraction(2, 3).to_fixed(2, Rounding.ROUND_DOWN) == "0.66"

    def test_round_half_up(self):
        assert Fraction(2, 3).to_fixed(2) == "0.67"

    def test_large_integer_part(self):
        assert Fraction(123456789, 100).to_fixed(1) == "1234567.9"

    def test_negative_places_raise(self):
        with pytest.raises(ValueError):
            Fraction(1, 2).to_fixed(-1)
