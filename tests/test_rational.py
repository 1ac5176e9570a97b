"""Tests for fraction reconstruction and repeating decimals."""

import math
import random
from fractions import Fraction

import pytest

from pecahan_pkg.rational import (
    expand_decimal,
    find_pi_fraction_form,
    is_exact_fraction,
    render_repeating,
    to_fraction,
)
from pecahan_pkg.types import DecimalExpansion


def _synthetic_fractions(count=200, seed=7):
    rng = random.Random(seed)
    fractions = set()
    while len(fractions) < count:
        den = rng.randint(2, 10000)
        num = rng.randint(-5 * den, 5 * den)
        frac = Fraction(num, den)
        if frac.denominator > 1:
            fractions.add(frac)
    return sorted(fractions)


class TestToFraction:
    @pytest.mark.parametrize("n", [-1000, -7, -1, 0, 1, 2, 42, 10**12])
    def test_integers(self, n):
        assert to_fraction(float(n)) == Fraction(n, 1)

    def test_near_integer_snaps(self):
        assert to_fraction(3.0000000000001) == Fraction(3, 1)

    @pytest.mark.parametrize("frac", _synthetic_fractions())
    def test_recovers_small_denominator_fractions(self, frac):
        x = frac.numerator / frac.denominator
        assert to_fraction(x, 10000) == frac

    def test_classic_values(self):
        assert to_fraction(0.1) == Fraction(1, 10)
        assert to_fraction(1 / 3) == Fraction(1, 3)
        assert to_fraction(0.1 + 0.2) == Fraction(3, 10)
        assert to_fraction(-7 / 6) == Fraction(-7, 6)

    def test_result_is_reduced_with_positive_denominator(self):
        frac = to_fraction(-0.75)
        assert (frac.numerator, frac.denominator) == (-3, 4)
        assert math.gcd(frac.numerator, frac.denominator) == 1

    def test_irrational_returns_last_convergent_in_bound(self):
        frac = to_fraction(math.pi)
        assert frac == Fraction(355, 113)
        assert not is_exact_fraction(frac, math.pi)

    @pytest.mark.parametrize(
        "x", [math.sqrt(2) * 1e12, math.sqrt(3) * 1e10, math.pi * 1e11, math.e * 1e9]
    )
    def test_large_irrationals_are_not_exact(self, x):
        frac = to_fraction(x)
        assert frac is not None
        assert not is_exact_fraction(frac, x)

    @pytest.mark.parametrize("num,den", [(10**6, 3), (10**7, 7), (-(10**6), 9)])
    def test_large_fractions_within_rounding(self, num, den):
        x = num / den
        assert to_fraction(x) == Fraction(num, den)
        assert is_exact_fraction(Fraction(num, den), x)

    def test_denominator_bound(self):
        frac = to_fraction(1 / 10001)
        assert frac.denominator <= 10000
        assert not is_exact_fraction(frac, 1 / 10001)
        assert to_fraction(1 / 10001, max_denominator=20000) == Fraction(1, 10001)

    def test_no_convergent_fits(self):
        assert to_fraction(0.5, max_denominator=0) is None

    @pytest.mark.parametrize("x", [math.inf, -math.inf, math.nan])
    def test_non_finite(self, x):
        assert to_fraction(x) is None

    def test_iteration_cap(self):
        frac = to_fraction(math.sqrt(2), max_denominator=10**9, max_iterations=3)
        assert frac == Fraction(17, 12)


class TestExpandDecimal:
    def test_one_third(self):
        assert expand_decimal(1, 3) == DecimalExpansion("0", "", "3")

    def test_terminating(self):
        assert expand_decimal(5, 4) == DecimalExpansion("1", "25", "")

    def test_mixed(self):
        assert expand_decimal(7, 6) == DecimalExpansion("1", "1", "6")

    def test_long_cycle(self):
        assert expand_decimal(1, 7) == DecimalExpansion("0", "", "142857")
        assert expand_decimal(1, 12) == DecimalExpansion("0", "08", "3")

    def test_whole_number(self):
        expansion = expand_decimal(6, 3)
        assert expansion == DecimalExpansion("2")
        assert expansion.terminates

    def test_negative(self):
        assert expand_decimal(-7, 6) == DecimalExpansion("-1", "1", "6")
        assert expand_decimal(-1, 3) == DecimalExpansion("-0", "", "3")

    def test_digit_limit(self):
        expansion = expand_decimal(1, 7, max_digits=4)
        assert expansion.truncated
        assert expansion.non_repeating == "1428"
        assert expansion.repeating == ""
        assert not expansion.terminates

    def test_cycle_found_exactly_at_limit(self):
        assert expand_decimal(1, 3, max_digits=1) == DecimalExpansion("0", "", "3")

    def test_invalid_denominator(self):
        with pytest.raises(ValueError):
            expand_decimal(1, 0)


class TestRenderRepeating:
    @pytest.mark.parametrize(
        "num,den,text",
        [
            (1, 3, "0.(3)"),
            (5, 4, "1.25"),
            (7, 6, "1.1(6)"),
            (4, 2, "2"),
            (-1, 3, "-0.(3)"),
            (1, 7, "0.(142857)"),
        ],
    )
    def test_render(self, num, den, text):
        assert render_repeating(expand_decimal(num, den)) == text

    def test_truncated_marker(self):
        assert render_repeating(expand_decimal(1, 7, max_digits=3)) == "0.142..."


class TestPiFractionForm:
    def test_multiples_of_pi(self):
        assert find_pi_fraction_form(math.pi / 2) == "pi/2"
        assert find_pi_fraction_form(3 * math.pi / 4) == "3*pi/4"
        assert find_pi_fraction_form(-math.pi) == "-pi"
        assert find_pi_fraction_form(2 * math.pi) == "2*pi"

    def test_not_a_multiple(self):
        assert find_pi_fraction_form(0.5) is None
        assert find_pi_fraction_form(math.sqrt(2)) is None
        assert find_pi_fraction_form(0.0) is None
