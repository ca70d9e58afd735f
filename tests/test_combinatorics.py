"""
Tests for factorial, partial factorial and combinations.
Run with: pytest tests/test_combinatorics.py -v
"""

import math

import pytest
from keno_analyzer.core.combinatorics import (
    combinations,
    factorial,
    partial_factorial,
)


class TestFactorial:
    """Exact integer factorials"""

    @pytest.mark.parametrize("n, expected", [
        (0, 1),
        (1, 1),
        (5, 120),
        (10, 3628800),
        (20, 2432902008176640000),
    ])
    def test_known_values(self, n, expected):
        assert factorial(n) == expected

    def test_no_overflow_above_twenty(self):
        # 21! exceeds a 64-bit unsigned integer; Python ints do not wrap
        assert factorial(21) == 21 * factorial(20)
        assert factorial(21) > 2 ** 64

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            factorial(-1)


class TestPartialFactorial:
    """Falling products n * (n-1) * ... over a fixed number of terms"""

    def test_four_terms_of_ten(self):
        assert partial_factorial(10, 4) == pytest.approx(10 * 9 * 8 * 7)

    def test_zero_terms_is_one(self):
        for n in (0, 1, 20, 60, 80):
            assert partial_factorial(n, 0) == 1.0

    def test_full_length_matches_factorial(self):
        for n in range(0, 21):
            assert partial_factorial(n, n) == pytest.approx(float(math.factorial(n)))

    def test_returns_float(self):
        assert isinstance(partial_factorial(80, 20), float)

    def test_large_pool_stays_finite(self):
        # 80 * 79 * ... * 61 is ~1e37, well inside double range
        value = partial_factorial(80, 20)
        assert math.isfinite(value)
        assert value == pytest.approx(math.perm(80, 20), rel=1e-12)

    def test_more_terms_than_pool_is_zero(self):
        assert partial_factorial(3, 5) == 0.0

    def test_negative_terms_raises(self):
        with pytest.raises(ValueError):
            partial_factorial(10, -1)


class TestCombinations:
    """C(n, r) counting"""

    def test_three_fruits_choose_two(self):
        assert combinations(3, 2) == 3

    def test_nine_choose_five(self):
        assert combinations(9, 5) == 126

    def test_symmetry(self):
        for n in range(0, 21):
            for r in range(0, n + 1):
                assert combinations(n, r) == combinations(n, n - r)

    def test_edges_are_one(self):
        for n in range(0, 21):
            assert combinations(n, 0) == 1
            assert combinations(n, n) == 1

    def test_matches_math_comb(self):
        for n in range(0, 21):
            for r in range(0, n + 1):
                assert combinations(n, r) == math.comb(n, r)

    def test_r_greater_than_n_is_zero(self):
        assert combinations(3, 4) == 0
        assert combinations(0, 1) == 0

    def test_negative_r_is_zero(self):
        assert combinations(5, -1) == 0

    def test_negative_n_raises(self):
        with pytest.raises(ValueError):
            combinations(-2, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
