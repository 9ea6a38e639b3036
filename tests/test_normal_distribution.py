"""Tests for the standard normal distribution functions."""

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.services.normal_distribution import standard_normal_cdf, standard_normal_pdf

finite_x = st.floats(min_value=-40, max_value=40, allow_nan=False, allow_infinity=False)


def exact_cdf(x: float) -> float:
    return 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))


class TestStandardNormalCdf:
    """Test suite for standard_normal_cdf."""

    def test_cdf_at_zero_is_one_half(self):
        assert standard_normal_cdf(0.0) == pytest.approx(0.5, abs=1e-7)

    @pytest.mark.parametrize(
        "x, expected",
        [
            (1.0, 0.8413447461),
            (-1.0, 0.1586552539),
            (1.96, 0.9750021049),
            (-1.96, 0.0249978951),
            (3.0, 0.9986501020),
            (-0.5, 0.3085375387),
        ],
    )
    def test_cdf_reference_values(self, x, expected):
        assert standard_normal_cdf(x) == pytest.approx(expected, abs=1e-7)

    def test_cdf_saturates_for_large_magnitudes(self):
        assert standard_normal_cdf(50.0) == 1.0
        assert standard_normal_cdf(-50.0) == 0.0
        assert standard_normal_cdf(1e6) == 1.0
        assert standard_normal_cdf(-1e6) == 0.0

    def test_cdf_is_monotonically_non_decreasing(self):
        xs = [i / 100 for i in range(-1000, 1001)]
        values = [standard_normal_cdf(x) for x in xs]

        for previous, current in zip(values, values[1:]):
            assert current >= previous

    @given(finite_x)
    def test_cdf_matches_erf_within_approximation_error(self, x):
        """
        Property: the rational approximation stays within 1e-7 of the exact CDF.
        """
        assert standard_normal_cdf(x) == pytest.approx(exact_cdf(x), abs=1e-7)

    @given(finite_x)
    def test_cdf_is_symmetric(self, x):
        """
        Property: cdf(-x) equals 1 - cdf(x) within 1e-6.
        """
        assert standard_normal_cdf(-x) == pytest.approx(1.0 - standard_normal_cdf(x), abs=1e-6)

    @given(finite_x)
    def test_cdf_is_a_probability(self, x):
        value = standard_normal_cdf(x)
        assert 0.0 <= value <= 1.0


class TestStandardNormalPdf:
    """Test suite for standard_normal_pdf."""

    def test_pdf_peak(self):
        assert standard_normal_pdf(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))

    @given(finite_x)
    def test_pdf_is_even(self, x):
        assert standard_normal_pdf(x) == standard_normal_pdf(-x)
