"""Standard normal distribution functions."""

import math

# Abramowitz & Stegun 26.2.17 constants
_P = 0.2316419
_B1 = 0.31938153
_B2 = -0.356563782
_B3 = 1.781477937
_B4 = -1.821255978
_B5 = 1.330274429
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def standard_normal_pdf(x: float) -> float:
    """Density of the standard normal distribution."""
    return _INV_SQRT_2PI * math.exp(-x * x / 2.0)


def _tail_polynomial(t: float) -> float:
    return t * (t * (t * (t * (t * _B5 + _B4) + _B3) + _B2) + _B1)


def standard_normal_cdf(x: float) -> float:
    """
    Approximate the standard normal cumulative distribution function.

    Uses the Abramowitz and Stegun rational approximation, absolute error
    below 7.5e-8. Negative arguments are evaluated on the mirrored tail
    directly rather than as 1 - cdf(-x).

    Args:
        x: Point at which to evaluate

    Returns:
        Probability that a standard normal variable is at most x
    """
    if x >= 0.0:
        t = 1.0 / (1.0 + _P * x)
        return 1.0 - standard_normal_pdf(x) * _tail_polynomial(t)

    t = 1.0 / (1.0 - _P * x)
    return standard_normal_pdf(x) * _tail_polynomial(t)
