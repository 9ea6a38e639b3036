"""Black-Scholes pricing of European options."""

import math

from src.models.option_pricing import OptionPricingInput, OptionPricingResult
from src.services.normal_distribution import standard_normal_cdf


def calculate_black_scholes(params: OptionPricingInput) -> OptionPricingResult:
    """
    Price a European call and put on a non-dividend-paying stock.

    A non-positive time to maturity or volatility yields zero prices.

    Args:
        params: Stock price, strike, maturity (years), risk-free rate and volatility

    Returns:
        OptionPricingResult with call and put prices
    """
    s = params.stock_price
    k = params.strike_price
    t = params.time_to_maturity
    r = params.risk_free_rate
    sigma = params.volatility

    if t <= 0 or sigma <= 0:
        return OptionPricingResult(call_price=0.0, put_price=0.0)

    sigma_sqrt_t = sigma * math.sqrt(t)
    d1 = (math.log(s / k) + (r + sigma * sigma / 2.0) * t) / sigma_sqrt_t
    d2 = d1 - sigma_sqrt_t
    discounted_strike = k * math.exp(-r * t)

    call_price = s * standard_normal_cdf(d1) - discounted_strike * standard_normal_cdf(d2)
    put_price = discounted_strike * standard_normal_cdf(-d2) - s * standard_normal_cdf(-d1)

    # CDF approximation error can dip a far out-of-the-money price just below zero.
    return OptionPricingResult(call_price=max(call_price, 0.0), put_price=max(put_price, 0.0))
