"""Option pricing input and result models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OptionPricingInput:
    """Parameters of a European option on a non-dividend-paying stock."""

    stock_price: float  # S
    strike_price: float  # K
    time_to_maturity: float  # T, in years
    risk_free_rate: float  # r, annualized
    volatility: float  # sigma, annualized


@dataclass(frozen=True)
class OptionPricingResult:
    """Theoretical call and put prices."""

    call_price: float
    put_price: float

    def to_dict(self) -> dict[str, float]:
        return {"call_price": self.call_price, "put_price": self.put_price}
