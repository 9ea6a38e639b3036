"""Derive quote snapshots (price, change, percent change) from a price series."""

from collections.abc import Sequence
from enum import Enum

from src.models.market_data import PricePoint, QuoteSnapshot


class ReferencePricePolicy(str, Enum):
    """Baseline against which a quote's change is measured."""

    PREVIOUS_CLOSE = "previous_close"
    WINDOW_START = "window_start"


class QuoteDataUnavailableError(ValueError):
    """Raised when neither a series nor a reference price is available."""


def calculate_change(price: float, reference_price: float) -> tuple[float, float]:
    """
    Calculate absolute and percent change against a reference price.

    Returns:
        Tuple of (change, change_percent); change_percent is 0.0 for a zero reference
    """
    change = price - reference_price
    if reference_price == 0:
        return change, 0.0
    return change, change / reference_price * 100


def build_quote_snapshot(
    ticker: str,
    name: str,
    series: Sequence[PricePoint],
    reference_price: float | None = None,
    *,
    logo_url: str | None = None,
) -> QuoteSnapshot:
    """
    Build a quote snapshot from a normalized series.

    The current price is the last point of the series. Change is measured
    against reference_price when given (previous close), otherwise against
    the first point of the series (window start).

    Args:
        ticker: Ticker symbol
        name: Company name
        series: Normalized price series, ascending by timestamp
        reference_price: Previous session close, if that policy is in use
        logo_url: Optional company logo URL

    Returns:
        QuoteSnapshot

    Raises:
        QuoteDataUnavailableError: If the series is empty and no reference price is given
    """
    if not series:
        if reference_price is None:
            raise QuoteDataUnavailableError(f"No price data available for {ticker}")
        price = reference_price
    else:
        price = series[-1].price

    if reference_price is None:
        reference_price = series[0].price

    change, change_percent = calculate_change(price, reference_price)

    return QuoteSnapshot(
        ticker=ticker,
        name=name,
        price=price,
        change=change,
        change_percent=change_percent,
        series=tuple(series),
        logo_url=logo_url,
    )
