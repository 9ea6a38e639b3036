"""API routes for stock quotes, ticker search and option pricing."""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, ConfigDict, Field

from src.api.dependencies import get_market_data_aggregator, get_option_defaults
from src.api.error_handlers import handle_service_error
from src.models.option_pricing import OptionPricingInput
from src.services.market_data_aggregator import (
    MarketDataAggregator,
    MarketDataProviderError,
    MarketDataUnavailableError,
)
from src.services.option_pricer import calculate_black_scholes
from src.utils.config import OptionDefaultsConfig, config
from src.utils.logger import StructuredLogger

router = APIRouter()
logger = StructuredLogger("DashboardAPI", file_path=config.logging.file_path, min_level=config.logging.level)


class OptionPricingRequest(BaseModel):
    """Request model for pricing a European option; omitted fields use the form defaults."""

    model_config = ConfigDict(allow_inf_nan=False)

    stock_price: Optional[float] = Field(None, gt=0, description="Underlying price (S)")
    strike_price: Optional[float] = Field(None, gt=0, description="Strike price (K)")
    time_to_maturity: Optional[float] = Field(None, gt=0, description="Years to expiry (T)")
    risk_free_rate: Optional[float] = Field(None, ge=0, description="Annual risk-free rate (r)")
    volatility: Optional[float] = Field(None, ge=0, description="Annual volatility (sigma)")

    def to_input(self, defaults: OptionDefaultsConfig) -> OptionPricingInput:
        """Fill omitted fields from defaults."""
        return OptionPricingInput(
            stock_price=self.stock_price if self.stock_price is not None else defaults.stock_price,
            strike_price=(
                self.strike_price if self.strike_price is not None else defaults.strike_price
            ),
            time_to_maturity=(
                self.time_to_maturity
                if self.time_to_maturity is not None
                else defaults.time_to_maturity
            ),
            risk_free_rate=(
                self.risk_free_rate if self.risk_free_rate is not None else defaults.risk_free_rate
            ),
            volatility=self.volatility if self.volatility is not None else defaults.volatility,
        )


class OptionPricingResponse(BaseModel):
    """Response model for option prices."""

    call_price: float
    put_price: float


@router.get("/stocks/{ticker}")
def get_stock_quote(
    ticker: str = Path(..., min_length=1, max_length=16),
    time_range: str = Query(config.chart.default_time_range, alias="range", description="1D, 1W, 1M, 6M, 1Y or ALL"),
    aggregator: MarketDataAggregator = Depends(get_market_data_aggregator),
):
    """
    Get the current price, change and chart series for a ticker.

    Args:
        ticker: Ticker symbol
        time_range: Chart time range
        aggregator: Market data aggregator

    Returns:
        Quote snapshot with chart data
    """
    try:
        snapshot = aggregator.get_stock_quote(ticker, time_range)
    except (ValueError, MarketDataUnavailableError, MarketDataProviderError) as e:
        logger.warning(
            "Quote request failed",
            context={"ticker": ticker, "range": time_range, "error_type": type(e).__name__},
        )
        raise handle_service_error(e, context="quote").to_http_exception()

    return snapshot.to_dict()


@router.get("/tickers")
def search_tickers(
    search: str = Query("", description="Ticker symbol or company name"),
    limit: int = Query(10, ge=1, le=50),
    aggregator: MarketDataAggregator = Depends(get_market_data_aggregator),
):
    """
    Search active tickers.

    Args:
        search: Search text
        limit: Maximum number of results
        aggregator: Market data aggregator

    Returns:
        Matching tickers and their count
    """
    results = aggregator.search_tickers(search, limit=limit)
    return {
        "results": [result.to_dict() for result in results],
        "count": len(results),
    }


@router.post("/options/price", response_model=OptionPricingResponse)
async def price_option(
    request: OptionPricingRequest,
    defaults: OptionDefaultsConfig = Depends(get_option_defaults),
):
    """
    Calculate theoretical Black-Scholes call and put prices.

    Args:
        request: Option parameters
        defaults: Defaults for omitted parameters

    Returns:
        Call and put prices
    """
    result = calculate_black_scholes(request.to_input(defaults))
    return result.to_dict()


@router.get("/options/defaults")
async def get_option_pricing_defaults(
    defaults: OptionDefaultsConfig = Depends(get_option_defaults),
):
    """Default option pricer inputs used to pre-fill the form."""
    return {
        "stock_price": defaults.stock_price,
        "strike_price": defaults.strike_price,
        "time_to_maturity": defaults.time_to_maturity,
        "risk_free_rate": defaults.risk_free_rate,
        "volatility": defaults.volatility,
    }
