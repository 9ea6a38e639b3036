"""Market data aggregator fetching Polygon.io data and building quote snapshots."""

from datetime import UTC, date, datetime
from typing import Any
from zoneinfo import ZoneInfo

import requests
from pydantic import ValidationError

from src.models.market_data import (
    PricePoint,
    QuoteSnapshot,
    RangeQuery,
    TickerDetails,
    TickerSearchResult,
    TimeRange,
)
from src.models.provider_schemas import (
    PolygonAggregatesResponse,
    PolygonPreviousCloseResponse,
    PolygonTickerDetailsResponse,
    PolygonTickerSearchResponse,
)
from src.services.quote_summary_builder import ReferencePricePolicy, build_quote_snapshot
from src.services.series_normalizer import InvalidPricePointError, normalize_series
from src.services.time_range_resolver import resolve_time_range
from src.utils.config import Config, config as default_config
from src.utils.logger import StructuredLogger

SOURCE_NAME = "Polygon.io"
UNKNOWN_COMPANY = "Unknown Company"


class MarketDataProviderError(Exception):
    """Raised when the market data provider cannot be reached or rejects a request."""


class MarketDataUnavailableError(Exception):
    """Raised when no usable price data exists for a ticker and range."""


class MarketDataAggregator:
    """Fetches market data from Polygon.io and turns it into quote snapshots."""

    def __init__(self, app_config: Config | None = None):
        """
        Initialize the aggregator from configuration.

        Args:
            app_config: Application configuration (defaults to the global config)
        """
        self.config = app_config or default_config
        self.base_url = self.config.market_data.base_url
        self.api_key = self.config.market_data.api_key
        self.timeout = self.config.market_data.timeout
        self.reference_policy = ReferencePricePolicy(self.config.chart.reference_price_policy)
        self.logger = StructuredLogger(
            "MarketDataAggregator",
            file_path=self.config.logging.file_path,
            min_level=self.config.logging.level,
        )

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Perform a GET request against the provider.

        Raises:
            MarketDataProviderError: On transport errors or non-2xx responses
        """
        headers = {"Authorization": f"Bearer {self.api_key or ''}"}
        try:
            response = requests.get(
                f"{self.base_url}{path}", params=params or {}, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.HTTPError:
            # The provider error text echoes the request; keep only the status.
            raise MarketDataProviderError(
                f"Request to {path} failed with status {response.status_code}"
            ) from None
        except (requests.RequestException, ValueError) as e:
            raise MarketDataProviderError(f"Request to {path} failed: {type(e).__name__}") from None

    def search_tickers(self, query: str, limit: int = 10) -> list[TickerSearchResult]:
        """
        Search active tickers by symbol or company name.

        Args:
            query: Search text
            limit: Maximum number of results

        Returns:
            Matching tickers; empty on an empty query or provider failure
        """
        if not query or not query.strip():
            return []

        try:
            data = self._get(
                "/v3/reference/tickers",
                {"search": query.strip(), "active": "true", "limit": limit},
            )
            items = PolygonTickerSearchResponse.model_validate(data).results
        except (MarketDataProviderError, ValidationError) as e:
            self.logger.error(
                "Ticker search failed",
                context={"source": SOURCE_NAME, "query": query, "result": "failed"},
                exception=e,
            )
            return []

        return [
            TickerSearchResult(
                ticker=item.ticker,
                name=item.name,
                market=item.market,
                primary_exchange=item.primary_exchange,
            )
            for item in items
        ]

    def fetch_ticker_details(self, ticker: str) -> TickerDetails:
        """
        Fetch company name, listing date and logo for a ticker.

        Falls back to an "Unknown Company" name when details are unavailable.
        """
        try:
            data = self._get(f"/v3/reference/tickers/{ticker}")
            details = PolygonTickerDetailsResponse.model_validate(data).results
        except (MarketDataProviderError, ValidationError) as e:
            self.logger.warning(
                "Ticker details unavailable, using fallback name",
                context={
                    "source": SOURCE_NAME,
                    "ticker": ticker,
                    "result": "fallback",
                    "error_type": type(e).__name__,
                },
            )
            return TickerDetails(ticker=ticker, name=UNKNOWN_COMPANY)

        logo_url = None
        if details.branding and details.branding.logo_url:
            logo_url = f"{details.branding.logo_url}?apiKey={self.api_key or ''}"

        return TickerDetails(
            ticker=ticker,
            name=details.name,
            list_date=details.list_date,
            logo_url=logo_url,
        )

    def fetch_aggregates(self, ticker: str, query: RangeQuery) -> list[PricePoint]:
        """
        Fetch raw price bars for a resolved range.

        Each bar is adapted to a PricePoint at its UTC start time, priced at
        its close.

        Returns:
            Price points in provider order

        Raises:
            MarketDataProviderError: If the provider cannot be reached
            MarketDataUnavailableError: If the provider payload is malformed
        """
        path = (
            f"/v2/aggs/ticker/{ticker}/range/{query.bucket_multiplier}/"
            f"{query.bucket_unit.value}/{query.from_date.isoformat()}/{query.to_date.isoformat()}"
        )
        params = {
            "adjusted": "true",
            "sort": "asc",
            "limit": self.config.market_data.aggregates_limit,
        }
        context = {
            "source": SOURCE_NAME,
            "ticker": ticker,
            "range": query.time_range.value,
            "from": query.from_date.isoformat(),
            "to": query.to_date.isoformat(),
        }

        self.logger.info("Starting aggregates fetch", context=context)
        try:
            data = self._get(path, params)
        except MarketDataProviderError as e:
            self.logger.error(
                f"Error fetching aggregates for {ticker}",
                context={**context, "result": "failed"},
                exception=e,
            )
            raise

        try:
            response = PolygonAggregatesResponse.model_validate(data)
        except ValidationError as e:
            self.logger.error(
                f"Malformed aggregates payload for {ticker}",
                context={**context, "result": "invalid"},
                exception=e,
            )
            raise MarketDataUnavailableError(f"Malformed price data for {ticker}") from e

        points = [
            PricePoint(
                timestamp=datetime.fromtimestamp(bar.timestamp_ms / 1000, tz=UTC),
                price=bar.close,
            )
            for bar in response.results
        ]
        self.logger.info(
            "Successfully fetched aggregates",
            context={**context, "result": "success", "records": len(points)},
        )
        return points

    def fetch_previous_close(self, ticker: str) -> float | None:
        """
        Fetch the close of the previous trading session.

        Returns:
            Previous close, or None when unavailable
        """
        try:
            data = self._get(f"/v2/aggs/ticker/{ticker}/prev", {"adjusted": "true"})
            response = PolygonPreviousCloseResponse.model_validate(data)
        except (MarketDataProviderError, ValidationError) as e:
            self.logger.error(
                f"Error fetching previous close for {ticker}",
                context={"source": SOURCE_NAME, "ticker": ticker, "result": "failed"},
                exception=e,
            )
            return None

        if not response.results:
            self.logger.warning(
                "Previous close not found in response",
                context={"source": SOURCE_NAME, "ticker": ticker, "result": "not_found"},
            )
            return None
        return response.results[0].close

    def resolve_query(
        self,
        time_range: TimeRange | str,
        now: datetime | None = None,
        inception_date: date | None = None,
    ) -> RangeQuery:
        """Resolve a time range with the configured market timezone and lookbacks."""
        if now is None:
            now = datetime.now(ZoneInfo(self.config.chart.market_timezone))
        return resolve_time_range(
            time_range,
            now,
            inception_date,
            intraday_lookback_days=self.config.chart.intraday_lookback_days,
            fallback_years=self.config.chart.all_range_fallback_years,
        )

    def get_stock_quote(
        self,
        ticker: str,
        time_range: TimeRange | str,
        now: datetime | None = None,
    ) -> QuoteSnapshot:
        """
        Fetch, normalize and summarize price data for a ticker.

        Change is measured against the configured reference price policy.
        A missing previous close counts as a zero reference, which reports a
        zero percent change.

        Args:
            ticker: Ticker symbol (case-insensitive)
            time_range: Chart range
            now: Reference instant (defaults to now in the market timezone)

        Returns:
            QuoteSnapshot for the ticker

        Raises:
            ValueError: If the time range is unknown
            MarketDataUnavailableError: If no price data is available
            MarketDataProviderError: If the aggregates request fails
        """
        ticker = ticker.strip().upper()
        time_range = TimeRange.parse(time_range)

        details = self.fetch_ticker_details(ticker)
        query = self.resolve_query(time_range, now, details.list_date)
        try:
            series = normalize_series(self.fetch_aggregates(ticker, query), query)
        except InvalidPricePointError as e:
            self.logger.error(
                f"Invalid price record for {ticker}",
                context={"source": SOURCE_NAME, "ticker": ticker, "result": "invalid"},
                exception=e,
            )
            raise MarketDataUnavailableError(f"Malformed price data for {ticker}") from e

        if not series:
            self.logger.warning(
                "No price data available",
                context={
                    "source": SOURCE_NAME,
                    "ticker": ticker,
                    "range": time_range.value,
                    "result": "not_found",
                },
            )
            raise MarketDataUnavailableError(
                f"No price data available for {ticker} ({time_range.value})"
            )

        reference_price = None
        if self.reference_policy is ReferencePricePolicy.PREVIOUS_CLOSE:
            previous_close = self.fetch_previous_close(ticker)
            reference_price = previous_close if previous_close is not None else 0.0

        snapshot = build_quote_snapshot(
            ticker,
            details.name,
            series,
            reference_price,
            logo_url=details.logo_url,
        )
        self.logger.info(
            "Built quote snapshot",
            context={
                "ticker": ticker,
                "range": time_range.value,
                "points": len(series),
                "price": snapshot.price,
                "change_percent": snapshot.change_percent,
                "reference_policy": self.reference_policy.value,
            },
        )
        return snapshot
