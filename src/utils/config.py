"""Configuration management for the application."""

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from src.models.market_data import TimeRange
from src.services.quote_summary_builder import ReferencePricePolicy

# Load environment variables from .env file
load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MarketDataConfig:
    """Market data provider configuration."""

    api_key: str | None = None
    base_url: str = "https://api.polygon.io"
    timeout: int = 10  # Request timeout in seconds
    aggregates_limit: int = 5000


@dataclass
class ChartConfig:
    """Price chart configuration."""

    default_time_range: str = "1D"
    intraday_lookback_days: int = 4
    all_range_fallback_years: int = 20
    market_timezone: str = "America/New_York"
    reference_price_policy: str = "previous_close"


@dataclass
class OptionDefaultsConfig:
    """Default inputs of the option pricer form."""

    stock_price: float = 100.0
    strike_price: float = 100.0
    time_to_maturity: float = 0.25  # 3 months
    risk_free_rate: float = 0.05
    volatility: float = 0.2


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file_path: str | None = None


class Config:
    """Main application configuration."""

    def __init__(self):
        self.market_data = MarketDataConfig(
            api_key=os.getenv("POLYGON_API_KEY"),
            base_url=os.getenv("POLYGON_BASE_URL", "https://api.polygon.io").rstrip("/"),
            timeout=int(os.getenv("MARKET_DATA_TIMEOUT", "10")),
            aggregates_limit=int(os.getenv("AGGREGATES_LIMIT", "5000")),
        )

        self.chart = ChartConfig(
            default_time_range=os.getenv("DEFAULT_TIME_RANGE", "1D"),
            intraday_lookback_days=int(os.getenv("INTRADAY_LOOKBACK_DAYS", "4")),
            all_range_fallback_years=int(os.getenv("ALL_RANGE_FALLBACK_YEARS", "20")),
            market_timezone=os.getenv("MARKET_TIMEZONE", "America/New_York"),
            reference_price_policy=os.getenv("REFERENCE_PRICE_POLICY", "previous_close").lower(),
        )

        self.option_defaults = OptionDefaultsConfig(
            stock_price=float(os.getenv("OPTION_DEFAULT_STOCK_PRICE", "100")),
            strike_price=float(os.getenv("OPTION_DEFAULT_STRIKE_PRICE", "100")),
            time_to_maturity=float(os.getenv("OPTION_DEFAULT_TIME_TO_MATURITY", "0.25")),
            risk_free_rate=float(os.getenv("OPTION_DEFAULT_RISK_FREE_RATE", "0.05")),
            volatility=float(os.getenv("OPTION_DEFAULT_VOLATILITY", "0.2")),
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            file_path=os.getenv("LOG_FILE") or None,
        )

    def validate(self) -> bool:
        """
        Validate configuration.

        Returns:
            True if configuration is valid

        Raises:
            ValueError if configuration is invalid
        """
        if not self.market_data.api_key:
            raise ValueError("POLYGON_API_KEY environment variable is required")
        if self.market_data.timeout <= 0:
            raise ValueError("MARKET_DATA_TIMEOUT must be positive")

        try:
            TimeRange.parse(self.chart.default_time_range)
        except ValueError as e:
            raise ValueError(f"Invalid DEFAULT_TIME_RANGE: {e}") from e

        if self.chart.intraday_lookback_days < 1:
            raise ValueError("INTRADAY_LOOKBACK_DAYS must be at least 1")
        if self.chart.all_range_fallback_years < 1:
            raise ValueError("ALL_RANGE_FALLBACK_YEARS must be at least 1")

        try:
            ZoneInfo(self.chart.market_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Invalid MARKET_TIMEZONE: {self.chart.market_timezone}") from e

        try:
            ReferencePricePolicy(self.chart.reference_price_policy)
        except ValueError as e:
            raise ValueError(
                f"Invalid REFERENCE_PRICE_POLICY: {self.chart.reference_price_policy}"
            ) from e

        if self.logging.level not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL: {self.logging.level}")

        return True


# Global config instance
config = Config()
