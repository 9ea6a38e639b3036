"""Pytest configuration and fixtures."""

from datetime import date, datetime, timedelta
from unittest.mock import Mock
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from main import app
from src.api.dependencies import get_market_data_aggregator, get_option_defaults
from src.models.market_data import PricePoint
from src.services.market_data_aggregator import MarketDataAggregator
from src.utils.config import Config, OptionDefaultsConfig

NEW_YORK = ZoneInfo("America/New_York")


def session_points(day: date, prices: list[float]) -> list[PricePoint]:
    """Build 5-minute points starting at 09:30 New York time on the given day."""
    start = datetime(day.year, day.month, day.day, 9, 30, tzinfo=NEW_YORK)
    return [
        PricePoint(timestamp=start + timedelta(minutes=5 * i), price=price)
        for i, price in enumerate(prices)
    ]


@pytest.fixture
def make_session():
    """Factory fixture building one intraday session of 5-minute points."""
    return session_points


@pytest.fixture
def app_config():
    """Configuration with a test API key and known chart settings."""
    cfg = Config()
    cfg.market_data.api_key = "test-key"
    cfg.market_data.base_url = "https://api.polygon.test"
    cfg.market_data.timeout = 5
    cfg.market_data.aggregates_limit = 5000
    cfg.chart.default_time_range = "1D"
    cfg.chart.intraday_lookback_days = 4
    cfg.chart.all_range_fallback_years = 20
    cfg.chart.market_timezone = "America/New_York"
    cfg.chart.reference_price_policy = "previous_close"
    cfg.logging.level = "DEBUG"
    cfg.logging.file_path = None
    return cfg


@pytest.fixture
def stub_aggregator():
    """Aggregator stand-in for API tests."""
    return Mock(spec=MarketDataAggregator)


@pytest.fixture
def test_client(stub_aggregator):
    """Create a test client with the aggregator and option defaults overridden."""
    app.dependency_overrides[get_market_data_aggregator] = lambda: stub_aggregator
    app.dependency_overrides[get_option_defaults] = lambda: OptionDefaultsConfig()

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
