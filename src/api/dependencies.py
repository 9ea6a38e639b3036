"""FastAPI dependencies providing configured services."""

from functools import lru_cache

from src.services.market_data_aggregator import MarketDataAggregator
from src.utils.config import OptionDefaultsConfig, config


@lru_cache(maxsize=1)
def get_market_data_aggregator() -> MarketDataAggregator:
    """
    FastAPI dependency returning the shared market data aggregator.

    The aggregator holds no per-request state, so one instance serves all
    requests. Tests override this dependency with a stub.

    Returns:
        MarketDataAggregator configured from the global config
    """
    return MarketDataAggregator(config)


def get_option_defaults() -> OptionDefaultsConfig:
    """FastAPI dependency returning the option pricer form defaults."""
    return config.option_defaults
