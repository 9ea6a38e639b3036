"""Pydantic schemas validating Polygon.io REST payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class PolygonAggregate(BaseModel):
    """One aggregate bar (candle) from the aggregates endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp_ms: int = Field(alias="t")
    close: float = Field(alias="c")
    open: float | None = Field(default=None, alias="o")
    high: float | None = Field(default=None, alias="h")
    low: float | None = Field(default=None, alias="l")
    volume: float | None = Field(default=None, alias="v")


class PolygonAggregatesResponse(BaseModel):
    """Response of /v2/aggs/ticker/{ticker}/range/..."""

    ticker: str | None = None
    results: list[PolygonAggregate] = Field(default_factory=list)


class PolygonPreviousCloseResponse(BaseModel):
    """Response of /v2/aggs/ticker/{ticker}/prev."""

    results: list[PolygonAggregate] = Field(default_factory=list)


class PolygonBranding(BaseModel):
    logo_url: str | None = None


class PolygonTickerDetails(BaseModel):
    """The `results` object of /v3/reference/tickers/{ticker}."""

    ticker: str | None = None
    name: str
    list_date: date | None = None
    branding: PolygonBranding | None = None


class PolygonTickerDetailsResponse(BaseModel):
    """Response of /v3/reference/tickers/{ticker}."""

    results: PolygonTickerDetails


class PolygonTickerSearchItem(BaseModel):
    ticker: str
    name: str
    market: str | None = None
    primary_exchange: str | None = None


class PolygonTickerSearchResponse(BaseModel):
    """Response of /v3/reference/tickers?search=..."""

    results: list[PolygonTickerSearchItem] = Field(default_factory=list)
