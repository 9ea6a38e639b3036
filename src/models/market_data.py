"""Market data models for price series, time ranges and quote snapshots."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, tzinfo
from enum import Enum
from typing import Any

from dateutil.relativedelta import relativedelta


class BucketUnit(str, Enum):
    """Granularity unit of one raw price record."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"


@dataclass(frozen=True)
class RangePolicy:
    """Lookback window and bucket size requested for a time range."""

    lookback: relativedelta
    bucket_unit: BucketUnit
    bucket_multiplier: int = 1


class TimeRange(str, Enum):
    """Chart time ranges offered by the dashboard."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @property
    def policy(self) -> RangePolicy:
        """Lookback and bucket granularity for this range."""
        return _RANGE_POLICIES[self]

    @classmethod
    def parse(cls, value: "str | TimeRange") -> "TimeRange":
        """
        Parse a time range from user input.

        Args:
            value: Range value such as "1D" or "all" (case-insensitive)

        Returns:
            Matching TimeRange

        Raises:
            ValueError: If the value is not a known range
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper()
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid time range: {value!r}. Use one of {valid}")


# 1D over-shoots a three-day weekend plus one holiday; ALL is the fallback
# when a listing date is unknown.
_RANGE_POLICIES: dict[TimeRange, RangePolicy] = {
    TimeRange.ONE_DAY: RangePolicy(relativedelta(days=4), BucketUnit.MINUTE, 5),
    TimeRange.ONE_WEEK: RangePolicy(relativedelta(days=7), BucketUnit.HOUR, 1),
    TimeRange.ONE_MONTH: RangePolicy(relativedelta(months=1), BucketUnit.DAY, 1),
    TimeRange.SIX_MONTHS: RangePolicy(relativedelta(months=6), BucketUnit.DAY, 1),
    TimeRange.ONE_YEAR: RangePolicy(relativedelta(years=1), BucketUnit.DAY, 1),
    TimeRange.ALL: RangePolicy(relativedelta(years=20), BucketUnit.MONTH, 1),
}


@dataclass(frozen=True)
class PricePoint:
    """A single price observation."""

    timestamp: datetime
    price: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to the chart point format used by the dashboard."""
        return {"date": self.timestamp.isoformat(), "value": self.price}


@dataclass(frozen=True)
class RangeQuery:
    """Provider query window derived from a time range and a reference instant."""

    time_range: TimeRange
    from_date: date
    to_date: date
    bucket_unit: BucketUnit
    bucket_multiplier: int
    tz: tzinfo = UTC

    def __post_init__(self):
        if self.from_date > self.to_date:
            raise ValueError(
                f"from_date {self.from_date} must not be after to_date {self.to_date}"
            )
        if self.bucket_multiplier <= 0:
            raise ValueError("bucket_multiplier must be positive")


@dataclass(frozen=True)
class TickerDetails:
    """Reference data about a listed ticker."""

    ticker: str
    name: str
    list_date: date | None = None
    logo_url: str | None = None


@dataclass(frozen=True)
class TickerSearchResult:
    """A ticker matching a search query."""

    ticker: str
    name: str
    market: str | None = None
    primary_exchange: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "name": self.name,
            "market": self.market,
            "primary_exchange": self.primary_exchange,
        }


@dataclass(frozen=True)
class QuoteSnapshot:
    """Current price, change and chart series for one ticker."""

    ticker: str
    name: str
    price: float
    change: float
    change_percent: float
    series: tuple[PricePoint, ...] = field(default_factory=tuple)
    logo_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to a JSON-serializable dictionary."""
        result = {
            "ticker": self.ticker,
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "change_percent": self.change_percent,
            "chart_data": [point.to_dict() for point in self.series],
        }
        if self.logo_url:
            result["logo_url"] = self.logo_url
        return result
