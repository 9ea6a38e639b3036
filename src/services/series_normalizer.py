"""Normalize raw provider price records into an ordered chart series."""

import math
from collections.abc import Iterable
from datetime import datetime

from src.models.market_data import PricePoint, RangeQuery, TimeRange


class InvalidPricePointError(ValueError):
    """Raised when a raw record carries a price that is not a finite number."""


def _localize(point: PricePoint, query: RangeQuery) -> PricePoint:
    if not math.isfinite(point.price):
        raise InvalidPricePointError(
            f"Non-finite price {point.price!r} at {point.timestamp.isoformat()}"
        )
    if point.timestamp.tzinfo is None:
        return PricePoint(timestamp=point.timestamp.replace(tzinfo=query.tz), price=point.price)
    return point


def _sort_key(point: PricePoint) -> datetime:
    return point.timestamp


def normalize_series(records: Iterable[PricePoint], query: RangeQuery) -> list[PricePoint]:
    """
    Clip, narrow and order raw price records for the requested range.

    Records outside the query window are dropped, unless that would drop
    every record. For 1D only the most recent calendar day present is kept,
    which collapses the over-shooting intraday window to the latest trading
    session. Exact timestamp collisions keep the later-arriving record.
    Naive timestamps are taken to be in the query's timezone.

    Args:
        records: Raw price points in provider order
        query: Query the records were fetched with

    Returns:
        Points sorted ascending by timestamp, without duplicate timestamps

    Raises:
        InvalidPricePointError: If a record has a NaN or infinite price
    """
    dated = []
    for record in records:
        point = _localize(record, query)
        dated.append((point.timestamp.astimezone(query.tz).date(), point))

    in_window = [item for item in dated if query.from_date <= item[0] <= query.to_date]
    if in_window:
        dated = in_window

    if query.time_range is TimeRange.ONE_DAY and dated:
        latest_day = max(day for day, _ in dated)
        dated = [item for item in dated if item[0] == latest_day]

    by_timestamp: dict[datetime, PricePoint] = {}
    for _, point in dated:
        by_timestamp[point.timestamp] = point

    return sorted(by_timestamp.values(), key=_sort_key)
