"""Resolve dashboard time ranges into provider query windows."""

from datetime import UTC, date, datetime

from dateutil.relativedelta import relativedelta

from src.models.market_data import RangeQuery, TimeRange


def resolve_time_range(
    time_range: TimeRange | str,
    now: datetime,
    inception_date: date | None = None,
    *,
    intraday_lookback_days: int | None = None,
    fallback_years: int | None = None,
) -> RangeQuery:
    """
    Build the provider query window for a time range.

    The 1D window reaches back several days so that at least one trading
    session is included after weekends and holidays; the series normalizer
    later narrows it down to the latest session.

    Args:
        time_range: Range to resolve
        now: Reference instant; its timezone defines calendar days
        inception_date: Listing date of the ticker, used by ALL when known
        intraday_lookback_days: Overrides the 1D lookback in days
        fallback_years: Overrides the ALL lookback used without a listing date

    Returns:
        RangeQuery with from/to dates and bucket granularity

    Raises:
        ValueError: If the range is unknown or a lookback override is not positive
    """
    time_range = TimeRange.parse(time_range)
    policy = time_range.policy
    lookback = policy.lookback

    if time_range is TimeRange.ONE_DAY and intraday_lookback_days is not None:
        if intraday_lookback_days < 1:
            raise ValueError("intraday_lookback_days must be at least 1")
        lookback = relativedelta(days=intraday_lookback_days)
    if time_range is TimeRange.ALL and fallback_years is not None:
        if fallback_years < 1:
            raise ValueError("fallback_years must be at least 1")
        lookback = relativedelta(years=fallback_years)

    to_date = now.date()
    if time_range is TimeRange.ALL and inception_date is not None:
        from_date = min(inception_date, to_date)
    else:
        from_date = to_date - lookback

    return RangeQuery(
        time_range=time_range,
        from_date=from_date,
        to_date=to_date,
        bucket_unit=policy.bucket_unit,
        bucket_multiplier=policy.bucket_multiplier,
        tz=now.tzinfo or UTC,
    )
