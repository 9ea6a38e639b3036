"""Tests for quote snapshot derivation."""

import math
from datetime import UTC, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.models.market_data import PricePoint, QuoteSnapshot
from src.services.quote_summary_builder import (
    QuoteDataUnavailableError,
    build_quote_snapshot,
    calculate_change,
)

START = datetime(2024, 3, 8, 14, 30, tzinfo=UTC)


def make_series(prices: list[float]) -> list[PricePoint]:
    return [PricePoint(START + timedelta(minutes=5 * i), price) for i, price in enumerate(prices)]


class TestBuildQuoteSnapshot:
    """Test suite for build_quote_snapshot."""

    def test_window_start_reference(self):
        snapshot = build_quote_snapshot("AAPL", "Apple Inc.", make_series([100.0, 105.0, 110.0]))

        assert snapshot.price == 110.0
        assert snapshot.change == pytest.approx(10.0)
        assert snapshot.change_percent == pytest.approx(10.0)

    def test_previous_close_reference(self):
        snapshot = build_quote_snapshot(
            "AAPL", "Apple Inc.", make_series([100.0, 99.0]), reference_price=110.0
        )

        assert snapshot.price == 99.0
        assert snapshot.change == pytest.approx(-11.0)
        assert snapshot.change_percent == pytest.approx(-10.0)

    def test_zero_reference_price_reports_zero_percent(self):
        snapshot = build_quote_snapshot("AAPL", "Apple Inc.", make_series([50.0]), reference_price=0.0)

        assert snapshot.change == 50.0
        assert snapshot.change_percent == 0
        assert not math.isnan(snapshot.change_percent)

    def test_zero_window_start_reports_zero_percent(self):
        snapshot = build_quote_snapshot("PNNY", "Penny Corp", make_series([0.0, 0.5]))

        assert snapshot.change == 0.5
        assert snapshot.change_percent == 0

    def test_empty_series_uses_reference_price(self):
        snapshot = build_quote_snapshot("AAPL", "Apple Inc.", [], reference_price=120.0)

        assert snapshot.price == 120.0
        assert snapshot.change == 0.0
        assert snapshot.change_percent == 0.0
        assert snapshot.series == ()

    def test_empty_series_without_reference_raises(self):
        with pytest.raises(QuoteDataUnavailableError, match="AAPL"):
            build_quote_snapshot("AAPL", "Apple Inc.", [])

    def test_snapshot_is_immutable(self):
        snapshot = build_quote_snapshot("AAPL", "Apple Inc.", make_series([1.0, 2.0]))

        with pytest.raises(AttributeError):
            snapshot.price = 3.0

    def test_to_dict(self):
        series = make_series([100.0, 101.0])
        snapshot = build_quote_snapshot(
            "AAPL", "Apple Inc.", series, reference_price=100.0, logo_url="https://logo.test/a.svg"
        )

        assert snapshot.to_dict() == {
            "ticker": "AAPL",
            "name": "Apple Inc.",
            "price": 101.0,
            "change": 1.0,
            "change_percent": 1.0,
            "chart_data": [
                {"date": "2024-03-08T14:30:00+00:00", "value": 100.0},
                {"date": "2024-03-08T14:35:00+00:00", "value": 101.0},
            ],
            "logo_url": "https://logo.test/a.svg",
        }

    def test_to_dict_omits_missing_logo(self):
        snapshot = QuoteSnapshot("AAPL", "Apple Inc.", 1.0, 0.0, 0.0)
        assert "logo_url" not in snapshot.to_dict()

    @given(
        prices=st.lists(
            st.floats(min_value=0.01, max_value=1e6, allow_nan=False, allow_infinity=False),
            min_size=1,
            max_size=20,
        ),
        reference=st.one_of(
            st.none(),
            st.just(0.0),
            st.floats(min_value=0.01, max_value=1e6, allow_nan=False, allow_infinity=False),
        ),
    )
    def test_change_invariants(self, prices, reference):
        """
        Property: change is price minus the reference and change_percent is always finite.
        """
        snapshot = build_quote_snapshot("TEST", "Test Co", make_series(prices), reference)
        expected_reference = prices[0] if reference is None else reference

        assert snapshot.price == prices[-1]
        assert snapshot.change == prices[-1] - expected_reference
        assert math.isfinite(snapshot.change_percent)
        if expected_reference == 0:
            assert snapshot.change_percent == 0.0


class TestCalculateChange:
    """Test suite for calculate_change."""

    def test_positive_change(self):
        assert calculate_change(110.0, 100.0) == pytest.approx((10.0, 10.0))

    def test_zero_reference(self):
        change, change_percent = calculate_change(5.0, 0.0)
        assert change == 5.0
        assert change_percent == 0.0
