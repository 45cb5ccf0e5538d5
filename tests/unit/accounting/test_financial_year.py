"""Tests for financial year label / boundary resolution."""

from datetime import date, datetime

import pytest

from cryptocgt.accounting.financial_year import list_available_labels, resolve_boundaries, resolve_label
from cryptocgt.domain.models.tax import Trade
from cryptocgt.exceptions import InvalidFinancialYearError


def _closed(exit_date, exit_qty="1") -> Trade:
    return Trade(asset="BTC", buy_date="2023-01-01", exit_date=exit_date, exit_quantity=exit_qty)


class TestResolveLabel:
    def test_july_starts_new_fy(self):
        assert resolve_label(date(2024, 7, 1)) == "2024-25"

    def test_june_belongs_to_previous_start_year(self):
        assert resolve_label(date(2025, 6, 30)) == "2024-25"

    def test_february(self):
        assert resolve_label(datetime(2025, 2, 14, 9, 30)) == "2024-25"

    def test_december(self):
        assert resolve_label(date(2023, 12, 31)) == "2023-24"

    def test_century_rollover_pads_two_digits(self):
        assert resolve_label(date(2099, 8, 1)) == "2099-00"
        assert resolve_label(date(2008, 3, 1)) == "2007-08"


class TestResolveBoundaries:
    def test_start_and_end(self):
        start, end = resolve_boundaries("2024-25")
        assert start == datetime(2024, 7, 1, 0, 0, 0)
        assert end == datetime(2025, 6, 30, 23, 59, 59, 999000)

    def test_label_round_trips_through_boundaries(self):
        start, end = resolve_boundaries("2022-23")
        assert resolve_label(start) == "2022-23"
        assert resolve_label(end) == "2022-23"

    @pytest.mark.parametrize("label", ["", "2024", "24-25", "2024/25", "FY2024-25"])
    def test_invalid_label_raises(self, label):
        with pytest.raises(InvalidFinancialYearError):
            resolve_boundaries(label)

    def test_invalid_label_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_boundaries("garbage")


class TestListAvailableLabels:
    def test_sorted_unique_labels(self):
        trades = [
            _closed("2025-02-01"),
            _closed("2023-08-15"),
            _closed("2024-11-20"),
            _closed("2023-09-01"),
        ]
        assert list_available_labels(trades) == ["2023-24", "2024-25"]

    def test_open_trades_ignored(self):
        trades = [Trade(asset="ETH", buy_date="2024-01-01")]
        assert list_available_labels(trades) == []

    def test_zero_exit_quantity_ignored(self):
        assert list_available_labels([_closed("2024-09-01", exit_qty="0")]) == []

    def test_missing_exit_quantity_ignored(self):
        trades = [Trade(asset="ETH", buy_date="2024-01-01", exit_date="2024-09-01")]
        assert list_available_labels(trades) == []

    def test_unparseable_exit_date_skipped(self):
        trades = [_closed("not a date"), _closed("2024-09-01")]
        assert list_available_labels(trades) == ["2024-25"]

    def test_utc_exit_on_local_first_of_july(self):
        # 05:00 AEST on 1 July 2024
        assert list_available_labels([_closed("2024-06-30T19:00:00.000Z")]) == ["2024-25"]

    def test_empty(self):
        assert list_available_labels([]) == []
