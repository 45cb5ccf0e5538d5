"""Tests for CGT event derivation — pure functions."""

from datetime import datetime
from decimal import Decimal

import pytest

from cryptocgt.accounting.cgt import gain_percentage, get_events_for_fy, trade_to_cgt_event
from cryptocgt.domain.models.tax import Trade


def _trade(
    buy: str = "2024-01-01",
    sell: str | None = "2024-03-01",
    buy_value: str | None = "1000",
    exit_value: str | None = "1500",
    asset: str = "BTC",
    exit_qty: str | None = "1",
    **kwargs,
) -> Trade:
    return Trade(
        asset=asset,
        buy_date=buy,
        exit_date=sell,
        buy_value=buy_value,
        exit_value=exit_value,
        buy_quantity="1",
        exit_quantity=exit_qty,
        exchange="Binance",
        **kwargs,
    )


class TestTradeToCGTEvent:
    def test_short_term_gain(self):
        event = trade_to_cgt_event(_trade())

        assert event.asset == "BTC"
        assert event.holding_days == 60  # 2024 is a leap year
        assert event.cost_base == Decimal("1000")
        assert event.sale_proceeds == Decimal("1500")
        assert event.capital_gain == Decimal("500")
        assert event.is_long_term is False
        assert event.discount_eligible is False
        assert event.discounted_gain == Decimal("500")
        assert event.exchange == "Binance"

    def test_rate_converts_both_sides(self):
        event = trade_to_cgt_event(_trade(), usd_aud_rate=1.5)

        assert event.cost_base == Decimal("1500")
        assert event.sale_proceeds == Decimal("2250")
        assert event.capital_gain == Decimal("750")

    def test_default_rate_is_no_conversion(self):
        assert trade_to_cgt_event(_trade()).cost_base == Decimal("1000")

    def test_falls_back_to_price_times_quantity(self):
        trade = Trade(
            asset="ETH",
            buy_date="2024-01-01",
            exit_date="2024-02-01",
            buy_price="2000",
            buy_quantity="2",
            exit_price="2500",
            exit_quantity="2",
        )
        event = trade_to_cgt_event(trade)

        assert event.cost_base == Decimal("4000")
        assert event.sale_proceeds == Decimal("5000")
        assert event.capital_gain == Decimal("1000")

    def test_values_treated_as_magnitudes(self):
        event = trade_to_cgt_event(_trade(buy_value="-1000", exit_value="-800"))

        assert event.cost_base == Decimal("1000")
        assert event.sale_proceeds == Decimal("800")
        assert event.capital_gain == Decimal("-200")

    def test_missing_values_are_zero(self):
        trade = Trade(asset="SOL", buy_date="2024-01-01", exit_date="2024-01-10", exit_quantity="1")
        event = trade_to_cgt_event(trade)

        assert event.cost_base == Decimal(0)
        assert event.sale_proceeds == Decimal(0)
        assert event.capital_gain == Decimal(0)
        assert event.gain_pct == Decimal(0)

    def test_holding_days_rounds_up_partial_days(self):
        trade = _trade(buy="2024-01-01T00:00:00", sell="2024-01-02T01:00:00")
        assert trade_to_cgt_event(trade).holding_days == 2

    def test_holding_days_never_negative(self):
        trade = _trade(buy="2024-03-01", sell="2024-01-01")
        assert trade_to_cgt_event(trade).holding_days == 0

    def test_exactly_365_days_is_short_term(self):
        event = trade_to_cgt_event(_trade(buy="2023-01-01", sell="2024-01-01"))

        assert event.holding_days == 365
        assert event.is_long_term is False
        assert event.discount_eligible is False
        assert event.discounted_gain == event.capital_gain

    def test_366_days_is_long_term_and_discounted(self):
        event = trade_to_cgt_event(_trade(buy="2023-01-01", sell="2024-01-02"))

        assert event.holding_days == 366
        assert event.is_long_term is True
        assert event.discount_eligible is True
        assert event.discounted_gain == Decimal("250")

    def test_long_term_loss_never_discounted(self):
        event = trade_to_cgt_event(_trade(buy="2022-01-01", sell="2024-01-01", exit_value="400"))

        assert event.is_long_term is True
        assert event.capital_gain == Decimal("-600")
        assert event.discount_eligible is False
        assert event.discounted_gain == event.capital_gain

    def test_gain_pct(self):
        assert trade_to_cgt_event(_trade()).gain_pct == Decimal("50")

    @pytest.mark.parametrize("rate", [0, -1.5])
    def test_non_positive_rate_rejected(self, rate):
        with pytest.raises(ValueError):
            trade_to_cgt_event(_trade(), usd_aud_rate=rate)


class TestGainPercentage:
    def test_zero_cost_base_is_zero(self):
        assert gain_percentage(Decimal("100"), Decimal(0)) == Decimal(0)

    def test_loss(self):
        assert gain_percentage(Decimal("-25"), Decimal("100")) == Decimal("-25")


class TestGetEventsForFY:
    def test_only_trades_closed_in_fy(self):
        trades = [
            _trade(sell="2024-06-30T23:59:00", asset="BEFORE"),
            _trade(sell="2024-07-01T00:00:00", asset="FIRST"),
            _trade(sell="2025-06-30T23:59:59", asset="LAST"),
            _trade(sell="2025-07-01T00:00:00", asset="AFTER"),
        ]
        events = get_events_for_fy(trades, "2024-25")
        assert [e.asset for e in events] == ["FIRST", "LAST"]

    def test_utc_timestamps_bucketed_by_local_date(self):
        trades = [
            _trade(sell="2024-06-30T19:00:00.000Z", asset="JUL_LOCAL"),
            _trade(sell="2024-06-30T13:00:00.000Z", asset="JUN_LOCAL"),
        ]
        assert [e.asset for e in get_events_for_fy(trades, "2024-25")] == ["JUL_LOCAL"]
        assert [e.asset for e in get_events_for_fy(trades, "2023-24")] == ["JUN_LOCAL"]

    def test_sorted_by_sell_date(self):
        trades = [
            _trade(sell="2025-03-01", asset="C"),
            _trade(sell="2024-08-01", asset="A"),
            _trade(sell="2024-12-01", asset="B"),
        ]
        events = get_events_for_fy(trades, "2024-25")
        assert [e.asset for e in events] == ["A", "B", "C"]
        assert events[0].sell_date == datetime(2024, 8, 1)

    def test_open_and_zero_quantity_trades_excluded(self):
        trades = [
            _trade(sell=None, asset="OPEN"),
            _trade(sell="2024-09-01", exit_qty="0", asset="ZERO"),
            _trade(sell="2024-09-01", exit_qty=None, asset="NONE"),
            _trade(sell="2024-09-01", asset="OK"),
        ]
        assert [e.asset for e in get_events_for_fy(trades, "2024-25")] == ["OK"]

    def test_malformed_dates_excluded(self):
        trades = [
            _trade(sell="31st of never", asset="BAD_SELL"),
            _trade(buy="", sell="2024-09-01", asset="BAD_BUY"),
            _trade(sell="2024-09-01", asset="OK"),
        ]
        assert [e.asset for e in get_events_for_fy(trades, "2024-25")] == ["OK"]

    def test_rate_applied_to_every_event(self):
        trades = [_trade(sell="2024-09-01"), _trade(sell="2024-10-01")]
        events = get_events_for_fy(trades, "2024-25", usd_aud_rate=2)
        assert all(e.cost_base == Decimal("2000") for e in events)

    def test_empty_fy(self):
        assert get_events_for_fy([_trade(sell="2022-09-01")], "2024-25") == []
