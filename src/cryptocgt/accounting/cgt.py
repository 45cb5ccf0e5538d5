"""CGT event derivation — pure functions, one event per closed trade."""

import logging
import math
from collections.abc import Iterable
from decimal import Decimal

from cryptocgt.accounting.financial_year import resolve_boundaries
from cryptocgt.domain.models.tax import CGTEvent, Trade

logger = logging.getLogger(__name__)

CGT_DISCOUNT = Decimal("0.5")
LONG_TERM_DAYS = 365
SECONDS_PER_DAY = 86400


def _total_value(total: Decimal | None, price: Decimal | None, quantity: Decimal | None) -> Decimal:
    """Stored total if present and non-zero, else price * quantity, as a magnitude."""
    if total:
        return abs(total)
    if price and quantity:
        return abs(price * quantity)
    return Decimal(0)


def gain_percentage(gain: Decimal, cost_base: Decimal) -> Decimal:
    """Gain as a percentage of cost base; 0 when the cost base is 0."""
    if cost_base == 0:
        return Decimal(0)
    return gain / cost_base * 100


def trade_to_cgt_event(trade: Trade, usd_aud_rate: Decimal | float = 1) -> CGTEvent:
    """Convert one closed trade into a CGT event, converting USD amounts with usd_aud_rate.

    Both dates must be present; get_events_for_fy filters out trades without them.
    """
    rate = Decimal(str(usd_aud_rate))
    if rate <= 0:
        raise ValueError(f"USD/AUD rate must be positive, got {usd_aud_rate}")

    buy_date = trade.buy_date
    sell_date = trade.exit_date
    elapsed_days = (sell_date - buy_date).total_seconds() / SECONDS_PER_DAY
    holding_days = max(0, math.ceil(elapsed_days))

    cost_base = _total_value(trade.buy_value, trade.buy_price, trade.buy_quantity) * rate
    sale_proceeds = _total_value(trade.exit_value, trade.exit_price, trade.exit_quantity) * rate
    capital_gain = sale_proceeds - cost_base

    is_long_term = holding_days > LONG_TERM_DAYS
    discount_eligible = is_long_term and capital_gain > 0
    discounted_gain = capital_gain * CGT_DISCOUNT if discount_eligible else capital_gain

    return CGTEvent(
        asset=trade.asset,
        buy_date=buy_date,
        sell_date=sell_date,
        holding_days=holding_days,
        cost_base=cost_base,
        sale_proceeds=sale_proceeds,
        capital_gain=capital_gain,
        gain_pct=gain_percentage(capital_gain, cost_base),
        is_long_term=is_long_term,
        discount_eligible=discount_eligible,
        discounted_gain=discounted_gain,
        exchange=trade.exchange,
    )


def get_events_for_fy(
    trades: Iterable[Trade],
    financial_year: str,
    usd_aud_rate: Decimal | float = 1,
) -> list[CGTEvent]:
    """Derive CGT events for trades closed within a financial year, sorted by sell date."""
    start, end = resolve_boundaries(financial_year)
    events: list[CGTEvent] = []
    skipped = 0

    for trade in trades:
        if not trade.is_closed:
            continue
        if not start <= trade.exit_date <= end:
            continue
        if trade.buy_date is None:
            skipped += 1
            continue
        events.append(trade_to_cgt_event(trade, usd_aud_rate))

    if skipped:
        logger.debug("FY %s: skipped %d closed trades without a valid buy date", financial_year, skipped)

    events.sort(key=lambda e: e.sell_date)
    return events
