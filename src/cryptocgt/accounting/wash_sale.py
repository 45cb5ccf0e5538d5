"""Wash-sale detection: loss sales followed by a same-asset rebuy within the window."""

import math
from collections.abc import Iterable

from cryptocgt.accounting.cgt import SECONDS_PER_DAY
from cryptocgt.domain.models.tax import CGTEvent, Trade, WashSaleWarning

WASH_SALE_WINDOW_DAYS = 30


def detect_wash_sales(
    events: Iterable[CGTEvent],
    all_trades: Iterable[Trade],
    window_days: int = WASH_SALE_WINDOW_DAYS,
) -> list[WashSaleWarning]:
    """Flag loss events whose asset was bought again 1..window_days days after the sale.

    Advisory only, tax figures are untouched. At most one warning per loss:
    trades are scanned in buy-date order and the first qualifying rebuy wins.
    """
    rebuys = sorted((t for t in all_trades if t.buy_date is not None), key=lambda t: t.buy_date)
    warnings: list[WashSaleWarning] = []

    for loss in events:
        if loss.capital_gain >= 0:
            continue
        for trade in rebuys:
            if trade.asset != loss.asset:
                continue
            elapsed = (trade.buy_date - loss.sell_date).total_seconds() / SECONDS_PER_DAY
            days_between = math.ceil(elapsed)
            if 0 < days_between <= window_days:
                warnings.append(WashSaleWarning(
                    asset=loss.asset,
                    sell_date=loss.sell_date,
                    loss_amount=abs(loss.capital_gain),
                    rebuy_date=trade.buy_date,
                    days_between=days_between,
                ))
                break

    return warnings
