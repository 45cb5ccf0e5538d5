"""Monthly and per-asset aggregates of CGT events for reporting."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from cryptocgt.domain.models.tax import AssetSummary, CGTEvent, MonthlyGain

# Financial-year order: Jul=0 .. Jun=11
FY_MONTH_LABELS = ("Jul", "Aug", "Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar", "Apr", "May", "Jun")


def fy_month_index(calendar_month: int) -> int:
    """Map a calendar month (1-12) to its position in the financial year (0-11)."""
    return (calendar_month - 7) % 12


def monthly_gains(events: Iterable[CGTEvent]) -> list[MonthlyGain]:
    """Bucket events by sell month; always returns all 12 months, July first."""
    months = [MonthlyGain(month=label) for label in FY_MONTH_LABELS]

    for e in events:
        bucket = months[fy_month_index(e.sell_date.month)]
        if e.capital_gain >= 0:
            bucket.gains += e.capital_gain
        else:
            bucket.losses += abs(e.capital_gain)
        bucket.net += e.capital_gain
        bucket.count += 1

    return months


@dataclass
class _AssetTotals:
    gains: Decimal = Decimal(0)
    losses: Decimal = Decimal(0)
    holding_days: list[int] = field(default_factory=list)


def asset_summaries(events: Iterable[CGTEvent]) -> list[AssetSummary]:
    """Per-asset gains, losses and average holding period, best net result first."""
    by_asset: dict[str, _AssetTotals] = {}

    for e in events:
        totals = by_asset.setdefault(e.asset, _AssetTotals())
        if e.capital_gain >= 0:
            totals.gains += e.capital_gain
        else:
            totals.losses += abs(e.capital_gain)
        totals.holding_days.append(e.holding_days)

    summaries = []
    for asset, totals in by_asset.items():
        avg_hold = Decimal(sum(totals.holding_days)) / len(totals.holding_days)
        summaries.append(AssetSummary(
            asset=asset,
            trade_count=len(totals.holding_days),
            total_gains=totals.gains,
            total_losses=totals.losses,
            net=totals.gains - totals.losses,
            avg_holding_days=int(avg_hold.quantize(Decimal(1), rounding=ROUND_HALF_UP)),
        ))

    summaries.sort(key=lambda s: s.net, reverse=True)
    return summaries
